"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    logs_table: str = "logs"
    openai_api_key: str
    openai_model: str = "gpt-4o-mini"
    llm_max_attempts: int = 5
    llm_initial_backoff_seconds: float = 2.0
    auth_username: str
    auth_password: str
    auth_token: str
    timezone: str = "UTC"
    coach_language: str = "Hinglish"
    history_window: int = 5
    cors_allow_origins: str = "*"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_origins(raw: str | None) -> list[str]:
    """Parse a comma-separated CORS origin list; empty means none."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if cleaned == "*":
        return ["*"]
    return [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]

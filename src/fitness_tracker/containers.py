"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

from supabase import create_client

from fitness_tracker.adapters.openai_text_client import OpenAITextClient
from fitness_tracker.adapters.supabase_log_repository import SupabaseLogRepository
from fitness_tracker.config import Settings
from fitness_tracker.services.auth import Authenticator, StaticCredentialAuthenticator
from fitness_tracker.services.events import LogCreated, LogEventBus
from fitness_tracker.services.gateway import LanguageModelGateway
from fitness_tracker.services.ingestion import IngestionPipeline
from fitness_tracker.services.logs import LogStore
from fitness_tracker.services.reports import ReportService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    authenticator: Authenticator
    log_store: LogStore
    events: LogEventBus
    ingestion: IngestionPipeline
    report_service: ReportService
    close_resources: Callable[[], Awaitable[None]]


def today_in(timezone_name: str) -> Callable[[], date]:
    """Return a clock giving the current calendar day in the timezone."""
    tz = ZoneInfo(timezone_name)

    def today() -> date:
        return datetime.now(tz=tz).date()

    return today


def log_created_listener(event: LogCreated) -> None:
    """Record new entries in the application log."""
    _logger.info("Log stored: %s (%s kcal)", event.entry.food, event.entry.calories)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    log_store = LogStore(
        SupabaseLogRepository(supabase_client, table=resolved_settings.logs_table)
    )
    events = LogEventBus()
    events.subscribe(log_created_listener)
    text_client = OpenAITextClient.create(resolved_settings.openai_api_key)
    gateway = LanguageModelGateway(
        client=text_client,
        model=resolved_settings.openai_model,
        max_attempts=resolved_settings.llm_max_attempts,
        initial_delay_seconds=resolved_settings.llm_initial_backoff_seconds,
    )
    today = today_in(resolved_settings.timezone)
    ingestion = IngestionPipeline(
        gateway=gateway,
        log_store=log_store,
        events=events,
        today=today,
        coach_language=resolved_settings.coach_language,
        history_window=resolved_settings.history_window,
    )
    authenticator = StaticCredentialAuthenticator(
        username=resolved_settings.auth_username,
        password=resolved_settings.auth_password,
        token=resolved_settings.auth_token,
    )

    async def close_resources() -> None:
        await text_client.close()

    return AppContainer(
        settings=resolved_settings,
        authenticator=authenticator,
        log_store=log_store,
        events=events,
        ingestion=ingestion,
        report_service=ReportService(log_store=log_store, today=today),
        close_resources=close_resources,
    )

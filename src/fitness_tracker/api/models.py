"""Request and response bodies for the HTTP API."""

import datetime as dt

from pydantic import BaseModel, Field

from fitness_tracker.domain.conversation import ConversationTurn
from fitness_tracker.domain.logs import LogEntry


class LoginRequest(BaseModel):
    """Credentials submitted to /login."""

    username: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    """Bearer token returned after a successful login."""

    token: str


class AnalyzeRequest(BaseModel):
    """Raw prompt forwarded to the language model."""

    prompt: str | None = None


class AnalyzeResponse(BaseModel):
    """Cleaned model reply."""

    response: str


class LogFoodRequest(BaseModel):
    """Free text describing what was eaten or drunk."""

    text: str | None = None


class ChatRequest(BaseModel):
    """A new chat message and the recent conversation."""

    message: str | None = None
    history: list[ConversationTurn] = Field(default_factory=list)


class ChatResponse(BaseModel):
    """Assistant reply and the entry it logged, if any."""

    reply: str
    success: bool
    entry: LogEntry | None = None


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class DailySummaryResponse(BaseModel):
    """Totals for one day."""

    date: dt.date
    calories: int
    protein: int
    carbs: int
    fats: int
    water_ml: int


class TrendPointResponse(BaseModel):
    """Calories for one date key."""

    date: dt.date
    calories: int


class SummaryResponse(BaseModel):
    """Dashboard aggregates plus the change revision."""

    today: DailySummaryResponse
    trend: list[TrendPointResponse]
    total_logs: int
    revision: int

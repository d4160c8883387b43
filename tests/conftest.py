"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from itertools import count

import pytest

from fitness_tracker.config import Settings
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.errors import ValidationError
from fitness_tracker.domain.logs import LogEntry
from fitness_tracker.services.auth import StaticCredentialAuthenticator
from fitness_tracker.services.events import LogCreated, LogEventBus
from fitness_tracker.services.gateway import LanguageModelGateway, TextGenerationClient
from fitness_tracker.services.ingestion import IngestionPipeline
from fitness_tracker.services.logs import LogRepository, LogStore
from fitness_tracker.services.reports import ReportService

TODAY = date(2025, 3, 7)
API_TOKEN = "test-api-token"
AUTH_HEADERS = {"Authorization": f"Bearer {API_TOKEN}"}


@dataclass
class InMemoryLogRepository(LogRepository):
    """In-memory log repository for tests."""

    entries: dict[str, LogEntry] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    fail_with: Exception | None = None
    _clock: datetime = field(default_factory=lambda: datetime(2025, 3, 7, tzinfo=UTC))

    def insert_log(self, entry: LogEntry) -> LogEntry:
        self.calls.append("insert")
        if self.fail_with is not None:
            raise self.fail_with
        if entry.id in self.entries:
            raise ValidationError(f"Log id already exists: {entry.id}")
        self._clock += timedelta(seconds=1)
        stored = entry.model_copy(update={"created_at": self._clock})
        self.entries[entry.id] = stored
        return stored

    def list_logs(self) -> list[LogEntry]:
        self.calls.append("list")
        if self.fail_with is not None:
            raise self.fail_with
        return sorted(
            self.entries.values(), key=lambda entry: entry.created_at, reverse=True
        )

    def delete_log(self, log_id: str) -> None:
        self.calls.append("delete")
        if self.fail_with is not None:
            raise self.fail_with
        self.entries.pop(log_id, None)


@dataclass
class FakeTextClient(TextGenerationClient):
    """Fake text model returning queued replies or raising queued errors."""

    replies: list[str | Exception] = field(default_factory=list)
    prompts: list[str] = field(default_factory=list)

    async def generate(self, *, model: str, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeRateLimitError(Exception):
    """Upstream error carrying an HTTP 429 status."""

    status_code = 429


@dataclass
class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    delays: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def sequential_ids() -> Callable[[], str]:
    counter = count(1)
    return lambda: f"log-{next(counter)}"


def make_entry(
    log_id: str, day: date | str, calories: int, **amounts: int
) -> LogEntry:
    return LogEntry(
        id=log_id, date=day, food=f"food {log_id}", calories=calories, **amounts
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
        openai_api_key="openai-key",
        auth_username="coach",
        auth_password="secret",
        auth_token=API_TOKEN,
        cors_allow_origins="",
    )


@pytest.fixture
def log_repository() -> InMemoryLogRepository:
    return InMemoryLogRepository()


@pytest.fixture
def text_client() -> FakeTextClient:
    return FakeTextClient()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def published() -> list[LogCreated]:
    return []


@pytest.fixture
def container(
    settings: Settings,
    log_repository: InMemoryLogRepository,
    text_client: FakeTextClient,
    sleep: RecordingSleep,
    published: list[LogCreated],
) -> AppContainer:
    log_store = LogStore(log_repository, id_factory=sequential_ids())
    events = LogEventBus()
    events.subscribe(published.append)
    gateway = LanguageModelGateway(
        client=text_client,
        model=settings.openai_model,
        max_attempts=settings.llm_max_attempts,
        initial_delay_seconds=settings.llm_initial_backoff_seconds,
        sleep=sleep,
    )
    ingestion = IngestionPipeline(
        gateway=gateway,
        log_store=log_store,
        events=events,
        today=lambda: TODAY,
        coach_language=settings.coach_language,
        history_window=settings.history_window,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        authenticator=StaticCredentialAuthenticator(
            username=settings.auth_username,
            password=settings.auth_password,
            token=settings.auth_token,
        ),
        log_store=log_store,
        events=events,
        ingestion=ingestion,
        report_service=ReportService(log_store=log_store, today=lambda: TODAY),
        close_resources=close_resources,
    )

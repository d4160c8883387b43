"""Log store for food and water entries."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from fitness_tracker.domain.errors import ValidationError
from fitness_tracker.domain.logs import AMOUNT_FIELDS, LogEntry

_REQUIRED_MESSAGE = "Food and Date are required"


class LogRepository(Protocol):
    """Persistence interface for log entries."""

    def insert_log(self, entry: LogEntry) -> LogEntry:
        """Insert an entry and return it as stored."""

    def list_logs(self) -> list[LogEntry]:
        """Return all entries, most recently created first."""

    def delete_log(self, log_id: str) -> None:
        """Delete an entry if it exists."""


def generate_log_id(now: datetime | None = None) -> str:
    """Return a time-based id: milliseconds since the epoch."""
    moment = now or datetime.now(tz=UTC)
    return str(int(moment.timestamp() * 1000))


@dataclass
class LogStore:
    """Validates entries and delegates persistence to the repository."""

    repository: LogRepository
    id_factory: Callable[[], str] = field(default=generate_log_id)

    def create(self, payload: Mapping[str, object]) -> LogEntry:
        """Validate and persist a new entry."""
        if _is_blank(payload.get("food")) or _is_blank(payload.get("date")):
            raise ValidationError(_REQUIRED_MESSAGE)
        log_id = payload.get("id")
        fields = {
            "id": self.id_factory() if log_id is None else log_id,
            "date": payload.get("date"),
            "food": payload.get("food"),
        }
        for name in AMOUNT_FIELDS:
            fields[name] = payload.get(name)
        try:
            entry = LogEntry.model_validate(fields)
        except PydanticValidationError as exc:
            raise ValidationError(_describe(exc)) from exc
        return self.repository.insert_log(entry)

    def list(self) -> list[LogEntry]:
        """Return entries ordered most recent first."""
        return self.repository.list_logs()

    def delete(self, log_id: str) -> None:
        """Delete an entry; unknown ids are ignored."""
        self.repository.delete_log(log_id)


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _describe(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    field_name = ".".join(str(part) for part in error["loc"]) or "entry"
    return f"Invalid {field_name}: {error['msg']}"

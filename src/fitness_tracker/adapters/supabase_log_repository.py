"""Supabase repository for food and water logs."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError
from supabase import Client

from fitness_tracker.domain.errors import StorageError, ValidationError
from fitness_tracker.domain.logs import LogEntry
from fitness_tracker.services.logs import LogRepository

_COLUMNS = "id, date, food, calories, protein, carbs, fats, water_ml, created_at"
_UNIQUE_VIOLATION = "23505"

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseLogRepository(LogRepository):
    """Supabase implementation for the logs table."""

    client: Client
    table: str = "logs"

    def insert_log(self, entry: LogEntry) -> LogEntry:
        """Insert a log row and return it as stored."""
        payload = entry.model_dump(mode="json", exclude={"created_at"})
        with _storage_errors("insert", entry.id):
            response = self.client.table(self.table).insert(payload).execute()
        if not response.data:
            raise StorageError("Failed to create log")
        parsed = _parse_row(response.data[0])
        if parsed is None:
            raise StorageError("Stored log could not be read back")
        return parsed

    def list_logs(self) -> list[LogEntry]:
        """Return all log rows, newest first."""
        with _storage_errors("list"):
            response = (
                self.client.table(self.table)
                .select(_COLUMNS)
                .order("created_at", desc=True)
                .execute()
            )
        entries = []
        for row in response.data or []:
            entry = _parse_row(row)
            if entry is not None:
                entries.append(entry)
        return entries

    def delete_log(self, log_id: str) -> None:
        """Delete a log row; missing rows are not an error."""
        with _storage_errors("delete", log_id):
            self.client.table(self.table).delete().eq("id", log_id).execute()


@contextmanager
def _storage_errors(action: str, log_id: str | None = None) -> Iterator[None]:
    """Translate client failures raised inside the block into domain errors."""
    try:
        yield
    except Exception as exc:
        if getattr(exc, "code", None) == _UNIQUE_VIOLATION:
            raise ValidationError(f"Log id already exists: {log_id}") from exc
        _logger.exception("Log %s failed", action, extra={"log_id": log_id})
        raise StorageError("Internal Server Error") from exc


def _parse_row(row: dict[str, object]) -> LogEntry | None:
    try:
        return LogEntry.model_validate(row)
    except PydanticValidationError:
        _logger.warning("Skipping unreadable log row", extra={"log_id": row.get("id")})
        return None

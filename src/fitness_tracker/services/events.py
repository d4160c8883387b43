"""In-process change notifications for log updates."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from fitness_tracker.domain.logs import LogEntry

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogCreated:
    """A new entry was persisted."""

    entry: LogEntry


LogListener = Callable[[LogCreated], None]


@dataclass
class LogEventBus:
    """Broadcast log changes to observers such as a dashboard."""

    listeners: list[LogListener] = field(default_factory=list)
    revision: int = 0

    def subscribe(self, listener: LogListener) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""
        self.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self.listeners:
                self.listeners.remove(listener)

        return unsubscribe

    def publish(self, event: LogCreated) -> None:
        """Bump the revision and notify every listener."""
        self.revision += 1
        for listener in list(self.listeners):
            try:
                listener(event)
            except Exception:
                _logger.exception(
                    "Log listener failed", extra={"log_id": event.entry.id}
                )

"""Tests for log change notifications."""

from datetime import date

from fitness_tracker.services.events import LogCreated, LogEventBus
from tests.conftest import make_entry


def _event() -> LogCreated:
    return LogCreated(entry=make_entry("1", date(2025, 3, 7), 140))


def test_publish_notifies_listeners_and_bumps_revision() -> None:
    bus = LogEventBus()
    seen: list[LogCreated] = []
    bus.subscribe(seen.append)

    event = _event()
    bus.publish(event)

    assert seen == [event]
    assert bus.revision == 1


def test_unsubscribe_stops_notifications() -> None:
    bus = LogEventBus()
    seen: list[LogCreated] = []
    unsubscribe = bus.subscribe(seen.append)

    unsubscribe()
    unsubscribe()
    bus.publish(_event())

    assert seen == []
    assert bus.revision == 1


def test_failing_listener_does_not_block_others() -> None:
    bus = LogEventBus()
    seen: list[LogCreated] = []

    def broken(_event: LogCreated) -> None:
        raise RuntimeError("dashboard gone")

    bus.subscribe(broken)
    bus.subscribe(seen.append)
    bus.publish(_event())

    assert len(seen) == 1

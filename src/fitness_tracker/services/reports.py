"""Aggregated daily and trend reports over the log store."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date

from fitness_tracker.domain.logs import LogEntry, normalize_date
from fitness_tracker.domain.reports import AggregateView, DailySummary, TrendPoint
from fitness_tracker.services.logs import LogStore

TREND_WINDOW = 7


@dataclass
class ReportService:
    """Builds the dashboard view from the current log entries."""

    log_store: LogStore
    today: Callable[[], date]

    def get_summary(self) -> AggregateView:
        """Return today's totals and the calorie trend."""
        entries = self.log_store.list()
        return AggregateView(
            today=compute_daily_summary(entries, self.today()),
            trend=compute_trend(entries),
            total_logs=len(entries),
        )


def compute_daily_summary(
    entries: Sequence[LogEntry], target_date: date | str
) -> DailySummary:
    """Sum every entry recorded on the target calendar day."""
    day = normalize_date(target_date)
    calories = protein = carbs = fats = water_ml = 0
    for entry in entries:
        if normalize_date(entry.date) != day:
            continue
        calories += entry.calories
        protein += entry.protein
        carbs += entry.carbs
        fats += entry.fats
        water_ml += entry.water_ml
    return DailySummary(
        day=day,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fats=fats,
        water_ml=water_ml,
    )


def compute_trend(
    entries: Sequence[LogEntry], window: int = TREND_WINDOW
) -> list[TrendPoint]:
    """Group calories by date in first-seen order and keep the last groups.

    Entries arrive most recent first, so the groups are not chronological and
    the kept tail holds the oldest dates seen.
    """
    totals: dict[date, int] = {}
    for entry in entries:
        totals[entry.date] = totals.get(entry.date, 0) + entry.calories
    if window <= 0:
        return []
    points = [TrendPoint(day=day, calories=total) for day, total in totals.items()]
    return points[-window:]

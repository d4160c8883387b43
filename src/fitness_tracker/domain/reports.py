"""Domain models for aggregated reports."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailySummary:
    """Totals for a single calendar day."""

    day: date
    calories: int
    protein: int
    carbs: int
    fats: int
    water_ml: int


@dataclass(frozen=True)
class TrendPoint:
    """Total calories recorded for one date key."""

    day: date
    calories: int


@dataclass(frozen=True)
class AggregateView:
    """Dashboard view derived from the log store on every read."""

    today: DailySummary
    trend: list[TrendPoint]
    total_logs: int

"""Domain models for food and water log entries."""

import datetime as dt
import math
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

AMOUNT_FIELDS = ("calories", "protein", "carbs", "fats", "water_ml")

# Locale-formatted dates written by older clients, e.g. 3/7/2025.
_LEGACY_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def normalize_date(value: object) -> dt.date:
    """Return the canonical calendar day for a stored or submitted date."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value: {value!r}")
    text = value.strip()
    legacy = _LEGACY_DATE.match(text)
    if legacy:
        month, day, year = (int(part) for part in legacy.groups())
        return dt.date(year, month, day)
    try:
        return dt.date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return dt.datetime.fromisoformat(text).date()
    except ValueError as exc:
        raise ValueError(f"Unrecognized date: {value!r}") from exc


def coerce_amount(value: object) -> int:
    """Coerce a model-produced amount into a non-negative integer, else 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return max(round(value), 0)
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return 0
        return coerce_amount(parsed)
    return 0


class LogEntry(BaseModel):
    """A stored nutrition/hydration entry."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(min_length=1)
    date: dt.date
    food: str = Field(min_length=1)
    calories: int = Field(default=0, ge=0)
    protein: int = Field(default=0, ge=0)
    carbs: int = Field(default=0, ge=0)
    fats: int = Field(default=0, ge=0)
    water_ml: int = Field(default=0, ge=0)
    created_at: dt.datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _canonical_date(cls, value: object) -> dt.date:
        return normalize_date(value)

    @field_validator(*AMOUNT_FIELDS, mode="before")
    @classmethod
    def _absent_is_zero(cls, value: object) -> object:
        return 0 if value is None else value


class NutritionRecord(BaseModel):
    """Nutrition data extracted from a language model reply."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    food: str = Field(min_length=1)
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fats: int = 0
    water_ml: int = 0

    @field_validator(*AMOUNT_FIELDS, mode="before")
    @classmethod
    def _lenient_amount(cls, value: object) -> int:
        return coerce_amount(value)

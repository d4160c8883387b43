"""Extract nutrition records embedded in language model replies."""

import json
import logging
import re
from dataclasses import dataclass

from pydantic import ValidationError as PydanticValidationError

from fitness_tracker.domain.logs import NutritionRecord

BLOCK_START = "|||JSON_START|||"
BLOCK_END = "|||JSON_END|||"

_BLOCK_PATTERN = re.compile(
    re.escape(BLOCK_START) + r"(.*?)" + re.escape(BLOCK_END), re.DOTALL
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedNutrition:
    """A nutrition block that decoded and validated."""

    record: NutritionRecord


@dataclass(frozen=True)
class ParseFailure:
    """A nutrition block that could not be used."""

    reason: str


ParseResult = ParsedNutrition | ParseFailure


def parse_nutrition_json(raw: str) -> ParseResult:
    """Decode a JSON object into a nutrition record."""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        return ParseFailure(reason=f"invalid JSON: {exc.msg}")
    if not isinstance(payload, dict):
        return ParseFailure(reason="expected a JSON object")
    try:
        record = NutritionRecord.model_validate(payload)
    except PydanticValidationError as exc:
        first_error = exc.errors()[0]
        field_name = ".".join(str(part) for part in first_error["loc"])
        return ParseFailure(reason=f"{field_name}: {first_error['msg']}")
    return ParsedNutrition(record=record)


def extract_nutrition(text: str) -> tuple[str, NutritionRecord | None]:
    """Split a reply into display text and an optional nutrition record."""
    match = _BLOCK_PATTERN.search(text)
    if match is None:
        return text, None
    result = parse_nutrition_json(match.group(1))
    if isinstance(result, ParseFailure):
        _logger.warning("Ignoring nutrition block: %s", result.reason)
        return text, None
    display_text = (text[: match.start()] + text[match.end() :]).strip()
    return display_text, result.record

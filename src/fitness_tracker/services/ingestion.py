"""Ingestion pipeline turning free text into logged nutrition entries."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date

from fitness_tracker.domain.conversation import ConversationTurn
from fitness_tracker.domain.errors import (
    RateLimited,
    StorageError,
    UpstreamFailure,
    ValidationError,
)
from fitness_tracker.domain.logs import LogEntry, NutritionRecord
from fitness_tracker.services.events import LogCreated, LogEventBus
from fitness_tracker.services.gateway import LanguageModelGateway
from fitness_tracker.services.logs import LogStore
from fitness_tracker.services.parser import (
    BLOCK_END,
    BLOCK_START,
    ParseFailure,
    extract_nutrition,
    parse_nutrition_json,
)

BUSY_APOLOGY = "Bhai, server abhi busy hai. Thodi der baad try karo!"
CONNECTION_APOLOGY = "Bhai, connection error aa raha hai. Server check kar lo!"

_COACH_INSTRUCTION = f"""You are a friendly and knowledgeable fitness coach.

CRITICAL INSTRUCTIONS:
1. LANGUAGE: You MUST reply in {{language}}.
2. TONE: Motivational, bro-to-bro, helpful.
3. FOOD LOGGING: If the user mentions food or water they consumed, estimate
calories, macros and water, then add a JSON block at the very end of your reply.

JSON format (at the end only):
{BLOCK_START}
{{{{"food": "Summary of food", "calories": 150, "protein": 10, "carbs": 20, \
"fats": 5, "water_ml": 0}}}}
{BLOCK_END}

RULES:
- Every value except "food" MUST be a plain integer. No units such as g, kcal or ml.
- If you estimate a range (e.g. 100-150), use the average (125).
- Leave the JSON block out when nothing was eaten or drunk.

EXAMPLES:
User: "I ate 2 eggs"
Assistant: "Great choice! Eggs are rich in protein. {BLOCK_START} {{{{"food": \
"2 eggs", "calories": 140, "protein": 12, "carbs": 1, "fats": 10, "water_ml": 0}}}} \
{BLOCK_END}"

User: "Maine 1 roti aur dal khayi, saath mein 2 glass paani"
Assistant: "Badhiya bhai! Ghar ka khana best hai. {BLOCK_START} {{{{"food": \
"1 Roti + Dal + 2 glasses of water", "calories": 180, "protein": 8, "carbs": 30, \
"fats": 4, "water_ml": 500}}}} {BLOCK_END}"
"""

_NUTRITIONIST_INSTRUCTION = """You are a nutritionist API. Analyze the following \
food or drink and return a JSON object with the estimated calories, macros and water.
Format: {{"food": "Food Name", "calories": 0, "protein": 0, "carbs": 0, "fats": 0, \
"water_ml": 0}}
All values except "food" are plain integers without units.
Only return the JSON, no other text.
Input: "{text}"
"""

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of a conversational ingest."""

    reply: str
    success: bool
    entry: LogEntry | None = None


@dataclass
class IngestionPipeline:
    """Orchestrates prompt, model call, parsing, storage and notification."""

    gateway: LanguageModelGateway
    log_store: LogStore
    events: LogEventBus
    today: Callable[[], date]
    coach_language: str = "Hinglish"
    history_window: int = 5

    def build_chat_prompt(
        self, user_text: str, history: Sequence[ConversationTurn]
    ) -> str:
        """Combine the coach instruction, recent history and the new message."""
        instruction = _COACH_INSTRUCTION.format(language=self.coach_language)
        recent = list(history)[-self.history_window :] if self.history_window else []
        conversation = "\n".join(f"{turn.role}: {turn.content}" for turn in recent)
        return (
            f"{instruction}\n\nChat History:\n{conversation}\n"
            f"User: {user_text}\nAssistant:"
        )

    async def ingest(
        self, user_text: str, history: Sequence[ConversationTurn]
    ) -> IngestionResult:
        """Run the conversational path; storage failures never reach the user."""
        prompt = self.build_chat_prompt(user_text, history)
        try:
            raw_reply = await self.gateway.generate(prompt)
        except RateLimited:
            return IngestionResult(reply=BUSY_APOLOGY, success=False)
        except UpstreamFailure as exc:
            _logger.warning("Assistant reply failed: %s", exc.message)
            return IngestionResult(reply=CONNECTION_APOLOGY, success=False)

        reply, record = extract_nutrition(raw_reply)
        entry = None
        if record is not None:
            try:
                entry = self._store(record)
            except (StorageError, ValidationError):
                _logger.exception(
                    "Failed to store chat nutrition log", extra={"food": record.food}
                )
        return IngestionResult(reply=reply, success=True, entry=entry)

    async def log_food(self, text: str) -> LogEntry:
        """Run the direct logging path; every failure reaches the caller."""
        prompt = _NUTRITIONIST_INSTRUCTION.format(text=text)
        raw_reply = await self.gateway.generate(prompt)
        result = parse_nutrition_json(raw_reply)
        if isinstance(result, ParseFailure):
            _logger.warning("Unreadable nutrition reply: %s", result.reason)
            raise UpstreamFailure(
                "Could not read nutrition data from the model response"
            )
        return self._store(result.record)

    async def analyze(self, prompt: str) -> str:
        """Forward a raw prompt to the model."""
        return await self.gateway.generate(prompt)

    def _store(self, record: NutritionRecord) -> LogEntry:
        payload = record.model_dump()
        payload["date"] = self.today()
        entry = self.log_store.create(payload)
        self.events.publish(LogCreated(entry=entry))
        return entry

"""Language model gateway with rate-limit backoff."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

import openai

from fitness_tracker.domain.errors import RateLimited, UpstreamFailure

BUSY_MESSAGE = "Server is busy, please try again later."

_HTTP_TOO_MANY_REQUESTS = 429
_RATE_LIMIT_MARKERS = ("too many requests", "quota", "rate limit")

_logger = logging.getLogger(__name__)


class TextGenerationClient(Protocol):
    """Interface for a generative text model."""

    async def generate(self, *, model: str, prompt: str) -> str:
        """Return the raw text produced for the prompt."""


@dataclass
class LanguageModelGateway:
    """Call the text model, retrying on throttling and cleaning the reply."""

    client: TextGenerationClient
    model: str
    max_attempts: int = 5
    initial_delay_seconds: float = 2.0
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep)

    async def generate(self, prompt: str) -> str:
        """Return the model reply with code fences removed."""
        delay = self.initial_delay_seconds
        attempt = 0
        while True:
            attempt += 1
            try:
                text = await self.client.generate(model=self.model, prompt=prompt)
            except Exception as exc:
                if not is_rate_limited(exc):
                    _logger.error("Model call failed: %s", exc)
                    raise UpstreamFailure(str(exc) or type(exc).__name__) from exc
                if attempt >= self.max_attempts:
                    _logger.error(
                        "Model still rate limited after %s attempts", attempt
                    )
                    raise RateLimited(BUSY_MESSAGE) from exc
                _logger.warning(
                    "Model rate limited (attempt %s/%s), retrying in %.1fs",
                    attempt,
                    self.max_attempts,
                    delay,
                )
                await self.sleep(delay)
                delay *= 2
                continue
            if not text or not text.strip():
                raise UpstreamFailure("Model returned an empty response")
            return strip_code_fences(text)


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences such as ```json from a reply."""
    return text.replace("```json", "").replace("```", "").strip()


def is_rate_limited(exc: Exception) -> bool:
    """Return true when the exception signals upstream throttling."""
    if isinstance(exc, openai.RateLimitError):
        return True
    if _status_code_from_exception(exc) == _HTTP_TOO_MANY_REQUESTS:
        return True
    message = str(exc).lower()
    return any(marker in message for marker in _RATE_LIMIT_MARKERS)


def _status_code_from_exception(exc: Exception) -> int | None:
    """Extract an HTTP status code from an SDK or HTTP exception."""
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    return None

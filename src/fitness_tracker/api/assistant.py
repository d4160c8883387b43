"""Endpoints backed by the language model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from fitness_tracker.api.auth import require_token
from fitness_tracker.api.models import (
    AnalyzeRequest,
    AnalyzeResponse,
    ChatRequest,
    ChatResponse,
    LogFoodRequest,
)
from fitness_tracker.domain.errors import ValidationError
from fitness_tracker.domain.logs import LogEntry

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(tags=["assistant"], dependencies=[Depends(require_token)])


@router.post("/analyze-food")
async def analyze_food(body: AnalyzeRequest, request: Request) -> AnalyzeResponse:
    """Forward a prompt to the model and return its cleaned reply."""
    container: AppContainer = request.app.state.container
    prompt = _require_text(body.prompt, "prompt")
    text = await container.ingestion.analyze(prompt)
    return AnalyzeResponse(response=text)


@router.post("/log-food", status_code=status.HTTP_201_CREATED)
async def log_food(body: LogFoodRequest, request: Request) -> LogEntry:
    """Estimate nutrition for the text and store it as today's entry."""
    container: AppContainer = request.app.state.container
    text = _require_text(body.text, "text")
    return await container.ingestion.log_food(text)


@router.post("/chat")
async def chat(body: ChatRequest, request: Request) -> ChatResponse:
    """Reply as the coach, logging any food mentioned along the way."""
    container: AppContainer = request.app.state.container
    message = _require_text(body.message, "message")
    result = await container.ingestion.ingest(message, body.history)
    return ChatResponse(reply=result.reply, success=result.success, entry=result.entry)


def _require_text(value: str | None, name: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{name} is required")
    return value

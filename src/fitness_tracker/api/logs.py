"""Log CRUD and dashboard summary endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, Depends, Request, status

from fitness_tracker.api.auth import require_token
from fitness_tracker.api.models import (
    DailySummaryResponse,
    MessageResponse,
    SummaryResponse,
    TrendPointResponse,
)
from fitness_tracker.domain.logs import LogEntry

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(tags=["logs"], dependencies=[Depends(require_token)])


@router.get("/logs")
def list_logs(request: Request) -> list[LogEntry]:
    """Return every log entry, newest first."""
    container: AppContainer = request.app.state.container
    return container.log_store.list()


@router.post("/logs", status_code=status.HTTP_201_CREATED)
def create_log(
    request: Request, payload: dict[str, Any] | None = Body(default=None)
) -> LogEntry:
    """Store a log entry submitted by the client."""
    container: AppContainer = request.app.state.container
    return container.log_store.create(payload or {})


@router.delete("/logs/{log_id}")
def delete_log(log_id: str, request: Request) -> MessageResponse:
    """Delete a log entry; unknown ids still succeed."""
    container: AppContainer = request.app.state.container
    container.log_store.delete(log_id)
    return MessageResponse(message="Log deleted successfully")


@router.get("/summary")
def summary(request: Request) -> SummaryResponse:
    """Return today's totals and the calorie trend."""
    container: AppContainer = request.app.state.container
    view = container.report_service.get_summary()
    today = view.today
    return SummaryResponse(
        today=DailySummaryResponse(
            date=today.day,
            calories=today.calories,
            protein=today.protein,
            carbs=today.carbs,
            fats=today.fats,
            water_ml=today.water_ml,
        ),
        trend=[
            TrendPointResponse(date=point.day, calories=point.calories)
            for point in view.trend
        ],
        total_logs=view.total_logs,
        revision=container.events.revision,
    )

"""Login endpoint and bearer token dependency."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Header, Request

from fitness_tracker.api.models import LoginRequest, LoginResponse
from fitness_tracker.domain.errors import Unauthorized

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(tags=["auth"])

_BEARER_PREFIX = "bearer "


async def require_token(
    request: Request, authorization: str | None = Header(default=None)
) -> None:
    """Ensure requests carry a valid Authorization: Bearer token."""
    container: AppContainer = request.app.state.container
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        raise Unauthorized("Unauthorized")
    token = authorization[len(_BEARER_PREFIX) :].strip()
    if not token or not container.authenticator.verify(token):
        raise Unauthorized("Unauthorized")


@router.post("/login")
async def login(body: LoginRequest, request: Request) -> LoginResponse:
    """Exchange the configured credentials for the API token."""
    container: AppContainer = request.app.state.container
    token = container.authenticator.login(body.username, body.password)
    if token is None:
        raise Unauthorized("Invalid credentials")
    return LoginResponse(token=token)

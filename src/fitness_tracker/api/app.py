"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fitness_tracker.api.assistant import router as assistant_router
from fitness_tracker.api.auth import router as auth_router
from fitness_tracker.api.logs import router as logs_router
from fitness_tracker.app_logging import configure_logging
from fitness_tracker.config import parse_origins
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.errors import FitnessTrackerError

API_PREFIX = "/api"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    origins = parse_origins(container.settings.cors_allow_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization"],
        )

    @app.exception_handler(FitnessTrackerError)
    async def handle_domain_error(
        request: Request, exc: FitnessTrackerError
    ) -> JSONResponse:
        """Render domain errors as {"error": message} with their status."""
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "%s %s failed: %s", request.method, request.url.path, exc.message
            )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Render malformed request bodies as 400 {"error": message}."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": describe_request_error(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    for router in (auth_router, logs_router, assistant_router):
        app.include_router(router)
        app.include_router(router, prefix=API_PREFIX)

    return app


def describe_request_error(exc: RequestValidationError) -> str:
    """Summarize the first validation error, e.g. "Invalid history.0.role: ..."."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    location = [str(part) for part in error.get("loc", ()) if part != "body"]
    field_name = ".".join(location) or "request body"
    return f"Invalid {field_name}: {error.get('msg', 'invalid value')}"

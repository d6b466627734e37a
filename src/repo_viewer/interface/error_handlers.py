"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"status": "error", "message": "..."}`` envelope, where the
message is the user-facing text of the error.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from repo_viewer.domain.exceptions import (
    InvalidURLError,
    MissingRepositoryIdError,
    NetworkError,
    NotFoundError,
    RateLimitExceededError,
    RepoViewerError,
    UnauthorizedAccessError,
)

logger = logging.getLogger(__name__)

# First match wins; NetworkError is the catch-all for the remaining kinds.
_EXCEPTION_STATUS: list[tuple[type[RepoViewerError], int]] = [
    (NotFoundError, 404),
    (UnauthorizedAccessError, 401),
    (RateLimitExceededError, 429),
    (InvalidURLError, 422),
    (MissingRepositoryIdError, 422),
    (NetworkError, 502),
]


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def status_for(exc: RepoViewerError) -> int:
    for exc_type, code in _EXCEPTION_STATUS:
        if isinstance(exc, exc_type):
            return code
    return 500


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    @app.exception_handler(RepoViewerError)
    async def domain_handler(request: Request, exc: RepoViewerError) -> JSONResponse:
        logger.warning("%r on %s", exc, request.url.path)
        return _error_json(status_for(exc), str(exc))

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")

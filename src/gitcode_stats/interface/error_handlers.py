"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"status": "error", "message": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from gitcode_stats.domain.exceptions import (
    CustomError,
    MissingParameterError,
    NotFoundError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

_CUSTOM_ERROR_STATUS: dict[str, int] = {
    CustomError.USER_NOT_FOUND: 404,
    CustomError.MAX_RETRY: 503,
    CustomError.NO_TOKENS: 503,
}


def _error_json(status_code: int, message: str, detail: str | None = None) -> JSONResponse:
    content: dict[str, str] = {"status": "error", "message": message}
    if detail:
        content["detail"] = detail
    return JSONResponse(status_code=status_code, content=content)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    @app.exception_handler(MissingParameterError)
    async def missing_param_handler(
        request: Request, exc: MissingParameterError
    ) -> JSONResponse:
        return _error_json(400, str(exc), exc.secondary_message)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error_json(404, str(exc))

    @app.exception_handler(CustomError)
    async def custom_error_handler(request: Request, exc: CustomError) -> JSONResponse:
        logger.warning("%s (%s): %s", type(exc).__name__, exc.kind, exc)
        status_code = _CUSTOM_ERROR_STATUS.get(exc.kind, 500)
        return _error_json(status_code, str(exc), exc.secondary_message)

    @app.exception_handler(UpstreamError)
    async def upstream_handler(request: Request, exc: UpstreamError) -> JSONResponse:
        logger.warning("UpstreamError: %s", exc)
        return _error_json(502, str(exc))

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

"""Global exception handlers — translate domain errors to HTTP responses.

Every failure answers with the ``{"error": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from heartline.domain.exceptions import GatewayError

logger = logging.getLogger(__name__)


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe(errors: list) -> str:
    messages = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", []))
        messages.append(f"{loc}: {err.get('msg', 'validation error')}")
    return "; ".join(messages)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Gateway exceptions carry their own status ───────────────────────

    @app.exception_handler(GatewayError)
    async def gateway_handler(request: Request, exc: GatewayError) -> JSONResponse:
        logger.warning("%s (%d): %s", type(exc).__name__, exc.status_code, exc)
        return _error_json(exc.status_code, str(exc))

    # ── Malformed request bodies ────────────────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_json(400, _describe(list(exc.errors())))

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return _error_json(400, _describe(exc.errors()))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, str(exc) or "Internal server error")

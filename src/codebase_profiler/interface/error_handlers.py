"""Global exception handlers — translate domain errors to HTTP responses.

Every failure path answers with the ``{"status": "error", "message": "..."}``
envelope.  Rejected input is a 422 and logged at warning; anything else is a
500 with the traceback logged.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from codebase_profiler.domain.exceptions import CodebaseProfilerError, InvalidInputError
from codebase_profiler.services.file_intake import describe_errors

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def _rejected(request: Request, message: str) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
    return _error_json(422, message)


async def invalid_input_handler(request: Request, exc: Exception) -> JSONResponse:
    return _rejected(request, str(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _rejected(request, describe_errors(exc.errors()))


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path)
    return _error_json(500, UNEXPECTED_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Caller mistakes ─────────────────────────────────────────────────

    app.add_exception_handler(InvalidInputError, invalid_input_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # ── Everything else ─────────────────────────────────────────────────

    app.add_exception_handler(CodebaseProfilerError, internal_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

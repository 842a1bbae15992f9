"""Error Handlers — turn Salescope failures into the JSON error envelope.

Invariants:
    - Every failure a client sees has the shape {"error": {code, message, ...}}
    - INVALID_MONTH and request validation failures answer 400 and are logged
      at WARNING; data, aggregation, database and seed failures log at ERROR
    - A failed combined view lists the failed sub-aggregations, never their
      exception text
    - Unexpected exceptions answer 500 INTERNAL_ERROR with no internal detail

Design Decisions:
    - Query-parameter validation (page, perPage, search length) answers 400
      with the offending fields, matching INVALID_MONTH rather than FastAPI's 422
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from salescope.core.errors import SalescopeError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Install the Salescope, validation, and fallback handlers."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """SalescopeError → its own status and envelope."""

    @app.exception_handler(SalescopeError)
    async def salescope_error_handler(request: Request, exc: SalescopeError):
        log = logger.warning if exc.is_client_error else logger.error
        log(
            f"SalescopeError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Malformed query or path parameters → 400 VALIDATION_ERROR."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Anything unmapped → 500 INTERNAL_ERROR."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Log with traceback, answer with a fixed message."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """One details entry per invalid field."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }

"""
Global error handlers registered on the FastAPI application.

Every error leaves the API in the same envelope:

    {
        "error": true,
        "error_code": "NOT_FOUND",
        "message": "Customer 7 not found.",
        "details": { ... },
        "request_id": "abc-123"
    }

Mapping configuration errors (duplicate or malformed slots, empty or
impure mappers) are programming errors and surface as 500s.
"""

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from structured_mapper.core.exceptions import AppException
from structured_mapper.core.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Attach all global exception handlers to the FastAPI app."""

    # ── 1. Project exception hierarchy ────────────────────────────────

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        request_id = _get_request_id(request)

        logger.log(
            logging.ERROR if exc.status_code >= 500 else logging.WARNING,
            "Application error",
            extra={
                "error_code": exc.error_code,
                "status_code": exc.status_code,
                "error_message": exc.message,
                "details": exc.details,
                "path": str(request.url),
                "method": request.method,
            },
        )

        return _envelope(exc.status_code, exc.to_dict(), request_id)

    # ── 2. Path / query validation ────────────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {
                "field": " → ".join(str(loc) for loc in err.get("loc", [])),
                "message": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors()
        ]

        logger.warning(
            "Request validation failed",
            extra={
                "path": str(request.url),
                "method": request.method,
                "validation_errors": errors,
            },
        )

        return _envelope(
            422,
            {
                "error": True,
                "error_code": "VALIDATION_ERROR",
                "message": "Request validation failed.",
                "details": {"errors": errors},
            },
            _get_request_id(request),
        )

    # ── 3. Starlette / generic HTTP exceptions ────────────────────────

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger.warning(
            "HTTP error",
            extra={
                "status_code": exc.status_code,
                "detail": exc.detail,
                "path": str(request.url),
                "method": request.method,
            },
        )

        return _envelope(
            exc.status_code,
            {
                "error": True,
                "error_code": "HTTP_ERROR",
                "message": str(exc.detail),
            },
            _get_request_id(request),
        )

    # ── 4. Anything else, including failures raised by rule functions ──

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.critical(
            "Unhandled exception",
            extra={
                "path": str(request.url),
                "method": request.method,
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
            },
            exc_info=True,
        )

        return _envelope(
            500,
            {
                "error": True,
                "error_code": "INTERNAL_ERROR",
                "message": "An unexpected internal error occurred.",
            },
            _get_request_id(request),
        )


# ─── Helpers ──────────────────────────────────────────────────────────


def _envelope(status_code: int, body: dict, request_id: str) -> JSONResponse:
    body["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=body)


def _get_request_id(request: Request) -> str:
    """Request ID set by the middleware, or a fresh one."""
    return getattr(request.state, "request_id", None) or uuid.uuid4().hex

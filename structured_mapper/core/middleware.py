"""
Application middleware.

RequestContextMiddleware:
  - Assigns a unique request_id (or reads X-Request-ID header).
  - Publishes it through ``request_id_var`` so every log line emitted
    while serving the request carries it.
  - Logs request start / finish with timing.
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from structured_mapper.core.logging import get_logger, request_id_var

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach a request_id to every request and log timing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        start = time.perf_counter()
        logger.info(
            "Request started",
            extra={
                "method": request.method,
                "path": str(request.url.path),
            },
        )

        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": str(request.url.path),
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )

        response.headers["X-Request-ID"] = request_id
        return response

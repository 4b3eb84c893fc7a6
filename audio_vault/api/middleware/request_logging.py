"""
Request Logging Middleware

Binds a request id to the structlog context for the duration of a request and
writes one access log line when it finishes.

    log_context(request_id=..., method=..., path=...)
        │
        ▼
    handler → services log with the same context
        │
        ▼
    "Request completed" status_code=... duration_ms=...
        │
        ▼
    clear_log_context()
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from audio_vault.shared.core.logging import clear_log_context, log_context, logger


REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Per-request log context and access log."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        log_context(request_id=request_id, method=request.method, path=request.url.path)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            duration_ms = round((time.perf_counter() - started) * 1000, 1)
            clear_log_context()

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request completed",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return response

"""Request logging middleware."""
import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = structlog.get_logger(__name__)

# Paths polled by load balancers; logged at debug level only
QUIET_PATHS = {"/health"}

# Requests slower than this are logged as warnings
SLOW_REQUEST_MS = 1000.0


class LoggingMiddleware(BaseHTTPMiddleware):
    """Bind a request id to every log line of a request and time it."""

    def __init__(self, app: ASGIApp, slow_request_ms: float = SLOW_REQUEST_MS):
        super().__init__(app)
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Reuse the id assigned by an upstream proxy so traces line up
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
        )

        quiet = request.url.path in QUIET_PATHS
        log_start = logger.debug if quiet else logger.info
        log_start(
            "request_started",
            query_params=str(request.query_params) if request.query_params else None,
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "request_failed",
                exception=str(exc),
                exception_type=type(exc).__name__,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        response.headers["X-Request-ID"] = request_id

        if duration_ms >= self.slow_request_ms:
            log_done = logger.warning
        elif quiet:
            log_done = logger.debug
        else:
            log_done = logger.info
        log_done(
            "request_completed",
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        return response

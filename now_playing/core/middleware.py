"""Middleware configuration."""

import time

from fastapi import FastAPI, Request

from now_playing.logging_config import get_logger, log_with_context
from now_playing.middleware.logging_middleware import redact_sensitive_data

logger = get_logger(__name__)


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
    """

    @app.middleware("http")
    async def count_and_log_requests(request: Request, call_next):
        """Count requests for the debug endpoint and write an access log line."""
        app.state.request_count = getattr(app.state, "request_count", 0) + 1
        started = time.perf_counter()
        response = await call_next(request)
        log_with_context(
            logger,
            "info",
            "Request handled",
            method=request.method,
            url=redact_sensitive_data(str(request.url)),
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
            event_type="request",
        )
        return response

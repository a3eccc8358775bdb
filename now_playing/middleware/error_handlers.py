"""Exception handlers for the application."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from now_playing.exceptions import ErrorCode, InvalidTokenException, NowPlayingException
from now_playing.logging_config import get_logger, log_with_context
from now_playing.middleware.logging_middleware import redact_sensitive_data

logger = get_logger(__name__)


async def invalid_token_handler(request: Request, exc: InvalidTokenException) -> JSONResponse:
    """Reject a gated command with a fixed body."""
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def now_playing_exception_handler(request: Request, exc: NowPlayingException) -> JSONResponse:
    """Handle application exceptions with proper HTTP status codes.

    Returns structured JSON error responses with error code, message and
    optional details.
    """
    log_with_context(
        logger,
        "warning",
        "Request failed",
        error_code=exc.code.value,
        error_message=exc.message,
        status_code=exc.status_code,
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="now_playing_error",
    )

    error_content: dict[str, Any] = {"code": exc.code.value, "message": exc.message, "details": exc.details}

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error_content},
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with logging."""
    log_with_context(
        logger,
        "error",
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="unhandled_error",
    )
    logger.error("Exception traceback:", exc_info=exc)

    # Don't expose internal error details to clients
    return JSONResponse(
        status_code=500,
        content={"error": {"code": ErrorCode.INTERNAL_ERROR.value, "message": "Internal server error"}},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(InvalidTokenException, invalid_token_handler)
    app.add_exception_handler(NowPlayingException, now_playing_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

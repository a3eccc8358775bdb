"""Shared-secret gate for playback commands."""

import secrets

from fastapi import Depends, Query, Request

from now_playing.config import Settings, get_settings
from now_playing.exceptions import InvalidTokenException
from now_playing.logging_config import get_logger, log_with_context
from now_playing.middleware.logging_middleware import redact_sensitive_data

logger = get_logger(__name__)


async def verify_auth_token(
    request: Request,
    auth_token: str = Query(default="", description="Shared secret"),
    settings: Settings = Depends(get_settings),
) -> None:
    """Verify the ``auth_token`` query parameter against the shared secret.

    Declare this before any dependency that touches playback state so a
    rejected request never reaches Spotify.

    Raises:
        InvalidTokenException: If the token is missing or wrong
    """
    if not secrets.compare_digest(auth_token.encode("utf-8"), settings.auth_token.encode("utf-8")):
        log_with_context(
            logger,
            "warning",
            "Invalid auth token",
            event_type="auth_failure",
            path=redact_sensitive_data(str(request.url)),
            ip=request.client.host if request.client else "unknown",
        )
        raise InvalidTokenException()

    log_with_context(
        logger,
        "debug",
        "Auth token verified",
        event_type="auth_success",
        path=request.url.path,
    )

"""Logging helpers with sensitive data redaction."""

import re

# Sensitive parameters to redact from URLs and log lines
SENSITIVE_PARAMS = [
    "auth_token",
    "refresh_token",
    "access_token",
    "client_secret",
    "token",
    "secret",
    "password",
    "authorization",
    "bearer",
]

_SENSITIVE_PATTERN = re.compile(rf"\b({'|'.join(SENSITIVE_PARAMS)})=([^&\s\"]+)", re.IGNORECASE)


def redact_sensitive_data(url: str) -> str:
    """Redact sensitive query parameters from a URL or log line.

    Example:
        >>> redact_sensitive_data("/next_track?auth_token=hunter2")
        '/next_track?auth_token=***REDACTED***'
    """
    return _SENSITIVE_PATTERN.sub(r"\1=***REDACTED***", url)

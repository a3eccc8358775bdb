"""Custom exceptions for Now Playing Proxy with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    NOW_PLAYING_ERROR = "NOW_PLAYING_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Command gate
    INVALID_TOKEN = "INVALID_TOKEN"

    # Spotify errors
    SPOTIFY_ERROR = "SPOTIFY_ERROR"
    SPOTIFY_AUTH_ERROR = "SPOTIFY_AUTH_ERROR"
    SPOTIFY_API_ERROR = "SPOTIFY_API_ERROR"

    # Playback state
    UNSUPPORTED_MEDIA = "UNSUPPORTED_MEDIA"
    PLAYBACK_STATE_UNAVAILABLE = "PLAYBACK_STATE_UNAVAILABLE"
    NO_ACTIVE_DEVICE = "NO_ACTIVE_DEVICE"

    # Image errors
    IMAGE_ERROR = "IMAGE_ERROR"
    IMAGE_FETCH_ERROR = "IMAGE_FETCH_ERROR"
    IMAGE_UNSUPPORTED_TYPE = "IMAGE_UNSUPPORTED_TYPE"
    IMAGE_DECODE_ERROR = "IMAGE_DECODE_ERROR"


class NowPlayingException(Exception):
    """Base exception for application errors with HTTP status code support.

    All custom exceptions inherit from this class so the error handlers can
    turn them into consistent JSON responses.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.NOW_PLAYING_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class InvalidTokenException(NowPlayingException):
    """Caller-supplied auth token does not match the shared secret."""

    def __init__(self, message: str = "invalid token"):
        super().__init__(message, code=ErrorCode.INVALID_TOKEN, status_code=401)


class SpotifyException(NowPlayingException):
    """Spotify-related errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SPOTIFY_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class SpotifyAuthException(SpotifyException):
    """Spotify rejected the refresh token grant."""

    def __init__(self, message: str = "Spotify authentication failed", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.SPOTIFY_AUTH_ERROR,
            status_code=401,
            details=details,
        )


class SpotifyAPIException(SpotifyException):
    """Spotify API request failed or returned an unreadable payload."""

    def __init__(self, message: str, status_code: int = 502, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.SPOTIFY_API_ERROR,
            status_code=status_code,
            details=details,
        )


class UnsupportedMediaException(SpotifyException):
    """The active item is not a track (e.g. a podcast episode)."""

    def __init__(self, media_type: str):
        super().__init__(
            f"Unsupported media type: {media_type}",
            code=ErrorCode.UNSUPPORTED_MEDIA,
            status_code=501,
            details={"media_type": media_type},
        )


class PlaybackStateUnavailableException(NowPlayingException):
    """No playback snapshot could be obtained for a command."""

    def __init__(self, message: str = "could not determine playback state"):
        super().__init__(message, code=ErrorCode.PLAYBACK_STATE_UNAVAILABLE, status_code=503)


class NoActiveDeviceException(NowPlayingException):
    """The snapshot has no device a command could be sent to."""

    def __init__(self, message: str = "no active playback device"):
        super().__init__(message, code=ErrorCode.NO_ACTIVE_DEVICE, status_code=409)


class ImageException(NowPlayingException):
    """Image resize errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.IMAGE_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class ImageFetchException(ImageException):
    """Source image could not be downloaded."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.IMAGE_FETCH_ERROR, details=details)


class UnsupportedImageTypeException(ImageException):
    """Source image is not a JPEG."""

    def __init__(self, content_type: str):
        super().__init__(
            f"Unsupported image content type: {content_type}",
            code=ErrorCode.IMAGE_UNSUPPORTED_TYPE,
            details={"content_type": content_type},
        )


class ImageDecodeException(ImageException):
    """Source bytes could not be decoded as an image."""

    def __init__(self, message: str = "Failed to decode image"):
        super().__init__(message, code=ErrorCode.IMAGE_DECODE_ERROR)

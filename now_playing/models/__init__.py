"""Now Playing Proxy models"""

from now_playing.models.base_models import (
    DebugInfo,
    DetailedHealthResponse,
    ErrorResponse,
    HealthResponse,
    TokenRejection,
)
from now_playing.models.spotify import (
    Artist,
    CommandAcknowledgement,
    CurrentlyPlayingView,
    Device,
    PlaybackIdle,
    PlaybackSnapshot,
    SpotifyPlayback,
    SpotifyTrack,
    Track,
)

__all__ = [
    "DebugInfo",
    "DetailedHealthResponse",
    "ErrorResponse",
    "HealthResponse",
    "TokenRejection",
    "Artist",
    "CommandAcknowledgement",
    "CurrentlyPlayingView",
    "Device",
    "PlaybackIdle",
    "PlaybackSnapshot",
    "SpotifyPlayback",
    "SpotifyTrack",
    "Track",
]

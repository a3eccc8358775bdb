"""Pytest configuration and shared fixtures."""

import os
from unittest.mock import AsyncMock

import httpx
import pytest

# Keep test runs independent of a developer's local .env
os.environ.setdefault("SPOTIFY_CLIENT_ID", "test-spotify-client-id")
os.environ.setdefault("SPOTIFY_CLIENT_SECRET", "test-spotify-client-secret")
os.environ.setdefault("SPOTIFY_REFRESH_TOKEN", "test-refresh-token")
os.environ.setdefault("AUTH_TOKEN", "test-auth-token")

from now_playing.config import Settings  # noqa: E402
from now_playing.models.spotify import SpotifyPlayback  # noqa: E402
from now_playing.services.spotify_client import SpotifyClient  # noqa: E402
from now_playing.state_managers import PlaybackStateManager, SpotifyAuthManager  # noqa: E402


@pytest.fixture
def mock_settings():
    """Settings instance with test values."""
    return Settings(
        api_host="0.0.0.0",
        api_port=8080,
        spotify_client_id="test-spotify-client-id",
        spotify_client_secret="test-spotify-client-secret",
        spotify_refresh_token="test-refresh-token",
        auth_token="test-auth-token",
        image_max_dimension=512,
    )


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for external API calls."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.post = AsyncMock()
    mock_client.request = AsyncMock()
    mock_client.aclose = AsyncMock()
    mock_client.is_closed = False
    return mock_client


@pytest.fixture
def spotify_auth_manager():
    """Auth manager holding a valid cached access token."""
    manager = SpotifyAuthManager("test-refresh-token")
    manager._access_token = "test-access-token"
    manager._token_expires_at = float("inf")
    return manager


@pytest.fixture
def mock_provider():
    """Stub of the Spotify client; every method is an AsyncMock."""
    return AsyncMock(spec=SpotifyClient)


@pytest.fixture
def playback_state_manager(mock_provider):
    """Playback state manager wired to the provider stub."""
    return PlaybackStateManager(mock_provider)


@pytest.fixture
def mock_spotify_playback_response():
    """Spotify ``GET /me/player`` response with a track playing."""
    return {
        "device": {
            "id": "D1",
            "is_active": True,
            "name": "Living Room",
            "type": "Speaker",
            "volume_percent": 50,
        },
        "shuffle_state": False,
        "repeat_state": "context",
        "timestamp": 1700000000000,
        "progress_ms": 61999,
        "is_playing": True,
        "currently_playing_type": "track",
        "item": {
            "type": "track",
            "id": "4u7EnebtmKWzUH433cf5Qv",
            "name": "Bohemian Rhapsody",
            "duration_ms": 354947,
            "external_urls": {"spotify": "https://open.spotify.com/track/4u7EnebtmKWzUH433cf5Qv"},
            "artists": [
                {
                    "name": "Queen",
                    "external_urls": {"spotify": "https://open.spotify.com/artist/1dfeR4HaWDbWqFHLkxsg1d"},
                }
            ],
            "album": {
                "name": "A Night At The Opera",
                "images": [
                    {"url": "https://i.scdn.co/image/large", "width": 640, "height": 640},
                    {"url": "https://i.scdn.co/image/medium", "width": 300, "height": 300},
                    {"url": "https://i.scdn.co/image/small", "width": 64, "height": 64},
                ],
            },
        },
    }


@pytest.fixture
def mock_spotify_episode_response(mock_spotify_playback_response):
    """Spotify ``GET /me/player`` response with a podcast episode playing."""
    data = dict(mock_spotify_playback_response)
    data["currently_playing_type"] = "episode"
    data["item"] = {"type": "episode", "id": "512ojhOuo1ktJprKbVcKyQ", "name": "Episode 1"}
    return data


@pytest.fixture
def active_playback(mock_spotify_playback_response):
    """Parsed playback with a track playing on device D1."""
    return SpotifyPlayback.model_validate(mock_spotify_playback_response)


@pytest.fixture
def paused_playback(mock_spotify_playback_response):
    """Parsed playback, paused at 61 seconds on device D1."""
    data = dict(mock_spotify_playback_response)
    data["is_playing"] = False
    return SpotifyPlayback.model_validate(data)

"""Spotify Web API client.

Implements the PlaybackProvider protocol on top of the shared httpx client.
Access tokens are obtained with the refresh-token grant and cached in
SpotifyAuthManager until they expire.
"""

from typing import Any

import httpx
from pydantic import ValidationError

from now_playing.config import Settings
from now_playing.exceptions import SpotifyAPIException, SpotifyAuthException
from now_playing.logging_config import get_logger, log_with_context
from now_playing.models.spotify import SpotifyPlayback, SpotifyTrack
from now_playing.state_managers import SpotifyAuthManager

logger = get_logger(__name__)


class SpotifyClient:
    """Thin async wrapper over the player and track endpoints.

    Each method makes exactly one API call (plus a token refresh when the
    cached access token has expired). Nothing is retried.
    """

    def __init__(self, client: httpx.AsyncClient, auth_manager: SpotifyAuthManager, settings: Settings):
        self._client = client
        self._auth_manager = auth_manager
        self._settings = settings

    async def _get_access_token(self) -> str:
        """Get an access token, refreshing it when the cached one expired.

        Raises:
            SpotifyAuthException: If Spotify rejects the refresh token
            SpotifyAPIException: If the token endpoint is unreachable or malformed
        """
        cached_token = await self._auth_manager.get_token()
        if cached_token:
            return cached_token

        refresh_token = await self._auth_manager.get_refresh_token()

        try:
            response = await self._client.post(
                self._settings.spotify_accounts_url,
                auth=(self._settings.spotify_client_id, self._settings.spotify_client_secret),
                data={"grant_type": "refresh_token", "refresh_token": refresh_token},
                timeout=10.0,
            )
            response.raise_for_status()
            data = response.json()

            access_token = data["access_token"]
            expires_in = data.get("expires_in", 3600)
        except httpx.HTTPStatusError as e:
            raise SpotifyAuthException(
                "Spotify token refresh failed",
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise SpotifyAPIException(f"Spotify token endpoint unreachable: {str(e)}") from e
        except (KeyError, ValueError) as e:
            raise SpotifyAPIException(f"Invalid Spotify auth response: {str(e)}") from e

        await self._auth_manager.set_token(access_token, expires_in)

        # Spotify may rotate the refresh token
        if data.get("refresh_token"):
            await self._auth_manager.set_refresh_token(data["refresh_token"])
            log_with_context(
                logger,
                "info",
                "Spotify refresh token rotated",
                event_type="spotify_refresh_token_rotated",
            )

        return access_token

    async def _request(
        self,
        method: str,
        path: str,
        action: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send an authenticated request to the Web API.

        Args:
            method: HTTP method
            path: Path below the API base URL
            action: Short description used in error messages
            params: Query parameters
            json: JSON body

        Raises:
            SpotifyAPIException: On transport errors or non-2xx responses
        """
        token = await self._get_access_token()
        try:
            response = await self._client.request(
                method,
                f"{self._settings.spotify_api_url}{path}",
                headers={"Authorization": f"Bearer {token}"},
                params=params,
                json=json,
                timeout=10.0,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SpotifyAPIException(
                f"Spotify {action} failed: {str(e)}",
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise SpotifyAPIException(f"Spotify {action} failed: {str(e)}") from e
        return response

    async def current_playback(self) -> SpotifyPlayback | None:
        """Get the user's current playback.

        Returns:
            Parsed playback, or None when Spotify answers 204 (nothing playing)
        """
        response = await self._request(
            "GET",
            "/me/player",
            "playback state",
            params={"additional_types": "track,episode"},
        )
        if response.status_code == 204 or not response.content:
            return None

        try:
            return SpotifyPlayback.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise SpotifyAPIException(f"Invalid Spotify playback response: {str(e)}") from e

    async def track(self, track_id: str) -> SpotifyTrack:
        """Get a track by its Spotify ID."""
        response = await self._request("GET", f"/tracks/{track_id}", "track lookup")
        try:
            return SpotifyTrack.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise SpotifyAPIException(f"Invalid Spotify track response: {str(e)}") from e

    async def pause(self, device_id: str) -> None:
        await self._request("PUT", "/me/player/pause", "pause", params={"device_id": device_id})

    async def resume(self, device_id: str, position_seconds: int) -> None:
        """Resume playback on a device at the given offset."""
        await self._request(
            "PUT",
            "/me/player/play",
            "resume",
            params={"device_id": device_id},
            json={"position_ms": position_seconds * 1000},
        )

    async def next(self, device_id: str) -> None:
        await self._request("POST", "/me/player/next", "next", params={"device_id": device_id})

    async def previous(self, device_id: str) -> None:
        await self._request("POST", "/me/player/previous", "previous", params={"device_id": device_id})

    async def seek(self, device_id: str, position_seconds: int) -> None:
        await self._request(
            "PUT",
            "/me/player/seek",
            "seek",
            params={"device_id": device_id, "position_ms": position_seconds * 1000},
        )

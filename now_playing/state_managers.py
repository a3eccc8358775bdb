"""State managers for handling application-wide mutable state.

This module provides task-safe state management using asyncio.Lock.
All state managers inherit from the StateManager ABC.
"""

import asyncio
import time
from abc import ABC, abstractmethod

from now_playing.logging_config import get_logger, log_with_context
from now_playing.models.spotify import PlaybackSnapshot, SpotifyPlayback
from now_playing.protocols import PlaybackProvider

logger = get_logger(__name__)


class StateManager(ABC):
    """Base class for all state managers.

    State managers provide task-safe access to mutable application state.
    All subclasses must implement lifecycle methods.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the state manager (called during app startup)."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cleanup resources (called during app shutdown)."""
        pass


class SpotifyAuthManager(StateManager):
    """Caches the Spotify access token and the current refresh token.

    The refresh token starts out as the pre-provisioned one from settings.
    Spotify may hand out a replacement on refresh; it is kept in memory only.
    """

    def __init__(self, refresh_token: str):
        self._refresh_token = refresh_token
        self._access_token: str | None = None
        self._token_expires_at: float = 0
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        pass

    async def cleanup(self) -> None:
        """Forget the access token on shutdown."""
        async with self._lock:
            self._access_token = None
            self._token_expires_at = 0

    async def get_token(self) -> str | None:
        """Get the current access token if available and not expired.

        Returns:
            Access token string or None if expired/not set
        """
        async with self._lock:
            if self._access_token and self._token_expires_at > time.time():
                return self._access_token
            return None

    async def set_token(self, token: str, expires_in: int) -> None:
        """Set a new access token with expiration.

        Args:
            token: The access token string
            expires_in: Expiration time in seconds
        """
        async with self._lock:
            self._access_token = token
            self._token_expires_at = time.time() + expires_in

    async def get_refresh_token(self) -> str:
        async with self._lock:
            return self._refresh_token

    async def set_refresh_token(self, refresh_token: str) -> None:
        async with self._lock:
            self._refresh_token = refresh_token


class PlaybackStateManager(StateManager):
    """Owns the single cached playback snapshot.

    The provider handle and the snapshot sit behind one lock. Methods ending
    in ``_locked`` expect the caller to hold ``lock`` so that a refresh and
    the command that depends on it run as one critical section::

        async with manager.lock:
            snapshot = await manager.synchronize_locked()
            ...

    There is no background refresh; every refresh is a live remote query.
    """

    def __init__(self, provider: PlaybackProvider):
        self._provider = provider
        self._snapshot: PlaybackSnapshot | None = None
        self._lock = asyncio.Lock()

    @property
    def lock(self) -> asyncio.Lock:
        return self._lock

    @property
    def provider(self) -> PlaybackProvider:
        return self._provider

    @property
    def snapshot(self) -> PlaybackSnapshot | None:
        """Snapshot as of the most recent refresh, or None."""
        return self._snapshot

    async def initialize(self) -> None:
        """Take the first snapshot at startup."""
        snapshot = await self.synchronize()
        log_with_context(
            logger,
            "info",
            "Initial playback snapshot taken",
            has_snapshot=snapshot is not None,
            event_type="playback_state_initialized",
        )

    async def cleanup(self) -> None:
        async with self._lock:
            self._snapshot = None

    async def synchronize(self) -> PlaybackSnapshot | None:
        """Refresh the snapshot from the provider.

        Returns:
            The new snapshot, or None if nothing is playing or the query failed
        """
        async with self._lock:
            return await self.synchronize_locked()

    async def synchronize_locked(self) -> PlaybackSnapshot | None:
        """Refresh the snapshot; provider errors leave it cleared."""
        try:
            await self.refresh_locked()
        except Exception as e:
            log_with_context(
                logger,
                "warning",
                "Playback refresh failed, snapshot cleared",
                error=str(e),
                error_type=type(e).__name__,
                event_type="playback_sync_failed",
            )
        return self._snapshot

    async def refresh_locked(self) -> SpotifyPlayback | None:
        """Refresh the snapshot and return the raw playback it came from.

        Unlike synchronize_locked, a provider error is re-raised after the
        snapshot has been cleared.

        Returns:
            The playback response, or None when nothing is playing
        """
        self._snapshot = None
        playback = await self._provider.current_playback()
        if playback is not None and playback.item is not None:
            self._snapshot = PlaybackSnapshot.from_playback(playback)

        log_with_context(
            logger,
            "debug",
            "Playback snapshot refreshed",
            is_playing=self._snapshot.is_playing if self._snapshot else None,
            device_id=self._snapshot.device_id if self._snapshot else None,
            event_type="playback_sync",
        )
        return playback

    def set_playing_locked(self, is_playing: bool) -> None:
        """Record a transport change made by a command."""
        if self._snapshot is not None:
            self._snapshot = self._snapshot.model_copy(update={"is_playing": is_playing})

"""Protocol definitions for dependency injection."""

from typing import Protocol

from now_playing.models.spotify import SpotifyPlayback, SpotifyTrack


class PlaybackProvider(Protocol):
    """Remote music-playback service.

    Every method is a single remote call and may raise. Implemented by
    SpotifyClient; tests substitute an AsyncMock with the same shape.
    """

    async def current_playback(self) -> SpotifyPlayback | None:
        """Current playback, or None when nothing is playing."""
        ...

    async def track(self, track_id: str) -> SpotifyTrack: ...

    async def pause(self, device_id: str) -> None: ...

    async def resume(self, device_id: str, position_seconds: int) -> None: ...

    async def next(self, device_id: str) -> None: ...

    async def previous(self, device_id: str) -> None: ...

    async def seek(self, device_id: str, position_seconds: int) -> None: ...

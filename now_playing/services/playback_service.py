"""Current playback reads and playback commands.

Reads and commands share one critical section on the PlaybackStateManager
lock: refresh the snapshot, then act on what was just observed. Commands are
best effort. Once a command reaches Spotify its acknowledgement is returned
whether or not Spotify carried it out.
"""

from collections.abc import Awaitable, Callable

from now_playing.exceptions import (
    NoActiveDeviceException,
    PlaybackStateUnavailableException,
    SpotifyAPIException,
    SpotifyException,
    UnsupportedMediaException,
)
from now_playing.logging_config import get_logger, log_with_context
from now_playing.models.spotify import (
    CommandAcknowledgement,
    CurrentlyPlayingView,
    PlaybackIdle,
    PlaybackSnapshot,
    SpotifyTrack,
    Track,
)
from now_playing.state_managers import PlaybackStateManager

logger = get_logger(__name__)


async def get_current_playback(state: PlaybackStateManager) -> CurrentlyPlayingView | PlaybackIdle:
    """Get what is currently playing.

    Also refreshes the shared snapshot from the same Spotify response.

    Args:
        state: Shared playback state

    Returns:
        CurrentlyPlayingView, or PlaybackIdle when nothing is playing

    Raises:
        SpotifyAPIException: If Spotify could not be queried (snapshot is cleared)
        UnsupportedMediaException: If the active item is a podcast episode
    """
    async with state.lock:
        try:
            playback = await state.refresh_locked()
        except SpotifyException as e:
            raise SpotifyAPIException(f"Failed to get current playback: {e.message}") from e

    if playback is None or playback.item is None:
        return PlaybackIdle()

    if not isinstance(playback.item, SpotifyTrack):
        raise UnsupportedMediaException(playback.item.type)

    return CurrentlyPlayingView.from_spotify(playback, playback.item)


async def get_track(state: PlaybackStateManager, track_id: str) -> Track:
    """Look up a single track.

    Does not touch the snapshot, so no lock is taken.
    """
    try:
        track = await state.provider.track(track_id)
    except SpotifyException as e:
        raise SpotifyAPIException(f"Failed to get track {track_id}: {e.message}") from e
    return Track.from_spotify(track)


async def _fresh_snapshot(state: PlaybackStateManager) -> PlaybackSnapshot:
    """Refresh the snapshot for a command. Caller holds the lock."""
    snapshot = await state.synchronize_locked()
    if snapshot is None:
        raise PlaybackStateUnavailableException()
    if not snapshot.device_id:
        raise NoActiveDeviceException()
    return snapshot


async def _dispatch(command: str, call: Callable[[], Awaitable[None]], device_id: str) -> bool:
    """Send a command to Spotify; failures are logged, not raised.

    Returns:
        True if Spotify accepted the call
    """
    try:
        await call()
    except SpotifyException as e:
        log_with_context(
            logger,
            "warning",
            "Playback command failed",
            command=command,
            device_id=device_id,
            error=e.message,
            event_type="playback_command_failed",
        )
        return False

    log_with_context(
        logger,
        "info",
        "Playback command sent",
        command=command,
        device_id=device_id,
        event_type="playback_command",
    )
    return True


async def toggle_playback(state: PlaybackStateManager) -> CommandAcknowledgement:
    """Pause if playing, otherwise resume where playback left off.

    Raises:
        PlaybackStateUnavailableException: If the playback state is unknown
        NoActiveDeviceException: If no device is reported
    """
    async with state.lock:
        snapshot = await _fresh_snapshot(state)
        provider = state.provider

        if snapshot.is_playing:
            if await _dispatch("pause", lambda: provider.pause(snapshot.device_id), snapshot.device_id):
                state.set_playing_locked(False)
            return CommandAcknowledgement(message="playback paused")

        resumed = await _dispatch(
            "resume",
            lambda: provider.resume(snapshot.device_id, snapshot.position_seconds),
            snapshot.device_id,
        )
        if resumed:
            state.set_playing_locked(True)
        return CommandAcknowledgement(message="playback resumed")


async def next_track(state: PlaybackStateManager) -> CommandAcknowledgement:
    """Skip to the next track on the active device."""
    async with state.lock:
        snapshot = await _fresh_snapshot(state)
        await _dispatch("next", lambda: state.provider.next(snapshot.device_id), snapshot.device_id)
        return CommandAcknowledgement(message="skipped to next track")


async def previous_track(state: PlaybackStateManager) -> CommandAcknowledgement:
    """Skip to the previous track on the active device."""
    async with state.lock:
        snapshot = await _fresh_snapshot(state)
        await _dispatch("previous", lambda: state.provider.previous(snapshot.device_id), snapshot.device_id)
        return CommandAcknowledgement(message="skipped to previous track")


async def restart_track(state: PlaybackStateManager) -> CommandAcknowledgement:
    """Seek to the start of the current track."""
    async with state.lock:
        snapshot = await _fresh_snapshot(state)
        await _dispatch("restart", lambda: state.provider.seek(snapshot.device_id, 0), snapshot.device_id)
        return CommandAcknowledgement(message="track restarted")

"""Current playback and playback command routes."""

from fastapi import APIRouter, Depends, Path

from now_playing.dependencies import get_playback_state_manager
from now_playing.models import (
    CommandAcknowledgement,
    CurrentlyPlayingView,
    ErrorResponse,
    PlaybackIdle,
    TokenRejection,
    Track,
)
from now_playing.security import verify_auth_token
from now_playing.services import playback_service
from now_playing.state_managers import PlaybackStateManager

router = APIRouter()

COMMAND_RESPONSES = {
    401: {"model": TokenRejection, "description": "Invalid auth token"},
    409: {"model": ErrorResponse, "description": "Spotify reports no device to control"},
    503: {"model": ErrorResponse, "description": "Playback state could not be determined"},
}


@router.get(
    "/current_playback",
    response_model=CurrentlyPlayingView | PlaybackIdle,
    summary="Get current playback",
    description="""
    Returns the active device, the simplified track, elapsed seconds and the
    shuffle, play/pause and repeat state.

    When nothing is playing the body is `{"status": "idle"}`.
    """,
    responses={
        200: {
            "description": "Active or idle playback",
            "content": {
                "application/json": {
                    "example": {
                        "status": "active",
                        "device": {
                            "id": "a1b2c3",
                            "name": "Kitchen",
                            "type": "Speaker",
                            "is_active": True,
                            "volume_percent": 40,
                        },
                        "track": {
                            "name": "Bohemian Rhapsody",
                            "artists": [{"name": "Queen", "url": "https://open.spotify.com/artist/1dfeR4HaWDbWqFHLkxsg1d"}],
                            "image_url": "https://i.scdn.co/image/ab67616d0000b273e8b066f70c206551210d902b",
                            "url": "https://open.spotify.com/track/4u7EnebtmKWzUH433cf5Qv",
                            "duration": 354,
                        },
                        "progress": 125,
                        "shuffle": False,
                        "is_playing": True,
                        "repeat": "off",
                    }
                }
            },
        },
        501: {"model": ErrorResponse, "description": "A podcast episode is playing"},
        502: {"model": ErrorResponse, "description": "Spotify API error"},
    },
)
async def get_current_playback(
    state: PlaybackStateManager = Depends(get_playback_state_manager),
):
    """Get current playback and refresh the shared snapshot."""
    return await playback_service.get_current_playback(state)


@router.get(
    "/toggle_playback",
    response_model=CommandAcknowledgement,
    summary="Toggle play/pause",
    dependencies=[Depends(verify_auth_token)],
    responses=COMMAND_RESPONSES,
)
async def toggle_playback(
    state: PlaybackStateManager = Depends(get_playback_state_manager),
):
    """Pause when playing, otherwise resume at the last known position."""
    return await playback_service.toggle_playback(state)


@router.get(
    "/next_track",
    response_model=CommandAcknowledgement,
    summary="Skip to next track",
    dependencies=[Depends(verify_auth_token)],
    responses=COMMAND_RESPONSES,
)
async def next_track(
    state: PlaybackStateManager = Depends(get_playback_state_manager),
):
    return await playback_service.next_track(state)


@router.get(
    "/previous_track",
    response_model=CommandAcknowledgement,
    summary="Skip to previous track",
    dependencies=[Depends(verify_auth_token)],
    responses=COMMAND_RESPONSES,
)
async def previous_track(
    state: PlaybackStateManager = Depends(get_playback_state_manager),
):
    return await playback_service.previous_track(state)


@router.get(
    "/restart_track",
    response_model=CommandAcknowledgement,
    summary="Restart current track",
    dependencies=[Depends(verify_auth_token)],
    responses=COMMAND_RESPONSES,
)
async def restart_track(
    state: PlaybackStateManager = Depends(get_playback_state_manager),
):
    return await playback_service.restart_track(state)


@router.get(
    "/track/{track_id}",
    response_model=Track,
    summary="Look up a track",
    responses={502: {"model": ErrorResponse, "description": "Spotify API error"}},
)
async def get_track(
    track_id: str = Path(min_length=1, max_length=64, pattern=r"^[A-Za-z0-9]+$"),
    state: PlaybackStateManager = Depends(get_playback_state_manager),
):
    """Get the simplified view of any track by Spotify ID."""
    return await playback_service.get_track(state, track_id)

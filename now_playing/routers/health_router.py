"""Health and debug endpoints."""

import os
import platform
import sys
import time
from datetime import UTC, datetime

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from now_playing import __version__
from now_playing.config import Settings, get_settings
from now_playing.dependencies import get_http_client, get_playback_state_manager
from now_playing.models import DebugInfo, DetailedHealthResponse, HealthResponse, TokenRejection
from now_playing.security import verify_auth_token
from now_playing.state_managers import PlaybackStateManager

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint.

    For dependency status, use `/health/ready`.
    """
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/ready", response_model=DetailedHealthResponse)
async def readiness_check(
    client: httpx.AsyncClient = Depends(get_http_client),
    state: PlaybackStateManager = Depends(get_playback_state_manager),
):
    """Readiness probe - can the application serve traffic?

    Reports whether the HTTP client is open and whether a playback snapshot
    is cached. An empty snapshot is not a failure: nothing may be playing.
    Does not call Spotify.

    **Returns:**
    - 200: Application is ready to serve requests
    - 503: HTTP client is closed
    """
    checks = {
        "http_client": "failed" if client.is_closed else "ok",
        "playback_snapshot": "cached" if state.snapshot is not None else "empty",
    }
    all_healthy = checks["http_client"] == "ok"

    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content=DetailedHealthResponse(
            status="healthy" if all_healthy else "unhealthy",
            version=__version__,
            timestamp=datetime.now(UTC),
            checks=checks,
        ).model_dump(mode="json"),
    )


@router.get(
    "/debug",
    response_model=DebugInfo,
    dependencies=[Depends(verify_auth_token)],
    responses={
        200: {"description": "System diagnostics and state information"},
        401: {"model": TokenRejection, "description": "Invalid auth token"},
    },
)
async def debug_info(
    request: Request,
    state: PlaybackStateManager = Depends(get_playback_state_manager),
    settings: Settings = Depends(get_settings),
):
    """Debug endpoint with system state and diagnostics.

    **Requires** the `auth_token` query parameter. Shows the cached snapshot
    without refreshing it.
    """
    snapshot = state.snapshot

    system_info = {
        "version": __version__,
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        "platform": platform.system(),
        "uptime_seconds": int(time.time() - request.app.state.startup_time),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
    }

    state_info = {
        "playback_snapshot": snapshot.model_dump() if snapshot else None,
        "playback_lock_held": state.lock.locked(),
    }

    # Sanitized - no secrets
    config_info = {
        "api_host": settings.api_host,
        "api_port": settings.api_port,
        "spotify_api_url": settings.spotify_api_url,
        "image_max_dimension": settings.image_max_dimension,
    }

    return DebugInfo(
        system=system_info,
        state=state_info,
        config=config_info,
        requests={"total_requests": request.app.state.request_count},
    )

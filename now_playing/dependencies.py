"""FastAPI dependencies for dependency injection."""

import httpx
from fastapi import Request

from now_playing.state_managers import PlaybackStateManager


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared AsyncClient instance.

    Raises:
        RuntimeError: If HTTP client is not initialized.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    if client is None:
        raise RuntimeError("HTTP client not initialized. This should never happen.")

    return client


async def get_playback_state_manager(request: Request) -> PlaybackStateManager:
    """
    Get the playback state manager from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared PlaybackStateManager instance.

    Raises:
        RuntimeError: If the playback state manager is not initialized.
    """
    manager: PlaybackStateManager | None = getattr(request.app.state, "playback_state_manager", None)

    if manager is None:
        raise RuntimeError("Playback state manager not initialized.")

    return manager

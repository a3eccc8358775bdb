"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from now_playing import __version__
from now_playing.core.lifespan import lifespan
from now_playing.core.middleware import setup_middleware
from now_playing.middleware.error_handlers import register_error_handlers
from now_playing.routers import health_router, image_router, playback_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Now Playing Proxy",
        description="""
        Simplified "now playing" information and playback control for one
        Spotify account.

        ## Authentication
        Playback commands and `/debug` require the shared secret as the
        `auth_token` query parameter. A wrong token returns
        `401 {"message": "invalid token"}` and nothing is sent to Spotify.

        ## Commands
        Commands refresh the playback state first and then act on it. A
        successful response means the command was sent, not that Spotify
        carried it out.

        ## Health
        - `/health` - Basic health check
        - `/health/ready` - Readiness probe
        """,
        version=__version__,
        lifespan=lifespan,
        license_info={
            "name": "MIT",
        },
    )

    setup_middleware(app)
    register_error_handlers(app)

    app.include_router(health_router.router, tags=["health"])
    app.include_router(playback_router.router, tags=["playback"])
    app.include_router(image_router.router, tags=["images"])

    return app

"""Main FastAPI application entry point."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from now_playing.config import Settings, get_settings
from now_playing.core.app_factory import create_app
from now_playing.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

# Configure structured logging (JSON to file + console)
log_level = os.getenv("LOG_LEVEL", "INFO")
setup_logging(log_level)

app = create_app()


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Now Playing Proxy", "docs": "/docs"}


def server_config(settings: Settings) -> uvicorn.Config:
    """Build the uvicorn config.

    ``log_config=None`` keeps uvicorn from installing its own handlers, so its
    access and error records propagate to the redacting root handlers.
    """
    return uvicorn.Config(
        "now_playing.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


def run() -> None:
    """Console entry point."""
    uvicorn.Server(server_config(get_settings())).run()


if __name__ == "__main__":
    run()

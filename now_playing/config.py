from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parent.parent  # now-playing-proxy/


class Settings(BaseSettings):
    """Application settings with validation.

    Credentials and the shared auth token are required and will raise
    validation errors if missing. All secrets must be provided via
    environment variables or the .env file.
    """

    # API server settings
    api_host: str = Field(min_length=1, default="0.0.0.0", description="API server host")
    api_port: int = Field(ge=1, le=65535, default=8080, description="API server port")

    # Spotify API - the refresh token is provisioned once, outside this service
    spotify_client_id: str = Field(min_length=1, description="Spotify OAuth client ID")
    spotify_client_secret: str = Field(min_length=1, description="Spotify OAuth client secret")
    spotify_refresh_token: str = Field(min_length=1, description="Pre-provisioned Spotify refresh token")
    spotify_api_url: str = Field(default="https://api.spotify.com/v1", description="Spotify Web API base URL")
    spotify_accounts_url: str = Field(
        default="https://accounts.spotify.com/api/token",
        description="Spotify token endpoint",
    )

    # Shared secret for playback commands
    auth_token: str = Field(min_length=1, description="Shared secret required by mutating commands")

    # Image resizing
    image_max_dimension: int = Field(ge=1, default=2048, description="Largest accepted resize width/height")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("api_host", mode="after")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        """Ensure api_host is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("api_host cannot be empty")
        return v

    @field_validator("auth_token", "spotify_refresh_token", mode="after")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject secrets that are only whitespace."""
        if not v.strip():
            raise ValueError("secret must not be blank")
        return v

    @field_validator("spotify_api_url", "spotify_accounts_url", mode="after")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Ensure Spotify endpoints are http(s) URLs without a trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Spotify URLs must start with http:// or https://")
        return v.rstrip("/")


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    The .env file is read once; use this with FastAPI's Depends().

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance

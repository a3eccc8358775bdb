"""Pydantic models for Spotify payloads, the cached snapshot and API views."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class SpotifyPayload(BaseModel):
    """Base for models parsed from Spotify Web API JSON."""

    model_config = ConfigDict(extra="ignore")


class SpotifyDevice(SpotifyPayload):
    """Active output device as reported by Spotify."""

    id: str | None = None
    name: str
    type: str
    is_active: bool = False
    volume_percent: int | None = None


class SpotifyImage(SpotifyPayload):
    url: str
    width: int | None = None
    height: int | None = None


class SpotifyArtist(SpotifyPayload):
    name: str
    external_urls: dict[str, str] = Field(default_factory=dict)


class SpotifyAlbum(SpotifyPayload):
    name: str = ""
    images: list[SpotifyImage] = Field(default_factory=list)


class SpotifyTrack(SpotifyPayload):
    """Full track object."""

    type: Literal["track"] = "track"
    id: str | None = None
    name: str
    artists: list[SpotifyArtist] = Field(default_factory=list)
    album: SpotifyAlbum = Field(default_factory=SpotifyAlbum)
    external_urls: dict[str, str] = Field(default_factory=dict)
    duration_ms: int = Field(ge=0)


class SpotifyEpisode(SpotifyPayload):
    """Podcast episode. Only parsed far enough to be recognised and rejected."""

    type: Literal["episode"]
    id: str | None = None
    name: str = ""


class SpotifyPlayback(SpotifyPayload):
    """Response of ``GET /me/player``."""

    device: SpotifyDevice
    is_playing: bool = False
    progress_ms: int | None = None
    shuffle_state: bool = False
    repeat_state: str = "off"
    currently_playing_type: str = "unknown"
    item: Annotated[SpotifyTrack | SpotifyEpisode, Field(discriminator="type")] | None = None


class PlaybackSnapshot(BaseModel):
    """Last-known transport state, replaced wholesale on every refresh."""

    is_playing: bool
    position_seconds: int = Field(ge=0)
    device_id: str

    @classmethod
    def from_playback(cls, playback: SpotifyPlayback) -> "PlaybackSnapshot":
        """Build a snapshot from an active playback response."""
        return cls(
            is_playing=playback.is_playing,
            position_seconds=(playback.progress_ms or 0) // 1000,
            device_id=playback.device.id or "",
        )


class Artist(BaseModel):
    name: str
    url: str | None = None


class Track(BaseModel):
    """Simplified track view."""

    name: str
    artists: list[Artist]
    image_url: str | None = None
    url: str | None = None
    duration: int = Field(description="Track length in whole seconds")

    @classmethod
    def from_spotify(cls, track: SpotifyTrack) -> "Track":
        """Project a Spotify track onto the simplified view.

        The cover is the first album image; Spotify lists them largest first.
        """
        images = track.album.images
        return cls(
            name=track.name,
            artists=[Artist(name=a.name, url=a.external_urls.get("spotify")) for a in track.artists],
            image_url=images[0].url if images else None,
            url=track.external_urls.get("spotify"),
            duration=track.duration_ms // 1000,
        )


class Device(BaseModel):
    id: str | None = None
    name: str
    type: str
    is_active: bool
    volume_percent: int | None = None

    @classmethod
    def from_spotify(cls, device: SpotifyDevice) -> "Device":
        return cls(**device.model_dump())


class CurrentlyPlayingView(BaseModel):
    """What is playing right now."""

    status: Literal["active"] = "active"
    device: Device
    track: Track
    progress: int = Field(description="Elapsed playback in whole seconds")
    shuffle: bool
    is_playing: bool
    repeat: str

    @classmethod
    def from_spotify(cls, playback: SpotifyPlayback, track: SpotifyTrack) -> "CurrentlyPlayingView":
        return cls(
            device=Device.from_spotify(playback.device),
            track=Track.from_spotify(track),
            progress=(playback.progress_ms or 0) // 1000,
            shuffle=playback.shuffle_state,
            is_playing=playback.is_playing,
            repeat=playback.repeat_state,
        )


class PlaybackIdle(BaseModel):
    """Nothing is playing."""

    status: Literal["idle"] = "idle"


class CommandAcknowledgement(BaseModel):
    """A command passed the gate and was handed to Spotify.

    This does not mean Spotify carried it out.
    """

    message: str

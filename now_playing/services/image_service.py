"""Fetch a remote JPEG and resize it to raw RGB pixels."""

import asyncio
from io import BytesIO

import httpx
from PIL import Image, UnidentifiedImageError

from now_playing.exceptions import ImageDecodeException, ImageFetchException, UnsupportedImageTypeException
from now_playing.logging_config import get_logger, log_with_context
from now_playing.middleware.logging_middleware import redact_sensitive_data

logger = get_logger(__name__)

ACCEPTED_CONTENT_TYPE = "image/jpeg"
MAX_IMAGE_BYTES = 10 * 1024 * 1024  # 10MB


def _decode_and_resize(content: bytes, width: int, height: int) -> bytes:
    """Decode JPEG bytes and return nearest-neighbour resized RGB pixels."""
    with Image.open(BytesIO(content)) as image:
        resized = image.convert("RGB").resize((width, height), Image.Resampling.NEAREST)
    return resized.tobytes()


async def get_resized_image(client: httpx.AsyncClient, image_url: str, width: int, height: int) -> bytes:
    """Download a JPEG and resize it with nearest-neighbour sampling.

    Decoding and resizing run in a worker thread so the event loop keeps
    serving playback requests meanwhile.

    Args:
        client: Shared HTTP client from dependency injection.
        image_url: Source image URL (album covers, typically).
        width: Output width in pixels.
        height: Output height in pixels.

    Returns:
        ``width * height * 3`` bytes of interleaved RGB, no header.

    Raises:
        ImageFetchException: If the download fails, is not a 2xx response or is too large.
        UnsupportedImageTypeException: If the response is not image/jpeg.
        ImageDecodeException: If the body is not a readable image.
    """
    try:
        response = await client.get(image_url, timeout=10.0)
    except httpx.HTTPError as e:
        raise ImageFetchException(f"Failed to fetch image: {str(e)}") from e

    if not 200 <= response.status_code < 300:
        raise ImageFetchException(
            f"Image request returned HTTP {response.status_code}",
            details={"status_code": response.status_code},
        )

    content_type = response.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != ACCEPTED_CONTENT_TYPE:
        raise UnsupportedImageTypeException(content_type or "<missing>")

    if len(response.content) > MAX_IMAGE_BYTES:
        raise ImageFetchException(
            f"Image exceeds {MAX_IMAGE_BYTES} bytes",
            details={"size": len(response.content), "max_size": MAX_IMAGE_BYTES},
        )

    try:
        pixels = await asyncio.to_thread(_decode_and_resize, response.content, width, height)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ImageDecodeException(f"Failed to decode image: {str(e)}") from e

    log_with_context(
        logger,
        "debug",
        "Image resized",
        url=redact_sensitive_data(image_url),
        width=width,
        height=height,
        event_type="image_resized",
    )
    return pixels

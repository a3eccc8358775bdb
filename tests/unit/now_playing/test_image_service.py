"""Unit tests for the image resize service."""

import threading
from io import BytesIO
from unittest.mock import MagicMock

import httpx
import pytest
from PIL import Image

from now_playing.exceptions import ImageDecodeException, ImageFetchException, UnsupportedImageTypeException
from now_playing.services import image_service


def jpeg_bytes(width: int = 8, height: int = 8, color: tuple[int, int, int] = (200, 30, 30)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, "JPEG", quality=100)
    return buffer.getvalue()


def image_response(content: bytes, content_type: str = "image/jpeg", status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.headers = httpx.Headers({"content-type": content_type})
    response.content = content
    return response


@pytest.mark.asyncio
async def test_resize_returns_raw_rgb(mock_http_client):
    """Test the output is width * height * 3 bytes of RGB."""
    mock_http_client.get.return_value = image_response(jpeg_bytes(8, 8, (255, 255, 255)))

    pixels = await image_service.get_resized_image(mock_http_client, "https://example.com/a.jpg", 4, 2)

    assert len(pixels) == 4 * 2 * 3
    # White survives JPEG compression closely enough
    assert all(value > 240 for value in pixels)
    mock_http_client.get.assert_awaited_once()


@pytest.mark.asyncio
async def test_resize_upscales(mock_http_client):
    """Test resizing to larger dimensions."""
    mock_http_client.get.return_value = image_response(jpeg_bytes(2, 2))

    pixels = await image_service.get_resized_image(mock_http_client, "https://example.com/a.jpg", 16, 10)

    assert len(pixels) == 16 * 10 * 3


@pytest.mark.asyncio
async def test_content_type_parameters_are_ignored(mock_http_client):
    """Test image/jpeg with parameters is accepted."""
    mock_http_client.get.return_value = image_response(jpeg_bytes(), content_type="image/jpeg; charset=binary")

    pixels = await image_service.get_resized_image(mock_http_client, "https://example.com/a.jpg", 1, 1)

    assert len(pixels) == 3


@pytest.mark.asyncio
async def test_non_jpeg_rejected_before_decoding(mock_http_client, monkeypatch):
    """Test a non-JPEG content type fails and names the content type."""
    mock_http_client.get.return_value = image_response(b"\x89PNG....", content_type="image/png")
    image_open = MagicMock()
    monkeypatch.setattr(image_service.Image, "open", image_open)

    with pytest.raises(UnsupportedImageTypeException) as exc_info:
        await image_service.get_resized_image(mock_http_client, "https://example.com/a.png", 4, 4)

    assert "image/png" in exc_info.value.message
    assert exc_info.value.status_code == 500
    image_open.assert_not_called()


@pytest.mark.asyncio
async def test_missing_content_type_rejected(mock_http_client):
    """Test a response without a content type is rejected."""
    response = image_response(jpeg_bytes())
    response.headers = httpx.Headers({})
    mock_http_client.get.return_value = response

    with pytest.raises(UnsupportedImageTypeException):
        await image_service.get_resized_image(mock_http_client, "https://example.com/a", 4, 4)


@pytest.mark.asyncio
async def test_error_status_rejected(mock_http_client):
    """Test a non-success HTTP status fails with the status in the message."""
    mock_http_client.get.return_value = image_response(b"not found", content_type="text/html", status_code=404)

    with pytest.raises(ImageFetchException) as exc_info:
        await image_service.get_resized_image(mock_http_client, "https://example.com/a.jpg", 4, 4)

    assert "404" in exc_info.value.message


@pytest.mark.asyncio
async def test_network_error(mock_http_client):
    """Test transport errors become ImageFetchException."""
    mock_http_client.get.side_effect = httpx.ConnectTimeout("timed out")

    with pytest.raises(ImageFetchException):
        await image_service.get_resized_image(mock_http_client, "https://example.com/a.jpg", 4, 4)


@pytest.mark.asyncio
async def test_corrupt_jpeg(mock_http_client):
    """Test bytes that are not an image fail to decode."""
    mock_http_client.get.return_value = image_response(b"definitely not a jpeg")

    with pytest.raises(ImageDecodeException):
        await image_service.get_resized_image(mock_http_client, "https://example.com/a.jpg", 4, 4)


@pytest.mark.asyncio
async def test_decompression_bomb_rejected(mock_http_client, monkeypatch):
    """Test images over Pillow's pixel limit fail as a decode error."""
    monkeypatch.setattr(image_service.Image, "MAX_IMAGE_PIXELS", 10)
    mock_http_client.get.return_value = image_response(jpeg_bytes(8, 8))

    with pytest.raises(ImageDecodeException):
        await image_service.get_resized_image(mock_http_client, "https://example.com/a.jpg", 4, 4)


@pytest.mark.asyncio
async def test_oversized_body_rejected_before_decoding(mock_http_client, monkeypatch):
    """Test a body over the byte limit is refused without decoding."""
    monkeypatch.setattr(image_service, "MAX_IMAGE_BYTES", 10)
    image_open = MagicMock()
    monkeypatch.setattr(image_service.Image, "open", image_open)
    mock_http_client.get.return_value = image_response(jpeg_bytes())

    with pytest.raises(ImageFetchException) as exc_info:
        await image_service.get_resized_image(mock_http_client, "https://example.com/a.jpg", 4, 4)

    assert exc_info.value.details["max_size"] == 10
    image_open.assert_not_called()


@pytest.mark.asyncio
async def test_resize_runs_off_the_event_loop(mock_http_client, monkeypatch):
    """Test decoding happens in a worker thread, not the event loop thread."""
    threads = []
    decode = image_service._decode_and_resize

    def recording_decode(content, width, height):
        threads.append(threading.current_thread())
        return decode(content, width, height)

    monkeypatch.setattr(image_service, "_decode_and_resize", recording_decode)
    mock_http_client.get.return_value = image_response(jpeg_bytes())

    pixels = await image_service.get_resized_image(mock_http_client, "https://example.com/a.jpg", 2, 2)

    assert len(pixels) == 2 * 2 * 3
    assert threads and threads[0] is not threading.current_thread()

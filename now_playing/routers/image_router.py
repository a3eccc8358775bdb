"""Image resizing route."""

import httpx
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from now_playing.config import Settings, get_settings
from now_playing.dependencies import get_http_client
from now_playing.exceptions import ImageException
from now_playing.models import ErrorResponse
from now_playing.services import image_service

router = APIRouter()


@router.get(
    "/get_resized_image",
    summary="Resize a remote JPEG",
    description="""
    Downloads a JPEG and returns `width * height * 3` bytes of raw RGB pixels
    (nearest-neighbour resize, no image header).
    """,
    response_class=Response,
    responses={
        200: {"content": {"application/octet-stream": {}}, "description": "Raw RGB pixels"},
        500: {"model": ErrorResponse, "description": "Download, content type or decode failure"},
    },
)
async def get_resized_image(
    image_url: str = Query(pattern=r"^https?://", description="JPEG to download"),
    width: int = Query(ge=1, description="Output width in pixels"),
    height: int = Query(ge=1, description="Output height in pixels"),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Fetch and resize an image."""
    if max(width, height) > settings.image_max_dimension:
        raise ImageException(
            f"Requested size {width}x{height} exceeds {settings.image_max_dimension}px",
            status_code=422,
        )

    pixels = await image_service.get_resized_image(client, image_url, width, height)
    return Response(
        content=pixels,
        media_type="application/octet-stream",
        headers={"X-Image-Width": str(width), "X-Image-Height": str(height)},
    )

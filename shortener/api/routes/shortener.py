"""URL shortening and information endpoints."""

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse

from shortener.api import schemas
from shortener.api.dependencies import get_base_url, get_shortener_service
from shortener.services.exceptions import ShortenRejectedError, URLNotFoundError
from shortener.services.shortener import ShortenedURLService

router = APIRouter(tags=["shortener"])


@router.post(
    "/shorten",
    response_model=schemas.ShortenResponse,
    status_code=status.HTTP_200_OK,
    responses={
        200: {
            "description": "The shortened URL, or an error payload for a rejected request",
            "model": schemas.ShortenResponse,
        },
    }
)
async def create_short_url(
    payload: schemas.ShortenRequest,
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
    base_url: str = Depends(get_base_url)
):
    """
    Shorten a URL, optionally under a caller-chosen code.

    Rejections (missing or malformed URL, malformed or taken custom code)
    are answered with status 200 and an ``error`` field.
    """
    try:
        short_code = await shortener_service.shorten(
            original_url=payload.url,
            custom_code=payload.custom_code,
        )
    except ShortenRejectedError as e:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"error": e.message},
        )

    return schemas.ShortenResponse(
        shortened_url=f"{base_url}/{short_code}",
        original_url=payload.url,
    )


@router.get(
    "/info/{short_code}",
    response_model=schemas.URLInfoResponse,
    responses={
        404: {"model": schemas.ErrorResponse, "description": "URL not found"},
    }
)
async def get_url_info(
    short_code: str = Path(..., description="The short code of the URL"),
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    try:
        url_info = await shortener_service.get_url_info(short_code)
    except URLNotFoundError as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": e.message},
        )
    return schemas.URLInfoResponse(**url_info)

"""URL redirection and deletion endpoints at the root path."""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse, RedirectResponse

from shortener.api import schemas
from shortener.api.dependencies import get_shortener_service
from shortener.services.exceptions import URLNotFoundError
from shortener.services.shortener import ShortenedURLService

FAVICON_PATH = "favicon.ico"

# Create router with tags
router = APIRouter(tags=["redirect"])


@router.get(
    "/{short_code}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={
        404: {"model": schemas.ErrorResponse, "description": "URL not found"},
    }
)
async def redirect_to_original_url(
    short_code: str,
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    """Redirect to the original URL."""
    # Browsers ask for this on every page load; it is never a short code lookup
    if short_code == FAVICON_PATH:
        return Response(status_code=status.HTTP_200_OK)

    try:
        record = await shortener_service.resolve(short_code)
    except URLNotFoundError as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": e.message},
        )

    return RedirectResponse(url=record.original_url, status_code=status.HTTP_302_FOUND)


@router.delete(
    "/{short_code}",
    status_code=status.HTTP_200_OK,
    response_class=Response,
)
async def delete_short_url(
    short_code: str,
    shortener_service: ShortenedURLService = Depends(get_shortener_service),
):
    """Delete a shortened URL. Deleting an unknown code also answers 200."""
    await shortener_service.delete(short_code)
    return Response(status_code=status.HTTP_200_OK)

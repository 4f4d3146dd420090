"""Browser redirect routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from tinyurl.common.url_builder import REDIRECT_PREFIX
from tinyurl.service import URLShortenerService
from ..dependencies import get_service

router = APIRouter()


@router.get(f"/{REDIRECT_PREFIX}/{{short_code}}", include_in_schema=False)
async def redirect_to_url(short_code: str, service: URLShortenerService = Depends(get_service)):
    """Redirect to the original URL.

    Browsers cannot attach the client id header when following a link, so
    this route is public like resolution itself.
    """
    # Resolving also counts the click
    resolved = await service.resolve(short_code)

    if resolved is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short code '{short_code}' not found",
        )

    # Temporary redirect so every visit reaches us and is counted
    return RedirectResponse(url=resolved["long_url"], status_code=status.HTTP_302_FOUND)

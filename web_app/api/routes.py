"""API routes implementation."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from datetime import datetime, timezone
from typing import List

from .schemas import (
    ShortenRequest,
    CreateUrlResponse,
    ResolveUrlResponse,
    UrlStatsResponse,
    UrlListItemResponse,
    HealthResponse,
    ErrorResponse,
)
from tinyurl.errors import ShortenerError
from tinyurl.service import URLShortenerService
from ..dependencies import get_service, require_owner_id, request_base_url

router = APIRouter()

_UNAUTHORIZED = {401: {"model": ErrorResponse, "description": "Missing or invalid client id header"}}


@router.post(
    "/urls",
    response_model=CreateUrlResponse,
    responses={
        **_UNAUTHORIZED,
        400: {"model": ErrorResponse, "description": "Invalid request or short code conflict"},
    },
    summary="Create short URL",
    description=(
        "Shorten a URL for the calling client. Submitting the same long URL again "
        "returns the existing short code. Optionally provide a custom short code."
    ),
)
async def create_url(
    body: ShortenRequest,
    owner_id: str = Depends(require_owner_id),
    base_url: str = Depends(request_base_url),
    service: URLShortenerService = Depends(get_service),
):
    """Create a shortened URL."""
    try:
        result = await service.create_short_url(
            owner_id=owner_id,
            long_url=body.long_url,
            custom_code=body.custom_short_code,
            base_url=base_url,
        )
    except ShortenerError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return CreateUrlResponse(**result)


@router.get(
    "/urls",
    response_model=List[UrlListItemResponse],
    responses=_UNAUTHORIZED,
    summary="List short URLs",
    description="List the calling client's short URLs, newest first.",
)
async def list_urls(
    owner_id: str = Depends(require_owner_id),
    base_url: str = Depends(request_base_url),
    service: URLShortenerService = Depends(get_service),
):
    """List the caller's short URLs."""
    items = await service.list_urls(owner_id, base_url=base_url)
    return [UrlListItemResponse(**item) for item in items]


@router.get(
    "/urls/{short_code}/stats",
    response_model=UrlStatsResponse,
    responses={
        **_UNAUTHORIZED,
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get URL statistics",
    description="Click statistics for a short code. Readable by any client.",
)
async def get_stats(
    short_code: str,
    owner_id: str = Depends(require_owner_id),
    service: URLShortenerService = Depends(get_service),
):
    """Get statistics for a short code."""
    stats = await service.get_stats(owner_id, short_code)

    if stats is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short code '{short_code}' not found",
        )

    return UrlStatsResponse(**stats)


@router.get(
    "/urls/{short_code}",
    response_model=ResolveUrlResponse,
    responses={
        **_UNAUTHORIZED,
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Resolve short URL",
    description="Return the long URL for a short code and count a click.",
)
async def resolve_url(
    short_code: str,
    owner_id: str = Depends(require_owner_id),
    service: URLShortenerService = Depends(get_service),
):
    """Resolve a short code."""
    resolved = await service.resolve(short_code)

    if resolved is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short code '{short_code}' not found",
        )

    return ResolveUrlResponse(**resolved)


@router.delete(
    "/urls/{short_code}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        **_UNAUTHORIZED,
        404: {"model": ErrorResponse, "description": "Short code not found or not owned"},
    },
    summary="Delete short URL",
    description="Delete a short URL created by the calling client.",
)
async def delete_url(
    short_code: str,
    owner_id: str = Depends(require_owner_id),
    service: URLShortenerService = Depends(get_service),
):
    """Delete a short URL."""
    deleted = await service.delete_short_url(owner_id, short_code)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Short code '{short_code}' not found",
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(service: URLShortenerService = Depends(get_service)):
    """Health check endpoint for load balancers and monitoring."""
    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        store="healthy" if health["store"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )

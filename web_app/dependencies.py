"""Request-scoped helpers shared by the API and web routes."""

from fastapi import Request, HTTPException, status

from tinyurl.service import URLShortenerService
from tinyurl.common.headers import build_base_url


def get_service(request: Request) -> URLShortenerService:
    """Service instance stored on the application."""
    return request.app.state.service


def require_owner_id(request: Request) -> str:
    """Owner id parsed by ClientIdentityMiddleware.

    Raises:
        HTTPException: 401 when the identity header is missing or invalid
    """
    owner_id = getattr(request.state, "client_id", None)
    if not owner_id:
        config = request.app.state.config
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing or invalid {config.client_id_header} header",
        )
    return owner_id


def request_base_url(request: Request) -> str:
    """Public base URL of this request, honouring proxy headers."""
    config = request.app.state.config
    return build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )

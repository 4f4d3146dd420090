"""Header parsing utilities for the TinyURL service."""

from typing import Dict, Mapping, Optional

from .validators import MAX_OWNER_ID_LENGTH, is_valid_owner_id

CLIENT_ID_HEADER = "X-Client-Id"


def extract_forwarded_headers(headers: Dict[str, str]) -> Dict[str, Optional[str]]:
    """Extract X-Forwarded-* headers from request.

    Args:
        headers: Request headers dictionary

    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_for
    """
    # Convert headers to lowercase for case-insensitive lookup
    headers_lower = {k.lower(): v for k, v in headers.items()}

    return {
        "forwarded_proto": headers_lower.get("x-forwarded-proto"),
        "forwarded_host": headers_lower.get("x-forwarded-host"),
        "forwarded_for": headers_lower.get("x-forwarded-for"),
    }


def build_base_url(
    headers: Dict[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build base URL from headers or fallback.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host
    2. Request scheme + host
    3. Fallback base URL from config

    Args:
        headers: Request headers
        fallback_base_url: Fallback base URL from configuration
        request_scheme: Request scheme (http/https)
        request_host: Request host

    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    forwarded = extract_forwarded_headers(headers)

    # Try X-Forwarded headers first (from proxy)
    if forwarded["forwarded_proto"] and forwarded["forwarded_host"]:
        proto = forwarded["forwarded_proto"]
        host = forwarded["forwarded_host"]
        return f"{proto}://{host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def extract_client_ip(headers: Dict[str, str], peer_host: Optional[str] = None) -> str:
    """Best-effort client address for logging.

    Uses the first hop of X-Forwarded-For when a proxy set it, otherwise the
    socket peer.
    """
    forwarded_for = extract_forwarded_headers(headers)["forwarded_for"]
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    return peer_host or "unknown"


def parse_client_id(
    headers: Mapping[str, str],
    header_name: str = CLIENT_ID_HEADER,
    max_length: int = MAX_OWNER_ID_LENGTH,
) -> Optional[str]:
    """Read the anonymous owner identifier from request headers.

    The value is trimmed. Missing, blank or over-long values yield None.

    Args:
        headers: Request headers
        header_name: Name of the identity header
        max_length: Maximum identifier length

    Returns:
        The owner id, or None if absent or invalid
    """
    wanted = header_name.lower()
    for k, v in headers.items():
        if k.lower() == wanted:
            owner_id = (v or "").strip()
            is_valid, _ = is_valid_owner_id(owner_id, max_length=max_length)
            return owner_id if is_valid else None
    return None

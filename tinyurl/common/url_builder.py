"""URL building utilities for the TinyURL service."""

REDIRECT_PREFIX = "r"


def build_short_url(
    short_code: str,
    base_url: str,
    path_prefix: str = REDIRECT_PREFIX,
) -> str:
    """Build complete short URL.

    Args:
        short_code: The short code
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Redirect path prefix (defaults to 'r', giving /r/{code})

    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{short_code}"
    return f"{base}/{short_code}"

"""Validation utilities for the TinyURL service."""

import re
from urllib.parse import urlparse
from typing import Tuple

MAX_URL_LENGTH = 2048
MAX_OWNER_ID_LENGTH = 64

CUSTOM_CODE_PATTERN = re.compile(r'[A-Za-z0-9_-]{4,32}')


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a long URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str) or not url.strip():
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)
        # Accessing port validates it as a side effect
        result.port
    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"

    if result.scheme not in ("http", "https"):
        return False, "URL must be an absolute http or https URL"

    if not result.hostname:
        return False, "URL must have a valid host"

    return True, ""


def is_valid_short_code(short_code: str) -> Tuple[bool, str]:
    """Validate a custom short code.

    Args:
        short_code: The short code to validate (already trimmed)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(short_code, str) or not CUSTOM_CODE_PATTERN.fullmatch(short_code):
        return False, "Custom short code must be 4-32 chars: letters, digits, underscore, hyphen"
    return True, ""


def is_valid_owner_id(owner_id: str, max_length: int = MAX_OWNER_ID_LENGTH) -> Tuple[bool, str]:
    """Validate an owner (client) identifier.

    Args:
        owner_id: The identifier, already trimmed
        max_length: Maximum allowed length

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not owner_id or not isinstance(owner_id, str) or not owner_id.strip():
        return False, "Owner id is required"

    if len(owner_id) > max_length:
        return False, f"Owner id must be at most {max_length} characters"

    return True, ""

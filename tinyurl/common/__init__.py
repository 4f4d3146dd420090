"""Common utilities for the TinyURL service."""

from .validators import is_valid_url, is_valid_short_code, is_valid_owner_id
from .headers import extract_forwarded_headers, build_base_url, parse_client_id, extract_client_ip
from .url_builder import build_short_url
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "is_valid_short_code",
    "is_valid_owner_id",
    "extract_forwarded_headers",
    "build_base_url",
    "parse_client_id",
    "extract_client_ip",
    "build_short_url",
    "setup_logging",
]

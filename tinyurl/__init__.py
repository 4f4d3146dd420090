"""Core business logic for the TinyURL service."""

from .shortcode import ShortCodeGenerator
from .service import URLShortenerService
from .errors import ShortenerError, InvalidInputError, ConflictError, ExhaustedError

__all__ = [
    "ShortCodeGenerator",
    "URLShortenerService",
    "ShortenerError",
    "InvalidInputError",
    "ConflictError",
    "ExhaustedError",
]

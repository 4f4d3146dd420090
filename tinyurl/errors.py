"""Service-level errors for the TinyURL service."""


class ShortenerError(ValueError):
    """Base class for errors surfaced to callers of the shortening service."""


class InvalidInputError(ShortenerError):
    """Malformed owner id, long URL or custom short code."""


class ConflictError(ShortenerError):
    """Custom short code already taken, or lost an insertion race."""


class ExhaustedError(ShortenerError):
    """Random code generation hit its retry ceiling."""

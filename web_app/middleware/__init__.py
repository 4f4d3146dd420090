"""Middleware for the TinyURL web app."""

from .headers import ClientIdentityMiddleware
from .logging import LoggingMiddleware
from .errors import ErrorHandlingMiddleware

__all__ = ["ClientIdentityMiddleware", "LoggingMiddleware", "ErrorHandlingMiddleware"]

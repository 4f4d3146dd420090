"""Client identity middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from tinyurl.common.headers import parse_client_id, CLIENT_ID_HEADER
from tinyurl.common.validators import MAX_OWNER_ID_LENGTH


class ClientIdentityMiddleware(BaseHTTPMiddleware):
    """Store the anonymous owner id on request state.

    ``request.state.client_id`` is the trimmed header value, or None when the
    header is missing, blank or too long. Routes decide whether that is fatal.
    """

    def __init__(
        self,
        app,
        header_name: str = CLIENT_ID_HEADER,
        max_length: int = MAX_OWNER_ID_LENGTH,
    ):
        super().__init__(app)
        self.header_name = header_name
        self.max_length = max_length

    async def dispatch(self, request: Request, call_next: Callable):
        """Process request and extract identity headers."""
        request.state.client_id = parse_client_id(
            request.headers,
            header_name=self.header_name,
            max_length=self.max_length,
        )
        return await call_next(request)

"""Last-resort error handling middleware."""

import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from typing import Callable, Optional

from tinyurl.common.logging_config import get_logger

UNEXPECTED_ERROR_MESSAGE = "Unexpected error"


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Turn any unhandled exception into an opaque 500 JSON response.

    The traceback is logged server side; clients only see a generic message.
    """

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        try:
            return await call_next(request)
        except Exception:
            self.logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            return JSONResponse(
                status_code=500,
                content={"error": UNEXPECTED_ERROR_MESSAGE},
            )

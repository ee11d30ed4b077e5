"""Request logging middleware — one log line per request with status and duration."""


import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("member_query.access")

class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs method, path, query string, status code and duration of every request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000)

        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "%s %s → %s (%dms)",
            request.method, path, response.status_code, duration_ms,
        )
        return response

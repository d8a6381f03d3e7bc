"""Request logging middleware.

Logs method, path, status code and duration for every request. File names and
document contents are never logged here.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("audit")


class AuditMiddleware(BaseHTTPMiddleware):
    """Log every request for operations and debugging."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        duration_ms = round((time.time() - start_time) * 1000, 1)

        client = request.client.host if request.client else "unknown"
        logger.info(
            "client=%s method=%s path=%s status=%d duration_ms=%.1f",
            client,
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )

        return response

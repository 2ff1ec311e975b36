"""
Product API: Request Logging Middleware
=========================================

What:  Access log line for every HTTP request.
How:   One INFO-or-higher line per request with method, path, status and
       duration. A request whose handler raised an unclassified exception is
       logged as status 500 before the exception continues to the catch-all
       handler. The timestamp comes from the log formatter configured in
       main.setup_logging().
When:  Runs after RequestIDMiddleware and before authentication, so requests
       rejected with 401/403 are logged too.

What we log vs what we DON'T log:
    ✅ Log: method, path, status, duration, client IP, request ID
    ❌ Don't log: request bodies, query strings, Authorization header, bearer tokens
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import current_request_id

logger = logging.getLogger("product_api.access")


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, anything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request and its outcome on the product_api.access logger."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log_access(request, 500, start_time)
            raise
        self._log_access(request, response.status_code, start_time)
        return response

    @staticmethod
    def _log_access(request: Request, status: int, start_time: float) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = current_request_id()
        client_ip = request.client.host if request.client else "unknown"

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

"""
Product API: Request ID Middleware
====================================

What:  Tags each incoming request with a short correlation id.
How:   Reuses a well-formed inbound X-Request-ID header or generates one,
       binds it to a ContextVar read by every log call, and echoes it on
       the response.
When:  Outermost interceptor, so every log line of a request (including
       rejected ones) carries the same id.

Inbound ids longer than MAX_REQUEST_ID_LENGTH or containing characters
outside [A-Za-z0-9._-] are replaced with a generated one, so a client
cannot inject arbitrary text into the logs.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64

_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]+")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def current_request_id() -> str:
    """Correlation id of the request being handled, or "" outside a request."""
    return request_id_var.get()


def resolve_request_id(inbound: Optional[str]) -> str:
    """Keep a client-supplied id when it is safe to log, else mint an 8-char one."""
    if inbound and len(inbound) <= MAX_REQUEST_ID_LENGTH and _REQUEST_ID_PATTERN.fullmatch(inbound):
        return inbound
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a request id and returns it in the X-Request-ID header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        # Not reset afterwards: the catch-all 500 handler runs outside this
        # middleware and still logs the id.
        request_id_var.set(rid)

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response

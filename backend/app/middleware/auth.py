"""
Product API: Bearer Token Authentication Middleware
=====================================================

What:  Rejects every request that does not carry the configured API key.
How:   Parses "Authorization: Bearer <token>" and compares the token with
       the shared secret in constant time.
When:  Innermost global interceptor: after request id and logging, before
       routing. It applies to every path, including "/" and unknown routes.

Outcomes:
    header absent, wrong scheme, empty token,
    anything after the token                  → 401 Unauthorized
    token != API_KEY (or no API_KEY set)      → 403 Forbidden
    token == API_KEY                          → request passes through unchanged

Failures are rendered with app.exceptions.error_response(), the same
translation the route-level exception handlers use. Exceptions raised inside
a BaseHTTPMiddleware do not reach FastAPI's exception handlers, so the
response is built here.
"""

import logging
import secrets
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.exceptions import ForbiddenError, ProductAPIError, UnauthorizedError, error_response
from app.middleware.request_id import current_request_id

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


def parse_bearer_token(header: Optional[str]) -> Optional[str]:
    """
    Extract the token from an Authorization header value.

    Returns None unless the header is exactly the scheme and one token,
    e.g. "Bearer abc" parses but "Bearer abc def" does not.
    """
    if not header:
        return None
    parts = header.split()
    if len(parts) != 2 or parts[0] != BEARER_SCHEME:
        return None
    return parts[1]


def authenticate(header: Optional[str], api_key: str) -> None:
    """
    Check an Authorization header against the configured API key.

    Raises:
        UnauthorizedError: header absent or malformed
        ForbiddenError: token does not match, or no API key is configured
    """
    token = parse_bearer_token(header)
    if token is None:
        raise UnauthorizedError()
    if not api_key or not secrets.compare_digest(token.encode(), api_key.encode()):
        raise ForbiddenError()


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Shared-secret bearer authentication for the whole application.

    Configuration:
        api_key: expected bearer token (settings.api_key by default)
    """

    def __init__(self, app, api_key: str = "", **kwargs):
        super().__init__(app, **kwargs)
        self.api_key = api_key

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            authenticate(request.headers.get("Authorization"), self.api_key)
        except ProductAPIError as exc:
            logger.warning(
                "[%s] Authentication failed for %s %s: %s",
                current_request_id(),
                request.method,
                request.url.path,
                exc.message,
            )
            return error_response(exc)

        return await call_next(request)

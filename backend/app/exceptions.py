"""
Product API: Error Taxonomy
=============================

What:  Application-specific failures and their translation to HTTP responses.
How:   Every failure is a ProductAPIError carrying an ErrorKind discriminant,
       a client-safe message and an optional server-side context dict.
       error_response() is the single place where a kind becomes a status
       code and a JSON envelope. It is used by the exception handlers
       registered in main.py and by the authentication middleware, which
       runs outside FastAPI's exception handling.
Who:   Raised by services, route dependencies and middleware.

Error Kinds:
    ErrorKind.VALIDATION    → 400 Bad Request
    ErrorKind.UNAUTHORIZED  → 401 Unauthorized
    ErrorKind.FORBIDDEN     → 403 Forbidden
    ErrorKind.NOT_FOUND     → 404 Not Found
    ErrorKind.INTERNAL      → 500 Internal Server Error

Envelope:
    {"message": "Product not found"}
    {"message": "Invalid product data: price", "details": {"fields": ["price"]}}
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from starlette.responses import JSONResponse


class ErrorKind(str, Enum):
    """Discriminant of a classified failure."""

    VALIDATION = "validation_error"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    INTERNAL = "internal_server_error"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}

# Returned for every unclassified failure; the real cause stays in the logs
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class ProductAPIError(Exception):
    """
    Base exception for all Product API errors.

    Attributes:
        kind:     ErrorKind discriminant, fixed per subclass
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str = INTERNAL_ERROR_MESSAGE,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = dict(context or {})
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class ValidationError(ProductAPIError):
    """
    Raised when the request body or query string fails validation.

    HTTP: 400 Bad Request. The offending field names are returned to the
    client under details.fields so it can correct the request.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Invalid data",
        fields: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.fields = list(fields or [])
        ctx = dict(context or {})
        if self.fields:
            ctx["fields"] = self.fields
        super().__init__(message=message, context=ctx)


class NotFoundError(ProductAPIError):
    """Raised when a product with the requested ID does not exist. HTTP 404."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource: str = "product",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource.capitalize()} not found", context=ctx)


class UnauthorizedError(ProductAPIError):
    """Authorization header absent or not of the form "Bearer <token>". HTTP 401."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(
        self,
        message: str = "Missing or invalid Authorization header",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(ProductAPIError):
    """Bearer token present but not equal to the configured API key. HTTP 403."""

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        message: str = "Forbidden: Invalid API token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def error_response(exc: ProductAPIError) -> JSONResponse:
    """
    Translate a classified failure into its JSON envelope.

    Internal errors never expose their message; context is never returned.
    """
    if exc.kind is ErrorKind.INTERNAL:
        content: Dict[str, Any] = {"message": INTERNAL_ERROR_MESSAGE}
    else:
        content = {"message": exc.message}
    if isinstance(exc, ValidationError) and exc.fields:
        content["details"] = {"fields": exc.fields}
    return JSONResponse(status_code=exc.status_code, content=content)

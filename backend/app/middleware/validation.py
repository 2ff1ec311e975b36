"""
Product API: Product Payload Validator
========================================

What:  Checks create/update request bodies against ProductPayload.
How:   A FastAPI dependency attached only to POST and PUT product routes.
       It parses the JSON body, validates it field by field, and raises
       ValidationError naming every offending field. The body itself is
       never modified.
When:  Resolved before the route handler runs, so an invalid body yields
       400 even when the target product does not exist.
"""

import logging
from typing import List

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from app.exceptions import ValidationError
from app.schemas.product import ProductPayload

logger = logging.getLogger(__name__)

INVALID_PRODUCT_MESSAGE = "Invalid product data. Check all fields"


def offending_fields(exc: PydanticValidationError) -> List[str]:
    """Field names (wire aliases) reported by a pydantic validation error, in order."""
    fields: List[str] = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = str(loc[0]) if loc else "body"
        if field not in fields:
            fields.append(field)
    return fields


async def validate_product_payload(request: Request) -> ProductPayload:
    """
    FastAPI dependency returning the validated product payload.

    Raises:
        ValidationError: body is not JSON, not an object, or has missing or
                         mistyped fields
    """
    try:
        body = await request.json()
    except ValueError:
        # JSONDecodeError, UnicodeDecodeError, or an int literal past the
        # interpreter's digit limit
        raise ValidationError(
            message="Request body must be valid JSON",
            fields=["body"],
        )

    if not isinstance(body, dict):
        raise ValidationError(
            message="Request body must be a JSON object",
            fields=["body"],
        )

    try:
        return ProductPayload.model_validate(body)
    except PydanticValidationError as exc:
        fields = offending_fields(exc)
        logger.debug("Rejected product payload, offending fields: %s", fields)
        raise ValidationError(
            message=f"{INVALID_PRODUCT_MESSAGE}: {', '.join(fields)}",
            fields=fields,
        )

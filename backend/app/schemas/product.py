"""
Product API: Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the API contract for product records.
How:   The validator dependency checks request bodies against ProductPayload;
       FastAPI serializes responses through Product and ProductListResponse
       using the camelCase wire names (inStock).

Field rules for ProductPayload:
    name, description, category   strings only
    price                         int or float, returned exactly as sent;
                                  booleans, numeric strings, non-finite
                                  values and ints beyond float range are
                                  rejected
    inStock                       JSON true/false only
"""

import math
from typing import Any, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)


# ══════════════════════════════════════════════════════════════════════════
# Request Models: What the client sends
# ══════════════════════════════════════════════════════════════════════════


class ProductPayload(BaseModel):
    """
    What:  Body of POST /api/products and PUT /api/products/{id}.
    Who:   Built by app.middleware.validation.validate_product_payload.

    Unknown keys (including a client-supplied "id") are ignored; the store
    owns identifiers.
    """

    model_config = ConfigDict(extra="ignore")

    name: StrictStr = Field(description="Display name")
    description: StrictStr = Field(description="Free-text description")
    price: Union[StrictInt, StrictFloat] = Field(description="Unit price, integers kept as sent")
    category: StrictStr = Field(description="Category name, matched case-insensitively")
    in_stock: StrictBool = Field(alias="inStock", description="Availability flag")

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v: Any) -> Any:
        """Accepts JSON numbers only (bool is an int subclass in Python)."""
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("price must be a number")
        try:
            finite = math.isfinite(v)
        except OverflowError:
            # int beyond float range
            finite = False
        if not finite:
            raise ValueError("price must be a finite number")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models: What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class Product(ProductPayload):
    """A stored product record: the validated payload plus its store-assigned id."""

    id: str = Field(description="Unique product identifier, immutable after creation")

    @classmethod
    def from_payload(cls, product_id: str, payload: ProductPayload) -> "Product":
        return cls.model_validate({"id": product_id, **payload.model_dump(by_alias=True)})


class ProductListResponse(BaseModel):
    """
    What:  Page of products returned by GET /api/products.

    total counts the filtered collection, not the page.
    """

    total: int = Field(description="Number of products matching the filter")
    page: int = Field(description="1-based page number")
    limit: int = Field(description="Page size")
    products: List[Product] = Field(description="Products on this page")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """Standardized error envelope, documented on routes via `responses=`."""

    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Offending fields for validation errors")

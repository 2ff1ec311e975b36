"""
Product API: Product Route Handlers
=====================================

What:  CRUD, search and statistics endpoints under /api/products.
How:   Extracts query/path parameters, resolves the store and (for POST/PUT)
       the validated payload through dependencies, and delegates to
       ProductService. Errors are raised, never written here.

Route Inventory (registration order matters):
    GET    /api/products              list with category filter and pagination
    GET    /api/products/search       name substring search
    GET    /api/products/stats        count per category
    GET    /api/products/{product_id} single product
    POST   /api/products              create
    PUT    /api/products/{product_id} full replace
    DELETE /api/products/{product_id} delete

    /search and /stats are declared before /{product_id}; otherwise
    "search" and "stats" would be matched as product ids.
"""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response

from app.middleware.validation import validate_product_payload
from app.schemas.product import ErrorResponse, Product, ProductListResponse, ProductPayload
from app.services.product_service import product_service
from app.store import ProductStore, get_store

logger = logging.getLogger(__name__)

MAX_PAGE_LIMIT = 100

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(
    prefix="/api/products",
    tags=["Products"],
    responses={
        401: {"description": "Missing or malformed bearer token", "model": ErrorResponse},
        403: {"description": "Invalid API token", "model": ErrorResponse},
    },
)


@router.get(
    "",
    response_model=ProductListResponse,
    responses={400: {"description": "Invalid page or limit", "model": ErrorResponse}},
    summary="List products with filtering and pagination",
)
async def list_products(
    category: Optional[str] = Query(
        default=None,
        description="Only include products in this category (case-insensitive)",
    ),
    page: int = Query(default=1, ge=1, description="1-based page number"),
    limit: int = Query(
        default=10, ge=1, le=MAX_PAGE_LIMIT, description=f"Items per page (max {MAX_PAGE_LIMIT})"
    ),
    store: ProductStore = Depends(get_store),
) -> ProductListResponse:
    """
    List products.

    Example:
        GET /api/products?category=electronics&page=1&limit=2
        → {"total": 2, "page": 1, "limit": 2, "products": [...]}
    """
    return product_service.list_products(store, category=category, page=page, limit=limit)


@router.get(
    "/search",
    response_model=List[Product],
    responses={400: {"description": "Missing search query", "model": ErrorResponse}},
    summary="Search products by name",
)
async def search_products(
    name: Optional[str] = Query(default=None, description="Case-insensitive substring of the name"),
    store: ProductStore = Depends(get_store),
) -> List[Product]:
    return product_service.search_products(store, name)


@router.get(
    "/stats",
    response_model=Dict[str, int],
    summary="Product count by category",
)
async def product_stats(store: ProductStore = Depends(get_store)) -> Dict[str, int]:
    return product_service.category_stats(store)


@router.get(
    "/{product_id}",
    response_model=Product,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Get a single product by ID",
)
async def get_product(product_id: str, store: ProductStore = Depends(get_store)) -> Product:
    return product_service.get_product(store, product_id)


@router.post(
    "",
    status_code=201,
    response_model=Product,
    responses={400: {"description": "Invalid product data", "model": ErrorResponse}},
    summary="Create a product",
)
async def create_product(
    payload: ProductPayload = Depends(validate_product_payload),
    store: ProductStore = Depends(get_store),
) -> Product:
    """
    Create a product from a validated body.

    The id is generated by the store; an id sent by the client is ignored.
    """
    return product_service.create_product(store, payload)


@router.put(
    "/{product_id}",
    response_model=Product,
    responses={
        400: {"description": "Invalid product data", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
    },
    summary="Replace a product",
)
async def replace_product(
    product_id: str,
    payload: ProductPayload = Depends(validate_product_payload),
    store: ProductStore = Depends(get_store),
) -> Product:
    """Full replace: every field comes from the body, the id is kept."""
    return product_service.replace_product(store, product_id, payload)


@router.delete(
    "/{product_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Delete a product",
)
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)) -> Response:
    product_service.delete_product(store, product_id)
    return Response(status_code=204)

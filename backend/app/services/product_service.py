"""
Product API: Product Service (Business Logic)
===============================================

What:  Query and mutation logic over the product store.
How:   Stateless methods that receive the ProductStore for each call and
       raise application exceptions (NotFoundError, ValidationError) for
       the global handlers to translate.
Who:   Called by the route handlers in app.routes.products.

Operations:
    list_products()   category filter + page/limit slicing
    search_products() case-insensitive substring match on name
    category_stats()  record count per category
    get_product()     exact id lookup
    create_product()  assign id and append
    replace_product() full replace, id preserved
    delete_product()  remove by id
"""

import logging
from typing import Dict, List, Optional

from app.exceptions import NotFoundError, ValidationError
from app.schemas.product import Product, ProductListResponse, ProductPayload
from app.store import ProductStore

logger = logging.getLogger(__name__)


class ProductService:
    """
    Business logic layer for product operations.

    NotFoundError is raised for unknown ids; the store is never modified
    when an operation fails.
    """

    def list_products(
        self,
        store: ProductStore,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> ProductListResponse:
        """
        Return one page of products, optionally filtered by category.

        Pagination:
            start = (page - 1) * limit, end = start + limit
            The page is the half-open slice [start, end) of the filtered list.
            A page past the end is empty, not an error.

        Args:
            store: Product store of the running application
            category: Case-insensitive exact match; empty or None disables the filter
            page: 1-based page number
            limit: Page size

        Raises:
            ValidationError: page < 1 or limit < 1
        """
        invalid = [name for name, value in (("page", page), ("limit", limit)) if value < 1]
        if invalid:
            raise ValidationError(
                message=f"Invalid pagination parameters: {', '.join(invalid)}",
                fields=invalid,
            )

        products = store.all()
        if category:
            wanted = category.lower()
            products = [p for p in products if p.category.lower() == wanted]

        start = (page - 1) * limit
        end = start + limit

        return ProductListResponse(
            total=len(products),
            page=page,
            limit=limit,
            products=products[start:end],
        )

    def search_products(self, store: ProductStore, name: Optional[str]) -> List[Product]:
        """Products whose name contains `name`, ignoring case."""
        if not name:
            raise ValidationError(message="Missing search query", fields=["name"])
        term = name.lower()
        return [p for p in store.all() if term in p.name.lower()]

    def category_stats(self, store: ProductStore) -> Dict[str, int]:
        """Count of products per category, keyed by the stored category name."""
        stats: Dict[str, int] = {}
        for product in store.all():
            stats[product.category] = stats.get(product.category, 0) + 1
        return stats

    def get_product(self, store: ProductStore, product_id: str) -> Product:
        product = store.get(product_id)
        if product is None:
            raise NotFoundError(resource="product", resource_id=product_id)
        return product

    def create_product(self, store: ProductStore, payload: ProductPayload) -> Product:
        product = Product.from_payload(store.new_id(), payload)
        store.add(product)
        logger.info("Product created: %s (%s)", product.id, product.name)
        return product

    def replace_product(
        self, store: ProductStore, product_id: str, payload: ProductPayload
    ) -> Product:
        """Replace every field of an existing product; the id is kept."""
        product = Product.from_payload(product_id, payload)
        if not store.replace(product):
            raise NotFoundError(resource="product", resource_id=product_id)
        logger.info("Product replaced: %s", product_id)
        return product

    def delete_product(self, store: ProductStore, product_id: str) -> None:
        if not store.remove(product_id):
            raise NotFoundError(resource="product", resource_id=product_id)
        logger.info("Product deleted: %s", product_id)


# ── Singleton Instance ────────────────────────────────────────────────────
product_service = ProductService()

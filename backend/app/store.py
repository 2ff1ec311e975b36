"""
Product API: In-Memory Record Store
=====================================

What:  Owns the product collection for the lifetime of the application.
How:   An insertion-ordered dict keyed by product id, guarded by one lock.
       Replacing a record keeps its position; new records are appended.
Who:   Created by create_app() and attached to app.state; route handlers
       receive it through the get_store() dependency.

There is no persistence: the store is seeded on construction and resets
whenever the process restarts.
"""

import threading
import uuid
from typing import Dict, Iterable, List, Optional

from starlette.requests import Request

from app.schemas.product import Product


SEED_PRODUCTS: List[dict] = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    },
]


class ProductStore:
    """
    Ordered, id-keyed collection of Product records.

    Every read and write holds self._lock, so a lookup followed by a
    mutation is never interleaved with another writer.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self._lock = threading.Lock()
        self._products: Dict[str, Product] = {}
        for product in products:
            if product.id in self._products:
                raise ValueError(f"Duplicate product id '{product.id}'")
            self._products[product.id] = product

    @classmethod
    def seeded(cls) -> "ProductStore":
        """Store pre-populated with the fixed seed catalogue."""
        return cls(Product.model_validate(record) for record in SEED_PRODUCTS)

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        with self._lock:
            return product_id in self._products

    def all(self) -> List[Product]:
        """Snapshot of every record in insertion order."""
        with self._lock:
            return list(self._products.values())

    def get(self, product_id: str) -> Optional[Product]:
        with self._lock:
            return self._products.get(product_id)

    def new_id(self) -> str:
        """Random v4 UUID string not already used by a record."""
        with self._lock:
            while True:
                candidate = str(uuid.uuid4())
                if candidate not in self._products:
                    return candidate

    def add(self, product: Product) -> Product:
        with self._lock:
            if product.id in self._products:
                raise ValueError(f"Duplicate product id '{product.id}'")
            self._products[product.id] = product
        return product

    def replace(self, product: Product) -> bool:
        """Swap the record with the same id in place. False if it does not exist."""
        with self._lock:
            if product.id not in self._products:
                return False
            self._products[product.id] = product
            return True

    def remove(self, product_id: str) -> bool:
        with self._lock:
            return self._products.pop(product_id, None) is not None


def get_store(request: Request) -> ProductStore:
    """
    FastAPI dependency returning the store owned by the running application.

    Usage:
        @router.get("/products")
        async def list_products(store: ProductStore = Depends(get_store)):
            ...
    """
    return request.app.state.store

# Routes package init
"""
Product API: API Routes Package
=================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - root.py:      GET /                       (welcome message)
    - products.py:  GET    /api/products         (list, filter, paginate)
                    GET    /api/products/search  (name search)
                    GET    /api/products/stats   (count per category)
                    GET    /api/products/{id}    (single product)
                    POST   /api/products         (create)
                    PUT    /api/products/{id}    (replace)
                    DELETE /api/products/{id}    (delete)

Design Principle:
    Routes are THIN. They extract parameters, call ProductService and set
    status codes. Business logic lives in services.
"""

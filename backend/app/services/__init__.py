# Services package init
"""
Product API: Services Layer
=============================

What:  Business logic layer sitting between routes (HTTP) and the record store.
How:   Services receive the store for each call, apply business rules, and
       return schema objects or raise application exceptions.

Service Inventory:
    - ProductService: listing, search, statistics and CRUD over products
"""

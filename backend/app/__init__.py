"""
Product API: Application Package Initializer
==============================================

Architecture Note:

    ┌─────────────────────────────────────┐
    │   Middleware (request id, logging,  │  ← cross-cutting, every request
    │   authentication)                   │
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← filtering, pagination, CRUD rules
    ├─────────────────────────────────────┤
    │            Schemas (Data)           │  ← Pydantic models
    ├─────────────────────────────────────┤
    │       Store (In-Memory Records)     │  ← owned by the app instance
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

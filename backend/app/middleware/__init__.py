# Middleware package init
"""
Product API: Middleware Package
=================================

What:  Cross-cutting concerns applied before a request reaches a handler.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Authentication] → Route
                                                            └─ [Validator] (POST/PUT products only)

    1. Request ID: correlation id for every log line and the X-Request-ID header
    2. Logging: method, path, status and duration of every request
    3. Authentication: bearer token check, short-circuits with 401/403
    4. Validator: FastAPI dependency on create/update routes, raises 400

    Responses travel back through the same chain in reverse, so rejected
    requests are still logged and tagged with a request id.
"""

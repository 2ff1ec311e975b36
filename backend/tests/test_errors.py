"""
Product API: Error Classifier Tests
=====================================

What:  ErrorKind → status mapping, the JSON envelope, and the catch-all
       handler for unexpected exceptions.
"""

import logging
from unittest.mock import patch

import pytest

from app.exceptions import (
    ErrorKind,
    ForbiddenError,
    NotFoundError,
    ProductAPIError,
    UnauthorizedError,
    ValidationError,
    error_response,
)


class TestErrorResponse:
    """error_response() envelope and status codes."""

    @pytest.mark.parametrize(
        "exc,status",
        [
            (ValidationError("bad"), 400),
            (UnauthorizedError(), 401),
            (ForbiddenError(), 403),
            (NotFoundError(resource_id="7"), 404),
            (ProductAPIError("boom"), 500),
        ],
    )
    def test_status_codes(self, exc, status):
        assert exc.status_code == status
        assert error_response(exc).status_code == status

    def test_kind_status_mapping_is_complete(self):
        assert {kind.status_code for kind in ErrorKind} == {400, 401, 403, 404, 500}

    def test_envelope_is_message_only(self):
        response = error_response(NotFoundError(resource_id="7"))
        assert response.body == b'{"message":"Product not found"}'

    def test_validation_details_list_fields(self):
        response = error_response(ValidationError("Invalid", fields=["price", "inStock"]))
        assert b'"details":{"fields":["price","inStock"]}' in response.body

    def test_internal_message_not_leaked(self):
        response = error_response(ProductAPIError("secret table name", context={"sql": "SELECT"}))
        assert response.body == b'{"message":"Internal Server Error"}'

    def test_caller_context_not_mutated(self):
        context = {"query": "x"}
        NotFoundError(resource_id="7", context=context)
        ValidationError("bad", fields=["price"], context=context)
        assert context == {"query": "x"}

    def test_context_never_returned(self):
        response = error_response(NotFoundError(resource_id="abc"))
        assert b"abc" not in response.body


class TestErrorHandlersEndToEnd:
    """Failures raised while handling real requests."""

    @pytest.mark.asyncio
    async def test_unexpected_exception_returns_generic_500(self, test_client, auth_headers, caplog):
        with patch(
            "app.routes.products.product_service.category_stats",
            side_effect=RuntimeError("database password is hunter2"),
        ):
            with caplog.at_level(logging.ERROR, logger="app.main"):
                response = await test_client.get("/api/products/stats", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error"}
        assert "hunter2" not in response.text
        assert any("hunter2" in record.getMessage() for record in caplog.records)

    @pytest.mark.asyncio
    async def test_unknown_route_uses_envelope(self, test_client, auth_headers):
        response = await test_client.get("/api/unknown", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}

    @pytest.mark.asyncio
    async def test_method_not_allowed_uses_envelope(self, test_client, auth_headers):
        response = await test_client.patch("/api/products/1", headers=auth_headers)
        assert response.status_code == 405
        assert "message" in response.json()

    @pytest.mark.asyncio
    async def test_responses_carry_request_id(self, test_client, auth_headers):
        response = await test_client.get("/api/products/missing", headers=auth_headers)
        assert response.status_code == 404
        assert response.headers["X-Request-ID"]

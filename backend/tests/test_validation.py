"""
Product API: Payload Validation Tests
=======================================

What:  Tests for ProductPayload rules and the validator dependency on
       POST/PUT routes.

Test Strategy:
    ✅ Each field missing → 400 naming that field
    ✅ Mistyped fields (price as string, inStock as string, bool price) → 400
    ✅ Non-JSON and non-object bodies → 400
    ✅ Integer prices beyond float range → 400, smaller ints kept exactly
    ✅ Failed validation never changes the store
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.middleware.validation import offending_fields
from app.schemas.product import ProductPayload

VALID = {
    "name": "Kettle",
    "description": "1.7L electric kettle",
    "price": 25,
    "category": "kitchen",
    "inStock": False,
}


class TestProductPayloadSchema:
    """ProductPayload on its own."""

    def test_valid_payload(self):
        payload = ProductPayload.model_validate(VALID)
        assert payload.in_stock is False
        assert payload.price == 25

    def test_float_price_accepted(self):
        assert ProductPayload.model_validate({**VALID, "price": 19.99}).price == 19.99

    def test_int_price_stays_int(self):
        price = ProductPayload.model_validate({**VALID, "price": 1200}).price
        assert price == 1200
        assert isinstance(price, int)

    def test_int_beyond_float_range_rejected(self):
        with pytest.raises(PydanticValidationError) as exc_info:
            ProductPayload.model_validate({**VALID, "price": 10**400})
        assert offending_fields(exc_info.value) == ["price"]

    @pytest.mark.parametrize(
        "field,value",
        [
            ("price", "25"),
            ("price", True),
            ("price", None),
            ("price", float("inf")),
            ("name", 5),
            ("description", None),
            ("category", ["kitchen"]),
            ("inStock", "true"),
            ("inStock", 1),
        ],
    )
    def test_mistyped_field_rejected(self, field, value):
        with pytest.raises(PydanticValidationError) as exc_info:
            ProductPayload.model_validate({**VALID, field: value})
        assert offending_fields(exc_info.value) == [field]

    def test_all_missing_fields_reported(self):
        with pytest.raises(PydanticValidationError) as exc_info:
            ProductPayload.model_validate({"name": "Only a name"})
        assert offending_fields(exc_info.value) == ["description", "price", "category", "inStock"]

    def test_extra_keys_ignored(self):
        payload = ProductPayload.model_validate({**VALID, "id": "x", "color": "red"})
        assert "id" not in payload.model_dump()


class TestValidatorOnRoutes:
    """The validator dependency applied to create/update routes."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["name", "description", "price", "category", "inStock"])
    async def test_post_missing_field_returns_400(self, test_client, auth_headers, store, missing):
        body = {k: v for k, v in VALID.items() if k != missing}

        response = await test_client.post("/api/products", json=body, headers=auth_headers)

        assert response.status_code == 400
        data = response.json()
        assert data["message"].startswith("Invalid product data")
        assert data["details"] == {"fields": [missing]}
        assert len(store) == 3

    @pytest.mark.asyncio
    async def test_post_price_as_string_returns_400(self, test_client, auth_headers, store):
        response = await test_client.post(
            "/api/products", json={**VALID, "price": "25"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert "price" in response.json()["message"]
        assert len(store) == 3

    @pytest.mark.asyncio
    async def test_post_invalid_json_returns_400(self, test_client, auth_headers, store):
        response = await test_client.post(
            "/api/products",
            content=b"{not json",
            headers={**auth_headers, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Request body must be valid JSON"
        assert len(store) == 3

    @pytest.mark.asyncio
    async def test_post_empty_body_returns_400(self, test_client, auth_headers):
        response = await test_client.post("/api/products", headers=auth_headers)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_post_array_body_returns_400(self, test_client, auth_headers):
        response = await test_client.post("/api/products", json=[VALID], headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Request body must be a JSON object"

    @pytest.mark.asyncio
    async def test_put_validates_before_lookup(self, test_client, auth_headers):
        """An invalid body on an unknown id is a validation error, not 404."""
        response = await test_client.put(
            "/api/products/unknown", json={"name": "x"}, headers=auth_headers
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_put_invalid_body_keeps_record(self, test_client, auth_headers, store):
        original = store.get("1")
        response = await test_client.put(
            "/api/products/1", json={**VALID, "inStock": "yes"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert store.get("1") == original

    @pytest.mark.asyncio
    @pytest.mark.parametrize("digits", [400, 5000])
    async def test_post_oversized_integer_price_returns_400(self, test_client, auth_headers, store, digits):
        """Past float range (400 digits) or past the int parse limit (5000 digits)."""
        body = (
            '{"name": "Kettle", "description": "d", "price": '
            + "9" * digits
            + ', "category": "kitchen", "inStock": false}'
        )

        response = await test_client.post(
            "/api/products",
            content=body.encode(),
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert len(store) == 3

    @pytest.mark.asyncio
    async def test_integer_price_round_trips_unchanged(self, test_client, auth_headers):
        response = await test_client.post(
            "/api/products", json={**VALID, "price": 12345678901234567}, headers=auth_headers
        )
        assert response.status_code == 201
        assert response.json()["price"] == 12345678901234567
        assert '"price":12345678901234567' in response.text

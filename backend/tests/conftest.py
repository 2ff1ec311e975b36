"""
Product API: Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── test_settings: Settings with a known API key
    ├── store: Freshly seeded ProductStore
    ├── test_app: FastAPI app built around `store`
    ├── auth_headers: Valid Authorization header
    ├── product_payload: Well-formed create/update body
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os

# Settings are read at import time; set the environment first
os.environ["API_KEY"] = "test-api-key"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import create_app
from app.store import ProductStore

TEST_API_KEY = "test-api-key"


@pytest.fixture
def test_settings():
    return Settings(api_key=TEST_API_KEY, log_level="WARNING")


@pytest.fixture
def store():
    """A freshly seeded store: Laptop, Smartphone, Coffee Maker."""
    return ProductStore.seeded()


@pytest.fixture
def test_app(test_settings, store):
    return create_app(app_settings=test_settings, store=store)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {TEST_API_KEY}"}


@pytest.fixture
def product_payload():
    """Body accepted by POST/PUT /api/products."""
    return {
        "name": "Desk Lamp",
        "description": "LED lamp with adjustable arm",
        "price": 35.5,
        "category": "Home",
        "inStock": True,
    }


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    raise_app_exceptions=False lets the catch-all handler's 500 response
    reach the client instead of re-raising inside the test.

    Usage:
        async def test_root(test_client, auth_headers):
            response = await test_client.get("/", headers=auth_headers)
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

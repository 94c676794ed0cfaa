"""Shared fixtures for API tests."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from mercato.infrastructure.config import settings
from mercato.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client without authentication."""
    return TestClient(app)


@pytest.fixture
def auth_client() -> TestClient:
    """Create test client with valid API key authentication."""
    return TestClient(
        app,
        headers={"Authorization": f"Bearer {settings.api_key}"},
    )


@pytest.fixture
def api_store_id() -> str:
    return str(uuid4())


@pytest.fixture
def product_payload() -> dict:
    """Create-product body that also passes the activation gate."""
    return {
        "seller_id": "seller-1",
        "title": "Blue ceramic mug",
        "description": "Hand-glazed 350ml mug",
        "price": "100.00",
        "stock": 10,
        "category": "Kitchen",
        "images": '["mug-front.jpg"]',
        "sku": "MUG-001",
    }


@pytest.fixture
def create_product(auth_client: TestClient, api_store_id: str, product_payload: dict):
    """Create a product through the API and return its JSON."""

    def factory(store_id: str | None = None, **overrides) -> dict:
        body = {**product_payload, **overrides}
        response = auth_client.post(f"/stores/{store_id or api_store_id}/products", json=body)
        assert response.status_code == 201, response.text
        return response.json()["product"]

    return factory

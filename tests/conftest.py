"""Shared fixtures for catalog tests."""

from collections.abc import Callable
from decimal import Decimal

import pytest

from mercato.catalog.repository import InMemoryProductRepository, reset_product_repository
from mercato.domain import Product, ProductDetails, ProductStatus, StoreId


def _details(**overrides) -> ProductDetails:
    values = {
        "title": "Blue ceramic mug",
        "price": Decimal("100.00"),
        "stock": 10,
        "category": "Kitchen",
        "description": "Hand-glazed 350ml mug",
        "images": '["mug-front.jpg"]',
        "sku": "MUG-001",
    }
    values.update(overrides)
    return ProductDetails(**values)


@pytest.fixture
def make_details() -> Callable[..., ProductDetails]:
    """Factory for details that pass every field rule and the activation gate."""
    return _details


@pytest.fixture
def make_product() -> Callable[..., Product]:
    """Factory for a product forced into a given status, with events cleared."""

    def factory(
        store_id: StoreId | None = None,
        status: ProductStatus = ProductStatus.DRAFT,
        **overrides,
    ) -> Product:
        product = Product.create(
            store_id or StoreId.generate(), _details(**overrides), created_by="seller-1"
        )
        product.status = status
        product.collect_events()
        return product

    return factory


@pytest.fixture
def store_id() -> StoreId:
    return StoreId.generate()


@pytest.fixture
def repo() -> InMemoryProductRepository:
    """Fresh in-memory repository."""
    return InMemoryProductRepository()


@pytest.fixture(autouse=True)
def _reset_repository_singleton():
    reset_product_repository()
    yield
    reset_product_repository()

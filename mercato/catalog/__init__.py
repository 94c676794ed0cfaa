"""Product catalog - persistence, export filtering, CSV rendering."""

from mercato.catalog.export import CSV_CONTENT_TYPE, CSV_HEADERS, render_csv
from mercato.catalog.filters import ProductFilter, filter_products
from mercato.catalog.models import ProductRecord
from mercato.catalog.repository import (
    InMemoryProductRepository,
    ProductRepository,
    SqlAlchemyProductRepository,
    get_product_repository,
    reset_product_repository,
)

__all__ = [
    "CSV_CONTENT_TYPE",
    "CSV_HEADERS",
    "InMemoryProductRepository",
    "ProductFilter",
    "ProductRecord",
    "ProductRepository",
    "SqlAlchemyProductRepository",
    "filter_products",
    "get_product_repository",
    "render_csv",
    "reset_product_repository",
]

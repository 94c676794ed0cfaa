"""Tests for the catalog export filter."""

import pytest

from mercato.catalog.filters import ProductFilter, filter_products
from mercato.domain import ProductStatus


@pytest.fixture
def catalog(make_product):
    return [
        make_product(title="Blue ceramic mug", category="Kitchen", status=ProductStatus.ACTIVE),
        make_product(
            title="Desk lamp",
            description="Warm light with a BLUE shade",
            category="Lighting",
            status=ProductStatus.ACTIVE,
        ),
        make_product(title="Bluetooth speaker", category="Audio", status=ProductStatus.DRAFT),
        make_product(title="Red kettle", description=None, category="kitchen", status=ProductStatus.ACTIVE),
    ]


def test_no_filters_pass_everything(catalog) -> None:
    assert filter_products(catalog) == catalog
    assert ProductFilter().is_empty


def test_search_matches_title_or_description(catalog) -> None:
    titles = [p.title for p in filter_products(catalog, search_query="blue")]
    assert titles == ["Blue ceramic mug", "Desk lamp", "Bluetooth speaker"]


def test_search_and_status_compose(catalog) -> None:
    """Active products whose title or description contains 'blue'."""
    result = filter_products(catalog, search_query="blue", status=ProductStatus.ACTIVE)
    assert [p.title for p in result] == ["Blue ceramic mug", "Desk lamp"]


def test_category_is_case_insensitive_exact(catalog) -> None:
    result = filter_products(catalog, category="KITCHEN")
    assert [p.title for p in result] == ["Blue ceramic mug", "Red kettle"]
    assert filter_products(catalog, category="Kitch") == []


def test_blank_filters_are_ignored(catalog) -> None:
    assert filter_products(catalog, search_query="  ", category="") == catalog


def test_empty_result_is_valid(catalog) -> None:
    assert filter_products(catalog, search_query="zebra") == []
    assert filter_products([], search_query="blue") == []


def test_filter_does_not_reorder(catalog) -> None:
    reversed_catalog = list(reversed(catalog))
    result = ProductFilter(status=ProductStatus.ACTIVE).apply(reversed_catalog)
    assert [p.title for p in result] == ["Red kettle", "Desk lamp", "Blue ceramic mug"]


def test_search_text_is_not_trimmed(catalog) -> None:
    """Surrounding spaces are part of the search text."""
    titles = [p.title for p in filter_products(catalog, search_query="blue ")]
    assert titles == ["Blue ceramic mug", "Desk lamp"]
    assert filter_products(catalog, category=" Kitchen") == []

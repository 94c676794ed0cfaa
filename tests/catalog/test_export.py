"""Tests for CSV catalog rendering."""

import csv
import io
from decimal import Decimal

from mercato.catalog.export import CSV_HEADERS, render_csv
from mercato.domain import ProductStatus


def _rows(content: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(content)))


def test_header_only_for_empty_catalog() -> None:
    assert _rows(render_csv([])) == [CSV_HEADERS]


def test_renders_product_row(make_product) -> None:
    product = make_product(
        status=ProductStatus.OUT_OF_STOCK,
        weight=Decimal("0.350"),
        length=Decimal("12"),
        shipping_methods='["courier"]',
    )
    rows = _rows(render_csv([product]))

    assert rows[0][:7] == ["SKU", "Title", "Description", "Price", "Stock", "Category", "Status"]
    assert rows[1] == [
        "MUG-001",
        "Blue ceramic mug",
        "Hand-glazed 350ml mug",
        "100.00",
        "10",
        "Kitchen",
        "OutOfStock",
        "0.350",
        "12",
        "",
        "",
        '["courier"]',
        '["mug-front.jpg"]',
    ]


def test_quotes_separators_and_newlines(make_product) -> None:
    product = make_product(title='Mug, "large"', description="Line one\nLine two")
    rows = _rows(render_csv([product]))
    assert rows[1][1] == 'Mug, "large"'
    assert rows[1][2] == "Line one\nLine two"

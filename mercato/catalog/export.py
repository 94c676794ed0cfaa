"""CSV rendering of catalog exports."""

import csv
import io
from collections.abc import Iterable
from decimal import Decimal

from mercato.domain.entities import Product

CSV_CONTENT_TYPE = "text/csv"

CSV_HEADERS = [
    "SKU",
    "Title",
    "Description",
    "Price",
    "Stock",
    "Category",
    "Status",
    "Weight",
    "Length",
    "Width",
    "Height",
    "ShippingMethods",
    "Images",
]


def _cell(value: object | None) -> str:
    if value is None:
        return ""
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def product_row(product: Product) -> list[str]:
    """Flatten one product into CSV cells, in CSV_HEADERS order."""
    return [
        _cell(product.sku),
        _cell(product.title),
        _cell(product.description),
        _cell(product.price),
        _cell(product.stock),
        _cell(product.category),
        product.status.label,
        _cell(product.weight),
        _cell(product.length),
        _cell(product.width),
        _cell(product.height),
        _cell(product.shipping_methods),
        _cell(product.images),
    ]


def render_csv(products: Iterable[Product]) -> str:
    """Render products as CSV text with a header row.

    Fields containing separators, quotes or newlines are quoted by the
    csv module; rows end with CRLF.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADERS)
    for product in products:
        writer.writerow(product_row(product))
    return buffer.getvalue()

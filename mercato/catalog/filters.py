"""Catalog export filter.

Composes the optional export predicates (free-text search, category,
status) over an in-memory product list. Supplied predicates are ANDed;
an absent or blank predicate passes every product.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from mercato.domain.entities import Product
from mercato.domain.state_machines import ProductStatus


def _normalize(value: str | None) -> str | None:
    """Blank means absent; other values are used as given, spaces included."""
    if value is None or not value.strip():
        return None
    return value


@dataclass(frozen=True)
class ProductFilter:
    """Export predicates.

    Attributes:
        search: Case-insensitive substring matched against title or description.
        category: Case-insensitive exact category name.
        status: Exact lifecycle status.
    """

    search: str | None = None
    category: str | None = None
    status: ProductStatus | None = None

    @property
    def is_empty(self) -> bool:
        return _normalize(self.search) is None and _normalize(self.category) is None and self.status is None

    def matches(self, product: Product) -> bool:
        """Check one product against every supplied predicate."""
        search = _normalize(self.search)
        if search is not None:
            needle = search.casefold()
            in_title = needle in (product.title or "").casefold()
            in_description = needle in (product.description or "").casefold()
            if not (in_title or in_description):
                return False

        category = _normalize(self.category)
        if category is not None and (product.category or "").casefold() != category.casefold():
            return False

        if self.status is not None and product.status != self.status:
            return False

        return True

    def apply(self, products: Iterable[Product]) -> list[Product]:
        """Return the matching products, preserving input order."""
        return [p for p in products if self.matches(p)]


def filter_products(
    products: Iterable[Product],
    search_query: str | None = None,
    category: str | None = None,
    status: ProductStatus | None = None,
) -> list[Product]:
    """Filter products for export.

    Args:
        products: Candidate products.
        search_query: Optional free-text search.
        category: Optional category name.
        status: Optional lifecycle status.

    Returns:
        Products satisfying all supplied filters, in input order.
    """
    return ProductFilter(search=search_query, category=category, status=status).apply(products)

"""Domain events for the product catalog.

Events are recorded by the Product aggregate and collected by the
application services once the product has been persisted. They feed
audit logging and notification dispatch, which live outside this package.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from mercato.domain.base import DomainEvent


@dataclass(frozen=True)
class ProductCreated(DomainEvent):
    """Event raised when a seller creates a product."""

    event_type: ClassVar[str] = "product.created"

    store_id: str = ""
    title: str = ""

    def _payload(self) -> dict[str, Any]:
        return {"store_id": self.store_id, "title": self.title}


@dataclass(frozen=True)
class ProductUpdated(DomainEvent):
    """Event raised when catalog fields of a product are replaced."""

    event_type: ClassVar[str] = "product.updated"

    updated_by: str = ""

    def _payload(self) -> dict[str, Any]:
        return {"updated_by": self.updated_by}


@dataclass(frozen=True)
class ProductStatusChanged(DomainEvent):
    """Event raised when a product moves to a different status."""

    event_type: ClassVar[str] = "product.status_changed"

    from_status: str = ""
    to_status: str = ""
    changed_by: str = ""
    admin_override: bool = False

    def _payload(self) -> dict[str, Any]:
        return {
            "from_status": self.from_status,
            "to_status": self.to_status,
            "changed_by": self.changed_by,
            "admin_override": self.admin_override,
        }


@dataclass(frozen=True)
class ProductArchived(DomainEvent):
    """Event raised when a product is archived."""

    event_type: ClassVar[str] = "product.archived"

    archived_by: str = ""

    def _payload(self) -> dict[str, Any]:
        return {"archived_by": self.archived_by}


@dataclass(frozen=True)
class ProductPriceStockUpdated(DomainEvent):
    """Event raised when a bulk update changes price or stock."""

    event_type: ClassVar[str] = "product.price_stock_updated"

    old_price: str = ""
    new_price: str = ""
    old_stock: int = 0
    new_stock: int = 0
    updated_by: str = ""

    def _payload(self) -> dict[str, Any]:
        return {
            "old_price": self.old_price,
            "new_price": self.new_price,
            "old_stock": self.old_stock,
            "new_stock": self.new_stock,
            "updated_by": self.updated_by,
        }


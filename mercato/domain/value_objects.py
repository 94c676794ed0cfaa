"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. They are interchangeable when their values are equal.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Self
from uuid import UUID, uuid4

from mercato.domain.base import ValueObject


# ============================================================================
# Typed Identifiers
# ============================================================================


@dataclass(frozen=True)
class ProductId(ValueObject):
    """Strongly-typed product identifier.

    Using typed IDs prevents accidentally mixing up product and store
    identifiers, which are both UUIDs.
    """

    value: UUID

    @classmethod
    def generate(cls) -> Self:
        """Generate a new product ID.

        Returns:
            New ProductId with random UUID.
        """
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create ProductId from string representation.

        Args:
            value: String UUID representation.

        Returns:
            ProductId instance.

        Raises:
            ValueError: If value is not a valid UUID.
        """
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class StoreId(ValueObject):
    """Strongly-typed store (tenant) identifier."""

    value: UUID

    @classmethod
    def generate(cls) -> Self:
        """Generate a new store ID."""
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create StoreId from string representation."""
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


# ============================================================================
# Bulk Update Directives
# ============================================================================


class PriceUpdateType(str, Enum):
    """How a bulk price directive recomputes a product price."""

    FIXED = "fixed"
    PERCENTAGE_INCREASE = "percentage_increase"
    PERCENTAGE_DECREASE = "percentage_decrease"
    AMOUNT_INCREASE = "amount_increase"
    AMOUNT_DECREASE = "amount_decrease"


class StockUpdateType(str, Enum):
    """How a bulk stock directive recomputes a product stock level."""

    FIXED = "fixed"
    INCREASE = "increase"
    DECREASE = "decrease"


@dataclass(frozen=True)
class PriceDirective(ValueObject):
    """Instruction for recomputing a price.

    Attributes:
        update_type: Kind of recomputation.
        value: Fixed price, percentage, or absolute amount depending on type.
    """

    update_type: PriceUpdateType
    value: Decimal

    @property
    def is_percentage(self) -> bool:
        return self.update_type in {
            PriceUpdateType.PERCENTAGE_INCREASE,
            PriceUpdateType.PERCENTAGE_DECREASE,
        }


@dataclass(frozen=True)
class StockDirective(ValueObject):
    """Instruction for recomputing a stock level.

    Attributes:
        update_type: Kind of recomputation.
        value: Fixed stock level or adjustment amount.
    """

    update_type: StockUpdateType
    value: int


# ============================================================================
# Product Details
# ============================================================================


@dataclass(frozen=True)
class ProductDetails(ValueObject):
    """Seller-editable catalog fields of a product.

    Carried by create/update commands and applied to the Product aggregate
    as a unit, so the activation gate can be checked against the new
    values before any of them land on the product.

    Attributes:
        title: Product title.
        price: Unit price in the store currency.
        stock: Units available.
        category: Category name.
        description: Optional long description.
        weight: Optional shipping weight in kilograms.
        length: Optional length in centimeters.
        width: Optional width in centimeters.
        height: Optional height in centimeters.
        shipping_methods: Optional serialized list of shipping methods.
        images: Optional serialized list of image references.
        sku: Optional seller stock keeping unit.
    """

    title: str
    price: Decimal
    stock: int
    category: str
    description: str | None = None
    weight: Decimal | None = None
    length: Decimal | None = None
    width: Decimal | None = None
    height: Decimal | None = None
    shipping_methods: str | None = None
    images: str | None = None
    sku: str | None = None

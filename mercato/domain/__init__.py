"""Domain layer - Product aggregate, lifecycle state machine, pricing rules.

This module exports the core domain building blocks:

- **Entities**: the Product aggregate root
- **Value Objects**: typed IDs, product details, bulk update directives
- **State Machine**: ProductStatus and the transition policy
- **Rules**: field validation and bulk price/stock recomputation
- **Domain Events** and **Exceptions**

Example usage:
    from mercato.domain import Product, ProductDetails, ProductStatus, StoreId

    product = Product.create(
        StoreId.generate(),
        ProductDetails(title="Desk lamp", price=Decimal("39.90"), stock=12, category="Lighting"),
        created_by="seller-1",
    )
    validate_product_transition(product.status, ProductStatus.ACTIVE, product)
    # ['Description is required to set product to Active.', ...]
"""

# Base classes
from mercato.domain.base import AggregateRoot, DomainEvent, Entity, ValueObject

# Bulk pricing
from mercato.domain.bulk_pricing import (
    compute_new_price,
    compute_new_stock,
    validate_directives,
)

# Entities
from mercato.domain.entities import Product

# Domain Events
from mercato.domain.events import (
    ProductArchived,
    ProductCreated,
    ProductPriceStockUpdated,
    ProductStatusChanged,
    ProductUpdated,
)

# Exceptions
from mercato.domain.exceptions import (
    ConcurrencyError,
    DomainError,
    InvalidStateTransitionError,
    ProductArchivedError,
    ProductError,
    ProductValidationError,
)

# State Machine
from mercato.domain.state_machines import (
    ProductStatus,
    can_activate,
    check_activation_gate,
    require_product_transition,
    validate_product_transition,
)

# Validation
from mercato.domain.validation import (
    DEFAULT_LIMITS,
    ProductLimits,
    validate_details,
    validate_product_fields,
)

# Value Objects
from mercato.domain.value_objects import (
    PriceDirective,
    PriceUpdateType,
    ProductDetails,
    ProductId,
    StockDirective,
    StockUpdateType,
    StoreId,
)

__all__ = [
    # Base classes
    "AggregateRoot",
    "DomainEvent",
    "Entity",
    "ValueObject",
    # Entities
    "Product",
    # Value Objects
    "PriceDirective",
    "PriceUpdateType",
    "ProductDetails",
    "ProductId",
    "StockDirective",
    "StockUpdateType",
    "StoreId",
    # State Machine
    "ProductStatus",
    "can_activate",
    "check_activation_gate",
    "require_product_transition",
    "validate_product_transition",
    # Validation
    "DEFAULT_LIMITS",
    "ProductLimits",
    "validate_details",
    "validate_product_fields",
    # Bulk pricing
    "compute_new_price",
    "compute_new_stock",
    "validate_directives",
    # Domain Events
    "ProductArchived",
    "ProductCreated",
    "ProductPriceStockUpdated",
    "ProductStatusChanged",
    "ProductUpdated",
    # Exceptions
    "ConcurrencyError",
    "DomainError",
    "InvalidStateTransitionError",
    "ProductArchivedError",
    "ProductError",
    "ProductValidationError",
]

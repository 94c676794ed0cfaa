"""Domain exceptions.

Domain-level errors raised by the Product aggregate and the repositories
when an invariant would be broken. Application services run the same
checks up front and return structured results instead, so in normal
operation these surface only when the aggregate is driven directly or
when persistence detects a conflicting write.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# State Machine Errors
# ============================================================================


class InvalidStateTransitionError(DomainError):
    """Raised when a product status change is rejected by the transition policy."""

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        current_state: str,
        target_state: str,
        violations: list[str] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            entity_type: Type of entity (e.g., "Product").
            entity_id: ID of the entity.
            current_state: Current state of the entity.
            target_state: Attempted target state.
            violations: Reasons the transition was rejected.
        """
        reasons = violations or []
        message = (
            f"Cannot transition {entity_type}({entity_id}) "
            f"from '{current_state}' to '{target_state}'. "
            f"Violations: {reasons}"
        )
        super().__init__(
            message,
            details={
                "entity_type": entity_type,
                "entity_id": entity_id,
                "current_state": current_state,
                "target_state": target_state,
                "violations": reasons,
            },
        )
        self.violations = reasons


# ============================================================================
# Product Errors
# ============================================================================


class ProductError(DomainError):
    """Base class for product-related errors."""

    pass


class ProductArchivedError(ProductError):
    """Raised when trying to mutate a product that has been archived."""

    def __init__(self, product_id: str) -> None:
        super().__init__(
            f"Product {product_id} is archived and cannot be modified",
            details={"product_id": product_id},
        )


class ProductValidationError(ProductError):
    """Raised when a product mutation would leave the aggregate invalid."""

    def __init__(self, product_id: str, violations: list[str]) -> None:
        """Initialize product validation error.

        Args:
            product_id: ID of the product.
            violations: Human-readable rule violations.
        """
        super().__init__(
            f"Product {product_id} failed validation: {violations}",
            details={"product_id": product_id, "violations": violations},
        )
        self.violations = violations


# ============================================================================
# Persistence Errors
# ============================================================================


class ConcurrencyError(DomainError):
    """Raised when saving a product whose stored version has moved on."""

    def __init__(
        self, product_id: str, expected_version: int, actual_version: int | None = None
    ) -> None:
        found = f", found {actual_version}" if actual_version is not None else ""
        super().__init__(
            f"Product {product_id} was modified concurrently "
            f"(expected version {expected_version}{found})",
            details={
                "product_id": product_id,
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )

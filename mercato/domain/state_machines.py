"""Product lifecycle state machine.

Deterministic transition rules for product status. The policy is a pure
decision function: it returns a list of human-readable violations and
never raises, so callers decide whether to persist.
"""

from decimal import Decimal
from enum import Enum
from typing import Protocol

from mercato.domain.exceptions import InvalidStateTransitionError


# ============================================================================
# Product State Machine
# ============================================================================


class ProductStatus(str, Enum):
    """Product lifecycle states.

    State diagram (admin-only edges marked with *):
        DRAFT ──── activate (gate) ────► ACTIVE ◄──────────────┐
          │ ╲                             │                     │
          │  ╲ *suspend/deactivate        │ suspend/deactivate  │ reactivate (gate)
          │   ╲                           ▼                     │
          │    ╲──────────────► SUSPENDED / INACTIVE / OUT_OF_STOCK
          │                               │
          │ archive                       │ archive
          ▼                               ▼
        ARCHIVED ◄────────────────────────┘

        Any non-archived state ──*──► DRAFT
    """

    DRAFT = "draft"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"
    OUT_OF_STOCK = "out_of_stock"
    ARCHIVED = "archived"

    @property
    def label(self) -> str:
        """Display name used in violation messages."""
        return _STATUS_LABELS[self]

    def can_transition_to(
        self, target: "ProductStatus", is_admin_override: bool = False
    ) -> bool:
        """Check if the transition edge exists.

        Ignores the activation gate, which depends on product data.

        Args:
            target: Target state to transition to.
            is_admin_override: Whether admin-only edges are available.

        Returns:
            True if the edge is allowed.
        """
        if self.is_terminal():
            return False
        if target == self:
            return True
        return target in self.allowed_transitions(is_admin_override)

    def allowed_transitions(self, is_admin_override: bool = False) -> list["ProductStatus"]:
        """Get list of valid target states.

        Args:
            is_admin_override: Whether to include admin-only edges.

        Returns:
            List of states that can be transitioned to.
        """
        allowed = set(_PRODUCT_TRANSITIONS.get(self, set()))
        if is_admin_override:
            allowed |= _ADMIN_OVERRIDE_TRANSITIONS.get(self, set())
        return [status for status in ProductStatus if status in allowed]

    def is_terminal(self) -> bool:
        """Check if this is a terminal (final) state."""
        return len(_PRODUCT_TRANSITIONS.get(self, set())) == 0


_STATUS_LABELS: dict[ProductStatus, str] = {
    ProductStatus.DRAFT: "Draft",
    ProductStatus.ACTIVE: "Active",
    ProductStatus.SUSPENDED: "Suspended",
    ProductStatus.INACTIVE: "Inactive",
    ProductStatus.OUT_OF_STOCK: "OutOfStock",
    ProductStatus.ARCHIVED: "Archived",
}

# Edges any caller may take (defined outside enum to avoid Enum restrictions)
_PRODUCT_TRANSITIONS: dict[ProductStatus, set[ProductStatus]] = {
    ProductStatus.DRAFT: {ProductStatus.ACTIVE, ProductStatus.ARCHIVED},
    ProductStatus.ACTIVE: {
        ProductStatus.SUSPENDED,
        ProductStatus.INACTIVE,
        ProductStatus.OUT_OF_STOCK,
        ProductStatus.ARCHIVED,
    },
    ProductStatus.SUSPENDED: {
        ProductStatus.ACTIVE,
        ProductStatus.INACTIVE,
        ProductStatus.OUT_OF_STOCK,
        ProductStatus.ARCHIVED,
    },
    ProductStatus.INACTIVE: {
        ProductStatus.ACTIVE,
        ProductStatus.SUSPENDED,
        ProductStatus.OUT_OF_STOCK,
        ProductStatus.ARCHIVED,
    },
    ProductStatus.OUT_OF_STOCK: {
        ProductStatus.ACTIVE,
        ProductStatus.SUSPENDED,
        ProductStatus.INACTIVE,
        ProductStatus.ARCHIVED,
    },
    ProductStatus.ARCHIVED: set(),  # Terminal state
}

# Edges that only an admin override unlocks
_ADMIN_OVERRIDE_TRANSITIONS: dict[ProductStatus, set[ProductStatus]] = {
    ProductStatus.DRAFT: {
        ProductStatus.SUSPENDED,
        ProductStatus.INACTIVE,
        ProductStatus.OUT_OF_STOCK,
    },
    ProductStatus.ACTIVE: {ProductStatus.DRAFT},
    ProductStatus.SUSPENDED: {ProductStatus.DRAFT},
    ProductStatus.INACTIVE: {ProductStatus.DRAFT},
    ProductStatus.OUT_OF_STOCK: {ProductStatus.DRAFT},
}


# ============================================================================
# Activation Gate
# ============================================================================


class ActivationCandidate(Protocol):
    """Fields the activation gate inspects."""

    description: str | None
    category: str
    price: Decimal
    stock: int
    images: str | None


def has_images(images: str | None) -> bool:
    """Check whether a serialized image list holds at least one image."""
    if images is None:
        return False
    stripped = images.strip()
    return bool(stripped) and stripped != "[]"


def check_activation_gate(product: ActivationCandidate) -> list[str]:
    """Check the data-quality rules a product must satisfy to be Active.

    Args:
        product: Product (or candidate values) to check.

    Returns:
        One violation per missing or invalid field; empty if the gate passes.
    """
    violations: list[str] = []

    if not product.description or not product.description.strip():
        violations.append("Description is required to set product to Active.")

    if not product.category or not product.category.strip():
        violations.append("Category is required to set product to Active.")

    if product.price is None or not product.price.is_finite() or product.price <= 0:
        violations.append("Price must be greater than 0 to set product to Active.")

    if product.stock is None or product.stock < 0:
        violations.append("Stock cannot be negative to set product to Active.")

    if not has_images(product.images):
        violations.append("At least one image is required to set product to Active.")

    return violations


def can_activate(product: ActivationCandidate) -> bool:
    """Check if a product currently satisfies the activation gate."""
    return not check_activation_gate(product)


# ============================================================================
# Transition Policy
# ============================================================================


def validate_product_transition(
    current_status: ProductStatus,
    requested_status: ProductStatus,
    product: ActivationCandidate,
    is_admin_override: bool = False,
) -> list[str]:
    """Decide whether a product status change is legal.

    Args:
        current_status: Status the product is in now.
        requested_status: Status the caller asked for.
        product: Product data, used by the activation gate.
        is_admin_override: Whether the caller is a privileged administrator.

    Returns:
        Violations; an empty list means the transition is accepted.
    """
    if current_status == ProductStatus.ARCHIVED:
        return ["Cannot change the status of an archived product."]

    if requested_status == current_status:
        return []

    if requested_status == ProductStatus.ACTIVE:
        return check_activation_gate(product)

    if current_status.can_transition_to(requested_status, is_admin_override):
        return []

    if current_status == ProductStatus.DRAFT:
        return [
            f"Cannot transition from Draft to {requested_status.label}. "
            "Only Active or Archived transitions are allowed."
        ]

    # Only the admin-only return to Draft remains
    return [
        f"Cannot transition from {current_status.label} to Draft. "
        "This transition requires admin approval."
    ]


def require_product_transition(
    product_id: str,
    current_status: ProductStatus,
    requested_status: ProductStatus,
    product: ActivationCandidate,
    is_admin_override: bool = False,
) -> None:
    """Validate and raise if a product status change is rejected.

    Raises:
        InvalidStateTransitionError: If the policy reports any violation.
    """
    violations = validate_product_transition(
        current_status, requested_status, product, is_admin_override
    )
    if violations:
        raise InvalidStateTransitionError(
            entity_type="Product",
            entity_id=product_id,
            current_state=current_status.value,
            target_state=requested_status.value,
            violations=violations,
        )

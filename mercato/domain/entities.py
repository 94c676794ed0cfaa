"""Domain entities for the product catalog.

The Product aggregate root owns its lifecycle invariants: an archived
product is frozen, and an Active product always satisfies the activation
gate. Mutating methods raise domain errors when those invariants would
break; application services check first and report failures as values.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Self

from mercato.domain.base import AggregateRoot
from mercato.domain.events import (
    ProductArchived,
    ProductCreated,
    ProductPriceStockUpdated,
    ProductStatusChanged,
    ProductUpdated,
)
from mercato.domain.exceptions import ProductArchivedError, ProductValidationError
from mercato.domain.state_machines import (
    ProductStatus,
    check_activation_gate,
    require_product_transition,
)
from mercato.domain.value_objects import ProductDetails, ProductId, StoreId


@dataclass(kw_only=True, eq=False)
class Product(AggregateRoot[ProductId]):
    """Seller product aggregate root.

    Attributes:
        id: Unique product identifier.
        store_id: Owning store; never changes after creation.
        title: Product title.
        price: Unit price.
        stock: Units available.
        category: Category name.
        description: Optional long description.
        weight: Optional weight in kilograms.
        length: Optional length in centimeters.
        width: Optional width in centimeters.
        height: Optional height in centimeters.
        shipping_methods: Optional serialized shipping methods.
        images: Optional serialized image list.
        sku: Optional seller stock keeping unit.
        status: Current lifecycle status (state machine).
        last_updated_by: Actor of the most recent mutation.
        archived_at: When the product was archived.
        archived_by: Actor that archived the product.
    """

    id: ProductId
    store_id: StoreId
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
    status: ProductStatus = ProductStatus.DRAFT
    last_updated_by: str | None = None
    archived_at: datetime | None = None
    archived_by: str | None = None

    @classmethod
    def create(
        cls,
        store_id: StoreId,
        details: ProductDetails,
        created_by: str | None = None,
        product_id: ProductId | None = None,
    ) -> Self:
        """Create a new product in Draft status.

        Args:
            store_id: Owning store.
            details: Initial catalog fields.
            created_by: Actor creating the product.
            product_id: Optional pre-generated product ID.

        Returns:
            New Product instance.
        """
        product = cls(
            id=product_id or ProductId.generate(),
            store_id=store_id,
            title=details.title,
            price=details.price,
            stock=details.stock,
            category=details.category,
            last_updated_by=created_by,
        )
        product._assign(details)
        product._record_event(
            ProductCreated(
                aggregate_id=str(product.id),
                aggregate_type="Product",
                store_id=str(store_id),
                title=details.title,
            )
        )
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_archived(self) -> bool:
        return self.status == ProductStatus.ARCHIVED

    @property
    def details(self) -> ProductDetails:
        """Snapshot of the seller-editable fields."""
        return ProductDetails(
            title=self.title,
            price=self.price,
            stock=self.stock,
            category=self.category,
            description=self.description,
            weight=self.weight,
            length=self.length,
            width=self.width,
            height=self.height,
            shipping_methods=self.shipping_methods,
            images=self.images,
            sku=self.sku,
        )

    def belongs_to(self, store_id: StoreId | None) -> bool:
        return store_id is not None and self.store_id == store_id

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def update_details(self, details: ProductDetails, updated_by: str) -> None:
        """Replace the catalog fields.

        Args:
            details: New catalog fields.
            updated_by: Acting user.

        Raises:
            ProductArchivedError: If the product is archived.
            ProductValidationError: If the product is Active and the new
                values fail the activation gate.
        """
        self._ensure_not_archived()
        if self.status == ProductStatus.ACTIVE:
            violations = check_activation_gate(details)
            if violations:
                raise ProductValidationError(str(self.id), violations)

        self._assign(details)
        self._stamp(updated_by)
        self._record_event(
            ProductUpdated(
                aggregate_id=str(self.id),
                aggregate_type="Product",
                updated_by=updated_by,
            )
        )

    def change_status(
        self,
        new_status: ProductStatus,
        changed_by: str,
        is_admin_override: bool = False,
    ) -> bool:
        """Move the product to a new status.

        Args:
            new_status: Requested status.
            changed_by: Acting user.
            is_admin_override: Whether admin-only transitions are allowed.

        Returns:
            True if the status changed, False for a same-status request,
            which only refreshes the last-updated stamp.

        Raises:
            InvalidStateTransitionError: If the transition policy rejects it.
        """
        require_product_transition(
            str(self.id), self.status, new_status, self, is_admin_override
        )
        if new_status == self.status:
            self._stamp(changed_by)
            return False

        previous = self.status
        self.status = new_status
        now = self._stamp(changed_by)
        self._record_event(
            ProductStatusChanged(
                aggregate_id=str(self.id),
                aggregate_type="Product",
                from_status=previous.value,
                to_status=new_status.value,
                changed_by=changed_by,
                admin_override=is_admin_override,
            )
        )

        if new_status == ProductStatus.ARCHIVED:
            self.archived_at = now
            self.archived_by = changed_by
            self._record_event(
                ProductArchived(
                    aggregate_id=str(self.id),
                    aggregate_type="Product",
                    archived_by=changed_by,
                )
            )
        return True

    def archive(self, archived_by: str) -> None:
        """Archive the product, freezing it permanently.

        Raises:
            ProductArchivedError: If the product is already archived.
        """
        self._ensure_not_archived()
        self.change_status(ProductStatus.ARCHIVED, archived_by)

    def apply_price_stock(
        self,
        new_price: Decimal | None,
        new_stock: int | None,
        updated_by: str,
    ) -> None:
        """Apply recomputed price and/or stock from a bulk update.

        Args:
            new_price: New price, or None to keep the current one.
            new_stock: New stock level, or None to keep the current one.
            updated_by: Acting user.

        Raises:
            ProductArchivedError: If the product is archived.
            ProductValidationError: If the price is not positive or stock is negative.
        """
        self._ensure_not_archived()
        violations: list[str] = []
        if new_price is not None and (not new_price.is_finite() or new_price <= 0):
            violations.append("Price must be greater than 0.")
        if new_stock is not None and new_stock < 0:
            violations.append("Stock cannot be negative.")
        if violations:
            raise ProductValidationError(str(self.id), violations)

        old_price, old_stock = self.price, self.stock
        if new_price is not None:
            self.price = new_price
        if new_stock is not None:
            self.stock = new_stock
        self._stamp(updated_by)
        self._record_event(
            ProductPriceStockUpdated(
                aggregate_id=str(self.id),
                aggregate_type="Product",
                old_price=str(old_price),
                new_price=str(self.price),
                old_stock=old_stock,
                new_stock=self.stock,
                updated_by=updated_by,
            )
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_not_archived(self) -> None:
        if self.is_archived:
            raise ProductArchivedError(str(self.id))

    def _assign(self, details: ProductDetails) -> None:
        self.title = details.title
        self.price = details.price
        self.stock = details.stock
        self.category = details.category
        self.description = details.description
        self.weight = details.weight
        self.length = details.length
        self.width = details.width
        self.height = details.height
        self.shipping_methods = details.shipping_methods
        self.images = details.images
        self.sku = details.sku

    def _stamp(self, actor: str) -> datetime:
        self.last_updated_by = actor
        return self._touch()

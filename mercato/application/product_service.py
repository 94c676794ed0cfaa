"""Product lifecycle application service.

Orchestrates seller product operations:
- Creating products in Draft
- Replacing catalog fields (re-checking the activation gate when Active)
- Archiving products
- Moving products through the status state machine

Business rejections come back as result values. Repository exceptions
propagate to the caller unchanged.
"""

from dataclasses import dataclass, field
from typing import Self

import structlog

from mercato.catalog.repository import ProductRepository, get_product_repository
from mercato.domain.entities import Product
from mercato.domain.state_machines import (
    ProductStatus,
    check_activation_gate,
    validate_product_transition,
)
from mercato.domain.validation import (
    DEFAULT_LIMITS,
    ProductLimits,
    validate_details,
    validate_required_id,
)
from mercato.domain.value_objects import ProductDetails, ProductId, StoreId

logger = structlog.get_logger()

# Error codes shared by the catalog services
VALIDATION_FAILED = "VALIDATION_FAILED"
PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
NOT_AUTHORIZED = "NOT_AUTHORIZED"
RULE_VIOLATION = "RULE_VIOLATION"


# ============================================================================
# Commands
# ============================================================================


@dataclass
class CreateProductCommand:
    """Create a product for a store."""

    store_id: StoreId | None
    details: ProductDetails
    seller_id: str | None = None


@dataclass
class UpdateProductCommand:
    """Replace the catalog fields of a product."""

    product_id: ProductId | None
    store_id: StoreId | None
    seller_id: str | None
    details: ProductDetails


@dataclass
class ArchiveProductCommand:
    """Archive a product."""

    product_id: ProductId | None
    store_id: StoreId | None
    seller_id: str | None


@dataclass
class ChangeProductStatusCommand:
    """Move a product to another status.

    store_id may be omitted for admin overrides, which skip the
    ownership check.
    """

    product_id: ProductId | None
    new_status: ProductStatus
    seller_id: str | None
    store_id: StoreId | None = None
    is_admin_override: bool = False


# ============================================================================
# Service Result Types
# ============================================================================


@dataclass
class ProductResult:
    """Common shape of a product operation outcome."""

    success: bool = True
    errors: list[str] = field(default_factory=list)
    error_code: str | None = None

    @property
    def is_not_authorized(self) -> bool:
        return self.error_code == NOT_AUTHORIZED

    @classmethod
    def failure(cls, errors: list[str] | str, error_code: str) -> Self:
        if isinstance(errors, str):
            errors = [errors]
        return cls(success=False, errors=list(errors), error_code=error_code)


@dataclass
class CreateProductResult(ProductResult):
    """Result of creating a product."""

    product_id: ProductId | None = None
    product: Product | None = None


@dataclass
class UpdateProductResult(ProductResult):
    """Result of updating a product."""

    product: Product | None = None


@dataclass
class ArchiveProductResult(ProductResult):
    """Result of archiving a product."""

    product: Product | None = None


@dataclass
class ChangeProductStatusResult(ProductResult):
    """Result of a status change."""

    product: Product | None = None
    changed: bool = False


# ============================================================================
# Product Service
# ============================================================================


def _ownership_checks(
    product_id: ProductId | None,
    store_id: StoreId | None,
    seller_id: str | None,
    store_required: bool = True,
) -> list[str]:
    errors: list[str] = []
    validate_required_id(product_id, "Product ID", errors)
    if store_required:
        validate_required_id(store_id, "Store ID", errors)
    validate_required_id(seller_id, "Seller ID", errors)
    return errors


def _log_events(product: Product) -> None:
    for event in product.collect_events():
        logger.debug("Domain event", **event.to_dict())


class ProductService:
    """Application service for the seller product lifecycle."""

    def __init__(
        self,
        product_repo: ProductRepository | None = None,
        limits: ProductLimits = DEFAULT_LIMITS,
        request_id: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            product_repo: Product repository.
            limits: Field bounds for validation.
            request_id: Request ID for correlation.
        """
        self.product_repo = product_repo or get_product_repository()
        self.limits = limits
        self.request_id = request_id

    async def create_product(self, command: CreateProductCommand) -> CreateProductResult:
        """Create a new Draft product.

        Args:
            command: Store, initial fields and acting seller.

        Returns:
            CreateProductResult with the new product ID.
        """
        errors: list[str] = []
        validate_required_id(command.store_id, "Store ID", errors)
        errors.extend(validate_details(command.details, self.limits))
        if errors:
            logger.warning(
                "Product creation rejected",
                store_id=str(command.store_id),
                errors=errors,
                request_id=self.request_id,
            )
            return CreateProductResult.failure(errors, VALIDATION_FAILED)

        product = Product.create(command.store_id, command.details, created_by=command.seller_id)
        await self.product_repo.save(product)

        logger.info(
            "Product created",
            product_id=str(product.id),
            store_id=str(product.store_id),
            request_id=self.request_id,
        )
        _log_events(product)
        return CreateProductResult(product_id=product.id, product=product)

    async def get_product(self, product_id: ProductId) -> Product | None:
        """Get a product by ID.

        Args:
            product_id: Product identifier.

        Returns:
            Product if found, None otherwise.
        """
        return await self.product_repo.get_by_id(product_id)

    async def get_products_by_store(self, store_id: StoreId) -> list[Product]:
        """Get every product of a store, archived ones included."""
        return await self.product_repo.get_by_store_id(store_id)

    async def update_product(self, command: UpdateProductCommand) -> UpdateProductResult:
        """Replace the catalog fields of a product.

        An Active product must still pass the activation gate with the
        new values; otherwise the update is rejected and the product
        keeps its old data.

        Args:
            command: Target product, owner store, seller and new fields.

        Returns:
            UpdateProductResult with the updated product.
        """
        errors = _ownership_checks(command.product_id, command.store_id, command.seller_id)
        errors.extend(validate_details(command.details, self.limits))
        if errors:
            return UpdateProductResult.failure(errors, VALIDATION_FAILED)

        product = await self.product_repo.get_by_id(command.product_id)
        if product is None:
            return UpdateProductResult.failure("Product not found.", PRODUCT_NOT_FOUND)

        if not product.belongs_to(command.store_id):
            logger.warning(
                "Product update not authorized",
                product_id=str(product.id),
                store_id=str(command.store_id),
                request_id=self.request_id,
            )
            return UpdateProductResult.failure(
                "You are not authorized to update this product.", NOT_AUTHORIZED
            )

        if product.is_archived:
            return UpdateProductResult.failure(
                "Cannot update an archived product.", RULE_VIOLATION
            )

        if product.status == ProductStatus.ACTIVE:
            violations = check_activation_gate(command.details)
            if violations:
                logger.warning(
                    "Product update would break activation gate",
                    product_id=str(product.id),
                    violations=violations,
                    request_id=self.request_id,
                )
                return UpdateProductResult.failure(violations, RULE_VIOLATION)

        product.update_details(command.details, command.seller_id)
        await self.product_repo.save(product)

        logger.info(
            "Product updated",
            product_id=str(product.id),
            updated_by=command.seller_id,
            request_id=self.request_id,
        )
        _log_events(product)
        return UpdateProductResult(product=product)

    async def archive_product(self, command: ArchiveProductCommand) -> ArchiveProductResult:
        """Archive a product.

        Args:
            command: Target product, owner store and seller.

        Returns:
            ArchiveProductResult with the archived product.
        """
        errors = _ownership_checks(command.product_id, command.store_id, command.seller_id)
        if errors:
            return ArchiveProductResult.failure(errors, VALIDATION_FAILED)

        product = await self.product_repo.get_by_id(command.product_id)
        if product is None:
            return ArchiveProductResult.failure("Product not found.", PRODUCT_NOT_FOUND)

        if not product.belongs_to(command.store_id):
            return ArchiveProductResult.failure(
                "You are not authorized to archive this product.", NOT_AUTHORIZED
            )

        if product.is_archived:
            return ArchiveProductResult.failure("Product is already archived.", RULE_VIOLATION)

        product.archive(command.seller_id)
        await self.product_repo.save(product)

        logger.info(
            "Product archived",
            product_id=str(product.id),
            archived_by=command.seller_id,
            request_id=self.request_id,
        )
        _log_events(product)
        return ArchiveProductResult(product=product)

    async def change_product_status(
        self, command: ChangeProductStatusCommand
    ) -> ChangeProductStatusResult:
        """Move a product to another status.

        Requesting the current status is accepted; it only refreshes the
        last-updated stamp.

        Args:
            command: Target product, requested status and acting user.

        Returns:
            ChangeProductStatusResult with the product and whether it changed.
        """
        errors = _ownership_checks(
            command.product_id,
            command.store_id,
            command.seller_id,
            store_required=not command.is_admin_override,
        )
        if errors:
            return ChangeProductStatusResult.failure(errors, VALIDATION_FAILED)

        product = await self.product_repo.get_by_id(command.product_id)
        if product is None:
            return ChangeProductStatusResult.failure("Product not found.", PRODUCT_NOT_FOUND)

        if not command.is_admin_override and not product.belongs_to(command.store_id):
            return ChangeProductStatusResult.failure(
                "You are not authorized to change this product's status.", NOT_AUTHORIZED
            )

        violations = validate_product_transition(
            product.status, command.new_status, product, command.is_admin_override
        )
        if violations:
            logger.warning(
                "Status change rejected",
                product_id=str(product.id),
                from_status=product.status.value,
                to_status=command.new_status.value,
                violations=violations,
                request_id=self.request_id,
            )
            return ChangeProductStatusResult.failure(violations, RULE_VIOLATION)

        previous = product.status
        changed = product.change_status(
            command.new_status, command.seller_id, command.is_admin_override
        )
        await self.product_repo.save(product)

        logger.info(
            "Product status changed",
            product_id=str(product.id),
            from_status=previous.value,
            to_status=product.status.value,
            admin_override=command.is_admin_override,
            request_id=self.request_id,
        )
        _log_events(product)
        return ChangeProductStatusResult(product=product, changed=changed)


# ============================================================================
# Service Factory
# ============================================================================


def get_product_service(
    product_repo: ProductRepository | None = None,
    limits: ProductLimits = DEFAULT_LIMITS,
    request_id: str | None = None,
) -> ProductService:
    """Get product service instance.

    Args:
        product_repo: Product repository; the in-memory singleton if omitted.
        limits: Field bounds for validation.
        request_id: Request ID for correlation.

    Returns:
        ProductService instance.
    """
    return ProductService(product_repo=product_repo, limits=limits, request_id=request_id)

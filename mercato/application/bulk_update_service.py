"""Bulk price/stock update application service.

Applies one price directive and/or one stock directive to many products
of a store. Each loaded product succeeds or fails on its own; failures
are collected and reported while the successes are persisted together.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal

import structlog

from mercato.application.product_service import (
    PRODUCT_NOT_FOUND,
    VALIDATION_FAILED,
)
from mercato.catalog.repository import ProductRepository, get_product_repository
from mercato.domain.bulk_pricing import (
    PRICE_NOT_POSITIVE,
    STOCK_NEGATIVE,
    compute_new_price,
    compute_new_stock,
    is_valid_price,
    is_valid_stock,
    validate_directives,
)
from mercato.domain.entities import Product
from mercato.domain.validation import validate_required_id
from mercato.domain.value_objects import (
    PriceDirective,
    ProductId,
    StockDirective,
    StoreId,
)

logger = structlog.get_logger()


# ============================================================================
# Command / Result Types
# ============================================================================


@dataclass
class BulkUpdateCommand:
    """Bulk price/stock update request."""

    store_id: StoreId | None
    seller_id: str | None
    product_ids: Sequence[ProductId]
    price_update: PriceDirective | None = None
    stock_update: StockDirective | None = None


@dataclass(frozen=True)
class BulkUpdateFailure:
    """One product the batch could not update."""

    product_id: ProductId
    product_title: str
    error: str


@dataclass
class BulkUpdateResult:
    """Outcome of a bulk update.

    success is True whenever the batch itself was processed, even if
    every loaded product failed. Whole-request failures (malformed
    request, nothing loaded) set success to False and fill errors.
    """

    success: bool = True
    errors: list[str] = field(default_factory=list)
    error_code: str | None = None
    success_count: int = 0
    failures: list[BulkUpdateFailure] = field(default_factory=list)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def all_failed(self) -> bool:
        return self.success and self.success_count == 0 and bool(self.failures)

    @classmethod
    def failure(cls, errors: list[str] | str, error_code: str) -> "BulkUpdateResult":
        if isinstance(errors, str):
            errors = [errors]
        return cls(success=False, errors=list(errors), error_code=error_code)


# ============================================================================
# Bulk Update Service
# ============================================================================


class BulkUpdateService:
    """Application service for bulk catalog price/stock updates."""

    def __init__(
        self,
        product_repo: ProductRepository | None = None,
        request_id: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            product_repo: Product repository.
            request_id: Request ID for correlation.
        """
        self.product_repo = product_repo or get_product_repository()
        self.request_id = request_id

    def _validate(self, command: BulkUpdateCommand) -> list[str]:
        errors: list[str] = []
        validate_required_id(command.store_id, "Store ID", errors)
        validate_required_id(command.seller_id, "Seller ID", errors)
        if not command.product_ids:
            errors.append("At least one product ID is required.")
        errors.extend(validate_directives(command.price_update, command.stock_update))
        return errors

    def _evaluate(
        self, product: Product, command: BulkUpdateCommand
    ) -> tuple[Decimal | None, int | None, str | None]:
        """Compute one product's new values, or the reason it fails.

        Price is checked before stock; the first failing check wins.
        """
        if not product.belongs_to(command.store_id):
            return None, None, "You are not authorized to update this product."
        if product.is_archived:
            return None, None, "Cannot update an archived product."

        new_price = None
        if command.price_update is not None:
            new_price = compute_new_price(product.price, command.price_update)
            if not is_valid_price(new_price):
                return None, None, PRICE_NOT_POSITIVE

        new_stock = None
        if command.stock_update is not None:
            new_stock = compute_new_stock(product.stock, command.stock_update)
            if not is_valid_stock(new_stock):
                return None, None, STOCK_NEGATIVE

        return new_price, new_stock, None

    async def bulk_update_price_stock(self, command: BulkUpdateCommand) -> BulkUpdateResult:
        """Apply price/stock directives to a set of products.

        Unknown product IDs are skipped silently. Products of another
        store, archived products, and products whose computed price or
        stock would be invalid are reported as failures and left
        untouched.

        Args:
            command: Target IDs, directives, store and acting seller.

        Returns:
            BulkUpdateResult with the success count and per-product failures.
        """
        errors = self._validate(command)
        if errors:
            logger.warning(
                "Bulk update rejected",
                store_id=str(command.store_id),
                errors=errors,
                request_id=self.request_id,
            )
            return BulkUpdateResult.failure(errors, VALIDATION_FAILED)

        products = await self.product_repo.get_by_ids(command.product_ids)
        if not products:
            return BulkUpdateResult.failure(
                "No products found with the specified IDs.", PRODUCT_NOT_FOUND
            )

        updated: list[Product] = []
        failures: list[BulkUpdateFailure] = []
        for product in products:
            new_price, new_stock, reason = self._evaluate(product, command)
            if reason is not None:
                failures.append(
                    BulkUpdateFailure(
                        product_id=product.id,
                        product_title=product.title,
                        error=reason,
                    )
                )
                continue
            product.apply_price_stock(new_price, new_stock, command.seller_id)
            updated.append(product)

        if updated:
            await self.product_repo.save_all(updated)

        logger.info(
            "Bulk update completed",
            store_id=str(command.store_id),
            requested=len(command.product_ids),
            loaded=len(products),
            success_count=len(updated),
            failure_count=len(failures),
            request_id=self.request_id,
        )
        for product in updated:
            for event in product.collect_events():
                logger.debug("Domain event", **event.to_dict())

        return BulkUpdateResult(success_count=len(updated), failures=failures)


# ============================================================================
# Service Factory
# ============================================================================


def get_bulk_update_service(
    product_repo: ProductRepository | None = None,
    request_id: str | None = None,
) -> BulkUpdateService:
    """Get bulk update service instance."""
    return BulkUpdateService(product_repo=product_repo, request_id=request_id)

"""Catalog export application service.

Exports a store's non-archived products as CSV, optionally narrowed by
the export filter.
"""

from dataclasses import dataclass, field
from datetime import datetime

import structlog

from mercato.application.product_service import VALIDATION_FAILED
from mercato.catalog.export import CSV_CONTENT_TYPE, render_csv
from mercato.catalog.filters import ProductFilter
from mercato.catalog.repository import ProductRepository, get_product_repository
from mercato.domain.base import utc_now
from mercato.domain.state_machines import ProductStatus
from mercato.domain.validation import validate_required_id
from mercato.domain.value_objects import StoreId

logger = structlog.get_logger()


@dataclass
class ExportCatalogCommand:
    """Catalog export request."""

    store_id: StoreId | None
    seller_id: str | None
    apply_filters: bool = False
    search_query: str | None = None
    category: str | None = None
    status: ProductStatus | None = None


@dataclass
class ExportCatalogResult:
    """Result of a catalog export."""

    success: bool = True
    errors: list[str] = field(default_factory=list)
    error_code: str | None = None
    content: str = ""
    file_name: str = ""
    content_type: str = CSV_CONTENT_TYPE
    product_count: int = 0


def export_file_name(now: datetime) -> str:
    return f"products_export_{now:%Y%m%d_%H%M%S}.csv"


class ExportService:
    """Application service for catalog exports."""

    def __init__(
        self,
        product_repo: ProductRepository | None = None,
        request_id: str | None = None,
    ) -> None:
        self.product_repo = product_repo or get_product_repository()
        self.request_id = request_id

    async def export_catalog(self, command: ExportCatalogCommand) -> ExportCatalogResult:
        """Export a store's catalog.

        Args:
            command: Store, acting seller and optional filters.

        Returns:
            ExportCatalogResult with the CSV content and file name.
        """
        errors: list[str] = []
        validate_required_id(command.store_id, "Store ID", errors)
        validate_required_id(command.seller_id, "Seller ID", errors)
        if errors:
            return ExportCatalogResult(success=False, errors=errors, error_code=VALIDATION_FAILED)

        products = await self.product_repo.get_active_by_store_id(command.store_id)
        export_filter = ProductFilter(
            search=command.search_query,
            category=command.category,
            status=command.status,
        )
        filtered = command.apply_filters and not export_filter.is_empty
        if filtered:
            products = export_filter.apply(products)

        content = render_csv(products)
        file_name = export_file_name(utc_now())

        logger.info(
            "Catalog exported",
            store_id=str(command.store_id),
            product_count=len(products),
            filtered=filtered,
            request_id=self.request_id,
        )
        return ExportCatalogResult(
            content=content,
            file_name=file_name,
            product_count=len(products),
        )


def get_export_service(
    product_repo: ProductRepository | None = None,
    request_id: str | None = None,
) -> ExportService:
    """Get export service instance."""
    return ExportService(product_repo=product_repo, request_id=request_id)

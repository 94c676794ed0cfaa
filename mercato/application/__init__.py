"""Application layer module.

Contains application services (use cases) that orchestrate
domain logic and persistence.
"""

from mercato.application.bulk_update_service import (
    BulkUpdateCommand,
    BulkUpdateFailure,
    BulkUpdateResult,
    BulkUpdateService,
    get_bulk_update_service,
)
from mercato.application.export_service import (
    ExportCatalogCommand,
    ExportCatalogResult,
    ExportService,
    get_export_service,
)
from mercato.application.product_service import (
    NOT_AUTHORIZED,
    PRODUCT_NOT_FOUND,
    RULE_VIOLATION,
    VALIDATION_FAILED,
    ArchiveProductCommand,
    ChangeProductStatusCommand,
    CreateProductCommand,
    ProductService,
    UpdateProductCommand,
    get_product_service,
)

__all__ = [
    "NOT_AUTHORIZED",
    "PRODUCT_NOT_FOUND",
    "RULE_VIOLATION",
    "VALIDATION_FAILED",
    "ArchiveProductCommand",
    "BulkUpdateCommand",
    "BulkUpdateFailure",
    "BulkUpdateResult",
    "BulkUpdateService",
    "ChangeProductStatusCommand",
    "CreateProductCommand",
    "ExportCatalogCommand",
    "ExportCatalogResult",
    "ExportService",
    "ProductService",
    "UpdateProductCommand",
    "get_bulk_update_service",
    "get_export_service",
    "get_product_service",
]

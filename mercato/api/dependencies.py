"""FastAPI dependencies shared by the catalog routers."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request

from mercato.application.bulk_update_service import BulkUpdateService, get_bulk_update_service
from mercato.application.export_service import ExportService, get_export_service
from mercato.application.product_service import ProductService, get_product_service
from mercato.catalog.repository import (
    ProductRepository,
    SqlAlchemyProductRepository,
    get_product_repository,
)
from mercato.infrastructure.config import settings
from mercato.infrastructure.database import session_scope


async def get_repository() -> AsyncGenerator[ProductRepository, None]:
    """Yield the product repository for the configured backend.

    The database backend opens one session per request; it is committed
    after the handler returns and rolled back if it raises.
    """
    if settings.repository_backend == "database":
        async with session_scope() as session:
            yield SqlAlchemyProductRepository(session)
    else:
        yield get_product_repository()


Repository = Annotated[ProductRepository, Depends(get_repository)]


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def get_product_svc(request: Request, repo: Repository) -> ProductService:
    """Get product service with request ID."""
    return get_product_service(
        product_repo=repo,
        limits=settings.product_limits,
        request_id=_request_id(request),
    )


def get_bulk_update_svc(request: Request, repo: Repository) -> BulkUpdateService:
    """Get bulk update service with request ID."""
    return get_bulk_update_service(product_repo=repo, request_id=_request_id(request))


def get_export_svc(request: Request, repo: Repository) -> ExportService:
    """Get export service with request ID."""
    return get_export_service(product_repo=repo, request_id=_request_id(request))

"""Product catalog API endpoints.

Provides endpoints for the seller product lifecycle:
- POST /stores/{store_id}/products - create product (Draft)
- GET /stores/{store_id}/products - list store products
- GET /products/{product_id} - product details
- PUT /products/{product_id} - replace catalog fields
- POST /products/{product_id}/archive - archive product
- POST /products/{product_id}/status - change status
- POST /stores/{store_id}/products/bulk-update - bulk price/stock update
- GET /stores/{store_id}/products/export - CSV catalog export
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response

from mercato.api.dependencies import get_bulk_update_svc, get_export_svc, get_product_svc
from mercato.api.schemas import (
    BulkUpdateFailureSchema,
    BulkUpdateRequest,
    BulkUpdateResponse,
    ErrorResponse,
    ProductArchiveRequest,
    ProductCreatedResponse,
    ProductCreateRequest,
    ProductFields,
    ProductListResponse,
    ProductResponse,
    ProductStatusChangeRequest,
    ProductStatusEnum,
    ProductUpdateRequest,
    StatusChangeResponse,
)
from mercato.application.bulk_update_service import (
    BulkUpdateCommand,
    BulkUpdateResult,
    BulkUpdateService,
)
from mercato.application.export_service import (
    ExportCatalogCommand,
    ExportCatalogResult,
    ExportService,
)
from mercato.application.product_service import (
    NOT_AUTHORIZED,
    PRODUCT_NOT_FOUND,
    ArchiveProductCommand,
    ChangeProductStatusCommand,
    CreateProductCommand,
    ProductResult,
    ProductService,
    UpdateProductCommand,
)
from mercato.domain.entities import Product
from mercato.domain.state_machines import ProductStatus, can_activate
from mercato.domain.value_objects import (
    PriceDirective,
    PriceUpdateType,
    ProductDetails,
    ProductId,
    StockDirective,
    StockUpdateType,
    StoreId,
)

router = APIRouter(tags=["Products"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}

_ERROR_STATUS = {
    PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    NOT_AUTHORIZED: status.HTTP_403_FORBIDDEN,
}


# ============================================================================
# Converters
# ============================================================================


def product_to_response(product: Product) -> ProductResponse:
    """Convert Product entity to response schema."""
    return ProductResponse(
        id=str(product.id),
        store_id=str(product.store_id),
        sku=product.sku,
        title=product.title,
        description=product.description,
        price=product.price,
        stock=product.stock,
        category=product.category,
        weight=product.weight,
        length=product.length,
        width=product.width,
        height=product.height,
        shipping_methods=product.shipping_methods,
        images=product.images,
        status=ProductStatusEnum(product.status.value),
        can_activate=can_activate(product),
        last_updated_by=product.last_updated_by,
        archived_at=product.archived_at,
        archived_by=product.archived_by,
        version=product.version,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def fields_to_details(fields: ProductFields) -> ProductDetails:
    """Convert request fields to the ProductDetails value object."""
    return ProductDetails(
        title=fields.title,
        price=fields.price,
        stock=fields.stock,
        category=fields.category,
        description=fields.description,
        weight=fields.weight,
        length=fields.length,
        width=fields.width,
        height=fields.height,
        shipping_methods=fields.shipping_methods,
        images=fields.images,
        sku=fields.sku,
    )


def _store_id(value: UUID | None) -> StoreId | None:
    return StoreId(value=value) if value is not None else None


def raise_for_result(
    result: ProductResult | BulkUpdateResult | ExportCatalogResult, default_code: str
) -> None:
    """Raise HTTPException for a failed service result.

    Args:
        result: Service result with success, errors and error_code.
        default_code: Error code used when the result carries none.

    Raises:
        HTTPException: 404 for missing products, 403 for ownership
            failures, 400 otherwise.
    """
    if result.success:
        return
    error_code = result.error_code or default_code
    raise HTTPException(
        status_code=_ERROR_STATUS.get(error_code, status.HTTP_400_BAD_REQUEST),
        detail={
            "error_code": error_code,
            "message": "; ".join(result.errors),
            "details": [{"message": error} for error in result.errors],
        },
    )


def _not_found(product_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error_code": PRODUCT_NOT_FOUND,
            "message": f"Product not found: {product_id}",
        },
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/stores/{store_id}/products",
    response_model=ProductCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create product",
    description="Create a new product for a store. State: draft",
)
async def create_product(
    store_id: UUID,
    request: ProductCreateRequest,
    service: Annotated[ProductService, Depends(get_product_svc)],
) -> ProductCreatedResponse:
    """Create a product.

    Args:
        store_id: Owning store.
        request: Initial catalog fields.
        service: Product service.

    Returns:
        Created product.

    Raises:
        HTTPException: If the fields are invalid.
    """
    result = await service.create_product(
        CreateProductCommand(
            store_id=StoreId(value=store_id),
            details=fields_to_details(request),
            seller_id=request.seller_id,
        )
    )
    raise_for_result(result, "CREATE_FAILED")

    return ProductCreatedResponse(
        product_id=str(result.product_id),
        product=product_to_response(result.product),
    )


@router.get(
    "/stores/{store_id}/products",
    response_model=ProductListResponse,
    responses={401: {"model": ErrorResponse}},
    summary="List store products",
)
async def list_store_products(
    store_id: UUID,
    service: Annotated[ProductService, Depends(get_product_svc)],
) -> ProductListResponse:
    """List every product of a store, archived ones included."""
    products = await service.get_products_by_store(StoreId(value=store_id))
    return ProductListResponse(
        items=[product_to_response(p) for p in products],
        total=len(products),
    )


@router.post(
    "/stores/{store_id}/products/bulk-update",
    response_model=BulkUpdateResponse,
    responses=ERROR_RESPONSES,
    summary="Bulk update price and stock",
    description=(
        "Apply a price and/or stock directive to many products. "
        "Products that cannot be updated are reported individually."
    ),
)
async def bulk_update_products(
    store_id: UUID,
    request: BulkUpdateRequest,
    service: Annotated[BulkUpdateService, Depends(get_bulk_update_svc)],
) -> BulkUpdateResponse:
    """Bulk update price and stock.

    Args:
        store_id: Store whose products are updated.
        request: Target product IDs and directives.
        service: Bulk update service.

    Returns:
        Success count and per-product failures.

    Raises:
        HTTPException: If the request is malformed or no product was found.
    """
    price_update = None
    if request.price_update is not None:
        price_update = PriceDirective(
            update_type=PriceUpdateType(request.price_update.update_type.value),
            value=request.price_update.value,
        )
    stock_update = None
    if request.stock_update is not None:
        stock_update = StockDirective(
            update_type=StockUpdateType(request.stock_update.update_type.value),
            value=request.stock_update.value,
        )

    result = await service.bulk_update_price_stock(
        BulkUpdateCommand(
            store_id=StoreId(value=store_id),
            seller_id=request.seller_id,
            product_ids=[ProductId(value=pid) for pid in request.product_ids],
            price_update=price_update,
            stock_update=stock_update,
        )
    )
    raise_for_result(result, "BULK_UPDATE_FAILED")

    return BulkUpdateResponse(
        success_count=result.success_count,
        failure_count=result.failure_count,
        all_failed=result.all_failed,
        failures=[
            BulkUpdateFailureSchema(
                product_id=str(f.product_id),
                product_title=f.product_title,
                error=f.error,
            )
            for f in result.failures
        ],
    )


@router.get(
    "/stores/{store_id}/products/export",
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}},
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
    },
    summary="Export catalog as CSV",
    description="Export the store's non-archived products, optionally filtered.",
)
async def export_products(
    store_id: UUID,
    service: Annotated[ExportService, Depends(get_export_svc)],
    seller_id: Annotated[str | None, Query(description="Acting seller")] = None,
    apply_filters: Annotated[bool, Query(description="Apply the filters below")] = False,
    search: Annotated[str | None, Query(description="Title/description search")] = None,
    category: Annotated[str | None, Query(description="Category name")] = None,
    product_status: Annotated[
        ProductStatusEnum | None, Query(alias="status", description="Lifecycle status")
    ] = None,
) -> Response:
    """Export the catalog as a CSV download."""
    result = await service.export_catalog(
        ExportCatalogCommand(
            store_id=StoreId(value=store_id),
            seller_id=seller_id,
            apply_filters=apply_filters,
            search_query=search,
            category=category,
            status=ProductStatus(product_status.value) if product_status else None,
        )
    )
    raise_for_result(result, "EXPORT_FAILED")

    return Response(
        content=result.content,
        media_type=result.content_type,
        headers={
            "Content-Disposition": f'attachment; filename="{result.file_name}"',
            "X-Product-Count": str(result.product_count),
        },
    )


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Get product details",
)
async def get_product(
    product_id: UUID,
    service: Annotated[ProductService, Depends(get_product_svc)],
) -> ProductResponse:
    """Get a product by ID.

    Raises:
        HTTPException: If product not found.
    """
    product = await service.get_product(ProductId(value=product_id))
    if product is None:
        raise _not_found(product_id)
    return product_to_response(product)


@router.put(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Update product",
    description="Replace the catalog fields. Active products must keep passing the activation gate.",
)
async def update_product(
    product_id: UUID,
    request: ProductUpdateRequest,
    service: Annotated[ProductService, Depends(get_product_svc)],
) -> ProductResponse:
    """Replace a product's catalog fields.

    Args:
        product_id: Product to update.
        request: New fields, owner store and acting seller.
        service: Product service.

    Returns:
        Updated product.

    Raises:
        HTTPException: If not found, not owned, archived or invalid.
    """
    result = await service.update_product(
        UpdateProductCommand(
            product_id=ProductId(value=product_id),
            store_id=_store_id(request.store_id),
            seller_id=request.seller_id,
            details=fields_to_details(request),
        )
    )
    raise_for_result(result, "UPDATE_FAILED")
    return product_to_response(result.product)


@router.post(
    "/products/{product_id}/archive",
    response_model=ProductResponse,
    responses=ERROR_RESPONSES,
    summary="Archive product",
    description="Archive a product. State: archived (terminal)",
)
async def archive_product(
    product_id: UUID,
    request: ProductArchiveRequest,
    service: Annotated[ProductService, Depends(get_product_svc)],
) -> ProductResponse:
    """Archive a product."""
    result = await service.archive_product(
        ArchiveProductCommand(
            product_id=ProductId(value=product_id),
            store_id=_store_id(request.store_id),
            seller_id=request.seller_id,
        )
    )
    raise_for_result(result, "ARCHIVE_FAILED")
    return product_to_response(result.product)


@router.post(
    "/products/{product_id}/status",
    response_model=StatusChangeResponse,
    responses=ERROR_RESPONSES,
    summary="Change product status",
)
async def change_product_status(
    product_id: UUID,
    request: ProductStatusChangeRequest,
    service: Annotated[ProductService, Depends(get_product_svc)],
) -> StatusChangeResponse:
    """Move a product to another status.

    Args:
        product_id: Product to change.
        request: Requested status, owner store, actor and override flag.
        service: Product service.

    Returns:
        Product and whether its status changed.

    Raises:
        HTTPException: If the transition is rejected.
    """
    result = await service.change_product_status(
        ChangeProductStatusCommand(
            product_id=ProductId(value=product_id),
            new_status=ProductStatus(request.status.value),
            seller_id=request.seller_id,
            store_id=_store_id(request.store_id),
            is_admin_override=request.is_admin_override,
        )
    )
    raise_for_result(result, "STATUS_CHANGE_FAILED")
    return StatusChangeResponse(
        changed=result.changed,
        product=product_to_response(result.product),
    )

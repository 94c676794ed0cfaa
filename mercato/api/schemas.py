"""API schemas for the Mercato catalog API.

Pydantic models for request/response validation and serialization.
Field rules (lengths, positivity) are enforced by the domain so that
violations come back as the catalog's own messages.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class ProductStatusEnum(str, Enum):
    """Product lifecycle statuses."""

    DRAFT = "draft"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"
    OUT_OF_STOCK = "out_of_stock"
    ARCHIVED = "archived"


class PriceUpdateTypeEnum(str, Enum):
    """Bulk price update kinds."""

    FIXED = "fixed"
    PERCENTAGE_INCREASE = "percentage_increase"
    PERCENTAGE_DECREASE = "percentage_decrease"
    AMOUNT_INCREASE = "amount_increase"
    AMOUNT_DECREASE = "amount_decrease"


class StockUpdateTypeEnum(str, Enum):
    """Bulk stock update kinds."""

    FIXED = "fixed"
    INCREASE = "increase"
    DECREASE = "decrease"


# ============================================================================
# Product Schemas
# ============================================================================


class ProductFields(BaseModel):
    """Seller-editable catalog fields."""

    title: str = Field(..., description="Product title")
    price: Decimal = Field(..., description="Unit price")
    stock: int = Field(..., description="Units available")
    category: str = Field(..., description="Category name")
    description: str | None = Field(default=None, description="Long description")
    weight: Decimal | None = Field(default=None, description="Weight in kg")
    length: Decimal | None = Field(default=None, description="Length in cm")
    width: Decimal | None = Field(default=None, description="Width in cm")
    height: Decimal | None = Field(default=None, description="Height in cm")
    shipping_methods: str | None = Field(default=None, description="Serialized shipping methods")
    images: str | None = Field(
        default=None, description="Serialized image list, e.g. '[\"front.jpg\"]'"
    )
    sku: str | None = Field(default=None, description="Seller stock keeping unit")


class ProductCreateRequest(ProductFields):
    """Request to create a product."""

    seller_id: str | None = Field(default=None, description="Acting seller")


class ProductUpdateRequest(ProductFields):
    """Request to replace a product's catalog fields."""

    store_id: UUID | None = Field(default=None, description="Store that owns the product")
    seller_id: str | None = Field(default=None, description="Acting seller")


class ProductArchiveRequest(BaseModel):
    """Request to archive a product."""

    store_id: UUID | None = Field(default=None, description="Store that owns the product")
    seller_id: str | None = Field(default=None, description="Acting seller")


class ProductStatusChangeRequest(BaseModel):
    """Request to move a product to another status."""

    status: ProductStatusEnum = Field(..., description="Requested status")
    store_id: UUID | None = Field(
        default=None, description="Owning store; optional with admin override"
    )
    seller_id: str | None = Field(default=None, description="Acting user")
    is_admin_override: bool = Field(default=False, description="Privileged admin change")


class ProductResponse(ProductFields):
    """Product details."""

    id: str
    store_id: str
    status: ProductStatusEnum
    can_activate: bool = Field(..., description="Whether the activation gate passes")
    last_updated_by: str | None = None
    archived_at: datetime | None = None
    archived_by: str | None = None
    version: int
    created_at: datetime
    updated_at: datetime


class ProductListResponse(BaseModel):
    """Products of a store."""

    items: list[ProductResponse]
    total: int


class ProductCreatedResponse(BaseModel):
    """Response to product creation."""

    product_id: str
    product: ProductResponse


class StatusChangeResponse(BaseModel):
    """Response to a status change."""

    changed: bool = Field(..., description="False when the status was already current")
    product: ProductResponse


# ============================================================================
# Bulk Update Schemas
# ============================================================================


class PriceUpdateSchema(BaseModel):
    """Price directive."""

    update_type: PriceUpdateTypeEnum
    value: Decimal


class StockUpdateSchema(BaseModel):
    """Stock directive."""

    update_type: StockUpdateTypeEnum
    value: int


class BulkUpdateRequest(BaseModel):
    """Request to update price and/or stock of many products."""

    seller_id: str | None = Field(default=None, description="Acting seller")
    product_ids: list[UUID] = Field(default_factory=list, description="Target products")
    price_update: PriceUpdateSchema | None = None
    stock_update: StockUpdateSchema | None = None


class BulkUpdateFailureSchema(BaseModel):
    """A product the batch could not update."""

    product_id: str
    product_title: str
    error: str


class BulkUpdateResponse(BaseModel):
    """Outcome of a bulk update."""

    success_count: int
    failure_count: int
    all_failed: bool
    failures: list[BulkUpdateFailureSchema]

"""SQLAlchemy models for the product catalog.

Defines the products table and its mapping to the Product aggregate.
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID as PyUUID

from sqlalchemy import DateTime, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from mercato.domain.entities import Product
from mercato.domain.state_machines import ProductStatus
from mercato.domain.value_objects import ProductId, StoreId
from mercato.infrastructure.database import Base


class ProductRecord(Base):
    """Persistent row for a seller product.

    Attributes:
        id: Product identifier (UUID).
        store_id: Owning store.
        status: Lifecycle status value (e.g. "active").
        version: Optimistic concurrency counter (mapper version_id_col).
    """

    __tablename__ = "products"

    id: Mapped[PyUUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    store_id: Mapped[PyUUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    sku: Mapped[str | None] = mapped_column(String(100), nullable=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    weight: Mapped[Decimal | None] = mapped_column(Numeric(10, 3), nullable=True)
    length: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    width: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    height: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    shipping_methods: Mapped[str | None] = mapped_column(String(500), nullable=True)
    images: Mapped[str | None] = mapped_column(String(4000), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, index=True, default=ProductStatus.DRAFT.value
    )
    last_updated_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    archived_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # UPDATEs carry "AND version = <loaded>" and bump the counter; a lost
    # race surfaces as StaleDataError on flush.
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductRecord(id={self.id}, status={self.status}, title={self.title[:30]})>"

    @classmethod
    def from_entity(cls, product: Product) -> "ProductRecord":
        """Build a new row from a product aggregate."""
        record = cls(id=product.id.value)
        record.copy_from(product)
        return record

    def copy_from(self, product: Product) -> None:
        """Overwrite the mutable columns with the aggregate's state.

        The version column is left untouched; the mapper increments it.
        """
        self.store_id = product.store_id.value
        self.sku = product.sku
        self.title = product.title
        self.description = product.description
        self.price = product.price
        self.stock = product.stock
        self.category = product.category
        self.weight = product.weight
        self.length = product.length
        self.width = product.width
        self.height = product.height
        self.shipping_methods = product.shipping_methods
        self.images = product.images
        self.status = product.status.value
        self.last_updated_by = product.last_updated_by
        self.archived_at = product.archived_at
        self.archived_by = product.archived_by
        self.created_at = product.created_at
        self.updated_at = product.updated_at

    def to_entity(self) -> Product:
        """Rehydrate the Product aggregate from this row."""
        return Product(
            id=ProductId(value=self.id),
            store_id=StoreId(value=self.store_id),
            sku=self.sku,
            title=self.title,
            description=self.description,
            price=self.price,
            stock=self.stock,
            category=self.category,
            weight=self.weight,
            length=self.length,
            width=self.width,
            height=self.height,
            shipping_methods=self.shipping_methods,
            images=self.images,
            status=ProductStatus(self.status),
            last_updated_by=self.last_updated_by,
            archived_at=self.archived_at,
            archived_by=self.archived_by,
            version=self.version,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

"""Product repositories.

The application services depend on the ProductRepository protocol only.
Two implementations are provided: an in-memory store used by default and
in tests, and a SQLAlchemy store over the products table. Both enforce
optimistic concurrency on the aggregate's version.
"""

import copy
from collections.abc import Sequence
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from mercato.catalog.models import ProductRecord
from mercato.domain.entities import Product
from mercato.domain.exceptions import ConcurrencyError
from mercato.domain.state_machines import ProductStatus
from mercato.domain.value_objects import ProductId, StoreId


class ProductRepository(Protocol):
    """Persistence operations consumed by the catalog services."""

    async def get_by_id(self, product_id: ProductId) -> Product | None: ...

    async def get_by_ids(self, product_ids: Sequence[ProductId]) -> list[Product]: ...

    async def get_by_store_id(self, store_id: StoreId) -> list[Product]: ...

    async def get_active_by_store_id(self, store_id: StoreId) -> list[Product]: ...

    async def save(self, product: Product) -> None: ...

    async def save_all(self, products: Sequence[Product]) -> None: ...


def _unique(product_ids: Sequence[ProductId]) -> list[ProductId]:
    seen: set[ProductId] = set()
    ordered: list[ProductId] = []
    for product_id in product_ids:
        if product_id not in seen:
            seen.add(product_id)
            ordered.append(product_id)
    return ordered


# ============================================================================
# In-Memory Repository
# ============================================================================


class InMemoryProductRepository:
    """In-memory repository for products.

    Products are stored and returned as deep copies, so a loaded product
    is owned by the caller until it is handed back through save().
    """

    def __init__(self) -> None:
        self._products: dict[ProductId, Product] = {}

    def _load(self, product: Product) -> Product:
        return copy.deepcopy(product)

    def _check_version(self, product: Product) -> None:
        stored = self._products.get(product.id)
        if stored is not None and stored.version != product.version:
            raise ConcurrencyError(str(product.id), product.version, stored.version)

    def _store(self, product: Product) -> None:
        product.version += 1
        stored = copy.deepcopy(product)
        stored.collect_events()
        self._products[product.id] = stored

    async def get_by_id(self, product_id: ProductId) -> Product | None:
        """Get product by ID."""
        product = self._products.get(product_id)
        return self._load(product) if product else None

    async def get_by_ids(self, product_ids: Sequence[ProductId]) -> list[Product]:
        """Get products in request order, skipping unknown and repeated IDs."""
        return [
            self._load(self._products[pid])
            for pid in _unique(product_ids)
            if pid in self._products
        ]

    async def get_by_store_id(self, store_id: StoreId) -> list[Product]:
        """Get every product of a store, newest first."""
        products = [p for p in self._products.values() if p.store_id == store_id]
        products.sort(key=lambda p: p.created_at, reverse=True)
        return [self._load(p) for p in products]

    async def get_active_by_store_id(self, store_id: StoreId) -> list[Product]:
        """Get the non-archived products of a store, newest first."""
        return [p for p in await self.get_by_store_id(store_id) if not p.is_archived]

    async def save(self, product: Product) -> None:
        """Save a product.

        Raises:
            ConcurrencyError: If the stored version differs from the product's.
        """
        self._check_version(product)
        self._store(product)

    async def save_all(self, products: Sequence[Product]) -> None:
        """Save several products; nothing is written if any version is stale."""
        for product in products:
            self._check_version(product)
        for product in products:
            self._store(product)

    def clear(self) -> None:
        """Remove all products."""
        self._products.clear()


# Global repository instance
_product_repo: InMemoryProductRepository | None = None


def get_product_repository() -> InMemoryProductRepository:
    """Get in-memory product repository singleton."""
    global _product_repo
    if _product_repo is None:
        _product_repo = InMemoryProductRepository()
    return _product_repo


def reset_product_repository() -> None:
    """Drop the in-memory repository singleton (used by tests)."""
    global _product_repo
    _product_repo = None


# ============================================================================
# SQLAlchemy Repository
# ============================================================================


class SqlAlchemyProductRepository:
    """Repository for product database operations.

    Example usage:
        async with get_session_factory()() as session:
            repo = SqlAlchemyProductRepository(session)
            products = await repo.get_active_by_store_id(store_id)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def get_by_id(self, product_id: ProductId) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.

        Returns:
            Product if found, None otherwise.
        """
        record = await self.session.get(ProductRecord, product_id.value)
        return record.to_entity() if record else None

    async def get_by_ids(self, product_ids: Sequence[ProductId]) -> list[Product]:
        """Get products in request order, skipping unknown and repeated IDs."""
        ordered = _unique(product_ids)
        if not ordered:
            return []
        result = await self.session.execute(
            select(ProductRecord).where(ProductRecord.id.in_([pid.value for pid in ordered]))
        )
        by_id = {record.id: record for record in result.scalars()}
        return [by_id[pid.value].to_entity() for pid in ordered if pid.value in by_id]

    async def get_by_store_id(self, store_id: StoreId) -> list[Product]:
        """Get every product of a store, newest first."""
        result = await self.session.execute(
            select(ProductRecord)
            .where(ProductRecord.store_id == store_id.value)
            .order_by(ProductRecord.created_at.desc())
        )
        return [record.to_entity() for record in result.scalars()]

    async def get_active_by_store_id(self, store_id: StoreId) -> list[Product]:
        """Get the non-archived products of a store, newest first."""
        result = await self.session.execute(
            select(ProductRecord)
            .where(
                ProductRecord.store_id == store_id.value,
                ProductRecord.status != ProductStatus.ARCHIVED.value,
            )
            .order_by(ProductRecord.created_at.desc())
        )
        return [record.to_entity() for record in result.scalars()]

    async def _stage(self, product: Product) -> ProductRecord:
        record = await self.session.get(ProductRecord, product.id.value)
        if record is None:
            record = ProductRecord.from_entity(product)
            self.session.add(record)
        else:
            if record.version != product.version:
                raise ConcurrencyError(str(product.id), product.version, record.version)
            record.copy_from(product)
        return record

    async def _flush(self, product: Product, record: ProductRecord) -> None:
        try:
            await self.session.flush()
        except StaleDataError as exc:
            # Another transaction committed between our read and the UPDATE.
            raise ConcurrencyError(str(product.id), product.version) from exc
        product.version = record.version

    async def save(self, product: Product) -> None:
        """Save a product to database.

        Raises:
            ConcurrencyError: If the stored version differs from the product's,
                including when another transaction wins the race to update it.
        """
        record = await self._stage(product)
        await self._flush(product, record)

    async def save_all(self, products: Sequence[Product]) -> None:
        """Save several products in the session's transaction.

        Each product is flushed on its own so a conflict names the product;
        the caller's transaction rollback discards the earlier writes.
        """
        for product in products:
            record = await self._stage(product)
            await self._flush(product, record)

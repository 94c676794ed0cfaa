"""Tests for the SQLAlchemy product repository over an in-memory SQLite database."""

from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.pool import StaticPool

from mercato.catalog.models import ProductRecord
from mercato.catalog.repository import SqlAlchemyProductRepository
from mercato.domain import ConcurrencyError, ProductId, ProductStatus
from mercato.infrastructure.database import Base


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory over a fresh in-memory database with the products table."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


async def _save(session_factory, *products) -> None:
    async with session_factory() as session:
        await SqlAlchemyProductRepository(session).save_all(list(products))
        await session.commit()


class TestSqlAlchemyProductRepository:
    """Tests for SqlAlchemyProductRepository."""

    @pytest.mark.asyncio
    async def test_save_and_get(self, session_factory, make_product) -> None:
        product = make_product(height=Decimal("7.5"))
        async with session_factory() as session:
            await SqlAlchemyProductRepository(session).save(product)
            await session.commit()
        assert product.version == 1

        async with session_factory() as session:
            loaded = await SqlAlchemyProductRepository(session).get_by_id(product.id)

        assert loaded == product
        assert loaded.version == 1
        assert loaded.price == Decimal("100.00")
        assert loaded.height == Decimal("7.5")
        assert loaded.store_id == product.store_id
        assert loaded.status == ProductStatus.DRAFT

    @pytest.mark.asyncio
    async def test_get_missing(self, session_factory) -> None:
        async with session_factory() as session:
            repo = SqlAlchemyProductRepository(session)
            assert await repo.get_by_id(ProductId.generate()) is None
            assert await repo.get_by_ids([]) == []

    @pytest.mark.asyncio
    async def test_get_by_ids_keeps_request_order(self, session_factory, make_product) -> None:
        first, second = make_product(), make_product()
        await _save(session_factory, first, second)

        async with session_factory() as session:
            loaded = await SqlAlchemyProductRepository(session).get_by_ids(
                [second.id, ProductId.generate(), first.id, second.id]
            )
        assert [p.id for p in loaded] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_store_queries(self, session_factory, make_product, store_id) -> None:
        active = make_product(store_id=store_id, status=ProductStatus.ACTIVE)
        archived = make_product(store_id=store_id, status=ProductStatus.ARCHIVED)
        foreign = make_product()
        await _save(session_factory, active, archived, foreign)

        async with session_factory() as session:
            repo = SqlAlchemyProductRepository(session)
            all_ids = {p.id for p in await repo.get_by_store_id(store_id)}
            active_ids = [p.id for p in await repo.get_active_by_store_id(store_id)]

        assert all_ids == {active.id, archived.id}
        assert active_ids == [active.id]

    @pytest.mark.asyncio
    async def test_update_bumps_version(self, session_factory, make_product) -> None:
        product = make_product()
        await _save(session_factory, product)

        async with session_factory() as session:
            repo = SqlAlchemyProductRepository(session)
            loaded = await repo.get_by_id(product.id)
            loaded.apply_price_stock(Decimal("90"), 4, "seller-2")
            await repo.save(loaded)
            await session.commit()
        assert loaded.version == 2

        async with session_factory() as session:
            stored = await SqlAlchemyProductRepository(session).get_by_id(product.id)
        assert stored.version == 2
        assert stored.price == Decimal("90")
        assert stored.stock == 4
        assert stored.last_updated_by == "seller-2"

    @pytest.mark.asyncio
    async def test_save_all_bumps_every_version(self, session_factory, make_product) -> None:
        a, b = make_product(), make_product()
        await _save(session_factory, a, b)

        async with session_factory() as session:
            repo = SqlAlchemyProductRepository(session)
            loaded = await repo.get_by_ids([a.id, b.id])
            for product in loaded:
                product.stock += 1
            await repo.save_all(loaded)
            await session.commit()

        assert [p.version for p in loaded] == [2, 2]

    @pytest.mark.asyncio
    async def test_stale_save_raises(self, session_factory, make_product) -> None:
        product = make_product()
        await _save(session_factory, product)

        async with session_factory() as session:
            stale = await SqlAlchemyProductRepository(session).get_by_id(product.id)

        async with session_factory() as session:
            repo = SqlAlchemyProductRepository(session)
            fresh = await repo.get_by_id(product.id)
            fresh.price = Decimal("90")
            await repo.save(fresh)
            await session.commit()

        async with session_factory() as session:
            stale.price = Decimal("80")
            with pytest.raises(ConcurrencyError) as exc_info:
                await SqlAlchemyProductRepository(session).save(stale)
        assert exc_info.value.details["expected_version"] == 1
        assert exc_info.value.details["actual_version"] == 2

        async with session_factory() as session:
            stored = await SqlAlchemyProductRepository(session).get_by_id(product.id)
        assert stored.price == Decimal("90")

    @pytest.mark.asyncio
    async def test_update_racing_a_committed_write_raises(
        self, session_factory, make_product
    ) -> None:
        """The row moves on after our read; the versioned UPDATE matches nothing."""
        product = make_product()
        await _save(session_factory, product)

        async with session_factory() as session:
            repo = SqlAlchemyProductRepository(session)
            loaded = await repo.get_by_id(product.id)

            table = ProductRecord.__table__
            await session.execute(
                update(table).where(table.c.id == product.id.value).values(version=2)
            )

            loaded.price = Decimal("80")
            with pytest.raises(ConcurrencyError) as exc_info:
                await repo.save(loaded)

        assert isinstance(exc_info.value.__cause__, StaleDataError)
        assert exc_info.value.details["product_id"] == str(product.id)
        assert exc_info.value.details["expected_version"] == 1

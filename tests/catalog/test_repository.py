"""Tests for the in-memory product repository."""

from decimal import Decimal

import pytest

from mercato.catalog.repository import (
    InMemoryProductRepository,
    get_product_repository,
)
from mercato.domain import ConcurrencyError, Product, ProductId, ProductStatus


class TestInMemoryProductRepository:
    """Tests for InMemoryProductRepository."""

    @pytest.mark.asyncio
    async def test_save_and_get(self, repo, make_product) -> None:
        product = make_product()
        await repo.save(product)

        loaded = await repo.get_by_id(product.id)
        assert loaded == product
        assert loaded is not product
        assert loaded.version == 1
        assert product.version == 1

    @pytest.mark.asyncio
    async def test_loaded_copies_are_owned(self, repo, make_product) -> None:
        """Mutating a loaded product does not touch the stored one."""
        product = make_product()
        await repo.save(product)

        loaded = await repo.get_by_id(product.id)
        loaded.title = "Changed"

        again = await repo.get_by_id(product.id)
        assert again.title == "Blue ceramic mug"

    @pytest.mark.asyncio
    async def test_get_missing(self, repo) -> None:
        assert await repo.get_by_id(ProductId.generate()) is None

    @pytest.mark.asyncio
    async def test_get_by_ids_keeps_request_order(self, repo, make_product) -> None:
        first, second = make_product(), make_product()
        await repo.save_all([first, second])

        unknown = ProductId.generate()
        loaded = await repo.get_by_ids([second.id, unknown, first.id, second.id])
        assert [p.id for p in loaded] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_store_queries(self, repo, make_product, store_id) -> None:
        active = make_product(store_id=store_id, status=ProductStatus.ACTIVE)
        archived = make_product(store_id=store_id, status=ProductStatus.ARCHIVED)
        foreign = make_product()
        await repo.save_all([active, archived, foreign])

        all_ids = {p.id for p in await repo.get_by_store_id(store_id)}
        assert all_ids == {active.id, archived.id}
        assert [p.id for p in await repo.get_active_by_store_id(store_id)] == [active.id]

    @pytest.mark.asyncio
    async def test_stale_save_raises(self, repo, make_product) -> None:
        product = make_product()
        await repo.save(product)

        first = await repo.get_by_id(product.id)
        second = await repo.get_by_id(product.id)
        first.price = Decimal("90")
        await repo.save(first)

        second.price = Decimal("80")
        with pytest.raises(ConcurrencyError):
            await repo.save(second)
        assert (await repo.get_by_id(product.id)).price == Decimal("90")

    @pytest.mark.asyncio
    async def test_save_all_is_all_or_nothing_on_conflict(self, repo, make_product) -> None:
        a, b = make_product(), make_product()
        await repo.save_all([a, b])

        stale_b = await repo.get_by_id(b.id)
        fresh_b = await repo.get_by_id(b.id)
        await repo.save(fresh_b)

        loaded_a = await repo.get_by_id(a.id)
        loaded_a.stock = 99
        with pytest.raises(ConcurrencyError):
            await repo.save_all([loaded_a, stale_b])
        assert (await repo.get_by_id(a.id)).stock == 10

    @pytest.mark.asyncio
    async def test_stored_copy_has_no_pending_events(self, repo, make_details, store_id) -> None:
        product = Product.create(store_id, make_details())
        await repo.save(product)

        loaded = await repo.get_by_id(product.id)
        assert loaded.collect_events() == []
        assert len(product.collect_events()) == 1


def test_singleton() -> None:
    assert get_product_repository() is get_product_repository()
    assert isinstance(get_product_repository(), InMemoryProductRepository)

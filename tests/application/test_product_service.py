"""Tests for the product lifecycle service."""

import pytest

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
    UpdateProductResult,
)
from mercato.domain import ProductId, ProductStatus, StoreId


class FailingRepository:
    """Repository whose writes fail like a lost database connection."""

    def __init__(self, inner) -> None:
        self.inner = inner

    async def get_by_id(self, product_id):
        return await self.inner.get_by_id(product_id)

    async def save(self, product) -> None:
        raise ConnectionError("database unavailable")


@pytest.fixture
def service(repo) -> ProductService:
    return ProductService(product_repo=repo)


@pytest.fixture
def stored(repo, make_product, store_id):
    """Persist a product for the store and return a factory for more."""

    async def factory(status: ProductStatus = ProductStatus.DRAFT, **overrides):
        product = make_product(store_id=store_id, status=status, **overrides)
        await repo.save(product)
        return product

    return factory


class TestCreateProduct:
    """Tests for create_product."""

    @pytest.mark.asyncio
    async def test_creates_draft(self, service, repo, make_details, store_id) -> None:
        result = await service.create_product(
            CreateProductCommand(store_id=store_id, details=make_details(), seller_id="seller-1")
        )

        assert result.success
        saved = await repo.get_by_id(result.product_id)
        assert saved.status == ProductStatus.DRAFT
        assert saved.store_id == store_id

    @pytest.mark.asyncio
    async def test_collects_all_violations(self, service, make_details) -> None:
        result = await service.create_product(
            CreateProductCommand(store_id=None, details=make_details(title="", stock=-1))
        )

        assert not result.success
        assert result.error_code == VALIDATION_FAILED
        assert result.errors == [
            "Store ID is required.",
            "Title is required.",
            "Stock cannot be negative.",
        ]


class TestUpdateProduct:
    """Tests for update_product."""

    @pytest.mark.asyncio
    async def test_updates_fields(self, service, repo, stored, store_id, make_details) -> None:
        product = await stored()
        result = await service.update_product(
            UpdateProductCommand(
                product_id=product.id,
                store_id=store_id,
                seller_id="seller-2",
                details=make_details(title="Large blue mug"),
            )
        )

        assert result.success
        saved = await repo.get_by_id(product.id)
        assert saved.title == "Large blue mug"
        assert saved.last_updated_by == "seller-2"

    @pytest.mark.asyncio
    async def test_missing_ids(self, service, make_details) -> None:
        result = await service.update_product(
            UpdateProductCommand(product_id=None, store_id=None, seller_id=" ", details=make_details())
        )
        assert result.errors == [
            "Product ID is required.",
            "Store ID is required.",
            "Seller ID is required.",
        ]

    @pytest.mark.asyncio
    async def test_not_found(self, service, store_id, make_details) -> None:
        result = await service.update_product(
            UpdateProductCommand(
                product_id=ProductId.generate(),
                store_id=store_id,
                seller_id="seller-1",
                details=make_details(),
            )
        )
        assert result.error_code == PRODUCT_NOT_FOUND
        assert result.errors == ["Product not found."]

    @pytest.mark.asyncio
    async def test_other_store_not_authorized(self, service, stored, make_details) -> None:
        product = await stored()
        result = await service.update_product(
            UpdateProductCommand(
                product_id=product.id,
                store_id=StoreId.generate(),
                seller_id="seller-1",
                details=make_details(),
            )
        )
        assert result.is_not_authorized
        assert result.errors == ["You are not authorized to update this product."]

    @pytest.mark.asyncio
    async def test_archived_rejected(self, service, stored, store_id, make_details) -> None:
        product = await stored(status=ProductStatus.ARCHIVED)
        result = await service.update_product(
            UpdateProductCommand(
                product_id=product.id, store_id=store_id, seller_id="seller-1", details=make_details()
            )
        )
        assert result.error_code == RULE_VIOLATION
        assert result.errors == ["Cannot update an archived product."]

    @pytest.mark.asyncio
    async def test_active_update_rechecks_gate(
        self, service, repo, stored, store_id, make_details
    ) -> None:
        product = await stored(status=ProductStatus.ACTIVE)
        result = await service.update_product(
            UpdateProductCommand(
                product_id=product.id,
                store_id=store_id,
                seller_id="seller-1",
                details=make_details(description=""),
            )
        )

        assert result.error_code == RULE_VIOLATION
        assert result.errors == ["Description is required to set product to Active."]
        saved = await repo.get_by_id(product.id)
        assert saved.status == ProductStatus.ACTIVE
        assert saved.description == "Hand-glazed 350ml mug"


class TestArchiveProduct:
    """Tests for archive_product."""

    @pytest.mark.asyncio
    async def test_archives(self, service, repo, stored, store_id) -> None:
        product = await stored(status=ProductStatus.ACTIVE)
        result = await service.archive_product(
            ArchiveProductCommand(product_id=product.id, store_id=store_id, seller_id="seller-3")
        )

        assert result.success
        saved = await repo.get_by_id(product.id)
        assert saved.status == ProductStatus.ARCHIVED
        assert saved.archived_by == "seller-3"
        assert saved.archived_at is not None

    @pytest.mark.asyncio
    async def test_already_archived(self, service, stored, store_id) -> None:
        product = await stored(status=ProductStatus.ARCHIVED)
        result = await service.archive_product(
            ArchiveProductCommand(product_id=product.id, store_id=store_id, seller_id="seller-3")
        )
        assert result.errors == ["Product is already archived."]

    @pytest.mark.asyncio
    async def test_other_store(self, service, stored) -> None:
        product = await stored()
        result = await service.archive_product(
            ArchiveProductCommand(product_id=product.id, store_id=StoreId.generate(), seller_id="s")
        )
        assert result.error_code == NOT_AUTHORIZED
        assert result.errors == ["You are not authorized to archive this product."]


class TestChangeProductStatus:
    """Tests for change_product_status."""

    @pytest.mark.asyncio
    async def test_activates(self, service, repo, stored, store_id) -> None:
        product = await stored()
        result = await service.change_product_status(
            ChangeProductStatusCommand(
                product_id=product.id,
                new_status=ProductStatus.ACTIVE,
                seller_id="seller-1",
                store_id=store_id,
            )
        )

        assert result.success
        assert result.changed
        assert (await repo.get_by_id(product.id)).status == ProductStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_gate_failure_keeps_draft(self, service, repo, stored, store_id) -> None:
        product = await stored(description="")
        result = await service.change_product_status(
            ChangeProductStatusCommand(
                product_id=product.id,
                new_status=ProductStatus.ACTIVE,
                seller_id="seller-1",
                store_id=store_id,
            )
        )

        assert result.error_code == RULE_VIOLATION
        assert result.errors == ["Description is required to set product to Active."]
        assert (await repo.get_by_id(product.id)).status == ProductStatus.DRAFT

    @pytest.mark.asyncio
    async def test_same_status_is_persisted_noop(self, service, repo, stored, store_id) -> None:
        product = await stored(status=ProductStatus.INACTIVE)
        result = await service.change_product_status(
            ChangeProductStatusCommand(
                product_id=product.id,
                new_status=ProductStatus.INACTIVE,
                seller_id="seller-5",
                store_id=store_id,
            )
        )

        assert result.success
        assert not result.changed
        saved = await repo.get_by_id(product.id)
        assert saved.last_updated_by == "seller-5"
        assert saved.version == 2

    @pytest.mark.asyncio
    async def test_store_required_without_override(self, service, stored) -> None:
        product = await stored()
        result = await service.change_product_status(
            ChangeProductStatusCommand(
                product_id=product.id, new_status=ProductStatus.ACTIVE, seller_id="seller-1"
            )
        )
        assert result.errors == ["Store ID is required."]

    @pytest.mark.asyncio
    async def test_admin_override_skips_ownership(self, service, repo, stored) -> None:
        product = await stored(status=ProductStatus.ACTIVE)
        result = await service.change_product_status(
            ChangeProductStatusCommand(
                product_id=product.id,
                new_status=ProductStatus.DRAFT,
                seller_id="admin-1",
                is_admin_override=True,
            )
        )

        assert result.success
        assert (await repo.get_by_id(product.id)).status == ProductStatus.DRAFT

    @pytest.mark.asyncio
    async def test_wrong_store_without_override(self, service, stored) -> None:
        product = await stored()
        result = await service.change_product_status(
            ChangeProductStatusCommand(
                product_id=product.id,
                new_status=ProductStatus.ARCHIVED,
                seller_id="seller-1",
                store_id=StoreId.generate(),
            )
        )
        assert result.errors == ["You are not authorized to change this product's status."]

    @pytest.mark.asyncio
    async def test_archived_rejects_even_admin(self, service, stored) -> None:
        product = await stored(status=ProductStatus.ARCHIVED)
        result = await service.change_product_status(
            ChangeProductStatusCommand(
                product_id=product.id,
                new_status=ProductStatus.DRAFT,
                seller_id="admin-1",
                is_admin_override=True,
            )
        )
        assert result.errors == ["Cannot change the status of an archived product."]


class TestRepositoryErrors:
    """Infrastructure failures reach the caller unchanged."""

    @pytest.mark.asyncio
    async def test_save_failure_propagates(self, repo, stored, store_id) -> None:
        product = await stored()
        service = ProductService(product_repo=FailingRepository(repo))

        with pytest.raises(ConnectionError):
            await service.archive_product(
                ArchiveProductCommand(product_id=product.id, store_id=store_id, seller_id="s")
            )


def test_failure_builds_the_calling_result_type() -> None:
    result = UpdateProductResult.failure("Cannot update an archived product.", RULE_VIOLATION)

    assert isinstance(result, UpdateProductResult)
    assert not result.success
    assert result.errors == ["Cannot update an archived product."]
    assert result.product is None

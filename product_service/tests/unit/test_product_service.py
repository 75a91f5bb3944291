from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from product_service.app.core.exceptions import (
    ProductNotFoundError,
    ProductValidationError,
)
from product_service.app.events.event_producers import ProductEventProducer
from product_service.app.events.schemas import EventType
from product_service.app.models.product import Product
from product_service.app.repository.product_repository import ProductRepository
from product_service.app.schemas.product import ProductRequest
from product_service.app.services.product_service import ProductService


class TestProductService:
    """Unit tests for ProductService with mocked collaborators."""

    @pytest.fixture
    def mock_repository(self):
        return Mock(spec=ProductRepository)

    @pytest.fixture
    def mock_event_producer(self):
        return Mock(spec=ProductEventProducer)

    @pytest.fixture
    def product_service(self, mock_repository, mock_event_producer):
        return ProductService(mock_repository, mock_event_producer)

    @pytest.fixture
    def stored_product(self):
        return Product(
            id="a1b2c3",
            name="Gaming Laptop",
            description="High-performance laptop with RTX 4080 GPU",
            price=Decimal("1999.99"),
            category="Electronics",
            stock_quantity=15,
            created_at=datetime(2024, 1, 1, 12, 0, 0),
            updated_at=datetime(2024, 1, 1, 12, 0, 0),
        )

    @pytest.fixture
    def update_request(self):
        return ProductRequest(
            name="Gaming Laptop Pro",
            description="Updated laptop with RTX 4090 GPU",
            price=Decimal("2499.00"),
            category="Electronics",
            stock_quantity=7,
        )

    @staticmethod
    def _assign_id(product):
        product.id = "generated-id"
        return product

    # Tests for create_product
    @pytest.mark.asyncio
    async def test_create_product_success(
        self, product_service, sample_product_request, mock_event_producer
    ):
        product_service.repository.save = AsyncMock(side_effect=self._assign_id)

        result = await product_service.create_product(sample_product_request)

        assert result.id == "generated-id"
        assert result.created_at is not None
        assert result.created_at == result.updated_at
        assert result.price == Decimal("1999.99")
        product_service.repository.save.assert_awaited_once()

        mock_event_producer.publish_product_event.assert_called_once()
        event = mock_event_producer.publish_product_event.call_args.args[0]
        assert event.event_type == EventType.CREATED
        assert event.id == "generated-id"
        assert event.name == "Gaming Laptop"
        assert event.stock_quantity == 15

    @pytest.mark.asyncio
    async def test_create_product_publishes_after_save(
        self, product_service, sample_product_request, mock_event_producer
    ):
        calls = []
        product_service.repository.save = AsyncMock(
            side_effect=lambda p: calls.append("save") or self._assign_id(p)
        )
        mock_event_producer.publish_product_event.side_effect = (
            lambda event: calls.append("publish")
        )

        await product_service.create_product(sample_product_request)

        assert calls == ["save", "publish"]

    @pytest.mark.asyncio
    async def test_create_product_invalid_payload_is_not_persisted(
        self, product_service, mock_event_producer
    ):
        product_service.repository.save = AsyncMock()
        payload = ProductRequest(name="AB", price=Decimal("-10"))

        with pytest.raises(ProductValidationError) as exc_info:
            await product_service.create_product(payload)

        fields = [message.split(":")[0] for message in exc_info.value.errors]
        assert {"name", "price", "description"} <= set(fields)
        product_service.repository.save.assert_not_called()
        mock_event_producer.publish_product_event.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_product_database_error_propagates(
        self, product_service, sample_product_request, mock_event_producer
    ):
        product_service.repository.save = AsyncMock(
            side_effect=RuntimeError("connection lost")
        )

        with pytest.raises(RuntimeError, match="connection lost"):
            await product_service.create_product(sample_product_request)

        mock_event_producer.publish_product_event.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_product_without_event_producer(
        self, mock_repository, sample_product_request
    ):
        service = ProductService(mock_repository, None)
        service.repository.save = AsyncMock(side_effect=self._assign_id)

        result = await service.create_product(sample_product_request)

        assert result.id == "generated-id"

    # Tests for read operations
    @pytest.mark.asyncio
    async def test_get_product_by_id_success(self, product_service, stored_product):
        product_service.repository.find_by_id = AsyncMock(return_value=stored_product)

        result = await product_service.get_product_by_id("a1b2c3")

        assert result is stored_product
        product_service.repository.find_by_id.assert_awaited_once_with("a1b2c3")

    @pytest.mark.asyncio
    async def test_get_product_by_id_not_found(self, product_service):
        product_service.repository.find_by_id = AsyncMock(return_value=None)

        with pytest.raises(ProductNotFoundError) as exc_info:
            await product_service.get_product_by_id("missing-id")

        assert "missing-id" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_get_products_by_category_empty(self, product_service):
        product_service.repository.find_by_category = AsyncMock(return_value=[])

        result = await product_service.get_products_by_category("Toys")

        assert result == []
        product_service.repository.find_by_category.assert_awaited_once_with("Toys")

    @pytest.mark.asyncio
    async def test_get_product_by_name_not_found(self, product_service):
        product_service.repository.find_by_name = AsyncMock(return_value=None)

        with pytest.raises(ProductNotFoundError) as exc_info:
            await product_service.get_product_by_name("Unknown Gadget")

        assert str(exc_info.value) == "Product not found with name: Unknown Gadget"

    @pytest.mark.asyncio
    async def test_get_products_in_stock_uses_threshold(
        self, product_service, stored_product
    ):
        product_service.repository.find_by_stock_quantity_greater_than = AsyncMock(
            return_value=[stored_product]
        )

        result = await product_service.get_products_in_stock()

        assert result == [stored_product]
        product_service.repository.find_by_stock_quantity_greater_than.assert_awaited_once_with(
            0
        )

    # Tests for update_product
    @pytest.mark.asyncio
    async def test_update_product_overwrites_fields_and_keeps_created_at(
        self, product_service, stored_product, update_request, mock_event_producer
    ):
        original_created_at = stored_product.created_at
        original_updated_at = stored_product.updated_at
        product_service.repository.find_by_id = AsyncMock(return_value=stored_product)
        product_service.repository.save = AsyncMock(side_effect=lambda p: p)

        result = await product_service.update_product("a1b2c3", update_request)

        assert result.id == "a1b2c3"
        assert result.name == "Gaming Laptop Pro"
        assert result.price == Decimal("2499.00")
        assert result.stock_quantity == 7
        assert result.created_at == original_created_at
        assert result.updated_at >= original_updated_at

        event = mock_event_producer.publish_product_event.call_args.args[0]
        assert event.event_type == EventType.UPDATED
        assert event.name == "Gaming Laptop Pro"

    @pytest.mark.asyncio
    async def test_update_product_not_found(
        self, product_service, update_request, mock_event_producer
    ):
        product_service.repository.find_by_id = AsyncMock(return_value=None)
        product_service.repository.save = AsyncMock()

        with pytest.raises(ProductNotFoundError) as exc_info:
            await product_service.update_product("missing-id", update_request)

        assert "missing-id" in str(exc_info.value)
        product_service.repository.save.assert_not_called()
        mock_event_producer.publish_product_event.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_product_validates_before_lookup(self, product_service):
        product_service.repository.find_by_id = AsyncMock()

        with pytest.raises(ProductValidationError):
            await product_service.update_product(
                "a1b2c3", ProductRequest(name="AB")
            )

        product_service.repository.find_by_id.assert_not_called()

    # Tests for delete_product
    @pytest.mark.asyncio
    async def test_delete_product_publishes_snapshot_before_delete(
        self, product_service, stored_product, mock_event_producer
    ):
        calls = []
        product_service.repository.find_by_id = AsyncMock(return_value=stored_product)
        product_service.repository.delete = AsyncMock(
            side_effect=lambda p: calls.append("delete")
        )
        mock_event_producer.publish_product_event.side_effect = (
            lambda event: calls.append(("publish", event))
        )

        result = await product_service.delete_product("a1b2c3")

        assert result is None
        assert calls[0][0] == "publish"
        assert calls[1] == "delete"
        event = calls[0][1]
        assert event.event_type == EventType.DELETED
        assert event.id == "a1b2c3"
        assert event.name == "Gaming Laptop"
        assert event.price == Decimal("1999.99")

    @pytest.mark.asyncio
    async def test_delete_product_not_found(self, product_service, mock_event_producer):
        product_service.repository.find_by_id = AsyncMock(return_value=None)
        product_service.repository.delete = AsyncMock()

        with pytest.raises(ProductNotFoundError):
            await product_service.delete_product("missing-id")

        product_service.repository.delete.assert_not_called()
        mock_event_producer.publish_product_event.assert_not_called()

"""Product service for catalog business logic"""

from typing import List, Optional

from ..core.exceptions import ProductNotFoundError
from ..core.setting import get_settings
from ..events.event_producers import ProductEventProducer
from ..events.schemas import EventType, ProductEvent
from ..models.base import utc_now
from ..models.product import Product
from ..repository.product_repository import ProductRepository
from ..schemas.product import ProductRequest
from ..schemas.validation import ensure_valid_product
from ..utils.logging import setup_product_logging as setup_logging

logger = setup_logging(
    "product_service.services.product", log_level=get_settings().LOG_LEVEL
)


class ProductService:
    """
    Orchestrates every catalog operation.

    Writes follow validate -> timestamp -> persist -> publish, except delete,
    which publishes the pre-delete snapshot before removing the record.
    Publishing never blocks or fails the write.
    """

    def __init__(
        self,
        repository: ProductRepository,
        event_producer: Optional[ProductEventProducer] = None,
    ):
        self.repository = repository
        self.event_producer = event_producer

    def _publish(self, product: Product, event_type: EventType) -> None:
        if self.event_producer is None:
            logger.warning(
                "Event producer unavailable, skipping product event",
                extra={"product_id": product.id, "event_type": event_type.value},
            )
            return
        self.event_producer.publish_product_event(
            ProductEvent.from_product(product, event_type)
        )

    async def get_all_products(self) -> List[Product]:
        logger.info("Fetching all products")
        return await self.repository.find_all()

    async def get_product_by_id(self, product_id: str) -> Product:
        logger.info("Fetching product", extra={"product_id": product_id})
        product = await self.repository.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def get_product_by_name(self, name: str) -> Product:
        product = await self.repository.find_by_name(name)
        if product is None:
            raise ProductNotFoundError(name, lookup_field="name")
        return product

    async def get_products_by_category(self, category: str) -> List[Product]:
        logger.info("Fetching products by category", extra={"category": category})
        return await self.repository.find_by_category(category)

    async def get_products_in_stock(self, threshold: int = 0) -> List[Product]:
        """Products whose stock quantity is strictly greater than ``threshold``"""
        return await self.repository.find_by_stock_quantity_greater_than(threshold)

    async def create_product(self, product_data: ProductRequest) -> Product:
        ensure_valid_product(product_data)
        logger.info("Creating a new product", extra={"product_name": product_data.name})

        now = utc_now()
        product = Product(
            name=product_data.name,
            description=product_data.description,
            price=product_data.price,
            category=product_data.category,
            stock_quantity=product_data.stock_quantity,
            created_at=now,
            updated_at=now,
        )
        saved_product = await self.repository.save(product)

        # The event needs the id assigned by the save
        self._publish(saved_product, EventType.CREATED)

        logger.info(
            "Product created successfully",
            extra={"product_id": saved_product.id},
        )
        return saved_product

    async def update_product(
        self, product_id: str, product_data: ProductRequest
    ) -> Product:
        ensure_valid_product(product_data)
        logger.info("Updating product", extra={"product_id": product_id})

        product = await self.repository.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        product.name = product_data.name
        product.description = product_data.description
        product.price = product_data.price
        product.category = product_data.category
        product.stock_quantity = product_data.stock_quantity
        product.updated_at = utc_now()

        updated_product = await self.repository.save(product)
        self._publish(updated_product, EventType.UPDATED)

        logger.info("Product updated successfully", extra={"product_id": product_id})
        return updated_product

    async def delete_product(self, product_id: str) -> None:
        logger.info("Deleting product", extra={"product_id": product_id})

        product = await self.repository.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        # Snapshot goes out before the record disappears
        self._publish(product, EventType.DELETED)
        await self.repository.delete(product)

        logger.info("Product deleted successfully", extra={"product_id": product_id})

"""
Product Service Event Consumers
==============================

Reference consumer for the product-events topic. It only logs what it
receives; downstream services would react to these events instead.
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..core.setting import get_settings
from ..utils.logging import setup_product_logging as setup_logging
from .base import EventHandler
from .base.kafka_client import KafkaEventSubscriber
from .schemas import ProductEvent

settings = get_settings()
logger = setup_logging("product_service.events.consumers", log_level=settings.LOG_LEVEL)


class ProductEventLoggingHandler(EventHandler):
    """Log each product lifecycle event"""

    async def handle(self, key: Optional[str], value: Dict[str, Any]) -> None:
        try:
            event = ProductEvent.model_validate(value)
        except ValidationError as e:
            logger.warning(
                "Discarding malformed product event",
                extra={"key": key, "error": str(e)},
            )
            return

        logger.info(
            f"Received product event: {event.event_type.value} for product: "
            f"{event.name} (ID: {event.id})",
            extra={"product_id": event.id, "event_type": event.event_type.value},
        )
        logger.debug("Product event details", extra={"event_data": event.to_dict()})


class ProductEventConsumer:
    """Manage the product-events subscription"""

    def __init__(self, subscriber: Optional[KafkaEventSubscriber] = None):
        self.subscriber = subscriber or KafkaEventSubscriber(
            bootstrap_servers=settings.KAFKA_BOOTSTRAP_SERVERS,
            group_id=settings.KAFKA_GROUP_ID,
            client_id=f"{settings.SERVICE_NAME}-consumer",
            topic=settings.KAFKA_TOPIC_PRODUCT_EVENTS,
            handler=ProductEventLoggingHandler(),
        )

    async def start(self) -> None:
        await self.subscriber.start()
        logger.info("Product event consumer started")

    async def stop(self) -> None:
        await self.subscriber.stop()
        logger.info("Product event consumer stopped")

"""
Product Service Event Producers
==============================

Publishes product lifecycle events (CREATED, UPDATED, DELETED) to the
product-events topic, keyed by product id.
"""

from ..core.setting import get_settings
from ..utils.logging import setup_product_logging as setup_logging
from .base import EventPublisher
from .schemas import PRODUCT_EVENTS_TOPIC, ProductEvent

settings = get_settings()
logger = setup_logging("product_service.events.producers", log_level=settings.LOG_LEVEL)


class ProductEventProducer:
    """
    Product lifecycle event producer.

    Publishing is best-effort: the send is scheduled on the publisher and
    this call returns before the broker acknowledges it. Nothing is raised
    to the caller, whatever happens to the message.
    """

    def __init__(
        self, event_publisher: EventPublisher, topic: str = PRODUCT_EVENTS_TOPIC
    ):
        self.event_publisher = event_publisher
        self.topic = topic

    def publish_product_event(self, event: ProductEvent) -> None:
        logger.info(
            f"Publishing product event: {event.event_type.value} for product ID: {event.id}",
            extra={
                "product_id": event.id,
                "event_type": event.event_type.value,
                "topic": self.topic,
            },
        )
        try:
            self.event_publisher.publish(self.topic, event.id, event.to_dict())
        except Exception as e:
            logger.error(
                f"Failed to schedule product event: {event.id}",
                extra={
                    "product_id": event.id,
                    "event_type": event.event_type.value,
                    "error": str(e),
                },
                exc_info=True,
            )

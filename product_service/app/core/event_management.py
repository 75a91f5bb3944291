"""
Product Service Event Management
Initializes and manages Kafka event publishing for the product service.
"""

from typing import Optional

from ..events.base.kafka_client import KafkaEventPublisher
from ..events.event_producers import ProductEventProducer
from ..utils.logging import setup_product_logging as setup_logging
from .setting import get_settings

logger = setup_logging(
    "product_service.event_management", log_level=get_settings().LOG_LEVEL
)

_kafka_publisher: Optional[KafkaEventPublisher] = None
_product_event_producer: Optional[ProductEventProducer] = None


async def init_events() -> None:
    """Start the Kafka publisher and the product event producer"""
    global _kafka_publisher, _product_event_producer

    settings = get_settings()
    logger.info(
        "Initializing event publishing infrastructure",
        extra={
            "operation": "init_events",
            "kafka_servers": settings.KAFKA_BOOTSTRAP_SERVERS,
            "topic": settings.KAFKA_TOPIC_PRODUCT_EVENTS,
        },
    )

    _kafka_publisher = KafkaEventPublisher(
        bootstrap_servers=settings.KAFKA_BOOTSTRAP_SERVERS,
        client_id=f"{settings.SERVICE_NAME}-producer",
        max_retries=settings.KAFKA_CONNECT_RETRIES,
        retry_delay=settings.KAFKA_RETRY_DELAY,
        topics=[settings.KAFKA_TOPIC_PRODUCT_EVENTS],
    )
    await _kafka_publisher.start()

    # The producer exists even in degraded mode; events are then only logged
    _product_event_producer = ProductEventProducer(
        _kafka_publisher, topic=settings.KAFKA_TOPIC_PRODUCT_EVENTS
    )

    logger.info(
        "Event publishing infrastructure initialized",
        extra={
            "operation": "init_events_complete",
            "kafka_connected": _kafka_publisher.is_connected,
        },
    )


async def close_events() -> None:
    """Drain pending sends and stop the Kafka publisher"""
    global _kafka_publisher, _product_event_producer

    try:
        if _kafka_publisher:
            await _kafka_publisher.stop()
            logger.info(
                "Event publishing infrastructure closed",
                extra={"operation": "close_events"},
            )
    finally:
        _kafka_publisher = None
        _product_event_producer = None


def get_event_producer() -> Optional[ProductEventProducer]:
    """Get the product event producer instance"""
    return _product_event_producer


async def health_check_events() -> bool:
    """Check if event publishing is healthy"""
    if _kafka_publisher:
        return await _kafka_publisher.health_check()
    return False

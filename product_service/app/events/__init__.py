"""
Events module for the Product Service.

Producers:
    - ProductEventProducer: publishes CREATED, UPDATED and DELETED
      product events to the product-events topic

Consumers:
    - ProductEventConsumer: reference subscriber that logs product events
"""

from .event_consumers import ProductEventConsumer, ProductEventLoggingHandler
from .event_producers import ProductEventProducer

__all__ = [
    "ProductEventProducer",
    "ProductEventConsumer",
    "ProductEventLoggingHandler",
]

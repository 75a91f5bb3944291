"""
Product Service Event Schemas
=============================

Event payloads and constants for the product-events topic.
"""

from .event_schemas import PRODUCT_EVENTS_TOPIC, EventType, ProductEvent

__all__ = [
    "EventType",
    "ProductEvent",
    "PRODUCT_EVENTS_TOPIC",
]

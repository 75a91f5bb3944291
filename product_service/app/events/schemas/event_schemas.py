"""
Product Service Event Schemas
=============================

Lifecycle event published on every catalog write.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

PRODUCT_EVENTS_TOPIC = "product-events"


class EventType(str, Enum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"


class ProductEvent(BaseModel):
    """Immutable snapshot of a product at a lifecycle transition"""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    name: str
    description: str
    price: Decimal
    category: str
    stock_quantity: int
    event_type: EventType

    @classmethod
    def from_product(cls, product: Any, event_type: EventType) -> "ProductEvent":
        """Capture the current field values of a persisted product"""
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category,
            stock_quantity=product.stock_quantity,
            event_type=event_type,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready payload with camelCase keys"""
        return self.model_dump(mode="json", by_alias=True)

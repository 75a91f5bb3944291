from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProductBase(BaseModel):
    """Shared wire format: snake_case attributes, camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ProductRequest(ProductBase):
    """
    Inbound product payload for create and update.

    Every field is optional at this layer so that missing values are
    reported by ``validate_product`` together with the other violations.
    Server-assigned keys (id, createdAt, updatedAt) are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    category: Optional[str] = None
    stock_quantity: Optional[int] = None


class ProductResponse(ProductBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    price: Decimal
    category: str
    stock_quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ErrorResponse(BaseModel):
    """Uniform error envelope returned by every endpoint"""

    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
    errors: Optional[List[str]] = None

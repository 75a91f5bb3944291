from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import ExactDecimal, ProductServiceBase


class Product(ProductServiceBase):
    __tablename__ = "products"
    # Hash index on PostgreSQL: equality lookups only, no btree row size limit
    __table_args__ = (
        Index("ix_products_category", "category", postgresql_using="hash"),
    )

    # Assigned by the repository on first save
    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    name: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    price: Mapped[Decimal] = mapped_column(ExactDecimal(), nullable=False)
    # Length is unbounded, validation only restricts the character set
    category: Mapped[str] = mapped_column(String(), nullable=False)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=False), nullable=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=False), nullable=True
    )

    def __repr__(self) -> str:
        return f"<Product id={self.id!r} name={self.name!r} category={self.category!r}>"

"""Product repository for the products collection"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import generate_document_id
from ..models.product import Product


class ProductRepository:
    """Repository for product persistence operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self) -> List[Product]:
        result = await self.db.execute(select(Product))
        return list(result.scalars().all())

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        """Get product by ID"""
        return await self.db.get(Product, product_id)

    async def find_by_name(self, name: str) -> Optional[Product]:
        """First product with exactly this name (names are not unique)"""
        query = select(Product).where(Product.name == name).limit(1)
        result = await self.db.execute(query)
        return result.scalars().first()

    async def find_by_category(self, category: str) -> List[Product]:
        """Products whose category equals ``category`` exactly"""
        query = select(Product).where(Product.category == category)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_by_stock_quantity_greater_than(self, quantity: int) -> List[Product]:
        query = select(Product).where(Product.stock_quantity > quantity)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def save(self, product: Product) -> Product:
        """
        Insert or fully replace a product.

        A product without an id is inserted under a freshly generated id.
        A product with an id replaces the stored record with that id.
        """
        if not product.id:
            product.id = generate_document_id()
            self.db.add(product)
        else:
            product = await self.db.merge(product)

        await self.db.commit()
        await self.db.refresh(product)
        return product

    async def delete(self, product: Product) -> None:
        """Remove a product by id"""
        await self.db.delete(product)
        await self.db.commit()

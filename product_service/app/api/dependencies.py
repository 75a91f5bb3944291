"""
FastAPI dependency injection for Product Service

Builds the product service from explicit collaborators: a repository bound
to the request's database session and the process-wide event producer.
"""

from typing import AsyncGenerator, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db_session
from ..core.event_management import get_event_producer
from ..events.event_producers import ProductEventProducer
from ..repository.product_repository import ProductRepository
from ..services.product_service import ProductService

# =====================================================
# DATABASE DEPENDENCIES
# =====================================================


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide async database session"""
    async for session in get_db_session():
        yield session


def get_product_repository(
    session: AsyncSession = Depends(get_async_session),
) -> ProductRepository:
    return ProductRepository(session)


# =====================================================
# EVENT PUBLISHER DEPENDENCIES
# =====================================================


def get_product_event_producer() -> Optional[ProductEventProducer]:
    """Provide ProductEventProducer instance"""
    return get_event_producer()


# =====================================================
# SERVICE DEPENDENCIES
# =====================================================


def get_product_service(
    repository: ProductRepository = Depends(get_product_repository),
    event_producer: Optional[ProductEventProducer] = Depends(
        get_product_event_producer
    ),
) -> ProductService:
    """Provide ProductService instance with persistence and event publishing"""
    return ProductService(repository, event_producer)


ProductServiceDep = Depends(get_product_service)

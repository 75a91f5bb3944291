"""
Pytest configuration and fixtures for product service tests.
"""

import asyncio
import os
from typing import Any, AsyncGenerator, Dict, List

import pytest
from fastapi.testclient import TestClient

# Set up test environment variables before importing anything else
os.environ.setdefault("APP_NAME", "Product Service Test")
os.environ.setdefault("APP_VERSION", "1.0.0")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SERVICE_NAME", "product-service")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("PRODUCT_DATABASE_URL", "sqlite+aiosqlite:///./test_products.db")
os.environ.setdefault("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092")
os.environ.setdefault("KAFKA_ENABLE_CONSUMER", "false")

from product_service.app.api.dependencies import get_product_event_producer
from product_service.app.core import database as db_module
from product_service.app.events.schemas import ProductEvent
from product_service.app.main import app
from product_service.app.schemas.product import ProductRequest


class RecordingEventProducer:
    """Stands in for ProductEventProducer and keeps every published event"""

    def __init__(self) -> None:
        self.events: List[ProductEvent] = []

    def publish_product_event(self, event: ProductEvent) -> None:
        self.events.append(event)


@pytest.fixture
def sample_product_data() -> Dict[str, Any]:
    """Valid product payload in wire format."""
    return {
        "name": "Gaming Laptop",
        "description": "High-performance laptop with RTX 4080 GPU",
        "price": 1999.99,
        "category": "Electronics",
        "stockQuantity": 15,
    }


@pytest.fixture
def sample_product_request(sample_product_data) -> ProductRequest:
    return ProductRequest.model_validate(sample_product_data)


@pytest.fixture
def event_producer() -> RecordingEventProducer:
    return RecordingEventProducer()


@pytest.fixture
def reset_database():
    """Recreate the products table for tests that go through the HTTP client."""
    manager = db_module.database_manager
    asyncio.run(manager.drop_tables())
    asyncio.run(manager.create_tables())
    yield manager


@pytest.fixture
async def db_session() -> AsyncGenerator[Any, None]:
    """Session on a freshly recreated products table."""
    manager = db_module.database_manager
    await manager.drop_tables()
    await manager.create_tables()
    async with manager.async_session_maker() as session:
        yield session


@pytest.fixture
def client(reset_database, event_producer) -> TestClient:
    """HTTP client wired to the recording event producer."""
    app.dependency_overrides[get_product_event_producer] = lambda: event_producer
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


def pytest_sessionfinish(session, exitstatus):
    try:
        os.remove("test_products.db")
    except FileNotFoundError:
        pass

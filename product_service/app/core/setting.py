"""
Product catalog service configuration
"""

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

PRODUCT_SERVICE_DIR = Path(__file__).parent.parent.parent
ENV_FILE = PRODUCT_SERVICE_DIR / ".env"


class ProductSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Product Catalog Service"
    APP_VERSION: str = "1.0.0"
    # SQL echo only; the app never serves debug tracebacks
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Service specific
    SERVICE_NAME: str = "product-service"
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Database
    PRODUCT_DATABASE_URL: str = "sqlite+aiosqlite:///./products.db"
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20

    # Kafka for events
    KAFKA_BOOTSTRAP_SERVERS: str = "localhost:9092"
    KAFKA_GROUP_ID: str = "product-service-group"
    KAFKA_TOPIC_PRODUCT_EVENTS: str = "product-events"
    KAFKA_ENABLE_CONSUMER: bool = False
    KAFKA_CONNECT_RETRIES: int = 3
    KAFKA_RETRY_DELAY: float = 2.0

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: List[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    CORS_HEADERS: List[str] = ["*"]


@lru_cache
def get_settings() -> ProductSettings:
    """Get settings singleton instance"""
    return ProductSettings()

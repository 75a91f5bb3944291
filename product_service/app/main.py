"""
Product Service FastAPI Application
==================================

Main application entry point for the product catalog microservice.
Provides the product REST API, publishes product lifecycle events to Kafka
and maps every failure to a uniform error response.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.health import router as health_router
from .api.v1.products import router as products_router
from .core import database
from .core.event_management import close_events, init_events
from .core.setting import get_settings
from .middleware.error.error_handler import setup_product_error_handling
from .utils.logging import setup_product_logging

settings = get_settings()
environment = settings.ENVIRONMENT.lower()
enable_file_logging = environment in ["production", "staging"]

logger = setup_product_logging(
    "product_service.main",
    log_level=settings.LOG_LEVEL,
    enable_file_logging=enable_file_logging,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager for startup and shutdown."""
    startup_start = time.time()

    try:
        await _initialize_services(app)
    except Exception as e:
        logger.error(
            "Failed to start product service",
            exc_info=True,
            extra={
                "startup_duration_ms": int((time.time() - startup_start) * 1000),
                "error_type": type(e).__name__,
            },
        )
        raise

    logger.info(
        "Product service started successfully",
        extra={"total_startup_duration_ms": int((time.time() - startup_start) * 1000)},
    )

    yield

    await _shutdown_services(app)


async def _initialize_services(app: FastAPI) -> None:
    """Initialize database, event publishing and the optional consumer."""
    logger.info(
        "Starting product service initialization",
        extra={
            "environment": environment,
            "debug_mode": settings.DEBUG,
            "service_version": settings.APP_VERSION,
        },
    )

    await database.database_manager.create_tables()
    await init_events()

    app.state.event_consumer = None
    if settings.KAFKA_ENABLE_CONSUMER:
        from .events.event_consumers import ProductEventConsumer

        consumer = ProductEventConsumer()
        try:
            await consumer.start()
            app.state.event_consumer = consumer
        except Exception as e:
            logger.warning(
                "Event consumer initialization failed, continuing without it",
                extra={"error": str(e), "error_type": type(e).__name__},
            )


async def _shutdown_services(app: FastAPI) -> None:
    """Shutdown all application services gracefully."""
    shutdown_start = time.time()
    logger.info("Starting product service shutdown")

    consumer = getattr(app.state, "event_consumer", None)
    if consumer is not None:
        await consumer.stop()

    await close_events()
    await database.database_manager.close()

    logger.info(
        "Product service shutdown completed",
        extra={"shutdown_duration_ms": int((time.time() - shutdown_start) * 1000)},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    setup_product_error_handling(app)
    _setup_cors(app)
    _setup_routers(app)

    return app


def _setup_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
    )


def _setup_routers(app: FastAPI) -> None:
    """Configure all application routers."""
    routers_info: List[dict[str, Any]] = []

    app.include_router(health_router, tags=["Health"])
    routers_info.append({"router": "health", "prefix": "", "tags": ["Health"]})

    app.include_router(products_router, prefix="/api", tags=["Product Management"])
    routers_info.append(
        {"router": "products", "prefix": "/api", "tags": ["Product Management"]}
    )

    logger.info(
        "API routes configured",
        extra={"total_routers": len(routers_info), "routers": routers_info},
    )


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "product_service.app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True,
    )

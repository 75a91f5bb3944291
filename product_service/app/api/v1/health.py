from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from ...core import database
from ...core.event_management import health_check_events
from ...core.setting import get_settings
from ...utils.service_health import ProductServiceHealthChecker

router = APIRouter()


async def _database_check() -> Dict[str, Any]:
    async with database.database_manager.async_engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return {"status": "healthy", "component": "database"}


async def _events_check() -> Dict[str, Any]:
    if await health_check_events():
        return {"status": "healthy", "component": "kafka"}
    return {
        "status": "degraded",
        "component": "kafka",
        "message": "Events are logged but not published",
    }


@router.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint for the product service."""
    settings = get_settings()
    checker = ProductServiceHealthChecker(settings.SERVICE_NAME, settings.APP_VERSION)
    checker.add_check("database", _database_check)
    checker.add_check("events", _events_check)
    report = await checker.run_checks()
    status_code = 200 if report["status"] == "healthy" else 503
    return JSONResponse(status_code=status_code, content=report)

"""Health checks and monitoring endpoints"""
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends
from sqlalchemy import inspect, text
from sqlalchemy.orm import Session

from booking.config.database import get_db
from booking.config.settings import settings
from booking.models import Base

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get("")
async def health_check():
    """Liveness probe"""
    return {"status": "healthy", "service": settings.APP_NAME}


@health_router.get("/detailed")
async def detailed_health_check(db: Session = Depends(get_db)):
    """
    Readiness probe: database reachable, booking tables present and the
    default timezone resolvable (slot generation needs all three).
    """
    checks = {
        "api": "healthy",
        "database": "unknown",
        "schema": "unknown",
        "timezone": "unknown",
    }

    try:
        db.execute(text("SELECT 1"))
        checks["database"] = "healthy"

        existing = set(inspect(db.get_bind()).get_table_names())
        missing = sorted(set(Base.metadata.tables) - existing)
        checks["schema"] = "healthy" if not missing else f"missing tables: {', '.join(missing)}"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        checks["database"] = f"unhealthy: {str(e)}"

    try:
        ZoneInfo(settings.DEFAULT_TIMEZONE)
        checks["timezone"] = "healthy"
    except (ZoneInfoNotFoundError, ValueError):
        checks["timezone"] = f"unknown timezone: {settings.DEFAULT_TIMEZONE}"

    checks["overall"] = "healthy" if all(v == "healthy" for v in checks.values()) else "degraded"
    return checks

"""Health check endpoint.

Verifies the server is running and its dependencies (database, Redis)
are reachable. Redis is optional, so a Redis failure degrades the
status instead of failing it. Failure details go to the log only.
"""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from folio import __version__
from folio.db.engine import get_db
from folio.db.redis import get_redis

logger = structlog.get_logger()

router = APIRouter()


async def _check_database(db: AsyncSession) -> str:
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("health.database_failed", error=str(e))
        return "error"
    return "ok"


async def _check_redis() -> str:
    try:
        redis = get_redis()
    except RuntimeError:
        return "unavailable"
    try:
        await redis.ping()
    except Exception as e:
        logger.warning("health.redis_failed", error=str(e))
        return "error"
    return "ok"


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Check server health and dependency connectivity."""
    checks = {
        "server": "ok",
        "version": __version__,
        "database": await _check_database(db),
        "redis": await _check_redis(),
    }
    healthy = checks["database"] == "ok" and checks["redis"] == "ok"
    checks["status"] = "healthy" if healthy else "degraded"
    return {"success": True, "data": checks}

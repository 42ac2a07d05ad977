"""Health check endpoints for load balancers and monitoring."""

from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text

from erpdash.config import settings
from erpdash.database import engine
from erpdash.utils.redis_client import get_redis

router = APIRouter(tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _check_database() -> None:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def _check_redis() -> None:
    client = await get_redis()
    await client.ping()


@router.get("/health")
async def health_check():
    """Liveness only; touches neither Postgres nor Redis."""
    return {"status": "ok", "service": "erpdash", "environment": settings.environment, "timestamp": _now()}


@router.get("/health/ready")
async def readiness_check():
    """503 unless both the table store and the trash store answer."""
    checks = {}
    for name, check in (("database", _check_database), ("redis", _check_redis)):
        try:
            await check()
            checks[name] = "ok"
        except Exception as e:
            checks[name] = f"error: {str(e)[:100]}"

    healthy = all(result == "ok" for result in checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "service": "erpdash",
            "checks": checks,
            "timestamp": _now(),
        },
    )

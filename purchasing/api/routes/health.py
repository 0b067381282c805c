"""
Health check endpoints.
"""

import time

import aiosqlite
from fastapi import APIRouter

from purchasing.application.dto.responses import ComponentHealthResponse, HealthResponse
from purchasing.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    from purchasing.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1 FROM purchase_orders LIMIT 1")
        latency = (time.time() - start) * 1000

        db_status = ComponentHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=latency,
        )

    except (aiosqlite.Error, OSError) as e:
        db_status = ComponentHealthResponse(
            name="sqlite",
            available=False,
            error=str(e),
        )

    return HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )

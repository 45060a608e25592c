"""Health check and metrics endpoints."""

import secrets
import time
from typing import Any

from fastapi import Depends, FastAPI, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from src.taskboard.core.config import get_settings
from src.taskboard.core.db import get_session
from src.taskboard.core.errors import UnauthorizedError
from src.taskboard.core.logging import get_logger
from src.taskboard.core.shutdown import request_tracker
from src.taskboard.temporal.client import get_temporal_client

logger = get_logger(__name__)

_health_cache: dict[str, Any] | None = None
_health_cache_time: float = 0
HEALTH_CACHE_TTL = 10  # seconds


def reset_health_cache() -> None:
    """Reset health cache (for testing)."""
    global _health_cache, _health_cache_time
    _health_cache = None
    _health_cache_time = 0


async def check_health() -> dict[str, Any]:
    """Probe the database (required) and Temporal (optional)."""
    health_status: dict[str, Any] = {
        "status": "healthy",
        "database": "unknown",
        "temporal": "unknown",
        "cached": False,
        "timestamp": time.time(),
    }

    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
        health_status["database"] = "healthy"
    except Exception as e:
        logger.warning("Database health check failed", error=str(e))
        health_status["database"] = "unhealthy"
        health_status["status"] = "unhealthy"

    # Background jobs being unavailable degrades the service but requests still work
    try:
        await get_temporal_client()
        health_status["temporal"] = "healthy"
    except Exception as e:
        logger.warning("Temporal health check failed", error=str(e))
        health_status["temporal"] = "unhealthy"
        if health_status["status"] == "healthy":
            health_status["status"] = "degraded"

    return health_status


def setup_health_endpoint(app: FastAPI) -> None:
    """Configure the health check endpoint."""

    @app.get("/health", tags=["ops"])
    async def health() -> JSONResponse:
        global _health_cache, _health_cache_time

        if request_tracker.is_shutting_down:
            return JSONResponse(
                content={
                    "status": "draining",
                    "in_flight_requests": request_tracker.in_flight_count,
                },
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        now = time.time()
        if _health_cache and (now - _health_cache_time) < HEALTH_CACHE_TTL:
            cached = _health_cache.copy()
            cached["cached"] = True
            cached["cache_age_seconds"] = round(now - _health_cache_time, 1)
            status_code = 503 if cached["status"] == "unhealthy" else 200
            return JSONResponse(content=cached, status_code=status_code)

        health_status = await check_health()
        _health_cache = health_status
        _health_cache_time = now

        status_code = 503 if health_status["status"] == "unhealthy" else 200
        return JSONResponse(content=health_status, status_code=status_code)


def setup_metrics(app: FastAPI) -> None:
    """Configure Prometheus metrics with optional API key protection."""
    settings = get_settings()
    instrumentator = Instrumentator(excluded_handlers=["/health", "/metrics"]).instrument(app)

    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise UnauthorizedError("invalid or missing metrics API key")

        instrumentator.expose(
            app,
            endpoint="/metrics",
            include_in_schema=False,
            dependencies=[Depends(verify_metrics_key)],
        )
    else:
        instrumentator.expose(app, endpoint="/metrics", include_in_schema=False)

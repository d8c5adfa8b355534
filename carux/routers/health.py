"""
Health Check Router - Car UX Review Platform
carux/routers/health.py

Reports service status and the report cache connection.
"""
from datetime import datetime, timezone
from typing import Dict

import redis
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from carux.config import settings
from carux.services.cache import get_cache

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


def check_redis() -> str:
    """Check report cache connection health."""
    if not settings.CACHE_ENABLED:
        return "disabled"
    cache = get_cache()
    if cache is None:
        return "unhealthy: Redis unreachable"
    try:
        cache.client.ping()
        return "healthy"
    except redis.RedisError as e:
        error_msg = str(e)[:100] + "..." if len(str(e)) > 100 else str(e)
        return f"unhealthy: {error_msg}"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "All dependencies healthy"},
        503: {"description": "One or more dependencies unhealthy"},
    },
    summary="Health check",
)
def health_check():
    dependencies = {
        "storage": "healthy (in-memory)",
        "redis": check_redis(),
    }
    all_healthy = not any(v.startswith("unhealthy") for v in dependencies.values())

    response = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies=dependencies,
    )
    if all_healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )

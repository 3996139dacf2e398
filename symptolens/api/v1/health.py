"""
Health check and monitoring endpoints.
"""

import time
from datetime import datetime

from fastapi import APIRouter, Depends
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from symptolens.config import get_settings
from symptolens.core.cache import CacheService
from symptolens.dependencies import get_cache, get_condition_repository
from symptolens.schemas.common import HealthResponse, RepositoryStatus
from symptolens.services.condition_repository import ConditionRepository

router = APIRouter(tags=["health"])

_startup_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(
    repository: ConditionRepository = Depends(get_condition_repository),
    cache: CacheService = Depends(get_cache)
):
    """
    Check service health and reference data availability.

    No authentication required for health checks.
    """
    settings = get_settings()

    return HealthResponse(
        service=settings.APP_NAME,
        version=settings.APP_VERSION,
        status="healthy",
        timestamp=datetime.utcnow(),
        repository=RepositoryStatus(**repository.status()),
        redis=cache.is_connected,
        uptime_seconds=time.time() - _startup_time
    )


@router.get("/metrics")
async def prometheus_metrics():
    """
    Expose Prometheus metrics.

    No authentication for metrics endpoint.
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )

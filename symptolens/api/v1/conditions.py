"""
Reference condition endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from symptolens.core.auth import verify_api_key
from symptolens.core.cache import CacheService
from symptolens.core.logging import get_logger
from symptolens.core.rate_limit import get_rate_limit_string, limiter
from symptolens.dependencies import get_cache, get_condition_repository
from symptolens.schemas.analysis import ConditionListResponse
from symptolens.schemas.common import ReloadResponse
from symptolens.schemas.conditions import MedicalCondition
from symptolens.services.condition_repository import ConditionRepository

logger = get_logger(__name__)

router = APIRouter(
    prefix="/conditions",
    tags=["conditions"],
    dependencies=[Depends(verify_api_key)]
)


@router.get("", response_model=ConditionListResponse)
@limiter.limit(get_rate_limit_string)
async def list_conditions(
    request: Request,
    repository: ConditionRepository = Depends(get_condition_repository)
):
    """List the reference conditions currently in use."""
    snapshot = await repository.snapshot()
    return ConditionListResponse(
        conditions=list(snapshot.conditions),
        total=len(snapshot),
        source=snapshot.source,
        loaded_at=snapshot.loaded_at
    )


@router.get("/{name}", response_model=MedicalCondition)
@limiter.limit(get_rate_limit_string)
async def get_condition(
    request: Request,
    name: str,
    repository: ConditionRepository = Depends(get_condition_repository)
):
    """Look up a reference condition by name (case-insensitive)."""
    condition = await repository.get_by_name(name)
    if condition is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown condition: {name}"
        )
    return condition


@router.post("/reload", response_model=ReloadResponse)
@limiter.limit("10/minute")
async def reload_conditions(
    request: Request,
    repository: ConditionRepository = Depends(get_condition_repository),
    cache: CacheService = Depends(get_cache)
):
    """
    Reload reference conditions from the condition store.

    Cached analyses are dropped since they were scored against the old set.
    """
    snapshot = await repository.reload()
    dropped = await cache.invalidate_analyses()

    logger.info(
        "Reference conditions reloaded",
        extra={"source": snapshot.source, "cached_analyses_dropped": dropped}
    )

    return ReloadResponse(
        success=True,
        message=f"Loaded {len(snapshot)} conditions from {snapshot.source}",
        source=snapshot.source,
        total_conditions=len(snapshot),
        details={"cached_analyses_dropped": dropped}
    )

"""
Condition scoring endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from symptolens.core.cache import CacheService
from symptolens.core.logging import get_logger
from symptolens.core.rate_limit import get_rate_limit_string, limiter
from symptolens.dependencies import get_cache, get_condition_repository, get_scoring_pipeline
from symptolens.schemas.analysis import AnalysisRequest, AnalysisResponse
from symptolens.services.condition_repository import ConditionRepository
from symptolens.services.scoring_pipeline import SymptomScoringPipeline

logger = get_logger(__name__)

router = APIRouter(tags=["analysis"])

ANALYSIS_VERSION = "1.0"


@router.post(
    "/analysis",
    response_model=AnalysisResponse,
    summary="Score Identified Factors",
    description="""
    Rank candidate conditions for a set of identified symptom and visual factors.

    Features:
    - Association scoring against the reference condition set
    - Symptom-relationship and critical-symptom adjustments
    - Relevance classification (low, medium, high)
    - Urgency-aware next steps and specialist suggestions
    - Optional merge with LLM enhancement predictions
    """
)
@limiter.limit(get_rate_limit_string)
async def analyze_factors(
    request: Request,
    payload: AnalysisRequest,
    pipeline: SymptomScoringPipeline = Depends(get_scoring_pipeline),
    repository: ConditionRepository = Depends(get_condition_repository),
    cache: CacheService = Depends(get_cache)
) -> AnalysisResponse:
    """
    Score identified factors.

    Args:
        payload: Identified factors and optional body location.

    Returns:
        Ranked conditions with next steps and summary.
    """
    include_llm = payload.include_llm and pipeline.has_prediction_source

    cached = await cache.get_analysis(payload.identified_factors, payload.body_location, include_llm)
    if cached:
        response = AnalysisResponse.model_validate(cached)
        response.metadata["cached"] = True
        return response

    try:
        result = await pipeline.score(
            payload.identified_factors,
            payload.body_location,
            include_llm=include_llm
        )
    except Exception as e:
        logger.error(f"Condition scoring failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to score identified factors"
        )

    repository_status = repository.status()
    response = AnalysisResponse(
        **result.model_dump(),
        metadata={
            "analysis_version": ANALYSIS_VERSION,
            "reference_source": repository_status["source"],
            "reference_conditions": repository_status["total_conditions"],
            "llm_merged": include_llm,
            "cached": False
        }
    )

    await cache.set_analysis(
        payload.identified_factors,
        payload.body_location,
        include_llm,
        response.model_dump(mode="json")
    )

    logger.info(
        f"Analysis complete: {len(response.conditions)} conditions",
        extra={"next_steps": len(response.next_steps)}
    )
    return response

"""
FastAPI dependency injection utilities.

Long-lived collaborators are created in the application lifespan and kept
on app.state; these helpers hand them to route handlers.
"""

from fastapi import Request

from symptolens.config import get_settings
from symptolens.core.auth import verify_api_key
from symptolens.core.cache import CacheService
from symptolens.services.condition_repository import ConditionRepository
from symptolens.services.scoring_pipeline import SymptomScoringPipeline


def get_condition_repository(request: Request) -> ConditionRepository:
    """Get the application's condition repository."""
    return request.app.state.condition_repository


def get_cache(request: Request) -> CacheService:
    """Get the application's cache service."""
    return request.app.state.cache


def get_scoring_pipeline(request: Request) -> SymptomScoringPipeline:
    """Get a scoring pipeline bound to the application's repository."""
    state = request.app.state
    return SymptomScoringPipeline(
        state.condition_repository,
        settings=get_settings(),
        prediction_source=state.prediction_source
    )


__all__ = [
    "verify_api_key",
    "get_cache",
    "get_condition_repository",
    "get_scoring_pipeline",
]

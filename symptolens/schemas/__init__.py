"""Pydantic schemas for the scoring pipeline and request/response validation."""

from symptolens.schemas.analysis import (
    AnalysisRequest,
    AnalysisResponse,
    ConditionListResponse,
)
from symptolens.schemas.common import (
    ErrorResponse,
    HealthResponse,
    ReloadResponse,
    RepositoryStatus,
)
from symptolens.schemas.conditions import (
    DISCLAIMER,
    MAX_SUGGESTIONS,
    MedicalCondition,
    NextStep,
    NextStepType,
    PotentialCondition,
    Relevance,
    ScoringResult,
    SymptomRelationships,
    normalize_terms,
    urgency_rank,
)

__all__ = [
    # Analysis
    "AnalysisRequest",
    "AnalysisResponse",
    "ConditionListResponse",
    # Common
    "ErrorResponse",
    "HealthResponse",
    "ReloadResponse",
    "RepositoryStatus",
    # Conditions
    "DISCLAIMER",
    "MAX_SUGGESTIONS",
    "MedicalCondition",
    "NextStep",
    "NextStepType",
    "PotentialCondition",
    "Relevance",
    "ScoringResult",
    "SymptomRelationships",
    "normalize_terms",
    "urgency_rank",
]

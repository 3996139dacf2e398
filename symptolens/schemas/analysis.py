"""
Analysis request/response schemas for the HTTP layer.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from symptolens.schemas.conditions import MedicalCondition, ScoringResult, normalize_terms


class AnalysisRequest(BaseModel):
    """Request schema for condition scoring."""

    identified_factors: list[str] = Field(
        default_factory=list,
        max_length=50,
        description="Symptom and visual-feature tokens from the feature extractor"
    )
    body_location: Optional[str] = Field(
        default=None,
        max_length=50,
        description="Optional body location hint (e.g. skin, head, chest)"
    )
    include_llm: bool = Field(
        default=False,
        description="Merge predictions from the LLM enhancement service when configured"
    )

    @field_validator("identified_factors")
    @classmethod
    def validate_factors(cls, v: list[str]) -> list[str]:
        """Normalize factor tokens."""
        if any(len(f) > 100 for f in v):
            raise ValueError("Identified factors must be at most 100 characters")
        return normalize_terms(v)

    @field_validator("body_location")
    @classmethod
    def validate_body_location(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().lower()
        return v or None

    class Config:
        json_schema_extra = {
            "example": {
                "identified_factors": ["fever", "cough", "sore throat"],
                "body_location": "throat",
                "include_llm": False
            }
        }


class AnalysisResponse(ScoringResult):
    """Scoring result plus request metadata."""

    metadata: dict[str, Any] = Field(default_factory=dict, description="Analysis metadata")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Analysis timestamp")


class ConditionListResponse(BaseModel):
    """Reference condition listing."""

    conditions: list[MedicalCondition]
    total: int
    source: str = Field(..., description="store or fallback")
    loaded_at: Optional[datetime] = None

"""
Condition Scoring Domain Models

Reference condition records, scored candidates and next-step guidance
shared by every stage of the scoring pipeline.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator


# ============================================================================
# ENUMS
# ============================================================================

class Relevance(str, Enum):
    """Three-level classification derived from a candidate's score."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NextStepType(str, Enum):
    """Kinds of recommended user actions."""
    CONSULT = "consult"
    GENERAL = "general"


URGENCY_LEVELS = {"low": 1, "medium": 2, "high": 3}

# Upper bound on suggestions per next step
MAX_SUGGESTIONS = 5

DISCLAIMER = (
    "This information is for educational purposes only and should not replace "
    "professional medical advice. Always consult a qualified healthcare provider "
    "for diagnosis and treatment."
)


def normalize_terms(values: list[str]) -> list[str]:
    """Lowercase, strip, drop blanks and duplicates while keeping first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        term = value.strip().lower()
        if term:
            seen.setdefault(term, None)
    return list(seen)


def urgency_rank(urgency: Optional[str]) -> float:
    """
    Ordinal value of an urgency token.

    Compound tokens such as "low-medium" rank halfway between their parts.
    Unknown or missing values rank as medium.
    """
    if not urgency:
        return float(URGENCY_LEVELS["medium"])
    parts = [URGENCY_LEVELS[p] for p in urgency.lower().split("-") if p in URGENCY_LEVELS]
    if not parts:
        return float(URGENCY_LEVELS["medium"])
    return sum(parts) / len(parts)


# ============================================================================
# REFERENCE DATA
# ============================================================================

class SymptomRelationships(BaseModel):
    """Co-occurrence hints that adjust, but never gate, a condition's score."""
    required: list[str] = Field(default_factory=list, description="Terms expected to be present")
    commonly_together: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("commonly_together", "commonlyTogether"),
        description="Terms that typically co-occur"
    )
    rarely_together: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("rarely_together", "rarelyTogether"),
        description="Terms that rarely co-occur"
    )

    @field_validator("required", "commonly_together", "rarely_together")
    @classmethod
    def normalize(cls, v: list[str]) -> list[str]:
        return normalize_terms(v)

    class Config:
        frozen = True


class MedicalCondition(BaseModel):
    """
    Reference condition record.

    Immutable once loaded. Accepts both snake_case and the camelCase keys
    used by condition store exports.
    """
    name: str = Field(..., min_length=1, description="Unique, case-insensitive condition name")
    description: str = Field(..., description="Free-text description")
    symptoms: list[str] = Field(..., description="Canonical symptom terms, in priority order")
    visual_cues: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("visual_cues", "visualCues"),
        description="Visually observable terms"
    )
    urgency: str = Field(default="medium", description="low, medium, high or a compound like low-medium")
    recommendation: str = Field(default="", description="Free-text guidance")
    body_locations: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("body_locations", "bodyLocations"),
        description="Body locations associated with the condition"
    )
    learn_more_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("learn_more_url", "learnMoreUrl"),
        description="Reference link"
    )
    symptom_relationships: Optional[SymptomRelationships] = Field(
        default=None,
        validation_alias=AliasChoices(
            "symptom_relationships", "symptomRelationships", "symptomsRelationships"
        ),
        description="Optional co-occurrence adjustments"
    )

    @model_validator(mode="before")
    @classmethod
    def recommendation_from_actions(cls, data: Any) -> Any:
        """Older records list recommendedActions instead of a recommendation string."""
        if isinstance(data, dict) and not data.get("recommendation"):
            actions = data.get("recommendedActions") or data.get("recommended_actions")
            if isinstance(actions, list) and actions:
                data = {**data, "recommendation": ". ".join(str(a) for a in actions) + "."}
        return data

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Condition name must not be blank")
        return v

    @field_validator("symptoms", "visual_cues", "body_locations")
    @classmethod
    def normalize(cls, v: list[str]) -> list[str]:
        return normalize_terms(v)

    @field_validator("urgency")
    @classmethod
    def validate_urgency(cls, v: str) -> str:
        v = v.strip().lower()
        if not v or any(part not in URGENCY_LEVELS for part in v.split("-")):
            raise ValueError(f"Invalid urgency: {v!r}")
        return v

    @property
    def key(self) -> str:
        """Case-insensitive lookup key."""
        return self.name.lower()

    @property
    def all_factors(self) -> list[str]:
        """Symptoms followed by visual cues, without duplicates."""
        return normalize_terms(self.symptoms + self.visual_cues)

    @property
    def urgency_rank(self) -> float:
        return urgency_rank(self.urgency)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "name": "Common Cold",
                "description": "A viral infection of the nose and throat.",
                "symptoms": ["runny nose", "sore throat", "cough", "congestion", "sneezing"],
                "visual_cues": [],
                "urgency": "low",
                "recommendation": "Rest and stay hydrated.",
                "body_locations": ["head", "throat"]
            }
        }


# ============================================================================
# PIPELINE OUTPUT
# ============================================================================

class PotentialCondition(BaseModel):
    """Scored candidate condition with its audit trail."""
    name: str = Field(..., description="Condition name")
    description: str = Field(default="", description="Condition description")
    relevance: Relevance = Field(default=Relevance.LOW, description="Relevance derived from score")
    symptoms: list[str] = Field(default_factory=list, description="Reference symptoms")
    visual_cues: list[str] = Field(default_factory=list, description="Reference visual cues")
    score: float = Field(default=0.0, ge=0, description="Association score")
    urgency: Optional[str] = Field(default=None, description="Condition urgency")
    recommendation: Optional[str] = Field(default=None, description="Guidance from reference data")
    matching_factors: list[str] = Field(default_factory=list, description="Identified factors that matched")
    reasoning_notes: list[str] = Field(default_factory=list, description="How the score was derived")
    learn_more_url: Optional[str] = Field(default=None, description="Reference link")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Common Cold",
                "description": "A viral infection of the nose and throat.",
                "relevance": "medium",
                "symptoms": ["runny nose", "sore throat", "cough", "congestion", "sneezing"],
                "visual_cues": [],
                "score": 0.41,
                "urgency": "low",
                "recommendation": "Rest and stay hydrated.",
                "matching_factors": ["cough", "sore throat"],
                "reasoning_notes": [
                    "Association score: 0.51",
                    "Matching factors: cough, sore throat",
                    "Missing critical symptoms: runny nose"
                ]
            }
        }


class NextStep(BaseModel):
    """Recommended user action."""
    type: NextStepType = Field(..., description="consult or general")
    title: str = Field(..., description="Step title")
    description: str = Field(..., description="Step description")
    suggestions: Optional[list[str]] = Field(
        default=None,
        max_length=MAX_SUGGESTIONS,
        description="Concrete suggestions"
    )


class ScoringResult(BaseModel):
    """Combined output of one pipeline run."""
    conditions: list[PotentialCondition] = Field(default_factory=list, description="Ranked candidates")
    next_steps: list[NextStep] = Field(default_factory=list, description="Recommended actions")
    summary: str = Field(default="", description="Plain-language summary")
    disclaimer: str = Field(default=DISCLAIMER, description="Medical disclaimer")
    identified_factors: list[str] = Field(default_factory=list, description="Factors after standardization")
    body_location: Optional[str] = Field(default=None, description="Body location hint")

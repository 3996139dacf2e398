"""
Next-step recommendations derived from validated predictions.

Pure classification over the ranked list: urgent-care detection,
specialist suggestion by body location and condition-specific self-care.
"""

from typing import Iterable, Optional

from symptolens.core.logging import get_logger
from symptolens.schemas.conditions import (
    MAX_SUGGESTIONS,
    NextStep,
    NextStepType,
    PotentialCondition,
    Relevance,
)

logger = get_logger(__name__)


# ============================================================================
# REFERENCE TABLES
# ============================================================================

URGENT_CONDITIONS = [
    "appendicitis", "meningitis", "stroke", "heart attack",
    "pulmonary embolism", "anaphylaxis", "severe dehydration", "sepsis",
]

LOCATION_SPECIALISTS = {
    "skin": "Dermatologist",
    "head": "Neurologist",
    "chest": "Cardiologist or Pulmonologist",
    "abdomen": "Gastroenterologist",
    "back": "Orthopedist or Rheumatologist",
    "joints": "Rheumatologist",
    "eyes": "Ophthalmologist",
    "ears": "Otolaryngologist (ENT)",
    "throat": "Otolaryngologist (ENT)",
}

# Checked in order; the first category with a matching keyword wins
CATEGORY_KEYWORDS = [
    ("dermatological", ["rash", "dermatitis", "eczema", "acne", "skin", "hives", "psoriasis"]),
    ("respiratory", ["cough", "asthma", "pneumonia", "bronchitis", "cold", "influenza", "flu", "sinusitis"]),
    ("gastrointestinal", ["stomach", "intestinal", "gastritis", "gastroenteritis", "colitis", "bowel", "appendicitis"]),
    ("musculoskeletal", ["sprain", "strain", "arthritis", "tendonitis", "fracture", "back pain"]),
]

CATEGORY_SUGGESTIONS = {
    "dermatological": [
        "Avoid scratching affected skin areas",
        "Use gentle, fragrance-free products on skin",
    ],
    "respiratory": [
        "Stay in a well-ventilated area",
        "Use a humidifier if air is dry",
        "Avoid smoke and other respiratory irritants",
    ],
    "gastrointestinal": [
        "Eat smaller, more frequent meals",
        "Stay hydrated with clear fluids",
        "Avoid spicy, greasy, or irritating foods",
    ],
    "musculoskeletal": [
        "Apply ice to reduce inflammation",
        "Rest the affected area but maintain gentle movement as tolerated",
        "Consider over-the-counter pain relievers (following package directions)",
    ],
}

GENERAL_CARE_SUGGESTIONS = [
    "Get adequate rest and stay hydrated",
    "Avoid potential triggers or irritants",
    "Monitor your symptoms and note any changes",
    "Prepare a list of your symptoms, their duration, and severity for your doctor",
]

CONSULT_SUGGESTIONS = [
    "Schedule an appointment with your primary care physician",
    "Document your symptoms and their duration",
    "Note any factors that worsen or improve the symptoms",
]


# ============================================================================
# CLASSIFICATION HELPERS
# ============================================================================

def needs_urgent_care(conditions: Iterable[PotentialCondition]) -> bool:
    """True when a high-relevance candidate names an urgent condition."""
    for condition in conditions:
        if condition.relevance != Relevance.HIGH:
            continue
        name = condition.name.lower()
        if any(urgent in name for urgent in URGENT_CONDITIONS):
            return True
    return False


def specialist_for(body_location: Optional[str]) -> Optional[str]:
    """Specialist title for a body location, or None."""
    if not body_location:
        return None
    return LOCATION_SPECIALISTS.get(body_location.strip().lower())


def categorize_condition(name: str) -> str:
    lower_name = name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lower_name for keyword in keywords):
            return category
    return "general"


def condition_specific_care(conditions: Iterable[PotentialCondition]) -> list[str]:
    """Union of category suggestions for the given conditions, capped at MAX_SUGGESTIONS."""
    categories = {categorize_condition(c.name) for c in conditions}
    suggestions: list[str] = []

    # Fixed category order keeps output deterministic
    for category, _ in CATEGORY_KEYWORDS:
        if category in categories:
            suggestions.extend(CATEGORY_SUGGESTIONS[category])

    return suggestions[:MAX_SUGGESTIONS]


# ============================================================================
# ADVISOR
# ============================================================================

class RecommendationAdvisor:
    """
    Builds next steps in a fixed order: consult, specialist (optional),
    general care, condition-specific care (optional).
    """

    def advise(
        self,
        conditions: list[PotentialCondition],
        body_location: Optional[str] = None
    ) -> list[NextStep]:
        """
        Derive next steps from the ranked predictions.

        Args:
            conditions: Validated predictions, highest score first.
            body_location: Optional body location hint.

        Returns:
            Ordered next steps.
        """
        if not conditions:
            return self.default_steps()

        steps = [self._consult_step(conditions, body_location)]

        specialist = specialist_for(body_location)
        if specialist:
            steps.append(NextStep(
                type=NextStepType.CONSULT,
                title=f"Consider Consulting a {specialist}",
                description=(
                    f"Based on your symptoms, a {specialist.lower()} may be able to "
                    "provide specialized care for your condition."
                )
            ))

        steps.append(self._general_care_step())

        high_relevance = [c for c in conditions if c.relevance == Relevance.HIGH]
        if high_relevance:
            suggestions = condition_specific_care(high_relevance)
            if suggestions:
                steps.append(NextStep(
                    type=NextStepType.GENERAL,
                    title="Condition-Specific Considerations",
                    description="These suggestions may be helpful based on the potential conditions identified:",
                    suggestions=suggestions
                ))

        logger.debug(f"Generated {len(steps)} next steps")
        return steps

    def default_steps(self) -> list[NextStep]:
        """Conservative guidance when no condition could be identified."""
        return [
            NextStep(
                type=NextStepType.CONSULT,
                title="Consult a Healthcare Provider",
                description=(
                    "We could not identify a likely condition from the information provided. "
                    "Please consult a qualified healthcare provider for a proper evaluation."
                ),
                suggestions=list(CONSULT_SUGGESTIONS)
            ),
            self._general_care_step()
        ]

    def _consult_step(
        self,
        conditions: list[PotentialCondition],
        body_location: Optional[str]
    ) -> NextStep:
        if needs_urgent_care(conditions):
            return NextStep(
                type=NextStepType.CONSULT,
                title="Seek Prompt Medical Attention",
                description=(
                    "Based on your symptoms, we recommend seeking medical attention promptly. "
                    "Some of the potential conditions associated with your symptoms may require "
                    "timely evaluation."
                )
            )

        if body_location:
            description = (
                f"Based on your symptoms in the {body_location} area, we recommend consulting "
                "with a healthcare professional for proper evaluation and treatment."
            )
        else:
            description = (
                "Based on your symptoms, we recommend consulting with a healthcare "
                "professional for proper evaluation and treatment."
            )
        return NextStep(
            type=NextStepType.CONSULT,
            title="Consult a Healthcare Provider",
            description=description,
            suggestions=list(CONSULT_SUGGESTIONS)
        )

    def _general_care_step(self) -> NextStep:
        return NextStep(
            type=NextStepType.GENERAL,
            title="General Care Suggestions",
            description="Consider these general care tips while you wait to see a healthcare provider:",
            suggestions=list(GENERAL_CARE_SUGGESTIONS)
        )

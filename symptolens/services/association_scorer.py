"""
Association scoring between a reference condition and identified factors.

score = coverage * COVERAGE_WEIGHT + specificity * SPECIFICITY_WEIGHT, where
coverage is the share of identified factors that match the condition and
specificity is the share of the condition's factors that were matched.
Thresholds elsewhere in the pipeline depend on this scale.
"""

from typing import Iterable, Optional

from symptolens.config import Settings, get_settings
from symptolens.schemas.conditions import MedicalCondition, Relevance, normalize_terms


def relevance_for_score(score: float, settings: Optional[Settings] = None) -> Relevance:
    """
    Map a score to its relevance level.

    High is strictly above its threshold; medium includes its lower
    bound. So 0.7 is medium and 0.4 is medium, 0.39 is low.
    """
    settings = settings or get_settings()
    if score > settings.HIGH_RELEVANCE_THRESHOLD:
        return Relevance.HIGH
    if score >= settings.MEDIUM_RELEVANCE_THRESHOLD:
        return Relevance.MEDIUM
    return Relevance.LOW


def factors_match(factor: str, condition_factor: str) -> bool:
    """Symmetric substring match, so "severe headache" matches "headache"."""
    return factor == condition_factor or factor in condition_factor or condition_factor in factor


def matching_factors(
    condition: MedicalCondition,
    identified_factors: Iterable[str]
) -> list[str]:
    """Identified factors that match any of the condition's symptoms or visual cues."""
    condition_factors = condition.all_factors
    return [
        factor for factor in normalize_terms(list(identified_factors))
        if any(factors_match(factor, cf) for cf in condition_factors)
    ]


def location_matches(condition: MedicalCondition, body_location: Optional[str]) -> bool:
    if not body_location:
        return False
    return body_location.strip().lower() in condition.body_locations


def association_score(
    condition: MedicalCondition,
    identified_factors: Iterable[str],
    body_location: Optional[str] = None,
    settings: Optional[Settings] = None
) -> float:
    """
    Association strength between a condition and identified factors.

    Args:
        condition: Reference condition.
        identified_factors: Symptom/visual tokens; duplicates and order ignored.
        body_location: Optional location hint; a match adds LOCATION_BONUS.
        settings: Scoring weights (defaults to application settings).

    Returns:
        Score clamped to [0, 1]; 0 when there are no identified factors.
    """
    settings = settings or get_settings()
    factors = normalize_terms(list(identified_factors))
    if not factors:
        return 0.0

    condition_factors = condition.all_factors
    match_count = len(matching_factors(condition, factors))

    coverage = match_count / len(factors)
    specificity = match_count / len(condition_factors) if condition_factors else 0.0

    score = settings.COVERAGE_WEIGHT * coverage + settings.SPECIFICITY_WEIGHT * specificity

    if location_matches(condition, body_location):
        score += settings.LOCATION_BONUS

    return min(1.0, max(0.0, score))

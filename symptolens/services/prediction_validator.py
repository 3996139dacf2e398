"""
Prediction validation, ranking and merging.

Filters low-confidence candidates, penalizes missing critical symptoms,
re-derives relevance and produces the final ranked list. The same clamp,
threshold and sort logic ranks merged knowledge-base and LLM predictions.
"""

from typing import Callable, Iterable, Optional

from symptolens.config import Settings, get_settings
from symptolens.core.logging import get_logger
from symptolens.schemas.conditions import MedicalCondition, PotentialCondition, normalize_terms
from symptolens.services.association_scorer import relevance_for_score

logger = get_logger(__name__)

ConditionLookup = Callable[[str], Optional[MedicalCondition]]


def critical_symptoms(condition: MedicalCondition, count: int = 3) -> list[str]:
    """
    Symptoms whose absence lowers confidence in a condition.

    Approximated as the first `count` entries of the condition's symptom
    list, which reference data keeps in priority order.
    """
    return list(condition.symptoms[:count])


def finalize(candidate: PotentialCondition, settings: Optional[Settings] = None) -> PotentialCondition:
    """Clamp the score to [0, 1] and re-derive relevance from it."""
    score = min(1.0, max(0.0, candidate.score))
    return candidate.model_copy(update={
        "score": score,
        "relevance": relevance_for_score(score, settings)
    })


def rank_predictions(
    predictions: Iterable[PotentialCondition],
    settings: Optional[Settings] = None
) -> list[PotentialCondition]:
    """
    Finalize and sort by score, highest first.

    The sort is stable, so equal scores keep their incoming order.
    """
    finalized = [finalize(p, settings) for p in predictions]
    return sorted(finalized, key=lambda p: p.score, reverse=True)


def merge_predictions(
    primary: Iterable[PotentialCondition],
    secondary: Iterable[PotentialCondition],
    settings: Optional[Settings] = None
) -> list[PotentialCondition]:
    """
    Merge two prediction lists by case-insensitive condition name.

    When both lists name the same condition the higher score wins and
    symptom, visual cue and reasoning lists are unioned; details missing
    from the primary entry are filled from the secondary one. Conditions
    only in the secondary list are appended. The result is ranked and
    noise below NOISE_FLOOR is dropped.
    """
    settings = settings or get_settings()
    merged: dict[str, PotentialCondition] = {}

    for prediction in primary:
        merged.setdefault(prediction.name.strip().lower(), prediction)

    for prediction in secondary:
        key = prediction.name.strip().lower()
        existing = merged.get(key)
        if existing is None:
            merged[key] = prediction
            continue

        merged[key] = existing.model_copy(update={
            "score": max(existing.score, prediction.score),
            "description": existing.description or prediction.description,
            "urgency": existing.urgency or prediction.urgency,
            "recommendation": existing.recommendation or prediction.recommendation,
            "learn_more_url": existing.learn_more_url or prediction.learn_more_url,
            "symptoms": normalize_terms(existing.symptoms + prediction.symptoms),
            "visual_cues": normalize_terms(existing.visual_cues + prediction.visual_cues),
            "reasoning_notes": existing.reasoning_notes + [
                note for note in prediction.reasoning_notes
                if note not in existing.reasoning_notes
            ]
        })

    ranked = rank_predictions(merged.values(), settings)
    return [p for p in ranked if p.score >= settings.NOISE_FLOOR]


class PredictionValidator:
    """Turns aggregator candidates into the final ranked prediction list."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def validate(
        self,
        candidates: Iterable[PotentialCondition],
        identified_factors: Iterable[str],
        lookup: ConditionLookup
    ) -> list[PotentialCondition]:
        """
        Filter, adjust and rank candidates.

        Args:
            candidates: Aggregator output, in repository order.
            identified_factors: Normalized symptom/visual tokens.
            lookup: Case-insensitive condition lookup returning None when unknown.

        Returns:
            Candidates sorted by descending score.
        """
        settings = self._settings
        factor_set = set(normalize_terms(list(identified_factors)))
        validated: list[PotentialCondition] = []

        for candidate in candidates:
            if candidate.score < settings.NOISE_FLOOR:
                logger.debug(f"Dropping {candidate.name}: below noise floor")
                continue

            if not candidate.matching_factors and candidate.score < settings.UNEXPLAINED_MIN_SCORE:
                logger.debug(f"Dropping {candidate.name}: no matching factors")
                continue

            validated.append(self._apply_critical_symptoms(candidate, factor_set, lookup))

        return rank_predictions(validated, settings)

    def _apply_critical_symptoms(
        self,
        candidate: PotentialCondition,
        factor_set: set[str],
        lookup: ConditionLookup
    ) -> PotentialCondition:
        condition = lookup(candidate.name)
        if condition is None:
            return candidate

        critical = critical_symptoms(condition, self._settings.CRITICAL_SYMPTOM_COUNT)
        missing = [s for s in critical if s not in factor_set]
        if not missing:
            return candidate

        return candidate.model_copy(update={
            "score": candidate.score * self._settings.CRITICAL_MISSING_FACTOR,
            "reasoning_notes": candidate.reasoning_notes + [
                f"Missing critical symptoms: {', '.join(missing)}"
            ]
        })

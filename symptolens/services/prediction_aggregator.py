"""
Prediction aggregation over the reference condition set.

Scores every condition against the identified factors, applies the
symptom-relationship adjustments and emits unsorted candidates.
"""

from typing import Iterable, Optional

from symptolens.config import Settings, get_settings
from symptolens.core.logging import get_logger
from symptolens.schemas.conditions import MedicalCondition, PotentialCondition, normalize_terms
from symptolens.services.association_scorer import (
    association_score,
    matching_factors,
    relevance_for_score,
)

logger = get_logger(__name__)


class PredictionAggregator:
    """
    Builds the candidate list for one request.

    Output keeps repository order; ranking belongs to the validator.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def aggregate(
        self,
        conditions: Iterable[MedicalCondition],
        identified_factors: Iterable[str],
        body_location: Optional[str] = None
    ) -> list[PotentialCondition]:
        """
        Score every condition and keep the plausible ones.

        Args:
            conditions: Reference conditions in repository order.
            identified_factors: Normalized symptom/visual tokens.
            body_location: Optional body location hint.

        Returns:
            Unsorted candidates with reasoning notes.
        """
        factors = normalize_terms(list(identified_factors))
        factor_set = set(factors)
        candidates: list[PotentialCondition] = []

        for condition in conditions:
            if not condition.all_factors:
                logger.warning(
                    f"Skipping condition without symptoms or visual cues: {condition.name}"
                )
                continue

            candidate = self._score_condition(condition, factors, factor_set, body_location)
            if candidate is not None:
                candidates.append(candidate)

        logger.debug(
            f"Aggregated {len(candidates)} candidates",
            extra={"factors": len(factors)}
        )
        return candidates

    def _score_condition(
        self,
        condition: MedicalCondition,
        factors: list[str],
        factor_set: set[str],
        body_location: Optional[str]
    ) -> Optional[PotentialCondition]:
        settings = self._settings

        score = association_score(condition, factors, body_location, settings)
        matched = matching_factors(condition, factors)
        adjustments: list[str] = []

        relationships = condition.symptom_relationships
        if relationships is not None:
            if relationships.required and not all(t in factor_set for t in relationships.required):
                score *= settings.REQUIRED_MISSING_FACTOR
                missing = [t for t in relationships.required if t not in factor_set]
                adjustments.append(f"Required symptoms not all present: {', '.join(missing)}")

            if relationships.commonly_together and all(
                t in factor_set for t in relationships.commonly_together
            ):
                score *= settings.COMMONLY_TOGETHER_BOOST
                adjustments.append(
                    f"Commonly co-occurring symptoms present: {', '.join(relationships.commonly_together)}"
                )

            if relationships.rarely_together and all(
                t in factor_set for t in relationships.rarely_together
            ):
                score *= settings.RARELY_TOGETHER_FACTOR
                adjustments.append(
                    f"Rarely co-occurring symptoms present: {', '.join(relationships.rarely_together)}"
                )

        if not matched and score <= settings.CANDIDATE_MIN_SCORE:
            return None

        return PotentialCondition(
            name=condition.name,
            description=condition.description,
            relevance=relevance_for_score(score, settings),
            symptoms=list(condition.symptoms),
            visual_cues=list(condition.visual_cues),
            score=score,
            urgency=condition.urgency,
            recommendation=condition.recommendation,
            matching_factors=matched,
            learn_more_url=condition.learn_more_url,
            reasoning_notes=[
                f"Association score: {score:.2f}",
                f"Matching factors: {', '.join(matched)}",
                *adjustments
            ]
        )

"""
SymptoLens Condition Scoring Pipeline

Turns identified symptom and visual factors into ranked candidate
conditions plus next-step guidance:

    factors -> standardization -> repository snapshot -> aggregation
            -> validation -> (LLM merge) -> recommendations
"""

import time
from typing import Iterable, Optional

from symptolens.config import Settings, get_settings
from symptolens.core.logging import get_logger
from symptolens.core.metrics import ANALYSES_TOTAL, ANALYSIS_SECONDS
from symptolens.schemas.conditions import (
    PotentialCondition,
    Relevance,
    ScoringResult,
    urgency_rank,
)
from symptolens.services.condition_repository import ConditionRepository
from symptolens.services.llm_enhancement import HttpPredictionSource
from symptolens.services.prediction_aggregator import PredictionAggregator
from symptolens.services.prediction_validator import PredictionValidator, merge_predictions
from symptolens.services.recommendation_advisor import RecommendationAdvisor
from symptolens.services.term_standardizer import standardize_factors

logger = get_logger(__name__)


def build_summary(conditions: list[PotentialCondition], factors: list[str]) -> str:
    """Plain-language summary of the ranked predictions."""
    if not conditions:
        return (
            "Based on the information provided, no specific conditions could be identified. "
            "Please consult with a healthcare professional for a proper evaluation."
        )

    top = conditions[0]
    strength = "a strong" if top.relevance == Relevance.HIGH else "a possible"

    summary = f"Based on your reported symptoms ({', '.join(factors)}), "
    summary += f"the analysis suggests {strength} association with {top.name}. "

    others = [c.name for c in conditions[1:3]]
    if others:
        summary += f"Other possible conditions include {', '.join(others)}. "

    rank = urgency_rank(top.urgency)
    if rank >= 3:
        summary += (
            "This analysis indicates a condition of high urgency. "
            "It is recommended to seek medical attention promptly. "
        )
    elif rank >= 2:
        summary += (
            "This analysis indicates a condition of medium urgency. "
            "It is recommended to consult with a healthcare provider soon. "
        )
    else:
        summary += (
            "This condition is generally of lower urgency, but a healthcare professional "
            "should still be consulted for proper diagnosis and treatment. "
        )

    summary += (
        "Remember that this analysis is for educational purposes only and should not "
        "replace professional medical advice."
    )
    return summary


class SymptomScoringPipeline:
    """
    Request-scoped scoring pipeline.

    Stateless apart from the injected repository; safe to share across
    concurrent requests.
    """

    def __init__(
        self,
        repository: ConditionRepository,
        settings: Optional[Settings] = None,
        prediction_source: Optional[HttpPredictionSource] = None
    ):
        self._repository = repository
        self._settings = settings or get_settings()
        self._prediction_source = prediction_source
        self._aggregator = PredictionAggregator(self._settings)
        self._validator = PredictionValidator(self._settings)
        self._advisor = RecommendationAdvisor()

    @property
    def has_prediction_source(self) -> bool:
        return self._prediction_source is not None

    async def score(
        self,
        identified_factors: Iterable[str],
        body_location: Optional[str] = None,
        llm_predictions: Optional[list[PotentialCondition]] = None,
        include_llm: bool = False
    ) -> ScoringResult:
        """
        Score identified factors against the reference conditions.

        Args:
            identified_factors: Symptom/visual tokens from the feature extractor.
            body_location: Optional body location hint.
            llm_predictions: Predictions to merge, if the caller already has them.
            include_llm: Fetch predictions from the configured LLM source.

        Returns:
            Ranked conditions, next steps and summary. Never raises for
            data-quality problems; empty input yields default guidance.
        """
        start = time.perf_counter()
        factors = standardize_factors(identified_factors)
        location = body_location.strip().lower() if body_location and body_location.strip() else None

        if not factors:
            logger.info("No identified factors; returning default guidance")
            ANALYSES_TOTAL.labels(outcome="empty_input").inc()
            return ScoringResult(
                conditions=[],
                next_steps=self._advisor.default_steps(),
                summary=build_summary([], factors),
                identified_factors=[],
                body_location=location
            )

        snapshot = await self._repository.snapshot()
        candidates = self._aggregator.aggregate(snapshot.conditions, factors, location)
        conditions = self._validator.validate(candidates, factors, snapshot.get)

        if llm_predictions is None and include_llm and self._prediction_source is not None:
            llm_predictions = await self._prediction_source.predict(factors, location)
        if llm_predictions:
            conditions = merge_predictions(conditions, llm_predictions, self._settings)

        next_steps = self._advisor.advise(conditions, location)

        outcome = "matched" if conditions else "no_candidates"
        ANALYSES_TOTAL.labels(outcome=outcome).inc()
        ANALYSIS_SECONDS.observe(time.perf_counter() - start)
        logger.info(
            f"Scored {len(factors)} factors against {len(snapshot)} conditions",
            extra={
                "candidates": len(candidates),
                "conditions": len(conditions),
                "source": snapshot.source
            }
        )

        return ScoringResult(
            conditions=conditions,
            next_steps=next_steps,
            summary=build_summary(conditions, factors),
            identified_factors=factors,
            body_location=location
        )

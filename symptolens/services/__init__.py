"""Services for SymptoLens."""

from symptolens.services.condition_repository import ConditionRepository, ConditionSnapshot
from symptolens.services.condition_store import (
    ConditionStore,
    ConditionStoreError,
    HttpConditionStore,
    InMemoryConditionStore,
    JsonFileConditionStore,
    RedisConditionStore,
    build_condition_store,
)
from symptolens.services.llm_enhancement import HttpPredictionSource, build_prediction_source
from symptolens.services.prediction_aggregator import PredictionAggregator
from symptolens.services.prediction_validator import PredictionValidator, merge_predictions
from symptolens.services.recommendation_advisor import RecommendationAdvisor
from symptolens.services.scoring_pipeline import SymptomScoringPipeline

__all__ = [
    "ConditionRepository",
    "ConditionSnapshot",
    "ConditionStore",
    "ConditionStoreError",
    "HttpConditionStore",
    "InMemoryConditionStore",
    "JsonFileConditionStore",
    "RedisConditionStore",
    "build_condition_store",
    "HttpPredictionSource",
    "build_prediction_source",
    "PredictionAggregator",
    "PredictionValidator",
    "merge_predictions",
    "RecommendationAdvisor",
    "SymptomScoringPipeline",
]

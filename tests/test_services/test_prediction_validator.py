"""
Tests for prediction validation, ranking and merging.
"""

import pytest

from symptolens.config import Settings
from symptolens.schemas.conditions import MedicalCondition, PotentialCondition, Relevance
from symptolens.services.prediction_validator import (
    PredictionValidator,
    critical_symptoms,
    merge_predictions,
    rank_predictions,
)


def candidate(name: str, score: float, matching: list[str] | None = None, **kwargs) -> PotentialCondition:
    return PotentialCondition(
        name=name,
        score=score,
        matching_factors=["cough"] if matching is None else matching,
        **kwargs
    )


def no_lookup(name):
    return None


@pytest.fixture
def validator(settings: Settings) -> PredictionValidator:
    return PredictionValidator(settings)


def test_noise_floor_drops_low_scores(validator: PredictionValidator):
    results = validator.validate(
        [candidate("A", 0.09), candidate("B", 0.1), candidate("C", 0.5)],
        ["cough"],
        no_lookup
    )

    assert [r.name for r in results] == ["C", "B"]


def test_unexplained_low_score_dropped(validator: PredictionValidator):
    results = validator.validate(
        [candidate("A", 0.25, matching=[]), candidate("B", 0.35, matching=[])],
        ["cough"],
        no_lookup
    )

    assert [r.name for r in results] == ["B"]


def test_missing_critical_symptoms_penalized(validator: PredictionValidator, common_cold: MedicalCondition):
    lookup = {common_cold.key: common_cold}.get

    [result] = validator.validate(
        [candidate("Common Cold", 0.5067, matching=["cough", "sore throat"])],
        ["cough", "sore throat", "fever"],
        lambda name: lookup(name.lower())
    )

    assert result.score == pytest.approx(0.5067 * 0.8)
    assert result.relevance == Relevance.MEDIUM
    assert result.reasoning_notes[-1] == "Missing critical symptoms: runny nose"


def test_all_critical_symptoms_present(validator: PredictionValidator, common_cold: MedicalCondition):
    [result] = validator.validate(
        [candidate("Common Cold", 0.6)],
        ["runny nose", "sore throat", "cough"],
        lambda name: common_cold
    )

    assert result.score == pytest.approx(0.6)
    assert result.reasoning_notes == []


def test_critical_symptoms_short_list():
    condition = MedicalCondition(name="Sprain", description="", symptoms=["swelling", "pain"])

    assert critical_symptoms(condition) == ["swelling", "pain"]


def test_unknown_condition_skips_critical_check(validator: PredictionValidator):
    [result] = validator.validate([candidate("LLM Only", 0.6)], ["cough"], no_lookup)

    assert result.score == pytest.approx(0.6)


def test_sorted_descending_with_stable_ties(validator: PredictionValidator):
    results = validator.validate(
        [candidate("A", 0.4), candidate("B", 0.8), candidate("C", 0.4), candidate("D", 0.6)],
        ["cough"],
        no_lookup
    )

    assert [r.name for r in results] == ["B", "D", "A", "C"]


def test_scores_clamped_and_relevance_recomputed(validator: PredictionValidator):
    results = validator.validate(
        [candidate("A", 1.3, relevance=Relevance.LOW), candidate("B", 0.39, relevance=Relevance.HIGH)],
        ["cough"],
        no_lookup
    )

    assert results[0].score == 1.0
    assert results[0].relevance == Relevance.HIGH
    assert results[1].relevance == Relevance.LOW


def test_validation_is_idempotent(validator: PredictionValidator):
    candidates = [candidate("Common Cold", 0.7), candidate("Other", 0.5)]
    factors = ["cough"]

    first = validator.validate(candidates, factors, lambda name: None)
    second = validator.validate(candidates, factors, lambda name: None)

    assert first == second


def test_rank_predictions(settings: Settings):
    ranked = rank_predictions([candidate("A", 0.2), candidate("B", 0.9)], settings)

    assert [p.name for p in ranked] == ["B", "A"]
    assert ranked[0].relevance == Relevance.HIGH


def test_merge_keeps_higher_score_and_unions_lists(settings: Settings):
    primary = [candidate("Common Cold", 0.45, symptoms=["cough"], reasoning_notes=["kb"])]
    secondary = [
        candidate("common cold", 0.8, symptoms=["cough", "sneezing"], reasoning_notes=["llm"]),
        candidate("Allergic Rhinitis", 0.5),
        candidate("Noise", 0.05),
    ]

    merged = merge_predictions(primary, secondary, settings)

    assert [p.name for p in merged] == ["Common Cold", "Allergic Rhinitis"]
    assert merged[0].score == pytest.approx(0.8)
    assert merged[0].relevance == Relevance.HIGH
    assert merged[0].symptoms == ["cough", "sneezing"]
    assert merged[0].reasoning_notes == ["kb", "llm"]


def test_merge_with_empty_secondary(settings: Settings):
    primary = [candidate("A", 0.3), candidate("B", 0.6)]

    merged = merge_predictions(primary, [], settings)

    assert [p.name for p in merged] == ["B", "A"]

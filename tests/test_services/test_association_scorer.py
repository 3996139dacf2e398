"""
Tests for association scoring.
"""

import pytest

from symptolens.config import Settings
from symptolens.schemas.conditions import MedicalCondition, Relevance
from symptolens.services.association_scorer import (
    association_score,
    factors_match,
    location_matches,
    matching_factors,
    relevance_for_score,
)


def test_common_cold_partial_match(common_cold: MedicalCondition, settings: Settings):
    """Two of three factors match two of five condition factors."""
    score = association_score(common_cold, ["cough", "sore throat", "fever"], settings=settings)

    # 0.4 * 2/3 + 0.6 * 2/5
    assert score == pytest.approx(0.50667, abs=1e-4)
    assert relevance_for_score(score, settings) == Relevance.MEDIUM


def test_empty_factors_score_zero(common_cold: MedicalCondition):
    assert association_score(common_cold, []) == 0.0
    assert association_score(common_cold, [], body_location="throat") == 0.0


def test_location_bonus(common_cold: MedicalCondition):
    factors = ["cough", "sore throat", "fever"]

    without = association_score(common_cold, factors)
    with_location = association_score(common_cold, factors, body_location="Throat")

    assert with_location == pytest.approx(without + 0.2)


def test_score_clamped_to_one(common_cold: MedicalCondition):
    factors = list(common_cold.symptoms)

    score = association_score(common_cold, factors, body_location="head")

    assert score == 1.0


def test_factor_order_and_duplicates_ignored(common_cold: MedicalCondition):
    a = association_score(common_cold, ["cough", "sore throat"])
    b = association_score(common_cold, ["sore throat", "cough", "Cough "])

    assert a == b


def test_subset_never_scores_higher_coverage(common_cold: MedicalCondition):
    """Adding an unrelated factor can only lower the score."""
    base = association_score(common_cold, ["cough", "sneezing"])
    diluted = association_score(common_cold, ["cough", "sneezing", "knee pain"])

    assert diluted < base


def test_symmetric_substring_match():
    assert factors_match("severe headache", "headache")
    assert factors_match("headache", "severe headache")
    assert not factors_match("fever", "rash")


def test_matching_factors_includes_visual_cues():
    condition = MedicalCondition(
        name="Eczema",
        description="Dry, itchy skin.",
        symptoms=["itching", "dry skin"],
        visual_cues=["red patches"],
        body_locations=["skin"]
    )

    matched = matching_factors(condition, ["red patches", "fever", "itching"])

    assert matched == ["red patches", "itching"]


def test_condition_without_factors_scores_zero():
    condition = MedicalCondition(name="Empty", description="", symptoms=[])

    assert association_score(condition, ["fever"]) == 0.0


def test_location_matches(common_cold: MedicalCondition):
    assert location_matches(common_cold, "head")
    assert not location_matches(common_cold, "skin")
    assert not location_matches(common_cold, None)


@pytest.mark.parametrize("score,expected", [
    (0.71, Relevance.HIGH),
    (0.7, Relevance.MEDIUM),
    (0.4, Relevance.MEDIUM),
    (0.39, Relevance.LOW),
    (0.0, Relevance.LOW),
    (1.0, Relevance.HIGH),
])
def test_relevance_thresholds(score: float, expected: Relevance, settings: Settings):
    assert relevance_for_score(score, settings) == expected

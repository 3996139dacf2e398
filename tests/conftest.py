"""
Pytest fixtures for SymptoLens tests.
"""

import pytest
from fastapi.testclient import TestClient

# Set environment variables before imports
import os
os.environ["SERVICE_API_KEY"] = "test-api-key-12345"
os.environ["REDIS_URL"] = "redis://localhost:6399"
os.environ["DEBUG"] = "true"
os.environ["CONDITION_STORE_BACKEND"] = "none"
os.environ.pop("LLM_ENHANCEMENT_URL", None)

from symptolens.main import app
from symptolens.config import Settings, get_settings
from symptolens.schemas.conditions import MedicalCondition
from symptolens.services.condition_repository import ConditionRepository
from symptolens.services.condition_store import InMemoryConditionStore


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def test_client():
    """Create synchronous test client with the lifespan running."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def api_key_headers():
    """Headers with valid API key."""
    return {"X-API-Key": "test-api-key-12345"}


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def common_cold() -> MedicalCondition:
    """Reference Common Cold record."""
    return MedicalCondition(
        name="Common Cold",
        description="A viral infection of the nose and throat.",
        symptoms=["runny nose", "sore throat", "cough", "congestion", "sneezing"],
        visual_cues=[],
        urgency="low",
        recommendation="Rest and stay hydrated.",
        body_locations=["head", "throat"]
    )


@pytest.fixture
def sample_records() -> list[dict]:
    """Small condition set in the camelCase shape of store exports."""
    return [
        {
            "name": "Common Cold",
            "description": "A viral infection of the nose and throat.",
            "symptoms": ["runny nose", "sore throat", "cough", "congestion", "sneezing"],
            "visualCues": [],
            "urgency": "low",
            "recommendation": "Rest and stay hydrated.",
            "bodyLocations": ["head", "throat"]
        },
        {
            "name": "Influenza",
            "description": "A viral respiratory infection.",
            "symptoms": ["fever", "cough", "body aches", "fatigue", "chills"],
            "urgency": "medium",
            "recommendation": "Rest and stay hydrated.",
            "bodyLocations": ["general", "chest"],
            "symptomRelationships": {
                "required": ["fever", "fatigue"],
                "commonlyTogether": ["fever", "body aches", "chills"]
            }
        },
        {
            "name": "Contact Dermatitis",
            "description": "A red, itchy rash caused by contact with a substance.",
            "symptoms": ["itching", "rash"],
            "visualCues": ["redness", "blisters"],
            "urgency": "low",
            "recommendedActions": ["Avoid the irritant", "Use a cool compress"],
            "bodyLocations": ["skin"]
        }
    ]


@pytest.fixture
def repository(sample_records, settings, fake_clock) -> ConditionRepository:
    """Repository backed by the sample records."""
    return ConditionRepository(InMemoryConditionStore(sample_records), settings, clock=fake_clock)

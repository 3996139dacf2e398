"""
Configuration management for SymptoLens Condition Scoring Service.
Uses pydantic-settings for type-safe environment variable handling.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "SymptoLens Condition Scoring Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: Optional[str] = None  # defaults to DEBUG or INFO from DEBUG

    # Security
    SERVICE_API_KEY: str = ""
    FRONTEND_ORIGIN: str = "http://localhost:5173"

    # Redis
    REDIS_URL: str = "redis://localhost:6379"
    ANALYSIS_CACHE_TTL: int = 300  # 5 minutes
    CONDITION_CACHE_TTL: int = 3600  # 1 hour

    # Condition store: none, http, file or redis
    CONDITION_STORE_BACKEND: str = "none"
    CONDITION_STORE_URL: Optional[str] = None
    CONDITION_STORE_PATH: Optional[str] = None
    CONDITION_STORE_REDIS_KEY: str = "symptolens:conditions"
    CONDITION_STORE_TIMEOUT: float = 5.0
    CONDITION_STORE_RETRIES: int = 1

    # LLM enhancement collaborator
    LLM_ENHANCEMENT_URL: Optional[str] = None
    LLM_ENHANCEMENT_TIMEOUT: float = 10.0

    # Association scoring
    COVERAGE_WEIGHT: float = 0.4
    SPECIFICITY_WEIGHT: float = 0.6
    LOCATION_BONUS: float = 0.2

    # Symptom relationship adjustments
    REQUIRED_MISSING_FACTOR: float = 0.5
    COMMONLY_TOGETHER_BOOST: float = 1.2
    RARELY_TOGETHER_FACTOR: float = 0.8
    CANDIDATE_MIN_SCORE: float = 0.3

    # Validation
    NOISE_FLOOR: float = 0.1
    UNEXPLAINED_MIN_SCORE: float = 0.3
    CRITICAL_SYMPTOM_COUNT: int = 3
    CRITICAL_MISSING_FACTOR: float = 0.8

    # Relevance thresholds: high is > HIGH, medium is >= MEDIUM
    HIGH_RELEVANCE_THRESHOLD: float = 0.7
    MEDIUM_RELEVANCE_THRESHOLD: float = 0.4

    # Rate limiting
    RATE_LIMIT_REQUESTS: int = 100
    RATE_LIMIT_WINDOW: int = 60  # seconds

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

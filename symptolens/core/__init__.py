"""Core modules for SymptoLens."""

from symptolens.core.auth import verify_api_key
from symptolens.core.cache import CacheService
from symptolens.core.logging import get_logger, setup_logging
from symptolens.core.rate_limit import limiter

__all__ = [
    "verify_api_key",
    "CacheService",
    "get_logger",
    "setup_logging",
    "limiter",
]

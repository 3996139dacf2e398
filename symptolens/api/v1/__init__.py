"""API v1 routes."""

from symptolens.api.v1 import analysis, conditions, health

__all__ = ["analysis", "conditions", "health"]

"""API routes for SymptoLens."""

from fastapi import APIRouter

from symptolens.api.v1 import analysis, conditions, health

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(analysis.router)
api_router.include_router(conditions.router)

__all__ = ["api_router"]

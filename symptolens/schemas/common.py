"""
Common schemas used across multiple endpoints.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    timestamp: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "error": "InternalServerError",
                "message": "An unexpected error occurred",
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }


class RepositoryStatus(BaseModel):
    """Condition repository cache status."""

    loaded: bool
    source: Optional[str] = None
    total_conditions: int = 0
    loaded_at: Optional[datetime] = None
    expires_in_seconds: Optional[float] = None


class HealthResponse(BaseModel):
    """Health check response."""

    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    repository: RepositoryStatus = Field(..., description="Reference data status")
    redis: bool = Field(default=False, description="Redis connection status")
    uptime_seconds: float = Field(default=0, description="Service uptime")

    class Config:
        json_schema_extra = {
            "example": {
                "service": "SymptoLens Condition Scoring Service",
                "version": "1.0.0",
                "status": "healthy",
                "timestamp": "2024-01-15T10:30:00Z",
                "repository": {
                    "loaded": True,
                    "source": "fallback",
                    "total_conditions": 14,
                    "loaded_at": "2024-01-15T10:00:00Z",
                    "expires_in_seconds": 1800.0
                },
                "redis": True,
                "uptime_seconds": 3600.5
            }
        }


class ReloadResponse(BaseModel):
    """Reference data reload response."""

    success: bool
    message: str
    source: str
    total_conditions: int
    details: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=datetime.utcnow)

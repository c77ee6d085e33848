"""
Shared response schemas - status messages, errors, health
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain status reply used by every write endpoint."""

    message: str = Field(description="Human-readable result")

    class Config:
        json_schema_extra = {"example": {"message": "New user jdoe created"}}


class ErrorResponse(BaseModel):
    """Error reply body."""

    message: str = Field(description="Human-readable error message")
    details: Optional[List[Any]] = Field(default=None, description="Field-level validation errors")

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Invalid request data",
                "details": [{"loc": ["body", "active"], "msg": "Input should be a valid boolean"}],
            }
        }


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = Field(description="Application version")
    checks: dict[str, dict[str, Any]] = Field(description="Individual component health checks")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "timestamp": "2025-09-13T10:30:00Z",
                "version": "1.0.0",
                "checks": {
                    "database": {"status": "healthy", "response_time_ms": 15},
                    "redis": {"status": "healthy", "response_time_ms": 5},
                },
            }
        }

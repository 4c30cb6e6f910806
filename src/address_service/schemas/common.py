"""Common Pydantic v2 schemas shared across the API.

Provides error response and health check schemas.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Error response for unexpected failures on correlated endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    error: str = Field(description="Human-readable error message")
    correlation_id: str = Field(alias="correlationId")


class ValidationErrorResponse(BaseModel):
    """Error response for malformed requests rejected at the transport boundary."""

    error: str = Field(default="Validation Error")
    message: str = Field(description="Human-readable error summary")
    details: list[dict[str, Any]] = Field(default_factory=list, description="Detailed validation errors")


class HealthResponse(BaseModel):
    """Liveness/readiness probe response."""

    status: str
    timestamp: datetime
    service: str
    version: str | None = None

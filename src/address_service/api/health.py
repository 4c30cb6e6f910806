"""Health check endpoints for load balancers and process supervisors."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from address_service.core.config import Settings, get_settings
from address_service.schemas.common import HealthResponse

health_router = APIRouter(prefix="/health", tags=["health"])


@health_router.get("", response_model=HealthResponse, response_model_exclude_none=True)
async def health(settings: Annotated[Settings, Depends(get_settings)]) -> HealthResponse:
    """Report service status and version."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(UTC),
        service=settings.service_name,
        version=settings.service_version,
    )


@health_router.get("/ready", response_model=HealthResponse, response_model_exclude_none=True)
async def ready(settings: Annotated[Settings, Depends(get_settings)]) -> HealthResponse:
    """Readiness probe."""
    return HealthResponse(status="ready", timestamp=datetime.now(UTC), service=settings.service_name)


@health_router.get("/live", response_model=HealthResponse, response_model_exclude_none=True)
async def live(settings: Annotated[Settings, Depends(get_settings)]) -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(status="alive", timestamp=datetime.now(UTC), service=settings.service_name)

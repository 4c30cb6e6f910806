"""Root API router with /api/v1 prefix and middleware registration."""

from fastapi import APIRouter, FastAPI

from address_service.api.middleware import CorrelationIdMiddleware, SecurityHeadersMiddleware, setup_cors
from address_service.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root router with the health and versioned API routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from address_service.api.health import health_router
    from address_service.api.v1.addresses import addresses_router

    v1_router = APIRouter(prefix=settings.api_v1_prefix)
    v1_router.include_router(addresses_router)

    root_router = APIRouter()
    root_router.include_router(health_router)
    root_router.include_router(v1_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    setup_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(CorrelationIdMiddleware, trusted_proxy_headers=settings.trusted_proxy_header_list)

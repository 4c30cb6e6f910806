"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from address_service.core.config import get_settings
from address_service.core.logging import setup_logging
from address_service.lib.address_validation import get_configured_provider
from address_service.schemas.common import ValidationErrorResponse


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifecycle: configure logging and report provider status on startup."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)

    provider = get_configured_provider(settings)
    if provider.is_configured:
        logger.info(f"Address provider {provider.provider_name} configured")
    else:
        logger.warning(f"Address provider {provider.provider_name} is missing credentials")

    yield

    logger.info(f"{settings.service_name} shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Address Service API",
        description="Address validation front-end for the Smarty US Street Address API",
        version=settings.service_version,
        lifespan=lifespan,
        docs_url="/documentation",
    )

    # Register exception handlers
    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc)},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', 'invalid')}" for error in errors
        )
        body = ValidationErrorResponse(message=message or "Invalid request", details=jsonable_encoder(errors))
        return JSONResponse(status_code=400, content=body.model_dump())

    # Register middleware and routers
    from address_service.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app

"""Typer CLI root application with serve, validate, and providers commands."""

import asyncio
import json
import uuid
from typing import TYPE_CHECKING

import typer

from address_service.core.config import get_settings
from address_service.core.logging import setup_logging

if TYPE_CHECKING:
    from address_service.schemas.address import AddressValidationRequest, AddressValidationResponse

app = typer.Typer(name="address-service", help="Address validation service CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str | None = typer.Option(None, "--host", help="Bind host (defaults to HOST setting)"),
    port: int | None = typer.Option(None, "--port", help="Bind port (defaults to PORT setting)"),
    workers: int | None = typer.Option(None, "--workers", help="Worker processes (defaults to WORKERS setting)"),
) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "address_service.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        workers=None if reload else (workers or settings.workers),
    )


@app.command()
def validate(
    street: str | None = typer.Option(None, "--street", help="Street line"),
    street2: str | None = typer.Option(None, "--street2", help="Secondary line (apartment, suite, unit)"),
    city: str | None = typer.Option(None, "--city", help="City"),
    state: str | None = typer.Option(None, "--state", help="State"),
    zipcode: str | None = typer.Option(None, "--zipcode", help="ZIP code"),
    addressee: str | None = typer.Option(None, "--addressee", help="Recipient name or firm"),
    candidates: int | None = typer.Option(None, "--candidates", help="Maximum matches to return (1-10)"),
    match: str | None = typer.Option(None, "--match", help="Match mode: strict, range, or invalid"),
    output_format: str | None = typer.Option(None, "--format", help="Output formatting hint passed to the provider"),
    correlation_id: str | None = typer.Option(None, "--correlation-id", help="Tracking identifier"),
) -> None:
    """Validate a single address with the configured provider and print the JSON response."""
    from address_service.schemas.address import AddressValidationRequest

    request = AddressValidationRequest(
        correlation_id=correlation_id or str(uuid.uuid4()),
        street=street,
        street2=street2,
        city=city,
        state=state,
        zipcode=zipcode,
        addressee=addressee,
        candidates=candidates,
        match=match,
        format=output_format,
    )
    response = asyncio.run(_validate(request))

    typer.echo(json.dumps(response.model_dump(by_alias=True, exclude_none=True), indent=2))
    if not response.success:
        raise typer.Exit(code=1)


async def _validate(request: "AddressValidationRequest") -> "AddressValidationResponse":
    """Async implementation of single-address validation."""
    from address_service.lib.address_validation import get_configured_provider
    from address_service.services.address_service import validate_address

    provider = get_configured_provider(get_settings())
    return await validate_address(provider, request)


@app.command()
def providers() -> None:
    """List registered address validation providers and their configuration status."""
    from address_service.lib.address_validation import get_all_provider_metadata

    settings = get_settings()
    for meta in get_all_provider_metadata(settings):
        marker = "*" if meta.name == settings.address_provider else " "
        status = "configured" if meta.is_configured else "missing credentials"
        typer.echo(f"{marker} {meta.name:<10} {meta.provider_name:<24} {status}")

"""FastAPI dependency injection for the address provider."""

from typing import Annotated

from fastapi import Depends

from address_service.core.config import Settings, get_settings
from address_service.lib.address_validation import AddressValidationProvider, get_configured_provider


def get_address_provider(
    settings: Annotated[Settings, Depends(get_settings)],
) -> AddressValidationProvider:
    """Return the configured address validation provider for this request.

    Args:
        settings: Application settings.

    Returns:
        The provider selected by ``settings.address_provider``.
    """
    return get_configured_provider(settings)

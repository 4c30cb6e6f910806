"""Address validation library with pluggable providers, request validation, and interpretation.

Public API:
    - AddressValidationProvider: Abstract provider interface
    - AddressProviderError: Provider transport/service error
    - SmartyAddressProvider: Smarty US Street Address API provider
    - validate_request: Structural request validation
    - interpret: Candidate list to ValidationVerdict
    - Candidate / CandidateAnalysis / CandidateMetadata: Provider candidate records
    - ProviderCallLogger: Per-call third-party API logger
    - get_provider: Provider factory/registry
    - get_configured_provider: Provider built from application settings
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from address_service.lib.address_validation.base import (
    API_CALL_FAILED_NOTE,
    VALIDATION_FAILED_ERROR,
    AddressProviderError,
    AddressValidationProvider,
)
from address_service.lib.address_validation.call_logger import ProviderCallLogger, redact_params
from address_service.lib.address_validation.candidate import (
    Candidate,
    CandidateAnalysis,
    CandidateMetadata,
    parse_candidates,
)
from address_service.lib.address_validation.interpreter import (
    NO_MATCH_NOTE,
    PO_BOX_NOTE,
    ValidationVerdict,
    classify_candidate,
    interpret,
)
from address_service.lib.address_validation.smarty import SmartyAddressProvider
from address_service.lib.address_validation.types import AddressRequest, ValidationOutcome
from address_service.lib.address_validation.validator import validate_request

if TYPE_CHECKING:
    from address_service.core.config import Settings

# Provider registry of all known providers
_PROVIDERS: dict[str, type[AddressValidationProvider]] = {
    "smarty": SmartyAddressProvider,
}

# Alternate names accepted by get_provider()
_ALIASES: dict[str, str] = {
    "smarty-us-street": "smarty",
    "smarty-us-street-api": "smarty",
}


def get_available_providers() -> list[str]:
    """Return the names of all registered address validation providers.

    Returns:
        Sorted list of provider name strings.
    """
    return sorted(_PROVIDERS.keys())


def get_provider(provider: str = "smarty", **kwargs: Any) -> AddressValidationProvider:
    """Get an address validation provider instance by name.

    Args:
        provider: Provider name or alias (case-insensitive, e.g. "smarty").
        **kwargs: Arguments forwarded to the provider constructor.

    Returns:
        An instance of the requested provider.

    Raises:
        ValueError: If the provider is not registered.
    """
    name = provider.strip().lower()
    cls = _PROVIDERS.get(_ALIASES.get(name, name))
    if cls is None:
        msg = f"Unknown address provider: {provider!r}. Available: {get_available_providers()}"
        raise ValueError(msg)
    return cls(**kwargs)


def _provider_kwargs(settings: Settings) -> dict[str, dict[str, Any]]:
    return {
        "smarty": {
            "auth_id": settings.smarty_auth_id,
            "auth_token": settings.smarty_auth_token,
            "base_url": settings.smarty_base_url,
            "timeout": settings.smarty_timeout,
            "user_agent": settings.smarty_user_agent,
        },
    }


def get_configured_provider(settings: Settings) -> AddressValidationProvider:
    """Build the provider selected by ``settings.address_provider``.

    The provider is returned even when it lacks credentials; callers get a
    structured "not configured" outcome from it rather than a startup failure.

    Args:
        settings: Application settings.

    Returns:
        The selected provider, constructed from settings.

    Raises:
        ValueError: If the configured provider name is not registered.
    """
    name = settings.address_provider
    canonical = _ALIASES.get(name, name)
    return get_provider(canonical, **_provider_kwargs(settings).get(canonical, {}))


@dataclass
class ProviderMetadata:
    """Metadata about an address validation provider."""

    name: str
    provider_name: str
    requires_credentials: bool
    is_configured: bool


def get_all_provider_metadata(settings: Settings) -> list[ProviderMetadata]:
    """Return metadata for all registered providers, built from settings.

    Args:
        settings: Application settings.

    Returns:
        List of ProviderMetadata for every registered provider.
    """
    kwargs = _provider_kwargs(settings)
    metadata: list[ProviderMetadata] = []
    for name in get_available_providers():
        provider = get_provider(name, **kwargs.get(name, {}))
        metadata.append(
            ProviderMetadata(
                name=name,
                provider_name=provider.provider_name,
                requires_credentials=provider.requires_credentials,
                is_configured=provider.is_configured,
            )
        )
    return metadata


__all__ = [
    "API_CALL_FAILED_NOTE",
    "NO_MATCH_NOTE",
    "PO_BOX_NOTE",
    "VALIDATION_FAILED_ERROR",
    "AddressProviderError",
    "AddressRequest",
    "AddressValidationProvider",
    "Candidate",
    "CandidateAnalysis",
    "CandidateMetadata",
    "ProviderCallLogger",
    "ProviderMetadata",
    "SmartyAddressProvider",
    "ValidationOutcome",
    "ValidationVerdict",
    "classify_candidate",
    "get_all_provider_metadata",
    "get_available_providers",
    "get_configured_provider",
    "get_provider",
    "interpret",
    "parse_candidates",
    "redact_params",
    "validate_request",
]

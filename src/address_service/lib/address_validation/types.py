"""Data types shared by address validation providers.

Defines the request shape read by the validator and query builders, and
the outcome returned by every provider call.
"""

from dataclasses import dataclass, field
from typing import Protocol

from address_service.lib.address_validation.interpreter import ValidationVerdict


class AddressRequest(Protocol):
    """Attributes of an inbound address validation request."""

    correlation_id: str | None
    street: str | None
    street2: str | None
    city: str | None
    state: str | None
    zipcode: str | None
    addressee: str | None
    candidates: int | None
    match: str | None
    format: str | None


@dataclass
class ValidationOutcome:
    """Result of one provider call.

    Attributes:
        success: Whether the provider call completed and was interpreted.
        correlation_id: Correlation ID of the request.
        verdict: Verdict (always present; conservative on failure).
        error: Error text when ``success`` is false.
    """

    success: bool
    correlation_id: str
    verdict: ValidationVerdict = field(default_factory=ValidationVerdict)
    error: str | None = None

"""Pydantic v2 schemas for address validation."""

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from address_service.lib.address_validation import Candidate, ValidationOutcome


def _text(value: Any) -> str | None:
    return None if value is None else str(value)


def _json_safe(value: Any) -> Any:
    """Copy provider data, replacing non-finite floats (not representable in JSON) with None."""
    if isinstance(value, Mapping):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_json_safe(item) for item in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


class AddressValidationRequest(BaseModel):
    """Address validation request, as a JSON body or query string.

    Only types are enforced here; length and value rules are applied by the
    request validator so that every violation is reported together.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    correlation_id: str = Field(..., alias="correlationId", min_length=1, description="Caller tracking identifier")
    street: str | None = Field(default=None, description="Street line, e.g. 1600 Amphitheatre Pkwy")
    street2: str | None = Field(default=None, description="Secondary line (apartment, suite, unit)")
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    addressee: str | None = Field(default=None, description="Recipient name or firm")
    candidates: int | None = Field(default=None, description="Maximum number of matches to return (1-10)")
    match: str | None = Field(default=None, description="Match mode: strict, range, or invalid")
    format: str | None = Field(default=None, description="Output formatting hint passed to the provider")


class ValidatedAddress(BaseModel):
    """A provider candidate converted to the response shape."""

    delivery_line_1: str | None = None
    delivery_line_2: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    plus4_code: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> "ValidatedAddress":
        components = candidate.components
        return cls(
            delivery_line_1=candidate.delivery_line_1,
            delivery_line_2=candidate.delivery_line_2,
            city=_text(components.get("city_name")),
            state=_text(components.get("state_abbreviation")),
            zipcode=_text(components.get("zipcode")),
            plus4_code=_text(components.get("plus4_code")),
            latitude=candidate.metadata.latitude if candidate.metadata else None,
            longitude=candidate.metadata.longitude if candidate.metadata else None,
            metadata={
                "components": _json_safe(components),
                "metadata": _json_safe(candidate.metadata.raw) if candidate.metadata else {},
                "analysis": _json_safe(candidate.analysis.raw) if candidate.analysis else {},
            },
        )


class AddressValidationData(BaseModel):
    """Normalized validation verdict."""

    validated: bool
    deliverable: bool
    address: ValidatedAddress | None = None
    suggestions: list[ValidatedAddress] | None = None
    validation_notes: list[str] = Field(default_factory=list)


class AddressValidationResponse(BaseModel):
    """Response envelope for address validation."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    correlation_id: str = Field(..., alias="correlationId")
    data: AddressValidationData | None = None
    error: str | None = None

    @classmethod
    def from_outcome(cls, outcome: ValidationOutcome) -> "AddressValidationResponse":
        """Build the response envelope from a provider outcome."""
        verdict = outcome.verdict
        data = AddressValidationData(
            validated=verdict.validated,
            deliverable=verdict.deliverable,
            validation_notes=list(verdict.notes),
        )
        if verdict.primary_address is not None:
            data.address = ValidatedAddress.from_candidate(verdict.primary_address)
        if verdict.suggestions:
            data.suggestions = [ValidatedAddress.from_candidate(c) for c in verdict.suggestions]

        return cls(
            success=outcome.success,
            correlation_id=outcome.correlation_id,
            data=data,
            error=outcome.error,
        )

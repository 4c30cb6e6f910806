"""Immutable candidate records returned by an address validation provider.

A candidate lives only for the duration of one request/response cycle.
Parsing is tolerant: missing or ill-typed blocks become empty values
rather than errors, so interpretation can always degrade gracefully.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def _as_mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return MappingProxyType(dict(value))
    return _EMPTY


def _as_str(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class CandidateAnalysis:
    """Match signals reported by the provider for a candidate."""

    enhanced_match: str | None = None
    dpv_match_code: str | None = None
    dpv_footnotes: str | None = None
    dpv_vacant: str | None = None
    dpv_no_stat: str | None = None
    raw: Mapping[str, Any] = field(default_factory=lambda: _EMPTY, compare=False, repr=False)

    @classmethod
    def from_payload(cls, payload: Any) -> "CandidateAnalysis | None":
        """Build analysis signals from a raw ``analysis`` block, or ``None`` when absent."""
        if not isinstance(payload, Mapping):
            return None
        return cls(
            enhanced_match=_as_str(payload.get("enhanced_match")),
            dpv_match_code=_as_str(payload.get("dpv_match_code")),
            dpv_footnotes=_as_str(payload.get("dpv_footnotes")),
            dpv_vacant=_as_str(payload.get("dpv_vacant")),
            dpv_no_stat=_as_str(payload.get("dpv_no_stat")),
            raw=_as_mapping(payload),
        )

    @property
    def enhanced_match_tags(self) -> frozenset[str]:
        """Comma-separated ``enhanced_match`` tokens (e.g. ``postal-match``, ``missing-secondary``)."""
        if not self.enhanced_match:
            return frozenset()
        return frozenset(tag.strip() for tag in self.enhanced_match.split(",") if tag.strip())

    @property
    def footnote_codes(self) -> tuple[str, ...]:
        """DPV footnotes split into their two-character codes (``"AAN1"`` -> ``("AA", "N1")``)."""
        notes = (self.dpv_footnotes or "").strip().upper()
        return tuple(notes[i : i + 2] for i in range(0, len(notes), 2))

    def has_footnote(self, code: str) -> bool:
        return code in self.footnote_codes


@dataclass(frozen=True)
class CandidateMetadata:
    """Geolocation and record metadata for a candidate."""

    latitude: float | None = None
    longitude: float | None = None
    precision: str | None = None
    time_zone: str | None = None
    record_type: str | None = None
    raw: Mapping[str, Any] = field(default_factory=lambda: _EMPTY, compare=False, repr=False)

    @classmethod
    def from_payload(cls, payload: Any) -> "CandidateMetadata | None":
        if not isinstance(payload, Mapping):
            return None
        return cls(
            latitude=_as_float(payload.get("latitude")),
            longitude=_as_float(payload.get("longitude")),
            precision=_as_str(payload.get("precision")),
            time_zone=_as_str(payload.get("time_zone")),
            record_type=_as_str(payload.get("record_type")),
            raw=_as_mapping(payload),
        )


@dataclass(frozen=True)
class Candidate:
    """One address record returned by the provider for a request."""

    input_index: int | None = None
    candidate_index: int | None = None
    addressee: str | None = None
    delivery_line_1: str | None = None
    delivery_line_2: str | None = None
    last_line: str | None = None
    components: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    metadata: CandidateMetadata | None = None
    analysis: CandidateAnalysis | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Candidate":
        """Parse a single provider candidate object.

        Args:
            payload: Raw candidate JSON object.

        Returns:
            Candidate with ``metadata``/``analysis`` set to ``None`` when the
            provider omitted those blocks.
        """
        return cls(
            input_index=_as_int(payload.get("input_index")),
            candidate_index=_as_int(payload.get("candidate_index")),
            addressee=_as_str(payload.get("addressee")),
            delivery_line_1=_as_str(payload.get("delivery_line_1")),
            delivery_line_2=_as_str(payload.get("delivery_line_2")),
            last_line=_as_str(payload.get("last_line")),
            components=_as_mapping(payload.get("components")),
            metadata=CandidateMetadata.from_payload(payload.get("metadata")),
            analysis=CandidateAnalysis.from_payload(payload.get("analysis")),
        )

    @property
    def record_type(self) -> str | None:
        return self.metadata.record_type if self.metadata else None

    @property
    def is_po_box(self) -> bool:
        return self.record_type == "P"


def parse_candidates(payload: Any) -> list[Candidate]:
    """Parse a provider payload into candidates, in provider order.

    Accepts either a bare JSON array of candidates or an object carrying an
    ``addresses`` array.  Entries that are not JSON objects are skipped.

    Args:
        payload: Decoded JSON response body.

    Returns:
        List of candidates; empty when the payload shape is unrecognized.
    """
    if isinstance(payload, Mapping):
        payload = payload.get("addresses") or []
    if not isinstance(payload, list):
        return []
    return [Candidate.from_payload(item) for item in payload if isinstance(item, Mapping)]

"""Provider response interpretation, from candidate list to validation verdict.

Selects the primary candidate, classifies it as validated/deliverable from
the provider's postal-match signals, and emits human-readable notes in
rule-evaluation order.  Interpretation never raises: unexpected payload
shapes degrade to a conservative (not validated) verdict.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from address_service.lib.address_validation.candidate import Candidate, CandidateAnalysis

NO_MATCH_NOTE = "No matching addresses found"
PO_BOX_NOTE = "PO Box address - not deliverable by FedEx, UPS, or other non-USPS carriers"

_DELIVERABLE_NOTE = "Address is deliverable by USPS"
_NOT_DELIVERABLE_NOTE = "Address may not be deliverable by USPS"
_SECONDARY_REQUIRED_NOTE = "Secondary information (apartment/suite) is required for delivery"
_SECONDARY_NOT_REQUIRED_NOTE = "Secondary information is available but not required"
_SECONDARY_CORRECTION_NOTE = "Secondary information provided but not recognized - correction needed"
_SECONDARY_UNNEEDED_NOTE = "Secondary information provided but not needed for delivery"
_SECONDARY_MIGHT_BE_NEEDED_NOTE = "Secondary information might be needed for delivery"


@dataclass
class ValidationVerdict:
    """Normalized verdict for one validation request.

    ``deliverable`` is only ever true when ``validated`` is true.
    """

    validated: bool = False
    deliverable: bool = False
    notes: list[str] = field(default_factory=list)
    primary_address: Candidate | None = None
    suggestions: list[Candidate] = field(default_factory=list)


def _is_deliverable(analysis: CandidateAnalysis) -> bool:
    return analysis.dpv_vacant == "N" and analysis.dpv_no_stat == "N" and not analysis.has_footnote("R7")


def _apply_deliverability(verdict: ValidationVerdict, analysis: CandidateAnalysis) -> None:
    if _is_deliverable(analysis):
        verdict.deliverable = True
        verdict.notes.append(_DELIVERABLE_NOTE)
    else:
        verdict.notes.append(_NOT_DELIVERABLE_NOTE)


def _classify_enhanced_match(verdict: ValidationVerdict, analysis: CandidateAnalysis) -> None:
    tags = analysis.enhanced_match_tags

    if "postal-match" in tags:
        verdict.validated = True
        verdict.notes.append("Address found in USPS database")

        if "missing-secondary" in tags:
            if analysis.has_footnote("N1"):
                verdict.notes.append(_SECONDARY_REQUIRED_NOTE)
            else:
                verdict.notes.append(_SECONDARY_NOT_REQUIRED_NOTE)

        if "unknown-secondary" in tags:
            if analysis.has_footnote("C1"):
                verdict.notes.append(_SECONDARY_CORRECTION_NOTE)
            elif analysis.has_footnote("CC"):
                verdict.notes.append(_SECONDARY_UNNEEDED_NOTE)

        _apply_deliverability(verdict, analysis)

    elif "non-postal-match" in tags:
        # Proprietary (non-USPS) matches are never USPS-deliverable
        verdict.validated = True
        verdict.notes.append("Address found in Smarty proprietary data (non-USPS)")
        if "missing-secondary" in tags:
            verdict.notes.append(_SECONDARY_MIGHT_BE_NEEDED_NOTE)
        if "unknown-secondary" in tags:
            verdict.notes.append("Secondary information provided but not recognized")

    # Any other enhanced_match value leaves the verdict unvalidated with no note.


def _classify_dpv_match_code(verdict: ValidationVerdict, analysis: CandidateAnalysis) -> None:
    code = analysis.dpv_match_code

    if code == "Y":
        verdict.validated = True
        verdict.notes.append("Address validated using DPV match code")
        _apply_deliverability(verdict, analysis)

        if analysis.has_footnote("N1"):
            verdict.notes.append(_SECONDARY_REQUIRED_NOTE)
        elif analysis.has_footnote("C1"):
            verdict.notes.append(_SECONDARY_CORRECTION_NOTE)
        elif analysis.has_footnote("CC"):
            verdict.notes.append(_SECONDARY_UNNEEDED_NOTE)

    elif code == "N":
        verdict.notes.append("Address not found in USPS database (DPV match code: N)")

    elif code in ("S", "D"):
        verdict.validated = True
        verdict.notes.append(f"Address validated (DPV match code: {code} - Secondary information missing)")
        verdict.notes.append(_SECONDARY_MIGHT_BE_NEEDED_NOTE)

    else:
        # Best effort: an address came back without a recognizable match code
        verdict.validated = True
        verdict.notes.append("Address appears to be valid based on returned data")
        if analysis.dpv_vacant == "N" and analysis.dpv_no_stat == "N":
            verdict.deliverable = True
            verdict.notes.append("Address appears to be deliverable")
        else:
            verdict.notes.append("Deliverability cannot be determined")


def classify_candidate(candidate: Candidate) -> ValidationVerdict:
    """Classify a single candidate as validated/deliverable.

    Args:
        candidate: The primary candidate.

    Returns:
        ValidationVerdict without primary/suggestion addresses attached.
    """
    verdict = ValidationVerdict()
    analysis = candidate.analysis

    if analysis is not None:
        if analysis.enhanced_match:
            _classify_enhanced_match(verdict, analysis)
        else:
            _classify_dpv_match_code(verdict, analysis)

    if candidate.is_po_box:
        verdict.notes.append(PO_BOX_NOTE)

    return verdict


def interpret(candidates: Sequence[Candidate]) -> ValidationVerdict:
    """Interpret a provider's candidate list.

    The first candidate in provider order is the primary address; the
    remaining candidates become suggestions, order preserved.

    Args:
        candidates: Candidates in provider order.

    Returns:
        ValidationVerdict for the primary candidate.
    """
    if not candidates:
        return ValidationVerdict(notes=[NO_MATCH_NOTE])

    primary, *rest = candidates
    verdict = classify_candidate(primary)
    verdict.primary_address = primary
    verdict.suggestions = list(rest)
    return verdict

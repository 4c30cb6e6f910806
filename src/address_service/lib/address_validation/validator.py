"""Request validation: structural checks applied before any provider call."""

from address_service.lib.address_validation.types import AddressRequest

# Fields of which at least one must be present
_LOCATING_FIELDS = ("street", "city", "state", "zipcode")

# (attribute, label, max length) in evaluation order
_FIELD_MAX_LENGTHS: tuple[tuple[str, str, int], ...] = (
    ("street", "Street", 100),
    ("street2", "Street2", 100),
    ("city", "City", 64),
    ("state", "State", 32),
    ("zipcode", "Zipcode", 10),
    ("addressee", "Addressee", 64),
)

MIN_CANDIDATES = 1
MAX_CANDIDATES = 10
MATCH_MODES = ("strict", "range", "invalid")


def validate_request(request: AddressRequest) -> list[str]:
    """Validate an address validation request.

    Every rule is evaluated independently; each violated rule contributes
    its own message.

    Args:
        request: The inbound request.

    Returns:
        List of violation messages (empty when the request is valid).
    """
    errors: list[str] = []

    if not any(getattr(request, name) for name in _LOCATING_FIELDS):
        errors.append("At least one of street, city, state, or zipcode must be provided")

    for name, label, max_length in _FIELD_MAX_LENGTHS:
        value = getattr(request, name)
        if value and len(value) > max_length:
            errors.append(f"{label} field exceeds maximum length of {max_length} characters")

    if request.candidates is not None and not (MIN_CANDIDATES <= request.candidates <= MAX_CANDIDATES):
        errors.append(f"Candidates must be between {MIN_CANDIDATES} and {MAX_CANDIDATES}")

    if request.match and request.match not in MATCH_MODES:
        errors.append(f"Match parameter must be one of: {', '.join(MATCH_MODES)}")

    return errors

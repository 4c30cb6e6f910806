"""Abstract address validation provider interface for pluggable provider support."""

from abc import ABC, abstractmethod
from typing import Any

from loguru import logger

from address_service.lib.address_validation.call_logger import ProviderCallLogger
from address_service.lib.address_validation.candidate import Candidate, parse_candidates
from address_service.lib.address_validation.interpreter import ValidationVerdict, interpret
from address_service.lib.address_validation.types import AddressRequest, ValidationOutcome
from address_service.lib.address_validation.validator import validate_request

VALIDATION_FAILED_ERROR = "Validation failed"
API_CALL_FAILED_NOTE = "API call failed"


class AddressProviderError(Exception):
    """Raised when an address validation provider fails to return a usable response.

    Covers non-2xx HTTP responses and transport failures where no response
    was received at all.

    Args:
        provider_name: Name of the failing provider.
        message: Human-readable error description, surfaced to the caller verbatim.
        status_code: Optional HTTP status code from the provider.
    """

    def __init__(self, provider_name: str, message: str, status_code: int | None = None) -> None:
        self.provider_name = provider_name
        self.message = message
        self.status_code = status_code
        super().__init__(f"{provider_name}: {message}")


class AddressValidationProvider(ABC):
    """Abstract address validation provider. All providers must implement this.

    The base class owns the request flow: configuration check, request
    validation, query building, a single provider call, and response
    interpretation.  Providers supply the provider-specific pieces.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this provider (used in logs)."""

    @property
    def service_label(self) -> str:
        """Human-facing service label used in error messages."""
        return self.provider_name

    @property
    def requires_credentials(self) -> bool:
        """Whether this provider requires credentials to function."""
        return True

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether this provider has all required configuration (e.g., credentials)."""

    @property
    def not_configured_message(self) -> str:
        """Error text reported when :attr:`is_configured` is false."""
        return f"{self.service_label} authentication credentials not configured"

    @abstractmethod
    def build_query(self, request: AddressRequest) -> dict[str, str]:
        """Translate a request into the provider's flat query parameters.

        Args:
            request: A request that has passed validation.

        Returns:
            Provider query parameters, including credentials.
        """

    @abstractmethod
    async def fetch(self, params: dict[str, str], call_logger: ProviderCallLogger) -> Any:
        """Perform the single outbound call and return the decoded payload.

        Args:
            params: Provider query parameters from :meth:`build_query`.
            call_logger: Logger for this call.

        Returns:
            Decoded JSON payload.

        Raises:
            AddressProviderError: On non-2xx responses or transport failures.
        """

    def extract_candidates(self, payload: Any) -> list[Candidate]:
        """Parse the provider payload into candidates in provider order."""
        return parse_candidates(payload)

    async def validate_address(
        self,
        request: AddressRequest,
        correlation_id: str | None = None,
        call_logger: ProviderCallLogger | None = None,
    ) -> ValidationOutcome:
        """Validate an address with this provider.

        Never raises for configuration, validation, or provider errors; each
        is reported as an unsuccessful outcome.

        Args:
            request: The inbound request.
            correlation_id: Correlation ID overriding the one on the request.
            call_logger: Logger for the outbound call; one is created when omitted.

        Returns:
            ValidationOutcome with a verdict and, on failure, error text.
        """
        correlation_id = correlation_id or request.correlation_id or ""

        if not self.is_configured:
            logger.warning(f"{self.provider_name} is not configured; skipping provider call")
            return ValidationOutcome(
                success=False,
                correlation_id=correlation_id,
                error=self.not_configured_message,
            )

        errors = validate_request(request)
        if errors:
            return ValidationOutcome(
                success=False,
                correlation_id=correlation_id,
                error=VALIDATION_FAILED_ERROR,
                verdict=ValidationVerdict(notes=errors),
            )

        call_logger = call_logger or ProviderCallLogger(self.provider_name, correlation_id)
        params = self.build_query(request)

        try:
            payload = await self.fetch(params, call_logger)
        except AddressProviderError as e:
            return ValidationOutcome(
                success=False,
                correlation_id=correlation_id,
                error=e.message,
                verdict=ValidationVerdict(notes=[API_CALL_FAILED_NOTE]),
            )

        verdict = interpret(self.extract_candidates(payload))
        return ValidationOutcome(success=True, correlation_id=correlation_id, verdict=verdict)

"""Address validation service: request-scoped orchestration around a provider."""

from loguru import logger

from address_service.lib.address_validation import AddressValidationProvider, ProviderCallLogger
from address_service.schemas.address import AddressValidationRequest, AddressValidationResponse


async def validate_address(
    provider: AddressValidationProvider,
    request: AddressValidationRequest,
    correlation_id: str | None = None,
) -> AddressValidationResponse:
    """Validate an address with the given provider.

    Args:
        provider: Address validation provider for this request.
        request: The inbound validation request.
        correlation_id: Correlation ID overriding the one on the request.

    Returns:
        AddressValidationResponse; ``success`` is false for configuration,
        validation, and provider errors.
    """
    correlation_id = correlation_id or request.correlation_id

    with logger.contextualize(correlation_id=correlation_id):
        logger.info(
            "Address validation request via {}",
            provider.provider_name,
            request_body=request.model_dump(exclude_none=True, exclude={"correlation_id"}),
        )

        outcome = await provider.validate_address(
            request,
            correlation_id=correlation_id,
            call_logger=ProviderCallLogger(provider.provider_name, correlation_id),
        )
        response = AddressValidationResponse.from_outcome(outcome)

        data = response.data
        logger.info(
            "Address validation completed: success={} validated={} deliverable={} suggestions={}",
            response.success,
            data.validated if data else False,
            data.deliverable if data else False,
            len(data.suggestions or []) if data else 0,
        )
        if response.error:
            logger.warning(f"Address validation unsuccessful: {response.error}")

    return response

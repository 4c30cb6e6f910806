"""Address validation API endpoints: validate via JSON body (POST) or query string (GET)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse
from loguru import logger

from address_service.core.dependencies import get_address_provider
from address_service.lib.address_validation import AddressValidationProvider
from address_service.schemas.address import AddressValidationRequest, AddressValidationResponse
from address_service.schemas.common import ErrorResponse
from address_service.services.address_service import validate_address

addresses_router = APIRouter(prefix="/addresses", tags=["addresses"])

_INTERNAL_ERROR = "Internal server error during address validation"

_RESPONSES: dict[int | str, dict] = {
    status.HTTP_400_BAD_REQUEST: {"model": AddressValidationResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


async def _validate(
    request: AddressValidationRequest,
    provider: AddressValidationProvider,
    response: Response,
) -> AddressValidationResponse | JSONResponse:
    try:
        result = await validate_address(provider, request)
    except Exception:
        logger.exception(f"Unexpected error during address validation [{request.correlation_id}]")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=_INTERNAL_ERROR, correlation_id=request.correlation_id).model_dump(
                by_alias=True
            ),
        )

    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result


@addresses_router.post(
    "/validate",
    response_model=AddressValidationResponse,
    response_model_exclude_none=True,
    responses=_RESPONSES,
)
async def validate_address_body(
    request: AddressValidationRequest,
    response: Response,
    provider: AddressValidationProvider = Depends(get_address_provider),  # noqa: B008
) -> AddressValidationResponse | JSONResponse:
    """Validate an address supplied as a JSON body."""
    return await _validate(request, provider, response)


@addresses_router.get(
    "/validate",
    response_model=AddressValidationResponse,
    response_model_exclude_none=True,
    responses=_RESPONSES,
)
async def validate_address_query(
    request: Annotated[AddressValidationRequest, Query()],
    response: Response,
    provider: AddressValidationProvider = Depends(get_address_provider),  # noqa: B008
) -> AddressValidationResponse | JSONResponse:
    """Validate an address supplied as query parameters."""
    return await _validate(request, provider, response)

"""Smarty US Street Address API provider.

Uses the Smarty US Street Address API
(https://www.smarty.com/docs/cloud/us-street-api) to verify a single
address.  Requires an ``auth-id`` / ``auth-token`` credential pair.
"""

from typing import Any

import httpx
from loguru import logger

from address_service.lib.address_validation.base import AddressProviderError, AddressValidationProvider
from address_service.lib.address_validation.call_logger import ProviderCallLogger
from address_service.lib.address_validation.types import AddressRequest

SMARTY_API_URL = "https://us-street.api.smarty.com/street-address"
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "AddressService/1.0.0"

# Request fields copied verbatim into same-named query parameters
_PASSTHROUGH_FIELDS = ("street", "street2", "city", "state", "zipcode", "addressee")
_OPTION_FIELDS = ("match", "format")


class SmartyAddressProvider(AddressValidationProvider):
    """Smarty US Street Address API provider."""

    def __init__(
        self,
        auth_id: str | None = None,
        auth_token: str | None = None,
        base_url: str = SMARTY_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._auth_id = auth_id or ""
        self._auth_token = auth_token or ""
        self._base_url = base_url
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport

    @property
    def provider_name(self) -> str:
        return "smarty-us-street-api"

    @property
    def service_label(self) -> str:
        return "Smarty"

    @property
    def is_configured(self) -> bool:
        return bool(self._auth_id and self._auth_token)

    @property
    def base_url(self) -> str:
        return self._base_url

    def build_query(self, request: AddressRequest) -> dict[str, str]:
        """Build Smarty query parameters from a validated request.

        Args:
            request: The inbound request.

        Returns:
            Credentials plus every present request field, unchanged.
        """
        params = {
            "auth-id": self._auth_id,
            "auth-token": self._auth_token,
        }

        for name in _PASSTHROUGH_FIELDS:
            value = getattr(request, name)
            if value:
                params[name] = value

        if request.candidates:
            params["candidates"] = str(request.candidates)

        for name in _OPTION_FIELDS:
            value = getattr(request, name)
            if value:
                params[name] = value

        return params

    async def fetch(self, params: dict[str, str], call_logger: ProviderCallLogger) -> Any:
        """Send one GET request to Smarty and decode the JSON body.

        Args:
            params: Query parameters from :meth:`build_query`.
            call_logger: Logger for this call.

        Returns:
            Decoded JSON payload (a candidate array).

        Raises:
            AddressProviderError: On non-2xx responses or transport failures.
        """
        headers = {
            "Accept": "application/json",
            "User-Agent": self._user_agent,
            "X-Correlation-ID": call_logger.correlation_id,
        }
        call_logger.request("GET", self._base_url, params)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(self._base_url, params=params, headers=headers)
                response.raise_for_status()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = f"{self.service_label} API error: {status} {e.response.reason_phrase} - {e.response.text}"
            call_logger.error(message, status_code=status)
            raise AddressProviderError(self.provider_name, message, status_code=status) from e
        except httpx.RequestError as e:
            message = str(e)
            call_logger.error(message)
            raise AddressProviderError(self.provider_name, message) from e
        except Exception as e:
            logger.exception(f"{self.service_label} provider unexpected error")
            call_logger.error(str(e))
            raise AddressProviderError(self.provider_name, f"Unexpected error: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            message = f"{self.service_label} API error: invalid JSON response - {e}"
            call_logger.error(message, status_code=response.status_code)
            raise AddressProviderError(self.provider_name, message, status_code=response.status_code) from e

        call_logger.response(response.status_code, payload)
        return payload

"""Shared test fixtures for settings, Smarty payloads, and a counting HTTP transport."""

import copy
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from address_service.core.config import Settings
from address_service.lib.address_validation import SmartyAddressProvider

SMARTY_URL = "https://us-street.api.smarty.com/street-address"

SAMPLE_CANDIDATE: dict[str, Any] = {
    "input_index": 0,
    "candidate_index": 0,
    "delivery_line_1": "1600 Amphitheatre Pkwy",
    "last_line": "Mountain View CA 94043-1351",
    "delivery_point_barcode": "940431351000",
    "components": {
        "primary_number": "1600",
        "street_name": "Amphitheatre",
        "street_suffix": "Pkwy",
        "city_name": "Mountain View",
        "default_city_name": "Mountain View",
        "state_abbreviation": "CA",
        "zipcode": "94043",
        "plus4_code": "1351",
        "delivery_point": "00",
        "delivery_point_check_digit": "0",
    },
    "metadata": {
        "record_type": "S",
        "zip_type": "Standard",
        "county_fips": "06085",
        "county_name": "Santa Clara",
        "carrier_route": "C909",
        "congressional_district": "18",
        "rdi": "Commercial",
        "elot_sequence": "0112",
        "elot_sort": "A",
        "latitude": 37.42357,
        "longitude": -122.08661,
        "precision": "Zip9",
        "time_zone": "Pacific",
        "utc_offset": -8,
        "dst": True,
    },
    "analysis": {
        "dpv_match_code": "Y",
        "dpv_footnotes": "AABB",
        "dpv_cmra": "N",
        "dpv_vacant": "N",
        "dpv_no_stat": "N",
        "active": "Y",
        "enhanced_match": "postal-match",
    },
}


def make_candidate_payload(
    *,
    analysis: dict[str, Any] | None = None,
    metadata: dict[str, Any] | None = None,
    **overrides: Any,
) -> dict[str, Any]:
    """Build a Smarty candidate object, merging overrides into the sample."""
    payload = copy.deepcopy(SAMPLE_CANDIDATE)
    if analysis is not None:
        payload["analysis"].update(analysis)
    if metadata is not None:
        payload["metadata"].update(metadata)
    payload.update(overrides)
    return payload


@pytest.fixture
def settings() -> Settings:
    """Test application settings with Smarty credentials configured."""
    return Settings(
        _env_file=None,
        smarty_auth_id="test-auth-id",
        smarty_auth_token="test-auth-token",
        log_level="DEBUG",
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    """Test application settings without Smarty credentials."""
    return Settings(_env_file=None, smarty_auth_id=None, smarty_auth_token=None)


@pytest.fixture
def candidate_payload() -> Callable[..., dict[str, Any]]:
    """Factory for Smarty candidate objects."""
    return make_candidate_payload


class CountingTransport(httpx.AsyncBaseTransport):
    """Mock transport that records every request and replies with a canned response."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)


@pytest.fixture
def json_transport() -> Callable[..., CountingTransport]:
    """Factory for a counting transport returning a fixed JSON body and status."""

    def _factory(body: Any = None, status_code: int = 200) -> CountingTransport:
        return CountingTransport(lambda request: httpx.Response(status_code, json=body if body is not None else []))

    return _factory


@pytest.fixture
def smarty_provider_factory() -> Callable[..., SmartyAddressProvider]:
    """Factory for a configured Smarty provider bound to a transport."""

    def _factory(transport: httpx.AsyncBaseTransport | None = None, **kwargs: Any) -> SmartyAddressProvider:
        kwargs.setdefault("auth_id", "test-auth-id")
        kwargs.setdefault("auth_token", "test-auth-token")
        return SmartyAddressProvider(transport=transport, **kwargs)

    return _factory

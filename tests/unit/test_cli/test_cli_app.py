"""Unit tests for the address-service CLI."""

import json
from collections.abc import Callable
from typing import Any, get_type_hints
from unittest.mock import patch

import httpx
from typer.testing import CliRunner

from address_service.cli.app import _validate, app
from address_service.core.config import Settings
from address_service.lib.address_validation import SmartyAddressProvider
from address_service.schemas import address as address_schemas

runner = CliRunner()


class TestValidateCommand:
    """Tests for the `address-service validate` command."""

    def test_validated_address(
        self,
        settings: Settings,
        json_transport: Callable[..., Any],
        smarty_provider_factory: Callable[..., SmartyAddressProvider],
        candidate_payload: Callable[..., dict[str, Any]],
    ) -> None:
        provider = smarty_provider_factory(json_transport(body=[candidate_payload()]))

        with (
            patch("address_service.cli.app.get_settings", return_value=settings),
            patch("address_service.cli.app.setup_logging"),
            patch("address_service.lib.address_validation.get_configured_provider", return_value=provider),
        ):
            result = runner.invoke(
                app, ["validate", "--street", "1600 Amphitheatre Pkwy", "--zipcode", "94043", "--correlation-id", "cli-1"]
            )

        assert result.exit_code == 0, result.output
        body = json.loads(result.stdout)
        assert body["success"] is True
        assert body["correlationId"] == "cli-1"
        assert body["data"]["deliverable"] is True

    def test_invalid_request_exits_nonzero(self, settings: Settings, json_transport: Callable[..., Any]) -> None:
        transport = json_transport(body=[])
        provider = SmartyAddressProvider(auth_id="id", auth_token="token", transport=transport)

        with (
            patch("address_service.cli.app.get_settings", return_value=settings),
            patch("address_service.cli.app.setup_logging"),
            patch("address_service.lib.address_validation.get_configured_provider", return_value=provider),
        ):
            result = runner.invoke(app, ["validate", "--candidates", "11"])

        assert result.exit_code == 1
        body = json.loads(result.stdout)
        assert body["error"] == "Validation failed"
        assert body["data"]["validation_notes"] == [
            "At least one of street, city, state, or zipcode must be provided",
            "Candidates must be between 1 and 10",
        ]
        assert transport.call_count == 0

    def test_provider_error_exits_nonzero(self, settings: Settings) -> None:
        provider = SmartyAddressProvider(
            auth_id="id",
            auth_token="token",
            transport=httpx.MockTransport(lambda request: httpx.Response(401, text="bad auth")),
        )

        with (
            patch("address_service.cli.app.get_settings", return_value=settings),
            patch("address_service.cli.app.setup_logging"),
            patch("address_service.lib.address_validation.get_configured_provider", return_value=provider),
        ):
            result = runner.invoke(app, ["validate", "--city", "Springfield"])

        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"] == "Smarty API error: 401 Unauthorized - bad auth"


    def test_format_and_match_forwarded_to_provider(
        self,
        settings: Settings,
        json_transport: Callable[..., Any],
        smarty_provider_factory: Callable[..., SmartyAddressProvider],
    ) -> None:
        transport = json_transport(body=[])
        provider = smarty_provider_factory(transport)

        with (
            patch("address_service.cli.app.get_settings", return_value=settings),
            patch("address_service.cli.app.setup_logging"),
            patch("address_service.lib.address_validation.get_configured_provider", return_value=provider),
        ):
            result = runner.invoke(
                app, ["validate", "--street", "1 Main St", "--match", "invalid", "--format", "project-usa"]
            )

        assert result.exit_code == 0, result.output
        params = transport.requests[0].url.params
        assert params["format"] == "project-usa"
        assert params["match"] == "invalid"

    def test_validate_helper_is_typed(self) -> None:
        hints = get_type_hints(_validate, localns=vars(address_schemas))
        assert hints["request"] is address_schemas.AddressValidationRequest
        assert hints["return"] is address_schemas.AddressValidationResponse


class TestProvidersCommand:
    """Tests for the `address-service providers` command."""

    def test_lists_configured_provider(self, settings: Settings) -> None:
        with (
            patch("address_service.cli.app.get_settings", return_value=settings),
            patch("address_service.cli.app.setup_logging"),
        ):
            result = runner.invoke(app, ["providers"])

        assert result.exit_code == 0
        assert "* smarty" in result.stdout
        assert "smarty-us-street-api" in result.stdout
        assert "configured" in result.stdout

    def test_lists_missing_credentials(self, unconfigured_settings: Settings) -> None:
        with (
            patch("address_service.cli.app.get_settings", return_value=unconfigured_settings),
            patch("address_service.cli.app.setup_logging"),
        ):
            result = runner.invoke(app, ["providers"])

        assert result.exit_code == 0
        assert "missing credentials" in result.stdout


class TestServeCommand:
    """Tests for the `address-service serve` command."""

    def test_serve_uses_settings(self, settings: Settings) -> None:
        with (
            patch("address_service.cli.app.get_settings", return_value=settings),
            patch("address_service.cli.app.setup_logging"),
            patch("uvicorn.run") as mock_run,
        ):
            result = runner.invoke(app, ["serve", "--port", "8123"])

        assert result.exit_code == 0, result.output
        mock_run.assert_called_once_with(
            "address_service.main:create_app",
            factory=True,
            host="0.0.0.0",
            port=8123,
            reload=False,
            workers=1,
        )

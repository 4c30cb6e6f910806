"""Unit tests for core configuration module."""

import pytest
from pydantic import ValidationError

from address_service.core.config import Settings


class TestSettings:
    """Tests for Settings configuration."""

    def test_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings load from environment variables."""
        monkeypatch.setenv("SMARTY_AUTH_ID", "env-id")
        monkeypatch.setenv("SMARTY_AUTH_TOKEN", "env-token")
        monkeypatch.setenv("PORT", "8080")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.smarty_auth_id == "env-id"
        assert settings.smarty_auth_token == "env-token"
        assert settings.port == 8080

    def test_settings_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Default values are applied correctly."""
        for name in ("SMARTY_AUTH_ID", "SMARTY_AUTH_TOKEN", "PORT", "LOG_LEVEL", "ADDRESS_PROVIDER"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.service_name == "address-service"
        assert settings.service_version == "1.0.0"
        assert settings.address_provider == "smarty"
        assert settings.smarty_auth_id is None
        assert settings.smarty_auth_token is None
        assert settings.smarty_base_url == "https://us-street.api.smarty.com/street-address"
        assert settings.smarty_timeout == 10.0
        assert settings.log_level == "INFO"
        assert settings.port == 3000
        assert settings.api_v1_prefix == "/api/v1"
        assert settings.cors_origin_list == []

    def test_cors_origin_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """CORS origins string is parsed into a list."""
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, http://example.com")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.cors_origin_list == ["http://localhost:3000", "http://example.com"]

    def test_trusted_proxy_header_list(self) -> None:
        """Trusted proxy headers string is parsed into a list."""
        settings = Settings(_env_file=None, trusted_proxy_headers="X-Real-IP, ,CF-Connecting-IP")  # type: ignore[call-arg]
        assert settings.trusted_proxy_header_list == ["X-Real-IP", "CF-Connecting-IP"]

    def test_address_provider_normalized(self) -> None:
        """Provider name is lowercased and stripped."""
        settings = Settings(_env_file=None, address_provider=" Smarty ")  # type: ignore[call-arg]
        assert settings.address_provider == "smarty"

    def test_smarty_base_url_trailing_slash(self) -> None:
        """Trailing slashes are removed from the Smarty endpoint."""
        settings = Settings(_env_file=None, smarty_base_url="https://smarty.test/street-address/")  # type: ignore[call-arg]
        assert settings.smarty_base_url == "https://smarty.test/street-address"

    def test_smarty_base_url_requires_http(self) -> None:
        """Non-HTTP Smarty endpoints are rejected."""
        with pytest.raises(ValidationError, match="http"):
            Settings(_env_file=None, smarty_base_url="ftp://smarty.test")  # type: ignore[call-arg]

    @pytest.mark.parametrize(("name", "value"), [("SMARTY_TIMEOUT", "0"), ("PORT", "0"), ("WORKERS", "0")])
    def test_validation_positive_values(self, monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
        """Positive numeric fields reject zero."""
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service identity
    service_name: str = Field(
        default="address-service",
        description="Service name reported by health endpoints",
    )
    service_version: str = Field(
        default="1.0.0",
        description="Service version reported by health endpoints and the OpenAPI document",
    )

    # Address validation provider
    address_provider: str = Field(
        default="smarty",
        description="Registered address validation provider to use",
    )

    # Smarty US Street Address API
    smarty_auth_id: str | None = Field(
        default=None,
        description="Smarty auth-id credential",
    )
    smarty_auth_token: str | None = Field(
        default=None,
        description="Smarty auth-token credential",
    )
    smarty_base_url: str = Field(
        default="https://us-street.api.smarty.com/street-address",
        description="Smarty US Street Address API endpoint",
    )
    smarty_timeout: float = Field(
        default=10.0,
        description="Smarty request timeout in seconds",
        gt=0,
    )
    smarty_user_agent: str = Field(
        default="AddressService/1.0.0",
        description="User-Agent header sent to Smarty",
    )

    @field_validator("smarty_base_url")
    @classmethod
    def validate_smarty_base_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            msg = "smarty_base_url must be an http(s) URL"
            raise ValueError(msg)
        return v.rstrip("/")

    @field_validator("address_provider")
    @classmethod
    def normalize_address_provider(cls, v: str) -> str:
        return v.strip().lower()

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins",
    )
    cors_origin_regex: str = Field(
        default="",
        description="Regex pattern for allowed CORS origins",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Environment
    environment: str = Field(
        default="production",
        description="Deployment environment name (e.g. production, development)",
    )

    # Server
    host: str = Field(
        default="0.0.0.0",  # noqa: S104
        description="Bind host for the API server",
    )
    port: int = Field(
        default=3000,
        description="Bind port for the API server",
        gt=0,
        le=65535,
    )
    workers: int = Field(
        default=1,
        description="Number of uvicorn worker processes",
        gt=0,
    )

    # API
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API version prefix",
    )
    trusted_proxy_headers: str = Field(
        default="CF-Connecting-IP,X-Forwarded-For,X-Real-IP",
        description="Comma-separated list of HTTP headers to check for real client IP, in priority order",
    )

    @property
    def trusted_proxy_header_list(self) -> list[str]:
        """Parse trusted proxy headers string into a list."""
        if not self.trusted_proxy_headers.strip():
            return []
        return [h.strip() for h in self.trusted_proxy_headers.split(",") if h.strip()]


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()

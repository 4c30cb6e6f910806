"""Tests for the FastAPI application factory module."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from address_service.core.config import Settings
from address_service.main import create_app


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    with patch("address_service.main.get_settings", return_value=settings):
        return create_app()


class TestCreateApp:
    """Tests for create_app."""

    def test_app_is_created(self, app: FastAPI) -> None:
        assert app.title == "Address Service API"
        assert app.version == "1.0.0"

    def test_docs_served_at_documentation(self, app: FastAPI) -> None:
        client = TestClient(app)
        assert client.get("/documentation").status_code == 200
        assert client.get("/docs").status_code == 404

    def test_app_has_openapi_schema(self, app: FastAPI) -> None:
        client = TestClient(app)
        response = client.get("/openapi.json")
        assert response.status_code == 200
        schema = response.json()
        assert schema["info"]["title"] == "Address Service API"
        assert "/api/v1/addresses/validate" in schema["paths"]
        assert {"get", "post"} <= set(schema["paths"]["/api/v1/addresses/validate"])

    def test_value_error_handler_registered(self, app: FastAPI) -> None:
        """ValueError exception handler is registered."""
        assert app.exception_handlers.get(ValueError) is not None

    def test_malformed_body_returns_400(self, app: FastAPI) -> None:
        """Requests rejected by schema validation use the validation error shape."""
        client = TestClient(app)
        response = client.post("/api/v1/addresses/validate", json={"street": "1 Main St"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Error"
        assert "correlationId" in body["message"]
        assert isinstance(body["details"], list)
        assert body["details"]

    def test_wrong_type_returns_400(self, app: FastAPI) -> None:
        client = TestClient(app)
        response = client.post(
            "/api/v1/addresses/validate", json={"correlationId": "c-1", "street": "1 Main St", "candidates": "many"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Validation Error"


class TestAppLifespan:
    """Tests for lifespan management."""

    async def test_lifespan_configures_logging(self, settings: Settings) -> None:
        """Lifespan context manager configures logging on startup."""
        from address_service.main import lifespan

        with (
            patch("address_service.main.get_settings", return_value=settings),
            patch("address_service.main.setup_logging") as mock_setup_logging,
        ):
            async with lifespan(MagicMock()):
                mock_setup_logging.assert_called_once_with("DEBUG", log_dir=None)

    async def test_lifespan_with_missing_credentials(self, unconfigured_settings: Settings) -> None:
        """Lifespan starts even when provider credentials are missing."""
        from address_service.main import lifespan

        with (
            patch("address_service.main.get_settings", return_value=unconfigured_settings),
            patch("address_service.main.setup_logging"),
        ):
            async with lifespan(MagicMock()):
                pass

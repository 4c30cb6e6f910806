"""CORS, correlation ID, response logging, and security headers middleware."""

import time
import uuid
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from address_service.core.config import Settings

CORRELATION_ID_HEADER = "X-Correlation-ID"

_DEFAULT_TRUSTED_HEADERS = ["CF-Connecting-IP", "X-Forwarded-For", "X-Real-IP"]


def get_client_ip(request: Request, trusted_headers: list[str] | None = None) -> str:
    """Extract the real client IP from proxy headers or direct connection.

    Checks headers in priority order. For X-Forwarded-For, uses the
    leftmost (client-supplied) IP. Falls back to request.client.host.

    Args:
        request: The incoming Starlette request.
        trusted_headers: Ordered list of header names to check.
            Defaults to ["CF-Connecting-IP", "X-Forwarded-For", "X-Real-IP"].

    Returns:
        The client IP address string, or "unknown" if not determinable.
    """
    headers = trusted_headers if trusted_headers is not None else _DEFAULT_TRUSTED_HEADERS

    for header in headers:
        value = request.headers.get(header, "").strip()
        if not value:
            continue
        # X-Forwarded-For can contain multiple IPs: "client, proxy1, proxy2"
        if header.lower() == "x-forwarded-for":
            return value.split(",")[0].strip()
        return value

    if request.client:
        return request.client.host
    return "unknown"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    kwargs: dict[str, Any] = {
        "allow_credentials": True,
        "allow_methods": ["*"],
        "allow_headers": ["*"],
        "expose_headers": [CORRELATION_ID_HEADER],
    }
    if settings.cors_origin_list:
        kwargs["allow_origins"] = settings.cors_origin_list
    if settings.cors_origin_regex.strip():
        kwargs["allow_origin_regex"] = settings.cors_origin_regex.strip()
    app.add_middleware(CORSMiddleware, **kwargs)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Assign a correlation ID to every request.

    Reuses the inbound ``X-Correlation-ID`` header when present, otherwise
    generates a UUID4.  The ID is stored on ``request.state``, echoed in the
    response header, and bound to every log record emitted while handling
    the request.
    """

    def __init__(self, app: ASGIApp, trusted_proxy_headers: list[str] | None = None) -> None:
        super().__init__(app)
        self.trusted_proxy_headers = trusted_proxy_headers

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Attach the correlation ID and log the request/response pair.

        Args:
            request: The incoming request.
            call_next: The next middleware/handler.

        Returns:
            Response carrying the correlation ID header.
        """
        correlation_id = request.headers.get(CORRELATION_ID_HEADER, "").strip() or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        client_ip = get_client_ip(request, self.trusted_proxy_headers)
        user_agent = request.headers.get("user-agent")

        with logger.contextualize(correlation_id=correlation_id):
            logger.info("{} {}", request.method, request.url.path, ip=client_ip, user_agent=user_agent)
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
            log_response(request.method, request.url.path, response.status_code, elapsed_ms)

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response


def log_response(method: str, path: str, status_code: int, elapsed_ms: float) -> None:
    """Log a completed request at a level matching its status code.

    5xx responses are logged as errors, 4xx as warnings, everything else as info.
    """
    message = "{} {} -> {} in {}ms"
    if status_code >= 500:
        logger.error(message, method, path, status_code, elapsed_ms, error=f"HTTP {status_code}")
    elif status_code >= 400:
        logger.warning(message, method, path, status_code, elapsed_ms, error=f"HTTP {status_code}")
    else:
        logger.info(message, method, path, status_code, elapsed_ms)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Add security headers to the response.

        Args:
            request: The incoming request.
            call_next: The next middleware/handler.

        Returns:
            Response with security headers.
        """
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

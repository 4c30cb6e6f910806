"""Per-call logging for outbound third-party API requests.

A :class:`ProviderCallLogger` is created for each provider call (or passed
in by the caller) and carries the correlation ID and service name for that
call only.  Credential parameters are always redacted.
"""

import time
from collections.abc import Mapping
from typing import Any

from loguru import logger

REDACTED = "[REDACTED]"

# Query parameters never written to logs in clear text
SENSITIVE_PARAMS = frozenset({"auth-id", "auth-token"})


def redact_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *params* with credential values replaced by ``[REDACTED]``."""
    return {key: (REDACTED if key.lower() in SENSITIVE_PARAMS else value) for key, value in params.items()}


class ProviderCallLogger:
    """Structured logger for a single outbound provider call.

    Args:
        service: Name of the third-party service being called.
        correlation_id: Correlation ID of the inbound request, if any.
    """

    def __init__(self, service: str, correlation_id: str | None = None) -> None:
        self.service = service
        self.correlation_id = correlation_id or "unknown"
        self._log = logger.bind(correlation_id=self.correlation_id, service=service)
        self._started_at: float | None = None
        self._method = ""
        self._url = ""

    @property
    def duration_ms(self) -> float:
        """Milliseconds elapsed since :meth:`request` (0 when not started)."""
        if self._started_at is None:
            return 0.0
        return round((time.perf_counter() - self._started_at) * 1000, 1)

    def request(self, method: str, url: str, params: Mapping[str, Any]) -> None:
        """Log the outgoing request and start the duration clock."""
        self._started_at = time.perf_counter()
        self._method = method.upper()
        self._url = url
        self._log.info(
            "{} API call: {} {}",
            self.service,
            self._method,
            self._url,
            params=redact_params(params),
        )

    def response(self, status_code: int, body: Any = None) -> None:
        """Log a successful provider response."""
        self._log.info(
            "{} API call succeeded: {} {} -> {} in {}ms",
            self.service,
            self._method,
            self._url,
            status_code,
            self.duration_ms,
        )
        if body is not None:
            self._log.debug("{} API response body: {}", self.service, body)

    def error(self, message: str, status_code: int | None = None) -> None:
        """Log a failed provider call."""
        self._log.error(
            "{} API call failed: {} {} -> {} in {}ms: {}",
            self.service,
            self._method,
            self._url,
            status_code if status_code is not None else "no response",
            self.duration_ms,
            message,
        )

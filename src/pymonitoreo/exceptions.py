"""Custom exception hierarchy for pymonitoreo."""

from __future__ import annotations


class MonitorError(Exception):
    """Base exception for all pymonitoreo errors."""


class MonitorConfigError(MonitorError):
    """Invalid configuration, or a view/entity that does not exist."""


class MonitorTransportError(MonitorError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class MonitorPayloadError(MonitorError):
    """Response decoded fine but does not have the expected shape."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)

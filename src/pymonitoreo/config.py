"""Dashboard configuration for pymonitoreo."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pymonitoreo._constants import BASE_URL, CHART_POINTS, DEFAULT_REFRESH_INTERVAL, LATEST_EVENTS_LIMIT
from pymonitoreo.exceptions import MonitorConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise MonitorConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class MonitorConfig:
    """Dashboard configuration.

    Parameters
    ----------
    base_url : str
        Telemetry API base URL, without a trailing slash.
    refresh_interval : float
        Seconds between automatic refresh cycles.
    auto_refresh : bool
        Whether the scheduler triggers refresh cycles when it ticks.
    latest_events_limit : int
        Number of camera events listed on the dashboard.
    chart_points : int
        Number of most recent records plotted by the line charts.
    """

    base_url: str = BASE_URL
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    auto_refresh: bool = True
    latest_events_limit: int = LATEST_EVENTS_LIMIT
    chart_points: int = CHART_POINTS

    def __post_init__(self) -> None:
        if self.refresh_interval <= 0:
            raise MonitorConfigError(f"refresh_interval must be positive, got {self.refresh_interval}")
        if self.latest_events_limit < 0 or self.chart_points < 0:
            raise MonitorConfigError("latest_events_limit and chart_points must not be negative")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> MonitorConfig:
        """Create configuration from environment variables.

        Reads ``MONITOR_BASE_URL``, ``MONITOR_REFRESH_INTERVAL`` and
        ``MONITOR_AUTO_REFRESH``. Explicit keyword arguments override
        environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("MONITOR_BASE_URL")
        if base_url:
            config_kwargs["base_url"] = base_url

        interval_env = env.get("MONITOR_REFRESH_INTERVAL")
        if interval_env is not None and "refresh_interval" not in overrides:
            config_kwargs["refresh_interval"] = _env_float("MONITOR_REFRESH_INTERVAL", interval_env)

        if "auto_refresh" not in overrides:
            config_kwargs["auto_refresh"] = _env_bool(env.get("MONITOR_AUTO_REFRESH"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)

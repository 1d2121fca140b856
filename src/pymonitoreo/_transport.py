"""HTTP transport for the telemetry API."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pymonitoreo._redact import redact_for_log
from pymonitoreo.config import MonitorConfig
from pymonitoreo.exceptions import MonitorTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the loader.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str) -> Any:
        ...


class HttpTransport:
    """Plain JSON-over-HTTP transport.

    An empty body means "no data" and yields ``None``; every other
    failure is raised as :class:`MonitorTransportError`.
    """

    def __init__(self, config: MonitorConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    async def get_json(self, endpoint: str) -> Any:
        url = f"{self._config.base_url}{endpoint}"
        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers={"accept": "application/json"}) as resp:
                text = await resp.text(encoding="utf-8")
                _logger.debug("GET %s -> HTTP %s", url, resp.status)
                if resp.status != 200:
                    raise MonitorTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except MonitorTransportError:
            raise
        except UnicodeDecodeError as exc:
            raise MonitorTransportError(
                f"Undecodable body from {endpoint}: {exc}",
                endpoint=endpoint,
            ) from exc
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise MonitorTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        if not text.strip():
            return None

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MonitorTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        _logger.debug("Response from %s: %s", endpoint, redact_for_log(body))
        return body

"""Auto-refresh scheduler.

Owns the recurring timer task. Each tick starts a refresh cycle as its own
task, so a slow cycle never delays the timer and overlapping cycles run
side by side; the cache resolves them last-writer-wins.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable

from pymonitoreo.exceptions import MonitorConfigError

_logger = logging.getLogger(__name__)


class AutoRefreshScheduler:
    """Runs ``refresh`` every ``interval`` seconds while ``is_enabled()`` is true.

    ``sleep`` is injectable so tests can drive the timer without a real
    clock.
    """

    def __init__(
        self,
        refresh: Callable[[], Awaitable[None]],
        *,
        is_enabled: Callable[[], bool] = lambda: True,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._refresh = refresh
        self._is_enabled = is_enabled
        self._sleep = sleep
        self._timer: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[None]] = set()
        self._interval: float | None = None

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def interval(self) -> float | None:
        return self._interval

    @property
    def inflight(self) -> int:
        """Number of refresh cycles started by the timer and not finished yet."""
        return len(self._inflight)

    def start(self, interval: float) -> None:
        """Start (or restart) the timer; any previous timer is cancelled first."""
        if interval <= 0:
            raise MonitorConfigError(f"refresh interval must be positive, got {interval}")
        self.stop()
        self._interval = interval
        self._timer = asyncio.get_running_loop().create_task(self._run(interval), name="pymonitoreo-auto-refresh")
        _logger.debug("Auto-refresh started every %.1fs", interval)

    def stop(self) -> None:
        """Cancel the timer. Refresh cycles already in flight keep running."""
        timer = self._timer
        self._timer = None
        if timer is not None and not timer.done():
            timer.cancel()
            _logger.debug("Auto-refresh stopped")

    async def close(self) -> None:
        """Stop the timer and wait for it and any in-flight cycles to finish."""
        timer = self._timer
        self.stop()
        if timer is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await timer
        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)

    async def _run(self, interval: float) -> None:
        while True:
            await self._sleep(interval)
            if not self._is_enabled():
                _logger.debug("Auto-refresh tick skipped (disabled)")
                continue
            task = asyncio.get_running_loop().create_task(self._refresh_once())
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)

    async def _refresh_once(self) -> None:
        try:
            await self._refresh()
        except Exception:
            _logger.exception("Auto-refresh cycle failed")

from __future__ import annotations

import asyncio

import pytest

from pymonitoreo.exceptions import MonitorConfigError
from pymonitoreo.scheduler import AutoRefreshScheduler


class ManualClock:
    """Injectable sleep whose ticks are released one at a time by the test."""

    def __init__(self) -> None:
        self.requested: list[float] = []
        self._tickets: asyncio.Queue[None] = asyncio.Queue()

    async def sleep(self, seconds: float) -> None:
        self.requested.append(seconds)
        await self._tickets.get()

    async def tick(self, count: int = 1) -> None:
        for _ in range(count):
            self._tickets.put_nowait(None)
            # Let the timer wake up and the spawned cycle run.
            for _ in range(5):
                await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_each_tick_runs_a_refresh() -> None:
    clock = ManualClock()
    calls: list[int] = []

    async def refresh() -> None:
        calls.append(len(calls))

    scheduler = AutoRefreshScheduler(refresh, sleep=clock.sleep)
    scheduler.start(30)
    await clock.tick(3)

    assert len(calls) == 3
    assert clock.requested[0] == 30
    assert scheduler.running
    await scheduler.close()
    assert not scheduler.running


@pytest.mark.asyncio
async def test_disabled_ticks_are_skipped_without_stopping_the_timer() -> None:
    clock = ManualClock()
    enabled = {"value": False}
    calls: list[None] = []

    async def refresh() -> None:
        calls.append(None)

    scheduler = AutoRefreshScheduler(refresh, is_enabled=lambda: enabled["value"], sleep=clock.sleep)
    scheduler.start(5)
    await clock.tick(2)
    assert calls == []
    assert scheduler.running

    enabled["value"] = True
    await clock.tick()

    assert len(calls) == 1
    await scheduler.close()


@pytest.mark.asyncio
async def test_restart_replaces_previous_timer() -> None:
    clock = ManualClock()
    calls: list[None] = []

    async def refresh() -> None:
        calls.append(None)

    scheduler = AutoRefreshScheduler(refresh, sleep=clock.sleep)
    scheduler.start(30)
    await asyncio.sleep(0)
    scheduler.start(10)
    await asyncio.sleep(0)

    assert scheduler.interval == 10
    await clock.tick()

    # Only the new timer is waiting, so one tick means one refresh.
    assert len(calls) == 1
    assert clock.requested[-1] == 10
    await scheduler.close()


@pytest.mark.asyncio
async def test_slow_cycles_overlap() -> None:
    clock = ManualClock()
    release = asyncio.Event()
    finished: list[None] = []

    async def refresh() -> None:
        await release.wait()
        finished.append(None)

    scheduler = AutoRefreshScheduler(refresh, sleep=clock.sleep)
    scheduler.start(1)
    await clock.tick(2)

    assert scheduler.inflight == 2
    assert finished == []

    release.set()
    await scheduler.close()

    assert len(finished) == 2
    assert scheduler.inflight == 0


@pytest.mark.asyncio
async def test_stop_leaves_inflight_cycles_running() -> None:
    clock = ManualClock()
    release = asyncio.Event()
    finished: list[None] = []

    async def refresh() -> None:
        await release.wait()
        finished.append(None)

    scheduler = AutoRefreshScheduler(refresh, sleep=clock.sleep)
    scheduler.start(1)
    await clock.tick()
    scheduler.stop()
    await asyncio.sleep(0)

    assert not scheduler.running
    assert scheduler.inflight == 1

    release.set()
    await scheduler.close()
    assert finished == [None]


@pytest.mark.asyncio
async def test_failing_cycle_is_logged_and_timer_continues(caplog: pytest.LogCaptureFixture) -> None:
    clock = ManualClock()
    calls: list[None] = []

    async def refresh() -> None:
        calls.append(None)
        raise RuntimeError("backend down")

    scheduler = AutoRefreshScheduler(refresh, sleep=clock.sleep)
    scheduler.start(1)
    with caplog.at_level("ERROR", logger="pymonitoreo.scheduler"):
        await clock.tick(2)

    assert len(calls) == 2
    assert scheduler.running
    assert "Auto-refresh cycle failed" in caplog.text
    await scheduler.close()


@pytest.mark.asyncio
async def test_interval_must_be_positive() -> None:
    async def refresh() -> None:
        return None

    scheduler = AutoRefreshScheduler(refresh)

    with pytest.raises(MonitorConfigError):
        scheduler.start(0)
    assert not scheduler.running

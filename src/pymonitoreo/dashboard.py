"""High-level async entry point wiring the dashboard engine together."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pymonitoreo._constants import Group, View
from pymonitoreo._transport import HttpTransport, Transport
from pymonitoreo.config import MonitorConfig
from pymonitoreo.controller import ViewController
from pymonitoreo.exceptions import MonitorError
from pymonitoreo.ingestion.loader import Loader
from pymonitoreo.scheduler import AutoRefreshScheduler
from pymonitoreo.state.store import CacheStore
from pymonitoreo.state.view import ViewState
from pymonitoreo.surface import RenderingSurface
from pymonitoreo.views.display import DisplayModel

_logger = logging.getLogger(__name__)


class MonitorDashboard:
    """Polling dashboard bound to one rendering surface.

    Usage::

        async with MonitorDashboard(config, surface) as dashboard:
            await dashboard.start()
            dashboard.navigate(View.CAMERAS)
    """

    def __init__(
        self,
        config: MonitorConfig,
        surface: RenderingSurface,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._store = CacheStore()
        self._controller = ViewController(
            self._store,
            surface,
            state=ViewState(auto_refresh=config.auto_refresh),
            chart_points=config.chart_points,
            latest_limit=config.latest_events_limit,
        )
        self._loader: Loader | None = None
        self._scheduler = AutoRefreshScheduler(
            self.refresh,
            is_enabled=lambda: self._controller.state.auto_refresh,
        )

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> MonitorDashboard:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        self._loader = Loader(
            self._transport,
            self._store,
            on_entity_loaded=self._controller.entity_updated,
            on_cycle_complete=self._controller.cycle_completed,
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self._scheduler.close()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._loader = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def store(self) -> CacheStore:
        return self._store

    @property
    def controller(self) -> ViewController:
        return self._controller

    @property
    def scheduler(self) -> AutoRefreshScheduler:
        return self._scheduler

    def _require_loader(self) -> Loader:
        if self._loader is None:
            raise MonitorError("Dashboard not initialized. Use 'async with MonitorDashboard(...) as dashboard:'")
        return self._loader

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Render the active view, run a first refresh and start the timer."""
        self._controller.render()
        self.start_auto_refresh()
        await self.refresh()

    async def refresh(self) -> None:
        """Run one full refresh cycle; the timer schedule is left untouched."""
        await self._require_loader().load_all()

    def start_auto_refresh(self, interval: float | None = None) -> None:
        self._scheduler.start(interval if interval is not None else self._config.refresh_interval)

    def stop_auto_refresh(self) -> None:
        self._scheduler.stop()

    def set_auto_refresh(self, enabled: bool) -> None:
        self._controller.set_auto_refresh(enabled)

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def navigate(self, view: View | str) -> DisplayModel:
        return self._controller.navigate(view)

    def select_entity(self, group: Group, entity_id: str) -> DisplayModel | None:
        return self._controller.select_entity(group, entity_id)

    def on_control_changed(self, control: str) -> DisplayModel | None:
        return self._controller.on_control_changed(control)

    def load_more(self) -> DisplayModel | None:
        return self._controller.load_more(Group.CAMERAS)

"""View controller.

Tracks the active view, the selected entity per group and the filter
controls, and re-renders whenever one of them (or the cached data the
active view shows) changes. Navigation never fetches: views show
whatever the cache currently holds.
"""

from __future__ import annotations

import logging

from pymonitoreo._constants import CHART_POINTS, GROUP_ENTITIES, LATEST_EVENTS_LIMIT, Group, View
from pymonitoreo.exceptions import MonitorConfigError
from pymonitoreo.state.store import CacheStore
from pymonitoreo.state.view import FilterState, ViewState
from pymonitoreo.surface import AUTH_CONTROL, DEVICE_SEARCH_CONTROL, EVENT_TYPE_CONTROL, RenderingSurface
from pymonitoreo.views.display import DisplayModel
from pymonitoreo.views.render import render_view

_logger = logging.getLogger(__name__)

# Control name -> (view it constrains, FilterState field).
_CONTROL_FIELDS: dict[str, tuple[View, str]] = {
    EVENT_TYPE_CONTROL: (View.CAMERAS, "event_type"),
    AUTH_CONTROL: (View.CAMERAS, "authorized"),
    DEVICE_SEARCH_CONTROL: (View.DEVICES, "search"),
}


def _coerce_view(view: View | str) -> View:
    try:
        return View(view)
    except ValueError as exc:
        raise MonitorConfigError(f"Unknown view: {view!r}") from exc


class ViewController:
    """Dispatches re-renders of the active view onto a rendering surface."""

    def __init__(
        self,
        store: CacheStore,
        surface: RenderingSurface,
        *,
        state: ViewState | None = None,
        chart_points: int = CHART_POINTS,
        latest_limit: int = LATEST_EVENTS_LIMIT,
    ) -> None:
        self._store = store
        self._surface = surface
        self._state = state if state is not None else ViewState()
        self._filters: dict[View, FilterState] = {view: FilterState() for view in View}
        self._chart_points = chart_points
        self._latest_limit = latest_limit
        self._last_model: DisplayModel | None = None

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def last_model(self) -> DisplayModel | None:
        """The display model most recently drawn."""
        return self._last_model

    def filters_for(self, view: View) -> FilterState:
        return self._filters[view]

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def navigate(self, view: View | str) -> DisplayModel:
        """Switch to *view* and render it from the current cache."""
        self._state.active_view = _coerce_view(view)
        return self.render()

    def select_entity(self, group: Group, entity_id: str) -> DisplayModel | None:
        """Select a tab of *group*; re-render if that group's view is active."""
        if entity_id not in GROUP_ENTITIES[group]:
            raise MonitorConfigError(f"Unknown {group.value} entity: {entity_id!r}")
        self._state.active_entity = {**self._state.active_entity, group: entity_id}
        if self._state.active_view.value == group.value:
            return self.render()
        return None

    def on_control_changed(self, control: str) -> DisplayModel | None:
        """Read a filter/search control from the surface and apply it."""
        target = _CONTROL_FIELDS.get(control)
        if target is None:
            raise MonitorConfigError(f"Unknown control: {control!r}")
        view, field_name = target
        value = self._surface.control_value(control)
        self._filters[view] = self._filters[view].model_copy(update={field_name: value})
        if self._state.active_view == view:
            return self.render()
        return None

    def load_more(self, group: Group = Group.CAMERAS) -> DisplayModel | None:
        """Show one more page of the selected entity's history.

        Only the camera history table is paginated; environmental and
        energy tables always show their whole history.
        """
        if group != Group.CAMERAS:
            raise MonitorConfigError(f"{group.value} history is not paginated")
        entity_id = self._state.entity_for(group)
        size = self._store.grow_window(group, entity_id)
        _logger.debug("Visible window for %s/%s is now %d", group.value, entity_id, size)
        if self._state.active_view == View.CAMERAS:
            return self.render()
        return None

    def set_auto_refresh(self, enabled: bool) -> None:
        self._state.auto_refresh = enabled

    # ------------------------------------------------------------------
    # Loader notifications
    # ------------------------------------------------------------------

    def affects_active_view(self, group: Group, entity_id: str) -> bool:
        view = self._state.active_view
        return view.value == group.value and self._state.entity_for(group) == entity_id

    def entity_updated(self, group: Group, entity_id: str) -> None:
        """Partial re-render after one entity's data landed in the cache."""
        if self.affects_active_view(group, entity_id):
            self.render()

    def cycle_completed(self) -> None:
        """Refresh the dashboard once the whole cache has been reloaded."""
        if self._state.active_view == View.DASHBOARD:
            self.render()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def build(self) -> DisplayModel:
        """Build the active view's display model without drawing it."""
        view = self._state.active_view
        return render_view(
            view,
            self._store,
            self._state,
            self._filters[view],
            chart_points=self._chart_points,
            latest_limit=self._latest_limit,
        )

    def render(self) -> DisplayModel:
        model = self.build()
        for mount, content in model.mounts.items():
            if not self._surface.has_mount(model.view, mount):
                _logger.debug("Mount %s not present in %s view; skipped", mount, model.view.value)
                continue
            self._surface.draw(model.view, mount, content)
        self._last_model = model
        return model

"""Rendering surface interface.

The engine never talks to a concrete UI toolkit. It draws display
content into named mount points and reads the current value of the
filter/search controls; nothing else about the page layout is visible.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from pymonitoreo._constants import View
from pymonitoreo.views.display import MountContent

EVENT_TYPE_CONTROL = "event-type-filter"
AUTH_CONTROL = "auth-filter"
DEVICE_SEARCH_CONTROL = "device-search"

#: Mount points of the stock page layout, per view.
DEFAULT_MOUNTS: dict[View, frozenset[str]] = {
    View.DASHBOARD: frozenset({"stat-events", "dashboard-events-table", "activity-chart"}),
    View.CAMERAS: frozenset(
        {"camera-current-data", "camera-speed-chart", "camera-events-chart", "camera-history-table"}
    ),
    View.ENVIRONMENTAL: frozenset(
        {
            "environmental-current-data",
            "environmental-temp-chart",
            "environmental-humidity-chart",
            "environmental-history-table",
        }
    ),
    View.ENERGY: frozenset({"energy-current-data", "energy-consumption-chart", "energy-history-table"}),
    View.DEVICES: frozenset({"devices-table"}),
}


class RenderingSurface(Protocol):
    def has_mount(self, view: View, mount: str) -> bool:
        ...

    def draw(self, view: View, mount: str, content: MountContent) -> None:
        ...

    def control_value(self, control: str) -> str:
        ...


@dataclass
class RecordingSurface:
    """In-memory surface that keeps the last content drawn into each mount.

    Useful for headless runs (see ``scripts/dump_dashboard.py``) and tests.
    """

    mounts: dict[View, frozenset[str]] = field(default_factory=lambda: dict(DEFAULT_MOUNTS))
    controls: dict[str, str] = field(default_factory=dict)
    drawn: dict[tuple[View, str], MountContent] = field(default_factory=dict)
    draw_count: int = 0

    def has_mount(self, view: View, mount: str) -> bool:
        return mount in self.mounts.get(view, frozenset())

    def draw(self, view: View, mount: str, content: MountContent) -> None:
        self.drawn[(view, mount)] = content
        self.draw_count += 1

    def control_value(self, control: str) -> str:
        return self.controls.get(control, "")

    def content(self, view: View, mount: str) -> MountContent | None:
        return self.drawn.get((view, mount))

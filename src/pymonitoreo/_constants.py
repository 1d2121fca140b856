"""Internal constants shared across the library."""

from __future__ import annotations

from enum import StrEnum

BASE_URL = "http://20.246.73.238:5051/api"
DEFAULT_REFRESH_INTERVAL: float = 30.0

#: Initial visible history rows per entity, and the growth step of "load more".
WINDOW_STEP = 20
#: Number of points plotted by the per-entity line charts.
CHART_POINTS = 20
#: Size of the dashboard "latest events" list.
LATEST_EVENTS_LIMIT = 5

DEVICES_ENDPOINT = "/dispositivos"
#: Pseudo-entity holding the device inventory as its history.
DEVICE_INVENTORY_ID = "dispositivos"


class Group(StrEnum):
    CAMERAS = "cameras"
    ENVIRONMENTAL = "environmental"
    ENERGY = "energy"
    DEVICES = "devices"


class View(StrEnum):
    DASHBOARD = "dashboard"
    CAMERAS = "cameras"
    ENVIRONMENTAL = "environmental"
    ENERGY = "energy"
    DEVICES = "devices"


# Order matters: it is both the default tab order and the load stage order.
GROUP_ENTITIES: dict[Group, tuple[str, ...]] = {
    Group.CAMERAS: ("LPR1", "LPR2", "LPR3"),
    Group.ENVIRONMENTAL: ("EST1", "EST2", "EST3"),
    Group.ENERGY: ("EV-001", "EV-002", "EV-003", "EV-004"),
    Group.DEVICES: (DEVICE_INVENTORY_ID,),
}

LOAD_STAGES: tuple[Group, ...] = (
    Group.CAMERAS,
    Group.ENVIRONMENTAL,
    Group.ENERGY,
    Group.DEVICES,
)

ENDPOINT_PREFIXES: dict[Group, str] = {
    Group.CAMERAS: "monitor_acceso",
    Group.ENVIRONMENTAL: "monitor_ambiental",
    Group.ENERGY: "monitor_energia",
}

VIEW_TITLES: dict[View, str] = {
    View.DASHBOARD: "Vista General",
    View.CAMERAS: "Cámaras LPR",
    View.ENVIRONMENTAL: "Monitores Ambientales",
    View.ENERGY: "Monitores de Energía",
    View.DEVICES: "Lista de Dispositivos",
}


def group_for_view(view: View) -> Group | None:
    """Return the telemetry group shown by *view* (``None`` for the dashboard)."""
    if view == View.DASHBOARD:
        return None
    return Group(view.value)


def snapshot_endpoint(group: Group, entity_id: str) -> str:
    return f"/{ENDPOINT_PREFIXES[group]}_{entity_id}/actual"


def history_endpoint(group: Group, entity_id: str) -> str:
    return f"/{ENDPOINT_PREFIXES[group]}_{entity_id}/historico"

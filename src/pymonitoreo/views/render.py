"""Renderer: pure mapping from cached state to display models.

``render_view`` reads the cache at call time and never writes to it
beyond the lazy creation of empty entity records, so calling it twice on
unchanged state yields equal models.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from pymonitoreo._constants import CHART_POINTS, LATEST_EVENTS_LIMIT, VIEW_TITLES, Group, View
from pymonitoreo.ingestion.normalize import display_string
from pymonitoreo.models import CameraEvent, Device, EnergyReading, EnvironmentalReading, Record
from pymonitoreo.models.device import DEVICE_COLUMN_KEYS
from pymonitoreo.state.store import CacheStore
from pymonitoreo.state.view import FilterState, ViewState
from pymonitoreo.views.display import (
    NO_CURRENT_DATA,
    NO_DEVICES,
    NO_EVENTS,
    NO_FIELDS,
    NO_HISTORY,
    NOT_AVAILABLE,
    Cell,
    Chart,
    Counter,
    DataItem,
    Dataset,
    DisplayModel,
    MountContent,
    Panel,
    Table,
    TableRow,
    event_type,
    format_datetime,
    format_number,
    occupancy,
    yes_no,
)
from pymonitoreo.views.filters import (
    chart_window,
    count_by,
    device_visibility,
    filtered_history,
    has_more,
    latest_events,
    sorted_history,
)
from pymonitoreo.views.stats import dashboard_stats

_ACTIVITY_LABELS: dict[Group, str] = {
    Group.CAMERAS: "Cámaras LPR",
    Group.ENVIRONMENTAL: "Monitor Ambiental",
    Group.ENERGY: "Monitor Energía",
}

_CAMERA_LABELS: dict[str, str] = {
    "placa": "Placa",
    "autorizado": "Autorizado",
    "ocupacion": "Ocupación",
    "velocidad_kmh": "Velocidad",
    "tipo_evento": "Tipo Evento",
    "ubicacion": "Ubicación",
    "id_camara": "ID Cámara",
    "timestamp_evento": "Fecha/Hora",
}

_ENERGY_LABELS: dict[str, str] = {
    "energia_kwh": "Energía (kWh)",
    "potencia_kw": "Potencia (kW)",
    "corriente_a": "Corriente (A)",
    "voltaje_v": "Voltaje (V)",
    "ubicacion": "Ubicación",
    "estacion_id": "ID Estación",
    "timestamp_evento": "Fecha/Hora",
}


# ---------------------------------------------------------------------------
# Shared pieces
# ---------------------------------------------------------------------------


def _raw_summary(record: Record, skip: frozenset[str]) -> str:
    parts: list[str] = []
    for key, value in record.raw.items():
        if key in skip:
            continue
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            parts.append(f"{key}: {value:.2f}")
        else:
            parts.append(f"{key}: {display_string(value)}")
    return ", ".join(parts)


def _summary_table(records: Sequence[Record], skip: frozenset[str]) -> Table:
    # Environmental and energy tables show their whole history, unpaginated.
    ordered = sorted_history(records)
    if not ordered:
        return Table(placeholder=NO_HISTORY)
    rows = tuple(
        TableRow(
            cells=(
                Cell(text=format_datetime(record.timestamp_evento)),
                Cell(text=_raw_summary(record, skip) or NOT_AVAILABLE),
            )
        )
        for record in ordered
    )
    return Table(rows=rows)


def _line_chart(
    records: Sequence[Record],
    label: str,
    value: Callable[[Any], float | None],
    *,
    unit: str | None = None,
) -> Chart:
    values = tuple(v for v in (value(record) for record in records) if v is not None)
    return Chart(
        chart_type="line",
        labels=tuple(format_datetime(record.timestamp_evento) for record in records),
        datasets=(Dataset(label=label, data=values or (0.0,)),),
        unit=unit,
    )


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


def _dashboard_event_row(event: CameraEvent) -> TableRow:
    return TableRow(
        cells=(
            Cell(text=format_datetime(event.timestamp_evento)),
            Cell(text=event.id_camara or NOT_AVAILABLE),
            Cell(text=event.placa or NOT_AVAILABLE, strong=True),
            event_type(event.tipo_evento),
            yes_no(event.autorizado),
            Cell(text=format_number(event.velocidad_kmh, 1, " km/h")),
        )
    )


def render_dashboard(store: CacheStore, *, latest_limit: int = LATEST_EVENTS_LIMIT) -> dict[str, MountContent]:
    stats = dashboard_stats(store)
    latest = [event for event in latest_events(store, latest_limit) if isinstance(event, CameraEvent)]
    events_table = Table(rows=tuple(_dashboard_event_row(e) for e in latest)) if latest else Table(placeholder=NO_EVENTS)
    activity = Chart(
        chart_type="bar",
        labels=tuple(_ACTIVITY_LABELS.values()),
        datasets=(
            Dataset(
                label="Eventos Registrados",
                data=tuple(float(stats.per_group_counts[group]) for group in _ACTIVITY_LABELS),
            ),
        ),
    )
    return {
        "stat-events": Counter(value=stats.total_events),
        "dashboard-events-table": events_table,
        "activity-chart": activity,
    }


# ---------------------------------------------------------------------------
# Cameras
# ---------------------------------------------------------------------------


def _camera_panel(snapshot: Record | None) -> Panel:
    if not isinstance(snapshot, CameraEvent):
        return Panel(placeholder=NO_CURRENT_DATA)

    items: list[DataItem] = []
    for field_name, label in _CAMERA_LABELS.items():
        value = getattr(snapshot, field_name)
        if value is None:
            continue
        if field_name == "autorizado":
            cell = yes_no(value)
            items.append(DataItem(label=label, value=cell.text, tone=cell.tone))
        elif field_name == "ocupacion":
            cell = occupancy(value)
            items.append(DataItem(label=label, value=cell.text, tone=cell.tone))
        elif field_name == "velocidad_kmh":
            items.append(DataItem(label=label, value=format_number(value, 1, " km/h")))
        elif field_name == "timestamp_evento":
            items.append(DataItem(label=label, value=format_datetime(value)))
        else:
            items.append(DataItem(label=label, value=str(value)))
    if not items:
        return Panel(placeholder=NO_FIELDS)
    return Panel(items=tuple(items))


def _camera_history_row(event: CameraEvent) -> TableRow:
    return TableRow(
        cells=(
            Cell(text=format_datetime(event.timestamp_evento)),
            Cell(text=event.placa or NOT_AVAILABLE, strong=True),
            event_type(event.tipo_evento),
            yes_no(event.autorizado),
            occupancy(event.ocupacion),
            Cell(text=format_number(event.velocidad_kmh, 1)),
            Cell(text=event.ubicacion or NOT_AVAILABLE),
        )
    )


def render_camera(
    store: CacheStore,
    camera_id: str,
    filters: FilterState,
    *,
    chart_points: int = CHART_POINTS,
) -> dict[str, MountContent]:
    record = store.get(Group.CAMERAS, camera_id)
    history = record.history

    speed_points = chart_window(history, chart_points)
    speed_chart = Chart(
        chart_type="line",
        labels=tuple(format_datetime(e.timestamp_evento) for e in speed_points),
        datasets=(
            Dataset(
                label="Velocidad (km/h)",
                data=tuple(getattr(e, "velocidad_kmh", None) or 0.0 for e in speed_points),
            ),
        ),
    )
    events_chart = Chart(
        chart_type="doughnut",
        labels=("Entradas", "Salidas"),
        datasets=(
            Dataset(
                label="Eventos",
                data=(
                    float(count_by(history, "tipo_evento", "entrada")),
                    float(count_by(history, "tipo_evento", "salida")),
                ),
            ),
        ),
    )

    shown = [e for e in filtered_history(store, Group.CAMERAS, camera_id, filters) if isinstance(e, CameraEvent)]
    more = has_more(store, Group.CAMERAS, camera_id, filters)
    if shown:
        history_table = Table(rows=tuple(_camera_history_row(e) for e in shown), has_more=more)
    else:
        history_table = Table(placeholder=NO_HISTORY, has_more=more)

    return {
        "camera-current-data": _camera_panel(record.snapshot),
        "camera-speed-chart": speed_chart,
        "camera-events-chart": events_chart,
        "camera-history-table": history_table,
    }


# ---------------------------------------------------------------------------
# Environmental
# ---------------------------------------------------------------------------


def _environmental_panel(snapshot: Record | None) -> Panel:
    if not isinstance(snapshot, EnvironmentalReading):
        return Panel(placeholder=NO_CURRENT_DATA)
    return Panel(
        items=(
            DataItem(label="Temperatura", value=format_number(snapshot.temperatura_c, 2, " °C")),
            DataItem(label="Humedad Relativa", value=format_number(snapshot.humedad_rel, 2, " %")),
            DataItem(label="CO₂", value=format_number(snapshot.co2, 2, " ppm")),
            DataItem(label="PM10", value=format_number(snapshot.pm10, 2, " µg/m³")),
            DataItem(label="PM2.5", value=format_number(snapshot.pm25, 2, " µg/m³")),
            DataItem(label="Ubicación", value=snapshot.ubicacion or NOT_AVAILABLE),
            DataItem(label="Fecha/Hora", value=format_datetime(snapshot.timestamp_evento)),
            DataItem(label="ID Estación", value=snapshot.id_estacion or NOT_AVAILABLE),
        )
    )


def render_environmental(
    store: CacheStore,
    station_id: str,
    *,
    chart_points: int = CHART_POINTS,
) -> dict[str, MountContent]:
    record = store.get(Group.ENVIRONMENTAL, station_id)
    points = chart_window(record.history, chart_points)
    return {
        "environmental-current-data": _environmental_panel(record.snapshot),
        "environmental-temp-chart": _line_chart(
            points, "Temperatura (°C)", lambda r: getattr(r, "temperatura_c", None), unit="°C"
        ),
        "environmental-humidity-chart": _line_chart(
            points, "Humedad (%)", lambda r: getattr(r, "humedad_rel", None), unit="%"
        ),
        "environmental-history-table": _summary_table(
            record.history, frozenset({"timestampEvento", "idEstacion"})
        ),
    }


# ---------------------------------------------------------------------------
# Energy
# ---------------------------------------------------------------------------


def _energy_panel(snapshot: Record | None) -> Panel:
    if not isinstance(snapshot, EnergyReading):
        return Panel(placeholder=NO_CURRENT_DATA)
    items: list[DataItem] = []
    for field_name, label in _ENERGY_LABELS.items():
        value = getattr(snapshot, field_name)
        if value is None:
            continue
        if isinstance(value, float):
            text = format_number(value)
        elif field_name == "timestamp_evento":
            text = format_datetime(value)
        else:
            text = str(value)
        items.append(DataItem(label=label, value=text))
    if not items:
        return Panel(placeholder=NO_FIELDS)
    return Panel(items=tuple(items))


def _consumption_unit(records: Sequence[Record]) -> str:
    # The most recent plotted reading decides the unit.
    unit = "kWh"
    for record in records:
        if isinstance(record, EnergyReading) and record.consumption_unit is not None:
            unit = record.consumption_unit
    return unit


def render_energy(
    store: CacheStore,
    monitor_id: str,
    *,
    chart_points: int = CHART_POINTS,
) -> dict[str, MountContent]:
    record = store.get(Group.ENERGY, monitor_id)
    points = chart_window(record.history, chart_points)
    unit = _consumption_unit(points)
    return {
        "energy-current-data": _energy_panel(record.snapshot),
        "energy-consumption-chart": _line_chart(
            points, f"Consumo ({unit})", lambda r: getattr(r, "consumption", None), unit=unit
        ),
        "energy-history-table": _summary_table(record.history, frozenset({"timestampEvento", "idMonitor"})),
    }


# ---------------------------------------------------------------------------
# Devices
# ---------------------------------------------------------------------------


def _device_row(index: int, device: Device) -> TableRow:
    info = ", ".join(
        f"{key}: {display_string(value)}" for key, value in device.raw.items() if key not in DEVICE_COLUMN_KEYS
    )
    return TableRow(
        key=device.id or f"#{index}",
        cells=(
            Cell(text=device.id or NOT_AVAILABLE, strong=True),
            Cell(text=device.tipo or NOT_AVAILABLE),
            Cell(text=device.estado or "Desconocido", tone="success" if device.is_active else "error"),
            Cell(text=info or NOT_AVAILABLE),
        ),
    )


def render_devices(store: CacheStore, inventory_id: str, filters: FilterState) -> dict[str, MountContent]:
    devices = [d for d in store.get(Group.DEVICES, inventory_id).history if isinstance(d, Device)]
    if not devices:
        return {"devices-table": Table(placeholder=NO_DEVICES)}

    rows = [_device_row(index, device) for index, device in enumerate(devices)]
    if filters.search:
        visible = device_visibility([row.text for row in rows], filters.search)
        rows = [row.model_copy(update={"visible": shown}) for row, shown in zip(rows, visible, strict=True)]
    return {"devices-table": Table(rows=tuple(rows))}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def render_view(
    view: View,
    store: CacheStore,
    state: ViewState,
    filters: FilterState,
    *,
    chart_points: int = CHART_POINTS,
    latest_limit: int = LATEST_EVENTS_LIMIT,
) -> DisplayModel:
    """Build the display model of *view* from the cache as it is right now."""
    title = VIEW_TITLES[view]
    if view == View.DASHBOARD:
        return DisplayModel(view=view, title=title, mounts=render_dashboard(store, latest_limit=latest_limit))

    group = Group(view.value)
    entity_id = state.entity_for(group)
    mounts: dict[str, MountContent]
    if group == Group.CAMERAS:
        mounts = render_camera(store, entity_id, filters, chart_points=chart_points)
    elif group == Group.ENVIRONMENTAL:
        mounts = render_environmental(store, entity_id, chart_points=chart_points)
    elif group == Group.ENERGY:
        mounts = render_energy(store, entity_id, chart_points=chart_points)
    else:
        mounts = render_devices(store, entity_id, filters)
    return DisplayModel(view=view, title=title, entity_id=entity_id, mounts=mounts)

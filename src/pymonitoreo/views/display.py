"""Display models handed to the rendering surface.

They are frozen, so a model drawn once can be compared with the next
render to detect changes, and two renders over unchanged state compare
equal.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

from pymonitoreo._constants import View

NOT_AVAILABLE = "N/A"
NO_CURRENT_DATA = "No hay datos actuales disponibles"
NO_FIELDS = "No hay datos disponibles"
NO_HISTORY = "No hay datos históricos disponibles"
NO_EVENTS = "No hay eventos disponibles"
NO_DEVICES = "No hay dispositivos disponibles"

Tone = Literal["success", "warning", "error"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Cell(_Frozen):
    text: str
    tone: Tone | None = None
    strong: bool = False


class DataItem(_Frozen):
    label: str
    value: str
    tone: Tone | None = None


class Panel(_Frozen):
    """Current-data panel; ``placeholder`` is set when there is nothing to show."""

    kind: Literal["panel"] = "panel"
    items: tuple[DataItem, ...] = ()
    placeholder: str | None = None


class TableRow(_Frozen):
    cells: tuple[Cell, ...]
    key: str | None = None
    visible: bool = True

    @property
    def text(self) -> str:
        return " ".join(cell.text for cell in self.cells)


class Table(_Frozen):
    kind: Literal["table"] = "table"
    rows: tuple[TableRow, ...] = ()
    placeholder: str | None = None
    has_more: bool = False


class Dataset(_Frozen):
    label: str
    data: tuple[float, ...]


class Chart(_Frozen):
    kind: Literal["chart"] = "chart"
    chart_type: Literal["bar", "line", "doughnut"]
    labels: tuple[str, ...]
    datasets: tuple[Dataset, ...]
    unit: str | None = None


class Counter(_Frozen):
    kind: Literal["counter"] = "counter"
    value: int


MountContent = Panel | Table | Chart | Counter


class DisplayModel(_Frozen):
    """Everything needed to draw one view, keyed by mount point name."""

    view: View
    title: str
    entity_id: str | None = None
    mounts: dict[str, MountContent]


def format_datetime(value: datetime | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return value.strftime("%d/%m/%Y, %H:%M:%S")


def format_number(value: float | None, decimals: int = 2, suffix: str = "") -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.{decimals}f}{suffix}"


def yes_no(value: bool | None) -> Cell:
    return Cell(text="Sí" if value else "No", tone="success" if value else "error")


def occupancy(value: bool | None) -> Cell:
    return Cell(text="Ocupado" if value else "Libre", tone="warning" if value else "success")


def event_type(value: str | None) -> Cell:
    return Cell(text=value or NOT_AVAILABLE, tone="success" if value == "entrada" else "warning")

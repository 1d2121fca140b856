"""Environmental station reading model."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from pymonitoreo.models._base import MonitorBaseModel, SafeFloat, SafeStr


class EnvironmentalReading(MonitorBaseModel):
    """An air-quality reading (``/monitor_ambiental_<id>``).

    Stations disagree on key names for the same concept; each field lists
    its accepted keys in priority order.
    """

    temperatura_c: SafeFloat = Field(
        default=None,
        validation_alias=AliasChoices("temperaturaC", "temperatura", "temp"),
    )
    humedad_rel: SafeFloat = Field(
        default=None,
        validation_alias=AliasChoices("humedadRel", "humedad", "humidity"),
    )
    co2: SafeFloat = None
    pm10: SafeFloat = None
    pm25: SafeFloat = None
    ubicacion: SafeStr = None
    id_estacion: SafeStr = Field(default=None, validation_alias=AliasChoices("id", "idEstacion"))

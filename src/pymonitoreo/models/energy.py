"""Energy monitor reading model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, model_validator

from pymonitoreo.ingestion.normalize import first_present
from pymonitoreo.models._base import MonitorBaseModel, SafeFloat, SafeStr

# Consumption keys in priority order, with the unit each one is expressed in.
CONSUMPTION_KEYS: tuple[tuple[str, str], ...] = (
    ("energiaKWh", "kWh"),
    ("potenciaKW", "kW"),
    ("potencia", "W"),
    ("consumo", "W"),
)


class EnergyReading(MonitorBaseModel):
    """An energy monitor reading (``/monitor_energia_<id>``).

    Parameters
    ----------
    energia_kwh : float or None
        Accumulated energy.
    potencia_kw : float or None
        Instant power.
    consumption : float or None
        The first consumption figure found in ``CONSUMPTION_KEYS`` order.
    consumption_unit : str or None
        Unit of ``consumption`` (``"kWh"``, ``"kW"`` or ``"W"``).
    """

    energia_kwh: SafeFloat = Field(default=None, validation_alias=AliasChoices("energiaKWh"))
    potencia_kw: SafeFloat = Field(default=None, validation_alias=AliasChoices("potenciaKW"))
    corriente_a: SafeFloat = None
    voltaje_v: SafeFloat = None
    ubicacion: SafeStr = None
    estacion_id: SafeStr = Field(default=None, validation_alias=AliasChoices("estacionId", "idMonitor"))
    consumption: SafeFloat = None
    consumption_unit: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _pick_consumption(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "consumption" in values:
            return values
        found = first_present(values, tuple(key for key, _ in CONSUMPTION_KEYS))
        if found is None:
            return values
        key, value = found
        merged = dict(values)
        merged.setdefault("raw", dict(values))
        merged["consumption"] = value
        merged["consumption_unit"] = dict(CONSUMPTION_KEYS)[key]
        return merged

"""Device inventory entry model."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from pymonitoreo.models._base import MonitorBaseModel, SafeStr

#: Keys shown in their own device table columns rather than in the info column.
DEVICE_COLUMN_KEYS: frozenset[str] = frozenset({"id", "tipo", "estado"})


class Device(MonitorBaseModel):
    """An entry of the ``/dispositivos`` inventory."""

    id: SafeStr = Field(default=None, validation_alias=AliasChoices("id", "idDispositivo"))
    tipo: SafeStr = Field(default=None, validation_alias=AliasChoices("tipo", "type"))
    estado: SafeStr = None
    nombre: SafeStr = None
    ubicacion: SafeStr = None

    @property
    def is_active(self) -> bool:
        return self.estado == "activo"

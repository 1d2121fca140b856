"""License-plate camera event model."""

from __future__ import annotations

from pymonitoreo.models._base import MonitorBaseModel, SafeBool, SafeFloat, SafeStr


class CameraEvent(MonitorBaseModel):
    """A license-plate recognition event (``/monitor_acceso_<id>``).

    Fields are ``None`` when the value is absent or unparseable; all
    original data is available in the ``raw`` dict.
    """

    placa: SafeStr = None
    """Recognised license plate."""
    autorizado: SafeBool = None
    """Whether the plate is on the authorised list."""
    ocupacion: SafeBool = None
    """Whether the monitored bay is occupied."""
    velocidad_kmh: SafeFloat = None
    tipo_evento: SafeStr = None
    """``"entrada"`` or ``"salida"``."""
    ubicacion: SafeStr = None
    id_camara: SafeStr = None

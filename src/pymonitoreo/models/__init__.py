"""Canonical record models, one per telemetry group."""

from __future__ import annotations

from pymonitoreo._constants import Group
from pymonitoreo.models._base import MonitorBaseModel
from pymonitoreo.models.camera import CameraEvent
from pymonitoreo.models.device import Device
from pymonitoreo.models.energy import EnergyReading
from pymonitoreo.models.environmental import EnvironmentalReading

Record = CameraEvent | EnvironmentalReading | EnergyReading | Device

RECORD_MODELS: dict[Group, type[MonitorBaseModel]] = {
    Group.CAMERAS: CameraEvent,
    Group.ENVIRONMENTAL: EnvironmentalReading,
    Group.ENERGY: EnergyReading,
    Group.DEVICES: Device,
}

__all__ = [
    "RECORD_MODELS",
    "CameraEvent",
    "Device",
    "EnergyReading",
    "EnvironmentalReading",
    "MonitorBaseModel",
    "Record",
]

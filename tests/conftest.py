from __future__ import annotations

import asyncio
import copy
from dataclasses import dataclass, field
from typing import Any

import pytest

from pymonitoreo.exceptions import MonitorTransportError

CAMERA_ACTUAL: dict[str, Any] = {
    "placa": "ABC1234",
    "autorizado": True,
    "ocupacion": False,
    "velocidadKmh": 42.7,
    "tipoEvento": "entrada",
    "ubicacion": "Entrada Principal",
    "idCamara": "LPR1",
    "timestampEvento": "2024-08-01T12:05:00Z",
}

CAMERA_HISTORIES: dict[str, list[dict[str, Any]]] = {
    "LPR1": [
        {
            "timestampEvento": "2024-08-01T12:30:00Z",
            "placa": "TEST-12",
            "tipoEvento": "entrada",
            "autorizado": True,
            "ocupacion": False,
            "velocidadKmh": 40.1,
            "ubicacion": "Entrada Principal",
            "idCamara": "LPR1",
        },
        {
            "timestampEvento": "2024-08-01T11:40:00Z",
            "placa": "TEST-34",
            "tipoEvento": "salida",
            "autorizado": False,
            "ocupacion": True,
            "velocidadKmh": 35.8,
            "ubicacion": "Salida Norte",
            "idCamara": "LPR1",
        },
        {
            "timestampEvento": "2024-08-01T11:05:00Z",
            "placa": "TEST-56",
            "tipoEvento": "entrada",
            "autorizado": True,
            "ocupacion": True,
            "velocidadKmh": 28.4,
            "ubicacion": "Acceso VIP",
            "idCamara": "LPR1",
        },
    ],
    "LPR2": [
        {"timestampEvento": "2024-08-01T12:10:00Z", "placa": "LPR2-A", "tipoEvento": "salida", "autorizado": True, "idCamara": "LPR2"},
        {"timestampEvento": "2024-08-01T09:00:00Z", "placa": "LPR2-B", "tipoEvento": "entrada", "autorizado": False, "idCamara": "LPR2"},
        {"timestampEvento": "2024-08-01T12:45:00Z", "placa": "LPR2-C", "tipoEvento": "entrada", "autorizado": True, "idCamara": "LPR2"},
    ],
    "LPR3": [
        {"timestampEvento": "2024-08-01T08:00:00Z", "placa": "LPR3-A", "tipoEvento": "entrada", "autorizado": True, "idCamara": "LPR3"},
        {"timestampEvento": "2024-08-01T11:50:00Z", "placa": "LPR3-B", "tipoEvento": "salida", "autorizado": False, "idCamara": "LPR3"},
        {"timestampEvento": "2024-08-01T07:30:00Z", "placa": "LPR3-C", "tipoEvento": "entrada", "autorizado": True, "idCamara": "LPR3"},
    ],
}

ENV_ACTUAL: dict[str, Any] = {
    "temperaturaC": 23.4,
    "humedadRel": 52.3,
    "co2": 390.1,
    "pm10": 18.5,
    "pm25": 9.4,
    "ubicacion": "Sala de Control",
    "timestamp": "2024-08-01T11:45:00Z",
    "id": "EST1",
}

ENV_HISTORY: list[dict[str, Any]] = [
    {"timestampEvento": "2024-08-01T11:40:00Z", "temperaturaC": 22.8, "humedadRel": 51.8, "idEstacion": "EST1"},
    {"timestampEvento": "2024-08-01T10:15:00Z", "temperaturaC": 23.9, "humedadRel": 54.0, "idEstacion": "EST1"},
    {"timestampEvento": "2024-08-01T09:30:00Z", "temperaturaC": 24.1, "humedadRel": 55.4, "idEstacion": "EST1"},
]

ENERGY_ACTUAL: dict[str, Any] = {
    "energiaKWh": 12.45,
    "potenciaKW": 3.2,
    "corrienteA": 11.8,
    "voltajeV": 229.6,
    "ubicacion": "Centro de Datos",
    "estacionId": "EV-001",
    "timestamp": "2024-08-01T11:28:00Z",
}

ENERGY_HISTORY: list[dict[str, Any]] = [
    {"timestampEvento": "2024-08-01T11:15:00Z", "energiaKWh": 11.2, "potenciaKW": 2.9, "idMonitor": "EV-001"},
    {"timestampEvento": "2024-08-01T10:45:00Z", "energiaKWh": 10.9, "potenciaKW": 2.7, "idMonitor": "EV-001"},
]

DEVICES: list[dict[str, Any]] = [
    {
        "id": "dev-01",
        "tipo": "Sensor",
        "estado": "activo",
        "nombre": "Sensor Estacionario",
        "ubicacion": "Lobby",
        "version": "1.2.0",
    },
    {
        "id": "dev-02",
        "tipo": "Cámara",
        "estado": "inactivo",
        "nombre": "Cámara Perimetral",
        "ubicacion": "Perímetro Norte",
    },
]


def default_responses() -> dict[str, Any]:
    responses: dict[str, Any] = {
        "/monitor_acceso_LPR1/actual": CAMERA_ACTUAL,
        "/monitor_ambiental_EST1/actual": ENV_ACTUAL,
        "/monitor_ambiental_EST1/historico": ENV_HISTORY,
        "/monitor_energia_EV-001/actual": ENERGY_ACTUAL,
        "/monitor_energia_EV-001/historico": ENERGY_HISTORY,
        "/dispositivos": DEVICES,
    }
    for camera_id, history in CAMERA_HISTORIES.items():
        responses[f"/monitor_acceso_{camera_id}/historico"] = history
    return copy.deepcopy(responses)


@dataclass
class FakeMonitorBackend:
    """In-memory stand-in for the telemetry API.

    Unknown endpoints answer with an empty body. ``failures`` answer with a
    transport error and ``errors`` raise the given exception as is. The body
    is taken when the request starts; ``gates`` hold the reply until the
    matching event is set, which lets tests interleave cycles.
    """

    responses: dict[str, Any] = field(default_factory=default_responses)
    failures: set[str] = field(default_factory=set)
    errors: dict[str, Exception] = field(default_factory=dict)
    gates: dict[str, asyncio.Event] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    timeline: list[tuple[str, str]] = field(default_factory=list)

    async def get_json(self, endpoint: str) -> Any:
        self.calls.append(endpoint)
        self.timeline.append(("start", endpoint))
        payload = copy.deepcopy(self.responses.get(endpoint))
        gate = self.gates.get(endpoint)
        if gate is not None:
            await gate.wait()
        await asyncio.sleep(0)
        self.timeline.append(("end", endpoint))
        if endpoint in self.errors:
            raise self.errors[endpoint]
        if endpoint in self.failures:
            raise MonitorTransportError(f"Request to {endpoint} failed: boom", endpoint=endpoint)
        return payload


@pytest.fixture
def backend() -> FakeMonitorBackend:
    return FakeMonitorBackend()

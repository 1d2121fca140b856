"""Ingestion layer.

This package contains the adapters that fetch data from the telemetry API
and turn heterogeneous payloads into canonical records.
"""

__all__: list[str] = []

"""Polling loader.

Fetches per-entity snapshots and histories into the cache using a staged
fan-out: groups load one after another, and all entities of a group load
concurrently. A failing entity only blanks its own data.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from pymonitoreo._constants import (
    DEVICES_ENDPOINT,
    GROUP_ENTITIES,
    LOAD_STAGES,
    Group,
    history_endpoint,
    snapshot_endpoint,
)
from pymonitoreo._transport import Transport
from pymonitoreo.exceptions import MonitorError, MonitorPayloadError
from pymonitoreo.ingestion.normalize import parse_record
from pymonitoreo.models import Record
from pymonitoreo.state.store import CacheStore

_logger = logging.getLogger(__name__)

EntityListener = Callable[[Group, str], None]
CycleListener = Callable[[], None]


def parse_snapshot(group: Group, body: Any, *, endpoint: str = "") -> Record | None:
    """Parse an ``/actual`` body; an empty body or mapping means no data."""
    if body is None or body == {} or body == []:
        return None
    if not isinstance(body, dict):
        raise MonitorPayloadError(f"Expected an object from {endpoint}, got {type(body).__name__}", endpoint=endpoint)
    try:
        return parse_record(group, body)
    except ValidationError as exc:
        raise MonitorPayloadError(f"Invalid record from {endpoint}: {exc}", endpoint=endpoint) from exc


def parse_history(group: Group, body: Any, *, endpoint: str = "") -> list[Record]:
    """Parse a ``/historico`` (or inventory) body; an empty body means no records."""
    if body is None:
        return []
    if not isinstance(body, list):
        raise MonitorPayloadError(f"Expected a list from {endpoint}, got {type(body).__name__}", endpoint=endpoint)
    records: list[Record] = []
    for item in body:
        if not isinstance(item, dict):
            raise MonitorPayloadError(f"Non-object item in {endpoint}: {item!r}", endpoint=endpoint)
        try:
            records.append(parse_record(group, item))
        except ValidationError as exc:
            raise MonitorPayloadError(f"Invalid record in {endpoint}: {exc}", endpoint=endpoint) from exc
    return records


class Loader:
    """Loads telemetry into a :class:`CacheStore`.

    Parameters
    ----------
    on_entity_loaded
        Called after each entity's data landed in the cache, so the active
        view can re-render incrementally.
    on_cycle_complete
        Called once after :meth:`load_all` finished every stage.
    """

    def __init__(
        self,
        transport: Transport,
        store: CacheStore,
        *,
        on_entity_loaded: EntityListener | None = None,
        on_cycle_complete: CycleListener | None = None,
    ) -> None:
        self._transport = transport
        self._store = store
        self._on_entity_loaded = on_entity_loaded
        self._on_cycle_complete = on_cycle_complete

    async def _fetch_snapshot(self, group: Group, entity_id: str) -> Record | None:
        # The device inventory only has a list endpoint.
        if group == Group.DEVICES:
            return None
        endpoint = snapshot_endpoint(group, entity_id)
        try:
            body = await self._transport.get_json(endpoint)
            return parse_snapshot(group, body, endpoint=endpoint)
        except MonitorError as exc:
            _logger.warning("Snapshot for %s/%s unavailable: %s", group.value, entity_id, exc)
            return None

    async def _fetch_history(self, group: Group, entity_id: str) -> list[Record]:
        endpoint = DEVICES_ENDPOINT if group == Group.DEVICES else history_endpoint(group, entity_id)
        try:
            body = await self._transport.get_json(endpoint)
            return parse_history(group, body, endpoint=endpoint)
        except MonitorError as exc:
            _logger.warning("History for %s/%s unavailable: %s", group.value, entity_id, exc)
            return []

    async def load_entity(self, group: Group, entity_id: str) -> None:
        """Fetch snapshot and history of one entity concurrently and cache them."""
        snapshot_result, history_result = await asyncio.gather(
            self._fetch_snapshot(group, entity_id),
            self._fetch_history(group, entity_id),
            return_exceptions=True,
        )

        # Each half lands on its own; an unexpected failure blanks only that half.
        snapshot: Record | None
        if isinstance(snapshot_result, BaseException):
            if not isinstance(snapshot_result, Exception):
                raise snapshot_result
            _logger.warning(
                "Snapshot for %s/%s failed unexpectedly", group.value, entity_id, exc_info=snapshot_result
            )
            snapshot = None
        else:
            snapshot = snapshot_result

        history: list[Record]
        if isinstance(history_result, BaseException):
            if not isinstance(history_result, Exception):
                raise history_result
            _logger.warning("History for %s/%s failed unexpectedly", group.value, entity_id, exc_info=history_result)
            history = []
        else:
            history = history_result

        self._store.set_snapshot(group, entity_id, snapshot)
        self._store.set_history(group, entity_id, history)
        _logger.debug(
            "Loaded %s/%s: snapshot=%s history=%d",
            group.value,
            entity_id,
            "yes" if snapshot is not None else "no",
            len(history),
        )

        if self._on_entity_loaded is not None:
            try:
                self._on_entity_loaded(group, entity_id)
            except Exception:
                _logger.debug("on_entity_loaded callback failed for %s/%s", group.value, entity_id, exc_info=True)

    async def load_group(self, group: Group) -> None:
        """Load every entity of *group* in parallel and wait for all of them to settle."""
        entity_ids = GROUP_ENTITIES[group]
        results = await asyncio.gather(
            *(self.load_entity(group, entity_id) for entity_id in entity_ids),
            return_exceptions=True,
        )
        for entity_id, result in zip(entity_ids, results, strict=True):
            if isinstance(result, Exception):
                _logger.error("Loading %s/%s failed", group.value, entity_id, exc_info=result)

    async def load_all(self) -> None:
        """Load every group as a sequential stage, then notify cycle completion."""
        for group in LOAD_STAGES:
            await self.load_group(group)

        if self._on_cycle_complete is not None:
            try:
                self._on_cycle_complete()
            except Exception:
                _logger.debug("on_cycle_complete callback failed", exc_info=True)

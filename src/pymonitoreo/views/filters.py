"""Filter and sort engine.

Every function here is pure: it reads the cache at call time and never
mutates it, so re-rendering always reflects the latest poll.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from pymonitoreo._constants import CHART_POINTS, LATEST_EVENTS_LIMIT, Group
from pymonitoreo.ingestion.normalize import display_string
from pymonitoreo.models import Record
from pymonitoreo.state.store import CacheStore
from pymonitoreo.state.view import FilterState


def sorted_history(records: Iterable[Record]) -> list[Record]:
    """Newest first; ties keep their fetch order."""
    return sorted(records, key=lambda record: record.sort_key, reverse=True)


def chart_window(records: Iterable[Record], limit: int = CHART_POINTS) -> list[Record]:
    """The *limit* most recent records, oldest first, as line charts plot them."""
    ascending = sorted(records, key=lambda record: record.sort_key)
    if limit <= 0:
        return []
    return ascending[-limit:]


def _matches(record: Record, filters: FilterState) -> bool:
    if filters.event_type and getattr(record, "tipo_evento", None) != filters.event_type:
        return False
    # Authorization is compared on the string form of the value, so a
    # missing value never matches an explicit "true"/"false".
    if filters.authorized != "" and display_string(getattr(record, "autorizado", None)) != filters.authorized:
        return False
    return True


def _filtered_sorted(store: CacheStore, group: Group, entity_id: str, filters: FilterState) -> list[Record]:
    history = store.get(group, entity_id).history
    return sorted_history(record for record in history if _matches(record, filters))


def filtered_history(store: CacheStore, group: Group, entity_id: str, filters: FilterState) -> list[Record]:
    """Filtered, newest-first history truncated to the entity's visible window."""
    window = store.get(group, entity_id).visible_window
    return _filtered_sorted(store, group, entity_id, filters)[:window]


def has_more(store: CacheStore, group: Group, entity_id: str, filters: FilterState) -> bool:
    """Whether records beyond the visible window match the filters."""
    window = store.get(group, entity_id).visible_window
    return len(_filtered_sorted(store, group, entity_id, filters)) > window


def latest_events(store: CacheStore, limit: int = LATEST_EVENTS_LIMIT) -> list[Record]:
    """Most recent camera events across every camera, interleaved by timestamp."""
    events: list[Record] = []
    for _entity_id, record in store.records(Group.CAMERAS):
        events.extend(record.history)
    return sorted_history(events)[:limit]


def device_visibility(row_texts: Sequence[str], term: str) -> list[bool]:
    """Case-insensitive substring match of *term* over each row's text, in row order."""
    needle = term.lower()
    return [needle in text.lower() for text in row_texts]


def count_by(records: Iterable[Record], attribute: str, value: Any) -> int:
    return sum(1 for record in records if getattr(record, attribute, None) == value)

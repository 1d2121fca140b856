"""In-memory cache of per-entity snapshots and histories.

This is the only component allowed to mutate cached telemetry.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field

from pymonitoreo._constants import GROUP_ENTITIES, WINDOW_STEP, Group
from pymonitoreo.models import Record


class EntityRecord(BaseModel):
    """Cached state for one ``(group, entity_id)``."""

    model_config = ConfigDict(extra="forbid")

    snapshot: Record | None = None
    history: tuple[Record, ...] = ()
    visible_window: int = Field(default=WINDOW_STEP, ge=WINDOW_STEP)


class CacheStore:
    """Per-entity cache keyed by ``(group, entity_id)``.

    Every operation is synchronous and visible to the next read. There is
    no versioning: when two refresh cycles overlap, the last write for an
    entity wins.
    """

    def __init__(self) -> None:
        self._entities: dict[tuple[Group, str], EntityRecord] = {}

    def get(self, group: Group, entity_id: str) -> EntityRecord:
        """Return the record for an entity, creating an empty one on first access."""
        key = (group, entity_id)
        record = self._entities.get(key)
        if record is None:
            record = EntityRecord()
            self._entities[key] = record
        return record

    def set_snapshot(self, group: Group, entity_id: str, snapshot: Record | None) -> None:
        self.get(group, entity_id).snapshot = snapshot

    def set_history(self, group: Group, entity_id: str, events: Iterable[Record]) -> None:
        """Replace the entity's history wholesale; the visible window is kept."""
        self.get(group, entity_id).history = tuple(events)

    def grow_window(self, group: Group, entity_id: str) -> int:
        """Grow the visible window by one step and return the new size."""
        record = self.get(group, entity_id)
        record.visible_window += WINDOW_STEP
        return record.visible_window

    def entities(self, group: Group) -> tuple[str, ...]:
        """Known entity IDs of *group*: the configured ones first, then any extra."""
        configured = GROUP_ENTITIES.get(group, ())
        extra = tuple(eid for g, eid in self._entities if g == group and eid not in configured)
        return configured + extra

    def records(self, group: Group) -> Iterator[tuple[str, EntityRecord]]:
        for entity_id in self.entities(group):
            yield entity_id, self.get(group, entity_id)

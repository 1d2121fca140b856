"""Dashboard-wide statistics."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pymonitoreo._constants import Group
from pymonitoreo.state.store import CacheStore


class DashboardStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_events: int = 0
    per_group_counts: dict[Group, int]


def dashboard_stats(store: CacheStore) -> DashboardStats:
    """Recompute statistics from the whole cache.

    Nothing is maintained incrementally, so partial updates from an
    in-flight refresh can never make the counters drift.
    """
    per_group = {
        group: sum(len(record.history) for _entity_id, record in store.records(group))
        for group in Group
    }
    return DashboardStats(total_events=per_group[Group.CAMERAS], per_group_counts=per_group)

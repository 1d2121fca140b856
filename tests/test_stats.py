from __future__ import annotations

from pymonitoreo._constants import Group
from pymonitoreo.ingestion.loader import parse_history
from pymonitoreo.state.store import CacheStore
from pymonitoreo.views.stats import dashboard_stats

from conftest import CAMERA_HISTORIES, DEVICES, ENERGY_HISTORY, ENV_HISTORY


def test_total_events_counts_camera_histories_only() -> None:
    store = CacheStore()
    for camera_id, history in CAMERA_HISTORIES.items():
        store.set_history(Group.CAMERAS, camera_id, parse_history(Group.CAMERAS, history))
    store.set_history(Group.ENVIRONMENTAL, "EST1", parse_history(Group.ENVIRONMENTAL, ENV_HISTORY))
    store.set_history(Group.ENERGY, "EV-001", parse_history(Group.ENERGY, ENERGY_HISTORY))
    store.set_history(Group.DEVICES, "dispositivos", parse_history(Group.DEVICES, DEVICES))

    stats = dashboard_stats(store)

    assert stats.total_events == 9
    assert stats.per_group_counts == {
        Group.CAMERAS: 9,
        Group.ENVIRONMENTAL: 3,
        Group.ENERGY: 2,
        Group.DEVICES: 2,
    }


def test_stats_follow_history_replacement() -> None:
    store = CacheStore()
    store.set_history(Group.CAMERAS, "LPR1", parse_history(Group.CAMERAS, CAMERA_HISTORIES["LPR1"]))
    assert dashboard_stats(store).total_events == 3

    store.set_history(Group.CAMERAS, "LPR1", [])

    assert dashboard_stats(store).total_events == 0


def test_empty_cache_has_zero_counts() -> None:
    stats = dashboard_stats(CacheStore())

    assert stats.total_events == 0
    assert set(stats.per_group_counts.values()) == {0}

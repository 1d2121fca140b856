"""pymonitoreo - Async polling and view engine for an access/environment/energy dashboard."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pymonitoreo")
except PackageNotFoundError:
    __version__ = "0+local"
from pymonitoreo._constants import Group, View
from pymonitoreo.config import MonitorConfig
from pymonitoreo.controller import ViewController
from pymonitoreo.dashboard import MonitorDashboard
from pymonitoreo.exceptions import (
    MonitorConfigError,
    MonitorError,
    MonitorPayloadError,
    MonitorTransportError,
)
from pymonitoreo.ingestion.loader import Loader
from pymonitoreo.ingestion.normalize import normalize
from pymonitoreo.models import CameraEvent, Device, EnergyReading, EnvironmentalReading
from pymonitoreo.scheduler import AutoRefreshScheduler
from pymonitoreo.state.store import CacheStore, EntityRecord
from pymonitoreo.state.view import FilterState, ViewState
from pymonitoreo.surface import RecordingSurface, RenderingSurface
from pymonitoreo.views.display import DisplayModel
from pymonitoreo.views.filters import filtered_history, has_more
from pymonitoreo.views.render import render_view
from pymonitoreo.views.stats import DashboardStats, dashboard_stats

__all__ = [
    "__version__",
    "AutoRefreshScheduler",
    "CacheStore",
    "CameraEvent",
    "DashboardStats",
    "Device",
    "DisplayModel",
    "EnergyReading",
    "EntityRecord",
    "EnvironmentalReading",
    "FilterState",
    "Group",
    "Loader",
    "MonitorConfig",
    "MonitorConfigError",
    "MonitorDashboard",
    "MonitorError",
    "MonitorPayloadError",
    "MonitorTransportError",
    "RecordingSurface",
    "RenderingSurface",
    "View",
    "ViewController",
    "ViewState",
    "dashboard_stats",
    "filtered_history",
    "has_more",
    "normalize",
    "render_view",
]

"""fleetview: live state, ordering and display preferences for a server-fleet dashboard."""

from fleetview.app import run_dashboard
from fleetview.config import Settings, load_settings
from fleetview.core.exceptions import (
    ConfigurationError,
    FleetviewError,
    RPCError,
    StorageError,
)
from fleetview.dashboard import DashboardRenderer, DashboardState, DashboardViewModel, NodeRowVM
from fleetview.expansion import ExpansionSet
from fleetview.hover import AsyncioScheduler, HoverIntentController, HoverPhase, Scheduler
from fleetview.live import LiveMetricsIndex
from fleetview.module import DashboardModule
from fleetview.observability import LogConfig
from fleetview.picker import NumberPicker
from fleetview.rpc import LiveFeedPoller, RPCClient, VersionInfo, fetch_version
from fleetview.sorting import SortEngine, SortField, SortOrder, SortState, order_nodes, toggle
from fleetview.storage import DocumentRoot, JsonFileStore, KeyValueStore, MemoryStore
from fleetview.theme import (
    DEFAULT_THEME,
    CardLayout,
    ColorTheme,
    ConfigStore,
    GraphDesign,
    ThemeConfig,
)
from fleetview.types import ZERO_RECORD, LiveRecord, LiveSnapshot, NodeInfo

__all__ = [
    "DEFAULT_THEME",
    "ZERO_RECORD",
    "AsyncioScheduler",
    "CardLayout",
    "ColorTheme",
    "ConfigStore",
    "ConfigurationError",
    "DashboardModule",
    "DashboardRenderer",
    "DashboardState",
    "DashboardViewModel",
    "DocumentRoot",
    "ExpansionSet",
    "FleetviewError",
    "GraphDesign",
    "HoverIntentController",
    "HoverPhase",
    "JsonFileStore",
    "KeyValueStore",
    "LiveFeedPoller",
    "LiveMetricsIndex",
    "LiveRecord",
    "LiveSnapshot",
    "LogConfig",
    "MemoryStore",
    "NodeInfo",
    "NodeRowVM",
    "NumberPicker",
    "RPCClient",
    "RPCError",
    "Scheduler",
    "Settings",
    "SortEngine",
    "SortField",
    "SortOrder",
    "SortState",
    "StorageError",
    "ThemeConfig",
    "VersionInfo",
    "fetch_version",
    "load_settings",
    "order_nodes",
    "run_dashboard",
    "toggle",
]

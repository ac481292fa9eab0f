"""Immutable ViewModels for dashboard rendering.

These frozen dataclasses represent snapshots of state ready for rendering.
They are produced by DashboardState.to_view_model() and consumed by the
components.
"""

from __future__ import annotations

from dataclasses import dataclass

from fleetview.rpc import VersionInfo
from fleetview.sorting import SortField
from fleetview.theme import ThemeConfig


@dataclass(frozen=True, slots=True)
class ColumnVM:
    """A sortable table header."""

    field: SortField
    title: str
    indicator: str = ""  # "▲", "▼" or ""


@dataclass(frozen=True, slots=True)
class NodeRowVM:
    """One node merged with its live record, usage already derived."""

    uuid: str
    name: str
    os: str
    region: str
    online: bool
    expanded: bool
    ping_open: bool
    cpu_percent: float  # 0-100
    ram_percent: float  # 0-100, 0 when capacity unknown
    disk_percent: float  # 0-100, 0 when capacity unknown
    ram_used: float
    mem_total: float
    disk_used: float
    disk_total: float
    net_up: float
    net_down: float
    net_total_up: float
    net_total_down: float
    uptime: float
    message: str | None
    price: float
    currency: str
    billing_cycle: int
    expired_at: str
    tags: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DashboardViewModel:
    """Complete snapshot for rendering the node table.

    This is the root ViewModel; NodeTable renders it, and the version
    panel shows ``version`` when present.
    """

    columns: tuple[ColumnVM, ...]
    rows: tuple[NodeRowVM, ...]
    theme: ThemeConfig
    version: VersionInfo | None
    online_count: int
    total_count: int
    ping_hours: int

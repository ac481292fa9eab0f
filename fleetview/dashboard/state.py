"""Dashboard state: the composition root.

Wires the roster, LiveMetricsIndex, ExpansionSet, SortEngine and the
ThemeConfig together and produces immutable ViewModels for rendering.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from loguru import logger

from fleetview.constants import (
    HOVER_CLOSE_DELAY,
    HOVER_OPEN_DELAY,
    PING_HOURS_DEFAULT,
    PING_HOURS_MAX,
    PING_HOURS_MIN,
)
from fleetview.expansion import ExpansionSet
from fleetview.hover import HoverIntentController, Scheduler
from fleetview.live import LiveMetricsIndex
from fleetview.picker import NumberPicker
from fleetview.rpc import RPCClient, VersionInfo, fetch_version
from fleetview.sorting import SortEngine, SortField, SortState
from fleetview.theme import ConfigStore, ThemeConfig
from fleetview.types import LiveSnapshot, NodeInfo
from fleetview.usage import clamp_usage, usage_percent

from .viewmodel import ColumnVM, DashboardViewModel, NodeRowVM

log = logger.bind(component="dashboard")

COLUMNS: tuple[tuple[SortField, str], ...] = (
    (SortField.NAME, "Name"),
    (SortField.OS, "OS"),
    (SortField.STATUS, "Status"),
    (SortField.CPU, "CPU"),
    (SortField.RAM, "RAM"),
    (SortField.DISK, "Disk"),
    (SortField.PRICE, "Price"),
    (SortField.NETWORK_UP, "Network"),
    (SortField.TOTAL_UP, "Traffic"),
)


def _to_node(entry: NodeInfo | Mapping[str, Any]) -> NodeInfo | None:
    if isinstance(entry, NodeInfo):
        return entry
    if not isinstance(entry, Mapping) or not entry.get("uuid"):
        log.debug("Skipping roster entry without uuid: {entry}", entry=entry)
        return None
    return NodeInfo.from_dict(entry)


class DashboardState:
    """State behind one mounted node table.

    Roster and live data are replaced wholesale by refreshes; sort state,
    expanded rows and the ping-hours picker belong to the view and are
    never touched by refreshes. The theme is loaded from the ConfigStore
    once and replaced by a new record on every change. Ping-chart popovers
    are created per node on demand and disposed when the node leaves the
    roster.
    """

    def __init__(
        self,
        config_store: ConfigStore,
        *,
        ping_hours_default: int = PING_HOURS_DEFAULT,
        ping_hours_max: int = PING_HOURS_MAX,
        hover_open_delay: float = HOVER_OPEN_DELAY,
        hover_close_delay: float = HOVER_CLOSE_DELAY,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._config_store = config_store
        self._hover_delays = (hover_open_delay, hover_close_delay)
        self._scheduler = scheduler
        self._popovers: dict[str, HoverIntentController] = {}
        self._roster: tuple[NodeInfo, ...] = ()
        self._theme = config_store.load()
        self._version: VersionInfo | None = None

        self.live = LiveMetricsIndex()
        self.expanded = ExpansionSet()
        self.sort = SortEngine()
        self.ping_hours = NumberPicker(
            minimum=PING_HOURS_MIN,
            maximum=ping_hours_max,
            default=ping_hours_default,
        )

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def roster(self) -> tuple[NodeInfo, ...]:
        return self._roster

    @property
    def theme(self) -> ThemeConfig:
        return self._theme

    @property
    def version(self) -> VersionInfo | None:
        return self._version

    @property
    def sort_state(self) -> SortState:
        return self.sort.state

    # =========================================================================
    # Refreshes from collaborators
    # =========================================================================

    def set_roster(self, nodes: Iterable[NodeInfo | Mapping[str, Any]]) -> None:
        seen: dict[str, NodeInfo] = {}
        for node in map(_to_node, nodes):
            if node is None:
                continue
            if node.uuid in seen:
                log.bind(node=node.uuid).debug("Duplicate roster entry ignored")
                continue
            seen[node.uuid] = node
        roster = tuple(seen.values())
        for uuid in self._popovers.keys() - seen.keys():
            self._popovers.pop(uuid).dispose()
        self._roster = roster
        log.debug("Roster -> {n} nodes", n=len(roster))

    def apply_live(self, payload: Mapping[str, Any] | None) -> LiveSnapshot:
        return self.live.apply(payload)

    async def refresh_version(self, rpc: RPCClient, **retry: Any) -> VersionInfo | None:
        self._version = await fetch_version(rpc, **retry)
        return self._version

    # =========================================================================
    # User actions
    # =========================================================================

    def click_column(self, field: SortField | str) -> SortState:
        return self.sort.click(field)

    def toggle_row(self, uuid: str) -> bool:
        return self.expanded.toggle(uuid)

    def set_theme(self, field: str, value: str) -> ThemeConfig:
        self._theme = self._config_store.set(field, value)
        return self._theme

    def ping_popover(
        self,
        uuid: str,
        on_change: Callable[[bool], None] | None = None,
    ) -> HoverIntentController:
        """Hover controller for the node's mini ping chart, created on first use.

        Passing ``on_change`` for an existing controller replaces its
        listener; omitting it keeps the current one.
        """
        popover = self._popovers.get(uuid)
        if popover is not None and not popover.disposed:
            if on_change is not None:
                popover.on_change = on_change
        else:
            open_delay, close_delay = self._hover_delays
            popover = HoverIntentController(
                self._scheduler,
                open_delay=open_delay,
                close_delay=close_delay,
                on_change=on_change,
            )
            self._popovers[uuid] = popover
        return popover

    def dispose(self) -> None:
        """Cancel every pending popover timer."""
        for popover in self._popovers.values():
            popover.dispose()
        self._popovers.clear()

    # =========================================================================
    # ViewModels
    # =========================================================================

    def rows(self) -> tuple[NodeRowVM, ...]:
        by_uuid = {node.uuid: node for node in self._roster}
        return tuple(
            self._build_row(by_uuid[uuid])
            for uuid in self.sort.order(self._roster, self.live)
        )

    def to_view_model(self) -> DashboardViewModel:
        online = sum(1 for node in self._roster if self.live.is_online(node.uuid))
        return DashboardViewModel(
            columns=tuple(
                ColumnVM(field=field, title=title, indicator=self.sort.indicator(field))
                for field, title in COLUMNS
            ),
            rows=self.rows(),
            theme=self._theme,
            version=self._version,
            online_count=online,
            total_count=len(self._roster),
            ping_hours=self.ping_hours.value,
        )

    def _build_row(self, node: NodeInfo) -> NodeRowVM:
        record = self.live.lookup(node.uuid)
        popover = self._popovers.get(node.uuid)
        return NodeRowVM(
            uuid=node.uuid,
            name=node.name,
            os=node.os,
            region=node.region,
            online=self.live.is_online(node.uuid),
            expanded=self.expanded.is_expanded(node.uuid),
            ping_open=popover is not None and popover.is_open,
            cpu_percent=clamp_usage(record.cpu_usage),
            ram_percent=clamp_usage(usage_percent(record.ram_used, node.mem_total)),
            disk_percent=clamp_usage(usage_percent(record.disk_used, node.disk_total)),
            ram_used=record.ram_used,
            mem_total=node.mem_total,
            disk_used=record.disk_used,
            disk_total=node.disk_total,
            net_up=record.net_up,
            net_down=record.net_down,
            net_total_up=record.net_total_up,
            net_total_down=record.net_total_down,
            uptime=record.uptime,
            message=record.message,
            price=node.price,
            currency=node.currency,
            billing_cycle=node.billing_cycle,
            expired_at=node.expired_at,
            tags=node.tag_list,
        )

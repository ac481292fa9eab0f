"""Node table component."""

from __future__ import annotations

from rich.table import Table
from rich.text import Text

from fleetview.theme import GraphDesign
from fleetview.utils.format import format_bytes, format_price, format_uptime

from ..viewmodel import DashboardViewModel, NodeRowVM
from .usage import UsageGauge

_OFFLINE_STYLE = "dim"


def _name_cell(row: NodeRowVM) -> Text:
    text = Text(row.name or row.uuid[:8], style="bold")
    if row.ping_open:
        text.append(" ◷", style="cyan")
    text.append("\n")
    if row.online:
        text.append(format_uptime(row.uptime), style="dim")
    else:
        text.append("Offline", style="dim")
    return text


def _status_cell(row: NodeRowVM) -> Text:
    text = Text()
    if row.online:
        text.append("● ", style="green")
        text.append("online", style="green")
    else:
        text.append("● ", style="red")
        text.append("offline", style="red")
    if row.message:
        text.append(" !", style="bold red")
    return text


def _network_cell(row: NodeRowVM) -> Text:
    text = Text()
    text.append(f"↑{format_bytes(row.net_up)}/s", style="blue")
    text.append(" / ", style="dim")
    text.append(f"↓{format_bytes(row.net_down)}/s", style="green")
    return text


def _traffic_cell(row: NodeRowVM) -> Text:
    return Text(
        f"↑{format_bytes(row.net_total_up)} / ↓{format_bytes(row.net_total_down)}",
        style="dim",
    )


def _details(row: NodeRowVM, ping_hours: int) -> Text:
    """Expanded-row detail line."""
    text = Text()
    parts = [
        f"region {row.region or '-'}",
        f"ram {format_bytes(row.ram_used)} / {format_bytes(row.mem_total)}",
        f"disk {format_bytes(row.disk_used)} / {format_bytes(row.disk_total)}",
        f"ping window {ping_hours}h",
    ]
    if row.expired_at:
        parts.append(f"expires {row.expired_at}")
    if row.tags:
        parts.append("tags " + ", ".join(row.tags))
    text.append(" · ".join(parts), style="dim")
    if row.message:
        text.append("\n")
        text.append(row.message, style="red")
    return text


class NodeTable:
    """Renders the sorted node rows as a Rich Table.

    Layout per node:
        ▸ name/uptime | os | status | cpu | ram | disk | price | network | traffic
    Expanded nodes get one extra detail row beneath.
    """

    def __init__(self, vm: DashboardViewModel) -> None:
        self._vm = vm

    def render(self) -> Table:
        vm = self._vm
        design: GraphDesign = vm.theme.graph_design

        table = Table(expand=False, show_lines=False, header_style="bold")
        table.add_column("", width=1)
        for column in vm.columns:
            header = f"{column.title} {column.indicator}" if column.indicator else column.title
            table.add_column(header, justify="center", no_wrap=True)

        for row in vm.rows:
            table.add_row(
                "▾" if row.expanded else "▸",
                _name_cell(row),
                row.os or "-",
                _status_cell(row),
                UsageGauge(row.cpu_percent, "cpu", design).render(),
                UsageGauge(row.ram_percent, "ram", design).render(),
                UsageGauge(row.disk_percent, "disk", design).render(),
                format_price(row.price, row.currency, row.billing_cycle),
                _network_cell(row),
                _traffic_cell(row),
                style=None if row.online else _OFFLINE_STYLE,
            )
            if row.expanded:
                table.add_row("", _details(row, vm.ping_hours))

        return table

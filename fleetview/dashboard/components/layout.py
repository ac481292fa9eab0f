"""Dashboard layout component.

Assembles the summary line, node table and version panel.
"""

from __future__ import annotations

from rich.console import Group
from rich.text import Text

from fleetview.rpc import VersionInfo

from ..viewmodel import DashboardViewModel
from .table import NodeTable


class VersionPanel:
    """Build info footer. Renders nothing when the version is unknown."""

    def __init__(self, version: VersionInfo | None) -> None:
        self._version = version

    def render(self) -> Text:
        text = Text()
        if self._version is None:
            return text
        text.append("Version: ", style="dim")
        text.append(self._version.version, style="bold")
        text.append("  Commit: ", style="dim")
        text.append(self._version.hash, style="cyan")
        return text


class DashboardLayout:
    """Layout structure:
    1. Summary (online / total, theme)
    2. Node table
    3. Version panel
    """

    def __init__(self, vm: DashboardViewModel) -> None:
        self._vm = vm

    def render(self) -> Group:
        vm = self._vm
        summary = Text()
        summary.append(f"{vm.online_count}", style="green bold")
        summary.append(f"/{vm.total_count} online", style="dim")
        summary.append(f"  theme {vm.theme.color_theme.value}", style="dim")
        return Group(summary, NodeTable(vm).render(), VersionPanel(vm.version).render())

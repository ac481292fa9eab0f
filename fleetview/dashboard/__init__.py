"""Dashboard module: live node table state and Rich rendering.

Usage:
    store = ConfigStore(JsonFileStore(), DocumentRoot())
    state = DashboardState(store)
    state.set_roster(nodes)
    state.apply_live(payload)

    renderer = DashboardRenderer()
    renderer.start(state)
"""

from .renderer import DashboardRenderable, DashboardRenderer
from .state import COLUMNS, DashboardState
from .viewmodel import ColumnVM, DashboardViewModel, NodeRowVM

__all__ = [
    "COLUMNS",
    "ColumnVM",
    "DashboardRenderable",
    "DashboardRenderer",
    "DashboardState",
    "DashboardViewModel",
    "NodeRowVM",
]

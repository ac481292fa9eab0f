"""Dashboard UI components.

Reusable Rich components for dashboard rendering.
"""

from .layout import DashboardLayout, VersionPanel
from .table import NodeTable
from .usage import UsageGauge, gauge_style

__all__ = [
    "DashboardLayout",
    "NodeTable",
    "UsageGauge",
    "VersionPanel",
    "gauge_style",
]

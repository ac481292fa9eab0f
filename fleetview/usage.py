"""Usage derivation: percentages from raw counters and threshold colours."""

from __future__ import annotations

import math
from typing import Literal, TypeAlias

UsageColor: TypeAlias = Literal["green", "orange", "red"]

WARN_THRESHOLD = 60.0
CRITICAL_THRESHOLD = 80.0


def usage_percent(used: float, total: float) -> float:
    """Return used/total as a percentage.

    An unknown capacity (total of 0) yields 0%, never a division error,
    NaN or infinity.
    """
    if not total:
        return 0.0
    pct = used / total * 100
    return pct if math.isfinite(pct) else 0.0


def clamp_usage(value: float, maximum: float = 100.0) -> float:
    """Clamp a usage value into [0, maximum]. NaN becomes 0."""
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), maximum)


def usage_color(value: float) -> UsageColor:
    """Return color based on usage: green < 60, orange 60-80, red >= 80."""
    if value >= CRITICAL_THRESHOLD:
        return "red"
    if value >= WARN_THRESHOLD:
        return "orange"
    return "green"

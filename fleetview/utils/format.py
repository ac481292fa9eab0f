"""Display formatting for byte counts, uptimes and prices."""

from __future__ import annotations

_BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")

_CYCLES = {30: "mo", 31: "mo", 90: "qtr", 92: "qtr", 180: "6mo", 365: "yr", 366: "yr"}


def format_bytes(value: float) -> str:
    """Format a byte count with binary units: 1536 -> '1.5 KB'."""
    size = max(0.0, float(value))
    for unit in _BYTE_UNITS[:-1]:
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} {_BYTE_UNITS[-1]}"


def format_uptime(seconds: float) -> str:
    """Format seconds as '3d 4h', '4h 12m' or '12m'."""
    total = int(max(0.0, seconds))
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes = rem // 60
    if days:
        return f"{days}d {hours}h"
    if hours:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_price(price: float, currency: str = "$", billing_cycle: int = 0) -> str:
    """Format a price tag: '$5.00/mo'. Negative prices mean free."""
    if price < 0:
        return "Free"
    if price == 0:
        return "-"
    tag = f"{currency}{price:.2f}"
    if billing_cycle > 0:
        tag += f"/{_CYCLES.get(billing_cycle, f'{billing_cycle}d')}"
    return tag

"""Node ordering with a tri-state per-column sort.

SortEngine tells this story per column: default → asc → desc → default.

Architecture:
- Model:      SortField / SortOrder enums, frozen SortState
- Transition: explicit table, pure toggle()
- Ordering:   one key function per column, stable sorted()
"""

from __future__ import annotations

import locale
import math
import unicodedata
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import TypeAlias

from loguru import logger

from fleetview.live import LiveMetricsIndex
from fleetview.types import LiveRecord, NodeInfo
from fleetview.usage import usage_percent

log = logger.bind(component="sorting")


# =============================================================================
# Model
# =============================================================================


class SortField(StrEnum):
    NAME = "name"
    OS = "os"
    STATUS = "status"
    CPU = "cpu"
    RAM = "ram"
    DISK = "disk"
    PRICE = "price"
    NETWORK_UP = "networkUp"
    NETWORK_DOWN = "networkDown"
    TOTAL_UP = "totalUp"
    TOTAL_DOWN = "totalDown"


class SortOrder(StrEnum):
    DEFAULT = "default"
    ASC = "asc"
    DESC = "desc"


_NEXT_ORDER: MappingProxyType[SortOrder, SortOrder] = MappingProxyType({
    SortOrder.DEFAULT: SortOrder.ASC,
    SortOrder.ASC: SortOrder.DESC,
    SortOrder.DESC: SortOrder.DEFAULT,
})


@dataclass(frozen=True, slots=True)
class SortState:
    """Active sort column and direction.

    ``order == DEFAULT`` if and only if ``field is None``.
    """

    field: SortField | None = None
    order: SortOrder = SortOrder.DEFAULT

    def __post_init__(self) -> None:
        if (self.field is None) != (self.order is SortOrder.DEFAULT):
            raise ValueError(
                f"Inconsistent sort state: field={self.field!r} order={self.order!r}"
            )

    @property
    def is_default(self) -> bool:
        return self.field is None


NEUTRAL = SortState()


# --- Transitions (pure) ---


def toggle(state: SortState, field: SortField) -> SortState:
    """Apply one header click on ``field``.

    A different column starts at ascending, discarding the previous
    column's phase. The active column advances through the table.
    """
    if state.field is not field:
        return SortState(field, SortOrder.ASC)
    next_order = _NEXT_ORDER[state.order]
    if next_order is SortOrder.DEFAULT:
        return NEUTRAL
    return SortState(field, next_order)


def indicator(state: SortState, field: SortField) -> str:
    """Header glyph for ``field``: ▲ ascending, ▼ descending, blank otherwise."""
    if state.field is not field:
        return ""
    return "▲" if state.order is SortOrder.ASC else "▼"


# =============================================================================
# Ordering
# =============================================================================

SortKey: TypeAlias = Callable[[NodeInfo, LiveRecord, bool], object]


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def _collate(text: str) -> tuple[str, str, str]:
    """Accent- and case-insensitive key, independent of the process locale.

    strxfrm still refines the order when the host application has set
    LC_COLLATE. Accented and cased forms then break ties.
    """
    return (locale.strxfrm(_fold(text)), text.casefold(), text)


_KEYS: MappingProxyType[SortField, SortKey] = MappingProxyType({
    SortField.NAME: lambda node, _rec, _on: _collate(node.name),
    SortField.OS: lambda node, _rec, _on: _collate(node.os),
    SortField.STATUS: lambda _node, _rec, online: not online,
    SortField.CPU: lambda _node, rec, _on: _finite(rec.cpu_usage),
    SortField.RAM: lambda node, rec, _on: usage_percent(rec.ram_used, node.mem_total),
    SortField.DISK: lambda node, rec, _on: usage_percent(rec.disk_used, node.disk_total),
    SortField.PRICE: lambda node, _rec, _on: _finite(node.price),
    SortField.NETWORK_UP: lambda _node, rec, _on: _finite(rec.net_up),
    SortField.NETWORK_DOWN: lambda _node, rec, _on: _finite(rec.net_down),
    SortField.TOTAL_UP: lambda _node, rec, _on: _finite(rec.net_total_up),
    SortField.TOTAL_DOWN: lambda _node, rec, _on: _finite(rec.net_total_down),
})


def order_nodes(
    roster: Iterable[NodeInfo],
    index: LiveMetricsIndex,
    state: SortState,
) -> tuple[str, ...]:
    """Return node uuids in display order.

    With no active column nodes are ordered online first, then by weight.
    Otherwise the column's key decides, reversed for descending. Python's
    sort is stable, so ties keep roster order in both directions.
    """
    nodes = list(roster)

    if state.field is None:
        ordered = sorted(
            nodes,
            key=lambda n: (not index.is_online(n.uuid), _finite(n.weight)),
        )
    else:
        key = _KEYS[state.field]
        ordered = sorted(
            nodes,
            key=lambda n: key(n, index.lookup(n.uuid), index.is_online(n.uuid)),
            reverse=state.order is SortOrder.DESC,
        )

    return tuple(n.uuid for n in ordered)


class SortEngine:
    """Holds the view's SortState and orders rosters with it."""

    __slots__ = ("_state",)

    def __init__(self, state: SortState = NEUTRAL) -> None:
        self._state = state

    @property
    def state(self) -> SortState:
        return self._state

    def click(self, field: SortField | str) -> SortState:
        """Handle a header click; accepts the enum or its wire name."""
        self._state = toggle(self._state, SortField(field))
        log.debug(
            "Sort -> field={field} order={order}",
            field=self._state.field,
            order=self._state.order,
        )
        return self._state

    def reset(self) -> None:
        self._state = NEUTRAL

    def indicator(self, field: SortField) -> str:
        return indicator(self._state, field)

    def order(self, roster: Iterable[NodeInfo], index: LiveMetricsIndex) -> tuple[str, ...]:
        return order_nodes(roster, index, self._state)

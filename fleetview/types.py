"""Core data types: roster entries, live records and live snapshots.

All types are frozen. Roster entries and live snapshots are owned by the
external data-fetch layer; fleetview only ever replaces them wholesale.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from loguru import logger

log = logger.bind(component="types")


def _number(value: Any, default: float = 0.0) -> float:
    """Coerce a feed value to a finite float, falling back to default."""
    if isinstance(value, bool):
        return float(value)
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def _counter(value: Any) -> float:
    return max(0.0, _number(value))


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    return value if isinstance(value, Mapping) else {}


@dataclass(frozen=True, slots=True)
class NodeInfo:
    """A roster entry describing one monitored node."""

    uuid: str
    name: str = ""
    os: str = ""
    region: str = ""
    mem_total: float = 0.0  # bytes, 0 = unknown
    disk_total: float = 0.0  # bytes, 0 = unknown
    price: float = 0.0
    billing_cycle: int = 0  # days
    expired_at: str = ""
    currency: str = "$"
    tags: str = ""
    weight: int = 0

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> NodeInfo:
        return cls(
            uuid=str(raw["uuid"]),
            name=str(raw.get("name") or ""),
            os=str(raw.get("os") or ""),
            region=str(raw.get("region") or ""),
            mem_total=_counter(raw.get("mem_total")),
            disk_total=_counter(raw.get("disk_total")),
            price=_number(raw.get("price")),
            billing_cycle=int(_number(raw.get("billing_cycle"))),
            expired_at=str(raw.get("expired_at") or ""),
            currency=str(raw.get("currency") or "$"),
            tags=str(raw.get("tags") or ""),
            weight=int(_number(raw.get("weight"))),
        )

    @property
    def tag_list(self) -> tuple[str, ...]:
        """Tags split on ';' with blanks dropped."""
        return tuple(t.strip() for t in self.tags.split(";") if t.strip())


@dataclass(frozen=True, slots=True)
class LiveRecord:
    """Latest live-metrics snapshot for one node."""

    cpu_usage: float = 0.0  # percent, 0-100
    ram_used: float = 0.0  # bytes
    disk_used: float = 0.0  # bytes
    net_up: float = 0.0  # bytes/s
    net_down: float = 0.0  # bytes/s
    net_total_up: float = 0.0  # bytes
    net_total_down: float = 0.0  # bytes
    uptime: float = 0.0  # seconds
    message: str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> LiveRecord:
        """Build a record from the feed's nested shape.

        Missing sections and fields default to zero; counters are clamped
        to be non-negative and CPU usage into [0, 100].
        """
        network = _section(raw, "network")
        message = raw.get("message")
        return cls(
            cpu_usage=min(100.0, _counter(_section(raw, "cpu").get("usage"))),
            ram_used=_counter(_section(raw, "ram").get("used")),
            disk_used=_counter(_section(raw, "disk").get("used")),
            net_up=_counter(network.get("up")),
            net_down=_counter(network.get("down")),
            net_total_up=_counter(network.get("totalUp")),
            net_total_down=_counter(network.get("totalDown")),
            uptime=_counter(raw.get("uptime")),
            message=str(message) if message else None,
        )


ZERO_RECORD = LiveRecord()


@dataclass(frozen=True, slots=True)
class LiveSnapshot:
    """An atomic view of the live feed: online set plus per-node records."""

    online: frozenset[str] = frozenset()
    data: Mapping[str, LiveRecord] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> LiveSnapshot:
        """Parse a feed payload of the form ``{"online": [...], "data": {...}}``.

        A missing or null ``online``/``data`` is treated as empty. Records
        that are not mappings are skipped.
        """
        if not isinstance(payload, Mapping):
            return cls()

        raw_online = payload.get("online")
        online: frozenset[str] = frozenset()
        if isinstance(raw_online, (list, tuple, set, frozenset)):
            online = frozenset(str(uuid) for uuid in raw_online)

        raw_data = payload.get("data")
        data: dict[str, LiveRecord] = {}
        if isinstance(raw_data, Mapping):
            for uuid, raw in raw_data.items():
                if not isinstance(raw, Mapping):
                    log.debug("Skipping malformed live record for {node}", node=uuid)
                    continue
                data[str(uuid)] = LiveRecord.from_dict(raw)

        return cls(online=online, data=MappingProxyType(data))

"""Live metrics index.

Read view over the latest live snapshot. The snapshot is replaced as a
whole whenever the feed delivers new data, so readers always observe
either the old or the new snapshot, never a mix.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from fleetview.types import ZERO_RECORD, LiveRecord, LiveSnapshot

log = logger.bind(component="live")


class LiveMetricsIndex:
    """Latest live metrics keyed by node uuid, plus the online set.

    Example:
        index = LiveMetricsIndex()
        index.apply({"online": ["a"], "data": {"a": {"cpu": {"usage": 12.5}}}})
        index.is_online("a")          # True
        index.lookup("b").cpu_usage   # 0.0 (zero record)
    """

    __slots__ = ("_snapshot",)

    def __init__(self, snapshot: LiveSnapshot | None = None) -> None:
        self._snapshot = snapshot or LiveSnapshot()

    @property
    def snapshot(self) -> LiveSnapshot:
        return self._snapshot

    @property
    def online_count(self) -> int:
        return len(self._snapshot.online)

    def lookup(self, uuid: str) -> LiveRecord:
        """Return the live record for uuid, or the zero record if none exists."""
        return self._snapshot.data.get(uuid, ZERO_RECORD)

    def is_online(self, uuid: str) -> bool:
        """True iff uuid is in the current online set.

        A stale record for an offline node does not make it online.
        """
        return uuid in self._snapshot.online

    def replace(self, snapshot: LiveSnapshot) -> None:
        """Swap in a new snapshot atomically."""
        self._snapshot = snapshot
        log.trace(
            "Snapshot replaced: online={online} records={records}",
            online=len(snapshot.online),
            records=len(snapshot.data),
        )

    def apply(self, payload: Mapping[str, Any] | None) -> LiveSnapshot:
        """Parse a raw feed payload and swap it in. Returns the new snapshot."""
        snapshot = LiveSnapshot.from_payload(payload)
        self.replace(snapshot)
        return snapshot

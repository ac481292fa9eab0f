"""Row expansion tracking for the node table."""

from __future__ import annotations

from collections.abc import Iterator


class ExpansionSet:
    """Set of expanded node uuids, living as long as the current view.

    Only explicit user toggles change membership; live-data and roster
    refreshes never touch it.
    """

    __slots__ = ("_expanded",)

    def __init__(self) -> None:
        self._expanded: set[str] = set()

    def toggle(self, uuid: str) -> bool:
        """Flip membership of uuid. Returns True if the row is now expanded."""
        if uuid in self._expanded:
            self._expanded.discard(uuid)
            return False
        self._expanded.add(uuid)
        return True

    def is_expanded(self, uuid: str) -> bool:
        return uuid in self._expanded

    def clear(self) -> None:
        self._expanded.clear()

    def __contains__(self, uuid: object) -> bool:
        return uuid in self._expanded

    def __iter__(self) -> Iterator[str]:
        return iter(frozenset(self._expanded))

    def __len__(self) -> int:
        return len(self._expanded)

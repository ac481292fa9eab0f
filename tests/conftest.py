from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from fleetview.dashboard.state import DashboardState
from fleetview.storage import DocumentRoot, MemoryStore
from fleetview.theme import ConfigStore


# Float sums like 2.999 + 0.001 may land a hair short of 3.0
_EPSILON = 1e-9


class FakeTimer:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual clock: timers only fire inside advance()."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.pending if t.due <= target + _EPSILON]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.timers.remove(timer)
            self.now = timer.due
            timer.callback()
        self.now = target


class FakeRPC:
    """Answers calls from a method → response table; exceptions are raised."""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[str] = []

    async def call(self, method: str) -> Any:
        self.calls.append(method)
        response = self.responses.get(method)
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response()
        return response


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def storage() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def document() -> DocumentRoot:
    return DocumentRoot()


@pytest.fixture
def config_store(storage: MemoryStore, document: DocumentRoot) -> ConfigStore:
    return ConfigStore(storage, document)


@pytest.fixture
def state(config_store: ConfigStore) -> DashboardState:
    return DashboardState(config_store)


def live_record(
    cpu: float = 0.0,
    ram: float = 0.0,
    disk: float = 0.0,
    up: float = 0.0,
    down: float = 0.0,
    total_up: float = 0.0,
    total_down: float = 0.0,
    uptime: float = 0.0,
    message: str | None = None,
) -> dict[str, Any]:
    record: dict[str, Any] = {
        "cpu": {"usage": cpu},
        "ram": {"used": ram},
        "disk": {"used": disk},
        "network": {"up": up, "down": down, "totalUp": total_up, "totalDown": total_down},
        "uptime": uptime,
    }
    if message is not None:
        record["message"] = message
    return record

"""Hover intent: debounced open/close for expensive popovers.

HoverIntentController tells this story: closed → opening → open → closing → closed.

Pointer dwell opens the popover after ``open_delay``; leaving closes it
after a short ``close_delay`` grace period so the pointer can travel into
the popover content. Clicks bypass both delays.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from enum import Enum, auto
from typing import Protocol

from loguru import logger

from fleetview.constants import HOVER_CLOSE_DELAY, HOVER_OPEN_DELAY

log = logger.bind(component="hover")


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs a callback once after a delay, returning a cancellation handle."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    Uses the running loop at call time unless a loop is given explicitly.
    """

    __slots__ = ("_loop",)

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class HoverPhase(Enum):
    CLOSED = auto()
    OPENING = auto()
    OPEN = auto()
    CLOSING = auto()


class _Pending:
    """One scheduled transition. Cancelling it also disarms the callback."""

    __slots__ = ("handle", "live")

    def __init__(self) -> None:
        self.handle: Cancellable | None = None
        self.live = True

    def cancel(self) -> None:
        self.live = False
        if self.handle is not None:
            self.handle.cancel()


class HoverIntentController:
    """Turns enter/leave/click events into a debounced open flag.

    At most one open timer and one close timer are pending at any time;
    starting either cancels the previous one of the same kind. After
    dispose() every pending timer is cancelled and further input is
    ignored.

    Example:
        hover = HoverIntentController(on_change=popover.set_visible)
        hover.enter()    # opens after 3s unless left first
        hover.leave()    # closes after 200ms unless re-entered
        hover.dispose()  # on unmount
    """

    def __init__(
        self,
        scheduler: Scheduler | None = None,
        *,
        open_delay: float = HOVER_OPEN_DELAY,
        close_delay: float = HOVER_CLOSE_DELAY,
        on_change: Callable[[bool], None] | None = None,
    ) -> None:
        self._scheduler = scheduler or AsyncioScheduler()
        self._open_delay = open_delay
        self._close_delay = close_delay
        self._on_change = on_change
        self._phase = HoverPhase.CLOSED
        self._visible = False
        self._open_timer: _Pending | None = None
        self._close_timer: _Pending | None = None
        self._disposed = False

    @property
    def phase(self) -> HoverPhase:
        return self._phase

    @property
    def is_open(self) -> bool:
        return self._visible

    @property
    def has_pending(self) -> bool:
        return self._open_timer is not None or self._close_timer is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def on_change(self) -> Callable[[bool], None] | None:
        return self._on_change

    @on_change.setter
    def on_change(self, listener: Callable[[bool], None] | None) -> None:
        self._on_change = listener

    # =========================================================================
    # Inputs
    # =========================================================================

    def enter(self) -> None:
        if self._disposed:
            return
        match self._phase:
            case HoverPhase.CLOSED | HoverPhase.OPENING:
                self._phase = HoverPhase.OPENING
                self._start_open_timer()
            case HoverPhase.CLOSING:
                self._cancel_close_timer()
                if self._visible:
                    self._phase = HoverPhase.OPEN
                else:
                    self._phase = HoverPhase.OPENING
                    self._start_open_timer()
            case HoverPhase.OPEN:
                pass

    def leave(self) -> None:
        if self._disposed or self._phase is HoverPhase.CLOSED:
            return
        self._cancel_open_timer()
        self._phase = HoverPhase.CLOSING
        self._start_close_timer()

    def click(self) -> None:
        if self._disposed:
            return
        self._cancel_timers()
        self._settle(not self._visible)

    def set_open(self, value: bool) -> None:
        """External control, e.g. the popover closing itself on Escape."""
        if self._disposed:
            return
        self._cancel_timers()
        self._settle(value)

    def dispose(self) -> None:
        """Cancel all pending timers. Safe to call more than once."""
        self._cancel_timers()
        self._disposed = True

    def __enter__(self) -> HoverIntentController:
        return self

    def __exit__(self, *_: object) -> None:
        self.dispose()

    # =========================================================================
    # Timers
    # =========================================================================

    def _schedule(self, delay: float, fire: Callable[[_Pending], None]) -> _Pending:
        pending = _Pending()

        def callback() -> None:
            if pending.live and not self._disposed:
                pending.live = False
                fire(pending)

        pending.handle = self._scheduler.call_later(delay, callback)
        return pending

    def _start_open_timer(self) -> None:
        self._cancel_open_timer()
        self._open_timer = self._schedule(self._open_delay, self._fire_open)

    def _start_close_timer(self) -> None:
        self._cancel_close_timer()
        self._close_timer = self._schedule(self._close_delay, self._fire_close)

    def _cancel_open_timer(self) -> None:
        if self._open_timer is not None:
            self._open_timer.cancel()
            self._open_timer = None

    def _cancel_close_timer(self) -> None:
        if self._close_timer is not None:
            self._close_timer.cancel()
            self._close_timer = None

    def _cancel_timers(self) -> None:
        self._cancel_open_timer()
        self._cancel_close_timer()

    def _fire_open(self, pending: _Pending) -> None:
        if pending is not self._open_timer:
            return
        self._open_timer = None
        self._settle(True)

    def _fire_close(self, pending: _Pending) -> None:
        if pending is not self._close_timer:
            return
        self._close_timer = None
        self._settle(False)

    def _settle(self, visible: bool) -> None:
        self._phase = HoverPhase.OPEN if visible else HoverPhase.CLOSED
        if visible == self._visible:
            return
        self._visible = visible
        log.trace("Hover popover -> {state}", state="open" if visible else "closed")
        if self._on_change is not None:
            self._on_change(visible)

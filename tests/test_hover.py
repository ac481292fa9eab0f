"""Tests for the hover-intent state machine."""

from __future__ import annotations

import asyncio

import pytest

from fleetview.hover import AsyncioScheduler, HoverIntentController, HoverPhase
from tests.conftest import FakeScheduler

pytestmark = [pytest.mark.unit, pytest.mark.xdist_group("unit")]


@pytest.fixture
def changes() -> list[bool]:
    return []


@pytest.fixture
def hover(scheduler: FakeScheduler, changes: list[bool]) -> HoverIntentController:
    return HoverIntentController(scheduler, on_change=changes.append)


class TestOpening:
    def test_starts_closed(self, hover: HoverIntentController):
        assert hover.phase is HoverPhase.CLOSED
        assert not hover.is_open
        assert not hover.has_pending

    def test_dwell_opens_after_delay_exactly_once(
        self, hover: HoverIntentController, scheduler: FakeScheduler, changes: list[bool],
    ):
        hover.enter()
        assert hover.phase is HoverPhase.OPENING

        scheduler.advance(2.999)
        assert not hover.is_open

        scheduler.advance(0.001)
        assert hover.is_open
        assert hover.phase is HoverPhase.OPEN

        scheduler.advance(60)
        assert changes == [True]

    def test_quick_pass_never_opens(
        self, hover: HoverIntentController, scheduler: FakeScheduler, changes: list[bool],
    ):
        hover.enter()
        scheduler.advance(0.1)
        hover.leave()
        scheduler.advance(10)
        assert not hover.is_open
        assert hover.phase is HoverPhase.CLOSED
        assert changes == []

    def test_enter_while_open_is_noop(
        self, hover: HoverIntentController, scheduler: FakeScheduler, changes: list[bool],
    ):
        hover.enter()
        scheduler.advance(3)
        hover.enter()
        assert not hover.has_pending
        assert changes == [True]

    def test_re_enter_while_opening_restarts_timer(
        self, hover: HoverIntentController, scheduler: FakeScheduler,
    ):
        hover.enter()
        scheduler.advance(2)
        hover.enter()
        assert len(scheduler.pending) == 1
        scheduler.advance(2)
        assert not hover.is_open
        scheduler.advance(1)
        assert hover.is_open


class TestClosing:
    def test_leave_closes_after_grace_period(
        self, hover: HoverIntentController, scheduler: FakeScheduler, changes: list[bool],
    ):
        hover.enter()
        scheduler.advance(3)
        hover.leave()
        assert hover.phase is HoverPhase.CLOSING
        assert hover.is_open

        scheduler.advance(0.199)
        assert hover.is_open
        scheduler.advance(0.001)
        assert not hover.is_open
        assert changes == [True, False]

    def test_re_enter_during_grace_keeps_open(
        self, hover: HoverIntentController, scheduler: FakeScheduler, changes: list[bool],
    ):
        hover.enter()
        scheduler.advance(3)
        hover.leave()
        scheduler.advance(0.1)
        hover.enter()

        assert hover.phase is HoverPhase.OPEN
        assert not hover.has_pending
        scheduler.advance(10)
        assert hover.is_open
        assert changes == [True]

    def test_re_enter_before_ever_opening_waits_full_delay(
        self, hover: HoverIntentController, scheduler: FakeScheduler,
    ):
        hover.enter()
        scheduler.advance(1)
        hover.leave()
        scheduler.advance(0.1)
        hover.enter()

        assert hover.phase is HoverPhase.OPENING
        scheduler.advance(2.9)
        assert not hover.is_open
        scheduler.advance(0.1)
        assert hover.is_open

    def test_leave_while_closed_is_noop(
        self, hover: HoverIntentController, scheduler: FakeScheduler,
    ):
        hover.leave()
        assert hover.phase is HoverPhase.CLOSED
        assert scheduler.pending == []

    def test_pointer_churn_never_stacks_timers(
        self, hover: HoverIntentController, scheduler: FakeScheduler, changes: list[bool],
    ):
        for _ in range(50):
            hover.enter()
            scheduler.advance(0.05)
            hover.leave()
            scheduler.advance(0.05)
            assert len(scheduler.pending) <= 2
        scheduler.advance(10)
        assert changes == []


class TestClick:
    def test_click_opens_immediately_and_cancels_pending(
        self, hover: HoverIntentController, scheduler: FakeScheduler, changes: list[bool],
    ):
        hover.enter()
        hover.click()
        assert hover.is_open
        assert scheduler.pending == []
        scheduler.advance(10)
        assert changes == [True]

    def test_click_toggles_closed(
        self, hover: HoverIntentController, scheduler: FakeScheduler,
    ):
        hover.click()
        hover.click()
        assert not hover.is_open
        assert hover.phase is HoverPhase.CLOSED

    def test_click_during_grace_closes(
        self, hover: HoverIntentController, scheduler: FakeScheduler, changes: list[bool],
    ):
        hover.click()
        hover.leave()
        hover.click()
        assert not hover.is_open
        assert scheduler.pending == []
        assert changes == [True, False]


class TestExternalControl:
    def test_set_open_cancels_timers(
        self, hover: HoverIntentController, scheduler: FakeScheduler,
    ):
        hover.enter()
        hover.set_open(True)
        assert hover.is_open
        assert scheduler.pending == []

        hover.leave()
        hover.set_open(False)
        assert not hover.is_open
        scheduler.advance(10)
        assert hover.phase is HoverPhase.CLOSED

    def test_set_open_same_value_does_not_notify(
        self, hover: HoverIntentController, changes: list[bool],
    ):
        hover.set_open(False)
        assert changes == []


class TestDispose:
    def test_dispose_cancels_everything(
        self, hover: HoverIntentController, scheduler: FakeScheduler, changes: list[bool],
    ):
        hover.enter()
        hover.dispose()
        assert scheduler.pending == []
        assert not hover.has_pending
        scheduler.advance(10)
        assert changes == []

    def test_input_after_dispose_is_ignored(
        self, hover: HoverIntentController, scheduler: FakeScheduler, changes: list[bool],
    ):
        hover.dispose()
        hover.enter()
        hover.click()
        hover.set_open(True)
        assert scheduler.pending == []
        assert changes == []
        assert hover.disposed

    def test_context_manager_disposes(self, scheduler: FakeScheduler):
        with HoverIntentController(scheduler) as hover:
            hover.enter()
            hover.leave()
        assert scheduler.pending == []
        assert hover.disposed

    def test_dispose_is_idempotent(self, hover: HoverIntentController):
        hover.dispose()
        hover.dispose()
        assert hover.disposed


class TestAsyncioScheduler:
    @pytest.mark.asyncio
    async def test_real_event_loop(self):
        changes: list[bool] = []
        hover = HoverIntentController(
            AsyncioScheduler(), open_delay=0.02, close_delay=0.01, on_change=changes.append,
        )
        hover.enter()
        await asyncio.sleep(0.1)
        assert hover.is_open

        hover.leave()
        await asyncio.sleep(0.1)
        assert not hover.is_open
        assert changes == [True, False]
        hover.dispose()

    @pytest.mark.asyncio
    async def test_dispose_cancels_loop_timer(self):
        changes: list[bool] = []
        hover = HoverIntentController(AsyncioScheduler(), open_delay=0.02, on_change=changes.append)
        hover.enter()
        hover.dispose()
        await asyncio.sleep(0.1)
        assert changes == []

"""Tests for the tri-state sort and node ordering."""

from __future__ import annotations

import pytest

from fleetview.live import LiveMetricsIndex
from fleetview.sorting import (
    NEUTRAL,
    SortEngine,
    SortField,
    SortOrder,
    SortState,
    indicator,
    order_nodes,
    toggle,
)
from fleetview.types import NodeInfo
from tests.conftest import live_record

pytestmark = [pytest.mark.unit, pytest.mark.xdist_group("unit")]


def _index(online: list[str], data: dict[str, dict]) -> LiveMetricsIndex:
    index = LiveMetricsIndex()
    index.apply({"online": online, "data": data})
    return index


# --- Model ---


class TestSortState:
    def test_neutral_state(self):
        assert NEUTRAL.field is None
        assert NEUTRAL.order is SortOrder.DEFAULT
        assert NEUTRAL.is_default

    @pytest.mark.parametrize("field, order", [
        (SortField.CPU, SortOrder.DEFAULT),
        (None, SortOrder.ASC),
        (None, SortOrder.DESC),
    ])
    def test_field_and_default_order_go_together(self, field, order):
        with pytest.raises(ValueError):
            SortState(field, order)

    def test_state_is_frozen(self):
        with pytest.raises(AttributeError):
            NEUTRAL.order = SortOrder.ASC  # type: ignore[misc]


class TestToggle:
    def test_three_clicks_return_to_neutral(self):
        s1 = toggle(NEUTRAL, SortField.CPU)
        s2 = toggle(s1, SortField.CPU)
        s3 = toggle(s2, SortField.CPU)
        assert s1 == SortState(SortField.CPU, SortOrder.ASC)
        assert s2 == SortState(SortField.CPU, SortOrder.DESC)
        assert s3 == NEUTRAL

    @pytest.mark.parametrize("field", list(SortField))
    def test_every_column_cycles_through_all_phases(self, field: SortField):
        orders = []
        state = NEUTRAL
        for _ in range(3):
            state = toggle(state, field)
            orders.append(state.order)
        assert orders == [SortOrder.ASC, SortOrder.DESC, SortOrder.DEFAULT]

    def test_other_column_restarts_at_ascending(self):
        state = toggle(toggle(NEUTRAL, SortField.CPU), SortField.CPU)
        assert state.order is SortOrder.DESC

        switched = toggle(state, SortField.RAM)
        assert switched == SortState(SortField.RAM, SortOrder.ASC)

    def test_indicator(self):
        asc = SortState(SortField.NAME, SortOrder.ASC)
        desc = SortState(SortField.NAME, SortOrder.DESC)
        assert indicator(asc, SortField.NAME) == "▲"
        assert indicator(desc, SortField.NAME) == "▼"
        assert indicator(asc, SortField.OS) == ""
        assert indicator(NEUTRAL, SortField.NAME) == ""


# --- Ordering ---


class TestDefaultOrder:
    def test_online_first_then_weight(self):
        roster = [
            NodeInfo("a", weight=1),
            NodeInfo("b", weight=0),
            NodeInfo("c", weight=2),
            NodeInfo("d", weight=5),
        ]
        index = _index(["c", "d"], {})
        assert order_nodes(roster, index, NEUTRAL) == ("c", "d", "b", "a")

    def test_ties_keep_roster_order(self):
        roster = [NodeInfo(u, weight=0) for u in ("x", "y", "z")]
        index = _index(["x", "y", "z"], {})
        assert order_nodes(roster, index, NEUTRAL) == ("x", "y", "z")

    def test_empty_roster(self):
        assert order_nodes([], LiveMetricsIndex(), NEUTRAL) == ()


class TestColumnOrder:
    def test_cpu_scenario(self):
        roster = [NodeInfo("A", weight=1), NodeInfo("B", weight=2)]
        index = _index(["A"], {"A": live_record(cpu=40), "B": live_record(cpu=10)})
        engine = SortEngine()

        assert engine.order(roster, index) == ("A", "B")
        engine.click(SortField.CPU)
        assert engine.order(roster, index) == ("B", "A")
        engine.click(SortField.CPU)
        assert engine.order(roster, index) == ("A", "B")
        engine.click(SortField.CPU)
        assert engine.state == NEUTRAL
        assert engine.order(roster, index) == ("A", "B")

    def test_name_is_case_insensitive(self):
        roster = [NodeInfo("1", name="beta"), NodeInfo("2", name="Alpha"), NodeInfo("3", name="gamma")]
        state = SortState(SortField.NAME, SortOrder.ASC)
        assert order_nodes(roster, LiveMetricsIndex(), state) == ("2", "1", "3")

    def test_name_ignores_accents(self):
        roster = [NodeInfo("1", name="Zeta"), NodeInfo("2", name="Éclair"), NodeInfo("3", name="apple")]
        state = SortState(SortField.NAME, SortOrder.ASC)
        assert order_nodes(roster, LiveMetricsIndex(), state) == ("3", "2", "1")

    def test_accented_and_plain_forms_sit_together(self):
        roster = [
            NodeInfo("1", os="Fedora"),
            NodeInfo("2", os="Élite"),
            NodeInfo("3", os="elite"),
            NodeInfo("4", os="Debian"),
        ]
        state = SortState(SortField.OS, SortOrder.ASC)
        assert order_nodes(roster, LiveMetricsIndex(), state) == ("4", "3", "2", "1")

    def test_os_descending(self):
        roster = [NodeInfo("1", os="alpine"), NodeInfo("2", os="ubuntu"), NodeInfo("3", os="debian")]
        state = SortState(SortField.OS, SortOrder.DESC)
        assert order_nodes(roster, LiveMetricsIndex(), state) == ("2", "3", "1")

    def test_status(self):
        roster = [NodeInfo("off1"), NodeInfo("on1"), NodeInfo("off2"), NodeInfo("on2")]
        index = _index(["on1", "on2"], {})
        asc = SortState(SortField.STATUS, SortOrder.ASC)
        desc = SortState(SortField.STATUS, SortOrder.DESC)
        assert order_nodes(roster, index, asc) == ("on1", "on2", "off1", "off2")
        assert order_nodes(roster, index, desc) == ("off1", "off2", "on1", "on2")

    def test_ram_uses_derived_percentage(self):
        gb = 1024**3
        roster = [
            NodeInfo("big", mem_total=64 * gb),   # 8 GB used -> 12.5%
            NodeInfo("small", mem_total=4 * gb),  # 2 GB used -> 50%
        ]
        index = _index([], {"big": live_record(ram=8 * gb), "small": live_record(ram=2 * gb)})
        state = SortState(SortField.RAM, SortOrder.ASC)
        assert order_nodes(roster, index, state) == ("big", "small")

    def test_unknown_capacity_counts_as_zero_percent(self):
        roster = [
            NodeInfo("used", mem_total=100),
            NodeInfo("unknown", mem_total=0),
        ]
        index = _index([], {"used": live_record(ram=1), "unknown": live_record(ram=10**12)})
        asc = SortState(SortField.RAM, SortOrder.ASC)
        assert order_nodes(roster, index, asc) == ("unknown", "used")

    def test_disk_percentage(self):
        roster = [NodeInfo("a", disk_total=100), NodeInfo("b", disk_total=100), NodeInfo("c")]
        index = _index([], {"a": live_record(disk=90), "b": live_record(disk=10)})
        desc = SortState(SortField.DISK, SortOrder.DESC)
        assert order_nodes(roster, index, desc) == ("a", "b", "c")

    def test_price(self):
        roster = [NodeInfo("a", price=9.5), NodeInfo("b", price=-1), NodeInfo("c", price=3)]
        asc = SortState(SortField.PRICE, SortOrder.ASC)
        assert order_nodes(roster, LiveMetricsIndex(), asc) == ("b", "c", "a")

    def test_non_finite_price_sorts_as_zero(self):
        roster = [NodeInfo("a", price=float("nan")), NodeInfo("b", price=1), NodeInfo("c", price=-1)]
        asc = SortState(SortField.PRICE, SortOrder.ASC)
        assert order_nodes(roster, LiveMetricsIndex(), asc) == ("c", "a", "b")

    @pytest.mark.parametrize("field, key", [
        (SortField.NETWORK_UP, "up"),
        (SortField.NETWORK_DOWN, "down"),
        (SortField.TOTAL_UP, "total_up"),
        (SortField.TOTAL_DOWN, "total_down"),
    ])
    def test_network_columns(self, field: SortField, key: str):
        roster = [NodeInfo("a"), NodeInfo("b"), NodeInfo("c")]
        index = _index([], {
            "a": live_record(**{key: 500}),
            "b": live_record(**{key: 10}),
            "c": live_record(**{key: 70}),
        })
        assert order_nodes(roster, index, SortState(field, SortOrder.ASC)) == ("b", "c", "a")
        assert order_nodes(roster, index, SortState(field, SortOrder.DESC)) == ("a", "c", "b")

    def test_missing_live_data_sorts_as_zero(self):
        roster = [NodeInfo("a"), NodeInfo("b")]
        index = _index(["a", "b"], {"a": live_record(cpu=5)})
        asc = SortState(SortField.CPU, SortOrder.ASC)
        assert order_nodes(roster, index, asc) == ("b", "a")

    @pytest.mark.parametrize("order", [SortOrder.ASC, SortOrder.DESC])
    def test_ties_keep_roster_order_in_both_directions(self, order: SortOrder):
        roster = [NodeInfo(u) for u in ("q", "w", "e", "r")]
        index = _index([], {u: live_record(cpu=20) for u in ("q", "w", "e", "r")})
        assert order_nodes(roster, index, SortState(SortField.CPU, order)) == ("q", "w", "e", "r")

    def test_repeated_calls_are_identical(self):
        roster = [NodeInfo(str(i), name=f"n{i % 3}", weight=i % 4) for i in range(30)]
        index = _index([str(i) for i in range(0, 30, 2)], {
            str(i): live_record(cpu=i % 5, ram=i % 7) for i in range(30)
        })
        for field in SortField:
            for order in (SortOrder.ASC, SortOrder.DESC):
                state = SortState(field, order)
                first = order_nodes(roster, index, state)
                assert first == order_nodes(roster, index, state)
                assert sorted(first) == sorted(n.uuid for n in roster)


class TestSortEngine:
    def test_click_accepts_wire_names(self):
        engine = SortEngine()
        assert engine.click("networkUp") == SortState(SortField.NETWORK_UP, SortOrder.ASC)

    def test_click_unknown_column_raises(self):
        with pytest.raises(ValueError):
            SortEngine().click("latency")

    def test_reset(self):
        engine = SortEngine()
        engine.click(SortField.NAME)
        engine.reset()
        assert engine.state == NEUTRAL
        assert engine.indicator(SortField.NAME) == ""

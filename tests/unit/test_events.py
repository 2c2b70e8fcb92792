"""Tests for pool events and the event log."""

import pytest
from pydantic import TypeAdapter, ValidationError

from cpamm.events import AnyEvent, EventLog, PoolCreated, Swapped


def make_swapped(timestamp: int = 0) -> Swapped:
    return Swapped(
        coin_a="0x1::coin::USDC",
        coin_b="0x1::coin::WETH",
        amount_a_in=10,
        amount_a_out=0,
        amount_b_in=0,
        amount_b_out=9,
        timestamp=timestamp,
    )


class TestEventLog:
    def test_emit_in_order_and_filter(self):
        log = EventLog(clock=lambda: 42)
        created = PoolCreated(coin_a="a::b::c", coin_b="a::b::d", share_token="x::swap::LP", timestamp=log.now())
        log.emit(created)
        log.emit(make_swapped(log.now()))

        assert len(log) == 2
        assert log.events()[0] is created
        assert [e.kind for e in log.events("swapped")] == ["swapped"]  # type: ignore[attr-defined]
        assert log.events("liquidity_removed") == []

    def test_events_returns_a_copy(self):
        log = EventLog()
        log.emit(make_swapped())
        log.events().clear()
        assert len(log) == 1

    def test_default_clock_is_wall_time(self):
        assert EventLog().now() > 1_600_000_000


class TestEventModels:
    def test_events_are_frozen(self):
        event = make_swapped()
        with pytest.raises(ValidationError):
            event.amount_a_in = 11  # type: ignore[misc]

    def test_discriminated_union_round_trip(self):
        adapter = TypeAdapter(AnyEvent)
        event = adapter.validate_python(make_swapped(7).model_dump())
        assert isinstance(event, Swapped)
        assert event.timestamp == 7

    def test_negative_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            make_swapped(-1)

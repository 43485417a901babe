"""Logical Clock — monotonic timestamps."""

from coldchain.core.domain_types import Principal
from coldchain.core.shipment_state import CallContext
from coldchain.infrastructure.logical_clock import LogicalClock


def test_now_strictly_increases():
    clock = LogicalClock()
    values = [clock.now() for _ in range(100)]
    assert values == sorted(values)
    assert len(set(values)) == len(values)


def test_observe_pushes_clock_forward():
    clock = LogicalClock()
    far_future = clock.now() + 10_000
    assert clock.observe(far_future) == far_future
    assert clock.now() > far_future


def test_observe_past_value_does_not_rewind():
    clock = LogicalClock()
    current = clock.now()
    clock.observe(1)
    assert clock.now() > current


def test_observe_clamps_regressing_timestamp():
    clock = LogicalClock()
    assert clock.observe(500) == 500
    assert clock.observe(10) == 500


def test_stamp_keeps_requested_timestamp_when_ahead():
    clock = LogicalClock(start=100)
    stamped = clock.stamp(CallContext(caller=Principal("shipper"), timestamp=4242))
    assert stamped.timestamp == 4242
    assert stamped.caller == "shipper"


def test_stamp_without_request_uses_now():
    clock = LogicalClock()
    first = clock.stamp(CallContext(caller=Principal("shipper")))
    second = clock.stamp(CallContext(caller=Principal("shipper")))
    assert first.timestamp is not None
    assert second.timestamp > first.timestamp

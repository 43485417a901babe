"""Shipment Transitions — tests for pure next-record computation.

Tests cover:
    - new_shipment defaults (created, quality 100, caller as origin + handler)
    - transfer sets in-transit, keeps emergency
    - apply_reading updates temp, counters and score only on breach
    - updated_at never regresses below previous values
    - completed_at survives a post-delivery emergency
    - log entries and reports never predate the shipment's last update
    - inputs are never mutated (frozen records)
"""

import dataclasses

import pytest

from coldchain.core.domain_types import ShipmentId, ShipmentStatus
from coldchain.core import transitions
from tests.factories import (
    CARRIER, RECEIVER, SHIPPER, ctx, delivered_record, make_record,
)


def test_new_shipment_defaults():
    record = transitions.new_shipment(
        ShipmentId("S1"), RECEIVER, "Vaccines", 2, 8, 5, ctx(SHIPPER, 100),
    )
    assert record.status == ShipmentStatus.CREATED
    assert record.quality_score == 100
    assert record.breach_count == 0
    assert record.origin == SHIPPER
    assert record.current_handler == SHIPPER
    assert record.destination == RECEIVER
    assert record.created_at == record.updated_at == 100


def test_transfer_sets_in_transit_and_handler():
    updated = transitions.transfer_custody(make_record(), CARRIER, ctx(SHIPPER, 200))
    assert updated.current_handler == CARRIER
    assert updated.status == ShipmentStatus.IN_TRANSIT
    assert updated.updated_at == 200


def test_transfer_while_in_transit_stays_in_transit():
    record = make_record(status=ShipmentStatus.IN_TRANSIT)
    updated = transitions.transfer_custody(record, CARRIER, ctx(SHIPPER, 200))
    assert updated.status == ShipmentStatus.IN_TRANSIT


def test_transfer_keeps_emergency_status():
    record = make_record(status=ShipmentStatus.EMERGENCY)
    updated = transitions.transfer_custody(record, CARRIER, ctx(SHIPPER, 200))
    assert updated.status == ShipmentStatus.EMERGENCY
    assert updated.current_handler == CARRIER


def test_complete_delivery_sets_completed():
    updated = transitions.complete_delivery(make_record(), ctx(RECEIVER, 300))
    assert updated.status == ShipmentStatus.COMPLETED
    assert updated.quality_score == 100
    assert updated.completed_at == 300
    assert updated.is_completed


def test_emergency_after_delivery_keeps_completion_marker():
    updated = transitions.report_emergency(delivered_record(), ctx(RECEIVER, 400))
    assert updated.status == ShipmentStatus.EMERGENCY
    assert updated.completed_at == 300
    assert updated.is_completed


def test_report_emergency_leaves_quality_untouched():
    record = make_record(quality_score=70, breach_count=3)
    updated = transitions.report_emergency(record, ctx(SHIPPER, 300))
    assert updated.status == ShipmentStatus.EMERGENCY
    assert updated.quality_score == 70
    assert updated.breach_count == 3


def test_compliant_reading_updates_temperature_only():
    updated, breached = transitions.apply_reading(make_record(), 6, ctx(SHIPPER, 150))
    assert breached is False
    assert updated.current_temp == 6
    assert updated.breach_count == 0
    assert updated.quality_score == 100
    assert updated.updated_at == 150


def test_breach_reading_penalizes_quality():
    updated, breached = transitions.apply_reading(make_record(), 10, ctx(SHIPPER, 150))
    assert breached is True
    assert updated.current_temp == 10
    assert updated.breach_count == 1
    assert updated.quality_score == 90


def test_compliant_reading_does_not_heal_quality():
    record = make_record(quality_score=60, breach_count=4, current_temp=10)
    updated, _ = transitions.apply_reading(record, 5, ctx(SHIPPER, 150))
    assert updated.quality_score == 60
    assert updated.breach_count == 4


def test_breach_at_zero_quality_stays_zero():
    record = make_record(quality_score=0, breach_count=10)
    updated, breached = transitions.apply_reading(record, 30, ctx(SHIPPER, 150))
    assert breached is True
    assert updated.quality_score == 0
    assert updated.breach_count == 11


def test_updated_at_never_regresses():
    record = make_record(updated_at=500)
    updated = transitions.report_emergency(record, ctx(SHIPPER, 10))
    assert updated.updated_at == 500
    assert updated.updated_at >= updated.created_at


def test_transitions_do_not_mutate_input():
    record = make_record()
    transitions.apply_reading(record, 20, ctx(SHIPPER, 150))
    assert record.current_temp == 5
    assert record.quality_score == 100
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.status = ShipmentStatus.COMPLETED  # type: ignore[misc]


def test_build_log_entry_uses_caller_and_timestamp():
    entry = transitions.build_log_entry(
        make_record(), 7, 10, "Truck", "SNS-1", ctx(CARRIER, 250),
    )
    assert entry.sequence == 7
    assert entry.handler == CARRIER
    assert entry.timestamp == 250
    assert entry.location == "Truck"
    assert entry.sensor_id == "SNS-1"


def test_build_emergency_report_captures_previous_status():
    record = make_record(status=ShipmentStatus.IN_TRANSIT)
    report = transitions.build_emergency_report(
        record, "power_failure", "Reefer unit lost power", ctx(CARRIER, 260),
    )
    assert report.previous_status == ShipmentStatus.IN_TRANSIT
    assert report.reporter == CARRIER
    assert report.reported_at == 260


def test_build_log_entry_never_predates_last_update():
    record = make_record(created_at=500, updated_at=500)
    entry = transitions.build_log_entry(
        record, 2, 5, "Truck", "SNS-1", ctx(CARRIER, 10),
    )
    assert entry.timestamp == 500


def test_build_emergency_report_never_predates_last_update():
    record = make_record(updated_at=800)
    report = transitions.build_emergency_report(
        record, "power_failure", "", ctx(CARRIER, 10),
    )
    assert report.reported_at == 800

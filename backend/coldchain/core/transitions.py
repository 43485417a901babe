"""Shipment Transitions — pure computation of the next record for each operation.

Invariants:
    - Every function returns a NEW record; inputs are never mutated
    - Callers validate first (core/enforce_lifecycle.py); transitions assume preconditions hold
    - updated_at never moves backwards and never precedes created_at
    - Transfer out of EMERGENCY keeps EMERGENCY (the flag is never silently cleared)
    - completed_at is set once by complete_delivery and never cleared, even when
      a post-delivery emergency overwrites the status
    - Log entries and emergency reports never carry a timestamp earlier than the
      shipment's updated_at

Design Decisions:
    - dataclasses.replace over field-by-field copies: all fields of a record update
      together or not at all
"""

from dataclasses import replace

from coldchain.core.domain_types import (
    LogicalTimestamp,
    LogSequence,
    MAX_QUALITY_SCORE,
    Principal,
    ShipmentId,
    ShipmentStatus,
)
from coldchain.core.quality_scoring import apply_breach_penalty, is_breach
from coldchain.core.shipment_state import (
    CallContext,
    EmergencyReport,
    ShipmentRecord,
    TemperatureLogEntry,
)


def refreshed_timestamp(
    record: ShipmentRecord, timestamp: LogicalTimestamp,
) -> LogicalTimestamp:
    """Logical clock value for updated_at, clamped to stay monotonic."""
    return LogicalTimestamp(max(record.updated_at, record.created_at, timestamp))


def new_shipment(
    shipment_id: ShipmentId,
    destination: Principal,
    product_type: str,
    min_temp: int,
    max_temp: int,
    initial_temp: int,
    ctx: CallContext,
) -> ShipmentRecord:
    """Fresh CREATED record with the caller as origin and current handler."""
    return ShipmentRecord(
        shipment_id=shipment_id,
        origin=ctx.caller,
        destination=destination,
        current_handler=ctx.caller,
        product_type=product_type,
        min_temp=min_temp,
        max_temp=max_temp,
        current_temp=initial_temp,
        status=ShipmentStatus.CREATED,
        created_at=ctx.timestamp,
        updated_at=ctx.timestamp,
        breach_count=0,
        quality_score=MAX_QUALITY_SCORE,
    )


def transfer_custody(
    record: ShipmentRecord, new_handler: Principal, ctx: CallContext,
) -> ShipmentRecord:
    status = (
        ShipmentStatus.EMERGENCY
        if record.status == ShipmentStatus.EMERGENCY
        else ShipmentStatus.IN_TRANSIT
    )
    return replace(
        record,
        current_handler=new_handler,
        status=status,
        updated_at=refreshed_timestamp(record, ctx.timestamp),
    )


def complete_delivery(record: ShipmentRecord, ctx: CallContext) -> ShipmentRecord:
    completed_at = refreshed_timestamp(record, ctx.timestamp)
    return replace(
        record,
        status=ShipmentStatus.COMPLETED,
        updated_at=completed_at,
        completed_at=completed_at,
    )


def report_emergency(record: ShipmentRecord, ctx: CallContext) -> ShipmentRecord:
    """Quality score is not touched by emergencies."""
    return replace(
        record,
        status=ShipmentStatus.EMERGENCY,
        updated_at=refreshed_timestamp(record, ctx.timestamp),
    )


def apply_reading(
    record: ShipmentRecord, temperature: int, ctx: CallContext,
) -> tuple[ShipmentRecord, bool]:
    """Record a reading. Returns (next_record, breached)."""
    breached = is_breach(temperature, record.min_temp, record.max_temp)
    updated = replace(
        record,
        current_temp=temperature,
        updated_at=refreshed_timestamp(record, ctx.timestamp),
        breach_count=record.breach_count + 1 if breached else record.breach_count,
        quality_score=(
            apply_breach_penalty(record.quality_score)
            if breached else record.quality_score
        ),
    )
    return updated, breached


def build_log_entry(
    record: ShipmentRecord,
    sequence: LogSequence,
    temperature: int,
    location: str,
    sensor_id: str,
    ctx: CallContext,
) -> TemperatureLogEntry:
    return TemperatureLogEntry(
        shipment_id=record.shipment_id,
        sequence=sequence,
        temperature=temperature,
        timestamp=refreshed_timestamp(record, ctx.timestamp),
        location=location,
        handler=ctx.caller,
        sensor_id=sensor_id,
    )


def build_emergency_report(
    record: ShipmentRecord,
    emergency_type: str,
    description: str,
    ctx: CallContext,
) -> EmergencyReport:
    """`record` is the state BEFORE the emergency transition."""
    return EmergencyReport(
        shipment_id=record.shipment_id,
        emergency_type=emergency_type,
        description=description,
        reporter=ctx.caller,
        reported_at=refreshed_timestamp(record, ctx.timestamp),
        previous_status=record.status,
    )

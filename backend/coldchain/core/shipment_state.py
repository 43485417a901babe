"""Shipment State — immutable value records exchanged between core and shell.

Invariants:
    - ShipmentRecord and TemperatureLogEntry are frozen: every transition returns a new record
    - updated_at >= created_at on every record produced by core/transitions.py
    - completed_at marks delivery durably; status alone may read "emergency"
      after a post-delivery report
    - CallContext carries caller + logical clock explicitly (never ambient state)

Design Decisions:
    - Frozen dataclasses over ORM objects in core: transitions are pure and
      testable without a database; the shell maps to/from ORM rows
    - No back-pointer from shipment to its log entries beyond aggregate counters
"""

from dataclasses import dataclass

from coldchain.core.domain_types import (
    LogicalTimestamp,
    LogSequence,
    Principal,
    QualityScore,
    ShipmentId,
    ShipmentStatus,
)


@dataclass(frozen=True)
class CallContext:
    """Authenticated caller and logical time of one mutating call.

    timestamp is the caller-requested value (None when absent) until the
    write path stamps it under the registry lock.
    """
    caller: Principal
    timestamp: LogicalTimestamp | None = None


@dataclass(frozen=True)
class ShipmentRecord:
    """One shipment in the registry."""
    shipment_id: ShipmentId
    origin: Principal
    destination: Principal
    current_handler: Principal
    product_type: str
    min_temp: int
    max_temp: int
    current_temp: int
    status: ShipmentStatus
    created_at: LogicalTimestamp
    updated_at: LogicalTimestamp
    breach_count: int
    quality_score: QualityScore
    completed_at: LogicalTimestamp | None = None

    @property
    def is_completed(self) -> bool:
        """Delivered, even if a later emergency report changed the status."""
        return self.completed_at is not None

    @property
    def is_temperature_compliant(self) -> bool:
        return self.min_temp <= self.current_temp <= self.max_temp


@dataclass(frozen=True)
class TemperatureLogEntry:
    """Append-only reading. Never mutated once written."""
    shipment_id: ShipmentId
    sequence: LogSequence
    temperature: int
    timestamp: LogicalTimestamp
    location: str
    handler: Principal
    sensor_id: str


@dataclass(frozen=True)
class EmergencyReport:
    """Append-only record of a report-emergency call."""
    shipment_id: ShipmentId
    emergency_type: str
    description: str
    reporter: Principal
    reported_at: LogicalTimestamp
    previous_status: ShipmentStatus

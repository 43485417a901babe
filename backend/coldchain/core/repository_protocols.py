"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Writes are staged in the caller's transaction; the shell commits once per operation

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the core functions that
      decide what to write are never async themselves
"""

from typing import Protocol

from coldchain.core.domain_types import LogSequence, Principal, ShipmentId
from coldchain.core.shipment_state import (
    EmergencyReport,
    ShipmentRecord,
    TemperatureLogEntry,
)


class ShipmentStore(Protocol):
    """Shipment Registry + Temperature Log Store + emergency history."""
    async def get_shipment(self, shipment_id: ShipmentId) -> ShipmentRecord | None: ...
    async def add_shipment(self, record: ShipmentRecord) -> None: ...
    async def save_shipment(self, record: ShipmentRecord) -> None: ...
    async def claim_next_sequence(self) -> LogSequence: ...
    async def add_log_entry(self, entry: TemperatureLogEntry) -> None: ...
    async def get_log_entry(
        self, shipment_id: ShipmentId, sequence: LogSequence,
    ) -> TemperatureLogEntry | None: ...
    async def list_log_entries(
        self, shipment_id: ShipmentId, limit: int, offset: int,
    ) -> list[TemperatureLogEntry]: ...
    async def add_emergency_report(self, report: EmergencyReport) -> None: ...
    async def list_emergency_reports(
        self, shipment_id: ShipmentId,
    ) -> list[EmergencyReport]: ...


class AuthorizationStore(Protocol):
    """Handler Authorization Set + registry owner."""
    async def get_owner(self) -> Principal: ...
    async def is_authorized(self, principal: Principal) -> bool: ...
    async def set_authorized(self, principal: Principal) -> None: ...
    async def remove_authorized(self, principal: Principal) -> bool: ...

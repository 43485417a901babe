"""Registry Store — SQLAlchemy implementation of ShipmentStore and AuthorizationStore.

Invariants:
    - Maps ORM rows to/from frozen core records; core never sees ORM objects
    - Never commits: the owning service commits once per operation
    - claim_next_sequence reads and advances the counter in the same transaction
    - Authorization lookups default to False when no row exists

Design Decisions:
    - One store over both protocols: they share the session and transaction
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from coldchain.core.domain_types import (
    LogicalTimestamp,
    LogSequence,
    Principal,
    QualityScore,
    ShipmentId,
    ShipmentStatus,
)
from coldchain.core.errors import RegistryNotInitializedError
from coldchain.core.shipment_state import (
    EmergencyReport,
    ShipmentRecord,
    TemperatureLogEntry,
)
from coldchain.models.authorized_handler import AuthorizedHandler
from coldchain.models.emergency_report import EmergencyReportRow
from coldchain.models.registry_state import REGISTRY_STATE_ID, RegistryState
from coldchain.models.shipment import Shipment
from coldchain.models.temperature_log import TemperatureLog


class RegistryStore:
    """Session-scoped access to the registry tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Shipments ──────────────────────────────────────────────

    async def get_shipment(self, shipment_id: ShipmentId) -> ShipmentRecord | None:
        row = await self.db.get(Shipment, shipment_id)
        return _to_record(row) if row else None

    async def add_shipment(self, record: ShipmentRecord) -> None:
        row = Shipment(id=record.shipment_id)
        _copy_record(record, row)
        self.db.add(row)
        # Log entries reference the row within the same transaction
        await self.db.flush()

    async def save_shipment(self, record: ShipmentRecord) -> None:
        row = await self.db.get(Shipment, record.shipment_id)
        if row is None:
            raise LookupError(f"shipment row {record.shipment_id!r} vanished mid-transaction")
        _copy_record(record, row)

    # ─── Temperature log ────────────────────────────────────────

    async def claim_next_sequence(self) -> LogSequence:
        state = await self._registry_state()
        sequence = LogSequence(state.next_log_sequence)
        state.next_log_sequence = sequence + 1
        return sequence

    async def add_log_entry(self, entry: TemperatureLogEntry) -> None:
        self.db.add(TemperatureLog(
            shipment_id=entry.shipment_id,
            sequence=entry.sequence,
            temperature=entry.temperature,
            timestamp=entry.timestamp,
            location=entry.location,
            handler=entry.handler,
            sensor_id=entry.sensor_id,
        ))

    async def get_log_entry(
        self, shipment_id: ShipmentId, sequence: LogSequence,
    ) -> TemperatureLogEntry | None:
        row = await self.db.get(TemperatureLog, (shipment_id, sequence))
        return _to_log_entry(row) if row else None

    async def list_log_entries(
        self, shipment_id: ShipmentId, limit: int, offset: int,
    ) -> list[TemperatureLogEntry]:
        result = await self.db.execute(
            select(TemperatureLog)
            .where(TemperatureLog.shipment_id == shipment_id)
            .order_by(TemperatureLog.sequence)
            .limit(limit)
            .offset(offset),
        )
        return [_to_log_entry(row) for row in result.scalars().all()]

    # ─── Emergency reports ──────────────────────────────────────

    async def add_emergency_report(self, report: EmergencyReport) -> None:
        self.db.add(EmergencyReportRow(
            shipment_id=report.shipment_id,
            emergency_type=report.emergency_type,
            description=report.description,
            reporter=report.reporter,
            reported_at=report.reported_at,
            previous_status=report.previous_status.value,
        ))

    async def list_emergency_reports(
        self, shipment_id: ShipmentId,
    ) -> list[EmergencyReport]:
        result = await self.db.execute(
            select(EmergencyReportRow)
            .where(EmergencyReportRow.shipment_id == shipment_id)
            .order_by(EmergencyReportRow.id),
        )
        return [
            EmergencyReport(
                shipment_id=ShipmentId(row.shipment_id),
                emergency_type=row.emergency_type,
                description=row.description,
                reporter=Principal(row.reporter),
                reported_at=LogicalTimestamp(row.reported_at),
                previous_status=ShipmentStatus(row.previous_status),
            )
            for row in result.scalars().all()
        ]

    # ─── Authorization ──────────────────────────────────────────

    async def get_owner(self) -> Principal:
        state = await self._registry_state()
        return Principal(state.owner)

    async def is_authorized(self, principal: Principal) -> bool:
        row = await self.db.get(AuthorizedHandler, principal)
        if row is None:
            return False
        return bool(row.authorized)

    async def set_authorized(self, principal: Principal) -> None:
        row = await self.db.get(AuthorizedHandler, principal)
        if row is None:
            self.db.add(AuthorizedHandler(principal=principal, authorized=True))
        else:
            row.authorized = True

    async def remove_authorized(self, principal: Principal) -> bool:
        """Delete the entry. Returns whether one existed."""
        result = await self.db.execute(
            delete(AuthorizedHandler).where(AuthorizedHandler.principal == principal),
        )
        return bool(result.rowcount)

    async def _registry_state(self) -> RegistryState:
        state = await self.db.get(RegistryState, REGISTRY_STATE_ID)
        if state is None:
            raise RegistryNotInitializedError()
        return state


# ─── Row mapping ────────────────────────────────────────────────

def _to_record(row: Shipment) -> ShipmentRecord:
    return ShipmentRecord(
        shipment_id=ShipmentId(row.id),
        origin=Principal(row.origin),
        destination=Principal(row.destination),
        current_handler=Principal(row.current_handler),
        product_type=row.product_type,
        min_temp=row.min_temp,
        max_temp=row.max_temp,
        current_temp=row.current_temp,
        status=ShipmentStatus(row.status),
        created_at=LogicalTimestamp(row.created_at),
        updated_at=LogicalTimestamp(row.updated_at),
        breach_count=row.breach_count,
        quality_score=QualityScore(row.quality_score),
        completed_at=(
            LogicalTimestamp(row.completed_at)
            if row.completed_at is not None else None
        ),
    )


def _copy_record(record: ShipmentRecord, row: Shipment) -> None:
    row.origin = record.origin
    row.destination = record.destination
    row.current_handler = record.current_handler
    row.product_type = record.product_type
    row.min_temp = record.min_temp
    row.max_temp = record.max_temp
    row.current_temp = record.current_temp
    row.status = record.status.value
    row.created_at = record.created_at
    row.updated_at = record.updated_at
    row.breach_count = record.breach_count
    row.quality_score = record.quality_score
    row.completed_at = record.completed_at


def _to_log_entry(row: TemperatureLog) -> TemperatureLogEntry:
    return TemperatureLogEntry(
        shipment_id=ShipmentId(row.shipment_id),
        sequence=LogSequence(row.sequence),
        temperature=row.temperature,
        timestamp=LogicalTimestamp(row.timestamp),
        location=row.location,
        handler=Principal(row.handler),
        sensor_id=row.sensor_id,
    )

"""Shipment Queries — read-only surface over the registry.

Invariants:
    - No method writes, flushes or commits; call count never changes state
    - get_shipment returns None for unknown ids; every other query raises NotFound
"""

from sqlalchemy.ext.asyncio import AsyncSession

from coldchain.core.domain_types import LogSequence, ShipmentId
from coldchain.core.errors import (
    ErrorContext,
    ShipmentNotFoundError,
    TemperatureLogNotFoundError,
)
from coldchain.core.shipment_state import (
    EmergencyReport,
    ShipmentRecord,
    TemperatureLogEntry,
)
from coldchain.core.shipment_views import (
    compliance_view,
    quality_assessment_view,
    shipment_status_view,
)
from coldchain.services.registry_store import RegistryStore


class ShipmentQueries:
    """Read-only query handlers."""

    def __init__(self, db: AsyncSession):
        self.store = RegistryStore(db)

    async def get_shipment(self, shipment_id: ShipmentId) -> ShipmentRecord | None:
        return await self.store.get_shipment(shipment_id)

    async def get_temperature_log(
        self, shipment_id: ShipmentId, sequence: LogSequence,
    ) -> TemperatureLogEntry:
        await self._require(shipment_id, "get_temperature_log")
        entry = await self.store.get_log_entry(shipment_id, sequence)
        if entry is None:
            raise TemperatureLogNotFoundError(
                shipment_id, sequence,
                ErrorContext(shipment_id=shipment_id, operation="get_temperature_log"),
            )
        return entry

    async def list_temperature_logs(
        self, shipment_id: ShipmentId, limit: int = 50, offset: int = 0,
    ) -> list[TemperatureLogEntry]:
        await self._require(shipment_id, "list_temperature_logs")
        return await self.store.list_log_entries(shipment_id, limit, offset)

    async def get_shipment_status(self, shipment_id: ShipmentId) -> dict:
        return shipment_status_view(
            await self._require(shipment_id, "get_shipment_status"),
        )

    async def get_quality_assessment(self, shipment_id: ShipmentId) -> dict:
        return quality_assessment_view(
            await self._require(shipment_id, "get_quality_assessment"),
        )

    async def is_temperature_compliant(self, shipment_id: ShipmentId) -> dict:
        return compliance_view(
            await self._require(shipment_id, "is_temperature_compliant"),
        )

    async def list_emergency_reports(
        self, shipment_id: ShipmentId,
    ) -> list[EmergencyReport]:
        await self._require(shipment_id, "list_emergency_reports")
        return await self.store.list_emergency_reports(shipment_id)

    async def _require(self, shipment_id: ShipmentId, operation: str) -> ShipmentRecord:
        record = await self.store.get_shipment(shipment_id)
        if record is None:
            raise ShipmentNotFoundError(
                shipment_id,
                ErrorContext(shipment_id=shipment_id, operation=operation),
            )
        return record

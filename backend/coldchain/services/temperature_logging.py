"""Temperature Logging — log-temperature with automatic quality degradation.

Invariants:
    - Checks run in order: NotFound, NotAuthorized, AlreadyCompleted — all before any write
    - The log entry, counter advance and shipment update commit as ONE unit
    - A breach is reported (TemperatureBreachError) only AFTER that unit committed
    - append_reading never commits; it runs inside the caller's transaction

Design Decisions:
    - append_reading is a plain coroutine shared with create-shipment, so the
      initial "Origin" reading joins the creation transaction without re-authorization
"""

import logging

from coldchain.core.domain_types import LogSequence, ShipmentId
from coldchain.core.enforce_lifecycle import validate_reading
from coldchain.core.errors import ErrorContext, TemperatureBreachError
from coldchain.core.repository_protocols import ShipmentStore
from coldchain.core.shipment_state import CallContext, ShipmentRecord
from coldchain.core.transitions import apply_reading, build_log_entry
from coldchain.services.registry_service import RegistryService

logger = logging.getLogger(__name__)


async def append_reading(
    store: ShipmentStore,
    record: ShipmentRecord,
    temperature: int,
    location: str,
    sensor_id: str,
    ctx: CallContext,
) -> tuple[ShipmentRecord, LogSequence, bool]:
    """Stage one reading: claim sequence, append entry, update shipment."""
    sequence = await store.claim_next_sequence()
    await store.add_log_entry(
        build_log_entry(record, sequence, temperature, location, sensor_id, ctx),
    )
    updated, breached = apply_reading(record, temperature, ctx)
    await store.save_shipment(updated)
    return updated, sequence, breached


class TemperatureLogging(RegistryService):
    """log-temperature operation."""

    async def log_temperature(
        self,
        ctx: CallContext,
        shipment_id: ShipmentId,
        temperature: int,
        location: str,
        sensor_id: str,
    ) -> LogSequence:
        """Append a reading. Returns its sequence, or raises TemperatureBreachError
        (after commit) when the reading is outside the shipment's bounds."""
        async with self.transaction(ctx) as (store, ctx):
            record = await self.load_shipment(shipment_id, "log_temperature")
            caller_authorized = await store.is_authorized(ctx.caller)
            error = validate_reading(record, ctx.caller, caller_authorized)
            if error:
                raise error
            updated, sequence, breached = await append_reading(
                store, record, temperature, location, sensor_id, ctx,
            )

        if breached:
            logger.warning(
                "Temperature breach recorded",
                extra={
                    "shipment_id": shipment_id,
                    "sequence": sequence,
                    "quality_score": updated.quality_score,
                    "principal": ctx.caller,
                },
            )
            raise TemperatureBreachError(
                shipment_id, sequence, temperature, updated.quality_score,
                ErrorContext(
                    shipment_id=shipment_id, principal=ctx.caller,
                    operation="log_temperature",
                ),
            )

        logger.info(
            "Temperature logged",
            extra={"shipment_id": shipment_id, "sequence": sequence},
        )
        return sequence

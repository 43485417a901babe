"""Shipment Lifecycle — create, transfer, complete and report-emergency operations.

Invariants:
    - created -> in-transit -> completed; emergency reachable from created/in-transit
    - completed is terminal for transfer, logging and completion
    - Every check runs before the first write; failed calls leave no trace
    - create-shipment and its initial "Origin" reading commit together

Design Decisions:
    - create-shipment stages the reading through append_reading inside its own
      transaction (no second authorization against a not-yet-visible record)
    - report-emergency on a completed shipment is accepted (post-delivery discoveries)
    - transfer-custody keeps an EMERGENCY status instead of resetting it to in-transit
"""

import logging

from coldchain.core.domain_types import (
    LogSequence,
    ORIGIN_LOCATION,
    ORIGIN_SENSOR_ID,
    Principal,
    QualityScore,
    ShipmentId,
)
from coldchain.core.enforce_lifecycle import (
    validate_completion,
    validate_creation,
    validate_emergency,
    validate_transfer,
)
from coldchain.core.errors import ErrorContext, ShipmentAlreadyExistsError
from coldchain.core.shipment_state import CallContext, ShipmentRecord
from coldchain.core import transitions
from coldchain.services.registry_service import RegistryService
from coldchain.services.temperature_logging import append_reading

logger = logging.getLogger(__name__)


class ShipmentLifecycle(RegistryService):
    """State-machine operations on the Shipment Registry."""

    async def create_shipment(
        self,
        ctx: CallContext,
        shipment_id: ShipmentId,
        destination: Principal,
        product_type: str,
        min_temp: int,
        max_temp: int,
        initial_temp: int,
    ) -> tuple[ShipmentRecord, LogSequence]:
        """Register a shipment and record its initial reading at the origin."""
        async with self.transaction(ctx) as (store, ctx):
            if await store.get_shipment(shipment_id) is not None:
                raise ShipmentAlreadyExistsError(
                    shipment_id,
                    ErrorContext(shipment_id=shipment_id, operation="create_shipment"),
                )
            error = validate_creation(min_temp, max_temp, initial_temp)
            if error:
                raise error

            record = transitions.new_shipment(
                shipment_id, destination, product_type,
                min_temp, max_temp, initial_temp, ctx,
            )
            await store.add_shipment(record)
            # initial_temp is inside [min_temp, max_temp], so this never breaches
            record, sequence, _ = await append_reading(
                store, record, initial_temp,
                ORIGIN_LOCATION, ORIGIN_SENSOR_ID, ctx,
            )

        logger.info(
            "Shipment created",
            extra={
                "shipment_id": shipment_id,
                "principal": ctx.caller,
                "sequence": sequence,
            },
        )
        return record, sequence

    async def transfer_custody(
        self, ctx: CallContext, shipment_id: ShipmentId, new_handler: Principal,
    ) -> ShipmentRecord:
        async with self.transaction(ctx) as (store, ctx):
            record = await self.load_shipment(shipment_id, "transfer_custody")
            error = validate_transfer(record, ctx.caller)
            if error:
                raise error
            updated = transitions.transfer_custody(record, new_handler, ctx)
            await store.save_shipment(updated)

        logger.info(
            f"Custody transferred to {new_handler}",
            extra={
                "shipment_id": shipment_id,
                "principal": ctx.caller,
                "status": updated.status.value,
            },
        )
        return updated

    async def complete_delivery(
        self, ctx: CallContext, shipment_id: ShipmentId,
    ) -> QualityScore:
        """Mark delivered. Returns the quality score held before completion."""
        async with self.transaction(ctx) as (store, ctx):
            record = await self.load_shipment(shipment_id, "complete_delivery")
            error = validate_completion(record, ctx.caller)
            if error:
                raise error
            final_quality = record.quality_score
            await store.save_shipment(transitions.complete_delivery(record, ctx))

        logger.info(
            "Delivery completed",
            extra={
                "shipment_id": shipment_id,
                "principal": ctx.caller,
                "quality_score": final_quality,
            },
        )
        return final_quality

    async def report_emergency(
        self,
        ctx: CallContext,
        shipment_id: ShipmentId,
        emergency_type: str,
        description: str,
    ) -> ShipmentRecord:
        async with self.transaction(ctx) as (store, ctx):
            record = await self.load_shipment(shipment_id, "report_emergency")
            caller_authorized = await store.is_authorized(ctx.caller)
            error = validate_emergency(record, ctx.caller, caller_authorized)
            if error:
                raise error
            await store.add_emergency_report(
                transitions.build_emergency_report(
                    record, emergency_type, description, ctx,
                ),
            )
            updated = transitions.report_emergency(record, ctx)
            await store.save_shipment(updated)

        logger.warning(
            f"Emergency reported: {emergency_type}",
            extra={
                "shipment_id": shipment_id,
                "principal": ctx.caller,
                "status": updated.status.value,
            },
        )
        return updated

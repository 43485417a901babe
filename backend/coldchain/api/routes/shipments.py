"""Shipment Routes — lifecycle operations and read-only queries on the registry.

Invariants:
    - Mutating routes require a CallContext (X-Principal header)
    - GET /{shipment_id} answers {"shipment": null} for unknown ids instead of 404
    - Every other shipment query maps unknown ids to 404 via the global handler
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from coldchain.api.dependencies import get_call_context
from coldchain.core.domain_types import Principal, ShipmentId
from coldchain.core.shipment_state import CallContext
from coldchain.core.shipment_views import (
    emergency_report_view,
    shipment_status_view,
    shipment_view,
)
from coldchain.infrastructure.database import get_db
from coldchain.schemas.shipment import (
    ComplianceResponse,
    CustodyTransfer,
    EmergencyReportCreate,
    EmergencyReportResponse,
    QualityAssessmentResponse,
    ShipmentCreate,
    ShipmentStatusResponse,
)
from coldchain.services.shipment_lifecycle import ShipmentLifecycle
from coldchain.services.shipment_queries import ShipmentQueries

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/shipments", tags=["shipments"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_shipment(
    body: ShipmentCreate,
    ctx: CallContext = Depends(get_call_context),
    db: AsyncSession = Depends(get_db),
):
    """Register a shipment; its initial reading is logged at the origin."""
    record, sequence = await ShipmentLifecycle(db).create_shipment(
        ctx,
        ShipmentId(body.shipment_id),
        Principal(body.destination),
        body.product_type,
        body.min_temp,
        body.max_temp,
        body.initial_temp,
    )
    return {"shipment": shipment_view(record), "initial_log_sequence": sequence}


@router.get("/{shipment_id}")
async def get_shipment(shipment_id: str, db: AsyncSession = Depends(get_db)):
    record = await ShipmentQueries(db).get_shipment(ShipmentId(shipment_id))
    return {"shipment": shipment_view(record) if record else None}


@router.post("/{shipment_id}/transfer", response_model=ShipmentStatusResponse)
async def transfer_custody(
    shipment_id: str,
    body: CustodyTransfer,
    ctx: CallContext = Depends(get_call_context),
    db: AsyncSession = Depends(get_db),
):
    record = await ShipmentLifecycle(db).transfer_custody(
        ctx, ShipmentId(shipment_id), Principal(body.new_handler),
    )
    return shipment_status_view(record)


@router.post("/{shipment_id}/complete")
async def complete_delivery(
    shipment_id: str,
    ctx: CallContext = Depends(get_call_context),
    db: AsyncSession = Depends(get_db),
):
    final_quality = await ShipmentLifecycle(db).complete_delivery(
        ctx, ShipmentId(shipment_id),
    )
    return {"shipment_id": shipment_id, "final_quality_score": final_quality}


@router.post(
    "/{shipment_id}/emergency",
    response_model=ShipmentStatusResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_emergency(
    shipment_id: str,
    body: EmergencyReportCreate,
    ctx: CallContext = Depends(get_call_context),
    db: AsyncSession = Depends(get_db),
):
    record = await ShipmentLifecycle(db).report_emergency(
        ctx, ShipmentId(shipment_id), body.emergency_type, body.description,
    )
    return shipment_status_view(record)


@router.get(
    "/{shipment_id}/emergencies",
    response_model=list[EmergencyReportResponse],
)
async def list_emergency_reports(
    shipment_id: str, db: AsyncSession = Depends(get_db),
):
    reports = await ShipmentQueries(db).list_emergency_reports(ShipmentId(shipment_id))
    return [emergency_report_view(r) for r in reports]


@router.get("/{shipment_id}/status", response_model=ShipmentStatusResponse)
async def get_shipment_status(
    shipment_id: str, db: AsyncSession = Depends(get_db),
):
    return await ShipmentQueries(db).get_shipment_status(ShipmentId(shipment_id))


@router.get("/{shipment_id}/quality", response_model=QualityAssessmentResponse)
async def get_quality_assessment(
    shipment_id: str, db: AsyncSession = Depends(get_db),
):
    return await ShipmentQueries(db).get_quality_assessment(ShipmentId(shipment_id))


@router.get("/{shipment_id}/compliance", response_model=ComplianceResponse)
async def is_temperature_compliant(
    shipment_id: str, db: AsyncSession = Depends(get_db),
):
    return await ShipmentQueries(db).is_temperature_compliant(ShipmentId(shipment_id))

"""Temperature Log Routes — append readings and read the append-only log.

Invariants:
    - POST always answers 201 once the reading committed, breach or not
    - A breach is reported in the body (temperature_breach + warning envelope),
      never as an error status: the entry and the penalty already took effect
"""

import logging

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from coldchain.api.dependencies import get_call_context
from coldchain.core.domain_types import (
    FIRST_LOG_SEQUENCE,
    LogSequence,
    MAX_LOG_SEQUENCE,
    ShipmentId,
)
from coldchain.core.errors import TemperatureBreachError
from coldchain.core.shipment_state import CallContext
from coldchain.core.shipment_views import log_entry_view
from coldchain.infrastructure.database import get_db
from coldchain.schemas.shipment import TemperatureLogResponse, TemperatureReading
from coldchain.services.shipment_queries import ShipmentQueries
from coldchain.services.temperature_logging import TemperatureLogging

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/shipments/{shipment_id}/temperature-logs",
    tags=["temperature-logs"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def log_temperature(
    shipment_id: str,
    body: TemperatureReading,
    ctx: CallContext = Depends(get_call_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        sequence = await TemperatureLogging(db).log_temperature(
            ctx, ShipmentId(shipment_id),
            body.temperature, body.location, body.sensor_id,
        )
    except TemperatureBreachError as breach:
        return {
            "sequence": breach.sequence,
            "temperature_breach": True,
            "quality_score": breach.quality_score,
            "warning": breach.to_response()["error"],
        }
    return {"sequence": sequence, "temperature_breach": False}


@router.get("", response_model=list[TemperatureLogResponse])
async def list_temperature_logs(
    shipment_id: str,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    entries = await ShipmentQueries(db).list_temperature_logs(
        ShipmentId(shipment_id), limit=limit, offset=offset,
    )
    return [log_entry_view(e) for e in entries]


@router.get("/{sequence}", response_model=TemperatureLogResponse)
async def get_temperature_log(
    shipment_id: str,
    sequence: int = Path(ge=FIRST_LOG_SEQUENCE, le=MAX_LOG_SEQUENCE),
    db: AsyncSession = Depends(get_db),
):
    entry = await ShipmentQueries(db).get_temperature_log(
        ShipmentId(shipment_id), LogSequence(sequence),
    )
    return log_entry_view(entry)

"""Test factories — principals, call contexts and a vaccine shipment helper."""

from itertools import count

from coldchain.core.domain_types import (
    LogicalTimestamp,
    Principal,
    QualityScore,
    ShipmentId,
    ShipmentStatus,
)
from coldchain.core.shipment_state import CallContext, ShipmentRecord

OWNER = Principal("registry-owner")
SHIPPER = Principal("shipper")
CARRIER = Principal("carrier")
RECEIVER = Principal("pharmacy")
AUDITOR = Principal("auditor")
STRANGER = Principal("stranger")

_ticks = count(1000)


def ctx(caller: str, timestamp: int | None = None) -> CallContext:
    """CallContext with a fresh, increasing logical timestamp unless given."""
    ts = next(_ticks) if timestamp is None else timestamp
    return CallContext(caller=Principal(caller), timestamp=LogicalTimestamp(ts))


def make_record(**overrides) -> ShipmentRecord:
    """S1 vaccines shipment: bounds [2, 8], at 5, freshly created by SHIPPER."""
    fields = dict(
        shipment_id=ShipmentId("S1"),
        origin=SHIPPER,
        destination=RECEIVER,
        current_handler=SHIPPER,
        product_type="Vaccines",
        min_temp=2,
        max_temp=8,
        current_temp=5,
        status=ShipmentStatus.CREATED,
        created_at=LogicalTimestamp(100),
        updated_at=LogicalTimestamp(100),
        breach_count=0,
        quality_score=QualityScore(100),
    )
    fields.update(overrides)
    return ShipmentRecord(**fields)


def delivered_record(**overrides) -> ShipmentRecord:
    """S1 after complete-delivery by RECEIVER at logical time 300."""
    fields = dict(
        status=ShipmentStatus.COMPLETED,
        updated_at=LogicalTimestamp(300),
        completed_at=LogicalTimestamp(300),
    )
    fields.update(overrides)
    return make_record(**fields)


async def create_vaccines(lifecycle, shipment_id: str = "S1"):
    """create("S1", RECEIVER, "Vaccines", 2, 8, 5) as SHIPPER."""
    return await lifecycle.create_shipment(
        ctx(SHIPPER), ShipmentId(shipment_id), RECEIVER, "Vaccines", 2, 8, 5,
    )

"""Shipment ORM — persists the Shipment Registry.

Invariants:
    - id is the caller-supplied shipment identifier (bounded string primary key)
    - min_temp <= max_temp (CHECK constraint, also enforced in core)
    - 0 <= quality_score <= 100 (CHECK constraint, also enforced in core)
    - created_at / updated_at are logical timestamps (integers), not wall-clock

Design Decisions:
    - Aggregate counters (breach_count, quality_score) stored on the row:
      no JOIN to temperature_logs needed to answer quality queries
"""

from sqlalchemy import BigInteger, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from coldchain.core.domain_types import (
    MAX_PRINCIPAL_LENGTH,
    MAX_PRODUCT_TYPE_LENGTH,
    MAX_SHIPMENT_ID_LENGTH,
)
from coldchain.db.base import Base


class Shipment(Base):
    """Shipment aggregate root."""
    __tablename__ = "shipments"
    __table_args__ = (
        CheckConstraint("min_temp <= max_temp", name="ck_shipments_temp_range"),
        CheckConstraint(
            "quality_score >= 0 AND quality_score <= 100",
            name="ck_shipments_quality_bounds",
        ),
        CheckConstraint("breach_count >= 0", name="ck_shipments_breach_count"),
    )

    id: Mapped[str] = mapped_column(
        String(MAX_SHIPMENT_ID_LENGTH), primary_key=True,
    )
    origin: Mapped[str] = mapped_column(
        String(MAX_PRINCIPAL_LENGTH), nullable=False,
    )
    destination: Mapped[str] = mapped_column(
        String(MAX_PRINCIPAL_LENGTH), nullable=False,
    )
    current_handler: Mapped[str] = mapped_column(
        String(MAX_PRINCIPAL_LENGTH), nullable=False,
    )
    product_type: Mapped[str] = mapped_column(
        String(MAX_PRODUCT_TYPE_LENGTH), nullable=False,
    )
    min_temp: Mapped[int] = mapped_column(Integer, nullable=False)
    max_temp: Mapped[int] = mapped_column(Integer, nullable=False)
    current_temp: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="created",
    )
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    breach_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    quality_score: Mapped[int] = mapped_column(
        Integer, nullable=False, default=100,
    )
    # Set once on delivery; status may later read "emergency"
    completed_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

"""TemperatureLog ORM — append-only Temperature Log Store.

Invariants:
    - Keyed by (shipment_id, sequence); sequence is globally unique
    - Rows are inserted once and never updated or deleted by the registry

Design Decisions:
    - Composite primary key mirrors the (shipment, sequence) lookup of
      get-temperature-log; separate UNIQUE on sequence guards global uniqueness
"""

from sqlalchemy import BigInteger, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from coldchain.core.domain_types import (
    MAX_LOCATION_LENGTH,
    MAX_PRINCIPAL_LENGTH,
    MAX_SENSOR_ID_LENGTH,
    MAX_SHIPMENT_ID_LENGTH,
)
from coldchain.db.base import Base


class TemperatureLog(Base):
    """One immutable temperature reading."""
    __tablename__ = "temperature_logs"
    __table_args__ = (
        UniqueConstraint("sequence", name="uq_temperature_logs_sequence"),
    )

    shipment_id: Mapped[str] = mapped_column(
        String(MAX_SHIPMENT_ID_LENGTH),
        ForeignKey("shipments.id"),
        primary_key=True,
    )
    sequence: Mapped[int] = mapped_column(
        BigInteger, primary_key=True, autoincrement=False,
    )
    temperature: Mapped[int] = mapped_column(Integer, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    location: Mapped[str] = mapped_column(
        String(MAX_LOCATION_LENGTH), nullable=False,
    )
    handler: Mapped[str] = mapped_column(
        String(MAX_PRINCIPAL_LENGTH), nullable=False,
    )
    sensor_id: Mapped[str] = mapped_column(
        String(MAX_SENSOR_ID_LENGTH), nullable=False,
    )

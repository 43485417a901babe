"""EmergencyReport ORM — append-only history of report-emergency calls.

Invariants:
    - Always belongs to a Shipment (shipment_id FK)
    - Rows are never updated; id orders reports chronologically
"""

from sqlalchemy import BigInteger, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from coldchain.core.domain_types import (
    MAX_EMERGENCY_TYPE_LENGTH,
    MAX_PRINCIPAL_LENGTH,
    MAX_SHIPMENT_ID_LENGTH,
)
from coldchain.db.base import Base


class EmergencyReportRow(Base):
    __tablename__ = "emergency_reports"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    shipment_id: Mapped[str] = mapped_column(
        String(MAX_SHIPMENT_ID_LENGTH),
        ForeignKey("shipments.id"),
        nullable=False,
        index=True,
    )
    emergency_type: Mapped[str] = mapped_column(
        String(MAX_EMERGENCY_TYPE_LENGTH), nullable=False,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    reporter: Mapped[str] = mapped_column(
        String(MAX_PRINCIPAL_LENGTH), nullable=False,
    )
    reported_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    previous_status: Mapped[str] = mapped_column(String(20), nullable=False)

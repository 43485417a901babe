"""Shipment delivery marker — completed_at survives post-delivery emergencies.

Revision ID: 002_completed_at
Revises: 001_initial
Create Date: 2026-10-19

Backfills completed shipments, and shipments reopened to "emergency" by a report
whose previous_status was "completed".
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_completed_at"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("shipments", sa.Column("completed_at", sa.BigInteger, nullable=True))
    op.execute(
        "UPDATE shipments SET completed_at = updated_at WHERE status = 'completed'"
    )
    op.execute(
        "UPDATE shipments SET completed_at = ("
        " SELECT MIN(r.reported_at) FROM emergency_reports r"
        " WHERE r.shipment_id = shipments.id AND r.previous_status = 'completed'"
        ") WHERE completed_at IS NULL AND EXISTS ("
        " SELECT 1 FROM emergency_reports r"
        " WHERE r.shipment_id = shipments.id AND r.previous_status = 'completed'"
        ")"
    )


def downgrade() -> None:
    op.drop_column("shipments", "completed_at")

"""Initial schema — shipments, temperature_logs, authorized_handlers, registry_state, emergency_reports.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "shipments",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("origin", sa.String(128), nullable=False),
        sa.Column("destination", sa.String(128), nullable=False),
        sa.Column("current_handler", sa.String(128), nullable=False),
        sa.Column("product_type", sa.String(64), nullable=False),
        sa.Column("min_temp", sa.Integer, nullable=False),
        sa.Column("max_temp", sa.Integer, nullable=False),
        sa.Column("current_temp", sa.Integer, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="created"),
        sa.Column("created_at", sa.BigInteger, nullable=False),
        sa.Column("updated_at", sa.BigInteger, nullable=False),
        sa.Column("breach_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("quality_score", sa.Integer, nullable=False, server_default="100"),
        sa.CheckConstraint("min_temp <= max_temp", name="ck_shipments_temp_range"),
        sa.CheckConstraint(
            "quality_score >= 0 AND quality_score <= 100",
            name="ck_shipments_quality_bounds",
        ),
        sa.CheckConstraint("breach_count >= 0", name="ck_shipments_breach_count"),
    )

    op.create_table(
        "temperature_logs",
        sa.Column("shipment_id", sa.String(64), sa.ForeignKey("shipments.id"), primary_key=True),
        sa.Column("sequence", sa.BigInteger, primary_key=True, autoincrement=False),
        sa.Column("temperature", sa.Integer, nullable=False),
        sa.Column("timestamp", sa.BigInteger, nullable=False),
        sa.Column("location", sa.String(100), nullable=False),
        sa.Column("handler", sa.String(128), nullable=False),
        sa.Column("sensor_id", sa.String(50), nullable=False),
        sa.UniqueConstraint("sequence", name="uq_temperature_logs_sequence"),
    )

    op.create_table(
        "authorized_handlers",
        sa.Column("principal", sa.String(128), primary_key=True),
        sa.Column("authorized", sa.Boolean, nullable=False, server_default=sa.true()),
    )

    op.create_table(
        "registry_state",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("next_log_sequence", sa.BigInteger, nullable=False, server_default="1"),
        sa.CheckConstraint("next_log_sequence >= 1", name="ck_registry_state_sequence"),
    )

    op.create_table(
        "emergency_reports",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("shipment_id", sa.String(64), sa.ForeignKey("shipments.id"), nullable=False),
        sa.Column("emergency_type", sa.String(50), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("reporter", sa.String(128), nullable=False),
        sa.Column("reported_at", sa.BigInteger, nullable=False),
        sa.Column("previous_status", sa.String(20), nullable=False),
    )
    op.create_index(
        "ix_emergency_reports_shipment_id", "emergency_reports", ["shipment_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_emergency_reports_shipment_id", table_name="emergency_reports")
    op.drop_table("emergency_reports")
    op.drop_table("registry_state")
    op.drop_table("authorized_handlers")
    op.drop_table("temperature_logs")
    op.drop_table("shipments")

"""Initial schema: vendor catalog and coverage cases.

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # -- Catalog --
    op.create_table(
        "vendor_components",
        sa.Column("component_id", UUID(as_uuid=True), primary_key=True),
        sa.Column("vendor", sa.String(100), nullable=False),
        sa.Column("component_type", sa.String(50), nullable=False),
        sa.Column("vendor_part_number", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("metadata_json", JSONB, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_vendor_components_vendor_type",
        "vendor_components",
        ["vendor", "component_type"],
    )

    op.create_table(
        "vendor_performance_points",
        sa.Column("point_id", UUID(as_uuid=True), primary_key=True),
        sa.Column("vendor", sa.String(100), nullable=False),
        sa.Column("series", sa.String(100), nullable=False),
        sa.Column("model_type", sa.String(200), nullable=False),
        sa.Column("motor_hp", sa.Float, nullable=False),
        sa.Column("output_rpm", sa.Float, nullable=True),
        sa.Column("output_torque_lb_in", sa.Float, nullable=True),
        sa.Column("service_factor", sa.Float, nullable=True),
        sa.Column("metadata_json", JSONB, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_vendor_performance_points_vendor_series",
        "vendor_performance_points",
        ["vendor", "series"],
    )

    # -- Coverage (DERIVED, replaced by every run) --
    op.create_table(
        "coverage_cases",
        sa.Column("case_id", UUID(as_uuid=True), primary_key=True),
        sa.Column("case_key", sa.String(500), nullable=False),
        sa.Column("inputs_json", JSONB, nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("resolved_pns", JSONB, nullable=True),
        sa.Column("message", sa.Text, nullable=True),
        sa.Column("components_json", JSONB, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_checked_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_coverage_cases_case_key", "coverage_cases", ["case_key"], unique=True)
    op.create_index("ix_coverage_cases_status", "coverage_cases", ["status"])
    op.create_index("ix_coverage_cases_last_checked_at", "coverage_cases", ["last_checked_at"])


def downgrade() -> None:
    op.drop_index("ix_coverage_cases_last_checked_at", table_name="coverage_cases")
    op.drop_index("ix_coverage_cases_status", table_name="coverage_cases")
    op.drop_index("ix_coverage_cases_case_key", table_name="coverage_cases")
    op.drop_table("coverage_cases")
    op.drop_index(
        "ix_vendor_performance_points_vendor_series",
        table_name="vendor_performance_points",
    )
    op.drop_table("vendor_performance_points")
    op.drop_index("ix_vendor_components_vendor_type", table_name="vendor_components")
    op.drop_table("vendor_components")

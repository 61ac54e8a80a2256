"""SQLAlchemy ORM table models for gearbom.

Uses FlexJSON (JSONB on Postgres, JSON on SQLite) for metadata and
snapshot columns.

Categories:
- CATALOG: VendorComponentRow, VendorPerformancePointRow (reference data,
           written by seed/import jobs, read by the resolver)
- DERIVED: CoverageCaseRow (fully replaced by every coverage run)
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Float, Index, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from gearbom.db.session import Base

# JSONB on PostgreSQL, plain JSON on SQLite (for tests)
FlexJSON = JSONB().with_variant(JSON(), "sqlite")


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class VendorComponentRow(Base):
    """One orderable (or placeholder) vendor component record."""

    __tablename__ = "vendor_components"
    __table_args__ = (
        Index("ix_vendor_components_vendor_type", "vendor", "component_type"),
    )

    component_id: Mapped[UUID] = mapped_column(primary_key=True)
    vendor: Mapped[str] = mapped_column(String(100), nullable=False)
    component_type: Mapped[str] = mapped_column(String(50), nullable=False)
    vendor_part_number: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    metadata_json: Mapped[dict] = mapped_column(FlexJSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class VendorPerformancePointRow(Base):
    """Catalog performance point: one gearmotor at one output speed."""

    __tablename__ = "vendor_performance_points"
    __table_args__ = (
        Index("ix_vendor_performance_points_vendor_series", "vendor", "series"),
    )

    point_id: Mapped[UUID] = mapped_column(primary_key=True)
    vendor: Mapped[str] = mapped_column(String(100), nullable=False)
    series: Mapped[str] = mapped_column(String(100), nullable=False)
    model_type: Mapped[str] = mapped_column(String(200), nullable=False)
    motor_hp: Mapped[float] = mapped_column(Float, nullable=False)
    output_rpm: Mapped[float | None] = mapped_column(Float, nullable=True)
    output_torque_lb_in: Mapped[float | None] = mapped_column(Float, nullable=True)
    service_factor: Mapped[float | None] = mapped_column(Float, nullable=True)
    metadata_json: Mapped[dict] = mapped_column(FlexJSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


# ---------------------------------------------------------------------------
# Coverage (DERIVED, safe to regenerate)
# ---------------------------------------------------------------------------


class CoverageCaseRow(Base):
    """Classified resolver outcome for one enumerated requirement input."""

    __tablename__ = "coverage_cases"

    case_id: Mapped[UUID] = mapped_column(primary_key=True)
    case_key: Mapped[str] = mapped_column(
        String(500), unique=True, nullable=False, index=True,
    )
    inputs_json: Mapped[dict] = mapped_column(FlexJSON, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    resolved_pns: Mapped[list] = mapped_column(FlexJSON, default=list)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    components_json: Mapped[dict] = mapped_column(FlexJSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_checked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )

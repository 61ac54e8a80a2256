"""Vendor catalog repository: component records and performance points.

Repos take AsyncSession, call add()/flush()/execute() only; never commit().

Attribute filters are applied to metadata_json in Python so the same code
runs on PostgreSQL (JSONB) and SQLite (JSON) without dialect-specific
operators. Catalog tables are small (hundreds of rows per vendor).
"""

import math
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gearbom.db.tables import VendorComponentRow, VendorPerformancePointRow
from gearbom.engine.catalog_cache import CatalogCache
from gearbom.models.common import new_uuid7, utc_now

# Absolute tolerance for numeric metadata comparisons (HP, ratio, bore).
NUMERIC_TOLERANCE = 0.01


def metadata_matches(metadata: dict | None, filters: dict[str, object]) -> bool:
    """True when every filter key is present in *metadata* with an equal value.

    Strings compare exactly. Numbers compare within NUMERIC_TOLERANCE.
    """
    if not filters:
        return True
    if not metadata:
        return False
    for key, expected in filters.items():
        actual = metadata.get(key)
        if actual is None:
            return False
        if isinstance(expected, (int, float)) and not isinstance(expected, bool):
            try:
                actual_num = float(actual)
            except (TypeError, ValueError):
                return False
            if not math.isclose(actual_num, float(expected), abs_tol=NUMERIC_TOLERANCE):
                return False
        elif actual != expected:
            return False
    return True


class CatalogRepository:
    """Read access to the vendor component catalog, with optional caching."""

    def __init__(self, session: AsyncSession, cache: CatalogCache | None = None) -> None:
        self._session = session
        self._cache = cache

    async def create_component(
        self,
        *,
        vendor: str,
        component_type: str,
        vendor_part_number: str,
        description: str | None = None,
        metadata: dict | None = None,
        component_id: UUID | None = None,
    ) -> VendorComponentRow:
        row = VendorComponentRow(
            component_id=component_id or new_uuid7(),
            vendor=vendor,
            component_type=component_type,
            vendor_part_number=vendor_part_number,
            description=description,
            metadata_json=metadata or {},
            created_at=utc_now(),
        )
        self._session.add(row)
        await self._session.flush()
        if self._cache is not None:
            self._cache.invalidate(("components", vendor, component_type))
        return row

    async def create_performance_point(
        self,
        *,
        vendor: str,
        series: str,
        model_type: str,
        motor_hp: float,
        output_rpm: float | None = None,
        output_torque_lb_in: float | None = None,
        service_factor: float | None = None,
        metadata: dict | None = None,
    ) -> VendorPerformancePointRow:
        row = VendorPerformancePointRow(
            point_id=new_uuid7(),
            vendor=vendor,
            series=series,
            model_type=model_type,
            motor_hp=motor_hp,
            output_rpm=output_rpm,
            output_torque_lb_in=output_torque_lb_in,
            service_factor=service_factor,
            metadata_json=metadata or {},
            created_at=utc_now(),
        )
        self._session.add(row)
        await self._session.flush()
        if self._cache is not None:
            self._cache.invalidate(("performance_points", vendor, series))
        return row

    async def list_components(
        self, vendor: str, component_type: str,
    ) -> list[VendorComponentRow]:
        """All records of one type for a vendor, ordered by part number."""
        signature = ("components", vendor, component_type)
        if self._cache is not None:
            cached = self._cache.get(signature)
            if cached is not None:
                return cached

        result = await self._session.execute(
            select(VendorComponentRow)
            .where(
                VendorComponentRow.vendor == vendor,
                VendorComponentRow.component_type == component_type,
            )
            .order_by(VendorComponentRow.vendor_part_number)
        )
        rows = list(result.scalars().all())
        if self._cache is not None:
            self._cache.put(signature, rows)
        return rows

    async def query_components(
        self,
        vendor: str,
        component_type: str,
        filters: dict[str, object] | None = None,
    ) -> list[VendorComponentRow]:
        """Records of one type whose metadata matches every attribute filter."""
        rows = await self.list_components(vendor, component_type)
        return [row for row in rows if metadata_matches(row.metadata_json, filters or {})]

    async def list_performance_points(
        self, vendor: str, series: str,
    ) -> list[VendorPerformancePointRow]:
        signature = ("performance_points", vendor, series)
        if self._cache is not None:
            cached = self._cache.get(signature)
            if cached is not None:
                return cached

        result = await self._session.execute(
            select(VendorPerformancePointRow).where(
                VendorPerformancePointRow.vendor == vendor,
                VendorPerformancePointRow.series == series,
            )
        )
        rows = list(result.scalars().all())
        if self._cache is not None:
            self._cache.put(signature, rows)
        return rows

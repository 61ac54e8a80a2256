"""Tests for the caller-owned catalog read cache."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from gearbom.engine.catalog_cache import CatalogCache
from gearbom.models.common import CatalogComponentType
from gearbom.repositories.catalog import CatalogRepository


class TestCatalogCache:

    def test_miss_then_hit(self) -> None:
        cache = CatalogCache()
        assert cache.get(("components", "NORD", "MOTOR")) is None
        cache.put(("components", "NORD", "MOTOR"), ["row"])
        assert cache.get(("components", "NORD", "MOTOR")) == ["row"]
        assert (cache.hits, cache.misses) == (1, 1)

    def test_put_copies_rows(self) -> None:
        cache = CatalogCache()
        rows = ["a"]
        cache.put("sig", rows)
        rows.append("b")
        assert cache.get("sig") == ["a"]

    def test_invalidate_one_or_all(self) -> None:
        cache = CatalogCache()
        cache.put("a", [1])
        cache.put("b", [2])
        cache.invalidate("a")
        assert len(cache) == 1
        assert cache.get("a") is None
        cache.invalidate()
        assert len(cache) == 0


class TestRepositoryCaching:

    @pytest.mark.anyio
    async def test_repeated_reads_hit_cache(self, db_session: AsyncSession) -> None:
        cache = CatalogCache()
        repo = CatalogRepository(db_session, cache=cache)
        await repo.create_component(
            vendor="NORD",
            component_type=CatalogComponentType.INPUT_ADAPTER.value,
            vendor_part_number="60395510",
            metadata={"adapter_code": "56C"},
        )

        for _ in range(3):
            rows = await repo.query_components("NORD", "INPUT_ADAPTER", {"adapter_code": "56C"})
            assert len(rows) == 1
        assert cache.misses == 1
        assert cache.hits == 2

    @pytest.mark.anyio
    async def test_create_invalidates_signature(self, db_session: AsyncSession) -> None:
        cache = CatalogCache()
        repo = CatalogRepository(db_session, cache=cache)
        assert await repo.list_components("NORD", "MOTOR") == []

        await repo.create_component(
            vendor="NORD",
            component_type=CatalogComponentType.MOTOR.value,
            vendor_part_number="31610012",
            metadata={"adapter_code": "56C", "motor_frame": "63S/4", "motor_hp": 0.25},
        )
        rows = await repo.list_components("NORD", "MOTOR")
        assert [r.vendor_part_number for r in rows] == ["31610012"]

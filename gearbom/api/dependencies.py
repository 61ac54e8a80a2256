"""FastAPI dependency injection factories for repositories and services.

Each factory takes AsyncSession via Depends(get_async_session) and returns
a repository instance. API endpoints use these via Depends().
"""

import asyncio

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gearbom.config.settings import Settings, get_settings
from gearbom.db.session import get_async_session
from gearbom.engine.bom import BomResolver
from gearbom.engine.catalog_cache import CatalogCache
from gearbom.engine.coverage import CoverageGenerator
from gearbom.engine.coverage_query import CoverageQueryService
from gearbom.repositories.catalog import CatalogRepository
from gearbom.repositories.coverage import CoverageRepository

# ---------------------------------------------------------------------------
# Catalog / BOM
# ---------------------------------------------------------------------------


async def get_catalog_repo(
    session: AsyncSession = Depends(get_async_session),
) -> CatalogRepository:
    # One cache per request: repeated reads within a resolve or a coverage
    # run hit memory, nothing outlives the request.
    return CatalogRepository(session, cache=CatalogCache())


async def get_bom_resolver(
    catalog: CatalogRepository = Depends(get_catalog_repo),
    settings: Settings = Depends(get_settings),
) -> BomResolver:
    return BomResolver(catalog, vendor=settings.CATALOG_VENDOR)


# ---------------------------------------------------------------------------
# Coverage
# ---------------------------------------------------------------------------


async def get_coverage_repo(
    session: AsyncSession = Depends(get_async_session),
) -> CoverageRepository:
    return CoverageRepository(session)


def get_coverage_lock(request: Request) -> asyncio.Lock:
    """Application-wide single-flight lock for coverage regeneration."""
    return request.app.state.coverage_lock


async def get_coverage_generator(
    session: AsyncSession = Depends(get_async_session),
    catalog: CatalogRepository = Depends(get_catalog_repo),
    coverage_repo: CoverageRepository = Depends(get_coverage_repo),
    lock: asyncio.Lock = Depends(get_coverage_lock),
    settings: Settings = Depends(get_settings),
) -> CoverageGenerator:
    return CoverageGenerator(
        catalog=catalog,
        coverage_repo=coverage_repo,
        lock=lock,
        vendor=settings.CATALOG_VENDOR,
        series=settings.COVERAGE_SERIES,
        max_cases=settings.COVERAGE_MAX_CASES,
        batch_size=settings.COVERAGE_BATCH_SIZE,
        # Committed while the coverage lock is still held.
        commit=session.commit,
    )


async def get_coverage_query(
    coverage_repo: CoverageRepository = Depends(get_coverage_repo),
) -> CoverageQueryService:
    return CoverageQueryService(coverage_repo)

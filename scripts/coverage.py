"""Coverage script: regenerate coverage_cases and print the summary.

Runs the same generator as POST /v1/coverage/generate, outside the API
process. Only one run per invocation, so the asyncio lock here is local;
the advisory lock taken inside the run keeps it from racing the API.

Usage:
    python -m scripts coverage          # against DATABASE_URL from .env
    python -m scripts coverage --failed # also list unresolved/invalid cases
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from gearbom.config.settings import Settings, get_settings
from gearbom.engine.catalog_cache import CatalogCache
from gearbom.engine.coverage import CoverageGenerator
from gearbom.engine.coverage_query import CoverageQueryService
from gearbom.models.common import CoverageStatus
from gearbom.models.coverage import CoverageGenerationResult
from gearbom.repositories.catalog import CatalogRepository
from gearbom.repositories.coverage import CoverageRepository


async def regenerate(session: AsyncSession, settings: Settings) -> CoverageGenerationResult:
    """Run and commit one coverage generation inside *session*.

    The local lock only guards this process; runs from the API or another
    CLI are excluded by the database advisory lock the generator takes.
    """
    generator = CoverageGenerator(
        catalog=CatalogRepository(session, cache=CatalogCache()),
        coverage_repo=CoverageRepository(session),
        lock=asyncio.Lock(),
        vendor=settings.CATALOG_VENDOR,
        series=settings.COVERAGE_SERIES,
        max_cases=settings.COVERAGE_MAX_CASES,
        batch_size=settings.COVERAGE_BATCH_SIZE,
        commit=session.commit,
    )
    return await generator.generate()


async def failed_case_lines(session: AsyncSession) -> list[str]:
    """One line per persisted unresolved or invalid case."""
    query = CoverageQueryService(CoverageRepository(session))
    lines: list[str] = []
    for status in (CoverageStatus.UNRESOLVED, CoverageStatus.INVALID):
        for row in await query.get_cases(status):
            lines.append(f"  {row.status:<11} {row.case_key:<60} {row.message or ''}")
    return lines


async def _run_coverage(show_failed: bool = False) -> None:
    from gearbom.db.session import session_scope

    settings = get_settings()
    async with session_scope() as session:
        result = await regenerate(session, settings)

        summary = result.summary
        print(f"Coverage for {settings.CATALOG_VENDOR} {settings.COVERAGE_SERIES}:")
        print(f"  {'Status':<12} {'Cases':>6}")
        print(f"  {'─' * 12} {'─' * 6}")
        for status in CoverageStatus:
            print(f"  {status.value:<12} {getattr(summary, status.value):>6}")
        print(f"  {'TOTAL':<12} {summary.total:>6}")

        if result.errors:
            print()
            print(f"  Batch errors ({len(result.errors)}):")
            for error in result.errors:
                print(f"    ! {error}")

        if show_failed:
            print()
            for line in await failed_case_lines(session):
                print(line)

"""Coverage generation: enumerate, resolve, classify and persist.

1. Enumerate requirement inputs from the catalog
2. Delete every persisted coverage row (failure aborts the run)
3. Resolve and classify each input sequentially, tallying the summary
4. Insert results in fixed-size batches; a failed batch is logged and
   reported in ``errors`` while later batches still run
5. Return the in-memory summary and the batch errors

The summary is computed before persistence, so when ``errors`` is non-empty
it overstates the persisted row count. Coverage rows are a regenerable
report; this best-effort write policy is not meant for authoritative data.

Runs are serialized twice, and both guards cover the commit:

- an asyncio.Lock owned by the caller (the API keeps one on app.state)
- a transaction-scoped advisory lock taken through the coverage repository,
  which also excludes runs from other processes such as the CLI

The caller passes ``commit`` so the transaction is committed while the
asyncio.Lock is still held. A run requested while either guard is taken
fails fast with CoverageRunInProgressError instead of racing on
delete/insert.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from sqlalchemy.exc import SQLAlchemyError

from gearbom.engine.bom import BomResolver
from gearbom.engine.classifier import run_coverage_case
from gearbom.engine.enumerator import MAX_COVERAGE_CASES, enumerate_coverage_inputs
from gearbom.engine.errors import CoverageRunInProgressError, CoverageStoreError
from gearbom.models.common import utc_now
from gearbom.models.coverage import CoverageGenerationResult, CoverageResult, CoverageSummary
from gearbom.repositories.catalog import CatalogRepository
from gearbom.repositories.coverage import CoverageRepository

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


class CoverageGenerator:
    """Runs one full coverage regeneration against a catalog."""

    def __init__(
        self,
        *,
        catalog: CatalogRepository,
        coverage_repo: CoverageRepository,
        lock: asyncio.Lock,
        vendor: str = "NORD",
        series: str = "FLEXBLOC",
        max_cases: int = MAX_COVERAGE_CASES,
        batch_size: int = DEFAULT_BATCH_SIZE,
        commit: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self._catalog = catalog
        self._coverage_repo = coverage_repo
        self._lock = lock
        self._vendor = vendor
        self._series = series
        self._max_cases = max_cases
        self._batch_size = batch_size
        self._commit = commit
        self._resolver = BomResolver(catalog, vendor=vendor)

    async def generate(self) -> CoverageGenerationResult:
        """Regenerate the whole coverage table.

        Raises:
            CoverageRunInProgressError: another run holds either guard.
            CoverageStoreError: existing rows could not be cleared, or the
                run could not be committed.
        """
        if self._lock.locked():
            raise CoverageRunInProgressError("A coverage run is already in progress")

        async with self._lock:
            if not await self._coverage_repo.try_lock_runs():
                raise CoverageRunInProgressError(
                    "A coverage run is already in progress in another process"
                )
            result = await self._generate()
            if self._commit is not None:
                try:
                    await self._commit()
                except SQLAlchemyError as exc:
                    logger.error("Coverage run could not be committed: %s", exc)
                    raise CoverageStoreError(f"Failed to commit coverage run: {exc}") from exc
            return result

    async def _generate(self) -> CoverageGenerationResult:
        logger.info("Coverage run starting for %s %s", self._vendor, self._series)

        inputs = await enumerate_coverage_inputs(
            self._catalog,
            vendor=self._vendor,
            series=self._series,
            max_cases=self._max_cases,
        )

        try:
            removed = await self._coverage_repo.delete_all()
        except SQLAlchemyError as exc:
            logger.error("Coverage run aborted: failed to clear existing rows: %s", exc)
            raise CoverageStoreError(f"Failed to clear coverage data: {exc}") from exc
        logger.info("Cleared %d existing coverage rows", removed)

        results: list[CoverageResult] = []
        for requirement in inputs:
            results.append(await run_coverage_case(self._resolver, requirement))

        summary = CoverageSummary.tally(
            [result.status for result in results],
            generated_at=utc_now(),
        )

        errors = await self._persist(results)

        logger.info(
            "Coverage run complete: total=%d resolved=%d ambiguous=%d "
            "unresolved=%d invalid=%d batch_errors=%d",
            summary.total, summary.resolved, summary.ambiguous,
            summary.unresolved, summary.invalid, len(errors),
        )
        return CoverageGenerationResult(summary=summary, errors=errors)

    async def _persist(self, results: list[CoverageResult]) -> list[str]:
        errors: list[str] = []
        checked_at = utc_now()
        for start in range(0, len(results), self._batch_size):
            batch = results[start:start + self._batch_size]
            try:
                await self._coverage_repo.insert_batch(batch, checked_at=checked_at)
            except SQLAlchemyError as exc:
                logger.exception("Coverage batch insert failed at offset %d", start)
                errors.append(f"Batch at offset {start}: {exc}")
        return errors

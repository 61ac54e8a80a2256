"""Read-only views over persisted coverage cases.

The summary is always derived from the rows themselves; no separately
stored summary is trusted.
"""

from gearbom.db.tables import CoverageCaseRow
from gearbom.models.common import CoverageStatus, utc_now
from gearbom.models.coverage import CoverageSummary
from gearbom.repositories.coverage import CoverageRepository


class CoverageQueryService:
    def __init__(self, coverage_repo: CoverageRepository) -> None:
        self._repo = coverage_repo

    async def get_summary(self) -> CoverageSummary:
        """Tally persisted rows by status.

        ``generated_at`` is the most recent ``last_checked_at``, or now
        when the table is empty.
        """
        rows = await self._repo.list_statuses()
        generated_at = max((checked_at for _, checked_at in rows), default=None)
        return CoverageSummary.tally(
            [status for status, _ in rows],
            generated_at=generated_at or utc_now(),
        )

    async def get_cases(self, status: CoverageStatus | None = None) -> list[CoverageCaseRow]:
        """Persisted cases ordered by status then case key."""
        return await self._repo.list_cases(status)

    async def get_case(self, case_key: str) -> CoverageCaseRow | None:
        return await self._repo.get_by_key(case_key)

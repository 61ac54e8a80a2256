"""Coverage case repository.

Repos take AsyncSession, call add()/flush()/execute() only; never commit().
The session dependency handles commit/rollback (Unit-of-Work).

coverage_cases is derived data: every run deletes all rows and inserts the
new result set in batches.
"""

from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gearbom.db.tables import CoverageCaseRow
from gearbom.models.common import CoverageStatus, new_uuid7, utc_now
from gearbom.models.coverage import CoverageResult

# Advisory lock key serializing coverage runs across processes ("gbom").
COVERAGE_RUN_LOCK_KEY = 0x67626F6D


class CoverageRepository:
    """DB-backed store of classified coverage cases."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def try_lock_runs(self) -> bool:
        """Take the cross-process coverage-run guard for this transaction.

        On PostgreSQL this is pg_try_advisory_xact_lock, released by commit
        or rollback. Returns False when another transaction holds it. Other
        dialects have no advisory locks and always return True.
        """
        if self._session.get_bind().dialect.name != "postgresql":
            return True
        result = await self._session.execute(
            select(func.pg_try_advisory_xact_lock(COVERAGE_RUN_LOCK_KEY))
        )
        return bool(result.scalar_one())

    async def delete_all(self) -> int:
        """Delete every coverage row. Returns the number of rows removed."""
        result = await self._session.execute(delete(CoverageCaseRow))
        await self._session.flush()
        return result.rowcount or 0

    async def insert_batch(
        self,
        results: list[CoverageResult],
        *,
        checked_at: datetime | None = None,
    ) -> list[CoverageCaseRow]:
        """Insert one batch of results inside a SAVEPOINT.

        A failing batch rolls back to the savepoint and re-raises, leaving
        earlier batches in the enclosing transaction untouched.
        """
        checked_at = checked_at or utc_now()
        rows = [
            CoverageCaseRow(
                case_id=new_uuid7(),
                case_key=result.case_key,
                inputs_json=result.inputs.model_dump(mode="json"),
                status=result.status.value,
                resolved_pns=list(result.resolved_pns),
                message=result.message,
                components_json={
                    name: snapshot.model_dump(mode="json")
                    for name, snapshot in result.components.items()
                },
                created_at=checked_at,
                last_checked_at=checked_at,
            )
            for result in results
        ]
        async with self._session.begin_nested():
            self._session.add_all(rows)
            await self._session.flush()
        return rows

    async def list_cases(self, status: CoverageStatus | None = None) -> list[CoverageCaseRow]:
        """All cases ordered by status name then case key, optionally one status only."""
        stmt = select(CoverageCaseRow).order_by(CoverageCaseRow.status, CoverageCaseRow.case_key)
        if status is not None:
            stmt = stmt.where(CoverageCaseRow.status == CoverageStatus(status).value)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_key(self, case_key: str) -> CoverageCaseRow | None:
        result = await self._session.execute(
            select(CoverageCaseRow).where(CoverageCaseRow.case_key == case_key)
        )
        return result.scalar_one_or_none()

    async def list_statuses(self) -> list[tuple[str, datetime]]:
        """(status, last_checked_at) for every persisted row."""
        result = await self._session.execute(
            select(CoverageCaseRow.status, CoverageCaseRow.last_checked_at)
        )
        return [(row.status, row.last_checked_at) for row in result.all()]

    async def count(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(CoverageCaseRow))
        return int(result.scalar_one())

"""FastAPI coverage endpoints.

POST /v1/coverage/generate        regenerate every coverage case
GET  /v1/coverage/summary         status counts derived from persisted cases
GET  /v1/coverage/cases           persisted cases, optional ?status= filter
GET  /v1/coverage/cases/{key}     one persisted case by case key

Regeneration is single-flight: a second request while a run is active
gets 409 instead of interleaving deletes and inserts.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from gearbom.api.dependencies import get_coverage_generator, get_coverage_query
from gearbom.db.tables import CoverageCaseRow
from gearbom.engine.coverage import CoverageGenerator
from gearbom.engine.coverage_query import CoverageQueryService
from gearbom.engine.errors import CoverageRunInProgressError, CoverageStoreError
from gearbom.models.common import CoverageStatus
from gearbom.models.coverage import CoverageSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/coverage", tags=["coverage"])


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class CoverageSummaryResponse(BaseModel):
    total: int
    resolved: int
    ambiguous: int
    unresolved: int
    invalid: int
    generated_at: str


class GenerateCoverageResponse(BaseModel):
    """Summary of the run just completed plus any failed insert batches."""

    summary: CoverageSummaryResponse
    errors: list[str] = Field(default_factory=list)


class CoverageCaseResponse(BaseModel):
    case_id: str
    case_key: str
    inputs: dict
    status: str
    resolved_pns: list[str]
    message: str | None = None
    components: dict
    last_checked_at: str


def _summary_to_response(summary: CoverageSummary) -> CoverageSummaryResponse:
    return CoverageSummaryResponse(
        total=summary.total,
        resolved=summary.resolved,
        ambiguous=summary.ambiguous,
        unresolved=summary.unresolved,
        invalid=summary.invalid,
        generated_at=summary.generated_at.isoformat(),
    )


def _row_to_response(row: CoverageCaseRow) -> CoverageCaseResponse:
    """Convert a CoverageCaseRow to response model."""
    return CoverageCaseResponse(
        case_id=str(row.case_id),
        case_key=row.case_key,
        inputs=row.inputs_json or {},
        status=row.status,
        resolved_pns=list(row.resolved_pns or []),
        message=row.message,
        components=row.components_json or {},
        last_checked_at=row.last_checked_at.isoformat(),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/generate", response_model=GenerateCoverageResponse)
async def generate_coverage(
    generator: CoverageGenerator = Depends(get_coverage_generator),
) -> GenerateCoverageResponse:
    """Enumerate, resolve and classify every coverage case, replacing stored rows."""
    try:
        result = await generator.generate()
    except CoverageRunInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except CoverageStoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    if result.errors:
        logger.warning("Coverage run finished with %d failed batches", len(result.errors))
    return GenerateCoverageResponse(
        summary=_summary_to_response(result.summary),
        errors=result.errors,
    )


@router.get("/summary", response_model=CoverageSummaryResponse)
async def get_coverage_summary(
    query: CoverageQueryService = Depends(get_coverage_query),
) -> CoverageSummaryResponse:
    return _summary_to_response(await query.get_summary())


@router.get("/cases", response_model=list[CoverageCaseResponse])
async def list_coverage_cases(
    status: CoverageStatus | None = Query(default=None),
    query: CoverageQueryService = Depends(get_coverage_query),
) -> list[CoverageCaseResponse]:
    """Persisted cases ordered by status, then case key."""
    rows = await query.get_cases(status)
    return [_row_to_response(row) for row in rows]


@router.get("/cases/{case_key}", response_model=CoverageCaseResponse)
async def get_coverage_case(
    case_key: str,
    query: CoverageQueryService = Depends(get_coverage_query),
) -> CoverageCaseResponse:
    row = await query.get_case(case_key)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Coverage case {case_key} not found")
    return _row_to_response(row)

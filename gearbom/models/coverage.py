"""Coverage models: requirement inputs, per-case results, run summaries."""

from datetime import datetime

from pydantic import Field, model_validator

from gearbom.models.common import CoverageStatus, GearBomBase, UTCTimestamp, utc_now


class RequirementInput(GearBomBase, frozen=True):
    """One point of the resolver's input space.

    Built once per coverage case or once per live selection request.
    """

    series: str = Field(..., min_length=1)
    gear_unit_size: str = Field(..., min_length=1)
    gearmotor_mounting_style: str
    output_shaft_option: str | None = None
    plug_in_shaft_style: str | None = None
    total_ratio: float | None = None
    motor_hp: float | None = None


class ComponentSnapshot(GearBomBase, frozen=True):
    """Per-category slot state captured on a coverage result."""

    found: bool
    part_number: str | None = None
    description: str | None = None


class CoverageResult(GearBomBase, frozen=True):
    """Classified outcome of one coverage case."""

    case_key: str
    inputs: RequirementInput
    status: CoverageStatus
    resolved_pns: list[str] = Field(
        default_factory=list,
        description="Found part numbers that validate as real vendor PNs.",
    )
    message: str | None = None
    components: dict[str, ComponentSnapshot] = Field(default_factory=dict)


class CoverageSummary(GearBomBase):
    """Aggregate status counts for a coverage run or the persisted table."""

    total: int = Field(default=0, ge=0)
    resolved: int = Field(default=0, ge=0)
    ambiguous: int = Field(default=0, ge=0)
    unresolved: int = Field(default=0, ge=0)
    invalid: int = Field(default=0, ge=0)
    generated_at: UTCTimestamp = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _counts_add_up(self) -> "CoverageSummary":
        counted = self.resolved + self.ambiguous + self.unresolved + self.invalid
        if counted != self.total:
            raise ValueError(
                f"Status counts ({counted}) do not sum to total ({self.total})"
            )
        return self

    @classmethod
    def tally(
        cls,
        statuses: list[CoverageStatus | str],
        *,
        generated_at: datetime | None = None,
    ) -> "CoverageSummary":
        """Build a summary by counting statuses."""
        counts = {status.value: 0 for status in CoverageStatus}
        for status in statuses:
            counts[CoverageStatus(status).value] += 1
        return cls(
            total=len(statuses),
            generated_at=generated_at or utc_now(),
            **counts,
        )


class CoverageGenerationResult(GearBomBase):
    """Return value of a coverage run.

    ``summary`` is computed in memory before persistence; ``errors`` lists
    batch inserts that failed, so persisted rows can be fewer than
    ``summary.total``.
    """

    summary: CoverageSummary
    errors: list[str] = Field(default_factory=list)

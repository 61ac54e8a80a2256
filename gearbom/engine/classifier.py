"""Coverage case classification.

Maps one resolver outcome onto exactly one CoverageStatus:

    resolved    complete BOM, no missing slot
    ambiguous   a slot reports more than one equally valid match
    unresolved  at least one required slot has no catalog record
    invalid     the resolver raised (or the outcome fits no other state)

The resolver picks the first deterministic match per slot and never flags
a slot as ambiguous, so that branch is kept for resolvers that report
multi-match slots.
"""

import logging

from gearbom.engine.bom import BomResolver
from gearbom.engine.part_numbers import gear_unit_label, is_real_part_number
from gearbom.models.catalog import BomResolution, ResolveBomOptions
from gearbom.models.common import DEFAULT_MOUNTING_VARIANT, CoverageStatus
from gearbom.models.coverage import ComponentSnapshot, CoverageResult, RequirementInput

logger = logging.getLogger(__name__)

NONE_SENTINEL = "none"
ANY_SENTINEL = "any"

# Coverage exercises component resolution, not descriptor variety: every
# case uses the same adapter and motor frame around the size under test.
REPRESENTATIVE_ADAPTER = "56C"
REPRESENTATIVE_MOTOR_FRAME = "63S/4"


def _format_number(value: float) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def case_key(inputs: RequirementInput) -> str:
    """Deterministic identity of a requirement input.

    Fields in declaration order joined with "|"; absent text fields become
    "none" and absent numbers "any".
    """
    parts = [
        inputs.series,
        inputs.gear_unit_size,
        inputs.gearmotor_mounting_style,
        inputs.output_shaft_option or NONE_SENTINEL,
        inputs.plug_in_shaft_style or NONE_SENTINEL,
        _format_number(inputs.total_ratio) if inputs.total_ratio is not None else ANY_SENTINEL,
        _format_number(inputs.motor_hp) if inputs.motor_hp is not None else ANY_SENTINEL,
    ]
    return "|".join(parts)


def classify(resolution: BomResolution) -> tuple[CoverageStatus, str]:
    """Assign a status and message to a resolver outcome."""
    missing = [slot.component_type for slot in resolution.components if not slot.found]
    ambiguous = [slot.component_type for slot in resolution.components if slot.ambiguous]

    if resolution.complete and not missing:
        return CoverageStatus.RESOLVED, f"All {len(resolution.components)} components resolved"
    if ambiguous:
        return (
            CoverageStatus.AMBIGUOUS,
            f"{len(ambiguous)} component(s) have multiple matches: {', '.join(ambiguous)}",
        )
    if missing:
        return CoverageStatus.UNRESOLVED, f"Missing: {', '.join(missing)}"
    return CoverageStatus.INVALID, "Unknown resolution state"


def classify_error(exc: BaseException) -> tuple[CoverageStatus, str]:
    """Classify a resolver exception; the message embeds its description."""
    detail = str(exc).strip() or "unknown"
    return CoverageStatus.INVALID, f"Resolver error: {detail}"


def representative_model_type(gear_unit_size: str) -> str:
    """Synthetic descriptor used to resolve a coverage case for *gear_unit_size*."""
    return f"SK 1{gear_unit_label(gear_unit_size)} - {REPRESENTATIVE_ADAPTER} - {REPRESENTATIVE_MOTOR_FRAME}"


async def run_coverage_case(resolver: BomResolver, inputs: RequirementInput) -> CoverageResult:
    """Resolve and classify one coverage case.

    Resolver exceptions never escape; they become ``invalid`` results.
    """
    key = case_key(inputs)

    try:
        options = ResolveBomOptions(
            total_ratio=inputs.total_ratio,
            mounting_variant=DEFAULT_MOUNTING_VARIANT,
            gearmotor_mounting_style=inputs.gearmotor_mounting_style,
            output_shaft_option=inputs.output_shaft_option,
            gear_unit_size=inputs.gear_unit_size,
            plug_in_shaft_style=inputs.plug_in_shaft_style,
        )
        bom = await resolver.resolve(
            representative_model_type(inputs.gear_unit_size),
            inputs.motor_hp,
            options,
        )
    except Exception as exc:
        logger.info("Coverage case %s is invalid: %s", key, exc)
        status, message = classify_error(exc)
        return CoverageResult(
            case_key=key,
            inputs=inputs,
            status=status,
            resolved_pns=[],
            message=message,
            components={},
        )

    status, message = classify(bom)
    return CoverageResult(
        case_key=key,
        inputs=inputs,
        status=status,
        resolved_pns=[
            slot.part_number
            for slot in bom.components
            if slot.found and is_real_part_number(slot.part_number)
        ],
        message=message,
        components={
            slot.component_type: ComponentSnapshot(
                found=slot.found,
                part_number=slot.part_number,
                description=slot.description,
            )
            for slot in bom.components
        },
    )

"""Coverage input-space enumeration.

Derives the requirement inputs a coverage run tests from the values the
catalog actually contains (gear unit sizes, worm ratios, motor HPs), so
every case is one that could possibly resolve.

Per size and mounting style:
- no output shaft kit needed: one case with the representative ratio/HP
- kit needed: one case per output shaft option, and per plug-in shaft
  style for the keyed options

Ratio and HP do not influence which slots are required for a size/style
pair, so one representative value of each is used instead of the full
cross product.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from gearbom.engine.part_numbers import needs_output_shaft_kit
from gearbom.models.common import (
    KEYED_SHAFT_OPTIONS,
    CatalogComponentType,
    MountingStyle,
    OutputShaftOption,
    PlugInShaftStyle,
)
from gearbom.models.coverage import RequirementInput
from gearbom.repositories.catalog import CatalogRepository

logger = logging.getLogger(__name__)

MAX_COVERAGE_CASES = 1000

# Used only when the catalog has no performance points.
FALLBACK_RATIO = 10.0
FALLBACK_MOTOR_HP = 0.5

MOUNTING_STYLES: list[str] = [style.value for style in MountingStyle]
OUTPUT_SHAFT_OPTIONS: list[str] = [option.value for option in OutputShaftOption]
PLUG_IN_SHAFT_STYLES: list[str] = [style.value for style in PlugInShaftStyle]

_DIGITS = re.compile(r"\d+")


@dataclass(frozen=True)
class EnumerationContext:
    """Distinct catalog values that bound the input space."""

    gear_unit_sizes: list[str]
    ratios: list[float]
    motor_hps: list[float]

    @property
    def representative_ratio(self) -> float:
        return self.ratios[0] if self.ratios else FALLBACK_RATIO

    @property
    def representative_motor_hp(self) -> float:
        return self.motor_hps[0] if self.motor_hps else FALLBACK_MOTOR_HP


def _size_sort_key(size: str) -> tuple[int, str]:
    """Natural order: SI31 < SI63 < SI100."""
    match = _DIGITS.search(size)
    return (int(match.group()) if match else -1, size)


def _positive_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


async def load_enumeration_context(
    catalog: CatalogRepository, *, vendor: str, series: str,
) -> EnumerationContext:
    """Collect distinct sizes, worm ratios and motor HPs from the catalog."""
    sizes: set[str] = set()
    for row in await catalog.list_components(vendor, CatalogComponentType.GEAR_UNIT.value):
        size = (row.metadata_json or {}).get("gear_unit_size")
        if size:
            sizes.add(str(size))

    ratios: set[float] = set()
    motor_hps: set[float] = set()
    for point in await catalog.list_performance_points(vendor, series):
        ratio = _positive_float((point.metadata_json or {}).get("worm_ratio"))
        if ratio is not None:
            ratios.add(ratio)
        motor_hp = _positive_float(point.motor_hp)
        if motor_hp is not None:
            motor_hps.add(motor_hp)

    return EnumerationContext(
        gear_unit_sizes=sorted(sizes, key=_size_sort_key),
        ratios=sorted(ratios),
        motor_hps=sorted(motor_hps),
    )


def build_coverage_inputs(
    ctx: EnumerationContext,
    *,
    series: str,
    max_cases: int = MAX_COVERAGE_CASES,
) -> list[RequirementInput]:
    """Expand an enumeration context into requirement inputs.

    Order is size, then mounting style, output shaft option, plug-in shaft
    style. Stops once *max_cases* inputs exist; the remainder is dropped
    with a warning. *max_cases* never exceeds MAX_COVERAGE_CASES.
    """
    max_cases = min(max_cases, MAX_COVERAGE_CASES)
    inputs: list[RequirementInput] = []
    ratio = ctx.representative_ratio
    motor_hp = ctx.representative_motor_hp

    def _variants(mounting_style: str) -> list[tuple[str | None, str | None]]:
        if not needs_output_shaft_kit(mounting_style):
            return [(None, None)]
        variants: list[tuple[str | None, str | None]] = []
        for option in OUTPUT_SHAFT_OPTIONS:
            if option in KEYED_SHAFT_OPTIONS:
                variants.extend((option, style) for style in PLUG_IN_SHAFT_STYLES)
            else:
                variants.append((option, None))
        return variants

    for size in ctx.gear_unit_sizes:
        for mounting_style in MOUNTING_STYLES:
            for option, style in _variants(mounting_style):
                if len(inputs) >= max_cases:
                    logger.warning(
                        "Coverage enumeration capped at %d cases (stopped at size %s)",
                        max_cases, size,
                    )
                    return inputs
                inputs.append(RequirementInput(
                    series=series,
                    gear_unit_size=size,
                    gearmotor_mounting_style=mounting_style,
                    output_shaft_option=option,
                    plug_in_shaft_style=style,
                    total_ratio=ratio,
                    motor_hp=motor_hp,
                ))

    return inputs


async def enumerate_coverage_inputs(
    catalog: CatalogRepository,
    *,
    vendor: str,
    series: str,
    max_cases: int = MAX_COVERAGE_CASES,
) -> list[RequirementInput]:
    """Enumerate the bounded coverage input space for one vendor series."""
    ctx = await load_enumeration_context(catalog, vendor=vendor, series=series)
    inputs = build_coverage_inputs(ctx, series=series, max_cases=max_cases)
    logger.info(
        "Enumerated %d coverage cases (%d sizes, ratio=%g, hp=%g)",
        len(inputs), len(ctx.gear_unit_sizes),
        ctx.representative_ratio, ctx.representative_motor_hp,
    )
    return inputs

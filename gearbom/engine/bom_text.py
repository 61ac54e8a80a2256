"""Order-friendly plain-text rendering of a BomResolution.

Format:
    NORD FLEXBLOC Gearmotor BOM
    Selected Model: <model_type>
    Catalog Page: <catalog_page if known>

    1) Gear Unit: <part_number or —>  | <description>
    2) Motor (STD or BRK): <part_number or —>  | <description>
    3) Adapter: <part_number or —>  | <description>
    4) Output Shaft Kit: <part_number or — (state)>  | <description>

    Notes:
    - Applied SF: <value>
    - Catalog SF: <value>
    - MISSING: <label> PN (<reason>)
"""

from __future__ import annotations

from dataclasses import dataclass

from gearbom.models.catalog import BomResolution, ComponentSlot
from gearbom.models.common import BomComponentType

DASH = "—"

_COMPONENT_ORDER: list[tuple[BomComponentType, str]] = [
    (BomComponentType.GEAR_UNIT, "Gear Unit"),
    (BomComponentType.MOTOR, "Motor (STD or BRK)"),
    (BomComponentType.ADAPTER, "Adapter"),
    (BomComponentType.OUTPUT_SHAFT_KIT, "Output Shaft Kit"),
]

_OPTIONAL_COMPONENTS: list[tuple[BomComponentType, str]] = [
    (BomComponentType.HOLLOW_SHAFT_BUSHING, "Hollow Shaft Bushing"),
]


@dataclass(frozen=True)
class BomCopyContext:
    """Display context for copy text. None of it affects PN selection."""

    applied_sf: float
    catalog_sf: float
    catalog_page: str | None = None
    motor_hp: float | None = None
    had_multiple_matches: bool = False
    vendor: str = "NORD"
    series: str = "FLEXBLOC"


def get_missing_hint(component_type: str, required: bool = True) -> str:
    """Human-readable hint for why a component has no part number."""
    if component_type == BomComponentType.OUTPUT_SHAFT_KIT.value:
        if not required:
            return "Not required for shaft mount configuration."
        return "Select an output shaft option to resolve this."
    if component_type == BomComponentType.GEAR_UNIT.value:
        return "Gear unit PN mapping not keyed for this model yet."
    return "No matching component found in component map."


def _is_missing(slot: ComponentSlot | None) -> bool:
    return slot is None or not slot.found or not slot.part_number


def build_bom_copy_text(bom: BomResolution, context: BomCopyContext) -> str:
    """Build the clipboard text block for a resolved (or partial) BOM."""
    lines: list[str] = [
        f"{context.vendor} {context.series} Gearmotor BOM",
        f"Selected Model: {bom.model_type or DASH}",
    ]
    if context.catalog_page:
        lines.append(f"Catalog Page: {context.catalog_page}")
    lines.append("")

    missing: list[tuple[str, str]] = []
    entries = list(_COMPONENT_ORDER) + [
        (component_type, label)
        for component_type, label in _OPTIONAL_COMPONENTS
        if bom.component(component_type.value) is not None
    ]

    for index, (component_type, label) in enumerate(entries, start=1):
        slot = bom.component(component_type.value)
        prefix = f"{index}) {label}:"

        if component_type is BomComponentType.OUTPUT_SHAFT_KIT and slot is None:
            lines.append(f"{prefix} {DASH} (not required)")
            continue

        description = (slot.description if slot else None) or DASH
        if not _is_missing(slot):
            lines.append(f"{prefix} {slot.part_number}  | {description}")
            continue

        reason = get_missing_hint(component_type.value)
        if component_type is BomComponentType.OUTPUT_SHAFT_KIT and not bom.output_shaft_option:
            lines.append(f"{prefix} {DASH} (select in Drive Arrangement)  | {description}")
        else:
            lines.append(f"{prefix} {DASH}  | {description}")
            if component_type is BomComponentType.OUTPUT_SHAFT_KIT:
                reason = get_missing_hint(BomComponentType.MOTOR.value)
        missing.append((label, reason))

    lines.append("")
    lines.append("Notes:")
    lines.append(f"- Applied SF: {context.applied_sf:g}")
    lines.append(f"- Catalog SF: {context.catalog_sf:g}")
    if context.had_multiple_matches:
        lines.append("- NOTE: Multiple matches existed; selected first deterministic match.")
    for label, reason in missing:
        lines.append(f"- MISSING: {label} PN ({reason})")

    return "\n".join(lines)

"""Vendor part-number validation and descriptor parsing.

Model descriptor format: "SK [stages]SI[size][/suffix] - [adapter_code] - [motor_frame]"
Examples:
  - "SK 1SI31 - 56C - 63S/4"
  - "SK 2SI50 - 140TC - 182T/4"
  - "SK 1SI63/H10 - 56C - 63L/4"   (second-stage suffix is not part of the size)

Pure functions, no catalog access.
"""

import re

from gearbom.models.catalog import ParsedHollowShaftBore, ParsedModelType
from gearbom.models.common import MountingStyle

# Real orderable PNs are 8 digits starting with 3 or 6. Synthetic catalog
# keys such as "SI63-0.25HP" must never count as resolved.
_REAL_PN_PATTERN = re.compile(r"^[36]\d{7}$")

_MODEL_PATTERN = re.compile(
    r"(?:SK\s*)?(\d)?\s*SI(\d+)(?:/\w+)?\s*-\s*(\w+)\s*-\s*(\S+)",
    re.IGNORECASE,
)

_INCH_BORE_PATTERN = re.compile(
    r"(\d+\.\d+)\s*(?:in\b\.?|inch\b|\")?\s*Hollow\s+Shaft",
    re.IGNORECASE,
)
_METRIC_BORE_PATTERN = re.compile(r"Hollow\s+Shaft\s+(\d+(?:\.\d+)?)\s*mm", re.IGNORECASE)
_METRIC_ONLY_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*mm\s+Hollow\s+Shaft", re.IGNORECASE)


def is_real_part_number(part_number: str | None) -> bool:
    """Check whether *part_number* is a real vendor-orderable part number."""
    if not part_number:
        return False
    return bool(_REAL_PN_PATTERN.match(part_number))


def parse_model_type(model_type: str | None) -> ParsedModelType | None:
    """Parse a model descriptor into component identifiers.

    Returns None when the string does not follow the descriptor format.
    """
    if not model_type:
        return None

    normalized = " ".join(model_type.split())
    match = _MODEL_PATTERN.search(normalized)
    if match is None:
        return None

    stages, size_code, adapter_code, motor_frame = match.groups()
    return ParsedModelType(
        worm_stages=int(stages or "1"),
        gear_unit_size=f"SI{size_code}",
        size_code=size_code,
        adapter_code=adapter_code.upper(),
        motor_frame=motor_frame.upper(),
    )


def gear_unit_label(size: str) -> str:
    """Normalise a size code ("63", "si63", "SI63") to the catalog label "SI63"."""
    cleaned = size.strip().upper()
    if cleaned.startswith("SI"):
        cleaned = cleaned[2:]
    return f"SI{cleaned}"


def normalize_ratio(ratio: float) -> float:
    """Round a catalog ratio to one decimal place for key comparison.

    Ratios are integral (80, 100) or half-steps (7.5, 12.5).
    """
    return round(float(ratio), 1)


def needs_output_shaft_kit(mounting_style: str | None) -> bool:
    """Output shaft kits are required for bottom mount (chain drive) only."""
    return mounting_style == MountingStyle.BOTTOM_MOUNT.value


def parse_hollow_shaft_bore(description: str | None) -> ParsedHollowShaftBore:
    """Extract the native hollow bore from a gear unit description.

    Handles "1.4375 in Hollow Shaft", "1.4375 inch Hollow Shaft" and the
    catalog form "Wormgearbox 1.4375 Hollow Shaft 25mm - Ratio 5".
    """
    if not description:
        return ParsedHollowShaftBore()

    inch_match = _INCH_BORE_PATTERN.search(description)
    metric_match = _METRIC_BORE_PATTERN.search(description)
    if inch_match is not None:
        return ParsedHollowShaftBore(
            inch_bore=float(inch_match.group(1)),
            metric_bore=float(metric_match.group(1)) if metric_match else None,
            is_hollow_shaft=True,
            primary_unit="inch",
        )

    metric_only = _METRIC_ONLY_PATTERN.search(description)
    if metric_only is not None:
        return ParsedHollowShaftBore(
            metric_bore=float(metric_only.group(1)),
            is_hollow_shaft=True,
            primary_unit="metric",
        )

    return ParsedHollowShaftBore()

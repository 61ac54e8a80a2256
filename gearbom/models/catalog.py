"""BOM models: parsed model descriptors, component slots, resolutions."""

from pydantic import Field

from gearbom.models.common import DEFAULT_MOUNTING_VARIANT, GearBomBase, MountingVariant


class ParsedModelType(GearBomBase, frozen=True):
    """Component identifiers parsed from a vendor model descriptor.

    Example: "SK 1SI31 - 56C - 63S/4" parses to stages=1, size SI31,
    adapter 56C, motor frame 63S/4.
    """

    worm_stages: int = Field(..., ge=1)
    gear_unit_size: str = Field(..., description="Normalised size label, e.g. 'SI63'.")
    size_code: str = Field(..., description="Numeric size code, e.g. '63'.")
    adapter_code: str
    motor_frame: str


class ResolveBomOptions(GearBomBase, frozen=True):
    """Requirement fields that steer BOM resolution beyond the descriptor."""

    total_ratio: float | None = Field(
        default=None,
        description="Catalog worm ratio. Never service-factor adjusted.",
    )
    mounting_variant: MountingVariant = DEFAULT_MOUNTING_VARIANT
    gearmotor_mounting_style: str | None = None
    output_shaft_option: str | None = None
    gear_unit_size: str | None = None
    plug_in_shaft_style: str | None = None
    hollow_shaft_bushing_bore_in: float | None = None


class ComponentSlot(GearBomBase, frozen=True):
    """Resolution outcome for one required BOM category."""

    component_type: str
    found: bool
    part_number: str | None = None
    description: str | None = None
    ambiguous: bool = Field(
        default=False,
        description="More than one equally valid catalog match for this slot.",
    )


class BomResolution(GearBomBase, frozen=True):
    """Full BOM produced by one resolver call."""

    model_type: str
    parsed: ParsedModelType | None = None
    components: list[ComponentSlot] = Field(default_factory=list)
    complete: bool = False
    output_shaft_kit_required: bool = False
    output_shaft_option: str | None = None

    def component(self, component_type: str) -> ComponentSlot | None:
        """Return the slot for *component_type*, or None if not required."""
        for slot in self.components:
            if slot.component_type == component_type:
                return slot
        return None


class ShaftStyleOption(GearBomBase, frozen=True):
    """A plug-in shaft style available for a size / keyed option."""

    style: str
    part_number: str
    description: str | None = None
    od_in: float | None = None


class HollowShaftBushingOption(GearBomBase, frozen=True):
    """A bore-reducing bushing available for a hollow-shaft gear unit."""

    part_number: str
    bore_in: float
    description: str | None = None


class ParsedHollowShaftBore(GearBomBase, frozen=True):
    """Native hollow bore parsed from a gear unit description."""

    inch_bore: float | None = None
    metric_bore: float | None = None
    is_hollow_shaft: bool = False
    primary_unit: str | None = None

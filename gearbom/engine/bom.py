"""BOM resolver for worm gearmotors.

Turns a model descriptor, a motor rating and the drive arrangement options
into one ComponentSlot per required category:

    gear_unit         GEAR_UNIT keyed by (size, worm ratio, mounting variant)
    motor             MOTOR keyed by (adapter code, motor frame, HP)
    adapter           INPUT_ADAPTER keyed by adapter code
    output_shaft_kit  OUTPUT_SHAFT_KIT, bottom mount only, keyed by
                      (size, output shaft option[, plug-in shaft style])
    hollow_shaft_bushing  optional, shaft mount only, keyed by (size, bore)

A category that is not required is absent from the result. A required
category with no catalog record comes back as found=False. Only inputs the
resolver cannot model raise (see gearbom.engine.errors).

The ratio is the catalog worm ratio. Applied service factor filters
candidates upstream and never changes the gear unit key.
"""

import logging
import math

from gearbom.db.tables import VendorComponentRow
from gearbom.engine.errors import MissingInputError, ModelDescriptorError
from gearbom.engine.part_numbers import (
    gear_unit_label,
    is_real_part_number,
    needs_output_shaft_kit,
    normalize_ratio,
    parse_hollow_shaft_bore,
    parse_model_type,
)
from gearbom.models.catalog import (
    BomResolution,
    ComponentSlot,
    HollowShaftBushingOption,
    ParsedModelType,
    ResolveBomOptions,
    ShaftStyleOption,
)
from gearbom.models.common import (
    KEYED_SHAFT_OPTIONS,
    BomComponentType,
    CatalogComponentType,
    OutputShaftOption,
)
from gearbom.repositories.catalog import CatalogRepository

logger = logging.getLogger(__name__)

OUTPUT_SHAFT_OPTION_LABELS: dict[str, str] = {
    OutputShaftOption.INCH_KEYED.value: "Inch keyed bore",
    OutputShaftOption.METRIC_KEYED.value: "Metric keyed bore",
    OutputShaftOption.INCH_HOLLOW.value: "Inch hollow",
    OutputShaftOption.METRIC_HOLLOW.value: "Metric hollow",
}


def _format_hp(motor_hp: float) -> str:
    return f"{motor_hp:g}"


class BomResolver:
    """Resolves gearmotor BOMs against one vendor's component catalog."""

    def __init__(self, catalog: CatalogRepository, *, vendor: str = "NORD") -> None:
        self._catalog = catalog
        self._vendor = vendor

    @property
    def vendor(self) -> str:
        return self._vendor

    async def resolve(
        self,
        model_type: str | None,
        motor_hp: float | None,
        options: ResolveBomOptions | None = None,
    ) -> BomResolution:
        """Resolve every required BOM slot for one gearmotor selection.

        Raises:
            ModelDescriptorError: *model_type* is not a parseable descriptor.
            MissingInputError: *motor_hp* is missing, non-finite or not positive.
        """
        options = options or ResolveBomOptions()

        parsed = parse_model_type(model_type)
        if parsed is None:
            raise ModelDescriptorError(f"Unable to parse model type {model_type!r}")
        if motor_hp is None or not math.isfinite(motor_hp) or motor_hp <= 0:
            raise MissingInputError(f"Motor HP must be a positive number, got {motor_hp!r}")

        size = (
            gear_unit_label(options.gear_unit_size)
            if options.gear_unit_size
            else parsed.gear_unit_size
        )

        components = [
            await self._resolve_gear_unit(size, motor_hp, options),
            await self._resolve_motor(parsed, motor_hp),
            await self._resolve_adapter(parsed),
        ]

        kit_required = needs_output_shaft_kit(options.gearmotor_mounting_style)
        if kit_required:
            components.append(await self._resolve_output_shaft_kit(size, options))
        elif options.hollow_shaft_bushing_bore_in is not None:
            components.append(
                await self._resolve_hollow_shaft_bushing(
                    size, options.hollow_shaft_bushing_bore_in,
                )
            )

        resolution = BomResolution(
            model_type=model_type or "",
            parsed=parsed,
            components=components,
            complete=all(slot.found for slot in components),
            output_shaft_kit_required=kit_required,
            output_shaft_option=options.output_shaft_option if kit_required else None,
        )
        logger.debug(
            "Resolved %s @ %sHP: %d/%d slots found",
            resolution.model_type, _format_hp(motor_hp),
            sum(slot.found for slot in components), len(components),
        )
        return resolution

    # ------------------------------------------------------------------
    # Slot resolution
    # ------------------------------------------------------------------

    async def _resolve_gear_unit(
        self, size: str, motor_hp: float, options: ResolveBomOptions,
    ) -> ComponentSlot:
        fallback = f"{self._vendor} {size} gear unit {_format_hp(motor_hp)}HP"
        if options.total_ratio is None:
            return ComponentSlot(
                component_type=BomComponentType.GEAR_UNIT.value,
                found=False,
                description=f"{fallback} (ratio required for PN lookup)",
            )

        ratio = normalize_ratio(options.total_ratio)
        matches = await self._catalog.query_components(
            self._vendor,
            CatalogComponentType.GEAR_UNIT.value,
            {
                "gear_unit_size": size,
                "total_ratio": ratio,
                "mounting_variant": options.mounting_variant.value,
            },
        )
        # Synthetic placeholder keys may share the metadata; only a real PN counts.
        real = next(
            (row for row in matches if is_real_part_number(row.vendor_part_number)),
            None,
        )
        if real is None:
            return ComponentSlot(
                component_type=BomComponentType.GEAR_UNIT.value,
                found=False,
                description=matches[0].description if matches else f"{fallback} i={ratio:g}",
            )
        return ComponentSlot(
            component_type=BomComponentType.GEAR_UNIT.value,
            found=True,
            part_number=real.vendor_part_number,
            description=real.description or f"{fallback} i={ratio:g}",
        )

    async def _resolve_motor(self, parsed: ParsedModelType, motor_hp: float) -> ComponentSlot:
        matches = await self._catalog.query_components(
            self._vendor,
            CatalogComponentType.MOTOR.value,
            {
                "adapter_code": parsed.adapter_code,
                "motor_frame": parsed.motor_frame,
                "motor_hp": motor_hp,
            },
        )
        return _slot_from_matches(
            BomComponentType.MOTOR,
            matches,
            fallback=f"{parsed.motor_frame} Motor {_format_hp(motor_hp)}HP",
        )

    async def _resolve_adapter(self, parsed: ParsedModelType) -> ComponentSlot:
        matches = await self._catalog.query_components(
            self._vendor,
            CatalogComponentType.INPUT_ADAPTER.value,
            {"adapter_code": parsed.adapter_code},
        )
        return _slot_from_matches(
            BomComponentType.ADAPTER,
            matches,
            fallback=f"NEMA {parsed.adapter_code} Adapter",
        )

    async def _resolve_output_shaft_kit(
        self, size: str, options: ResolveBomOptions,
    ) -> ComponentSlot:
        option = options.output_shaft_option
        if not option:
            return ComponentSlot(
                component_type=BomComponentType.OUTPUT_SHAFT_KIT.value,
                found=False,
                description="Required for chain drive configuration",
            )

        filters: dict[str, object] = {
            "gear_unit_size": size,
            "output_shaft_option": option,
        }
        if option in KEYED_SHAFT_OPTIONS and options.plug_in_shaft_style:
            filters["plug_in_shaft_style"] = options.plug_in_shaft_style

        matches = await self._catalog.query_components(
            self._vendor, CatalogComponentType.OUTPUT_SHAFT_KIT.value, filters,
        )
        label = OUTPUT_SHAFT_OPTION_LABELS.get(option, option)
        if option in KEYED_SHAFT_OPTIONS and options.plug_in_shaft_style:
            label = f"{label}, {options.plug_in_shaft_style}"
        return _slot_from_matches(
            BomComponentType.OUTPUT_SHAFT_KIT,
            matches,
            fallback=f"Output shaft kit {size} ({label})",
        )

    async def _resolve_hollow_shaft_bushing(self, size: str, bore_in: float) -> ComponentSlot:
        matches = await self._catalog.query_components(
            self._vendor,
            CatalogComponentType.HOLLOW_SHAFT_BUSHING.value,
            {"gear_unit_size": size, "bore_in": bore_in},
        )
        return _slot_from_matches(
            BomComponentType.HOLLOW_SHAFT_BUSHING,
            matches,
            fallback=f"Hollow shaft bushing {size} {bore_in:g} in",
        )

    # ------------------------------------------------------------------
    # Option listings for drive arrangement
    # ------------------------------------------------------------------

    async def available_shaft_styles(
        self, gear_unit_size: str, output_shaft_option: str,
    ) -> list[ShaftStyleOption]:
        """Plug-in shaft styles catalogued for a size and keyed option."""
        if output_shaft_option not in KEYED_SHAFT_OPTIONS:
            return []
        rows = await self._catalog.query_components(
            self._vendor,
            CatalogComponentType.OUTPUT_SHAFT_KIT.value,
            {
                "gear_unit_size": gear_unit_label(gear_unit_size),
                "output_shaft_option": output_shaft_option,
            },
        )
        styles: list[ShaftStyleOption] = []
        seen: set[str] = set()
        for row in rows:
            style = (row.metadata_json or {}).get("plug_in_shaft_style")
            if not style or style in seen or not is_real_part_number(row.vendor_part_number):
                continue
            seen.add(style)
            od_in = (row.metadata_json or {}).get("od_in")
            styles.append(ShaftStyleOption(
                style=style,
                part_number=row.vendor_part_number,
                description=row.description,
                od_in=float(od_in) if od_in is not None else None,
            ))
        return styles

    async def available_hollow_shaft_bushings(
        self, gear_unit_size: str, output_shaft_option: str,
    ) -> list[HollowShaftBushingOption]:
        """Bore-reducing bushings catalogued for a hollow-shaft size, smallest bore first.

        When the gear unit description states its native inch bore, only
        bushings with a smaller bore are listed.
        """
        if output_shaft_option in KEYED_SHAFT_OPTIONS:
            return []
        size = gear_unit_label(gear_unit_size)
        rows = await self._catalog.query_components(
            self._vendor,
            CatalogComponentType.HOLLOW_SHAFT_BUSHING.value,
            {"gear_unit_size": size},
        )
        native_bore = await self._native_hollow_bore_in(size, output_shaft_option)
        bushings = [
            HollowShaftBushingOption(
                part_number=row.vendor_part_number,
                bore_in=float(row.metadata_json["bore_in"]),
                description=row.description,
            )
            for row in rows
            if (row.metadata_json or {}).get("bore_in") is not None
            and is_real_part_number(row.vendor_part_number)
        ]
        if native_bore is not None:
            bushings = [b for b in bushings if b.bore_in < native_bore]
        return sorted(bushings, key=lambda b: b.bore_in)

    async def _native_hollow_bore_in(self, size: str, mounting_variant: str) -> float | None:
        gear_units = await self._catalog.query_components(
            self._vendor,
            CatalogComponentType.GEAR_UNIT.value,
            {"gear_unit_size": size, "mounting_variant": mounting_variant},
        )
        for row in gear_units:
            bore = parse_hollow_shaft_bore(row.description)
            if bore.inch_bore is not None:
                return bore.inch_bore
        return None


def _slot_from_matches(
    component_type: BomComponentType,
    matches: list[VendorComponentRow],
    *,
    fallback: str,
) -> ComponentSlot:
    """First match by part number wins; no match is a found=False slot."""
    if not matches:
        return ComponentSlot(
            component_type=component_type.value,
            found=False,
            description=fallback,
        )
    chosen = matches[0]
    return ComponentSlot(
        component_type=component_type.value,
        found=True,
        part_number=chosen.vendor_part_number,
        description=chosen.description or fallback,
    )

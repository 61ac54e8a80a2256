"""Seed script: load a sample NORD FLEXBLOC catalog into the gearbom database.

Creates:
1. Gear units for SI31, SI63 and SI100 (SI100 carries only a placeholder key)
2. Motors and NEMA input adapters
3. Output shaft kits (SI31 partially, SI63 fully covered)
4. Hollow shaft bushings for SI63
5. Catalog performance points (source of worm ratios and motor HPs)

A coverage run over this catalog yields 27 cases: 15 resolved, 12 unresolved.

Idempotent: safe to run multiple times; skips if the vendor already has
catalog records.

Usage:
    python -m scripts seed          # against DATABASE_URL from .env
    pytest tests/scripts/test_seed.py  # against aiosqlite in-memory
"""

import asyncio

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gearbom.db.tables import VendorComponentRow
from gearbom.models.common import CatalogComponentType
from gearbom.repositories.catalog import CatalogRepository

SEED_VENDOR = "NORD"
SEED_SERIES = "FLEXBLOC"

# (size, worm ratio, mounting variant, PN, description)
GEAR_UNITS = [
    ("SI31", 10.0, "inch_hollow", "60392100", "Wormgearbox 0.75 Hollow Shaft 20mm - Ratio 10"),
    ("SI31", 80.0, "inch_hollow", "60392800", "Wormgearbox 0.75 Hollow Shaft 20mm - Ratio 80"),
    ("SI63", 10.0, "inch_hollow", "60692100", "Wormgearbox 1.4375 Hollow Shaft 25mm - Ratio 10"),
    ("SI63", 12.5, "inch_hollow", "60692130", "Wormgearbox 1.4375 Hollow Shaft 25mm - Ratio 12.5"),
    ("SI63", 80.0, "inch_hollow", "60692800", "Wormgearbox 1.4375 Hollow Shaft 25mm - Ratio 80"),
    ("SI63", 10.0, "metric_hollow", "60691100", "Wormgearbox 25mm Hollow Shaft - Ratio 10"),
    # Placeholder key from a price-list import; no orderable PN yet.
    ("SI100", 10.0, "inch_hollow", "SI100-10-IH", "Wormgearbox SI100 - Ratio 10 (PN pending)"),
]

# (adapter code, motor frame, HP, PN, description)
MOTORS = [
    ("56C", "63S/4", 0.25, "31610012", "63S/4 Motor 0.25HP 1725rpm TEFC"),
    ("56C", "63L/4", 0.5, "31610022", "63L/4 Motor 0.5HP 1725rpm TEFC"),
]

# (adapter code, PN, description)
ADAPTERS = [
    ("56C", "60395510", "NEMA 56C Input Adapter"),
    ("140TC", "60395520", "NEMA 140TC Input Adapter"),
]

# (size, output shaft option, plug-in shaft style, PN, description, od_in)
OUTPUT_SHAFT_KITS = [
    ("SI31", "inch_keyed", "single", "60592110", "SI31 Plug-in Shaft Single 0.75in Keyed", 0.75),
    ("SI31", "inch_keyed", "double", "60592120", "SI31 Plug-in Shaft Double 0.75in Keyed", 0.75),
    ("SI31", "metric_keyed", "single", "60591110", "SI31 Plug-in Shaft Single 20mm Keyed", None),
    ("SI31", "inch_hollow", None, "60592150", "SI31 Output Flange Kit 0.75in Hollow", None),
    ("SI31", "metric_hollow", None, "60591150", "SI31 Output Flange Kit 20mm Hollow", None),
    ("SI63", "inch_keyed", "single", "60892110", "SI63 Plug-in Shaft Single 1.4375in Keyed", 1.4375),
    ("SI63", "inch_keyed", "double", "60892120", "SI63 Plug-in Shaft Double 1.4375in Keyed", 1.4375),
    ("SI63", "inch_keyed", "flange_b5", "60892140", "SI63 Plug-in Shaft B5 Flange 1.4375in Keyed", 1.4375),
    ("SI63", "metric_keyed", "single", "60891110", "SI63 Plug-in Shaft Single 25mm Keyed", None),
    ("SI63", "metric_keyed", "double", "60891120", "SI63 Plug-in Shaft Double 25mm Keyed", None),
    ("SI63", "metric_keyed", "flange_b5", "60891140", "SI63 Plug-in Shaft B5 Flange 25mm Keyed", None),
    ("SI63", "inch_hollow", None, "60892150", "SI63 Output Flange Kit 1.4375in Hollow", None),
    ("SI63", "metric_hollow", None, "60891150", "SI63 Output Flange Kit 25mm Hollow", None),
]

# (size, bore_in, PN, description)
HOLLOW_SHAFT_BUSHINGS = [
    ("SI63", 1.0, "60693400", "SI63 Bushing 1.4375in to 1.000in"),
    ("SI63", 1.1875, "60693420", "SI63 Bushing 1.4375in to 1.1875in"),
    ("SI63", 1.25, "60693410", "SI63 Bushing 1.4375in to 1.250in"),
]

# (model type, HP, output rpm, torque lb-in, service factor, worm ratio)
PERFORMANCE_POINTS = [
    ("SK 1SI31 - 56C - 63S/4", 0.25, 172.5, 78.0, 1.6, 10.0),
    ("SK 1SI31 - 56C - 63S/4", 0.25, 21.6, 410.0, 1.0, 80.0),
    ("SK 1SI63 - 56C - 63S/4", 0.25, 21.6, 520.0, 2.4, 80.0),
    ("SK 1SI63 - 56C - 63L/4", 0.5, 138.0, 210.0, 1.9, 12.5),
]


async def seed_catalog(session: AsyncSession, *, vendor: str = SEED_VENDOR) -> dict:
    """Insert the sample catalog. Returns per-type record counts."""
    repo = CatalogRepository(session)

    for size, ratio, variant, pn, description in GEAR_UNITS:
        await repo.create_component(
            vendor=vendor,
            component_type=CatalogComponentType.GEAR_UNIT.value,
            vendor_part_number=pn,
            description=description,
            metadata={
                "gear_unit_size": size,
                "total_ratio": ratio,
                "mounting_variant": variant,
            },
        )

    for adapter_code, frame, hp, pn, description in MOTORS:
        await repo.create_component(
            vendor=vendor,
            component_type=CatalogComponentType.MOTOR.value,
            vendor_part_number=pn,
            description=description,
            metadata={"adapter_code": adapter_code, "motor_frame": frame, "motor_hp": hp},
        )

    for adapter_code, pn, description in ADAPTERS:
        await repo.create_component(
            vendor=vendor,
            component_type=CatalogComponentType.INPUT_ADAPTER.value,
            vendor_part_number=pn,
            description=description,
            metadata={"adapter_code": adapter_code},
        )

    for size, option, style, pn, description, od_in in OUTPUT_SHAFT_KITS:
        metadata: dict = {"gear_unit_size": size, "output_shaft_option": option}
        if style is not None:
            metadata["plug_in_shaft_style"] = style
        if od_in is not None:
            metadata["od_in"] = od_in
        await repo.create_component(
            vendor=vendor,
            component_type=CatalogComponentType.OUTPUT_SHAFT_KIT.value,
            vendor_part_number=pn,
            description=description,
            metadata=metadata,
        )

    for size, bore_in, pn, description in HOLLOW_SHAFT_BUSHINGS:
        await repo.create_component(
            vendor=vendor,
            component_type=CatalogComponentType.HOLLOW_SHAFT_BUSHING.value,
            vendor_part_number=pn,
            description=description,
            metadata={"gear_unit_size": size, "bore_in": bore_in},
        )

    for model_type, hp, rpm, torque, sf, worm_ratio in PERFORMANCE_POINTS:
        await repo.create_performance_point(
            vendor=vendor,
            series=SEED_SERIES,
            model_type=model_type,
            motor_hp=hp,
            output_rpm=rpm,
            output_torque_lb_in=torque,
            service_factor=sf,
            metadata={"worm_ratio": worm_ratio},
        )

    return {
        "gear_units": len(GEAR_UNITS),
        "motors": len(MOTORS),
        "adapters": len(ADAPTERS),
        "output_shaft_kits": len(OUTPUT_SHAFT_KITS),
        "hollow_shaft_bushings": len(HOLLOW_SHAFT_BUSHINGS),
        "performance_points": len(PERFORMANCE_POINTS),
    }


async def seed_demo(session: AsyncSession, *, vendor: str = SEED_VENDOR) -> dict:
    """Idempotent seed: skip when *vendor* already has catalog records.

    Returns dict with keys: created (bool), counts (per-type, when created).
    """
    result = await session.execute(
        select(func.count())
        .select_from(VendorComponentRow)
        .where(VendorComponentRow.vendor == vendor)
    )
    existing = int(result.scalar_one())
    if existing:
        return {"created": False, "existing_components": existing, "counts": {}}

    counts = await seed_catalog(session, vendor=vendor)
    return {"created": True, "existing_components": 0, "counts": counts}


# ---------------------------------------------------------------------------
# CLI entry point: python -m scripts.seed
# ---------------------------------------------------------------------------


async def _run_seed() -> None:
    """Run the seed against the real database (idempotent)."""
    from gearbom.db.session import session_scope

    async with session_scope() as session:
        result = await seed_demo(session)

    if not result["created"]:
        print(f"Catalog already seeded ({result['existing_components']} "
              f"{SEED_VENDOR} components exist). Skipping.")
        return

    print("Seed complete.")
    print(f"  {'Record type':<24} {'Count':>6}")
    print(f"  {'─' * 24} {'─' * 6}")
    for name, count in result["counts"].items():
        print(f"  {name:<24} {count:>6}")


if __name__ == "__main__":
    asyncio.run(_run_seed())

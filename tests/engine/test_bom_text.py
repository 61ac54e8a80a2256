"""Tests for BOM copy-text rendering and missing-component hints."""

from gearbom.engine.bom_text import BomCopyContext, build_bom_copy_text, get_missing_hint
from gearbom.models.catalog import BomResolution, ComponentSlot


def _slot(component_type: str, pn: str | None, description: str | None = None) -> ComponentSlot:
    return ComponentSlot(
        component_type=component_type,
        found=pn is not None,
        part_number=pn,
        description=description,
    )


def _bom(*slots: ComponentSlot, kit_required: bool = False,
         option: str | None = None) -> BomResolution:
    return BomResolution(
        model_type="SK 1SI63 - 56C - 63S/4",
        components=list(slots),
        complete=all(s.found for s in slots),
        output_shaft_kit_required=kit_required,
        output_shaft_option=option,
    )


CORE = (
    _slot("gear_unit", "60692800", "Wormgearbox 1.4375 Hollow Shaft 25mm - Ratio 80"),
    _slot("motor", "31610012", "63S/4 Motor 0.25HP"),
    _slot("adapter", "60395510", "NEMA 56C Input Adapter"),
)


class TestBuildBomCopyText:

    def test_complete_shaft_mounted(self) -> None:
        text = build_bom_copy_text(
            _bom(*CORE),
            BomCopyContext(applied_sf=1.5, catalog_sf=2.4, catalog_page="B-112"),
        )
        lines = text.splitlines()
        assert lines[0] == "NORD FLEXBLOC Gearmotor BOM"
        assert lines[1] == "Selected Model: SK 1SI63 - 56C - 63S/4"
        assert lines[2] == "Catalog Page: B-112"
        assert "1) Gear Unit: 60692800  | Wormgearbox 1.4375 Hollow Shaft 25mm - Ratio 80" in lines
        assert "2) Motor (STD or BRK): 31610012  | 63S/4 Motor 0.25HP" in lines
        assert "3) Adapter: 60395510  | NEMA 56C Input Adapter" in lines
        assert "4) Output Shaft Kit: — (not required)" in lines
        assert "- Applied SF: 1.5" in lines
        assert "- Catalog SF: 2.4" in lines
        assert "MISSING" not in text

    def test_sf_never_changes_gear_unit_pn(self) -> None:
        for applied_sf in (1.0, 1.25, 2.0):
            text = build_bom_copy_text(
                _bom(*CORE), BomCopyContext(applied_sf=applied_sf, catalog_sf=2.4),
            )
            assert "60692800" in text

    def test_kit_without_option(self) -> None:
        kit = _slot("output_shaft_kit", None, "Required for chain drive configuration")
        text = build_bom_copy_text(
            _bom(*CORE, kit, kit_required=True),
            BomCopyContext(applied_sf=1.0, catalog_sf=1.0),
        )
        assert ("4) Output Shaft Kit: — (select in Drive Arrangement)"
                "  | Required for chain drive configuration") in text
        assert ("- MISSING: Output Shaft Kit PN "
                "(Select an output shaft option to resolve this.)") in text

    def test_kit_with_option_not_in_catalog(self) -> None:
        kit = _slot("output_shaft_kit", None, "Output shaft kit SI100 (Inch keyed bore, single)")
        text = build_bom_copy_text(
            _bom(*CORE, kit, kit_required=True, option="inch_keyed"),
            BomCopyContext(applied_sf=1.0, catalog_sf=1.0),
        )
        assert "4) Output Shaft Kit: —  | Output shaft kit SI100" in text
        assert ("- MISSING: Output Shaft Kit PN "
                "(No matching component found in component map.)") in text

    def test_missing_gear_unit_hint(self) -> None:
        slots = (_slot("gear_unit", None, "NORD SI63 gear unit 0.5HP"),) + CORE[1:]
        text = build_bom_copy_text(_bom(*slots), BomCopyContext(applied_sf=1.0, catalog_sf=1.0))
        assert "1) Gear Unit: —  | NORD SI63 gear unit 0.5HP" in text
        assert "- MISSING: Gear Unit PN (Gear unit PN mapping not keyed for this model yet.)" in text

    def test_multiple_matches_note(self) -> None:
        text = build_bom_copy_text(
            _bom(*CORE),
            BomCopyContext(applied_sf=1.0, catalog_sf=1.0, had_multiple_matches=True),
        )
        assert "- NOTE: Multiple matches existed; selected first deterministic match." in text

    def test_bushing_listed_after_kit(self) -> None:
        bushing = _slot("hollow_shaft_bushing", "60693400", "SI63 Bushing 1.0")
        text = build_bom_copy_text(
            _bom(*CORE, bushing), BomCopyContext(applied_sf=1.0, catalog_sf=1.0),
        )
        assert "5) Hollow Shaft Bushing: 60693400  | SI63 Bushing 1.0" in text

    def test_no_catalog_page_line(self) -> None:
        text = build_bom_copy_text(_bom(*CORE), BomCopyContext(applied_sf=1.0, catalog_sf=1.0))
        assert "Catalog Page" not in text


class TestGetMissingHint:

    def test_kit_hints(self) -> None:
        assert get_missing_hint("output_shaft_kit") == (
            "Select an output shaft option to resolve this."
        )
        assert get_missing_hint("output_shaft_kit", required=False) == (
            "Not required for shaft mount configuration."
        )

    def test_generic_hint(self) -> None:
        assert get_missing_hint("motor") == "No matching component found in component map."
        assert get_missing_hint("adapter") == "No matching component found in component map."

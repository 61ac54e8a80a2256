"""Tests for coverage case keys and status classification."""

import pytest

from gearbom.engine.classifier import (
    case_key,
    classify,
    classify_error,
    representative_model_type,
    run_coverage_case,
)
from gearbom.engine.errors import ModelDescriptorError
from gearbom.models.catalog import BomResolution, ComponentSlot
from gearbom.models.common import CoverageStatus
from gearbom.models.coverage import RequirementInput


def _inputs(**overrides) -> RequirementInput:
    fields = {
        "series": "FLEXBLOC",
        "gear_unit_size": "SI63",
        "gearmotor_mounting_style": "bottom_mount",
        "output_shaft_option": "inch_keyed",
        "plug_in_shaft_style": "single",
        "total_ratio": 10.0,
        "motor_hp": 0.5,
    }
    fields.update(overrides)
    return RequirementInput(**fields)


def _resolution(*slots: ComponentSlot, complete: bool | None = None) -> BomResolution:
    return BomResolution(
        model_type="SK 1SI63 - 56C - 63S/4",
        components=list(slots),
        complete=all(s.found for s in slots) if complete is None else complete,
    )


FOUND = ComponentSlot(component_type="gear_unit", found=True, part_number="60692100")


class TestCaseKey:

    def test_field_order_and_format(self) -> None:
        assert case_key(_inputs()) == "FLEXBLOC|SI63|bottom_mount|inch_keyed|single|10|0.5"

    def test_sentinels(self) -> None:
        key = case_key(_inputs(
            gearmotor_mounting_style="shaft_mounted",
            output_shaft_option=None,
            plug_in_shaft_style=None,
            total_ratio=None,
            motor_hp=None,
        ))
        assert key == "FLEXBLOC|SI63|shaft_mounted|none|none|any|any"

    def test_stable_across_equal_inputs(self) -> None:
        assert case_key(_inputs()) == case_key(_inputs())
        assert case_key(_inputs(total_ratio=12.5)).endswith("|12.5|0.5")

    def test_distinct_inputs_distinct_keys(self) -> None:
        keys = {
            case_key(_inputs(plug_in_shaft_style=style))
            for style in ("single", "double", "flange_b5", None)
        }
        assert len(keys) == 4


class TestClassify:

    def test_resolved(self) -> None:
        motor = ComponentSlot(component_type="motor", found=True, part_number="31610012")
        assert classify(_resolution(FOUND, motor)) == (
            CoverageStatus.RESOLVED, "All 2 components resolved",
        )

    def test_unresolved_lists_missing_in_order(self) -> None:
        motor = ComponentSlot(component_type="motor", found=False)
        kit = ComponentSlot(component_type="output_shaft_kit", found=False)
        assert classify(_resolution(FOUND, motor, kit)) == (
            CoverageStatus.UNRESOLVED, "Missing: motor, output_shaft_kit",
        )

    def test_ambiguous(self) -> None:
        multi = ComponentSlot(
            component_type="motor", found=False, ambiguous=True,
        )
        status, message = classify(_resolution(FOUND, multi))
        assert status is CoverageStatus.AMBIGUOUS
        assert "motor" in message

    def test_incomplete_without_missing_is_invalid(self) -> None:
        assert classify(_resolution(FOUND, complete=False)) == (
            CoverageStatus.INVALID, "Unknown resolution state",
        )

    def test_error_message(self) -> None:
        assert classify_error(ValueError("boom")) == (
            CoverageStatus.INVALID, "Resolver error: boom",
        )

    def test_error_without_description(self) -> None:
        assert classify_error(RuntimeError()) == (
            CoverageStatus.INVALID, "Resolver error: unknown",
        )


class StubResolver:
    """Resolver stand-in returning a fixed outcome or raising."""

    def __init__(self, outcome) -> None:
        self.outcome = outcome
        self.calls: list[tuple] = []

    async def resolve(self, model_type, motor_hp, options=None):
        self.calls.append((model_type, motor_hp, options))
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome


class TestRunCoverageCase:

    @pytest.mark.anyio
    async def test_representative_descriptor(self) -> None:
        stub = StubResolver(_resolution(FOUND))
        await run_coverage_case(stub, _inputs(gear_unit_size="63"))
        model_type, motor_hp, options = stub.calls[0]
        assert model_type == "SK 1SI63 - 56C - 63S/4"
        assert motor_hp == 0.5
        assert options.total_ratio == 10.0
        assert options.mounting_variant == "inch_hollow"
        assert options.plug_in_shaft_style == "single"

    @pytest.mark.anyio
    async def test_resolved_pns_only_real(self) -> None:
        placeholder = ComponentSlot(
            component_type="motor", found=True, part_number="SI63-0.25HP",
        )
        result = await run_coverage_case(StubResolver(_resolution(FOUND, placeholder)), _inputs())
        assert result.status is CoverageStatus.RESOLVED
        assert result.resolved_pns == ["60692100"]
        assert set(result.components) == {"gear_unit", "motor"}
        assert result.components["gear_unit"].part_number == "60692100"

    @pytest.mark.anyio
    async def test_resolver_exception_is_invalid(self) -> None:
        stub = StubResolver(ModelDescriptorError("Unable to parse model type 'x'"))
        result = await run_coverage_case(stub, _inputs())
        assert result.status is CoverageStatus.INVALID
        assert result.message == "Resolver error: Unable to parse model type 'x'"
        assert result.resolved_pns == []
        assert result.components == {}

    @pytest.mark.anyio
    async def test_unexpected_exception_is_invalid(self) -> None:
        result = await run_coverage_case(StubResolver(KeyError()), _inputs())
        assert result.status is CoverageStatus.INVALID
        assert result.message == "Resolver error: unknown"

    @pytest.mark.anyio
    async def test_every_outcome_gets_exactly_one_status(self) -> None:
        outcomes = [
            _resolution(FOUND),
            _resolution(FOUND, ComponentSlot(component_type="motor", found=False)),
            _resolution(FOUND, complete=False),
            ValueError("bad"),
        ]
        statuses = [
            (await run_coverage_case(StubResolver(outcome), _inputs())).status
            for outcome in outcomes
        ]
        assert statuses == [
            CoverageStatus.RESOLVED,
            CoverageStatus.UNRESOLVED,
            CoverageStatus.INVALID,
            CoverageStatus.INVALID,
        ]


def test_representative_model_type_normalises_size() -> None:
    assert representative_model_type("100") == "SK 1SI100 - 56C - 63S/4"
    assert representative_model_type("si31") == "SK 1SI31 - 56C - 63S/4"

"""Tests for coverage input-space enumeration."""

import logging

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from gearbom.engine.classifier import case_key
from gearbom.engine.enumerator import (
    FALLBACK_MOTOR_HP,
    FALLBACK_RATIO,
    MAX_COVERAGE_CASES,
    EnumerationContext,
    build_coverage_inputs,
    enumerate_coverage_inputs,
    load_enumeration_context,
)
from gearbom.models.common import CatalogComponentType
from gearbom.repositories.catalog import CatalogRepository


def _ctx(sizes: list[str], ratios=(10.0,), hps=(0.5,)) -> EnumerationContext:
    return EnumerationContext(gear_unit_sizes=sizes, ratios=list(ratios), motor_hps=list(hps))


class TestBuildCoverageInputs:

    def test_nine_cases_per_size(self) -> None:
        inputs = build_coverage_inputs(_ctx(["SI63"]), series="FLEXBLOC")
        assert len(inputs) == 9

    def test_order_and_shape(self) -> None:
        inputs = build_coverage_inputs(_ctx(["SI63"]), series="FLEXBLOC")
        shape = [
            (i.gearmotor_mounting_style, i.output_shaft_option, i.plug_in_shaft_style)
            for i in inputs
        ]
        assert shape == [
            ("shaft_mounted", None, None),
            ("bottom_mount", "inch_keyed", "single"),
            ("bottom_mount", "inch_keyed", "double"),
            ("bottom_mount", "inch_keyed", "flange_b5"),
            ("bottom_mount", "metric_keyed", "single"),
            ("bottom_mount", "metric_keyed", "double"),
            ("bottom_mount", "metric_keyed", "flange_b5"),
            ("bottom_mount", "inch_hollow", None),
            ("bottom_mount", "metric_hollow", None),
        ]

    def test_representative_values(self) -> None:
        inputs = build_coverage_inputs(
            _ctx(["SI31"], ratios=(7.5, 80.0), hps=(0.25, 1.0)), series="FLEXBLOC",
        )
        assert {i.total_ratio for i in inputs} == {7.5}
        assert {i.motor_hp for i in inputs} == {0.25}

    def test_fallbacks_when_catalog_has_no_points(self) -> None:
        inputs = build_coverage_inputs(_ctx(["SI31"], ratios=(), hps=()), series="FLEXBLOC")
        assert inputs[0].total_ratio == FALLBACK_RATIO
        assert inputs[0].motor_hp == FALLBACK_MOTOR_HP

    def test_unique_case_keys(self) -> None:
        inputs = build_coverage_inputs(_ctx(["SI31", "SI63", "SI100"]), series="FLEXBLOC")
        keys = [case_key(i) for i in inputs]
        assert len(keys) == len(set(keys)) == 27

    def test_guardrail_caps_exactly(self, caplog: pytest.LogCaptureFixture) -> None:
        sizes = [f"SI{n}" for n in range(1, 201)]  # 1800 candidate cases
        with caplog.at_level(logging.WARNING, logger="gearbom.engine.enumerator"):
            inputs = build_coverage_inputs(_ctx(sizes), series="FLEXBLOC")
        assert len(inputs) == 1000
        assert "capped at 1000" in caplog.text

    def test_custom_cap(self) -> None:
        inputs = build_coverage_inputs(_ctx(["SI31", "SI63"]), series="FLEXBLOC", max_cases=5)
        assert len(inputs) == 5
        assert all(i.gear_unit_size == "SI31" for i in inputs)

    def test_larger_cap_is_clamped(self) -> None:
        sizes = [f"SI{n}" for n in range(1, 201)]
        inputs = build_coverage_inputs(_ctx(sizes), series="FLEXBLOC", max_cases=5000)
        assert len(inputs) == MAX_COVERAGE_CASES

    def test_empty_catalog(self) -> None:
        assert build_coverage_inputs(_ctx([]), series="FLEXBLOC") == []


class TestLoadEnumerationContext:

    @pytest.mark.anyio
    async def test_values_from_catalog(self, db_session: AsyncSession) -> None:
        repo = CatalogRepository(db_session)
        for size, pn in (("SI100", "61092100"), ("SI31", "60392100"),
                         ("SI63", "60692100"), ("SI63", "60692800")):
            await repo.create_component(
                vendor="NORD",
                component_type=CatalogComponentType.GEAR_UNIT.value,
                vendor_part_number=pn,
                metadata={"gear_unit_size": size},
            )
        await repo.create_component(
            vendor="OTHER",
            component_type=CatalogComponentType.GEAR_UNIT.value,
            vendor_part_number="60992100",
            metadata={"gear_unit_size": "SI90"},
        )
        for hp, ratio in ((0.5, 80.0), (0.25, 12.5), (0.25, None)):
            await repo.create_performance_point(
                vendor="NORD", series="FLEXBLOC",
                model_type="SK 1SI63 - 56C - 63S/4", motor_hp=hp,
                metadata={"worm_ratio": ratio} if ratio else {},
            )

        ctx = await load_enumeration_context(repo, vendor="NORD", series="FLEXBLOC")
        assert ctx.gear_unit_sizes == ["SI31", "SI63", "SI100"]
        assert ctx.ratios == [12.5, 80.0]
        assert ctx.motor_hps == [0.25, 0.5]

    @pytest.mark.anyio
    async def test_enumerate_seeded_catalog(self, seeded_session: AsyncSession) -> None:
        inputs = await enumerate_coverage_inputs(
            CatalogRepository(seeded_session), vendor="NORD", series="FLEXBLOC",
        )
        assert len(inputs) == 27
        assert [i.gear_unit_size for i in inputs[::9]] == ["SI31", "SI63", "SI100"]
        assert inputs[0].total_ratio == 10.0
        assert inputs[0].motor_hp == 0.25

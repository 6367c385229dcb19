"""Unit tests for the outer and inner spiral coil generators.

Covers pad placement, arc counts, closing geometry for both half-turn
parities, and the geometric invariants of the half-turn chain: every arc
starts where the previous one ended, every arc is a true semicircle or
quarter circle, and the two coils never share a crossing on the +x axis.
"""

from __future__ import annotations

import pytest

from coilgen.builders import inner_spiral_spec, outer_spiral_spec
from coilgen.geom.primitives import FootprintLayer, PositionNM
from coilgen.geom.spiral import SpiralCoil, SpiralSpec, generate_inner_spiral, generate_outer_spiral
from coilgen.spec import TransformerSpec


def _spiral_spec(half_turns: int, center: PositionNM = PositionNM(0, 0)) -> SpiralSpec:
    return SpiralSpec(
        width_nm=160_000,
        inner_radius_nm=3_000_000,
        step_nm=400_000,
        half_turns=half_turns,
        end_radius_nm=800_000,
        pad_size_nm=1_000_000,
        pad_drill_nm=600_000,
        start_pin="A",
        end_pin="B",
        center=center,
    )


def _axis_crossings(coil: SpiralCoil) -> set[int]:
    points = [p for arc in coil.arcs for p in (arc.start, arc.end)]
    return {p.x for p in points if p.y == 0 and p.x > 0}


class TestOuterSpiral:
    @pytest.fixture
    def coil(self, t1_spec: TransformerSpec) -> SpiralCoil:
        return generate_outer_spiral(outer_spiral_spec(t1_spec))

    def test_arc_and_pad_counts(self, coil: SpiralCoil) -> None:
        assert len(coil.arcs) == 11
        assert len(coil.body) == 9
        assert len(coil.pads) == 2

    def test_pad_names_and_positions(self, coil: SpiralCoil) -> None:
        first, last = coil.pads
        assert first.number == "2"
        assert first.position == PositionNM(2_400_000, -800_000)
        assert last.number == "1"
        assert last.position == PositionNM(-5_600_000, -800_000)

    def test_pad_dimensions(self, coil: SpiralCoil) -> None:
        for pad in coil.pads:
            assert pad.size_nm == 1_000_000
            assert pad.drill_nm == 600_000

    def test_final_radius(self, coil: SpiralCoil) -> None:
        assert coil.final_radius_nm == 4_800_000

    def test_opening_lead_arc(self, coil: SpiralCoil) -> None:
        lead = coil.arcs[0]
        assert lead.start == PositionNM(2_400_000, -800_000)
        assert lead.mid == PositionNM(2_965_685, -565_685)
        assert lead.end == PositionNM(3_200_000, 0)

    def test_closing_lead_arc_ends_on_winding(self, coil: SpiralCoil) -> None:
        lead = coil.arcs[-1]
        assert lead.start == PositionNM(-5_600_000, -800_000)
        assert lead.end == PositionNM(-4_800_000, 0)
        assert coil.body[-1].end == lead.end

    def test_body_is_continuous(self, coil: SpiralCoil) -> None:
        arcs = coil.arcs[:-1]
        for previous, current in zip(arcs, arcs[1:]):
            assert current.start == previous.end

    def test_even_half_turns_sweep_through_positive_y(self, coil: SpiralCoil) -> None:
        for i, arc in enumerate(coil.body):
            if i % 2 == 0:
                assert arc.mid.x == 0
                assert arc.mid.y > 0
            else:
                assert arc.mid.y < 0

    def test_odd_half_turns_are_semicircles(self, coil: SpiralCoil) -> None:
        step = 400_000
        for arc in coil.body[1::2]:
            # center sits half a step right of the coil center
            cx2 = step
            r2 = {
                (2 * arc.start.x - cx2) ** 2 + (2 * arc.start.y) ** 2,
                (2 * arc.mid.x - cx2) ** 2 + (2 * arc.mid.y) ** 2,
                (2 * arc.end.x - cx2) ** 2 + (2 * arc.end.y) ** 2,
            }
            assert len(r2) == 1
            assert arc.end.x - arc.start.x == 2 * (-arc.start.x) + step

    def test_layer_and_width(self, coil: SpiralCoil) -> None:
        for arc in coil.arcs:
            assert arc.layer is FootprintLayer.F_CU
            assert arc.width_nm == 160_000

    def test_single_half_turn(self) -> None:
        coil = generate_outer_spiral(_spiral_spec(1))
        assert len(coil.arcs) == 3
        assert coil.final_radius_nm == 3_200_000
        assert coil.pads[1].position == PositionNM(-4_000_000, -800_000)

    def test_offset_center(self) -> None:
        centered = generate_outer_spiral(_spiral_spec(5))
        shifted = generate_outer_spiral(_spiral_spec(5, center=PositionNM(1_000_000, -2_000_000)))
        offset = PositionNM(1_000_000, -2_000_000)
        for a, b in zip(centered.arcs, shifted.arcs):
            assert b.start == a.start + offset
            assert b.mid == a.mid + offset
            assert b.end == a.end + offset
        for a, b in zip(centered.pads, shifted.pads):
            assert b.position == a.position + offset


class TestInnerSpiralEven:
    @pytest.fixture
    def coil(self, t1_spec: TransformerSpec) -> SpiralCoil:
        return generate_inner_spiral(inner_spiral_spec(t1_spec))

    def test_runs_one_more_half_turn(self, t1_spec: TransformerSpec) -> None:
        assert inner_spiral_spec(t1_spec).half_turns == 10

    def test_arc_and_pad_counts(self, coil: SpiralCoil) -> None:
        assert len(coil.arcs) == 13
        assert len(coil.pads) == 2

    def test_pads(self, coil: SpiralCoil) -> None:
        first, last = coil.pads
        assert first.number == "4"
        assert first.position == PositionNM(800_000, 2_200_000)
        assert last.number == "3"
        assert last.position == PositionNM(-800_000, 5_800_000)

    def test_final_radius(self, coil: SpiralCoil) -> None:
        assert coil.final_radius_nm == 5_000_000

    def test_opening_arcs_start_at_top(self, coil: SpiralCoil) -> None:
        lead, quarter = coil.arcs[0], coil.arcs[1]
        assert lead.start == PositionNM(0, 3_000_000)
        assert lead.end == coil.pads[0].position
        assert quarter.start == PositionNM(0, 3_000_000)
        assert quarter.mid == PositionNM(-2_121_321, 2_121_321)
        assert quarter.end == PositionNM(-3_000_000, 0)

    def test_closing_arcs(self, coil: SpiralCoil) -> None:
        quarter, lead = coil.arcs[-2], coil.arcs[-1]
        assert quarter.start == PositionNM(5_000_000, 0)
        assert quarter.end == PositionNM(0, 5_000_000)
        assert lead.start == PositionNM(-800_000, 5_800_000)
        assert lead.end == quarter.end

    def test_winding_is_continuous(self, coil: SpiralCoil) -> None:
        arcs = coil.arcs[1:-1]
        for previous, current in zip(arcs, arcs[1:]):
            assert current.start == previous.end

    def test_layer_and_width(self, coil: SpiralCoil) -> None:
        for arc in coil.arcs:
            assert arc.layer is FootprintLayer.F_CU
            assert arc.width_nm == 80_000


class TestInnerSpiralOdd:
    @pytest.fixture
    def coil(self) -> SpiralCoil:
        return generate_inner_spiral(_spiral_spec(9))

    def test_single_pad(self, coil: SpiralCoil) -> None:
        assert len(coil.pads) == 1
        assert coil.pads[0].number == "A"

    def test_arc_count(self, coil: SpiralCoil) -> None:
        assert len(coil.arcs) == 12

    def test_final_radius(self, coil: SpiralCoil) -> None:
        assert coil.final_radius_nm == 4_600_000

    def test_closing_arc_lands_on_shifted_circle(self, coil: SpiralCoil) -> None:
        closing = coil.arcs[-2]
        assert closing.start == PositionNM(-4_600_000, 0)
        assert closing.end == PositionNM(200_000, -4_800_000)
        lead = coil.arcs[-1]
        assert lead.end == closing.end
        assert lead.start == PositionNM(-600_000, -4_000_000)

    @pytest.mark.parametrize("half_turns", range(1, 30, 2))
    def test_winding_is_continuous(self, half_turns: int) -> None:
        coil = generate_inner_spiral(_spiral_spec(half_turns))
        assert len(coil.pads) == 1
        assert coil.arcs[0].start == coil.arcs[1].start
        arcs = coil.arcs[1:-1]
        for previous, current in zip(arcs, arcs[1:]):
            assert current.start == previous.end
        # the padless lead is stored ending on the closing arc
        assert coil.arcs[-1].end == arcs[-1].end
        shifted_radius = coil.final_radius_nm + 200_000
        assert arcs[-1].start == PositionNM(-coil.final_radius_nm, 0)
        assert arcs[-1].end == PositionNM(200_000, -shifted_radius)


class TestInnerSpiralEdgeCases:
    def test_two_half_turns(self) -> None:
        coil = generate_inner_spiral(_spiral_spec(2))
        assert len(coil.pads) == 2
        assert coil.final_radius_nm == 3_400_000
        assert coil.arcs[-2].end == PositionNM(0, 3_400_000)

    def test_single_half_turn_starts_from_quarter_arc(self) -> None:
        coil = generate_inner_spiral(_spiral_spec(1))
        assert len(coil.pads) == 1
        assert len(coil.arcs) == 4
        assert coil.arcs[2].start == PositionNM(-3_000_000, 0)
        assert coil.final_radius_nm == 3_000_000


class TestCoilInterleave:
    def test_axis_crossings_disjoint(self, t1_spec: TransformerSpec) -> None:
        outer = generate_outer_spiral(outer_spiral_spec(t1_spec))
        inner = generate_inner_spiral(inner_spiral_spec(t1_spec))
        outer_x = _axis_crossings(outer)
        inner_x = _axis_crossings(inner)
        assert outer_x == {3_200_000, 3_600_000, 4_000_000, 4_400_000, 4_800_000}
        assert inner_x == {3_400_000, 3_800_000, 4_200_000, 4_600_000, 5_000_000}
        assert outer_x.isdisjoint(inner_x)

"""Round planar transformer footprint builder.

This module implements the feature composition pattern for the transformer:
  outer spiral coil -> inner spiral coil -> cutouts -> reference text

The builder maps a TransformerSpec onto the geometry generators and
collects their records in emission order. Every record carries its own
layer:

- Coils: F.Cu
- Cutouts: Edge.Cuts
- Reference text: F.Fab

No formatting happens here; the footprint writer turns the composition into
an S-expression document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..geom.cutouts import CutoutOutline, CutoutSpec, generate_cutouts
from ..geom.primitives import (
    ORIGIN,
    ArcPrimitive,
    FootprintLayer,
    OutlineElement,
    Pad,
    PositionNM,
    Text,
)
from ..geom.spiral import SpiralCoil, SpiralSpec, generate_inner_spiral, generate_outer_spiral
from ..spec import TransformerSpec

logger = logging.getLogger(__name__)

REFERENCE_TEXT = "${REFERENCE}"
REFERENCE_TEXT_Y_NM = 2_500_000


@dataclass(frozen=True, slots=True)
class TransformerFootprint:
    """Complete geometry of a transformer footprint.

    Attributes:
        spec: The spec the footprint was built from.
        outer_coil: Outer coil arcs and pads.
        inner_coil: Inner coil arcs and pads.
        cutouts: Central hole and corner relief outlines, in emission order.
        texts: User text blocks.
    """

    spec: TransformerSpec
    outer_coil: SpiralCoil
    inner_coil: SpiralCoil
    cutouts: tuple[CutoutOutline, ...]
    texts: tuple[Text, ...]

    @property
    def coils(self) -> tuple[SpiralCoil, SpiralCoil]:
        return (self.outer_coil, self.inner_coil)

    @property
    def arcs(self) -> tuple[ArcPrimitive, ...]:
        """Coil arcs, outer coil first."""
        return self.outer_coil.arcs + self.inner_coil.arcs

    @property
    def pads(self) -> tuple[Pad, ...]:
        """Terminal pads, outer coil first."""
        return self.outer_coil.pads + self.inner_coil.pads

    @property
    def cutout_elements(self) -> tuple[OutlineElement, ...]:
        return tuple(element for outline in self.cutouts for element in outline.elements)


def outer_spiral_spec(spec: TransformerSpec, center: PositionNM = ORIGIN) -> SpiralSpec:
    """Map a TransformerSpec onto the outer coil."""
    return SpiralSpec(
        width_nm=spec.trace_width1_nm,
        inner_radius_nm=spec.inner_radius_nm,
        step_nm=spec.step_nm,
        half_turns=spec.half_turns_count,
        end_radius_nm=spec.end_radius_nm,
        pad_size_nm=spec.pad_size_nm,
        pad_drill_nm=spec.pad_drill_nm,
        # coil1_pin_name1 ("2") is the opening pad and coil1_pin_name2 ("1") the closing one
        start_pin=spec.coil1_pin_name1,
        end_pin=spec.coil1_pin_name2,
        layer=FootprintLayer.F_CU,
        center=center,
    )


def inner_spiral_spec(spec: TransformerSpec, center: PositionNM = ORIGIN) -> SpiralSpec:
    """Map a TransformerSpec onto the inner coil."""
    return SpiralSpec(
        width_nm=spec.trace_width2_nm,
        inner_radius_nm=spec.inner_radius_nm,
        step_nm=spec.step_nm,
        half_turns=spec.inner_half_turns_count,
        end_radius_nm=spec.end_radius_nm,
        pad_size_nm=spec.pad_size_nm,
        pad_drill_nm=spec.pad_drill_nm,
        start_pin=spec.coil2_pin_name2,
        end_pin=spec.coil2_pin_name1,
        layer=FootprintLayer.F_CU,
        center=center,
    )


def cutout_spec(spec: TransformerSpec) -> CutoutSpec:
    """Map a TransformerSpec onto the cutout outlines."""
    return CutoutSpec(
        center_radius_nm=spec.internal_cut_hole_radius_nm,
        corner_size_nm=spec.corner_cut_hole_size_nm,
        corner_width_nm=spec.corner_cut_hole_width_nm,
        corner_radius_nm=spec.corner_cut_hole_radius_nm,
        corner_rounding_nm=spec.corner_cut_hole_rounding_nm,
        line_width_nm=spec.cut_line_width_nm,
        stroke_type=spec.cut_line_type,
        layer=FootprintLayer.EDGE_CUTS,
    )


def build_transformer(spec: TransformerSpec, center: PositionNM = ORIGIN) -> TransformerFootprint:
    """Compose the complete transformer footprint geometry.

    Args:
        spec: Transformer specification.
        center: Coil center in nm.

    Returns:
        TransformerFootprint with both coils, cutouts and reference text.
    """
    outer = generate_outer_spiral(outer_spiral_spec(spec, center))
    inner = generate_inner_spiral(inner_spiral_spec(spec, center))
    cutouts = generate_cutouts(cutout_spec(spec))
    texts = (
        Text(
            content=REFERENCE_TEXT,
            position=PositionNM(0, REFERENCE_TEXT_Y_NM),
            layer=FootprintLayer.F_FAB,
        ),
    )
    logger.info(
        "Built %s: %d arcs, %d pads, %d cutout outline(s)",
        spec.footprint_name,
        len(outer.arcs) + len(inner.arcs),
        len(outer.pads) + len(inner.pads),
        len(cutouts),
    )
    return TransformerFootprint(
        spec=spec,
        outer_coil=outer,
        inner_coil=inner,
        cutouts=cutouts,
        texts=texts,
    )

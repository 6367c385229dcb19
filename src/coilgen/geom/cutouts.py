"""Board cutout outlines around a round planar transformer.

The footprint removes board material in two places:

- Corner reliefs: four rotationally symmetric outlines, one per quadrant,
  each bounded by a rounded square corner and closed by an arc on a large
  circle around the coil.
- Central hole: an optional circle at the footprint origin.

Quadrants are indexed in the KiCad frame (+y downward)::

    2 | 3
    --+--
    1 | 0

All coordinates use integer nanometers. The only floating-point step is the
square root locating where a corner outline meets the large circle; it is
truncated back to integer nanometers immediately.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..units import rotate45
from .primitives import (
    ORIGIN,
    ArcPrimitive,
    CirclePrimitive,
    FootprintLayer,
    LinePrimitive,
    OutlineElement,
    PositionNM,
    StrokeType,
)

logger = logging.getLogger(__name__)

# (sx, sy) axis signs per quadrant
QUADRANT_SIGNS: tuple[tuple[int, int], ...] = ((1, 1), (-1, 1), (-1, -1), (1, -1))

# Emission order of the corner outlines; any order yields the same shapes
CORNER_ORDER: tuple[int, ...] = (2, 0, 3, 1)


@dataclass(frozen=True, slots=True)
class CutoutSpec:
    """Specification for the transformer cutouts.

    Attributes:
        center_radius_nm: Radius of the central hole (0 disables it).
        corner_size_nm: Distance from origin to each outline corner along
            both axes (0 disables the corner reliefs).
        corner_width_nm: Width of the corner relief along each edge.
        corner_radius_nm: Radius of the circle closing each corner relief.
        corner_rounding_nm: Rounding radius of the relief corners.
        line_width_nm: Outline stroke width.
        stroke_type: Stroke style for lines and circles.
        layer: Layer the cutouts are drawn on.
    """

    center_radius_nm: int
    corner_size_nm: int
    corner_width_nm: int
    corner_radius_nm: int
    corner_rounding_nm: int
    line_width_nm: int
    stroke_type: StrokeType = StrokeType.DEFAULT
    layer: FootprintLayer = FootprintLayer.EDGE_CUTS


@dataclass(frozen=True, slots=True)
class CutoutOutline:
    """One closed cutout shape.

    Attributes:
        elements: Lines, arcs or circles forming the outline.
        quadrant: Quadrant index for corner reliefs, None for the central hole.
    """

    elements: tuple[OutlineElement, ...]
    quadrant: int | None = None

    def reflected(self) -> tuple[OutlineElement, ...]:
        """Return the outline elements reflected through the origin."""
        reflected: list[OutlineElement] = []
        for element in self.elements:
            if isinstance(element, CirclePrimitive):
                reflected.append(
                    CirclePrimitive(
                        center=-element.center,
                        radius_nm=element.radius_nm,
                        width_nm=element.width_nm,
                        layer=element.layer,
                        stroke_type=element.stroke_type,
                    )
                )
            else:
                reflected.append(element.reflected())
        return tuple(reflected)


def quadrant_arc(
    center: PositionNM,
    radius_nm: int,
    quadrant: int,
    width_nm: int,
    layer: FootprintLayer = FootprintLayer.EDGE_CUTS,
) -> ArcPrimitive:
    """Build a quarter arc of ``radius_nm`` around ``center`` in one quadrant.

    The arc runs counter-clockwise on screen (KiCad frame), from the axis
    point preceding the quadrant to the one following it. ``quadrant`` is
    taken modulo 4, so negative or flipped indices are accepted.

    Args:
        center: Arc center in nm.
        radius_nm: Arc radius in nm.
        quadrant: Quadrant index (see module docstring).
        width_nm: Stroke width in nm.
        layer: Layer for the arc.

    Returns:
        ArcPrimitive for the quarter arc.
    """
    quadrant &= 3
    r = radius_nm
    r45 = rotate45(r)
    cx, cy = center.to_tuple()
    if quadrant == 0:
        points = ((cx + r, cy), (cx + r45, cy + r45), (cx, cy + r))
    elif quadrant == 1:
        points = ((cx, cy + r), (cx - r45, cy + r45), (cx - r, cy))
    elif quadrant == 2:
        points = ((cx - r, cy), (cx - r45, cy - r45), (cx, cy - r))
    else:
        points = ((cx, cy - r), (cx + r45, cy - r45), (cx + r, cy))
    start, mid, end = (PositionNM.from_tuple(p) for p in points)
    return ArcPrimitive(start=start, mid=mid, end=end, width_nm=width_nm, layer=layer)


def generate_corner_cutout(quadrant: int, spec: CutoutSpec) -> CutoutOutline:
    """Generate the corner relief outline for one quadrant.

    The outline hugs the square corner at ``(sx * size, sy * size)`` with
    rounded corners, runs ``corner_width`` inward along both edges and is
    closed by an arc on the circle of ``corner_radius`` around the origin.
    The straight edges stop where ``x^2 + y^2 = r^2`` at ``|x| = size - width``.

    Args:
        quadrant: Quadrant index 0-3 (taken modulo 4).
        spec: Cutout specification.

    Returns:
        CutoutOutline with three rounding arcs, four lines and the closing arc.

    Raises:
        ValueError: If the closing circle does not reach the relief edges
            (negative radicand).
    """
    quadrant &= 3
    sx, sy = QUADRANT_SIGNS[quadrant]
    size = spec.corner_size_nm
    w = spec.corner_width_nm
    r = spec.corner_radius_nm
    rr = spec.corner_rounding_nm
    width = spec.line_width_nm
    layer = spec.layer
    cx = size * sx
    cy = size * sy
    flip = (quadrant & 1) << 1

    def line(x0: int, y0: int, x1: int, y1: int) -> LinePrimitive:
        return LinePrimitive(
            start=PositionNM(x0, y0),
            end=PositionNM(x1, y1),
            width_nm=width,
            layer=layer,
            stroke_type=spec.stroke_type,
        )

    px = w - size
    dy = int(math.sqrt(float(r) * r - float(px) * px))
    r45 = rotate45(r)

    elements: list[OutlineElement] = [
        # outer corner
        quadrant_arc(PositionNM(cx - sx * rr, cy - sy * rr), rr, quadrant, width, layer),
        line(cx - sx * rr, cy, cx - sx * (w - rr), cy),
        quadrant_arc(PositionNM(cx - sx * (w - rr), cy - sy * rr), rr, (quadrant + 1) ^ flip, width, layer),
        line(cx, cy - sy * rr, cx, cy - sy * (w - rr)),
        quadrant_arc(PositionNM(cx - sx * rr, cy - sy * (w - rr)), rr, (quadrant - 1) ^ flip, width, layer),
        # inner edges down to the closing circle
        line(cx - sx * w, cy - sy * rr, cx - sx * w, sy * dy),
        line(cx - sx * rr, cy - sy * w, sx * dy, cy - sy * w),
        ArcPrimitive(
            start=PositionNM(sx * dy, cy - sy * w),
            mid=PositionNM(sx * r45, sy * r45),
            end=PositionNM(cx - sx * w, sy * dy),
            width_nm=width,
            layer=layer,
        ),
    ]
    return CutoutOutline(elements=tuple(elements), quadrant=quadrant)


def generate_center_cutout(spec: CutoutSpec, center: PositionNM = ORIGIN) -> CutoutOutline:
    """Generate the central hole as a single circle."""
    circle = CirclePrimitive(
        center=center,
        radius_nm=spec.center_radius_nm,
        width_nm=spec.line_width_nm,
        layer=spec.layer,
        stroke_type=spec.stroke_type,
    )
    return CutoutOutline(elements=(circle,))


def generate_cutouts(spec: CutoutSpec) -> tuple[CutoutOutline, ...]:
    """Generate every enabled cutout.

    The central hole comes first when ``center_radius_nm > 0``, followed by
    the four corner reliefs in ``CORNER_ORDER`` when ``corner_size_nm > 0``.
    """
    outlines: list[CutoutOutline] = []
    if spec.center_radius_nm > 0:
        outlines.append(generate_center_cutout(spec))
    if spec.corner_size_nm > 0:
        outlines.extend(generate_corner_cutout(q, spec) for q in CORNER_ORDER)
    logger.debug("Generated %d cutout outline(s)", len(outlines))
    return tuple(outlines)

"""Geometry records and generators for transformer footprints.

All coordinates use integer nanometers (1e-6 mm) so the emitted footprint
is free of floating-point drift.

Submodules:
- primitives: Geometric records (ArcPrimitive, LinePrimitive, Pad, ...)
- spiral: Outer and inner spiral coil generators
- cutouts: Corner relief and central hole outline generators
"""

from __future__ import annotations

from .cutouts import (
    CORNER_ORDER,
    QUADRANT_SIGNS,
    CutoutOutline,
    CutoutSpec,
    generate_center_cutout,
    generate_corner_cutout,
    generate_cutouts,
    quadrant_arc,
)
from .primitives import (
    ORIGIN,
    ArcPrimitive,
    CirclePrimitive,
    FootprintLayer,
    LinePrimitive,
    OutlineElement,
    Pad,
    PadShape,
    PositionNM,
    StrokeType,
    Text,
)
from .spiral import (
    SpiralCoil,
    SpiralSpec,
    generate_inner_spiral,
    generate_outer_spiral,
)

__all__ = [
    # Primitives
    "ORIGIN",
    "ArcPrimitive",
    "CirclePrimitive",
    "FootprintLayer",
    "LinePrimitive",
    "OutlineElement",
    "Pad",
    "PadShape",
    "PositionNM",
    "StrokeType",
    "Text",
    # Spiral coils
    "SpiralCoil",
    "SpiralSpec",
    "generate_inner_spiral",
    "generate_outer_spiral",
    # Cutouts
    "CORNER_ORDER",
    "QUADRANT_SIGNS",
    "CutoutOutline",
    "CutoutSpec",
    "generate_center_cutout",
    "generate_corner_cutout",
    "generate_cutouts",
    "quadrant_arc",
]

"""Geometric records for transformer footprint generation.

All coordinates are in integer nanometers (1e-6 mm) so emitted coordinates
never carry floating-point drift. Coordinates follow the KiCad footprint
frame: origin at the footprint anchor, +x to the right, +y downward.

Every drawable record carries the layer it is emitted on; nothing in the
geometry layer holds a "current layer".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PadShape(Enum):
    """Pad shape types matching KiCad pad shapes."""

    CIRCLE = "circle"
    RECT = "rect"
    OVAL = "oval"


class StrokeType(Enum):
    """Stroke line styles understood by KiCad."""

    DEFAULT = "default"
    SOLID = "solid"
    DASH = "dash"
    DOT = "dot"


class FootprintLayer(Enum):
    """Layers the transformer footprint draws on."""

    F_CU = "F.Cu"
    F_SILKSCREEN = "F.SilkS"
    F_FAB = "F.Fab"
    EDGE_CUTS = "Edge.Cuts"


@dataclass(frozen=True, slots=True)
class PositionNM:
    """2D position in integer nanometers.

    Attributes:
        x: X coordinate in nanometers.
        y: Y coordinate in nanometers.
    """

    x: int
    y: int

    def __add__(self, other: PositionNM) -> PositionNM:
        return PositionNM(self.x + other.x, self.y + other.y)

    def __sub__(self, other: PositionNM) -> PositionNM:
        return PositionNM(self.x - other.x, self.y - other.y)

    def __neg__(self) -> PositionNM:
        return PositionNM(-self.x, -self.y)

    def to_tuple(self) -> tuple[int, int]:
        """Return position as (x, y) tuple."""
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, xy: tuple[int, int]) -> PositionNM:
        """Create PositionNM from (x, y) tuple."""
        return cls(xy[0], xy[1])


ORIGIN = PositionNM(0, 0)


@dataclass(frozen=True, slots=True)
class ArcPrimitive:
    """Circular arc defined by start, mid (on arc), and end points.

    Callers must pass three distinct, non-collinear points.

    Attributes:
        start: Start position in nm.
        mid: Point on the arc between start and end in nm.
        end: End position in nm.
        width_nm: Stroke width in nm.
        layer: Layer the arc is drawn on.
        stroke_type: Stroke style.
    """

    start: PositionNM
    mid: PositionNM
    end: PositionNM
    width_nm: int
    layer: FootprintLayer
    stroke_type: StrokeType = StrokeType.SOLID

    def reflected(self) -> ArcPrimitive:
        """Return the arc reflected through the origin."""
        return ArcPrimitive(
            start=-self.start,
            mid=-self.mid,
            end=-self.end,
            width_nm=self.width_nm,
            layer=self.layer,
            stroke_type=self.stroke_type,
        )


@dataclass(frozen=True, slots=True)
class LinePrimitive:
    """Straight graphic line.

    Attributes:
        start: Start position in nm.
        end: End position in nm.
        width_nm: Stroke width in nm.
        layer: Layer the line is drawn on.
        stroke_type: Stroke style.
    """

    start: PositionNM
    end: PositionNM
    width_nm: int
    layer: FootprintLayer
    stroke_type: StrokeType = StrokeType.DEFAULT

    def reflected(self) -> LinePrimitive:
        """Return the line reflected through the origin."""
        return LinePrimitive(
            start=-self.start,
            end=-self.end,
            width_nm=self.width_nm,
            layer=self.layer,
            stroke_type=self.stroke_type,
        )


@dataclass(frozen=True, slots=True)
class CirclePrimitive:
    """Unfilled circle outline.

    Attributes:
        center: Circle center in nm.
        radius_nm: Radius in nm.
        width_nm: Stroke width in nm.
        layer: Layer the circle is drawn on.
        stroke_type: Stroke style.
    """

    center: PositionNM
    radius_nm: int
    width_nm: int
    layer: FootprintLayer
    stroke_type: StrokeType = StrokeType.DEFAULT

    @property
    def end(self) -> PositionNM:
        """Point on the circle used by KiCad to encode the radius."""
        return PositionNM(self.center.x + self.radius_nm, self.center.y)


@dataclass(frozen=True, slots=True)
class Pad:
    """Through-hole pad.

    Attributes:
        number: Pad number/name (e.g., "1", "2").
        position: Pad center relative to footprint origin in nm.
        size_nm: Pad diameter in nm.
        drill_nm: Drill diameter in nm.
        shape: Pad shape.
        layers: Layer names the pad exists on.
    """

    number: str
    position: PositionNM
    size_nm: int
    drill_nm: int
    shape: PadShape = PadShape.CIRCLE
    layers: tuple[str, ...] = ("*.Cu", "*.Mask")


@dataclass(frozen=True, slots=True)
class Text:
    """User text drawn on the footprint.

    Attributes:
        content: Text string content.
        position: Text anchor position in nm.
        layer: Layer for the text.
        font_size_nm: Font height (and width) in nm.
        font_thickness_nm: Font stroke thickness in nm.
    """

    content: str
    position: PositionNM
    layer: FootprintLayer = FootprintLayer.F_FAB
    font_size_nm: int = 1_000_000
    font_thickness_nm: int = 150_000


OutlineElement = ArcPrimitive | LinePrimitive | CirclePrimitive

"""KiCad footprint writer for transformer footprints.

This module turns a TransformerFootprint into a .kicad_mod S-expression
document. It knows the KiCad record layouts (properties, fp_arc, fp_line,
fp_circle, fp_text, pad) but no geometry: every coordinate comes from the
records built by the transformer builder and is rendered through
``nm_to_mm``.

Every record gets a unique id from an injectable factory. The default
factory draws random UUIDv4 values; ``deterministic_uuid_factory`` yields a
reproducible UUIDv5 sequence for tests and diffable output.
"""

from __future__ import annotations

import itertools
import logging
import uuid
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from ..geom.primitives import (
    ArcPrimitive,
    CirclePrimitive,
    FootprintLayer,
    LinePrimitive,
    Pad,
    PositionNM,
    StrokeType,
    Text,
)
from . import sexpr
from .sexpr import Quoted, SExprList, nm_to_mm

if TYPE_CHECKING:
    from ..builders.transformer_builder import TransformerFootprint

logger = logging.getLogger(__name__)

UuidFactory = Callable[[], str]

# UUIDv5 namespace for coilgen deterministic IDs
_UUID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "coilgen")

# KiCad version constants
KICAD_FILE_VERSION = 20241229
KICAD_GENERATOR = "pcbnew"
KICAD_GENERATOR_VERSION = "9.0"

# KiCad's own placeholder designator is upper case; pcbnew replaces it on placement
REFERENCE_DESIGNATOR = "REF**"
PROPERTY_FONT_SIZE_NM = 1_000_000
REFERENCE_FONT_THICKNESS_NM = 100_000
FAB_FONT_THICKNESS_NM = 150_000
VALUE_Y_NM = 1_000_000
# Reference label sits just inside the top of the innermost winding
REFERENCE_INSET_NM = 500_000


def random_uuid() -> str:
    """Return a random UUIDv4 string."""
    return str(uuid.uuid4())


def deterministic_uuid(seed: str, index: int) -> str:
    """Generate a deterministic UUIDv5 for the ``index``-th record under ``seed``.

    Args:
        seed: Seed string, typically the footprint name.
        index: Record index in emission order.

    Returns:
        UUID string in standard format.
    """
    seed_namespace = uuid.uuid5(_UUID_NAMESPACE, f"seed:{seed}")
    return str(uuid.uuid5(seed_namespace, str(index)))


def deterministic_uuid_factory(seed: str) -> UuidFactory:
    """Return a factory yielding ``deterministic_uuid(seed, 0)``, ``(seed, 1)``, ..."""
    counter = itertools.count()
    return lambda: deterministic_uuid(seed, next(counter))


def _point(name: str, pos: PositionNM) -> SExprList:
    return [name, nm_to_mm(pos.x), nm_to_mm(pos.y)]


def _layer(layer: FootprintLayer | str) -> SExprList:
    value = layer.value if isinstance(layer, FootprintLayer) else layer
    return ["layer", Quoted(value)]


def build_stroke(width_nm: int, stroke_type: StrokeType) -> SExprList:
    """Build a stroke attribute block."""
    return ["stroke", ["width", nm_to_mm(width_nm)], ["type", stroke_type.value]]


def build_effects(size_nm: int, thickness_nm: int) -> SExprList:
    """Build a text effects block with a square font."""
    return [
        "effects",
        ["font", ["size", nm_to_mm(size_nm), nm_to_mm(size_nm)], ["thickness", nm_to_mm(thickness_nm)]],
    ]


def build_property(
    name: str,
    value: str,
    position: PositionNM,
    layer: FootprintLayer,
    uuid_str: str,
    *,
    font_thickness_nm: int = FAB_FONT_THICKNESS_NM,
    hidden: bool = False,
) -> SExprList:
    """Build a footprint property block (Reference, Value, ...)."""
    result: SExprList = [
        "property",
        Quoted(name),
        Quoted(value),
        ["at", nm_to_mm(position.x), nm_to_mm(position.y), 0],
        ["unlocked", "yes"],
        _layer(layer),
    ]
    if hidden:
        result.append(["hide", "yes"])
    result.append(["uuid", Quoted(uuid_str)])
    result.append(build_effects(PROPERTY_FONT_SIZE_NM, font_thickness_nm))
    return result


def build_text(text: Text, uuid_str: str) -> SExprList:
    """Build an fp_text user block."""
    return [
        "fp_text",
        "user",
        Quoted(text.content),
        ["at", nm_to_mm(text.position.x), nm_to_mm(text.position.y), 0],
        ["unlocked", "yes"],
        _layer(text.layer),
        ["uuid", Quoted(uuid_str)],
        build_effects(text.font_size_nm, text.font_thickness_nm),
    ]


def build_arc(arc: ArcPrimitive, uuid_str: str) -> SExprList:
    """Build an fp_arc element."""
    return [
        "fp_arc",
        _point("start", arc.start),
        _point("mid", arc.mid),
        _point("end", arc.end),
        build_stroke(arc.width_nm, arc.stroke_type),
        _layer(arc.layer),
        ["uuid", Quoted(uuid_str)],
    ]


def build_line(line: LinePrimitive, uuid_str: str) -> SExprList:
    """Build an fp_line element."""
    return [
        "fp_line",
        _point("start", line.start),
        _point("end", line.end),
        build_stroke(line.width_nm, line.stroke_type),
        _layer(line.layer),
        ["uuid", Quoted(uuid_str)],
    ]


def build_circle(circle: CirclePrimitive, uuid_str: str) -> SExprList:
    """Build an unfilled fp_circle element."""
    return [
        "fp_circle",
        _point("center", circle.center),
        _point("end", circle.end),
        build_stroke(circle.width_nm, circle.stroke_type),
        ["fill", "no"],
        _layer(circle.layer),
        ["uuid", Quoted(uuid_str)],
    ]


def build_pad(pad: Pad, uuid_str: str) -> SExprList:
    """Build a through-hole pad element."""
    return [
        "pad",
        Quoted(pad.number),
        "thru_hole",
        pad.shape.value,
        _point("at", pad.position),
        ["size", nm_to_mm(pad.size_nm), nm_to_mm(pad.size_nm)],
        ["drill", nm_to_mm(pad.drill_nm)],
        ["layers", *(Quoted(layer) for layer in pad.layers)],
        ["remove_unused_layers", "no"],
        ["uuid", Quoted(uuid_str)],
    ]


class FootprintWriter:
    """KiCad footprint file writer.

    Builds the S-expression tree for one TransformerFootprint: header
    fields and properties, coil arcs and pads, cutouts, user text and the
    trailing ``embedded_fonts`` flag.
    """

    def __init__(
        self,
        footprint: TransformerFootprint,
        uuid_factory: UuidFactory | None = None,
    ) -> None:
        """Initialize the footprint writer.

        Args:
            footprint: Footprint geometry to serialize.
            uuid_factory: Source of unique ids, one call per record
                (defaults to random UUIDv4).
        """
        self.footprint = footprint
        self._uuid_factory = uuid_factory or random_uuid

    def _next_uuid(self) -> str:
        return self._uuid_factory()

    def build_footprint(self) -> SExprList:
        """Build the complete footprint S-expression."""
        spec = self.footprint.spec
        result: SExprList = [
            "footprint",
            Quoted(spec.footprint_name),
            ["version", KICAD_FILE_VERSION],
            ["generator", Quoted(KICAD_GENERATOR)],
            ["generator_version", Quoted(KICAD_GENERATOR_VERSION)],
            _layer(FootprintLayer.F_CU),
        ]
        result.extend(self._build_properties())
        result.append(["attr", "through_hole"])
        for coil in self.footprint.coils:
            result.extend(build_arc(arc, self._next_uuid()) for arc in coil.arcs)
            result.extend(build_pad(pad, self._next_uuid()) for pad in coil.pads)
        result.extend(self._build_cutouts())
        result.extend(build_text(text, self._next_uuid()) for text in self.footprint.texts)
        result.append(["embedded_fonts", "no"])
        return result

    def _build_properties(self) -> list[SExprList]:
        spec = self.footprint.spec
        return [
            build_property(
                "Reference",
                REFERENCE_DESIGNATOR,
                PositionNM(0, REFERENCE_INSET_NM - spec.inner_radius_nm),
                FootprintLayer.F_SILKSCREEN,
                self._next_uuid(),
                font_thickness_nm=REFERENCE_FONT_THICKNESS_NM,
            ),
            build_property(
                "Value",
                spec.footprint_name,
                PositionNM(0, VALUE_Y_NM),
                FootprintLayer.F_FAB,
                self._next_uuid(),
            ),
            build_property(
                "Datasheet",
                "",
                PositionNM(0, 0),
                FootprintLayer.F_FAB,
                self._next_uuid(),
                hidden=True,
            ),
            build_property(
                "Description",
                "",
                PositionNM(0, 0),
                FootprintLayer.F_FAB,
                self._next_uuid(),
                hidden=True,
            ),
        ]

    def _build_cutouts(self) -> list[SExprList]:
        elements: list[SExprList] = []
        for element in self.footprint.cutout_elements:
            if isinstance(element, ArcPrimitive):
                elements.append(build_arc(element, self._next_uuid()))
            elif isinstance(element, LinePrimitive):
                elements.append(build_line(element, self._next_uuid()))
            else:
                elements.append(build_circle(element, self._next_uuid()))
        return elements

    def write(self, out_path: Path) -> None:
        """Write the footprint file to disk.

        Args:
            out_path: Path for the output .kicad_mod file.
        """
        content = sexpr.dump(self.build_footprint())
        out_path.write_text(content + "\n", encoding="utf-8")
        logger.debug("Wrote %d bytes to %s", len(content) + 1, out_path)


def build_footprint_sexpr(
    footprint: TransformerFootprint,
    uuid_factory: UuidFactory | None = None,
) -> SExprList:
    """Build footprint S-expression from footprint geometry.

    Args:
        footprint: Footprint geometry.
        uuid_factory: Optional source of unique ids.

    Returns:
        S-expression list representing the footprint.
    """
    return FootprintWriter(footprint, uuid_factory).build_footprint()


def build_footprint_text(
    footprint: TransformerFootprint,
    uuid_factory: UuidFactory | None = None,
) -> str:
    """Build .kicad_mod file content from footprint geometry.

    Args:
        footprint: Footprint geometry.
        uuid_factory: Optional source of unique ids.

    Returns:
        Formatted S-expression string, newline-terminated.
    """
    return sexpr.dump(build_footprint_sexpr(footprint, uuid_factory)) + "\n"


def write_footprint(
    footprint: TransformerFootprint,
    out_dir: Path,
    uuid_factory: UuidFactory | None = None,
) -> Path:
    """Write the footprint file to an output directory.

    Args:
        footprint: Footprint geometry.
        out_dir: Output directory path (created if missing).
        uuid_factory: Optional source of unique ids.

    Returns:
        Path to the generated .kicad_mod file.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    footprint_path = out_dir / footprint.spec.output_filename
    FootprintWriter(footprint, uuid_factory).write(footprint_path)
    return footprint_path

"""KiCad integration module for coilgen.

This module provides:
- S-expression parsing and generation (sexpr)
- Footprint file writing with injectable unique ids (footprint_writer)
"""

from __future__ import annotations

from .footprint_writer import (
    KICAD_FILE_VERSION,
    FootprintWriter,
    UuidFactory,
    build_arc,
    build_circle,
    build_footprint_sexpr,
    build_footprint_text,
    build_line,
    build_pad,
    build_property,
    build_text,
    deterministic_uuid,
    deterministic_uuid_factory,
    random_uuid,
    write_footprint,
)
from .sexpr import (
    Quoted,
    SExprList,
    SExprNode,
    SExprParseError,
    SExprWriter,
    dump,
    dump_compact,
    find_all,
    format_atom,
    format_decimal,
    nm_to_mm,
    parse,
)

__all__ = [
    # Footprint writer
    "KICAD_FILE_VERSION",
    "FootprintWriter",
    "UuidFactory",
    "build_arc",
    "build_circle",
    "build_footprint_sexpr",
    "build_footprint_text",
    "build_line",
    "build_pad",
    "build_property",
    "build_text",
    "deterministic_uuid",
    "deterministic_uuid_factory",
    "random_uuid",
    "write_footprint",
    # S-expression
    "Quoted",
    "SExprList",
    "SExprNode",
    "SExprParseError",
    "SExprWriter",
    "dump",
    "dump_compact",
    "find_all",
    "format_atom",
    "format_decimal",
    "nm_to_mm",
    "parse",
]

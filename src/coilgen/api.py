"""Generation API for transformer footprints.

This module provides the public API for footprint generation:
- load_spec: Load a TransformerSpec from a YAML/JSON file
- build_footprint: Compute coil and cutout geometry for a spec
- generate_footprint: Build and write ``<footprint_name>.kicad_mod``
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .builders import TransformerFootprint, build_transformer
from .kicad import UuidFactory, write_footprint
from .spec import TransformerSpec, get_preset, load_spec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    footprint_path: Path
    footprint: TransformerFootprint

    @property
    def pad_count(self) -> int:
        return len(self.footprint.pads)

    @property
    def arc_count(self) -> int:
        return len(self.footprint.arcs)


def build_footprint(spec: TransformerSpec) -> TransformerFootprint:
    return build_transformer(spec)


def generate_footprint(
    spec: TransformerSpec | None = None,
    out_dir: Path | None = None,
    *,
    uuid_factory: UuidFactory | None = None,
) -> GenerationResult:
    """Build a transformer footprint and write it as a .kicad_mod file.

    Args:
        spec: Transformer spec (defaults to the default preset).
        out_dir: Output directory (defaults to the working directory).
        uuid_factory: Optional source of unique ids.

    Returns:
        GenerationResult with the written path and the footprint geometry.

    Raises:
        OSError: If the output cannot be written.
    """
    spec = spec or get_preset()
    out_dir = out_dir or Path(".")
    footprint = build_footprint(spec)
    path = write_footprint(footprint, out_dir, uuid_factory)
    logger.info("Wrote footprint %s to %s", spec.footprint_name, path)
    return GenerationResult(footprint_path=path, footprint=footprint)


__all__ = [
    "GenerationResult",
    "build_footprint",
    "generate_footprint",
    "load_spec",
]

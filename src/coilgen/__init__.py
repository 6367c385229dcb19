"""coilgen: KiCad footprint generator for round planar PCB transformers.

The footprint holds two interleaved spiral coils built from tangent circular
arcs, terminal pads, and optional board cutouts (a central hole and four
corner reliefs). All geometry is computed in integer nanometers and written
as a KiCad 9 ``.kicad_mod`` file.

Public API
----------
- :func:`load_spec` - Load a TransformerSpec from a YAML/JSON file
- :func:`get_preset` - Return a named TransformerSpec preset
- :func:`build_footprint` - Compute coil and cutout geometry
- :func:`generate_footprint` - Build and write the .kicad_mod file

Example
-------
>>> from pathlib import Path
>>> from coilgen import get_preset, generate_footprint
>>> result = generate_footprint(get_preset("CurrSensTrans1"), Path("out"))
>>> result.footprint_path
PosixPath('out/CurrSensTrans1.kicad_mod')
"""

from __future__ import annotations

from coilgen.api import GenerationResult, build_footprint, generate_footprint
from coilgen.builders import TransformerFootprint
from coilgen.spec import PRESETS, TransformerSpec, get_preset, load_spec

__all__ = [
    "load_spec",
    "get_preset",
    "build_footprint",
    "generate_footprint",
    "PRESETS",
    "TransformerSpec",
    "TransformerFootprint",
    "GenerationResult",
]

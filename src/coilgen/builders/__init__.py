"""Footprint builders.

Each builder composes geometry features (coils, cutouts, text) into a
complete footprint design, ready for the footprint writer.
"""

from __future__ import annotations

from .transformer_builder import (
    TransformerFootprint,
    build_transformer,
    cutout_spec,
    inner_spiral_spec,
    outer_spiral_spec,
)

__all__ = [
    "TransformerFootprint",
    "build_transformer",
    "cutout_spec",
    "inner_spiral_spec",
    "outer_spiral_spec",
]

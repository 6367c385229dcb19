from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .geom.primitives import StrokeType
from .units import LengthNM

DEFAULT_PRESET = "CurrSensTrans1"


class _SpecBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class TransformerSpec(_SpecBase):
    """Parameters of a round planar transformer footprint.

    Every length is in integer nanometers (1e-6 mm). The outer coil winds
    ``half_turns_count`` half-turns and the inner coil one more, so the two
    traces interleave without sharing a radius at the same angle.
    """

    footprint_name: str = Field(..., min_length=1)
    trace_width1_nm: LengthNM = 160_000
    trace_width2_nm: LengthNM = 80_000
    step_nm: LengthNM = 400_000
    inner_radius_nm: LengthNM = 3_000_000
    half_turns_count: int = Field(9, ge=1)
    pad_size_nm: LengthNM = 1_000_000
    pad_drill_nm: LengthNM = 600_000
    # coil end rounding radius
    end_radius_nm: LengthNM = 800_000
    coil1_pin_name1: str = "2"
    coil1_pin_name2: str = "1"
    coil2_pin_name1: str = "3"
    coil2_pin_name2: str = "4"
    # 0 disables the central hole
    internal_cut_hole_radius_nm: LengthNM = 1_500_000
    cut_line_width_nm: LengthNM = 50_000
    cut_line_type: StrokeType = StrokeType.DEFAULT
    # 0 disables the corner reliefs
    corner_cut_hole_size_nm: LengthNM = 5_750_000
    corner_cut_hole_width_nm: LengthNM = 4_000_000
    corner_cut_hole_radius_nm: LengthNM = 5_400_000
    corner_cut_hole_rounding_nm: LengthNM = 500_000

    @property
    def inner_half_turns_count(self) -> int:
        """Half-turn count of the inner coil."""
        return self.half_turns_count + 1

    @property
    def output_filename(self) -> str:
        """File name KiCad expects for this footprint."""
        return f"{self.footprint_name}.kicad_mod"


PRESETS: dict[str, TransformerSpec] = {
    "CurrSensTrans1": TransformerSpec(footprint_name="CurrSensTrans1"),
    "CurrSensTrans1_LargePads": TransformerSpec(
        footprint_name="CurrSensTrans1_LargePads",
        pad_size_nm=1_600_000,
        pad_drill_nm=800_000,
    ),
}


def get_preset(name: str = DEFAULT_PRESET) -> TransformerSpec:
    """Return a named preset.

    Raises:
        KeyError: If no preset has that name.
    """
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown preset {name!r}; available: {', '.join(sorted(PRESETS))}") from None


def load_spec_dict(data: dict[str, Any], *, base: TransformerSpec | None = None) -> TransformerSpec:
    """Validate a TransformerSpec from a dictionary.

    Fields missing from ``data`` are taken from ``base`` (the default preset
    when omitted).

    Args:
        data: Dictionary containing any subset of TransformerSpec fields.
        base: Spec supplying the fields ``data`` leaves out.

    Returns:
        Validated TransformerSpec instance with all lengths in integer nm.

    Raises:
        pydantic.ValidationError: If the data fails validation.
    """
    if base is None:
        base = get_preset()
    payload = base.model_dump(mode="json")
    payload.update(data)
    return TransformerSpec.model_validate(payload)


def load_spec(path: Path | str, *, base: TransformerSpec | None = None) -> TransformerSpec:
    """Load and validate a TransformerSpec from a YAML or JSON file.

    Args:
        path: Path to the YAML (.yaml, .yml) or JSON (.json) file.
        base: Spec supplying the fields the file leaves out.

    Returns:
        Validated TransformerSpec instance.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file extension is not supported or the file is not a mapping.
        pydantic.ValidationError: If the data fails validation.
        yaml.YAMLError: If YAML parsing fails.
        json.JSONDecodeError: If JSON parsing fails.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"TransformerSpec file not found: {path}")

    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    if suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    elif suffix == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported file extension: {suffix}. Use .yaml, .yml, or .json")

    if not isinstance(data, dict):
        raise ValueError(f"TransformerSpec file must contain a mapping, got {type(data).__name__}")

    return load_spec_dict(data, base=base)

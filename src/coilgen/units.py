"""Fixed-point length handling.

Every length is an integer count of nanometers (1e-6 mm). Geometry never
touches floats except for the one square root in the corner cutouts, and
output is rendered from integers by ``kicad.sexpr.nm_to_mm``.
"""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import BeforeValidator, WithJsonSchema

NM_PER_MM = 1_000_000

# sin(45deg) == cos(45deg) in parts per million
SIN45_PPM = 707_107

_INT64_RANGE = (-(2**63), 2**63 - 1)
_PLAIN_INTEGER_RE = re.compile(r"[+-]?\d+")


def parse_length_nm(value: str | int | float) -> int:
    """Coerce a config value to integer nanometers.

    Ints pass through, floats must be whole numbers, strings must be plain
    integers. There are no unit suffixes: "1mm" and "0.4" are rejected.

    Raises:
        ValueError: For booleans, fractional or non-numeric values, and
            values outside the signed 64-bit range.
    """
    if isinstance(value, bool):
        raise ValueError("LengthNM does not accept boolean values.")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"LengthNM must be a whole number of nanometers, got {value!r}")
        value = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _PLAIN_INTEGER_RE.fullmatch(text):
            raise ValueError(f"LengthNM string must be a plain integer in nanometers, got {value!r}")
        value = int(text)
    elif not isinstance(value, int):
        raise ValueError(f"Unsupported LengthNM value: {value!r}")

    low, high = _INT64_RANGE
    if not low <= value <= high:
        raise ValueError(f"LengthNM {value} is outside the signed 64-bit integer range.")
    return value


def rotate45(value_nm: int) -> int:
    """Project a length onto one axis of a 45 degree diagonal.

    Returns ``value_nm * 0.707107`` truncated toward zero, so the result is
    symmetric for negative inputs and never overshoots the exact projection.
    """
    product = abs(value_nm) * SIN45_PPM // NM_PER_MM
    return product if value_nm >= 0 else -product


LengthNM = Annotated[
    int,
    BeforeValidator(parse_length_nm),
    WithJsonSchema(
        {
            "anyOf": [
                {"type": "integer"},
                {"type": "string", "pattern": r"^\s*[+-]?\d+\s*$"},
            ],
            "title": "LengthNM",
            "description": "Integer nanometers (1e-6 mm), as an int or a plain integer string.",
        }
    ),
]

"""Spiral coil geometry for round planar transformers.

A coil is a chain of half-circle arcs. Even half-turns sweep across the
bottom of the current circle (right to left, through +y); odd half-turns
sweep back across the top on a circle whose center is shifted by half a
step, landing one full step further out. Two half-turns therefore grow the
radius by exactly ``step_nm``, turning stacked circles into a spiral.

Two variants exist:

- Outer coil: starts at ``inner_radius + step / 2`` and carries a short
  diagonal lead arc with a pad at both ends.
- Inner coil: starts at ``inner_radius`` on the top of the circle and winds
  outward; its closing geometry depends on the parity of the half-turn count.

All coordinates use integer nanometers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..units import rotate45
from .primitives import ORIGIN, ArcPrimitive, FootprintLayer, Pad, PositionNM

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SpiralSpec:
    """Specification for one spiral coil.

    Attributes:
        width_nm: Trace width in nanometers.
        inner_radius_nm: Innermost radius of the winding in nanometers.
        step_nm: Radial growth per full turn in nanometers.
        half_turns: Number of 180 degree segments in the winding.
        end_radius_nm: Radius of the lead arcs joining the coil to its pads.
        pad_size_nm: Terminal pad diameter in nanometers.
        pad_drill_nm: Terminal pad drill diameter in nanometers.
        start_pin: Pad name at the start of the winding.
        end_pin: Pad name at the end of the winding.
        layer: Copper layer for the arcs.
        center: Coil center in nanometers.
    """

    width_nm: int
    inner_radius_nm: int
    step_nm: int
    half_turns: int
    end_radius_nm: int
    pad_size_nm: int
    pad_drill_nm: int
    start_pin: str
    end_pin: str
    layer: FootprintLayer = FootprintLayer.F_CU
    center: PositionNM = ORIGIN


@dataclass(frozen=True, slots=True)
class SpiralCoil:
    """Result of spiral coil generation.

    Attributes:
        arcs: All arcs in emission order, lead arcs included.
        pads: Terminal pads in emission order.
        final_radius_nm: Radius of the winding after the last half-turn.
    """

    arcs: tuple[ArcPrimitive, ...]
    pads: tuple[Pad, ...]
    final_radius_nm: int

    @property
    def body(self) -> tuple[ArcPrimitive, ...]:
        """Arcs between the opening and closing lead arcs."""
        return self.arcs[1:-1]


class _ArcChain:
    """Collects arcs sharing one width and layer."""

    def __init__(self, spec: SpiralSpec) -> None:
        self._spec = spec
        self.arcs: list[ArcPrimitive] = []
        self.pads: list[Pad] = []

    def arc(self, start: PositionNM, mid: PositionNM, end: PositionNM) -> PositionNM:
        self.arcs.append(
            ArcPrimitive(
                start=start,
                mid=mid,
                end=end,
                width_nm=self._spec.width_nm,
                layer=self._spec.layer,
            )
        )
        return end

    def pad(self, position: PositionNM, number: str) -> None:
        self.pads.append(
            Pad(
                number=number,
                position=position,
                size_nm=self._spec.pad_size_nm,
                drill_nm=self._spec.pad_drill_nm,
            )
        )

    def half_turn(self, index: int, radius: int) -> tuple[PositionNM, int]:
        """Emit half-turn ``index`` at ``radius``; return its end point and the new radius."""
        x, y = self._spec.center.to_tuple()
        step = self._spec.step_nm
        if index % 2 == 0:
            end = self.arc(
                PositionNM(x + radius, y),
                PositionNM(x, y + radius),
                PositionNM(x - radius, y),
            )
            return end, radius
        end = self.arc(
            PositionNM(x - radius, y),
            PositionNM(x + step // 2, y - radius - step // 2),
            PositionNM(x + radius + step, y),
        )
        return end, radius + step


def generate_outer_spiral(spec: SpiralSpec) -> SpiralCoil:
    """Generate the outer coil: a spiral with a diagonal lead arc and pad at each end.

    The winding starts at ``inner_radius + step / 2`` on the +x axis. The
    opening lead arc ends on the winding's first point; the closing lead arc
    mirrors it on the -x side and ends on the winding's last point.

    Args:
        spec: Spiral specification.

    Returns:
        SpiralCoil with ``half_turns + 2`` arcs and two pads.
    """
    x, y = spec.center.to_tuple()
    radius = spec.inner_radius_nm + spec.step_nm // 2
    rr = spec.end_radius_nm
    rr45 = rotate45(rr)
    chain = _ArcChain(spec)

    lead_start = PositionNM(x + radius - rr, y - rr)
    chain.arc(
        lead_start,
        PositionNM(x + radius - rr + rr45, y - rr45),
        PositionNM(x + radius, y),
    )
    chain.pad(lead_start, spec.start_pin)

    for i in range(spec.half_turns):
        _, radius = chain.half_turn(i, radius)

    lead_start = PositionNM(x - radius - rr, y - rr)
    chain.arc(
        lead_start,
        PositionNM(x - radius - rr + rr45, y - rr45),
        PositionNM(x - radius, y),
    )
    chain.pad(lead_start, spec.end_pin)

    logger.debug(
        "Outer spiral: %d half-turns, radius %d..%d nm",
        spec.half_turns,
        spec.inner_radius_nm + spec.step_nm // 2,
        radius,
    )
    return SpiralCoil(arcs=tuple(chain.arcs), pads=tuple(chain.pads), final_radius_nm=radius)


def generate_inner_spiral(spec: SpiralSpec) -> SpiralCoil:
    """Generate the inner coil, winding outward from the top of ``inner_radius``.

    The coil opens with a lead arc to the ``start_pin`` pad and a quarter arc
    down to the -x side of the starting circle, which stands in for the first
    half-turn. The closing geometry depends on the half-turn parity:

    - even: a quarter arc up to the top of the final circle and a lead arc to
      the ``end_pin`` pad.
    - odd: a quarter arc onto the half-step-shifted circle and a short lead
      arc without a pad; that end is joined to the other layer on the board,
      not to a terminal.

    Args:
        spec: Spiral specification.

    Returns:
        SpiralCoil with two pads for an even count and one pad for an odd count.
    """
    x, y = spec.center.to_tuple()
    step = spec.step_nm
    radius = spec.inner_radius_nm
    rr = spec.end_radius_nm
    rr45 = rotate45(rr)
    r45 = rotate45(radius)
    chain = _ArcChain(spec)

    top = PositionNM(x, y + radius)
    lead_end = PositionNM(x + rr, y + radius - rr)
    chain.arc(top, PositionNM(x + rr45, y + radius - rr + rr45), lead_end)
    chain.pad(lead_end, spec.start_pin)

    last = chain.arc(top, PositionNM(x - r45, y + r45), PositionNM(x - radius, y))

    for i in range(1, spec.half_turns):
        last, radius = chain.half_turn(i, radius)

    if spec.half_turns % 2 == 0:
        r45 = rotate45(radius)
        last = chain.arc(last, PositionNM(x + r45, y + r45), PositionNM(x, y + radius))
        lead_start = PositionNM(last.x - rr, last.y + rr)
        chain.arc(lead_start, PositionNM(last.x - rr45, last.y + rr - rr45), last)
        chain.pad(lead_start, spec.end_pin)
    else:
        r45 = rotate45(radius + step // 2)
        last = chain.arc(
            last,
            PositionNM(x + step // 2 - r45, y - r45),
            PositionNM(x + step // 2, y - radius - step // 2),
        )
        chain.arc(
            PositionNM(last.x - rr, last.y + rr),
            PositionNM(last.x - rr45, last.y + rr - rr45),
            last,
        )

    logger.debug(
        "Inner spiral: %d half-turns, radius %d..%d nm, %d pad(s)",
        spec.half_turns,
        spec.inner_radius_nm,
        radius,
        len(chain.pads),
    )
    return SpiralCoil(arcs=tuple(chain.arcs), pads=tuple(chain.pads), final_radius_nm=radius)

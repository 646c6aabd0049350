"""Join and end styles for offsetting, and their engine parameters.

Join styles decide how offset edges meet at convex corners; end styles
decide whether input paths are treated as closed outlines or open lines
and how open ends are capped.

The engine takes two numeric knobs next to the style codes:

  miter_limit       only meaningful for Miter joins (0 otherwise)
  round_precision   arc tolerance for Round joins, or for OpenRound ends
                    when the join is not Round (0 otherwise)

A Round join's precision wins over an OpenRound end's precision when
both are given.  Neither knob is scaled by the factor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from geoclipper.models import EndCode, JoinCode


# ── Join types ────────────────────────────────────────────────────


@dataclass(frozen=True)
class Square:
    code: ClassVar[JoinCode] = JoinCode.SQUARE


@dataclass(frozen=True)
class Round:
    precision: float
    code: ClassVar[JoinCode] = JoinCode.ROUND


@dataclass(frozen=True)
class Miter:
    limit: float
    code: ClassVar[JoinCode] = JoinCode.MITER


JoinType = Square | Round | Miter


# ── End types ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class ClosedPolygon:
    code: ClassVar[EndCode] = EndCode.CLOSEDPOLYGON


@dataclass(frozen=True)
class ClosedLine:
    code: ClassVar[EndCode] = EndCode.CLOSEDLINE


@dataclass(frozen=True)
class OpenButt:
    code: ClassVar[EndCode] = EndCode.OPENBUTT


@dataclass(frozen=True)
class OpenSquare:
    code: ClassVar[EndCode] = EndCode.OPENSQUARE


@dataclass(frozen=True)
class OpenRound:
    precision: float
    code: ClassVar[EndCode] = EndCode.OPENROUND


EndType = ClosedPolygon | ClosedLine | OpenButt | OpenSquare | OpenRound


# ── Parameter mapping ─────────────────────────────────────────────


@dataclass(frozen=True)
class OffsetParameters:
    miter_limit: float
    round_precision: float
    join: JoinCode
    end: EndCode


def offset_parameters(join_type: JoinType, end_type: EndType) -> OffsetParameters:
    """Derive the engine's offset arguments from a join/end style pair."""
    miter_limit = join_type.limit if isinstance(join_type, Miter) else 0.0

    if isinstance(join_type, Round):
        round_precision = join_type.precision
    elif isinstance(end_type, OpenRound):
        round_precision = end_type.precision
    else:
        round_precision = 0.0

    return OffsetParameters(
        miter_limit=miter_limit,
        round_precision=round_precision,
        join=join_type.code,
        end=end_type.code,
    )

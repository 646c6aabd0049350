"""Engine-facing codes, buffer descriptors, raw results and errors.

The enum values match the constants of the Clipper library, so an engine
implementation can hand them over unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

import numpy as np


# ── Engine codes ──────────────────────────────────────────────────


class ClipType(Enum):
    INTERSECTION = 0
    UNION = 1
    DIFFERENCE = 2
    XOR = 3


class PolyRole(Enum):
    """Which operand a polygon belongs to."""

    SUBJECT = 0     # left-hand boolean operand, sole offset operand
    CLIP = 1        # right-hand boolean operand


class FillRule(Enum):
    EVENODD = 0
    NONZERO = 1
    POSITIVE = 2
    NEGATIVE = 3


class JoinCode(Enum):
    SQUARE = 0
    ROUND = 1
    MITER = 2


class EndCode(Enum):
    CLOSEDPOLYGON = 0
    CLOSEDLINE = 1
    OPENBUTT = 2
    OPENSQUARE = 3
    OPENROUND = 4


# Both boolean operands are always filled with this rule.
BOOLEAN_FILL_RULE = FillRule.NONZERO


# ── Errors ────────────────────────────────────────────────────────


class ClipperError(Exception):
    """Base class for errors raised by geoclipper."""


class UnclosedRingError(ClipperError, ValueError):
    """Raised when a ring's last vertex does not repeat its first."""

    def __init__(self, first: tuple[float, float], last: tuple[float, float]) -> None:
        self.first = first
        self.last = last
        super().__init__(
            f"Ring is not closed: first vertex {first} differs from last vertex {last}"
        )


class StaleDescriptorError(ClipperError):
    """Raised when descriptors outlive the buffer state they were built from."""


class ResultReleasedError(ClipperError):
    """Raised when a raw engine result is used or released after release."""


class EngineError(ClipperError):
    """Raised when the engine itself fails to execute an operation."""


# ── Descriptors ───────────────────────────────────────────────────


@dataclass(frozen=True)
class PathDescriptor:
    """A borrowed view over one run of engine vertices."""

    vertices: np.ndarray    # (n, 2) int64, read-only view into buffer storage
    closed: bool

    @property
    def count(self) -> int:
        return len(self.vertices)


@dataclass(frozen=True)
class PolygonDescriptor:
    """A borrowed run of path descriptors tagged with its operand role."""

    paths: tuple[PathDescriptor, ...]
    role: PolyRole


@dataclass(frozen=True)
class DescriptorSet:
    """The flat polygon list handed to the engine for one call.

    Only valid while ``owner`` is still at ``generation``; any mutation or
    re-materialization of the owning buffer invalidates it.
    """

    polygons: tuple[PolygonDescriptor, ...]
    owner: object = field(repr=False, compare=False)
    generation: int = 0

    def __iter__(self) -> Iterator[PolygonDescriptor]:
        return iter(self.polygons)

    def __len__(self) -> int:
        return len(self.polygons)

    @property
    def is_current(self) -> bool:
        return getattr(self.owner, "generation", None) == self.generation

    def check_current(self) -> None:
        if not self.is_current:
            raise StaleDescriptorError(
                f"Descriptors from generation {self.generation} are stale "
                f"(buffer is at generation {getattr(self.owner, 'generation', None)}); "
                f"call materialize_descriptors() again before the engine call"
            )

    @property
    def path_count(self) -> int:
        return sum(len(p.paths) for p in self.polygons)

    @property
    def vertex_count(self) -> int:
        return sum(path.count for p in self.polygons for path in p.paths)


# ── Engine output ─────────────────────────────────────────────────


@dataclass
class RawResult:
    """Engine output: polygons of paths of int64 ``(n, 2)`` vertex arrays.

    No exterior/hole metadata is carried beyond path order inside a
    polygon.  Must be released through the engine that produced it,
    exactly once.
    """

    polygons: list[list[np.ndarray]]
    released: bool = False

    def check_live(self) -> None:
        if self.released:
            raise ResultReleasedError("Engine result has already been released")

    @property
    def path_count(self) -> int:
        return sum(len(paths) for paths in self.polygons)

"""Public operations, split by what each shape kind supports.

Closed shapes (Polygon, MultiPolygon) get difference, intersection,
union, xor and offset.  Open shapes (LineString, MultiLineString) get
difference, intersection and offset; union and xor do not exist for
them.  The right-hand operand of a boolean operation is always a closed
shape.

``factor`` scales coordinates onto the engine's integer grid before the
operation and back afterwards.  Pick it so the precision you need
survives truncation, e.g. 1000 for three decimals.  When omitted, the
value from ``geoclipper.config.CLIPPER_SETTINGS`` is used.

Usage::

    from geoclipper import clipper, Miter, ClosedPolygon

    result = clipper(subject).intersection(clip, 1.0)
    grown = clipper(subject).offset(5.0, Miter(5.0), ClosedPolygon(), 1.0)
"""

from __future__ import annotations

from functools import singledispatch

from shapely.geometry import LineString, MultiLineString, MultiPolygon, Polygon

from geoclipper.config import CLIPPER_SETTINGS
from geoclipper.geometry import Scale
from geoclipper.models import ClipType

from .engine import ClipperEngine
from .orchestrator import execute_boolean_operation, execute_offset_operation
from .params import EndType, JoinType


def _scale(factor: float | None) -> Scale:
    return Scale(CLIPPER_SETTINGS.factor if factor is None else factor)


class _Clippable:
    """Shared plumbing; not part of either public operation set."""

    shape_type: type = object

    def __init__(self, shape) -> None:
        if not isinstance(shape, self.shape_type):
            raise TypeError(
                f"{type(self).__name__} wraps {self.shape_type.__name__}, "
                f"got {type(shape).__name__}"
            )
        self.shape = shape

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.shape.wkt})"

    def _boolean(self, op, other, factor, engine, result_kind):
        return execute_boolean_operation(
            op, self.shape, _closed_operand(other), _scale(factor),
            result_kind=result_kind, engine=engine,
        )

    def offset(
        self,
        delta: float,
        join_type: JoinType,
        end_type: EndType,
        factor: float | None = None,
        *,
        engine: ClipperEngine | None = None,
    ) -> MultiPolygon:
        """Grow (positive *delta*) or shrink (negative) the shape.

        Always returns polygons; open paths are traced into closed outlines.
        """
        return execute_offset_operation(
            self.shape, delta, join_type, end_type, _scale(factor), engine=engine,
        )


class ClosedShape(_Clippable):
    """Boolean and offset operations on polygons."""

    def difference(self, other, factor: float | None = None, *,
                   engine: ClipperEngine | None = None) -> MultiPolygon:
        return self._boolean(ClipType.DIFFERENCE, other, factor, engine, MultiPolygon)

    def intersection(self, other, factor: float | None = None, *,
                     engine: ClipperEngine | None = None) -> MultiPolygon:
        return self._boolean(ClipType.INTERSECTION, other, factor, engine, MultiPolygon)

    def union(self, other, factor: float | None = None, *,
              engine: ClipperEngine | None = None) -> MultiPolygon:
        return self._boolean(ClipType.UNION, other, factor, engine, MultiPolygon)

    def xor(self, other, factor: float | None = None, *,
            engine: ClipperEngine | None = None) -> MultiPolygon:
        return self._boolean(ClipType.XOR, other, factor, engine, MultiPolygon)


class OpenShape(_Clippable):
    """Boolean and offset operations between open paths and polygons.

    A subset of the polygon operations: only the parts of the paths
    outside (difference) or inside (intersection) the clip survive.
    """

    def difference(self, other, factor: float | None = None, *,
                   engine: ClipperEngine | None = None) -> MultiLineString:
        return self._boolean(ClipType.DIFFERENCE, other, factor, engine, MultiLineString)

    def intersection(self, other, factor: float | None = None, *,
                     engine: ClipperEngine | None = None) -> MultiLineString:
        return self._boolean(ClipType.INTERSECTION, other, factor, engine, MultiLineString)


class ClipperPolygon(ClosedShape):
    shape_type = Polygon


class ClipperMultiPolygon(ClosedShape):
    shape_type = MultiPolygon


class ClipperPath(OpenShape):
    shape_type = LineString


class ClipperMultiPath(OpenShape):
    shape_type = MultiLineString


def _closed_operand(other):
    """Right-hand operands must be polygonal."""
    if isinstance(other, ClosedShape):
        return other.shape
    if isinstance(other, (Polygon, MultiPolygon)):
        return other
    raise TypeError(
        f"Right-hand operand must be a Polygon or MultiPolygon, got {type(other).__name__}"
    )


# ── Shape → operation set ──────────────────────────────────────────


@singledispatch
def clipper(shape) -> ClosedShape | OpenShape:
    """Wrap a shapely shape in the operation set for its kind."""
    raise TypeError(f"No clipping operations for {type(shape).__name__}")


@clipper.register(Polygon)
def _(shape: Polygon) -> ClipperPolygon:
    return ClipperPolygon(shape)


@clipper.register(MultiPolygon)
def _(shape: MultiPolygon) -> ClipperMultiPolygon:
    return ClipperMultiPolygon(shape)


@clipper.register(LineString)
def _(shape: LineString) -> ClipperPath:
    return ClipperPath(shape)


@clipper.register(MultiLineString)
def _(shape: MultiLineString) -> ClipperMultiPath:
    return ClipperMultiPath(shape)


# ── Function-style shortcuts ───────────────────────────────────────


def difference(subject, clip, factor: float | None = None, *,
               engine: ClipperEngine | None = None):
    return clipper(subject).difference(clip, factor, engine=engine)


def intersection(subject, clip, factor: float | None = None, *,
                 engine: ClipperEngine | None = None):
    return clipper(subject).intersection(clip, factor, engine=engine)


def union(subject, clip, factor: float | None = None, *,
          engine: ClipperEngine | None = None) -> MultiPolygon:
    """Closed shapes only; open subjects have no ``union``."""
    return clipper(subject).union(clip, factor, engine=engine)


def xor(subject, clip, factor: float | None = None, *,
        engine: ClipperEngine | None = None) -> MultiPolygon:
    """Closed shapes only; open subjects have no ``xor``."""
    return clipper(subject).xor(clip, factor, engine=engine)


def offset(shape, delta: float, join_type: JoinType, end_type: EndType,
           factor: float | None = None, *,
           engine: ClipperEngine | None = None) -> MultiPolygon:
    return clipper(shape).offset(delta, join_type, end_type, factor, engine=engine)

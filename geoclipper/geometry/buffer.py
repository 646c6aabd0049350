"""Owned geometry buffer — shapely shapes flattened into engine vertex runs.

An ``OwnedGeometry`` keeps one int64 chunk per path, grouped into
polygons that each carry an operand role.  Nothing in it is visible to
the engine until ``materialize_descriptors()`` copies every chunk into a
single contiguous array and hands out read-only views over that array.

Views are only valid for the buffer generation they were built at.  Any
later ``add_*``/``extend`` call, or another materialization (which
allocates fresh storage), moves the buffer to a new generation and the
old descriptor set is rejected by the engine.

Ring convention: shapely rings repeat their first vertex at the end.  The
engine's closed flag already implies the final edge, so converting a
ring drops the first stored vertex.  Open paths are converted as-is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import singledispatch

import numpy as np
from shapely.geometry import LineString, MultiLineString, MultiPolygon, Polygon

from geoclipper.models import (
    DescriptorSet,
    PathDescriptor,
    PolygonDescriptor,
    PolyRole,
    UnclosedRingError,
)

from .scale import Scale


log = logging.getLogger(__name__)

_EMPTY_VERTICES = np.empty((0, 2), dtype=np.int64)


@dataclass
class _PathSlot:
    vertices: np.ndarray    # owned int64 chunk
    closed: bool


@dataclass
class _PolygonSlot:
    paths: list[_PathSlot]
    role: PolyRole


def _xy(coords) -> np.ndarray:
    """Coordinates as an ``(n, 2)`` float array, dropping any Z."""
    arr = np.asarray(coords, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    return arr.reshape(len(arr), -1)[:, :2]


def ring_vertices(coords, scale: Scale) -> np.ndarray:
    """Engine vertices of a closed ring, without the duplicate closing vertex.

    A ring of N stored points (first == last) yields N-1 vertices.
    """
    xy = _xy(coords)
    if len(xy) == 0:
        return _EMPTY_VERTICES
    if not np.array_equal(xy[0], xy[-1]):
        raise UnclosedRingError(tuple(xy[0].tolist()), tuple(xy[-1].tolist()))
    return scale.to_engine(xy[1:])


def path_vertices(coords, scale: Scale) -> np.ndarray:
    """Engine vertices of an open path — every stored point is kept."""
    xy = _xy(coords)
    if len(xy) == 0:
        return _EMPTY_VERTICES
    return scale.to_engine(xy)


class OwnedGeometry:
    """Exclusive owner of the vertex, path and polygon storage for one call."""

    def __init__(self) -> None:
        self._polygons: list[_PolygonSlot] = []
        self._storage: np.ndarray = _EMPTY_VERTICES
        self.generation = 0

    def __len__(self) -> int:
        return len(self._polygons)

    @property
    def path_count(self) -> int:
        return sum(len(p.paths) for p in self._polygons)

    @property
    def vertex_count(self) -> int:
        return sum(len(s.vertices) for p in self._polygons for s in p.paths)

    @property
    def roles(self) -> list[PolyRole]:
        return [p.role for p in self._polygons]

    def _touch(self) -> None:
        self.generation += 1

    # ── Converters ─────────────────────────────────────────────────

    def add_polygon(self, polygon: Polygon, role: PolyRole, scale: Scale) -> OwnedGeometry:
        """Exterior then each interior, in stored order, as closed paths.

        Hole winding is passed through untouched.
        """
        rings = [polygon.exterior, *polygon.interiors]
        paths = [_PathSlot(ring_vertices(ring.coords, scale), closed=True) for ring in rings]
        self._polygons.append(_PolygonSlot(paths, role))
        self._touch()
        return self

    def add_polygons(self, polygons: MultiPolygon, role: PolyRole, scale: Scale) -> OwnedGeometry:
        for polygon in polygons.geoms:
            self.add_polygon(polygon, role, scale)
        return self

    def add_line_strings(
        self, line_strings: MultiLineString, role: PolyRole, scale: Scale,
    ) -> OwnedGeometry:
        """All line strings as open paths of a single polygon entry."""
        paths = [
            _PathSlot(path_vertices(ls.coords, scale), closed=False)
            for ls in line_strings.geoms
        ]
        self._polygons.append(_PolygonSlot(paths, role))
        self._touch()
        return self

    def add_line_string(self, line_string: LineString, role: PolyRole, scale: Scale) -> OwnedGeometry:
        paths = [_PathSlot(path_vertices(line_string.coords, scale), closed=False)]
        self._polygons.append(_PolygonSlot(paths, role))
        self._touch()
        return self

    def extend(self, other: OwnedGeometry) -> OwnedGeometry:
        """Append every polygon of *other* after the ones already held."""
        self._polygons.extend(other._polygons)
        self._touch()
        return self

    # ── Engine hand-off ────────────────────────────────────────────

    def materialize_descriptors(self) -> DescriptorSet:
        """Consolidate storage and (re)build every descriptor view.

        Call this after the last conversion and right before the engine
        call.  Every call reallocates storage, so previously returned
        descriptor sets become stale.
        """
        chunks = [slot.vertices for p in self._polygons for slot in p.paths]
        storage = np.concatenate(chunks) if chunks else _EMPTY_VERTICES.copy()
        storage.flags.writeable = False
        self._storage = storage
        self._touch()

        polygons: list[PolygonDescriptor] = []
        start = 0
        for p in self._polygons:
            paths: list[PathDescriptor] = []
            for slot in p.paths:
                end = start + len(slot.vertices)
                paths.append(PathDescriptor(vertices=storage[start:end], closed=slot.closed))
                start = end
            polygons.append(PolygonDescriptor(paths=tuple(paths), role=p.role))

        log.debug(
            "Materialized %d polygons, %d paths, %d vertices (generation %d)",
            len(polygons), self.path_count, len(storage), self.generation,
        )
        return DescriptorSet(polygons=tuple(polygons), owner=self, generation=self.generation)


# ── Per-shape conversion ───────────────────────────────────────────


@singledispatch
def to_owned_geometry(shape, role: PolyRole, scale: Scale) -> OwnedGeometry:
    """Convert a shapely shape into a fresh ``OwnedGeometry``."""
    raise TypeError(f"Cannot convert {type(shape).__name__} into engine paths")


@to_owned_geometry.register(Polygon)
def from_polygon_with_holes(shape: Polygon, role: PolyRole, scale: Scale) -> OwnedGeometry:
    return OwnedGeometry().add_polygon(shape, role, scale)


@to_owned_geometry.register(MultiPolygon)
def from_multi_polygon(shape: MultiPolygon, role: PolyRole, scale: Scale) -> OwnedGeometry:
    return OwnedGeometry().add_polygons(shape, role, scale)


@to_owned_geometry.register(MultiLineString)
def from_multi_path(shape: MultiLineString, role: PolyRole, scale: Scale) -> OwnedGeometry:
    return OwnedGeometry().add_line_strings(shape, role, scale)


@to_owned_geometry.register(LineString)
def from_path(shape: LineString, role: PolyRole, scale: Scale) -> OwnedGeometry:
    return OwnedGeometry().add_line_string(shape, role, scale)

"""Engine boundary — the integer clipping/offsetting library behind geoclipper.

The engine consumes a ``DescriptorSet`` (borrowed views, valid for one
call) and produces a ``RawResult`` the caller must hand back through
``release()`` exactly once.  ``acquired_result`` wraps that contract in a
``with`` block.

``PyclipperEngine`` is the default implementation, built on pyclipper
(Python bindings for Angus Johnson's Clipper library):
  - fresh ``Pyclipper`` / ``PyclipperOffset`` objects per call, so the
    engine holds no state between calls;
  - paths Clipper refuses (too few or collinear vertices) are skipped;
  - output is read from the PolyTree and grouped as
    [outer, hole, hole, ...] per outer contour, islands inside holes
    following as their own polygons, each open path as a one-path polygon.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator, Protocol

import numpy as np
import pyclipper

from geoclipper.models import (
    ClipType,
    DescriptorSet,
    EndCode,
    EngineError,
    FillRule,
    JoinCode,
    PolyRole,
    RawResult,
)


log = logging.getLogger(__name__)


class ClipperEngine(Protocol):
    def boolean_execute(
        self,
        op: ClipType,
        polygons: DescriptorSet,
        subject_fill: FillRule,
        clip_fill: FillRule,
    ) -> RawResult:
        ...

    def offset_execute(
        self,
        miter_limit: float,
        round_precision: float,
        join: JoinCode,
        end: EndCode,
        polygons: DescriptorSet,
        delta: float,
    ) -> RawResult:
        ...

    def release(self, raw: RawResult) -> None:
        ...


@contextmanager
def acquired_result(engine: ClipperEngine, raw: RawResult) -> Iterator[RawResult]:
    """Yield *raw* and release it on every exit path."""
    try:
        yield raw
    finally:
        engine.release(raw)


# ── pyclipper implementation ──────────────────────────────────────

_CLIP_TYPES = {op: getattr(pyclipper, f"CT_{op.name}") for op in ClipType}
_POLY_TYPES = {role: getattr(pyclipper, f"PT_{role.name}") for role in PolyRole}
_FILL_TYPES = {rule: getattr(pyclipper, f"PFT_{rule.name}") for rule in FillRule}
_JOIN_TYPES = {code: getattr(pyclipper, f"JT_{code.name}") for code in JoinCode}
_END_TYPES = {code: getattr(pyclipper, f"ET_{code.name}") for code in EndCode}


def _tree_to_polygons(tree) -> list[list[np.ndarray]]:
    """Group a pyclipper PolyTree into raw polygons (see module docstring)."""
    polygons: list[list[np.ndarray]] = []

    def visit(node) -> None:
        for child in node.Childs:
            if child.IsOpen:
                polygons.append([_vertices(child.Contour)])
                continue
            holes = [h for h in child.Childs if h.IsHole]
            polygons.append([_vertices(child.Contour)] + [_vertices(h.Contour) for h in holes])
            for hole in holes:
                visit(hole)

    visit(tree)
    return polygons


def _vertices(contour) -> np.ndarray:
    if not contour:
        return np.empty((0, 2), dtype=np.int64)
    return np.asarray(contour, dtype=np.int64).reshape(-1, 2)


class PyclipperEngine:
    """Clipper 6 via pyclipper."""

    def boolean_execute(
        self,
        op: ClipType,
        polygons: DescriptorSet,
        subject_fill: FillRule,
        clip_fill: FillRule,
    ) -> RawResult:
        polygons.check_current()
        pc = pyclipper.Pyclipper()
        added = 0
        for polygon in polygons:
            poly_type = _POLY_TYPES[polygon.role]
            for path in polygon.paths:
                try:
                    pc.AddPath(path.vertices.tolist(), poly_type, path.closed)
                except pyclipper.ClipperException as exc:
                    log.debug(
                        "Skipped %s %s path with %d vertices: %s",
                        polygon.role.name.lower(),
                        "closed" if path.closed else "open",
                        path.count, exc,
                    )
                    continue
                added += 1

        if not added:
            log.debug("%s: no usable paths, empty result", op.name.lower())
            return RawResult(polygons=[])

        try:
            tree = pc.Execute2(_CLIP_TYPES[op], _FILL_TYPES[subject_fill], _FILL_TYPES[clip_fill])
        except pyclipper.ClipperException as exc:
            raise EngineError(f"{op.name.lower()} failed: {exc}") from exc

        raw = RawResult(polygons=_tree_to_polygons(tree))
        log.debug(
            "%s: %d input paths -> %d polygons, %d paths",
            op.name.lower(), added, len(raw.polygons), raw.path_count,
        )
        return raw

    def offset_execute(
        self,
        miter_limit: float,
        round_precision: float,
        join: JoinCode,
        end: EndCode,
        polygons: DescriptorSet,
        delta: float,
    ) -> RawResult:
        polygons.check_current()
        pco = pyclipper.PyclipperOffset(miter_limit, round_precision)
        for polygon in polygons:
            for path in polygon.paths:
                pco.AddPath(path.vertices.tolist(), _JOIN_TYPES[join], _END_TYPES[end])

        try:
            tree = pco.Execute2(delta)
        except pyclipper.ClipperException as exc:
            raise EngineError(f"offset by {delta} failed: {exc}") from exc

        raw = RawResult(polygons=_tree_to_polygons(tree))
        log.debug(
            "offset %s/%s by %g: %d input paths -> %d polygons",
            join.name.lower(), end.name.lower(), delta, polygons.path_count, len(raw.polygons),
        )
        return raw

    def release(self, raw: RawResult) -> None:
        raw.check_live()
        raw.polygons = []
        raw.released = True


@lru_cache(maxsize=1)
def default_engine() -> PyclipperEngine:
    """Process-wide engine used when callers do not pass one."""
    return PyclipperEngine()

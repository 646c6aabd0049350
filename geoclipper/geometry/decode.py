"""Decode raw engine output into shapely geometry."""

from __future__ import annotations

from typing import Callable

from shapely.geometry import LineString, MultiLineString, MultiPolygon, Polygon

from geoclipper.models import RawResult

from .scale import Scale


def decode_multi_polygon(raw: RawResult, scale: Scale) -> MultiPolygon:
    """One polygon per engine polygon: first path is the shell, the rest holes.

    Engine polygons without paths are dropped.  Vertex order is kept as
    returned; shapely appends its own closing vertex to each ring.
    """
    raw.check_live()
    polygons = []
    for paths in raw.polygons:
        if not paths:
            continue
        shell, *holes = [scale.from_engine(p) for p in paths]
        polygons.append(Polygon(shell, holes))
    return MultiPolygon(polygons)


def decode_multi_path(raw: RawResult, scale: Scale) -> MultiLineString:
    """Every path of every engine polygon, flattened in order."""
    raw.check_live()
    return MultiLineString([
        LineString(scale.from_engine(path))
        for paths in raw.polygons
        for path in paths
    ])


DECODERS: dict[type, Callable[[RawResult, Scale], object]] = {
    MultiPolygon: decode_multi_polygon,
    MultiLineString: decode_multi_path,
}


def decode(raw: RawResult, scale: Scale, result_kind: type = MultiPolygon):
    """Decode *raw* into ``MultiPolygon`` or ``MultiLineString``."""
    try:
        decoder = DECODERS[result_kind]
    except KeyError:
        raise TypeError(f"Cannot decode engine output as {result_kind.__name__}") from None
    return decoder(raw, scale)

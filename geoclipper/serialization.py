"""Geometry and offset-style serialization — JSON conversion.

Geometries use GeoJSON-style dicts (``{"type": ..., "coordinates": ...}``).
Join and end styles accept either a dict (``{"type": "miter", "limit": 5}``)
or the compact string form used on the command line (``"miter:5"``).
"""

from __future__ import annotations

from shapely.geometry import mapping, shape
from shapely.geometry.base import BaseGeometry

from geoclipper.ops.params import (
    ClosedLine, ClosedPolygon, EndType, JoinType,
    Miter, OpenButt, OpenRound, OpenSquare, Round, Square,
)


SUPPORTED_GEOMETRY_TYPES = ("Polygon", "MultiPolygon", "LineString", "MultiLineString")


def _to_lists(value):
    if isinstance(value, (list, tuple)):
        return [_to_lists(v) for v in value]
    return float(value)


def geometry_to_dict(geom: BaseGeometry) -> dict:
    """Serialize a supported shapely geometry to a JSON-safe dict."""
    if geom.geom_type not in SUPPORTED_GEOMETRY_TYPES:
        raise ValueError(f"Unsupported geometry type '{geom.geom_type}'")
    data = mapping(geom)
    return {"type": data["type"], "coordinates": _to_lists(data["coordinates"])}


def parse_geometry(data: dict) -> BaseGeometry:
    """Parse a GeoJSON-style dict back into a shapely geometry."""
    kind = data.get("type")
    if kind not in SUPPORTED_GEOMETRY_TYPES:
        raise ValueError(
            f"Unsupported geometry type '{kind}' "
            f"(expected one of {', '.join(SUPPORTED_GEOMETRY_TYPES)})"
        )
    return shape(data)


# ── Join / end styles ──────────────────────────────────────────────


def _split_style(data: dict | str, *keys: str) -> tuple[str, float | None]:
    """Return (name, numeric argument or None) from either accepted form."""
    if isinstance(data, str):
        name, _, arg = data.partition(":")
        return name.strip().lower(), (float(arg) if arg.strip() else None)
    name = str(data["type"]).strip().lower()
    for key in keys:
        if key in data:
            return name, float(data[key])
    return name, None


def parse_join_type(data: dict | str) -> JoinType:
    """``square`` | ``round:<precision>`` | ``miter:<limit>``."""
    name, arg = _split_style(data, "limit", "precision")
    if name == "square":
        return Square()
    if name in ("round", "miter") and arg is None:
        raise ValueError(f"{name} join needs a parameter, e.g. '{name}:5'")
    if name == "round":
        return Round(arg)
    if name == "miter":
        return Miter(arg)
    raise ValueError(f"Unknown join type '{name}'")


def parse_end_type(data: dict | str) -> EndType:
    """``closed-polygon`` | ``closed-line`` | ``open-butt`` | ``open-square``
    | ``open-round:<precision>`` (underscores also accepted)."""
    name, precision = _split_style(data, "precision")
    name = name.replace("_", "-")
    if name == "closed-polygon":
        return ClosedPolygon()
    if name == "closed-line":
        return ClosedLine()
    if name == "open-butt":
        return OpenButt()
    if name == "open-square":
        return OpenSquare()
    if name == "open-round":
        if precision is None:
            raise ValueError("open-round end needs a precision, e.g. 'open-round:0.25'")
        return OpenRound(precision)
    raise ValueError(f"Unknown end type '{name}'")

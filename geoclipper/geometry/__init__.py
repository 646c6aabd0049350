"""Geometry marshaling — shapely shapes to engine buffers and back.

Submodules:
  scale     Float ↔ int64 conversion (Scale).
  buffer    OwnedGeometry and the per-shape converters.
  decode    Raw engine output → MultiPolygon / MultiLineString.
"""

from .scale import Scale
from .buffer import (
    OwnedGeometry,
    to_owned_geometry,
    from_polygon_with_holes,
    from_multi_polygon,
    from_multi_path,
    from_path,
    ring_vertices,
    path_vertices,
)
from .decode import decode, decode_multi_polygon, decode_multi_path

__all__ = [
    "Scale",
    # Buffer
    "OwnedGeometry", "to_owned_geometry",
    "from_polygon_with_holes", "from_multi_polygon", "from_multi_path", "from_path",
    "ring_vertices", "path_vertices",
    # Decoding
    "decode", "decode_multi_polygon", "decode_multi_path",
]

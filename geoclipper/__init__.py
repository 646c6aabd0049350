"""geoclipper — boolean and offset operations on shapely geometry.

Shapes are scaled onto a 64-bit integer grid, handed to the Clipper
engine (via pyclipper) and decoded back into shapely geometry.

Subpackages:
  geometry   Scale, owned engine buffers, result decoding.
  ops        Join/end styles, engine boundary, orchestration, public API.
"""

from .config import CLIPPER_SETTINGS, ClipperSettings
from .models import (
    ClipType, PolyRole, FillRule, JoinCode, EndCode, RawResult,
    ClipperError, UnclosedRingError, StaleDescriptorError,
    ResultReleasedError, EngineError,
)
from .ops import (
    Square, Round, Miter,
    ClosedPolygon, ClosedLine, OpenButt, OpenSquare, OpenRound,
    ClosedShape, OpenShape,
    ClipperPolygon, ClipperMultiPolygon, ClipperPath, ClipperMultiPath,
    PyclipperEngine,
    clipper, difference, intersection, union, xor, offset,
)

__version__ = "0.1.0"

__all__ = [
    # Config
    "CLIPPER_SETTINGS", "ClipperSettings",
    # Codes and errors
    "ClipType", "PolyRole", "FillRule", "JoinCode", "EndCode", "RawResult",
    "ClipperError", "UnclosedRingError", "StaleDescriptorError",
    "ResultReleasedError", "EngineError",
    # Styles
    "Square", "Round", "Miter",
    "ClosedPolygon", "ClosedLine", "OpenButt", "OpenSquare", "OpenRound",
    # Operations
    "ClosedShape", "OpenShape",
    "ClipperPolygon", "ClipperMultiPolygon", "ClipperPath", "ClipperMultiPath",
    "PyclipperEngine",
    "clipper", "difference", "intersection", "union", "xor", "offset",
]

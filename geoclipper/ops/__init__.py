"""Operations — boolean and offset operations over shapely geometry.

Submodules:
  params        Join/end styles and their engine parameters.
  engine        Engine protocol, pyclipper implementation, scoped release.
  orchestrator  Buffer → engine → decode → release, per operation.
  api           Operation sets per shape kind (ClosedShape / OpenShape).
"""

from .params import (
    Square, Round, Miter, JoinType,
    ClosedPolygon, ClosedLine, OpenButt, OpenSquare, OpenRound, EndType,
    OffsetParameters, offset_parameters,
)
from .engine import ClipperEngine, PyclipperEngine, acquired_result, default_engine
from .orchestrator import execute_boolean_operation, execute_offset_operation
from .api import (
    ClosedShape, OpenShape,
    ClipperPolygon, ClipperMultiPolygon, ClipperPath, ClipperMultiPath,
    clipper, difference, intersection, union, xor, offset,
)

__all__ = [
    # Params
    "Square", "Round", "Miter", "JoinType",
    "ClosedPolygon", "ClosedLine", "OpenButt", "OpenSquare", "OpenRound", "EndType",
    "OffsetParameters", "offset_parameters",
    # Engine
    "ClipperEngine", "PyclipperEngine", "acquired_result", "default_engine",
    # Orchestration
    "execute_boolean_operation", "execute_offset_operation",
    # API
    "ClosedShape", "OpenShape",
    "ClipperPolygon", "ClipperMultiPolygon", "ClipperPath", "ClipperMultiPath",
    "clipper", "difference", "intersection", "union", "xor", "offset",
]

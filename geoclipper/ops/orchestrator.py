"""Boolean and offset orchestration — buffer, engine call, decode, release.

Each call:
  1. Converts its operand(s) into one ``OwnedGeometry``
     (Subject polygons first, then Clip polygons).
  2. Materializes descriptors right before the engine call.
  3. Runs the engine once.
  4. Decodes the raw result while holding it, and releases it on every
     exit path.

The buffer never outlives the call and its descriptors are never
returned.
"""

from __future__ import annotations

import logging

from shapely.geometry import MultiLineString, MultiPolygon

from geoclipper.geometry import Scale, decode, to_owned_geometry
from geoclipper.models import BOOLEAN_FILL_RULE, ClipType, PolyRole

from .engine import ClipperEngine, acquired_result, default_engine
from .params import EndType, JoinType, offset_parameters


log = logging.getLogger(__name__)


def execute_boolean_operation(
    op: ClipType,
    subject,
    clip,
    scale: Scale,
    *,
    result_kind: type = MultiPolygon,
    engine: ClipperEngine | None = None,
) -> MultiPolygon | MultiLineString:
    """Run *op* on ``subject`` (left) and ``clip`` (right).

    Parameters
    ----------
    op : ClipType
        Difference, intersection, union or xor.
    subject, clip : shapely geometry
        ``clip`` must be polygonal; ``subject`` may be open.
    scale : Scale
        Float ↔ engine conversion.
    result_kind : type
        ``MultiPolygon`` or ``MultiLineString``.
    engine : ClipperEngine, optional
        Defaults to the process-wide pyclipper engine.
    """
    engine = engine or default_engine()

    owned = to_owned_geometry(subject, PolyRole.SUBJECT, scale)
    owned.extend(to_owned_geometry(clip, PolyRole.CLIP, scale))
    descriptors = owned.materialize_descriptors()

    log.debug(
        "%s: %d paths (%d vertices), factor %g",
        op.name.lower(), descriptors.path_count, descriptors.vertex_count, scale.factor,
    )
    raw = engine.boolean_execute(op, descriptors, BOOLEAN_FILL_RULE, BOOLEAN_FILL_RULE)
    with acquired_result(engine, raw):
        return decode(raw, scale, result_kind)


def execute_offset_operation(
    shape,
    delta: float,
    join_type: JoinType,
    end_type: EndType,
    scale: Scale,
    *,
    engine: ClipperEngine | None = None,
) -> MultiPolygon:
    """Offset *shape* by *delta* (caller units).

    The result is always polygonal, open-path input included.
    """
    engine = engine or default_engine()
    params = offset_parameters(join_type, end_type)

    owned = to_owned_geometry(shape, PolyRole.SUBJECT, scale)
    descriptors = owned.materialize_descriptors()

    raw = engine.offset_execute(
        params.miter_limit,
        params.round_precision,
        params.join,
        params.end,
        descriptors,
        scale.scale_delta(delta),
    )
    with acquired_result(engine, raw):
        return decode(raw, scale, MultiPolygon)

"""Tests for the owned geometry buffer and shape converters.

Validates:
  - Closed rings lose exactly one (the first) vertex; open paths none
  - Exterior precedes holes, polygons keep insertion order
  - Descriptor views point into one contiguous read-only array
  - Views go stale after mutation or re-materialization
  - Degenerate shapes give zero-count descriptors
"""

from __future__ import annotations

import unittest

import numpy as np
from shapely.geometry import LineString, MultiLineString, MultiPolygon, Polygon

from geoclipper.geometry import (
    OwnedGeometry,
    Scale,
    from_multi_path,
    from_multi_polygon,
    from_path,
    from_polygon_with_holes,
    path_vertices,
    ring_vertices,
    to_owned_geometry,
)
from geoclipper.models import PolyRole, StaleDescriptorError, UnclosedRingError
from tests.shapes_fixture import make_clip_polygon, make_open_subject, make_subject_polygon


ONE = Scale(1.0)


class TestRingElision(unittest.TestCase):

    def test_ring_of_n_points_gives_n_minus_one(self):
        coords = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
        verts = ring_vertices(coords, ONE)
        self.assertEqual(len(verts), 4)
        # the first stored vertex is the one dropped
        self.assertEqual(verts.tolist(), [[10, 0], [10, 10], [0, 10], [0, 0]])

    def test_unclosed_ring_rejected(self):
        with self.assertRaises(UnclosedRingError) as ctx:
            ring_vertices([(0, 0), (10, 0), (10, 10)], ONE)
        self.assertIsInstance(ctx.exception, ValueError)
        self.assertEqual(ctx.exception.first, (0.0, 0.0))

    def test_open_path_keeps_every_vertex(self):
        verts = path_vertices([(0, 0), (5, 5), (0, 0)], ONE)
        self.assertEqual(verts.tolist(), [[0, 0], [5, 5], [0, 0]])

    def test_z_is_dropped(self):
        verts = ring_vertices([(0, 0, 9), (1, 0, 9), (1, 1, 9), (0, 0, 9)], ONE)
        self.assertEqual(verts.shape, (3, 2))

    def test_empty_ring(self):
        self.assertEqual(ring_vertices([], ONE).shape, (0, 2))


class TestConverters(unittest.TestCase):

    def test_polygon_with_holes(self):
        owned = from_polygon_with_holes(make_subject_polygon(), PolyRole.SUBJECT, ONE)
        (polygon,) = owned.materialize_descriptors()
        self.assertEqual(polygon.role, PolyRole.SUBJECT)
        self.assertEqual([p.count for p in polygon.paths], [4, 3])
        self.assertTrue(all(p.closed for p in polygon.paths))
        # exterior first, hole second, stored winding kept
        self.assertEqual(
            polygon.paths[0].vertices.tolist(),
            [[260, 200], [260, 150], [180, 150], [180, 200]],
        )
        self.assertEqual(
            polygon.paths[1].vertices.tolist(),
            [[230, 190], [200, 190], [215, 160]],
        )

    def test_multi_polygon_insertion_order(self):
        first = Polygon([(0, 0), (1, 0), (1, 1)])
        second = Polygon([(5, 5), (6, 5), (6, 6)])
        owned = from_multi_polygon(MultiPolygon([first, second]), PolyRole.CLIP, ONE)
        descriptors = owned.materialize_descriptors()
        self.assertEqual(len(descriptors), 2)
        self.assertEqual(descriptors.polygons[0].paths[0].vertices.tolist()[0], [1, 0])
        self.assertEqual(descriptors.polygons[1].paths[0].vertices.tolist()[0], [6, 5])
        self.assertEqual([p.role for p in descriptors], [PolyRole.CLIP, PolyRole.CLIP])

    def test_multi_path_is_open(self):
        shape = MultiLineString([[(0, 0), (3, 0)], [(0, 1), (3, 1), (3, 4)]])
        (polygon,) = from_multi_path(shape, PolyRole.SUBJECT, ONE).materialize_descriptors()
        self.assertEqual([p.count for p in polygon.paths], [2, 3])
        self.assertFalse(any(p.closed for p in polygon.paths))

    def test_single_path(self):
        (polygon,) = from_path(LineString([(0, 0), (3, 0)]), PolyRole.SUBJECT, ONE) \
            .materialize_descriptors()
        self.assertEqual(polygon.paths[0].vertices.tolist(), [[0, 0], [3, 0]])
        self.assertFalse(polygon.paths[0].closed)

    def test_dispatch_by_shape_type(self):
        owned = to_owned_geometry(make_open_subject(), PolyRole.SUBJECT, ONE)
        self.assertEqual(owned.path_count, 1)
        owned = to_owned_geometry(make_subject_polygon(), PolyRole.SUBJECT, ONE)
        self.assertEqual(owned.path_count, 2)
        with self.assertRaises(TypeError):
            to_owned_geometry([(0, 0), (1, 1)], PolyRole.SUBJECT, ONE)

    def test_factor_applied(self):
        owned = from_polygon_with_holes(
            Polygon([(0.0, 0.0), (1.25, 0.0), (1.25, -1.75)]), PolyRole.SUBJECT, Scale(100.0),
        )
        (polygon,) = owned.materialize_descriptors()
        self.assertEqual(polygon.paths[0].vertices.tolist(), [[125, 0], [125, -175], [0, 0]])

    def test_empty_polygon_gives_zero_count(self):
        (polygon,) = from_polygon_with_holes(Polygon(), PolyRole.SUBJECT, ONE) \
            .materialize_descriptors()
        self.assertEqual([p.count for p in polygon.paths], [0])

    def test_empty_multi_path(self):
        descriptors = from_multi_path(MultiLineString(), PolyRole.SUBJECT, ONE) \
            .materialize_descriptors()
        self.assertEqual(len(descriptors), 1)
        self.assertEqual(descriptors.path_count, 0)


class TestMaterialization(unittest.TestCase):

    def _owned(self) -> OwnedGeometry:
        owned = from_polygon_with_holes(make_subject_polygon(), PolyRole.SUBJECT, ONE)
        return owned.extend(from_polygon_with_holes(make_clip_polygon(), PolyRole.CLIP, ONE))

    def test_views_share_one_read_only_array(self):
        descriptors = self._owned().materialize_descriptors()
        paths = [p for polygon in descriptors for p in polygon.paths]
        base = paths[0].vertices.base
        self.assertIsNotNone(base)
        for path in paths:
            self.assertTrue(np.shares_memory(path.vertices, base))
            self.assertFalse(path.vertices.flags.writeable)
        self.assertEqual(descriptors.vertex_count, 4 + 3 + 4)

    def test_extend_keeps_subject_before_clip(self):
        descriptors = self._owned().materialize_descriptors()
        self.assertEqual([p.role for p in descriptors], [PolyRole.SUBJECT, PolyRole.CLIP])

    def test_mutation_makes_views_stale(self):
        owned = self._owned()
        descriptors = owned.materialize_descriptors()
        self.assertTrue(descriptors.is_current)
        owned.add_polygon(Polygon([(0, 0), (1, 0), (1, 1)]), PolyRole.CLIP, ONE)
        self.assertFalse(descriptors.is_current)
        with self.assertRaises(StaleDescriptorError):
            descriptors.check_current()

    def test_rematerialization_makes_old_views_stale(self):
        owned = self._owned()
        old = owned.materialize_descriptors()
        new = owned.materialize_descriptors()
        self.assertFalse(old.is_current)
        self.assertTrue(new.is_current)
        self.assertFalse(np.shares_memory(
            old.polygons[0].paths[0].vertices, new.polygons[0].paths[0].vertices,
        ))

    def test_counts(self):
        owned = self._owned()
        self.assertEqual(len(owned), 2)
        self.assertEqual(owned.path_count, 3)
        self.assertEqual(owned.vertex_count, 11)
        self.assertEqual(owned.roles, [PolyRole.SUBJECT, PolyRole.CLIP])


if __name__ == "__main__":
    unittest.main()

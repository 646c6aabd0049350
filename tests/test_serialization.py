"""Tests for geometry and offset-style JSON conversion."""

from __future__ import annotations

import json
import unittest

from shapely.geometry import MultiLineString, Point

from geoclipper import (
    ClosedLine, ClosedPolygon, Miter, OpenButt, OpenRound, OpenSquare, Round, Square,
)
from geoclipper.serialization import (
    geometry_to_dict, parse_end_type, parse_geometry, parse_join_type,
)
from tests.shapes_fixture import make_subject_polygon


class TestGeometrySerialization(unittest.TestCase):

    def test_polygon_round_trip(self):
        poly = make_subject_polygon()
        data = json.loads(json.dumps(geometry_to_dict(poly)))
        self.assertEqual(data["type"], "Polygon")
        self.assertEqual(data["coordinates"][0][0], [180.0, 200.0])
        self.assertTrue(parse_geometry(data).equals(poly))

    def test_multi_line_string(self):
        lines = MultiLineString([[(0, 0), (1, 1)], [(2, 2), (3, 3)]])
        data = geometry_to_dict(lines)
        self.assertEqual(data["coordinates"], [[[0.0, 0.0], [1.0, 1.0]], [[2.0, 2.0], [3.0, 3.0]]])
        self.assertEqual(parse_geometry(data).geom_type, "MultiLineString")

    def test_unsupported_types(self):
        with self.assertRaises(ValueError):
            geometry_to_dict(Point(0, 0))
        with self.assertRaises(ValueError):
            parse_geometry({"type": "Point", "coordinates": [0, 0]})


class TestStyleParsing(unittest.TestCase):

    def test_join_strings(self):
        self.assertEqual(parse_join_type("square"), Square())
        self.assertEqual(parse_join_type("round:0.25"), Round(0.25))
        self.assertEqual(parse_join_type("Miter:5"), Miter(5.0))

    def test_join_dicts(self):
        self.assertEqual(parse_join_type({"type": "miter", "limit": 3}), Miter(3.0))
        self.assertEqual(parse_join_type({"type": "round", "precision": 0.5}), Round(0.5))

    def test_join_errors(self):
        for bad in ("miter", "round", "bevel", {"type": "miter"}):
            with self.assertRaises(ValueError):
                parse_join_type(bad)

    def test_end_types(self):
        self.assertEqual(parse_end_type("closed-polygon"), ClosedPolygon())
        self.assertEqual(parse_end_type("closed_line"), ClosedLine())
        self.assertEqual(parse_end_type("open-butt"), OpenButt())
        self.assertEqual(parse_end_type({"type": "open-square"}), OpenSquare())
        self.assertEqual(parse_end_type("open-round:0.1"), OpenRound(0.1))

    def test_end_errors(self):
        for bad in ("open-round", "open-miter"):
            with self.assertRaises(ValueError):
                parse_end_type(bad)


if __name__ == "__main__":
    unittest.main()

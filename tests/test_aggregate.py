import os
import sys
import unittest

THIS_DIR = os.path.dirname(__file__)
if THIS_DIR not in sys.path:
    sys.path.insert(0, THIS_DIR)

from plan_fixtures import ATTRS, entry, wall

from wallsplitter.config import REPORT_MIN_WALL_LENGTH
from wallsplitter.core.errors import Diagnostics, GeometryDegenerate, UnresolvedBoundaryReference
from wallsplitter.core.model import Room, Wall
from wallsplitter.engine.aggregate import (
    EAST,
    NORTH,
    ORIENTATIONS,
    SOUTH,
    WEST,
    aggregate,
    classify_orientation,
)
from wallsplitter.engine.network import WallNetwork


class ClassifyOrientationTests(unittest.TestCase):
    def test_dominant_axis_and_sign(self):
        self.assertEqual(classify_orientation(1.0, 0.2), EAST)
        self.assertEqual(classify_orientation(-1.0, 0.2), WEST)
        self.assertEqual(classify_orientation(0.2, 1.0), NORTH)
        self.assertEqual(classify_orientation(0.2, -1.0), SOUTH)

    def test_tie_goes_to_x(self):
        self.assertEqual(classify_orientation(1.0, 1.0), EAST)
        self.assertEqual(classify_orientation(-1.0, 1.0), WEST)

    def test_total_over_directions(self):
        for dx in (-2.0, -0.5, 0.0, 0.5, 2.0):
            for dy in (-2.0, -0.5, 0.0, 0.5, 2.0):
                if dx == 0.0 and dy == 0.0:
                    continue
                self.assertIn(classify_orientation(dx, dy), ORIENTATIONS)

    def test_zero_vector_raises(self):
        with self.assertRaises(GeometryDegenerate):
            classify_orientation(0.0, 0.0)


class AggregateTests(unittest.TestCase):
    def setUp(self):
        self.network = WallNetwork(
            [
                wall("w1", 0, 0, 4, 0),
                wall("w2", 4, 0, 4, 6),
                wall("w3", 4, 6, -2, 6),
            ]
        )

    def test_rows_follow_boundary_order(self):
        room = Room(
            number="R1",
            name="Office",
            loops=((entry("w1", 0, 0, 4, 0), entry("w2", 4, 0, 4, 6), entry("w3", 4, 6, -2, 6)),),
        )

        report = aggregate([room], self.network)

        rows = report["R1"]
        self.assertEqual([r.wall_id for r in rows], ["w1", "w2", "w3"])
        self.assertEqual([round(r.area, 2) for r in rows], [40.00, 60.00, 60.00])
        self.assertEqual([round(r.length, 2) for r in rows], [4.00, 6.00, 6.00])
        self.assertEqual([r.orientation for r in rows], [EAST, NORTH, WEST])
        self.assertTrue(all(r.room_name == "Office" for r in rows))

    def test_unresolved_entry_is_skipped(self):
        room = Room(number="R1", name="Office", loops=((entry("gone", 0, 0, 4, 0), entry("w1", 0, 0, 4, 0)),))
        diagnostics = Diagnostics()

        report = aggregate([room], self.network, diagnostics)

        self.assertEqual([r.wall_id for r in report["R1"]], ["w1"])
        self.assertEqual(len(diagnostics.of_kind(UnresolvedBoundaryReference)), 1)

    def test_room_without_resolvable_walls_is_still_reported(self):
        room = Room(number="R2", name="Closet", loops=((entry("gone", 0, 0, 4, 0),),))

        report = aggregate([room], self.network, Diagnostics())

        self.assertIn("R2", report)
        self.assertEqual(report["R2"], ())

    def test_unplaced_room_is_skipped(self):
        room = Room(number="R3", name="Unplaced", loops=(), area=0.0)
        diagnostics = Diagnostics()

        report = aggregate([room], self.network, diagnostics)

        self.assertNotIn("R3", report)
        self.assertEqual(len(diagnostics.of_kind(GeometryDegenerate)), 1)

    def test_rows_are_not_deduplicated_across_loops(self):
        room = Room(
            number="R1",
            name="Office",
            loops=((entry("w1", 0, 0, 4, 0),), (entry("w1", 4, 0, 0, 0),)),
        )

        report = aggregate([room], self.network)

        self.assertEqual([r.wall_id for r in report["R1"]], ["w1", "w1"])

    def test_curved_wall_is_skipped(self):
        self.network.add(Wall(id="arc", segment=None, attributes=ATTRS))
        room = Room(number="R1", name="Office", loops=((entry("arc", 0, 0, 1, 1), entry("w2", 4, 0, 4, 6)),))
        diagnostics = Diagnostics()

        report = aggregate([room], self.network, diagnostics)

        self.assertEqual([r.wall_id for r in report["R1"]], ["w2"])
        self.assertEqual(len(diagnostics.of_kind(GeometryDegenerate)), 1)

    def test_wall_shorter_than_report_minimum_is_skipped(self):
        self.network.add(wall("stub", 4, 6, 4.05, 6))
        room = Room(number="R1", name="Office", loops=((entry("stub", 4, 6, 4.05, 6), entry("w1", 0, 0, 4, 0)),))
        diagnostics = Diagnostics()

        report = aggregate([room], self.network, diagnostics)

        self.assertEqual([r.wall_id for r in report["R1"]], ["w1"])
        skipped = diagnostics.of_kind(GeometryDegenerate)
        self.assertEqual(len(skipped), 1)
        self.assertIn("stub", skipped[0].message)

    def test_wall_at_report_minimum_is_kept(self):
        self.network.add(wall("short", 0, 0, REPORT_MIN_WALL_LENGTH, 0))
        room = Room(number="R1", name="Office", loops=((entry("short", 0, 0, REPORT_MIN_WALL_LENGTH, 0),),))

        report = aggregate([room], self.network)

        self.assertEqual([r.wall_id for r in report["R1"]], ["short"])

    def test_room_number_suffix_is_stripped(self):
        room = Room(number="101", name="Kitchen 101", loops=((entry("w1", 0, 0, 4, 0),),))

        report = aggregate([room], self.network)

        self.assertEqual(report["101"][0].room_name, "Kitchen")


if __name__ == "__main__":
    unittest.main()

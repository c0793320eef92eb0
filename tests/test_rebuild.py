import os
import sys
import unittest

THIS_DIR = os.path.dirname(__file__)
if THIS_DIR not in sys.path:
    sys.path.insert(0, THIS_DIR)

from plan_fixtures import ATTRS, seg, wall

from wallsplitter.config import MIN_SEGMENT_LENGTH
from wallsplitter.core.errors import GeometryDegenerate
from wallsplitter.core.model import Point, Wall
from wallsplitter.engine.rebuild import order_along, rebuild_segments


class RebuildSegmentsTests(unittest.TestCase):
    def test_no_split_points_returns_original(self):
        w = wall("a", 0, 0, 10, 0)

        pieces = rebuild_segments(w, [])

        self.assertEqual(len(pieces), 1)
        self.assertTrue(pieces[0].almost_equals(w.segment))

    def test_single_crossing_gives_two_pieces(self):
        pieces = rebuild_segments(wall("a", 0, 0, 10, 0), [Point(5, 0)])

        self.assertEqual(len(pieces), 2)
        self.assertTrue(pieces[0].almost_equals(seg(0, 0, 5, 0)))
        self.assertTrue(pieces[1].almost_equals(seg(5, 0, 10, 0)))

    def test_pieces_follow_wall_direction(self):
        w = wall("a", 10, 0, 0, 0)

        pieces = rebuild_segments(w, [Point(2, 0), Point(7, 0), Point(4, 0)])

        starts = [p.start.x for p in pieces]
        self.assertEqual(starts, [10, 7, 4, 2])

    def test_chain_reconstructs_span(self):
        w = wall("a", 1, 1, 9, 7)
        cuts = [w.segment.point_at(t) for t in (0.8, 0.1, 0.45)]

        pieces = rebuild_segments(w, cuts)

        self.assertEqual(len(pieces), 4)
        self.assertTrue(pieces[0].start.almost_equals(w.segment.start))
        self.assertTrue(pieces[-1].end.almost_equals(w.segment.end))
        for first, second in zip(pieces, pieces[1:]):
            self.assertTrue(first.end.almost_equals(second.start))
        self.assertAlmostEqual(sum(p.length for p in pieces), w.segment.length)

    def test_piece_below_minimum_is_dropped(self):
        pieces = rebuild_segments(
            wall("a", 0, 0, 10, 0), [Point(4.0, 0), Point(4.05, 0)], min_length=0.1
        )

        self.assertEqual(len(pieces), 2)
        self.assertTrue(pieces[0].almost_equals(seg(0, 0, 4, 0)))
        self.assertTrue(pieces[1].almost_equals(seg(4.05, 0, 10, 0)))
        self.assertTrue(all(p.length >= 0.1 for p in pieces))

    def test_default_minimum_is_configured_tolerance(self):
        pieces = rebuild_segments(wall("a", 0, 0, 10, 0), [Point(3.0, 0), Point(3.0 + MIN_SEGMENT_LENGTH / 2, 0)])

        self.assertEqual(len(pieces), 2)

    def test_never_empty_for_long_enough_wall(self):
        pieces = rebuild_segments(wall("a", 0, 0, 0.15, 0), [Point(0.05, 0), Point(0.1, 0)], min_length=0.1)

        self.assertEqual(len(pieces), 1)
        self.assertAlmostEqual(pieces[0].length, 0.15)

    def test_piece_below_model_tolerance_is_dropped_with_finer_eps(self):
        pieces = rebuild_segments(
            wall("a", 0, 0, 10, 0), [Point(5.0, 0), Point(5.0005, 0)], min_length=1e-4, eps=1e-4
        )

        self.assertEqual(len(pieces), 2)
        self.assertTrue(pieces[0].almost_equals(seg(0, 0, 5, 0)))
        self.assertTrue(pieces[1].almost_equals(seg(5.0005, 0, 10, 0)))

    def test_wall_without_curve_raises(self):
        with self.assertRaises(GeometryDegenerate):
            rebuild_segments(Wall(id="arc", segment=None, attributes=ATTRS), [Point(1, 1)])


class OrderAlongTests(unittest.TestCase):
    def test_ties_keep_input_order(self):
        s = seg(0, 0, 10, 0)
        first, second = Point(5, 1), Point(5, -1)

        self.assertEqual(order_along(s, [Point(8, 0), first, second, Point(1, 0)]),
                         [Point(1, 0), first, second, Point(8, 0)])


if __name__ == "__main__":
    unittest.main()

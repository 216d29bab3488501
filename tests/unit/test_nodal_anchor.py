import unittest

from src.calculators.interval_merge.nodal_anchor import (
    adapt_intervals_for_nodal_point, find_nodal_interval_index
)
from src.models.component_row import ComponentRow
from src.models.segment import Segment


class NodalAnchorTests(unittest.TestCase):

    def setUp(self):
        self.rows = [
            ComponentRow(top=0, bottom=1000, internal_diameter=2.5, type='Tubing'),
            ComponentRow(top=0, bottom=1200, internal_diameter=6.0, type='Casing Joint'),
        ]
        # Merged without the nodal point as a boundary
        self.intervals = [Segment(1000.0, 1200.0, 6.0), Segment(0.0, 1000.0, 2.5)]

    def test_interval_containing_nodal_point_is_split(self):
        adapted = adapt_intervals_for_nodal_point(self.intervals, 1100, self.rows)

        self.assertEqual(adapted, [Segment(1000.0, 1100.0, 6.0), Segment(0.0, 1000.0, 2.5)])

    def test_split_resolves_diameter_over_the_shorter_range(self):
        rows = self.rows + [ComponentRow(top=1150, bottom=1200, internal_diameter=1.5, type='Packer')]
        intervals = [Segment(1000.0, 1200.0, 1.5), Segment(0.0, 1000.0, 2.5)]

        adapted = adapt_intervals_for_nodal_point(intervals, 1100, rows)

        self.assertEqual(adapted[0], Segment(1000.0, 1100.0, 6.0))

    def test_nodal_point_on_boundary_needs_no_split(self):
        adapted = adapt_intervals_for_nodal_point(self.intervals, 1000, self.rows)

        self.assertEqual(adapted, [Segment(0.0, 1000.0, 2.5)])

    def test_nodal_point_in_gap_starts_at_next_shallower_interval(self):
        intervals = [Segment(500.0, 600.0, 3.0), Segment(0.0, 100.0, 2.0)]

        self.assertEqual(find_nodal_interval_index(intervals, 300), 1)

    def test_nodal_point_above_coverage_uses_deepest_interval(self):
        intervals = [Segment(500.0, 600.0, 3.0)]

        self.assertEqual(find_nodal_interval_index(intervals, 0), 0)
        self.assertEqual(adapt_intervals_for_nodal_point(intervals, 0, []), intervals)

    def test_invalid_intervals_are_discarded(self):
        intervals = [Segment(100.0, 200.0, -1.0), Segment(200.0, 100.0, 2.0), Segment(0.0, 100.0, 2.0)]

        adapted = adapt_intervals_for_nodal_point(intervals, 100, [])

        self.assertEqual(adapted, [Segment(0.0, 100.0, 2.0)])

    def test_empty_intervals(self):
        self.assertEqual(adapt_intervals_for_nodal_point([], 100, self.rows), [])
        self.assertEqual(adapt_intervals_for_nodal_point(None, 100, None), [])


if __name__ == '__main__':
    unittest.main()

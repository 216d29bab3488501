import unittest

from src.calculators.wellbore_design.recalc import recalc_top_bottom_bha, recalc_top_bottom_casing
from src.models.component_row import ComponentRow


class BhaRecalcTests(unittest.TestCase):

    def setUp(self):
        self.rows = [
            ComponentRow(id='1', type='Tubing', top=0, bottom=0, internal_diameter=2.441,
                         od=2.875, count=10, length=30.0),
            ComponentRow(id='2', type='Pump Seating Nipple', top=999, bottom=999, internal_diameter=2.25,
                         od=2.875, count=1, length=5.0),
        ]

    def test_rows_stack_from_first_top(self):
        result = recalc_top_bottom_bha(self.rows, 0)

        self.assertEqual([(r.top, r.bottom) for r in result], [(0, 300.0), (300.0, 305.0)])

    def test_drafted_top_moves_the_string(self):
        result = recalc_top_bottom_bha(self.rows, 0, {'1': {'top': 50}})

        self.assertEqual([(r.top, r.bottom) for r in result], [(50, 350.0), (350.0, 355.0)])

    def test_drafted_bottom_recomputes_length(self):
        result = recalc_top_bottom_bha(self.rows, 0, {'2': {'bottom': 320}})

        self.assertEqual(result[1].bottom, 320)
        self.assertEqual(result[1].length, 20.0)

    def test_draft_fields_override_row(self):
        result = recalc_top_bottom_bha(self.rows, 0, {'1': {'idVal': 2.0, 'count': 5, 'desc': 'short string'}})

        self.assertEqual(result[0].internal_diameter, 2.0)
        self.assertEqual(result[0].bottom, 150.0)
        self.assertEqual(result[0].desc, 'short string')
        self.assertEqual(result[1].top, 150.0)

    def test_input_rows_untouched(self):
        recalc_top_bottom_bha(self.rows, 0, {'1': {'count': 5}})

        self.assertEqual(self.rows[0].count, 10)
        self.assertEqual(self.rows[1].top, 999)

    def test_empty(self):
        self.assertEqual(recalc_top_bottom_bha([], 100), [])


class CasingRecalcTests(unittest.TestCase):

    def setUp(self):
        self.rows = [
            ComponentRow(id='c1', type='Casing Joint', top=0, bottom=0, internal_diameter=8.681,
                         od=9.625, count=100, length=40.0),
            ComponentRow(id='c2', type='Casing Joint', top=3800, bottom=0, internal_diameter=6.184,
                         od=7.0, count=50, length=40.0),
            ComponentRow(id='c3', type='Casing Pup Joint', top=0, bottom=0, internal_diameter=6.184,
                         od=7.0, count=10, length=40.0),
        ]

    def test_first_string_starts_at_initial_top(self):
        result = recalc_top_bottom_casing(self.rows, 10)

        self.assertEqual((result[0].top, result[0].bottom), (10, 4010.0))

    def test_liner_keeps_its_hanger_depth(self):
        result = recalc_top_bottom_casing(self.rows, 10)

        self.assertEqual((result[1].top, result[1].bottom), (3800, 5800.0))

    def test_same_size_string_continues_from_previous_bottom(self):
        result = recalc_top_bottom_casing(self.rows, 10)

        self.assertEqual((result[2].top, result[2].bottom), (5800.0, 6200.0))

    def test_drafted_liner_top(self):
        result = recalc_top_bottom_casing(self.rows, 10, {'c2': {'top': 3500}})

        self.assertEqual(result[1].top, 3500)
        self.assertEqual(result[2].top, 5500.0)


if __name__ == '__main__':
    unittest.main()

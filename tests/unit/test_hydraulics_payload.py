import unittest

from src.calculators.hydraulics.payload import (
    build_hydraulics_input, build_wellbore_geometry, complete_fluid_properties, validate_hydraulics_input
)
from src.models.segment import Segment
from src.models.survey_point import SurveyPoint


class HydraulicsPayloadTests(unittest.TestCase):

    def setUp(self):
        self.fluid = {
            'oil_rate': 800.0,
            'water_rate': 200.0,
            'gas_rate': 400.0,
            'oil_gravity': 32.0,
            'gas_gravity': 0.7,
            'bubble_point': 1800.0,
            'temperature_gradient': 1.5,
            'surface_temperature': 80.0,
        }
        self.segments = [Segment(520.0, 900.0, 2.992), Segment(0.0, 520.0, 2.25)]
        self.survey = [SurveyPoint(0, 0, 0.5), SurveyPoint(900, 880, 12.0)]

    def build(self, **overrides):
        kwargs = dict(
            fluid_properties=self.fluid,
            segments=self.segments,
            survey_data=self.survey,
            surface_pressure=150.0,
            deviation=12.0
        )
        kwargs.update(overrides)
        return build_hydraulics_input(**kwargs)

    def test_geometry_defaults(self):
        geometry = build_wellbore_geometry(self.segments, -4.0)

        self.assertEqual(geometry['deviation'], 0.0)
        self.assertEqual(geometry['roughness'], 0.0006)
        self.assertEqual(geometry['depth_steps'], 100)
        self.assertEqual(geometry['pipe_segments'][0],
                         {'start_depth': 520.0, 'end_depth': 900.0, 'diameter': 2.992})

    def test_fluid_ratios_are_derived(self):
        fluid = complete_fluid_properties(self.fluid)

        self.assertAlmostEqual(fluid['wct'], 0.2)
        self.assertAlmostEqual(fluid['gor'], 500.0)
        self.assertAlmostEqual(fluid['glr'], 400.0)
        self.assertEqual(fluid['water_gravity'], 1.0)
        self.assertNotIn('wct', self.fluid)

    def test_supplied_ratios_are_kept(self):
        fluid = complete_fluid_properties(dict(self.fluid, gor=650.0, water_gravity=1.07))

        self.assertEqual(fluid['gor'], 650.0)
        self.assertEqual(fluid['water_gravity'], 1.07)

    def test_complete_payload_validates(self):
        payload = self.build()

        validate_hydraulics_input(payload)
        self.assertEqual(payload['method'], 'hagedorn-brown')
        self.assertEqual(payload['bhp_mode'], 'calculate')
        self.assertEqual(payload['survey_data'][1], {'md': 900.0, 'tvd': 880.0, 'inclination': 12.0})

    def test_missing_segments(self):
        with self.assertRaisesRegex(ValueError, 'pipe_segments'):
            validate_hydraulics_input(self.build(segments=[]))

    def test_non_numeric_segment(self):
        payload = self.build()
        payload['wellbore_geometry']['pipe_segments'][1]['diameter'] = 'wide'

        with self.assertRaisesRegex(ValueError, r'pipe_segments\[1\]'):
            validate_hydraulics_input(payload)

    def test_non_numeric_deviation(self):
        with self.assertRaisesRegex(ValueError, 'deviation'):
            validate_hydraulics_input(self.build(deviation='steep'))

    def test_missing_fluid_property(self):
        with self.assertRaisesRegex(ValueError, 'bubble_point'):
            validate_hydraulics_input(self.build(fluid_properties=dict(self.fluid, bubble_point=None)))

    def test_zero_oil_rate_leaves_gor_missing(self):
        with self.assertRaisesRegex(ValueError, 'gor'):
            validate_hydraulics_input(self.build(fluid_properties=dict(self.fluid, oil_rate=0.0)))

    def test_missing_survey(self):
        with self.assertRaisesRegex(ValueError, 'survey_data'):
            validate_hydraulics_input(self.build(survey_data=[]))


if __name__ == '__main__':
    unittest.main()

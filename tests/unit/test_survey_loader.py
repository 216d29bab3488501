import io
import unittest

from src.calculators.survey_data.loader import (
    SurveyDataError, load_survey, survey_from_records, validate_survey_points
)
from src.models.survey_point import SurveyPoint


class LoadSurveyTests(unittest.TestCase):

    def test_reads_csv_with_any_header_case(self):
        csv = io.StringIO("MD,tvd,Inclination,Azimuth\n100,99.5,2.0,45\n1000,990,10.5,46\n")

        points = load_survey(csv)

        self.assertEqual(points, [SurveyPoint(100.0, 99.5, 2.0), SurveyPoint(1000.0, 990.0, 10.5)])

    def test_missing_column(self):
        csv = io.StringIO("MD,Inclination\n100,2.0\n")

        with self.assertRaises(SurveyDataError) as ctx:
            load_survey(csv, 'csv')

        self.assertIn('Missing required columns: tvd', str(ctx.exception))

    def test_blank_value_names_the_row(self):
        csv = io.StringIO("md,tvd,inclination\n100,99,2\n200,,3\n")

        with self.assertRaises(SurveyDataError) as ctx:
            load_survey(csv)

        self.assertIn('Row 2', str(ctx.exception))
        self.assertIn('tvd', str(ctx.exception))

    def test_header_only_file(self):
        with self.assertRaises(SurveyDataError):
            load_survey(io.StringIO("md,tvd,inclination\n"))

    def test_records(self):
        points = survey_from_records([{'md': 0, 'tvd': 0, 'inclination': 0.5}])

        self.assertEqual(points[0].to_dict(), {'md': 0.0, 'tvd': 0.0, 'inclination': 0.5})
        self.assertEqual(survey_from_records([]), [])

    def test_records_must_be_a_list_of_objects(self):
        with self.assertRaises(SurveyDataError):
            survey_from_records(5)

        with self.assertRaises(SurveyDataError) as ctx:
            survey_from_records([{'md': 0, 'tvd': 0, 'inclination': 0.5}, 'deep'])

        self.assertIn('Row 2', str(ctx.exception))


class ValidateSurveyTests(unittest.TestCase):

    def test_valid_survey(self):
        points = [SurveyPoint(100, 100, 1.0), SurveyPoint(2000, 1950, 15.0)]

        self.assertEqual(validate_survey_points(points), [])

    def test_empty_survey(self):
        errors = validate_survey_points([])

        self.assertEqual(len(errors), 2)
        self.assertTrue(all(e['row'] == 0 for e in errors))

    def test_point_errors(self):
        points = [SurveyPoint(1000, 1100, 0.0), SurveyPoint(900, 800, 90.0)]

        errors = validate_survey_points(points)
        fields = [(e['row'], e['field']) for e in errors]

        self.assertIn((1, 'inclination'), fields)
        self.assertIn((1, 'tvd'), fields)
        self.assertIn((2, 'inclination'), fields)
        self.assertIn((2, 'md'), fields)
        self.assertEqual(len(errors), 4)


if __name__ == '__main__':
    unittest.main()

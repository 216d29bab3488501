# src/calculators/survey_data/loader.py
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd

from src.models.survey_point import SurveyPoint

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ('md', 'tvd', 'inclination')
EXCEL_SUFFIXES = ('.xlsx', '.xls')


class SurveyDataError(ValueError):
    """Raised when a survey table cannot be read."""
    pass


def _infer_file_type(source, file_type: Optional[str]) -> str:
    if file_type:
        return file_type.lower()

    name = source if isinstance(source, (str, Path)) else getattr(source, 'name', '') or ''
    return 'excel' if str(name).lower().endswith(EXCEL_SUFFIXES) else 'csv'


def survey_from_dataframe(df: pd.DataFrame) -> List[SurveyPoint]:
    """
    Convert a survey table to SurveyPoint objects.

    Column headers are matched case-insensitively; extra columns are ignored.
    """
    if df.empty:
        raise SurveyDataError('Survey file is empty or has no data rows')

    columns = {str(col).strip().lower(): col for col in df.columns}
    missing = [col for col in REQUIRED_COLUMNS if col not in columns]
    if missing:
        found = ', '.join(str(col) for col in df.columns)
        raise SurveyDataError(f"Missing required columns: {', '.join(missing)}. Found columns: {found}")

    numeric = pd.DataFrame({
        col: pd.to_numeric(df[columns[col]], errors='coerce') for col in REQUIRED_COLUMNS
    })

    points = []
    for i, row in numeric.iterrows():
        blank = [col for col in REQUIRED_COLUMNS if pd.isna(row[col])]
        if blank:
            raise SurveyDataError(f"Row {i + 1}: missing or non-numeric {', '.join(blank)}")
        points.append(SurveyPoint(md=float(row['md']), tvd=float(row['tvd']), inclination=float(row['inclination'])))

    return points


def load_survey(source, file_type: Optional[str] = None) -> List[SurveyPoint]:
    """
    Read a deviation survey from a CSV or Excel file.

    Args:
        source: Path or file-like object
        file_type: 'csv' or 'excel'; inferred from the file name when omitted

    Returns:
        List of SurveyPoint in file order
    """
    kind = _infer_file_type(source, file_type)
    try:
        if kind == 'excel':
            df = pd.read_excel(source)
        else:
            df = pd.read_csv(source)
    except (ValueError, OSError, pd.errors.ParserError) as e:
        logger.error(f"Error reading survey file: {e}")
        raise SurveyDataError(f"Could not read survey file: {e}") from e

    return survey_from_dataframe(df)


def survey_from_records(records: Sequence[Dict]) -> List[SurveyPoint]:
    """Survey points from JSON-style records such as {'md': .., 'tvd': .., 'inclination': ..}."""
    if not records:
        return []
    if not isinstance(records, (list, tuple)):
        raise SurveyDataError("survey_data must be a list of points")
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise SurveyDataError(f"Row {index + 1}: expected an object with md, tvd and inclination")
    return survey_from_dataframe(pd.DataFrame.from_records(list(records)))


def validate_survey_points(points: Sequence[SurveyPoint]) -> List[Dict]:
    """
    Validate a survey for the hydraulics calculation.

    Returns:
        List of {'row', 'field', 'message'} errors, empty when valid.
        Row 0 refers to the survey as a whole.
    """
    errors = []

    if len(points) == 0:
        errors.append({'row': 0, 'field': 'general', 'message': 'At least one survey point is required'})
    if len(points) < 2:
        errors.append({'row': 0, 'field': 'general',
                       'message': 'At least 2 survey points are required for proper analysis'})

    for index, point in enumerate(points):
        row = index + 1
        if point.md < 0:
            errors.append({'row': row, 'field': 'md', 'message': 'MD must be a positive value'})
        if point.tvd < 0:
            errors.append({'row': row, 'field': 'tvd', 'message': 'TVD must be a positive value'})
        if point.inclination <= 0 or point.inclination >= 90:
            errors.append({'row': row, 'field': 'inclination',
                           'message': 'Inclination must be greater than 0° and less than 90°'})
        if point.tvd > point.md:
            errors.append({'row': row, 'field': 'tvd', 'message': 'TVD cannot be greater than MD'})

    for i in range(1, len(points)):
        if points[i].md <= points[i - 1].md:
            errors.append({'row': i + 1, 'field': 'md', 'message': 'MD must be increasing'})

    return errors

# src/routes/survey_data.py
import logging

from flask import Blueprint, jsonify, request

from src.calculators.survey_data.loader import (
    SurveyDataError, load_survey, survey_from_records, validate_survey_points
)

logger = logging.getLogger(__name__)

survey_data_bp = Blueprint('survey_data', __name__)


@survey_data_bp.route('/parse', methods=['POST'])
def parse_survey():
    """
    Parse and validate a deviation survey

    Accepts either a multipart upload with a "file" field (.csv, .xlsx, .xls)
    with MD, TVD and Inclination columns, or JSON:
    {
        "survey_data": [
            {"md": float, "tvd": float, "inclination": float},   # feet, feet, degrees
            ...
        ]
    }

    Returns:
    {
        "survey_data": [...],
        "is_valid": bool,
        "errors": [{"row": int, "field": str, "message": str}, ...]
    }
    """
    try:
        if 'file' in request.files:
            upload = request.files['file']
            filename = (upload.filename or '').lower()
            points = load_survey(upload.stream, 'excel' if filename.endswith(('.xlsx', '.xls')) else 'csv')
        else:
            data = request.get_json(silent=True)
            if not isinstance(data, dict) or 'survey_data' not in data:
                return jsonify({'error': 'Missing required field: survey_data'}), 400
            points = survey_from_records(data['survey_data'])
    except SurveyDataError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error parsing survey data: {str(e)}")
        return jsonify({'error': f'Server error: {str(e)}'}), 500

    errors = validate_survey_points(points)
    return jsonify({
        'survey_data': [point.to_dict() for point in points],
        'is_valid': len(errors) == 0,
        'errors': errors
    })

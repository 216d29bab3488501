# src/routes/nodal_analysis.py
import logging

from flask import Blueprint, jsonify, request

from src.calculators.interval_merge.sanitizer import is_finite_number
from src.calculators.operating_point.bubble_point import select_bubble_point
from src.calculators.operating_point.intersection import (
    CurveValidationError, analyze_intersection, interpolate_pressure, operating_points_by_method
)

logger = logging.getLogger(__name__)

nodal_analysis_bp = Blueprint('nodal_analysis', __name__)


@nodal_analysis_bp.route('/operating-point', methods=['POST'])
def operating_point():
    """
    Intersect an IPR curve with one VLP curve or a VLP curve per correlation

    Expected input format:
    {
        "ipr_curve": [{"rate": float, "pressure": float}, ...],   # STB/d, psia
        "vlp_curve": [{"rate": float, "pressure": float}, ...],   # or
        "vlp_curves": {"<method>": [{"rate": float, "pressure": float}, ...]},
        "rate": float                                             # optional, STB/d
    }

    Returns (single curve):
    {
        "operating_point": {"rate": float, "pressure": float} | null,
        "intersections": [...],
        "ipr_range": {...},
        "vlp_range": {...},
        "pressures_at_rate": {"ipr": float | null, "vlp": float | null}   # when rate is given
    }

    Returns (per correlation):
    {
        "operating_points": {"<method>": {"rate": float, "pressure": float}, ...}
    }
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Invalid JSON data in request'}), 400

        if 'ipr_curve' not in data:
            return jsonify({'error': 'Missing required field: ipr_curve'}), 400
        if 'vlp_curve' not in data and 'vlp_curves' not in data:
            return jsonify({'error': 'Missing required field: vlp_curve'}), 400

        rate = data.get('rate')
        if rate is not None and not is_finite_number(rate):
            return jsonify({'error': 'rate must be a finite number'}), 400

        try:
            if 'vlp_curves' in data:
                if not isinstance(data['vlp_curves'], dict):
                    return jsonify({'error': 'vlp_curves must be an object keyed by method'}), 400
                points = operating_points_by_method(data['ipr_curve'], data['vlp_curves'])
                return jsonify({'operating_points': {m: p.to_dict() for m, p in points.items()}})

            analysis = analyze_intersection(data['ipr_curve'], data['vlp_curve'])
            if rate is not None:
                analysis['pressures_at_rate'] = {
                    'ipr': interpolate_pressure(rate, data['ipr_curve']),
                    'vlp': interpolate_pressure(rate, data['vlp_curve'])
                }
        except CurveValidationError as e:
            return jsonify({'error': f'Validation error: {str(e)}'}), 400

        if analysis['operating_point'] is None:
            logger.info("IPR and VLP curves do not intersect")

        return jsonify(analysis)

    except Exception as e:
        logger.error(f"Error finding operating point: {str(e)}")
        return jsonify({'error': f'Server error: {str(e)}'}), 500


@nodal_analysis_bp.route('/bubble-point', methods=['POST'])
def bubble_point():
    """
    Select the bubble point from a PVT calculation response

    Expected input format:
    {
        "bubble_points": {"<correlation>": float, ...},   # optional, psia
        "recommended": string,                           # optional correlation name
        "result": {...},                                 # optional raw PVT response
        "gor": float                                     # scf/STB
    }

    Returns:
    {
        "bubble_point": float   # psia
    }
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Invalid JSON data in request'}), 400

        if not is_finite_number(data.get('gor')):
            return jsonify({'error': 'gor must be a finite number'}), 400

        bubble_points = data.get('bubble_points')
        if bubble_points is not None and not isinstance(bubble_points, dict):
            return jsonify({'error': 'bubble_points must be an object keyed by correlation'}), 400

        value = select_bubble_point(bubble_points, data.get('recommended'), data.get('result'), data['gor'])
        return jsonify({'bubble_point': value})

    except Exception as e:
        logger.error(f"Error selecting bubble point: {str(e)}")
        return jsonify({'error': f'Server error: {str(e)}'}), 500

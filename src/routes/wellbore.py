# src/routes/wellbore.py
import logging

from flask import Blueprint, current_app, jsonify, request

from src.calculators.interval_merge.merger import merge_wellbore
from src.calculators.interval_merge.sanitizer import MergePolicy, validate_number
from src.calculators.wellbore_design.recalc import recalc_top_bottom_bha, recalc_top_bottom_casing
from src.calculators.wellbore_design.validations import parse_component_rows, parse_drafts, validate_rows
from src.models.component_row import InvalidComponentRowError, RowSource

logger = logging.getLogger(__name__)

wellbore_bp = Blueprint('wellbore', __name__)


@wellbore_bp.route('/segments', methods=['POST'])
def merged_segments():
    """
    Merge BHA and casing rows into flow segments from the nodal point to surface

    Expected input format:
    {
        "bha_rows": [
            {
                "top": float,                # feet
                "bottom": float,             # feet
                "internal_diameter": float,  # inches (idVal also accepted)
                ...                          # id, type, desc, od, count, length
            },
            ...
        ],
        "casing_rows": [...],                # same shape as bha_rows
        "nodal_point": float,                # feet
        "policy": "drop" | "report" | "strict"   # optional, defaults to app config
    }

    Returns:
    {
        "segments": [{"start_depth": float, "end_depth": float, "diameter": float}, ...],
        "nodal_point": float,
        "dropped_rows": [{"source": str, "index": int, "reason": str}, ...]   # report policy only
    }
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Invalid JSON data in request'}), 400

        policy = MergePolicy.parse(data.get('policy', current_app.config.get('MERGE_INVALID_ROW_POLICY')))

        try:
            result = merge_wellbore(
                data.get('bha_rows'),
                data.get('casing_rows'),
                data.get('nodal_point'),
                policy
            )
        except InvalidComponentRowError as e:
            return jsonify({'error': str(e), 'source': e.source, 'index': e.index}), 400

        return jsonify(result.to_dict(include_dropped=policy == MergePolicy.REPORT))

    except Exception as e:
        logger.error(f"Error merging wellbore segments: {str(e)}")
        return jsonify({'error': f'Server error: {str(e)}'}), 500


@wellbore_bp.route('/recalculate', methods=['POST'])
def recalculate_rows():
    """
    Recalculate top and bottom depths of a BHA or casing table

    Expected input format:
    {
        "kind": "bha" | "casing",
        "rows": [...],                 # component rows in string order
        "initial_top": float,          # feet (optional, default 0)
        "drafts": {                    # optional unsaved edits keyed by row id
            "<row id>": {"count": int, "length": float, "bottom": float, ...}
        }
    }
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Invalid JSON data in request'}), 400

        for field in ('kind', 'rows'):
            if field not in data:
                return jsonify({'error': f'Missing required field: {field}'}), 400

        try:
            kind = RowSource(data['kind'])
        except ValueError:
            return jsonify({'error': f"Unsupported kind: {data['kind']}"}), 400

        try:
            rows = parse_component_rows(data['rows'], kind.value)
            drafts = parse_drafts(data.get('drafts'))
        except ValueError as e:
            return jsonify({'error': str(e)}), 400

        initial_top = validate_number(data.get('initial_top', 0.0), 0.0, 'initial_top')

        if kind == RowSource.BHA:
            recalculated = recalc_top_bottom_bha(rows, initial_top, drafts)
        else:
            recalculated = recalc_top_bottom_casing(rows, initial_top, drafts)

        return jsonify({'rows': [row.to_dict() for row in recalculated]})

    except Exception as e:
        logger.error(f"Error recalculating design rows: {str(e)}")
        return jsonify({'error': f'Server error: {str(e)}'}), 500


@wellbore_bp.route('/validate', methods=['POST'])
def validate_design_rows():
    """
    Validate a BHA or casing table

    Expected input format:
    {
        "rows": [...]
    }

    Returns:
    {
        "is_valid": bool,
        "errors": [str, ...]
    }
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or 'rows' not in data:
            return jsonify({'error': 'Missing required field: rows'}), 400

        try:
            rows = parse_component_rows(data['rows'])
        except InvalidComponentRowError as e:
            return jsonify({'error': str(e)}), 400

        messages = validate_rows(rows)
        if messages:
            logger.info(f"Design table has {len(messages)} validation issue(s)")

        return jsonify({'is_valid': len(messages) == 0, 'errors': messages})

    except Exception as e:
        logger.error(f"Error validating design rows: {str(e)}")
        return jsonify({'error': f'Server error: {str(e)}'}), 500

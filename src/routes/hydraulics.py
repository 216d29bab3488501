# src/routes/hydraulics.py
import logging

from flask import Blueprint, current_app, jsonify, request

from src.calculators.hydraulics.payload import (
    DEFAULT_METHOD, build_hydraulics_input, segments_summary, validate_hydraulics_input
)
from src.calculators.interval_merge.sanitizer import sanitize_nodal_point, validate_number
from src.calculators.survey_data.loader import SurveyDataError, survey_from_records
from src.calculators.wellbore_design.validations import parse_component_rows
from src.models.component_row import InvalidComponentRowError, RowSource
from src.models.wellbore_design import WellboreDesign

logger = logging.getLogger(__name__)

hydraulics_bp = Blueprint('hydraulics', __name__)


@hydraulics_bp.route('/payload', methods=['POST'])
def hydraulics_payload():
    """
    Build the validated request body for the external hydraulics calculation

    Expected input format:
    {
        "bha_rows": [...],               # component rows
        "casing_rows": [...],            # component rows
        "initial_top": float,            # feet (optional)
        "nodal_point": float,            # feet
        "fluid_properties": {
            "oil_rate": float,           # STB/d
            "water_rate": float,         # STB/d
            "gas_rate": float,           # Mscf/d
            "oil_gravity": float,        # API
            "gas_gravity": float,
            "bubble_point": float,       # psia
            "temperature_gradient": float,
            "surface_temperature": float
        },
        "survey_data": [{"md": float, "tvd": float, "inclination": float}, ...],
        "surface_pressure": float,       # psia
        "deviation": float,              # degrees (optional)
        "method": string,                # optional, defaults to hagedorn-brown
        "roughness": float,              # optional
        "depth_steps": int               # optional
    }
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Invalid JSON data in request'}), 400

        for field in ('fluid_properties', 'survey_data', 'surface_pressure'):
            if field not in data:
                return jsonify({'error': f'Missing required field: {field}'}), 400

        if not isinstance(data['fluid_properties'], dict):
            return jsonify({'error': 'fluid_properties must be an object'}), 400

        try:
            design = WellboreDesign(
                bha_rows=parse_component_rows(data.get('bha_rows'), RowSource.BHA.value),
                casing_rows=parse_component_rows(data.get('casing_rows'), RowSource.CASING.value),
                initial_top=validate_number(data.get('initial_top', 0.0), 0.0, 'initial_top')
            )
            design.set_nodal_depth(sanitize_nodal_point(data.get('nodal_point')))
            survey = survey_from_records(data['survey_data'])
        except (InvalidComponentRowError, SurveyDataError) as e:
            return jsonify({'error': str(e)}), 400

        if design.is_design_required:
            return jsonify({'error': 'A wellbore design is required before running hydraulics',
                            'design_required': True}), 400

        segments = design.segments(current_app.config.get('MERGE_INVALID_ROW_POLICY'))
        logger.debug(f"Hydraulics segments: {segments_summary(segments)}")

        payload = build_hydraulics_input(
            fluid_properties=data['fluid_properties'],
            segments=segments,
            survey_data=survey,
            surface_pressure=data['surface_pressure'],
            deviation=data.get('deviation', 0.0),
            method=data.get('method', DEFAULT_METHOD),
            roughness=data.get('roughness'),
            depth_steps=data.get('depth_steps')
        )

        try:
            validate_hydraulics_input(payload)
        except ValueError as e:
            return jsonify({'error': f'Validation error: {str(e)}'}), 400

        return jsonify(payload)

    except Exception as e:
        logger.error(f"Error building hydraulics payload: {str(e)}")
        return jsonify({'error': f'Server error: {str(e)}'}), 500

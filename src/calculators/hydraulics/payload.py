# src/calculators/hydraulics/payload.py
import logging
from typing import Any, Dict, List, Optional, Sequence

from src.calculators.interval_merge.sanitizer import is_finite_number
from src.models.segment import Segment
from src.models.survey_point import SurveyPoint

logger = logging.getLogger(__name__)

DEFAULT_ROUGHNESS = 0.0006  # inches
DEFAULT_DEPTH_STEPS = 100
DEFAULT_WATER_GRAVITY = 1.0
DEFAULT_METHOD = 'hagedorn-brown'

FLUID_REQUIRED_FIELDS = (
    'oil_rate',
    'water_rate',
    'gas_rate',
    'oil_gravity',
    'gas_gravity',
    'bubble_point',
    'temperature_gradient',
    'surface_temperature',
    'wct',
    'gor',
    'glr',
)

MAIN_REQUIRED_FIELDS = ('method', 'surface_pressure', 'bhp_mode', 'target_bhp')


def _as_dict(item) -> Dict[str, Any]:
    return item.to_dict() if hasattr(item, 'to_dict') else dict(item)


def build_wellbore_geometry(
    segments: Sequence[Segment],
    deviation: float,
    roughness: Optional[float] = None,
    depth_steps: Optional[int] = None
) -> Dict[str, Any]:
    """Wellbore geometry block of the hydraulics request. Negative deviation is clamped to 0."""
    if deviation is None:
        deviation = 0.0
    elif is_finite_number(deviation):
        deviation = max(float(deviation), 0.0)

    return {
        'pipe_segments': [_as_dict(segment) for segment in segments],
        'deviation': deviation,
        'roughness': DEFAULT_ROUGHNESS if roughness is None else roughness,
        'depth_steps': DEFAULT_DEPTH_STEPS if depth_steps is None else depth_steps
    }


def complete_fluid_properties(fluid_properties: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fill water gravity and the ratio fields the form does not collect.

    Rates are STB/d for liquids and Mscf/d for gas, so GOR and GLR come out
    in scf/STB. Ratios that would divide by zero are left out.
    """
    fluid = dict(fluid_properties)
    if fluid.get('water_gravity') is None:
        fluid['water_gravity'] = DEFAULT_WATER_GRAVITY

    oil = fluid.get('oil_rate')
    water = fluid.get('water_rate')
    gas = fluid.get('gas_rate')
    if not all(is_finite_number(v) for v in (oil, water, gas)):
        return fluid

    liquid = oil + water
    if fluid.get('wct') is None and liquid > 0:
        fluid['wct'] = water / liquid
    if fluid.get('gor') is None and oil > 0:
        fluid['gor'] = gas * 1000.0 / oil
    if fluid.get('glr') is None and liquid > 0:
        fluid['glr'] = gas * 1000.0 / liquid
    return fluid


def build_hydraulics_input(
    fluid_properties: Dict[str, Any],
    segments: Sequence[Segment],
    survey_data: Sequence[SurveyPoint],
    surface_pressure: float,
    deviation: float = 0.0,
    method: str = DEFAULT_METHOD,
    roughness: Optional[float] = None,
    depth_steps: Optional[int] = None,
    bhp_mode: str = 'calculate',
    target_bhp: float = 0.0
) -> Dict[str, Any]:
    """
    Assemble the request body for the external hydraulics calculation.

    Returns:
        Payload dictionary; call validate_hydraulics_input before sending it
    """
    return {
        'fluid_properties': complete_fluid_properties(fluid_properties),
        'wellbore_geometry': build_wellbore_geometry(segments, deviation, roughness, depth_steps),
        'method': method,
        'surface_pressure': surface_pressure,
        'bhp_mode': bhp_mode,
        'target_bhp': target_bhp,
        'survey_data': [_as_dict(point) for point in survey_data]
    }


def validate_hydraulics_input(payload: Dict[str, Any]) -> None:
    """
    Check a hydraulics payload before it leaves the service.

    Raises:
        ValueError: describing the first problem found
    """
    fluid = payload.get('fluid_properties') or {}
    for field in FLUID_REQUIRED_FIELDS:
        if fluid.get(field) is None:
            raise ValueError(f"Missing required field in fluid_properties: {field}")

    geometry = payload.get('wellbore_geometry') or {}
    segments = geometry.get('pipe_segments')
    if not segments:
        raise ValueError('pipe_segments is required and must have at least one element')

    if not is_finite_number(geometry.get('deviation')):
        raise ValueError('deviation must be a number')

    for i, segment in enumerate(segments):
        if not all(is_finite_number(segment.get(k)) for k in ('start_depth', 'end_depth', 'diameter')):
            raise ValueError(f"pipe_segments[{i}] must have numeric start_depth, end_depth and diameter")

    for field in MAIN_REQUIRED_FIELDS:
        if payload.get(field) is None:
            raise ValueError(f"Missing required field: {field}")

    survey = payload.get('survey_data')
    if not survey:
        raise ValueError('survey_data is required and must have at least one element')

    for i, point in enumerate(survey):
        if not all(is_finite_number(point.get(k)) for k in ('md', 'tvd', 'inclination')):
            raise ValueError(f"survey_data[{i}] must have numeric md, tvd and inclination")


def segments_summary(segments: Sequence[Segment]) -> List[str]:
    """One line per segment, used for log output."""
    return [f"{s.start_depth:.1f}-{s.end_depth:.1f} ft @ {s.diameter:.3f} in" for s in segments]

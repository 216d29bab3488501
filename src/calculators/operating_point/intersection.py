# src/calculators/operating_point/intersection.py
import logging
import numbers
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from src.models.analysis_point import AnalysisPoint

logger = logging.getLogger(__name__)

EPSILON = 1e-10
RATE_TOLERANCE = 1e-6
PRESSURE_TOLERANCE = 1e-6


class CurveValidationError(ValueError):
    """Raised when an IPR or VLP curve cannot be intersected."""
    pass


@dataclass
class Intersection:
    """A crossing of two piecewise-linear curves."""
    point: AnalysisPoint
    segment_index_1: int  # Segment of the first curve
    segment_index_2: int  # Segment of the second curve
    t1: float             # Position along segment 1, 0..1
    t2: float             # Position along segment 2, 0..1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'point': self.point.to_dict(),
            'segment_index_1': self.segment_index_1,
            'segment_index_2': self.segment_index_2,
            't1': self.t1,
            't2': self.t2
        }


def _coordinates(point) -> Optional[tuple]:
    if isinstance(point, AnalysisPoint):
        return point.rate, point.pressure
    if isinstance(point, dict):
        return point.get('rate'), point.get('pressure')
    return None


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_curve(curve: Sequence, name: str) -> np.ndarray:
    """
    Check a curve and convert it to an (n, 2) array of rate, pressure.

    Points may be AnalysisPoint objects or {'rate', 'pressure'} dictionaries.
    The curve must be monotonic in rate, either increasing or decreasing.

    Raises:
        CurveValidationError: naming the curve and the offending point
    """
    if not isinstance(curve, (list, tuple)):
        raise CurveValidationError(f"{name} must be a list of points")
    if len(curve) < 2:
        raise CurveValidationError(f"{name} must have at least 2 points")

    coordinates = []
    for i, point in enumerate(curve):
        values = _coordinates(point)
        if values is None or not all(_is_real(v) for v in values):
            raise CurveValidationError(f"Invalid point in {name} at index {i}")
        if not all(np.isfinite(v) for v in values):
            raise CurveValidationError(f"Non-finite values in {name} at index {i}")
        coordinates.append(values)

    points = np.array(coordinates, dtype=float)

    steps = np.diff(points[:, 0])
    increasing = not np.any(steps < -RATE_TOLERANCE)
    decreasing = not np.any(steps > RATE_TOLERANCE)
    if not increasing and not decreasing:
        raise CurveValidationError(f"{name} must be ordered by rate")

    return points


def _segment_intersections(curve1: np.ndarray, curve2: np.ndarray) -> List[Intersection]:
    """Intersect every segment of curve1 with every segment of curve2 (Cramer's rule)."""
    p1 = curve1[:-1, np.newaxis, :]
    d1 = (curve1[1:] - curve1[:-1])[:, np.newaxis, :]
    p2 = curve2[np.newaxis, :-1, :]
    d2 = (curve2[1:] - curve2[:-1])[np.newaxis, :, :]

    # 2D cross product; near zero means parallel or coincident segments
    det = d1[..., 0] * d2[..., 1] - d1[..., 1] * d2[..., 0]
    offset = p2 - p1

    with np.errstate(divide='ignore', invalid='ignore'):
        t1 = (offset[..., 0] * d2[..., 1] - offset[..., 1] * d2[..., 0]) / det
        t2 = (offset[..., 0] * d1[..., 1] - offset[..., 1] * d1[..., 0]) / det

    hits = (
        (np.abs(det) >= EPSILON)
        & (t1 >= -EPSILON) & (t1 <= 1 + EPSILON)
        & (t2 >= -EPSILON) & (t2 <= 1 + EPSILON)
    )

    intersections = []
    for i, j in zip(*np.nonzero(hits)):
        point = curve1[i] + t1[i, j] * d1[i, 0]
        alternate = curve2[j] + t2[i, j] * d2[0, j]

        if (abs(point[0] - alternate[0]) > RATE_TOLERANCE
                or abs(point[1] - alternate[1]) > PRESSURE_TOLERANCE):
            point = (point + alternate) / 2

        intersections.append(Intersection(
            point=AnalysisPoint(rate=float(point[0]), pressure=float(point[1])),
            segment_index_1=int(i),
            segment_index_2=int(j),
            t1=float(np.clip(t1[i, j], 0.0, 1.0)),
            t2=float(np.clip(t2[i, j], 0.0, 1.0))
        ))

    return intersections


def find_all_intersections(curve1: Sequence, curve2: Sequence) -> List[Intersection]:
    """
    Find every crossing between two piecewise-linear curves.

    Results are ordered by segment of curve1, then segment of curve2. A
    crossing exactly on a shared vertex is reported once per segment pair.
    """
    return _segment_intersections(validate_curve(curve1, 'curve 1'), validate_curve(curve2, 'curve 2'))


def find_operating_point(ipr: Sequence, vlp: Sequence) -> Optional[AnalysisPoint]:
    """
    Find the well operating point where the VLP curve crosses the IPR curve.

    When the curves cross more than once the crossing with the highest
    positive rate is the stable one for a producing well.

    Args:
        ipr: Inflow performance curve points
        vlp: Vertical lift performance curve points

    Returns:
        The operating point, or None when the curves do not cross

    Raises:
        CurveValidationError: if either curve is malformed
    """
    ipr_points = validate_curve(ipr, 'IPR')
    vlp_points = validate_curve(vlp, 'VLP')

    intersections = _segment_intersections(vlp_points, ipr_points)
    if not intersections:
        return None

    if len(intersections) > 1:
        intersections = sorted(intersections, key=lambda item: item.point.rate, reverse=True)
        positive = [item for item in intersections if item.point.rate > 0]
        if positive:
            return positive[0].point

    return intersections[0].point


def operating_points_by_method(ipr: Sequence, vlp_curves: Dict[str, Sequence]) -> Dict[str, AnalysisPoint]:
    """
    Operating point for each VLP correlation.

    Methods whose curve is malformed or never crosses the IPR are left out.

    Raises:
        CurveValidationError: if the IPR curve itself is malformed
    """
    validate_curve(ipr, 'IPR')

    operating_points = {}
    for method, vlp in vlp_curves.items():
        try:
            point = find_operating_point(ipr, vlp)
        except CurveValidationError as e:
            logger.warning(f"Skipping VLP curve for {method}: {str(e)}")
            continue
        if point is not None:
            operating_points[method] = point

    return operating_points


def interpolate_pressure(target_rate: float, curve: Sequence) -> Optional[float]:
    """
    Linearly interpolate the pressure of a curve at a given rate.

    The bracketing segment is found by binary search, so the curve may be
    ordered by increasing or decreasing rate.

    Returns:
        Interpolated pressure, or None when the rate is outside the curve
    """
    points = validate_curve(curve, 'curve')
    rates, pressures = points[:, 0], points[:, 1]

    if rates[-1] <= rates[0]:
        rates, pressures = rates[::-1], pressures[::-1]

    if target_rate < rates[0] or target_rate > rates[-1]:
        return None

    left = int(np.searchsorted(rates, target_rate, side='right')) - 1
    left = min(max(left, 0), len(rates) - 2)
    right = left + 1

    if abs(rates[right] - rates[left]) < RATE_TOLERANCE:
        return float((pressures[left] + pressures[right]) / 2)

    t = (target_rate - rates[left]) / (rates[right] - rates[left])
    return float(pressures[left] + t * (pressures[right] - pressures[left]))


def _curve_range(points: np.ndarray) -> Dict[str, float]:
    return {
        'min_rate': float(np.min(points[:, 0])),
        'max_rate': float(np.max(points[:, 0])),
        'min_pressure': float(np.min(points[:, 1])),
        'max_pressure': float(np.max(points[:, 1]))
    }


def analyze_intersection(ipr: Sequence, vlp: Sequence) -> Dict[str, Any]:
    """
    Summarize how an IPR and a VLP curve relate.

    Returns:
        Dictionary with the operating point, every crossing and the rate and
        pressure range of each curve
    """
    ipr_points = validate_curve(ipr, 'IPR')
    vlp_points = validate_curve(vlp, 'VLP')

    operating_point = find_operating_point(ipr, vlp)

    return {
        'operating_point': operating_point.to_dict() if operating_point else None,
        'intersections': [item.to_dict() for item in _segment_intersections(vlp_points, ipr_points)],
        'ipr_range': _curve_range(ipr_points),
        'vlp_range': _curve_range(vlp_points)
    }

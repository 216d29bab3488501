# src/calculators/operating_point/bubble_point.py
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_PB_CORRELATION = 'standing'
MAX_ESTIMATED_BUBBLE_POINT = 5000.0  # psia


def estimate_bubble_point(gor: float) -> float:
    """Rough bubble point in psia from GOR in scf/STB, capped at 5000 psia."""
    return min(gor * 0.5, MAX_ESTIMATED_BUBBLE_POINT)


def select_bubble_point(
    bubble_points: Optional[Dict[str, float]],
    recommended: Optional[str],
    result: Optional[Dict[str, Any]],
    computed_gor: float
) -> float:
    """
    Pick the bubble point to carry into the hydraulics request.

    Order of preference:
        1. bubble_points[recommended], or the Standing correlation when no
           method is recommended
        2. the Standing value, then the first value in bubble_points
        3. result['metadata']['bubble_point']
        4. result['results'][0]['pb']
        5. an estimate from the GOR

    Args:
        bubble_points: Bubble point per PVT correlation, psia
        recommended: Correlation recommended by the PVT calculation
        result: Raw PVT calculation response
        computed_gor: GOR in scf/STB used for the estimate

    Returns:
        Bubble point in psia
    """
    if bubble_points:
        method = recommended if recommended is not None else DEFAULT_PB_CORRELATION
        if method in bubble_points:
            return bubble_points[method]

        fallback = bubble_points.get(DEFAULT_PB_CORRELATION)
        if fallback is None:
            fallback = next(iter(bubble_points.values()), None)
        if fallback is not None:
            return fallback

    result = result if isinstance(result, dict) else {}

    metadata = result.get('metadata')
    if isinstance(metadata, dict) and metadata.get('bubble_point') is not None:
        return metadata['bubble_point']

    rows = result.get('results')
    if isinstance(rows, list) and rows and isinstance(rows[0], dict) and rows[0].get('pb') is not None:
        return rows[0]['pb']

    estimate = estimate_bubble_point(computed_gor)
    logger.warning(f"No valid bubble point found, using estimate: {estimate}")
    return estimate

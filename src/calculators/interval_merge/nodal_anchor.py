# src/calculators/interval_merge/nodal_anchor.py
import logging
from typing import List, Optional, Sequence

from src.calculators.interval_merge.coverage import governing_row
from src.calculators.interval_merge.sanitizer import is_valid_segment, sanitize_nodal_point
from src.models.component_row import ComponentRow
from src.models.segment import Segment

logger = logging.getLogger(__name__)


def find_nodal_interval_index(intervals: Sequence[Segment], nodal_point: float) -> int:
    """
    Index of the interval the output starts from.

    Intervals are ordered deepest first. Preference order:
        1. the interval containing the nodal point (start < nodal <= end)
        2. the first interval lying entirely above it (end <= nodal)
        3. the deepest interval
    """
    for i, interval in enumerate(intervals):
        if interval.contains(nodal_point):
            return i

    for i, interval in enumerate(intervals):
        if interval.end_depth <= nodal_point:
            return i

    return 0


def adapt_intervals_for_nodal_point(
    intervals: Optional[Sequence[Segment]],
    nodal_point,
    rows: Optional[Sequence[ComponentRow]]
) -> List[Segment]:
    """
    Re-anchor merged intervals so the output starts at the nodal point.

    Intervals deeper than the nodal point are not returned. When the starting
    interval extends below the nodal point, it is replaced by a synthesized
    interval from its top down to the nodal point whose diameter is resolved
    again over the rows covering that shorter range.

    Args:
        intervals: Merged intervals, deepest first
        nodal_point: Analysis depth in feet
        rows: Valid component rows used to resolve the synthesized interval

    Returns:
        Segments from the nodal point toward surface
    """
    nodal_point = sanitize_nodal_point(nodal_point)
    valid_intervals = [interval for interval in (intervals or []) if is_valid_segment(interval)]
    if not valid_intervals:
        return []

    index = find_nodal_interval_index(valid_intervals, nodal_point)
    first = valid_intervals[index]

    adapted = []
    if first.end_depth > nodal_point:
        selected = governing_row(rows or [], first.start_depth, nodal_point)
        if selected is not None:
            synthesized = Segment(
                start_depth=first.start_depth,
                end_depth=nodal_point,
                diameter=float(selected.internal_diameter)
            )
            if is_valid_segment(synthesized) and synthesized.length > 0:
                adapted.append(synthesized)
                # The synthesized piece replaces the part of the interval above the nodal point
                index += 1
        else:
            logger.debug(f"Nodal point {nodal_point} lies outside the covered depths")

    adapted.extend(valid_intervals[index:])
    return adapted

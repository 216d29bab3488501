# src/calculators/interval_merge/merger.py
import logging
from typing import Any, List, Optional, Sequence

import numpy as np

from src.calculators.interval_merge.coverage import governing_row
from src.calculators.interval_merge.nodal_anchor import adapt_intervals_for_nodal_point
from src.calculators.interval_merge.sanitizer import (
    MergePolicy, is_valid_segment, sanitize_nodal_point, sanitize_rows
)
from src.models.component_row import ComponentRow, RowSource
from src.models.merge_result import MergeResult
from src.models.segment import Segment

logger = logging.getLogger(__name__)


def collect_boundary_depths(rows: Sequence[ComponentRow], nodal_point: float) -> np.ndarray:
    """Unique tops, bottoms and the nodal point, deepest first."""
    depths = [row.top for row in rows] + [row.bottom for row in rows]
    if nodal_point >= 0:
        depths.append(nodal_point)

    points = np.unique(np.asarray(depths, dtype=float))
    points = points[np.isfinite(points) & (points >= 0)]
    return points[::-1]


def build_elementary_intervals(rows: Sequence[ComponentRow], boundaries: np.ndarray) -> List[Segment]:
    """
    One segment per pair of adjacent boundaries that some row covers.

    Args:
        rows: Valid component rows
        boundaries: Boundary depths, deepest first

    Returns:
        Segments ordered deepest first, each carrying the smallest covering diameter
    """
    intervals = []
    for bottom, top in zip(boundaries[:-1], boundaries[1:]):
        if bottom <= top:
            continue

        selected = governing_row(rows, top, bottom)
        if selected is None:
            # Gap in the design, nothing to flow through here
            continue

        segment = Segment(
            start_depth=float(top),
            end_depth=float(bottom),
            diameter=float(selected.internal_diameter)
        )
        if is_valid_segment(segment):
            intervals.append(segment)

    return intervals


def merge_wellbore(
    bha_rows: Optional[Sequence[Any]],
    casing_rows: Optional[Sequence[Any]],
    nodal_point: Any,
    policy: Any = None
) -> MergeResult:
    """
    Merge BHA and casing rows into governing-diameter segments with diagnostics.

    Both tables may overlap each other (casing surrounds the BHA over parts of
    the well). Wherever more than one row covers a depth, the one with the
    smallest internal diameter governs, since it restricts the flow area.

    Args:
        bha_rows: BHA rows (ComponentRow objects or dictionaries)
        casing_rows: Casing rows (ComponentRow objects or dictionaries)
        nodal_point: Analysis depth in feet
        policy: MergePolicy or its string value; defaults to 'drop'

    Returns:
        MergeResult with segments from the nodal point toward surface

    Raises:
        InvalidComponentRowError: Only when policy is 'strict'
    """
    policy = MergePolicy.parse(policy)
    safe_nodal_point = sanitize_nodal_point(nodal_point)
    result = MergeResult(nodal_point=safe_nodal_point)

    valid_bha, dropped_bha = sanitize_rows(bha_rows, RowSource.BHA.value, policy)
    valid_casing, dropped_casing = sanitize_rows(casing_rows, RowSource.CASING.value, policy)
    for dropped in dropped_bha + dropped_casing:
        result.add_dropped_row(dropped)

    if not valid_bha and not valid_casing:
        if result.dropped_rows:
            logger.warning("No valid rows found after validation")
        return result

    # Stable sort keeps BHA rows ahead of casing rows on equal bottoms
    all_rows = sorted(valid_bha + valid_casing, key=lambda row: row.bottom, reverse=True)

    boundaries = collect_boundary_depths(all_rows, safe_nodal_point)
    if len(boundaries) < 2:
        logger.warning("Insufficient depth points to create intervals")
        return result

    intervals = build_elementary_intervals(all_rows, boundaries)
    return result.set_segments(adapt_intervals_for_nodal_point(intervals, safe_nodal_point, all_rows))


def merge_bha_and_casing_rows(
    bha_rows: Optional[Sequence[Any]],
    casing_rows: Optional[Sequence[Any]],
    nodal_point: Any,
    policy: Any = None
) -> List[Segment]:
    """Segments from the nodal point toward surface; empty when there is no usable geometry."""
    return merge_wellbore(bha_rows, casing_rows, nodal_point, policy).segments

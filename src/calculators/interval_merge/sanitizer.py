# src/calculators/interval_merge/sanitizer.py
import logging
import math
import numbers
from enum import Enum
from typing import Any, List, Optional, Tuple

from src.models.component_row import ComponentRow, InvalidComponentRowError
from src.models.merge_result import DroppedRow

logger = logging.getLogger(__name__)


class MergePolicy(Enum):
    """How the merger treats rows that cannot be used as geometry."""
    DROP = "drop"        # filter silently (logged)
    REPORT = "report"    # filter and return diagnostics
    STRICT = "strict"    # raise on the first invalid row

    @classmethod
    def parse(cls, value) -> "MergePolicy":
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.DROP
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning(f"Unknown merge policy '{value}', using 'drop'")
            return cls.DROP


def is_finite_number(value: Any) -> bool:
    """True for real, finite numbers. Booleans are not depths."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def validate_number(value: Any, default: float, field_name: str = "field") -> float:
    """Return value when it is a finite number, otherwise default."""
    if not is_finite_number(value):
        logger.warning(f"Invalid numeric value for {field_name}: {value}, using default: {default}")
        return default
    return float(value)


def sanitize_nodal_point(nodal_point: Any) -> float:
    """Finite, non-negative nodal depth; anything else collapses to 0."""
    value = validate_number(nodal_point, 0.0, 'nodal_point')
    if value < 0:
        logger.warning(f"Negative nodal point {value} clamped to 0")
        return 0.0
    return value


def row_rejection_reason(row: Any) -> Optional[str]:
    """
    Explain why a row cannot take part in the merge.

    Returns None for a usable row.
    """
    if row is None:
        return "row is null"

    if isinstance(row, dict):
        row = ComponentRow.from_dict(row)
    elif not isinstance(row, ComponentRow):
        return f"row is not an object ({type(row).__name__})"

    bad_fields = [
        name for name, value in (
            ('top', row.top),
            ('bottom', row.bottom),
            ('internal_diameter', row.internal_diameter)
        )
        if not is_finite_number(value)
    ]
    if bad_fields:
        return f"non-numeric or non-finite {', '.join(bad_fields)}"

    if row.internal_diameter <= 0:
        return f"internal diameter ({row.internal_diameter}) must be positive"
    if row.top < 0:
        return f"top ({row.top}) is negative"
    if row.bottom < row.top:
        return f"bottom ({row.bottom}) is less than top ({row.top})"

    return None


def is_valid_row(row: Any) -> bool:
    return row_rejection_reason(row) is None


def is_valid_segment(segment) -> bool:
    """Segments must have finite depths, end >= start and a positive diameter."""
    if segment is None:
        return False
    return (
        is_finite_number(segment.start_depth) and
        is_finite_number(segment.end_depth) and
        is_finite_number(segment.diameter) and
        segment.diameter > 0 and
        segment.end_depth >= segment.start_depth
    )


def sanitize_rows(
    rows: Any,
    source: str,
    policy: MergePolicy = MergePolicy.DROP
) -> Tuple[List[ComponentRow], List[DroppedRow]]:
    """
    Keep the usable rows of one design table.

    Args:
        rows: Sequence of ComponentRow objects or dictionaries (None is allowed)
        source: Table name used in diagnostics ('bha' or 'casing')
        policy: Invalid-row policy

    Returns:
        Tuple of (valid rows as ComponentRow, dropped row diagnostics)

    Raises:
        InvalidComponentRowError: Only under MergePolicy.STRICT
    """
    if rows is None:
        return [], []
    if isinstance(rows, (str, bytes, dict)) or not hasattr(rows, '__iter__'):
        logger.warning(f"Ignoring {source} rows of unsupported type {type(rows).__name__}")
        return [], []

    valid = []
    dropped = []
    for index, row in enumerate(rows):
        reason = row_rejection_reason(row)
        if reason is None:
            parsed = ComponentRow.from_dict(row) if isinstance(row, dict) else row
            valid.append(parsed)
            continue

        if policy == MergePolicy.STRICT:
            raise InvalidComponentRowError(
                f"Invalid {source} row at index {index}: {reason}",
                index=index,
                source=source
            )

        logger.warning(f"Invalid {source} row at index {index}: {reason}")
        dropped.append(DroppedRow(source, index, reason))

    return valid, dropped

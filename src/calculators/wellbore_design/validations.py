# src/calculators/wellbore_design/validations.py
from typing import Any, Dict, List, Optional, Sequence

from src.calculators.interval_merge.sanitizer import is_finite_number
from src.models.component_row import (
    ComponentRow, InvalidComponentRowError, INTERNAL_DIAMETER_KEYS, TYPE_OPTIONS
)

# Draft fields that must carry a finite number when present
DRAFT_NUMERIC_FIELDS = ('top', 'bottom', 'count', 'length', 'od') + INTERNAL_DIAMETER_KEYS


def parse_component_row(data: Dict[str, Any], index: Optional[int] = None, source: Optional[str] = None) -> ComponentRow:
    """
    Strictly parse a row coming from the design table.

    Raises:
        InvalidComponentRowError: naming the offending field and row
    """
    label = f"Row {index + 1}" if index is not None else "Row"

    if not isinstance(data, dict):
        raise InvalidComponentRowError(f"{label}: expected an object", index, source)

    diameter_key = next((key for key in INTERNAL_DIAMETER_KEYS if key in data), 'internal_diameter')
    for field in ('top', 'bottom', diameter_key):
        if field not in data:
            raise InvalidComponentRowError(f"{label}: missing required field: {field}", index, source)
        if not is_finite_number(data[field]):
            raise InvalidComponentRowError(f"{label}: {field} must be a finite number", index, source)

    for field in ('od', 'count', 'length'):
        if field in data and not is_finite_number(data[field]):
            raise InvalidComponentRowError(f"{label}: {field} must be a finite number", index, source)

    row = ComponentRow.from_dict(data)
    if row.internal_diameter <= 0:
        raise InvalidComponentRowError(f"{label}: internal diameter must be positive", index, source)
    if row.top < 0:
        raise InvalidComponentRowError(f"{label}: top must not be negative", index, source)
    if row.bottom < row.top:
        raise InvalidComponentRowError(
            f"{label}: bottom ({row.bottom}) is less than top ({row.top})", index, source
        )
    if row.count < 0:
        raise InvalidComponentRowError(f"{label}: count must not be negative", index, source)
    if source in TYPE_OPTIONS and row.type and row.type not in TYPE_OPTIONS[source]:
        raise InvalidComponentRowError(f"{label}: unknown {source} component type: {row.type}", index, source)

    return row


def parse_component_rows(rows: Sequence[Dict[str, Any]], source: Optional[str] = None) -> List[ComponentRow]:
    if rows is None:
        return []
    if not isinstance(rows, (list, tuple)):
        raise InvalidComponentRowError(f"{source or 'component'} rows must be a list", source=source)
    return [parse_component_row(data, i, source) for i, data in enumerate(rows)]


def parse_drafts(drafts: Any) -> Dict[str, Dict[str, Any]]:
    """
    Check unsaved row edits before they are applied.

    Drafts map a row id to the fields being changed. Null values mean
    "unchanged" and are allowed.

    Raises:
        ValueError: when the mapping or one of its numeric fields is malformed
    """
    if drafts is None:
        return {}
    if not isinstance(drafts, dict):
        raise ValueError("drafts must be an object keyed by row id")

    for row_id, draft in drafts.items():
        if not isinstance(draft, dict):
            raise ValueError(f"Draft for row {row_id}: expected an object")
        for field in DRAFT_NUMERIC_FIELDS:
            value = draft.get(field)
            if value is not None and not is_finite_number(value):
                raise ValueError(f"Draft for row {row_id}: {field} must be a finite number")

    return drafts


def validate_rows(rows: Sequence[ComponentRow]) -> List[str]:
    """
    Check a design table for OD/ID inconsistencies and tight overlaps.

    An overlap is acceptable only when the deeper row fits inside the bore
    of the row it overlaps.

    Returns:
        List of human-readable messages, empty when the table is consistent
    """
    messages = []
    for idx, row in enumerate(rows):
        if row.od < row.internal_diameter:
            messages.append(
                f"Row {idx + 1}: OD ({row.od}) is smaller than ID ({row.internal_diameter})"
            )

        for j in range(idx):
            other = rows[j]
            if row.top < other.bottom and other.internal_diameter < row.od:
                messages.append(
                    f"Row {idx + 1} overlaps with Row {j + 1} but ID {other.internal_diameter} < OD {row.od}"
                )

    return messages

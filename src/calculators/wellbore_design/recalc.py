# src/calculators/wellbore_design/recalc.py
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

from src.models.component_row import ComponentRow, INTERNAL_DIAMETER_KEYS

# Fields a draft may override besides top and bottom
DRAFT_FIELDS = ('count', 'length', 'od', 'internal_diameter', 'type', 'desc')


def _normalize_draft(draft: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Map JSON aliases onto ComponentRow field names."""
    if not draft:
        return {}
    normalized = dict(draft)
    for key in INTERNAL_DIAMETER_KEYS:
        if key in normalized and key != 'internal_diameter':
            normalized.setdefault('internal_diameter', normalized.pop(key))
    return normalized


def _apply_draft(row: ComponentRow, draft: Dict[str, Any]) -> ComponentRow:
    changes = {name: draft[name] for name in DRAFT_FIELDS if draft.get(name) is not None}
    return replace(row, **changes) if changes else row


def _place_row(row: ComponentRow, top: float, draft: Dict[str, Any]) -> ComponentRow:
    """
    Set top and derive bottom.

    A drafted bottom wins and the joint length is derived from it;
    otherwise bottom = top + count * length.
    """
    length = row.length
    if draft.get('bottom') is not None:
        bottom = draft['bottom']
        if row.count > 0:
            length = (bottom - top) / row.count
    else:
        bottom = top + row.count * length

    return replace(row, top=top, bottom=bottom, length=length)


def recalc_top_bottom_bha(
    rows: Sequence[ComponentRow],
    initial_top: float = 0.0,
    drafts: Optional[Dict[str, Dict[str, Any]]] = None
) -> List[ComponentRow]:
    """
    Recalculate top and bottom depths of a BHA string.

    The first row keeps its drafted or own top; every following row hangs
    directly below the previous one.

    Args:
        rows: BHA rows in string order
        initial_top: Hanger depth in feet
        drafts: Unsaved edits keyed by row id

    Returns:
        New list of rows, the input is left untouched
    """
    if not rows:
        return []
    drafts = drafts or {}

    recalculated = []
    last_bottom = rows[0].top if rows[0].top >= initial_top else initial_top

    for index, row in enumerate(rows):
        draft = _normalize_draft(drafts.get(row.id))
        merged = _apply_draft(row, draft)

        if index == 0:
            top = draft['top'] if draft.get('top') is not None else row.top
        else:
            top = last_bottom

        placed = _place_row(merged, top, draft)
        last_bottom = placed.bottom
        recalculated.append(placed)

    return recalculated


def recalc_top_bottom_casing(
    rows: Sequence[ComponentRow],
    initial_top: float = 0.0,
    drafts: Optional[Dict[str, Dict[str, Any]]] = None
) -> List[ComponentRow]:
    """
    Recalculate top and bottom depths of a casing program.

    The first string starts at initial_top. A following string that fits
    inside the previous one (previous ID larger than its OD) is a liner or
    nested string and keeps its own top; otherwise it continues from the
    previous bottom.
    """
    if not rows:
        return []
    drafts = drafts or {}

    recalculated = []
    last_bottom = initial_top

    for index, row in enumerate(rows):
        draft = _normalize_draft(drafts.get(row.id))
        merged = _apply_draft(row, draft)

        if index == 0:
            top = initial_top
        elif rows[index - 1].internal_diameter > merged.od:
            top = draft['top'] if draft.get('top') is not None else row.top
        else:
            top = last_bottom

        placed = _place_row(merged, top, draft)
        last_bottom = placed.bottom
        recalculated.append(placed)

    return recalculated

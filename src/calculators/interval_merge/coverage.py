# src/calculators/interval_merge/coverage.py
from typing import List, Optional, Sequence

from src.models.component_row import ComponentRow


def covering_rows(rows: Sequence[ComponentRow], top: float, bottom: float) -> List[ComponentRow]:
    """
    Rows whose depth range overlaps (top, bottom) with positive length.

    Between two adjacent boundary depths every row is either fully across the
    interval or entirely outside it, so overlap and full coverage coincide.
    """
    return [row for row in rows if row.top < bottom and row.bottom > top]


def governing_row(rows: Sequence[ComponentRow], top: float, bottom: float) -> Optional[ComponentRow]:
    """The covering row with the smallest internal diameter, first one on ties."""
    candidates = covering_rows(rows, top, bottom)
    if not candidates:
        return None
    return min(candidates, key=lambda row: row.internal_diameter)

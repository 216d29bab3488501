# src/models/wellbore_design.py
from dataclasses import dataclass, field
from typing import List

from src.calculators.interval_merge.merger import merge_bha_and_casing_rows
from src.models.component_row import ComponentRow
from src.models.segment import Segment


@dataclass
class WellboreDesign:
    """Current BHA and casing tables plus the analysis depths that go with them."""
    bha_rows: List[ComponentRow] = field(default_factory=list)
    casing_rows: List[ComponentRow] = field(default_factory=list)
    initial_top: float = 0.0            # Hanger depth in feet
    nodal_depth: float = 0.0            # Nodal point in feet
    average_tubing_joints: float = 0.0

    def __post_init__(self):
        self.set_initial_top(self.initial_top)

    @property
    def is_design_required(self) -> bool:
        """No geometry has been entered yet."""
        return len(self.bha_rows) == 0 and len(self.casing_rows) == 0

    def set_initial_top(self, top: float) -> None:
        self.initial_top = top if top >= 0 else 0.0
        # The nodal point can never sit above the hanger
        if self.nodal_depth < self.initial_top:
            self.nodal_depth = self.initial_top

    def set_nodal_depth(self, depth: float) -> None:
        self.nodal_depth = max(depth, self.initial_top)

    def set_average_tubing_joints(self, joints: float) -> None:
        self.average_tubing_joints = max(joints, 0)

    def add_bha_row(self, row: ComponentRow) -> None:
        self.bha_rows = self.bha_rows + [row]

    def remove_bha_row(self, row_id: str) -> None:
        self.bha_rows = [row for row in self.bha_rows if row.id != row_id]

    def add_casing_row(self, row: ComponentRow) -> None:
        self.casing_rows = self.casing_rows + [row]

    def remove_casing_row(self, row_id: str) -> None:
        self.casing_rows = [row for row in self.casing_rows if row.id != row_id]

    def segments(self, policy=None) -> List[Segment]:
        """Merged flow segments for the current snapshot of the design."""
        if self.is_design_required:
            return []
        return merge_bha_and_casing_rows(self.bha_rows, self.casing_rows, self.nodal_depth, policy)

# src/models/segment.py
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Segment:
    """A depth interval of the wellbore with its governing internal diameter."""
    start_depth: float  # Top of the interval in feet
    end_depth: float    # Bottom of the interval in feet
    diameter: float     # Governing internal diameter in inches

    @property
    def length(self) -> float:
        return self.end_depth - self.start_depth

    def contains(self, depth: float) -> bool:
        """True when depth lies in (start_depth, end_depth]."""
        return self.start_depth < depth <= self.end_depth

    def to_dict(self) -> Dict[str, float]:
        return {
            'start_depth': float(self.start_depth),
            'end_depth': float(self.end_depth),
            'diameter': float(self.diameter)
        }

# src/models/survey_point.py
from dataclasses import dataclass, asdict
from typing import Dict


@dataclass
class SurveyPoint:
    """Deviation survey station used by the hydraulics calculation."""
    md: float           # Measured depth in feet
    tvd: float          # True vertical depth in feet
    inclination: float  # Inclination in degrees

    def to_dict(self) -> Dict[str, float]:
        return {k: float(v) for k, v in asdict(self).items()}

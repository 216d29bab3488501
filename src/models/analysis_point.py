# src/models/analysis_point.py
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class AnalysisPoint:
    """A point on an IPR or VLP curve."""
    rate: float      # Liquid rate in STB/d
    pressure: float  # Flowing bottom-hole pressure in psia

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisPoint":
        return cls(rate=data.get('rate'), pressure=data.get('pressure'))

    def to_dict(self) -> Dict[str, float]:
        return {'rate': float(self.rate), 'pressure': float(self.pressure)}

# src/models/component_row.py
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class RowSource(Enum):
    """Which design table a component row comes from."""
    BHA = "bha"
    CASING = "casing"


CASING_TYPE_OPTIONS = ['Casing Joint', 'Casing Pup Joint']

BHA_TYPE_OPTIONS = [
    'Anchor/Catcher',
    'Bull Plug',
    'Centralizer',
    'Cross Over',
    'Cup Packer',
    'ESP',
    'Fish',
    'Float Collar',
    'Float Shoe',
    'Gas Lift Bumper Spring Assembly',
    'Gas Lift Mandrel',
    'Gas Lift Orifice',
    'Gas Separator',
    'Jet Pump',
    'Marker Joint',
    'Mechanical Seating Nipple',
    'On/Off Tool',
    'Packer',
    'Perforated Joint',
    'Perforated Sub',
    'Profile Nipple',
    'Pump Seating Nipple',
    'Rod Pump Gas Anchor',
    'Sand Screen',
    'Sand Separator',
    'Shear Tool',
    'Slotted Joint',
    'Slotted Seating Nipple',
    'Slotted Sub',
    'Toe Sleeve',
    'Tubing Hanger',
    'Tubing Pup Joint',
    'Tubing',
]

TYPE_OPTIONS = {
    RowSource.BHA.value: BHA_TYPE_OPTIONS,
    RowSource.CASING.value: CASING_TYPE_OPTIONS,
}

# Accepted JSON keys for the internal diameter, first match wins
INTERNAL_DIAMETER_KEYS = ('internal_diameter', 'internalDiameter', 'idVal')


class InvalidComponentRowError(ValueError):
    """Raised when a component row cannot be used as wellbore geometry."""

    def __init__(self, message, index=None, source=None):
        super().__init__(message)
        self.index = index
        self.source = source


@dataclass
class ComponentRow:
    """A single BHA or casing element of the wellbore design table."""
    top: float                # Top depth in feet
    bottom: float             # Bottom depth in feet
    internal_diameter: float  # Internal diameter in inches
    id: str = ""
    type: str = ""
    desc: str = ""
    od: float = 0.0           # Outer diameter in inches
    count: int = 0            # Number of joints
    length: float = 0.0       # Length per joint in feet
    size: Optional[str] = None

    @property
    def total_length(self) -> float:
        return self.bottom - self.top

    @property
    def is_casing(self) -> bool:
        return self.type in CASING_TYPE_OPTIONS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComponentRow":
        """
        Build a row from a JSON-style dictionary without validating values.

        Missing numeric fields come through as None so the sanitizer can
        reject them; use parse_component_row for strict ingestion.
        """
        internal_diameter = None
        for key in INTERNAL_DIAMETER_KEYS:
            if key in data:
                internal_diameter = data[key]
                break

        return cls(
            top=data.get('top'),
            bottom=data.get('bottom'),
            internal_diameter=internal_diameter,
            id=str(data.get('id', '')),
            type=data.get('type', ''),
            desc=data.get('desc', ''),
            od=data.get('od', 0.0),
            count=data.get('count', 0),
            length=data.get('length', 0.0),
            size=data.get('size')
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

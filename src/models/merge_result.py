# src/models/merge_result.py

import numpy as np


class DroppedRow:
    """A component row excluded from the merge, with the reason it was excluded"""

    def __init__(self, source, index, reason):
        self.source = source
        self.index = index
        self.reason = reason

    def to_dict(self):
        return {'source': self.source, 'index': self.index, 'reason': self.reason}

    def __repr__(self):
        return f"DroppedRow(source={self.source!r}, index={self.index}, reason={self.reason!r})"


class MergeResult:
    """Class representing the result of a BHA/casing merge"""

    def __init__(self, nodal_point=0.0):
        self.nodal_point = nodal_point
        self.segments = []
        self.dropped_rows = []

    def set_segments(self, segments):
        """Set the merged segments"""
        self.segments = list(segments)
        return self

    def add_dropped_row(self, dropped):
        """Record a row the sanitizer excluded"""
        self.dropped_rows.append(dropped)
        return self

    def to_dict(self, include_dropped=True):
        """Convert the result to a dictionary with Python native types"""
        def convert_numpy(obj):
            if isinstance(obj, np.integer):
                return int(obj)
            elif isinstance(obj, np.floating):
                return float(obj)
            elif isinstance(obj, (np.ndarray, list)):
                return [convert_numpy(i) for i in obj]
            elif isinstance(obj, dict):
                return {k: convert_numpy(v) for k, v in obj.items()}
            else:
                return obj

        result = {
            'nodal_point': convert_numpy(self.nodal_point),
            'segments': [segment.to_dict() for segment in self.segments]
        }
        if include_dropped:
            result['dropped_rows'] = convert_numpy([d.to_dict() for d in self.dropped_rows])
        return result

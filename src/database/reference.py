"""
Reference quantities used to non-dimensionalize forces and moments.
"""

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class ReferenceQuantities:
    """Aerodynamic reference geometry of a vehicle."""

    area: float = 1.0       # Reference area
    length: float = 1.0     # Reference length (chord or diameter)
    moment_reference_point: Tuple[float, float, float] = field(
        default=(0.0, 0.0, 0.0))

    def __post_init__(self):
        if not self.area > 0.0:
            raise ValueError(f"Reference area must be > 0, got {self.area}")
        if not self.length > 0.0:
            raise ValueError(f"Reference length must be > 0, got {self.length}")
        point = tuple(float(x) for x in self.moment_reference_point)
        if len(point) != 3:
            raise ValueError(
                f"Moment reference point must have 3 components, got {len(point)}")
        object.__setattr__(self, 'moment_reference_point', point)

    def force_to_coefficient(self, force, dynamic_pressure: float) -> np.ndarray:
        """C_F = F / (q S)"""
        return np.asarray(force, dtype=float) / (dynamic_pressure * self.area)

    def moment_to_coefficient(self, moment, dynamic_pressure: float) -> np.ndarray:
        """C_M = M / (q S L)"""
        return np.asarray(moment, dtype=float) / (
            dynamic_pressure * self.area * self.length)

"""
Coefficient sources: strategies that produce the coefficient vector of a
grid point.

A source is composed with a CoefficientGrid rather than derived from it.
Table-backed sources read the grid's coefficient table; generated sources
fill that table once, synchronously, before the grid is published for
reading.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Sequence

import numpy as np
from loguru import logger

from src.constants import N_COEFFICIENTS
from .errors import GridOrderError
from .grid import CoefficientGrid
from .reference import ReferenceQuantities
from .roles import IndependentVariable

GridPoint = Dict[IndependentVariable, float]


class CoefficientSource(ABC):
    """
    Interface of every coefficient strategy.

    Parameters
    ----------
    grid : CoefficientGrid
        Grid whose index tuples are accepted by get_coefficients().
    reference : ReferenceQuantities, optional
        Reference geometry for strategies that normalize raw forces.
    """

    def __init__(self, grid: CoefficientGrid,
                 reference: Optional[ReferenceQuantities] = None):
        self.grid = grid
        self.reference = reference if reference is not None else ReferenceQuantities()

    @abstractmethod
    def get_coefficients(self, indices: Sequence[int]) -> np.ndarray:
        """Coefficient vector of the grid point identified by indices."""


class TabulatedCoefficientSource(CoefficientSource):
    """Looks coefficients up in a grid table populated elsewhere (e.g. loaded data)."""

    def get_coefficients(self, indices: Sequence[int]) -> np.ndarray:
        return self.grid.get_table_entry(self.grid.to_flat_index(indices))


class GeneratedCoefficientSource(CoefficientSource):
    """
    Base class for strategies that compute coefficients per grid point.

    Subclasses implement compute_coefficients(); generate() evaluates it at
    every grid point and stores the results in the grid table.
    """

    arity: int = N_COEFFICIENTS

    def __init__(self, grid: CoefficientGrid,
                 reference: Optional[ReferenceQuantities] = None):
        super().__init__(grid, reference)
        self._generated_revision: Optional[int] = None

    @abstractmethod
    def compute_coefficients(self, point: GridPoint) -> Sequence[float]:
        """Coefficient vector at one grid point (sample values keyed by role)."""

    def generate(self) -> np.ndarray:
        """
        Fill the coefficient table of the grid.

        Returns
        -------
        ndarray, shape (case_count, arity)
            Read-only copy of the generated table.
        """
        grid = self.grid
        if grid.has_unset_samples():
            raise GridOrderError("All sample points must be set before generation")
        grid.validate_monotonic()
        self._generated_revision = None
        grid.allocate_table(self.arity)

        logger.info(f"Generating {grid.case_count} cases with {type(self).__name__}")
        for offset, indices in enumerate(grid.iter_indices()):
            grid.set_coefficients(offset, self.compute_coefficients(grid.grid_point(indices)))

        self._generated_revision = grid.table_revision
        logger.info("Coefficient generation complete")
        return grid.coefficient_table

    @property
    def is_generated(self) -> bool:
        """True while the grid table still holds this source's generated values."""
        return (self._generated_revision is not None
                and self._generated_revision == self.grid.table_revision)

    def get_coefficients(self, indices: Sequence[int]) -> np.ndarray:
        if self._generated_revision is None:
            raise GridOrderError(f"{type(self).__name__}.generate() has not been run")
        if self._generated_revision != self.grid.table_revision:
            raise GridOrderError(
                "Grid table changed after generation (reshaped, reallocated or "
                "overwritten); regenerate the table")
        return self.grid.get_table_entry(self.grid.to_flat_index(indices))


class CallableCoefficientSource(GeneratedCoefficientSource):
    """Generated source wrapping a plain function f(point) -> coefficients."""

    def __init__(self, grid: CoefficientGrid,
                 function: Callable[[GridPoint], Sequence[float]],
                 arity: int = N_COEFFICIENTS,
                 reference: Optional[ReferenceQuantities] = None):
        super().__init__(grid, reference)
        self.function = function
        self.arity = arity

    def compute_coefficients(self, point: GridPoint) -> Sequence[float]:
        return self.function(point)

"""
N-dimensional coefficient grid over independent flow variables.

The grid owns the sample points of each independent variable and a flat
table with one coefficient vector per grid point. Index tuples map to
table rows in row-major order (last declared variable varies fastest):

    offset = sum_v indices[v] * prod_{k>v} point_count[k]

Lifecycle
---------
1. set_variable_count(n)         - fixes the number of slots, resets everything
2. assign_role(role, slot)       - optional, binds Mach/AoA/... to a slot
3. set_point_count(slot, n)      - (re)allocates one slot, drops the table
4. set_sample_point(slot, i, x)  - writes the sample values
5. allocate_table(arity)         - sizes the table to case_count rows
6. set_coefficients(...)         - populated by a generation strategy
"""

import itertools
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
from loguru import logger

from src.constants import MAX_INDEPENDENT_VARIABLES, N_COEFFICIENTS
from .errors import (
    CoefficientIndexError,
    GridOrderError,
    SamplePointIndexError,
    VariableIndexError,
)
from .roles import IndependentVariable

VariableKey = Union[int, str, IndependentVariable]
TableLocation = Union[int, Sequence[int]]


def _is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


class CoefficientGrid:
    """
    Rectangular sampling lattice of independent variables plus the flat
    coefficient table indexed by it.

    Variables are addressed either by slot index or, once assigned with
    assign_role(), by IndependentVariable (or its string name).
    """

    def __init__(self):
        self._variable_count: int = 0
        self._point_counts: List[int] = []
        self._sample_points: List[Optional[np.ndarray]] = []
        self._role_slots: Dict[IndependentVariable, int] = {}
        self._table: Optional[np.ndarray] = None
        self._populated: Optional[np.ndarray] = None
        # Bumped on every table allocation, write or invalidation
        self._table_revision: int = 0

    # =========================================================================
    # Shape declaration
    # =========================================================================

    def set_variable_count(self, n: int) -> None:
        """
        Declare the number of independent variables.

        Any previously declared point counts, sample points, role
        assignments and coefficients are discarded.
        """
        if not _is_integer(n) or not 0 <= n <= MAX_INDEPENDENT_VARIABLES:
            raise ValueError(
                f"variable count must be an integer in [0, {MAX_INDEPENDENT_VARIABLES}], got {n!r}")

        if self._variable_count > 0:
            logger.debug(f"Resetting coefficient grid ({self._variable_count} -> {n} variables)")

        self._variable_count = int(n)
        self._point_counts = [0] * self._variable_count
        self._sample_points = [None] * self._variable_count
        self._role_slots = {}
        self._drop_table()

    def assign_role(self, role: Union[str, IndependentVariable], slot: int) -> None:
        """Bind a reserved independent variable to a slot index."""
        self._require_variables()
        role = IndependentVariable.parse(role)
        self._check_slot(slot)

        for other, other_slot in self._role_slots.items():
            if other_slot == slot and other is not role:
                raise ValueError(f"Slot {slot} is already assigned to {other.value}")

        self._role_slots[role] = int(slot)

    def set_point_count(self, variable: VariableKey, n: int) -> None:
        """
        Declare the number of sample points of one variable.

        Reallocates the variable's sample storage (all values unset) and
        invalidates the coefficient table.
        """
        slot = self._resolve(variable)
        if not _is_integer(n) or n < 1:
            raise ValueError(f"point count must be a positive integer, got {n!r}")

        self._point_counts[slot] = int(n)
        self._sample_points[slot] = np.full(int(n), np.nan)
        self._drop_table()

    # =========================================================================
    # Sample point access
    # =========================================================================

    def set_sample_point(self, variable: VariableKey, position: int, value: float) -> None:
        slot = self._resolve(variable)
        points = self._points_of(slot)
        self._check_position(slot, position)
        points[position] = float(value)

    def get_sample_point(self, variable: VariableKey, position: int) -> float:
        slot = self._resolve(variable)
        points = self._points_of(slot)
        self._check_position(slot, position)
        return float(points[position])

    def set_sample_points(self, variable: VariableKey, values: Sequence[float]) -> None:
        """Declare the point count from len(values) and write all of them."""
        values = np.asarray(values, dtype=float).ravel()
        self.set_point_count(variable, len(values))
        slot = self._resolve(variable)
        self._sample_points[slot][:] = values

    def get_sample_points(self, variable: VariableKey) -> np.ndarray:
        """Copy of all sample points of a variable."""
        slot = self._resolve(variable)
        return self._points_of(slot).copy()

    # Named accessors for the reserved variables

    def set_number_of_mach_points(self, n: int) -> None:
        self.set_point_count(IndependentVariable.MACH, n)

    def set_number_of_angle_of_attack_points(self, n: int) -> None:
        self.set_point_count(IndependentVariable.ANGLE_OF_ATTACK, n)

    def set_number_of_angle_of_sideslip_points(self, n: int) -> None:
        self.set_point_count(IndependentVariable.ANGLE_OF_SIDESLIP, n)

    def set_number_of_reynolds_number_points(self, n: int) -> None:
        self.set_point_count(IndependentVariable.REYNOLDS, n)

    def get_number_of_mach_points(self) -> int:
        return self.get_point_count(IndependentVariable.MACH)

    def get_number_of_angle_of_attack_points(self) -> int:
        return self.get_point_count(IndependentVariable.ANGLE_OF_ATTACK)

    def get_number_of_angle_of_sideslip_points(self) -> int:
        return self.get_point_count(IndependentVariable.ANGLE_OF_SIDESLIP)

    def get_number_of_reynolds_number_points(self) -> int:
        return self.get_point_count(IndependentVariable.REYNOLDS)

    def set_mach_point(self, position: int, value: float) -> None:
        self.set_sample_point(IndependentVariable.MACH, position, value)

    def set_angle_of_attack_point(self, position: int, value: float) -> None:
        self.set_sample_point(IndependentVariable.ANGLE_OF_ATTACK, position, value)

    def set_angle_of_sideslip_point(self, position: int, value: float) -> None:
        self.set_sample_point(IndependentVariable.ANGLE_OF_SIDESLIP, position, value)

    def set_reynolds_number_point(self, position: int, value: float) -> None:
        self.set_sample_point(IndependentVariable.REYNOLDS, position, value)

    def get_mach_point(self, position: int) -> float:
        return self.get_sample_point(IndependentVariable.MACH, position)

    def get_angle_of_attack_point(self, position: int) -> float:
        return self.get_sample_point(IndependentVariable.ANGLE_OF_ATTACK, position)

    def get_angle_of_sideslip_point(self, position: int) -> float:
        return self.get_sample_point(IndependentVariable.ANGLE_OF_SIDESLIP, position)

    def get_reynolds_number_point(self, position: int) -> float:
        return self.get_sample_point(IndependentVariable.REYNOLDS, position)

    # =========================================================================
    # Shape queries
    # =========================================================================

    @property
    def variable_count(self) -> int:
        return self._variable_count

    @property
    def point_counts(self) -> Tuple[int, ...]:
        """Declared point count per slot (0 where not yet declared)."""
        return tuple(self._point_counts)

    def get_point_count(self, variable: VariableKey) -> int:
        slot = self._resolve(variable)
        return self._point_counts[slot]

    @property
    def roles(self) -> Dict[IndependentVariable, int]:
        """Role -> slot assignments."""
        return dict(self._role_slots)

    def slot_of(self, role: Union[str, IndependentVariable]) -> int:
        role = IndependentVariable.parse(role)
        if role not in self._role_slots:
            raise VariableIndexError(f"{role.value} is not assigned to a slot")
        return self._role_slots[role]

    def role_of(self, slot: int) -> Optional[IndependentVariable]:
        self._check_slot(slot)
        for role, role_slot in self._role_slots.items():
            if role_slot == slot:
                return role
        return None

    @property
    def is_shape_final(self) -> bool:
        """True once every declared slot has a point count."""
        return self._variable_count > 0 and all(n > 0 for n in self._point_counts)

    @property
    def case_count(self) -> int:
        """Number of grid points (product of point counts), 0 if shape incomplete."""
        if not self.is_shape_final:
            return 0
        return int(np.prod(self._point_counts, dtype=np.int64))

    def has_unset_samples(self) -> bool:
        return any(p is None or np.isnan(p).any() for p in self._sample_points)

    def validate_monotonic(self) -> List[int]:
        """
        Check that every fully populated sample array is strictly monotonic.

        Returns
        -------
        list of int
            Slots whose samples are not strictly monotonic.
        """
        bad = []
        for slot, points in enumerate(self._sample_points):
            if points is None or len(points) < 2 or np.isnan(points).any():
                continue
            diff = np.diff(points)
            if not (np.all(diff > 0) or np.all(diff < 0)):
                bad.append(slot)
                logger.warning(f"Sample points of slot {slot} are not strictly monotonic: {points}")
        return bad

    # =========================================================================
    # Index mapping
    # =========================================================================

    def to_flat_index(self, indices: Sequence[int]) -> int:
        """Map a per-variable index tuple to its row in the coefficient table."""
        self._require_final_shape()
        indices = tuple(indices)
        if len(indices) != self._variable_count:
            raise ValueError(
                f"Expected {self._variable_count} indices, got {len(indices)}")

        offset = 0
        for slot, (index, n) in enumerate(zip(indices, self._point_counts)):
            if not _is_integer(index) or not 0 <= index < n:
                raise SamplePointIndexError(
                    f"Index {index!r} out of range [0, {n}) for variable slot {slot}")
            offset = offset * n + int(index)
        return offset

    def from_flat_index(self, offset: int) -> Tuple[int, ...]:
        """Inverse of to_flat_index."""
        self._check_offset(offset)
        indices = []
        remainder = int(offset)
        for n in reversed(self._point_counts):
            remainder, index = divmod(remainder, n)
            indices.append(index)
        return tuple(reversed(indices))

    def iter_indices(self) -> Iterator[Tuple[int, ...]]:
        """All index tuples in flat-offset order."""
        self._require_final_shape()
        return itertools.product(*(range(n) for n in self._point_counts))

    def sample_values(self, indices: Sequence[int]) -> Tuple[float, ...]:
        """Sample values of every slot at a grid point."""
        self.to_flat_index(indices)
        return tuple(float(self._sample_points[slot][i]) for slot, i in enumerate(indices))

    def grid_point(self, indices: Sequence[int]) -> Dict[IndependentVariable, float]:
        """Sample values at a grid point keyed by role (assigned roles only)."""
        values = self.sample_values(indices)
        return {role: values[slot] for role, slot in self._role_slots.items()}

    # =========================================================================
    # Coefficient table
    # =========================================================================

    def allocate_table(self, arity: int = N_COEFFICIENTS) -> None:
        """Size the coefficient table to case_count rows, all unpopulated."""
        self._require_final_shape()
        if not _is_integer(arity) or arity < 1:
            raise ValueError(f"coefficient arity must be a positive integer, got {arity!r}")

        self._table = np.full((self.case_count, int(arity)), np.nan)
        self._populated = np.zeros(self.case_count, dtype=bool)
        self._table_revision += 1
        logger.debug(f"Allocated coefficient table: {self.case_count} cases x {arity} coefficients")

    @property
    def is_table_allocated(self) -> bool:
        return self._table is not None

    @property
    def is_table_complete(self) -> bool:
        return self._populated is not None and bool(self._populated.all())

    @property
    def arity(self) -> int:
        """Number of coefficients per vector (0 if the table is not allocated)."""
        return 0 if self._table is None else self._table.shape[1]

    @property
    def coefficient_table(self) -> np.ndarray:
        """Read-only copy of the table, shape (case_count, arity)."""
        table = self._require_table().copy()
        table.flags.writeable = False
        return table

    @property
    def table_revision(self) -> int:
        """Counter identifying the current table contents."""
        return self._table_revision

    @property
    def populated_mask(self) -> np.ndarray:
        self._require_table()
        return self._populated.copy()

    def set_coefficients(self, location: TableLocation, vector: Sequence[float]) -> None:
        """Store the coefficient vector of one grid point (index tuple or flat offset)."""
        table = self._require_table()
        offset = self._locate(location)
        vector = np.asarray(vector, dtype=float).ravel()
        if vector.shape[0] != table.shape[1]:
            raise ValueError(
                f"Coefficient vector must have {table.shape[1]} components, got {vector.shape[0]}")
        table[offset] = vector
        self._populated[offset] = True
        self._table_revision += 1

    def get_table_entry(self, location: TableLocation) -> np.ndarray:
        """Copy of the stored coefficient vector of one grid point."""
        table = self._require_table()
        offset = self._locate(location)
        if not self._populated[offset]:
            raise GridOrderError(f"Coefficients at offset {offset} have not been populated")
        return table[offset].copy()

    def clear(self) -> None:
        """Release all sample points and coefficients."""
        self._variable_count = 0
        self._point_counts = []
        self._sample_points = []
        self._role_slots = {}
        self._drop_table()

    def __repr__(self) -> str:
        slots = []
        for slot, n in enumerate(self._point_counts):
            role = next((r.value for r, s in self._role_slots.items() if s == slot), None)
            slots.append(f"{role or slot}:{n}")
        table = f"{self._table.shape}" if self._table is not None else "None"
        return f"CoefficientGrid([{', '.join(slots)}], table={table})"

    # =========================================================================
    # Internal checks
    # =========================================================================

    def _drop_table(self) -> None:
        if self._table is not None:
            logger.debug("Coefficient table invalidated by shape change")
        self._table = None
        self._populated = None
        self._table_revision += 1

    def _require_variables(self) -> None:
        if self._variable_count == 0:
            raise GridOrderError("set_variable_count must be called first")

    def _require_final_shape(self) -> None:
        self._require_variables()
        missing = [slot for slot, n in enumerate(self._point_counts) if n == 0]
        if missing:
            raise GridOrderError(f"Point counts not declared for variable slots {missing}")

    def _require_table(self) -> np.ndarray:
        self._require_final_shape()
        if self._table is None:
            raise GridOrderError("Coefficient table has not been allocated")
        if self._table.shape[0] != self.case_count:
            raise CoefficientIndexError(
                f"Coefficient table has {self._table.shape[0]} rows, "
                f"grid has {self.case_count} cases")
        return self._table

    def _check_slot(self, slot) -> None:
        if not _is_integer(slot) or not 0 <= slot < self._variable_count:
            raise VariableIndexError(
                f"Variable slot {slot!r} out of range [0, {self._variable_count})")

    def _resolve(self, variable: VariableKey) -> int:
        self._require_variables()
        if _is_integer(variable):
            self._check_slot(variable)
            return int(variable)
        try:
            role = IndependentVariable.parse(variable)
        except ValueError:
            raise VariableIndexError(f"Unknown variable {variable!r}") from None
        return self.slot_of(role)

    def _points_of(self, slot: int) -> np.ndarray:
        points = self._sample_points[slot]
        if points is None:
            raise GridOrderError(f"Point count of variable slot {slot} has not been declared")
        return points

    def _check_position(self, slot: int, position) -> None:
        n = self._point_counts[slot]
        if not _is_integer(position) or not 0 <= position < n:
            raise SamplePointIndexError(
                f"Sample position {position!r} out of range [0, {n}) for variable slot {slot}")

    def _check_offset(self, offset) -> None:
        self._require_final_shape()
        if not _is_integer(offset) or not 0 <= offset < self.case_count:
            raise CoefficientIndexError(
                f"Flat offset {offset!r} out of range [0, {self.case_count})")

    def _locate(self, location: TableLocation) -> int:
        if _is_integer(location):
            self._check_offset(location)
            return int(location)
        return self.to_flat_index(location)

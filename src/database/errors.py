"""
Exceptions raised by the coefficient grid and its sources.

Out-of-range accesses derive from IndexError, call-ordering violations
from RuntimeError, so callers can catch either the built-in family or
the grid-specific base class.
"""


class CoefficientGridError(Exception):
    """Base class for all coefficient grid contract violations."""
    pass


class ShapeContractError(CoefficientGridError, IndexError):
    """An index lies outside the declared grid shape."""
    pass


class VariableIndexError(ShapeContractError):
    """Variable slot outside [0, variable_count) or role not assigned."""
    pass


class SamplePointIndexError(ShapeContractError):
    """Sample position outside [0, point_count) of its variable."""
    pass


class CoefficientIndexError(ShapeContractError):
    """Flat offset outside [0, case_count)."""
    pass


class GridOrderError(CoefficientGridError, RuntimeError):
    """Operation called before the grid reached the required stage."""
    pass

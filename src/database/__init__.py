"""
Aerodynamic coefficient database core.

This module provides:
- CoefficientGrid: sample points of the independent variables and the
  flat coefficient table indexed by them
- CoefficientSource and its tabulated / generated strategies
- The error taxonomy for grid contract violations
"""

from .roles import IndependentVariable

from .errors import (
    CoefficientGridError,
    ShapeContractError,
    VariableIndexError,
    SamplePointIndexError,
    CoefficientIndexError,
    GridOrderError,
)

from .grid import CoefficientGrid

from .reference import ReferenceQuantities

from .source import (
    CoefficientSource,
    TabulatedCoefficientSource,
    GeneratedCoefficientSource,
    CallableCoefficientSource,
)

from .empirical import (
    LinearizedAeroSource,
    LinearizedAeroParameters,
    skin_friction_coefficient,
    lift_slope,
)

__all__ = [
    'IndependentVariable',
    # Errors
    'CoefficientGridError',
    'ShapeContractError',
    'VariableIndexError',
    'SamplePointIndexError',
    'CoefficientIndexError',
    'GridOrderError',
    # Grid
    'CoefficientGrid',
    'ReferenceQuantities',
    # Sources
    'CoefficientSource',
    'TabulatedCoefficientSource',
    'GeneratedCoefficientSource',
    'CallableCoefficientSource',
    'LinearizedAeroSource',
    'LinearizedAeroParameters',
    'skin_friction_coefficient',
    'lift_slope',
]

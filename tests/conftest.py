"""
Shared pytest fixtures for the test suite.

This module provides small coefficient grids used across the database,
source, config and I/O tests.
"""

import pytest
import numpy as np
from pathlib import Path

from src.database.grid import CoefficientGrid
from src.database.roles import IndependentVariable


# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_EXAMPLES = PROJECT_ROOT / "config" / "examples"


# =============================================================================
# Reference grid: Mach [0.5, 1.0, 2.0] x AoA [0.0, 5.0]
# =============================================================================

MACH_POINTS = [0.5, 1.0, 2.0]
ALPHA_POINTS = [0.0, 5.0]


def known_vector(offset: int, arity: int = 3) -> np.ndarray:
    """Distinct, easily recognized coefficient vector for a flat offset."""
    return np.array([10.0 * offset + k for k in range(arity)])


@pytest.fixture
def mach_alpha_grid():
    """
    Two-variable grid with declared shape and sample points, no table.
    """
    grid = CoefficientGrid()
    grid.set_variable_count(2)
    grid.assign_role(IndependentVariable.MACH, 0)
    grid.assign_role(IndependentVariable.ANGLE_OF_ATTACK, 1)
    grid.set_point_count(IndependentVariable.MACH, 3)
    grid.set_point_count(IndependentVariable.ANGLE_OF_ATTACK, 2)
    for i, m in enumerate(MACH_POINTS):
        grid.set_mach_point(i, m)
    for i, a in enumerate(ALPHA_POINTS):
        grid.set_angle_of_attack_point(i, a)
    return grid


@pytest.fixture
def populated_grid(mach_alpha_grid):
    """mach_alpha_grid with a 6-entry table holding known_vector(offset)."""
    grid = mach_alpha_grid
    grid.allocate_table(3)
    for offset in range(grid.case_count):
        grid.set_coefficients(offset, known_vector(offset))
    return grid


@pytest.fixture
def four_variable_grid():
    """All reserved roles, assigned in a non-canonical slot order."""
    grid = CoefficientGrid()
    grid.set_variable_count(4)
    grid.assign_role('reynolds', 0)
    grid.assign_role('mach', 1)
    grid.assign_role('angle_of_sideslip', 2)
    grid.assign_role('angle_of_attack', 3)
    grid.set_sample_points('reynolds', [1.0e6, 1.0e7])
    grid.set_sample_points('mach', [0.3, 0.8, 1.5])
    grid.set_sample_points('angle_of_sideslip', [-2.0, 0.0, 2.0, 4.0])
    grid.set_sample_points('angle_of_attack', [0.0, 4.0, 8.0, 12.0, 16.0])
    return grid

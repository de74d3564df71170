"""
Tests for coefficient sources.

Tests verify:
1. Tabulated lookup returns exactly the stored vector
2. Generated sources fill every case once, in offset order
3. Retrieval fails before generation or after a shape change
4. The empirical strategy follows its closed-form model
"""

import math

import numpy as np
import pytest

from src.constants import CD_IDX, CL_IDX, CPITCH_IDX, CS_IDX, CYAW_IDX, N_COEFFICIENTS
from src.database import (
    CoefficientGrid,
    CoefficientSource,
    TabulatedCoefficientSource,
    GeneratedCoefficientSource,
    CallableCoefficientSource,
    LinearizedAeroSource,
    LinearizedAeroParameters,
    IndependentVariable,
    ReferenceQuantities,
    GridOrderError,
    SamplePointIndexError,
    skin_friction_coefficient,
    lift_slope,
)
from tests.conftest import known_vector


class TestTabulatedSource:
    """Tests for table lookup."""

    def test_returns_stored_vector(self, populated_grid):
        source = TabulatedCoefficientSource(populated_grid)
        for offset, indices in enumerate(populated_grid.iter_indices()):
            np.testing.assert_array_equal(source.get_coefficients(indices), known_vector(offset))

    def test_reference_scenario(self, populated_grid):
        source = TabulatedCoefficientSource(populated_grid)
        np.testing.assert_array_equal(source.get_coefficients([1, 1]), [30.0, 31.0, 32.0])

    def test_unallocated_table(self, mach_alpha_grid):
        source = TabulatedCoefficientSource(mach_alpha_grid)
        with pytest.raises(GridOrderError):
            source.get_coefficients([0, 0])

    def test_out_of_range(self, populated_grid):
        source = TabulatedCoefficientSource(populated_grid)
        with pytest.raises(SamplePointIndexError):
            source.get_coefficients([3, 0])

    def test_is_abstract(self, mach_alpha_grid):
        with pytest.raises(TypeError):
            CoefficientSource(mach_alpha_grid)
        with pytest.raises(TypeError):
            GeneratedCoefficientSource(mach_alpha_grid)

    def test_default_reference(self, mach_alpha_grid):
        source = TabulatedCoefficientSource(mach_alpha_grid)
        assert source.reference == ReferenceQuantities()


class TestGeneratedSource:
    """Tests for the generation pass."""

    def test_generate_fills_every_case(self, mach_alpha_grid):
        visited = []

        def f(point):
            visited.append((point[IndependentVariable.MACH],
                            point[IndependentVariable.ANGLE_OF_ATTACK]))
            return [point[IndependentVariable.MACH], point[IndependentVariable.ANGLE_OF_ATTACK]]

        source = CallableCoefficientSource(mach_alpha_grid, f, arity=2)
        table = source.generate()

        assert table.shape == (6, 2)
        assert mach_alpha_grid.is_table_complete
        assert source.is_generated
        assert visited == [(0.5, 0.0), (0.5, 5.0), (1.0, 0.0), (1.0, 5.0), (2.0, 0.0), (2.0, 5.0)]
        np.testing.assert_array_equal(source.get_coefficients([1, 1]), [1.0, 5.0])

    def test_get_before_generate(self, mach_alpha_grid):
        source = CallableCoefficientSource(mach_alpha_grid, lambda p: [0.0], arity=1)
        with pytest.raises(GridOrderError):
            source.get_coefficients([0, 0])

    def test_shape_change_after_generate(self, mach_alpha_grid):
        source = CallableCoefficientSource(mach_alpha_grid, lambda p: [0.0], arity=1)
        source.generate()
        mach_alpha_grid.set_sample_points('mach', [0.5, 1.0, 2.0, 3.0])
        assert not source.is_generated
        with pytest.raises(GridOrderError):
            source.get_coefficients([0, 0])

        source.generate()
        assert source.get_coefficients([3, 1]).tolist() == [0.0]

    def test_second_source_on_same_grid(self, mach_alpha_grid):
        first = CallableCoefficientSource(mach_alpha_grid, lambda p: [1.0], arity=1)
        second = CallableCoefficientSource(mach_alpha_grid, lambda p: [2.0], arity=1)
        first.generate()
        second.generate()

        assert not first.is_generated
        with pytest.raises(GridOrderError):
            first.get_coefficients([0, 0])
        assert second.is_generated
        assert second.get_coefficients([0, 0]).tolist() == [2.0]

    def test_table_rewritten_after_generate(self, mach_alpha_grid):
        source = CallableCoefficientSource(mach_alpha_grid, lambda p: [1.0], arity=1)
        source.generate()
        mach_alpha_grid.set_coefficients([0, 0], [7.0])
        with pytest.raises(GridOrderError):
            source.get_coefficients([0, 0])

        source.generate()
        mach_alpha_grid.allocate_table(1)
        assert not source.is_generated
        with pytest.raises(GridOrderError):
            source.get_coefficients([1, 1])

    def test_unset_samples_rejected(self):
        grid = CoefficientGrid()
        grid.set_variable_count(1)
        grid.set_point_count(0, 2)
        source = CallableCoefficientSource(grid, lambda p: [0.0], arity=1)
        with pytest.raises(GridOrderError):
            source.generate()
        assert not grid.is_table_allocated

    def test_wrong_arity_from_strategy(self, mach_alpha_grid):
        source = CallableCoefficientSource(mach_alpha_grid, lambda p: [1.0, 2.0], arity=3)
        with pytest.raises(ValueError):
            source.generate()
        assert not source.is_generated


class TestEmpiricalModel:
    """Tests for the linearized empirical strategy."""

    def test_skin_friction_decreases_with_reynolds(self):
        assert skin_friction_coefficient(1e7) < skin_friction_coefficient(1e6)
        with pytest.raises(ValueError):
            skin_friction_coefficient(0.5)
        # Correlation base 2 log10(Re) - 0.65 is not positive below Re ~ 2.11
        for reynolds in (1.5, 2.0):
            with pytest.raises(ValueError, match="Reynolds"):
                skin_friction_coefficient(reynolds)
        assert isinstance(skin_friction_coefficient(2.2), float)

    def test_reynolds_below_correlation_range(self):
        grid = CoefficientGrid()
        grid.set_variable_count(1)
        grid.assign_role(IndependentVariable.REYNOLDS, 0)
        grid.set_sample_points(0, [1.5, 1e6])
        source = LinearizedAeroSource(grid)
        with pytest.raises(ValueError):
            source.generate()
        assert not source.is_generated

    def test_lift_slope_compressibility(self):
        params = LinearizedAeroParameters()
        assert lift_slope(0.0, params) == pytest.approx(2.0 * math.pi)
        assert lift_slope(0.6, params) == pytest.approx(2.0 * math.pi / 0.8)
        assert lift_slope(math.sqrt(2.0), params) == pytest.approx(4.0)
        # Transonic slope is bounded by the compressibility floor
        assert lift_slope(1.0, params) == pytest.approx(4.0 / 0.3)

    def test_zero_incidence(self, mach_alpha_grid):
        source = LinearizedAeroSource(mach_alpha_grid)
        coeffs = source.compute_coefficients({IndependentVariable.MACH: 0.5})
        assert coeffs.shape == (N_COEFFICIENTS,)
        assert coeffs[CL_IDX] == 0.0
        assert coeffs[CD_IDX] == pytest.approx(0.02)
        assert coeffs[CS_IDX] == 0.0
        assert coeffs[CYAW_IDX] == 0.0

    def test_generated_database(self, mach_alpha_grid):
        params = LinearizedAeroParameters(cd0=0.01, k_induced=0.1, cm_alpha=-1.0)
        source = LinearizedAeroSource(mach_alpha_grid, params=params)
        source.generate()

        # Mach 0.5, alpha 5 deg
        alpha = math.radians(5.0)
        cl = 2.0 * math.pi / math.sqrt(1.0 - 0.25) * alpha
        coeffs = source.get_coefficients([0, 1])
        assert coeffs[CL_IDX] == pytest.approx(cl)
        assert coeffs[CD_IDX] == pytest.approx(0.01 + 0.1 * cl * cl)
        assert coeffs[CPITCH_IDX] == pytest.approx(-alpha)

        # Mach 2.0, alpha 5 deg: Ackeret
        cl = 4.0 / math.sqrt(3.0) * alpha
        coeffs = source.get_coefficients([2, 1])
        assert coeffs[CL_IDX] == pytest.approx(cl)
        assert coeffs[CD_IDX] == pytest.approx(0.01 + cl * alpha)

    def test_sideslip_and_reynolds(self, four_variable_grid):
        source = LinearizedAeroSource(four_variable_grid)
        source.generate()

        low_re = source.get_coefficients([0, 0, 1, 0])
        high_re = source.get_coefficients([1, 0, 1, 0])
        assert high_re[CD_IDX] < low_re[CD_IDX]

        sideslip = source.get_coefficients([0, 0, 3, 0])
        assert sideslip[CS_IDX] == pytest.approx(-0.3 * math.radians(4.0))
        assert sideslip[CYAW_IDX] == pytest.approx(0.1 * math.radians(4.0))


class TestReferenceQuantities:
    """Tests for the reference geometry."""

    def test_invalid_values(self):
        with pytest.raises(ValueError):
            ReferenceQuantities(area=0.0)
        with pytest.raises(ValueError):
            ReferenceQuantities(length=-1.0)
        with pytest.raises(ValueError):
            ReferenceQuantities(moment_reference_point=(0.0, 0.0))

    def test_normalization(self):
        ref = ReferenceQuantities(area=2.0, length=0.5)
        np.testing.assert_allclose(ref.force_to_coefficient([4.0, 0.0, 8.0], 2.0), [1.0, 0.0, 2.0])
        np.testing.assert_allclose(ref.moment_to_coefficient([1.0, 0.0, 0.0], 2.0), [0.5, 0.0, 0.0])

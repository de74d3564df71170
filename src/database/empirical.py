"""
Empirical coefficient generation from linearized thin-body aerodynamics.

Longitudinal:
    C_L = C_Lα(M)·α
    C_D = C_D0·Cf(Re)/Cf(Re_ref) + K·C_L²      (subsonic)
    C_D = C_D0·Cf(Re)/Cf(Re_ref) + C_L·α       (supersonic, Ackeret)
    C_m = C_m0 + C_mα·α

Compressibility of the lift slope:
    C_Lα(M) = C_Lα0 / sqrt(1 - M²)   for M < 1   (Prandtl-Glauert)
    C_Lα(M) = 4 / sqrt(M² - 1)       for M > 1   (Ackeret)

Lateral-directional (linear in sideslip):
    C_S = C_Sβ·β,  C_l = C_lβ·β,  C_n = C_nβ·β

Skin friction scaling uses the turbulent flat-plate correlation
Cf = (2·log10(Re) - 0.65)^(-2.3).

Angles are in degrees at the grid and converted to radians internally.
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from src.constants import (
    CD_IDX, CL_IDX, CPITCH_IDX, CROLL_IDX, CS_IDX, CYAW_IDX, N_COEFFICIENTS,
)
from .grid import CoefficientGrid
from .reference import ReferenceQuantities
from .roles import IndependentVariable
from .source import GeneratedCoefficientSource, GridPoint


@dataclass
class LinearizedAeroParameters:
    """Stability derivatives (per radian) and drag polar constants."""

    cl_alpha: float = 2.0 * math.pi  # Incompressible lift slope
    cd0: float = 0.02                # Zero-lift drag at reynolds_ref
    k_induced: float = 0.05          # Induced drag factor
    cm0: float = 0.0
    cm_alpha: float = -0.5
    cs_beta: float = -0.3
    cl_beta: float = -0.05           # Rolling moment due to sideslip
    cn_beta: float = 0.1
    reynolds_ref: float = 6.0e6
    # Floor on sqrt|1 - M²| to keep the transonic lift slope finite
    min_compressibility_factor: float = 0.3


def skin_friction_coefficient(reynolds: float) -> float:
    """Turbulent flat-plate skin friction, Cf = (2 log10 Re - 0.65)^-2.3."""
    # Base of the power law must be positive: Re > 10**0.325 (about 2.11)
    if not reynolds > 0.0 or 2.0 * math.log10(reynolds) - 0.65 <= 0.0:
        raise ValueError(
            f"Reynolds number must be > 10**0.325 (~2.11) for the skin friction "
            f"correlation, got {reynolds}")
    return (2.0 * math.log10(reynolds) - 0.65) ** (-2.3)


def lift_slope(mach: float, params: LinearizedAeroParameters) -> float:
    """Compressibility-corrected lift slope (per radian)."""
    factor = max(math.sqrt(abs(1.0 - mach * mach)), params.min_compressibility_factor)
    if mach < 1.0:
        return params.cl_alpha / factor
    return 4.0 / factor


class LinearizedAeroSource(GeneratedCoefficientSource):
    """
    Empirical generation strategy for the full six-component coefficient vector.

    Variables missing from the grid take their neutral value: M = 0,
    α = β = 0, Re = reynolds_ref.
    """

    arity = N_COEFFICIENTS

    def __init__(self, grid: CoefficientGrid,
                 params: Optional[LinearizedAeroParameters] = None,
                 reference: Optional[ReferenceQuantities] = None):
        super().__init__(grid, reference)
        self.params = params if params is not None else LinearizedAeroParameters()

    def compute_coefficients(self, point: GridPoint) -> np.ndarray:
        p = self.params
        mach = point.get(IndependentVariable.MACH, 0.0)
        alpha = math.radians(point.get(IndependentVariable.ANGLE_OF_ATTACK, 0.0))
        beta = math.radians(point.get(IndependentVariable.ANGLE_OF_SIDESLIP, 0.0))
        reynolds = point.get(IndependentVariable.REYNOLDS, p.reynolds_ref)

        cl = lift_slope(mach, p) * alpha
        cd0 = p.cd0 * skin_friction_coefficient(reynolds) / skin_friction_coefficient(p.reynolds_ref)
        if mach < 1.0:
            cd = cd0 + p.k_induced * cl * cl
        else:
            cd = cd0 + cl * alpha

        coeffs = np.zeros(N_COEFFICIENTS)
        coeffs[CD_IDX] = cd
        coeffs[CS_IDX] = p.cs_beta * beta
        coeffs[CL_IDX] = cl
        coeffs[CROLL_IDX] = p.cl_beta * beta
        coeffs[CPITCH_IDX] = p.cm0 + p.cm_alpha * alpha
        coeffs[CYAW_IDX] = p.cn_beta * beta
        return coeffs

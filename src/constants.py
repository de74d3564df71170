"""
Global constants for the aerodynamic coefficient database.

This module defines constants used throughout the codebase to ensure
consistency in coefficient vector layout and grid dimensions.
"""

# Maximum number of independent variables under the reserved-role scheme
# (Mach, angle of attack, angle of sideslip, Reynolds number)
MAX_INDEPENDENT_VARIABLES = 4

# Coefficient vector components (body-fixed force and moment coefficients)
CD_IDX = 0  # Drag
CS_IDX = 1  # Side force
CL_IDX = 2  # Lift
CROLL_IDX = 3   # Rolling moment
CPITCH_IDX = 4  # Pitching moment
CYAW_IDX = 5    # Yawing moment
N_COEFFICIENTS = 6  # Total number of coefficients per grid point

COEFFICIENT_NAMES = ('CD', 'CS', 'CL', 'Cl', 'Cm', 'Cn')


def coefficient_index(name: str) -> int:
    """
    Return the position of a named coefficient in the coefficient vector.

    Parameters
    ----------
    name : str
        One of COEFFICIENT_NAMES (case-sensitive, 'Cl' is rolling moment).

    Returns
    -------
    int
        Index into a coefficient vector.
    """
    try:
        return COEFFICIENT_NAMES.index(name)
    except ValueError:
        raise ValueError(
            f"Unknown coefficient '{name}', expected one of {COEFFICIENT_NAMES}"
        ) from None

"""
Configuration schema for coefficient database generation.

Dataclass-based configuration that can be loaded from YAML or constructed programmatically.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, List, Union, Dict, Any, Tuple

import numpy as np


def expand_parameter(spec: Union[float, int, List[float], Dict[str, Any]]) -> List[float]:
    """
    Expand a parameter specification to a list of values.

    Args:
        spec: Either:
            - A single numeric value
            - A plain list of values
            - {"sweep": [start, end, count]} for linear sweep
            - {"values": [v1, v2, ...]} for explicit list

    Returns:
        List of parameter values

    Examples:
        >>> expand_parameter(4.0)
        [4.0]
        >>> expand_parameter({"sweep": [0, 10, 5]})
        [0.0, 2.5, 5.0, 7.5, 10.0]
        >>> expand_parameter({"values": [0, 2, 4, 8]})
        [0.0, 2.0, 4.0, 8.0]
    """
    if isinstance(spec, bool):
        raise ValueError(f"Invalid parameter spec type: {type(spec)}")

    if isinstance(spec, (int, float)):
        return [float(spec)]

    if isinstance(spec, (list, tuple)):
        return [float(v) for v in spec]

    if isinstance(spec, dict):
        if 'sweep' in spec:
            start, end, count = spec['sweep']
            return [float(v) for v in np.linspace(float(start), float(end), int(count))]
        elif 'values' in spec:
            return [float(v) for v in spec['values']]
        else:
            raise ValueError(f"Unknown parameter spec: {spec}")

    raise ValueError(f"Invalid parameter spec type: {type(spec)}")


@dataclass
class VariableConfig:
    """One independent variable of the grid, in slot order."""

    role: str = "mach"

    # Sample points can be:
    # - Explicit list:  values: [0.5, 1.0, 2.0]
    # - Sweep spec:     sweep: [start, end, count]
    values: Optional[List[float]] = None
    sweep: Optional[List[float]] = None

    def get_values(self) -> List[float]:
        """Expanded sample points of this variable."""
        if self.values is not None and self.sweep is not None:
            raise ValueError(f"Variable '{self.role}' sets both 'values' and 'sweep'")
        if self.values is not None:
            return expand_parameter({'values': self.values})
        if self.sweep is not None:
            return expand_parameter({'sweep': self.sweep})
        raise ValueError(f"Variable '{self.role}' needs 'values' or 'sweep'")


@dataclass
class ReferenceConfig:
    """Reference geometry for coefficient normalization, stored with the database."""

    area: float = 1.0
    length: float = 1.0
    moment_reference_point: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])

    def to_reference(self):
        from src.database.reference import ReferenceQuantities
        return ReferenceQuantities(
            area=self.area,
            length=self.length,
            moment_reference_point=tuple(self.moment_reference_point),
        )


@dataclass
class EmpiricalConfig:
    """Parameters of the linearized empirical generation strategy."""

    cl_alpha: float = 6.283185307179586
    cd0: float = 0.02
    k_induced: float = 0.05
    cm0: float = 0.0
    cm_alpha: float = -0.5
    cs_beta: float = -0.3
    cl_beta: float = -0.05
    cn_beta: float = 0.1
    reynolds_ref: float = 6.0e6

    def to_parameters(self):
        from src.database.empirical import LinearizedAeroParameters
        return LinearizedAeroParameters(**asdict(self))


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    show_time: bool = True


@dataclass
class OutputConfig:
    """Output configuration."""

    directory: str = "output/database"
    name: str = "coefficients"


@dataclass
class DatabaseConfig:
    """Complete coefficient database configuration."""

    variables: List[VariableConfig] = field(default_factory=list)
    reference: ReferenceConfig = field(default_factory=ReferenceConfig)
    empirical: EmpiricalConfig = field(default_factory=EmpiricalConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def get_shape(self) -> Tuple[int, ...]:
        """Point count per variable, in slot order."""
        return tuple(len(v.get_values()) for v in self.variables)

    def build_grid(self):
        """Create a CoefficientGrid with the declared variables and sample points."""
        from src.database.grid import CoefficientGrid

        grid = CoefficientGrid()
        grid.set_variable_count(len(self.variables))
        for slot, variable in enumerate(self.variables):
            grid.assign_role(variable.role, slot)
            grid.set_sample_points(slot, variable.get_values())
        return grid

    def to_dict(self) -> dict:
        """Convert to nested dictionary."""
        return asdict(self)


# Preset configurations
def longitudinal_preset() -> List[VariableConfig]:
    """Mach x angle-of-attack grid."""
    return [
        VariableConfig(role="mach", values=[0.3, 0.6, 0.8, 1.2, 2.0]),
        VariableConfig(role="angle_of_attack", sweep=[-4.0, 12.0, 9]),
    ]


def full_preset() -> List[VariableConfig]:
    """All four reserved variables."""
    return [
        VariableConfig(role="mach", values=[0.3, 0.6, 0.8, 1.2, 2.0]),
        VariableConfig(role="angle_of_attack", sweep=[-4.0, 12.0, 9]),
        VariableConfig(role="angle_of_sideslip", values=[-5.0, 0.0, 5.0]),
        VariableConfig(role="reynolds", values=[1.0e6, 6.0e6, 2.0e7]),
    ]

"""
Configuration module for coefficient database generation.

Provides YAML-based configuration with dataclass schema.
"""

from .schema import (
    DatabaseConfig,
    VariableConfig,
    ReferenceConfig,
    EmpiricalConfig,
    LoggingConfig,
    OutputConfig,
    expand_parameter,
    longitudinal_preset,
    full_preset,
)

from .loader import (
    load_yaml,
    from_dict,
    apply_cli_overrides,
    save_yaml,
)

__all__ = [
    # Schema classes
    'DatabaseConfig',
    'VariableConfig',
    'ReferenceConfig',
    'EmpiricalConfig',
    'LoggingConfig',
    'OutputConfig',
    'expand_parameter',
    # Presets
    'longitudinal_preset',
    'full_preset',
    # Loader functions
    'load_yaml',
    'from_dict',
    'apply_cli_overrides',
    'save_yaml',
]

"""
YAML configuration loader with validation.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Union
from dataclasses import fields, is_dataclass

from .schema import (
    DatabaseConfig, VariableConfig, ReferenceConfig, EmpiricalConfig,
    LoggingConfig, OutputConfig,
    longitudinal_preset, full_preset,
)


def _coerce_type(value, field_type):
    """Coerce value to the expected field type."""
    # Handle string representations of numbers (e.g., "6.0e6")
    if field_type == float and isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return value
    if field_type == int and isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return value
    return value


def _dict_to_dataclass(cls, data: dict):
    """Convert a nested dictionary to a dataclass instance."""
    if not is_dataclass(cls):
        return data
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping for {cls.__name__}, got {type(data).__name__}")

    field_types = {f.name: f.type for f in fields(cls)}
    kwargs = {}

    for key, value in data.items():
        if key not in field_types:
            continue  # Skip unknown fields

        field_type = field_types[key]

        # Handle nested dataclasses
        if is_dataclass(field_type) and isinstance(value, dict):
            kwargs[key] = _dict_to_dataclass(field_type, value)
        else:
            # Coerce types for primitive values
            kwargs[key] = _coerce_type(value, field_type)

    return cls(**kwargs)


def _to_number_list(values):
    """Coerce a YAML list (possibly of strings like "6e6") to floats."""
    if values is None:
        return None
    if not isinstance(values, (list, tuple)):
        raise ValueError(f"Expected a list of numbers, got {values!r}")
    return [float(v) for v in values]


def _variable_from_dict(data: Dict[str, Any]) -> VariableConfig:
    if 'role' not in data:
        raise ValueError(f"Variable entry is missing 'role': {data}")
    return VariableConfig(
        role=str(data['role']),
        values=_to_number_list(data.get('values')),
        sweep=_to_number_list(data.get('sweep')),
    )


def load_yaml(path: Union[str, Path]) -> DatabaseConfig:
    """
    Load database configuration from a YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        DatabaseConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    return from_dict(data)


def from_dict(data: Dict[str, Any]) -> DatabaseConfig:
    """
    Create DatabaseConfig from a dictionary.

    Handles nested structures and applies defaults for missing values.
    """
    data = dict(data)
    config_dict = {}

    # Check for preset (explicit variables take precedence)
    preset = data.pop('preset', None)
    if preset and 'variables' not in data:
        variables = {
            'longitudinal': longitudinal_preset,
            'full': full_preset,
        }.get(preset)
        if variables is None:
            raise ValueError(f"Unknown preset: {preset}")
        config_dict['variables'] = variables()

    if 'variables' in data:
        raw = data['variables'] or []
        if not isinstance(raw, list):
            raise ValueError("'variables' must be a list of variable entries")
        config_dict['variables'] = [_variable_from_dict(v) for v in raw]

    if 'reference' in data:
        reference_data = dict(data['reference'])
        if 'moment_reference_point' in reference_data:
            reference_data['moment_reference_point'] = _to_number_list(
                reference_data['moment_reference_point'])
        config_dict['reference'] = _dict_to_dataclass(ReferenceConfig, reference_data)

    if 'empirical' in data:
        config_dict['empirical'] = _dict_to_dataclass(EmpiricalConfig, data['empirical'])

    if 'logging' in data:
        config_dict['logging'] = _dict_to_dataclass(LoggingConfig, data['logging'])

    if 'output' in data:
        config_dict['output'] = _dict_to_dataclass(OutputConfig, data['output'])

    return DatabaseConfig(**config_dict)


def apply_cli_overrides(config: DatabaseConfig, args) -> DatabaseConfig:
    """
    Apply command-line argument overrides to a configuration.

    Only overrides values that were explicitly set (not default).

    Args:
        config: Base configuration
        args: argparse.Namespace with CLI arguments

    Returns:
        Updated DatabaseConfig
    """
    config_dict = config.to_dict()

    # Map CLI args to config paths
    cli_mapping = {
        'log_level': ('logging', 'level'),
        'output_dir': ('output', 'directory'),
        'name': ('output', 'name'),
    }

    for cli_name, config_path in cli_mapping.items():
        if hasattr(args, cli_name):
            value = getattr(args, cli_name)
            if value is not None:
                target = config_dict
                for key in config_path[:-1]:
                    target = target[key]
                target[config_path[-1]] = value

    return from_dict(config_dict)


def save_yaml(config: DatabaseConfig, path: Union[str, Path]) -> None:
    """Save configuration to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

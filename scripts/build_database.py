#!/usr/bin/env python3
"""
Build an aerodynamic coefficient database from a YAML configuration.

The grid is declared from the config's variable list, populated with the
linearized empirical model and written as a .npz archive.

Usage:
    python scripts/build_database.py --config config/examples/longitudinal.yaml
    python scripts/build_database.py --preset full --output-dir output/db --name full
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loguru import logger

from src.config import apply_cli_overrides, from_dict, load_yaml
from src.database import LinearizedAeroSource
from src.io import save_database
from src.utils.logging import setup_logging_from_config


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate an aerodynamic coefficient database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--config', '-c', help="YAML config file")
    source.add_argument('--preset', '-p', choices=['longitudinal', 'full'],
                        help="Built-in variable preset")

    parser.add_argument('--output-dir', '-o', default=None,
                        help="Output directory (overrides config)")
    parser.add_argument('--name', '-n', default=None,
                        help="Database name (overrides config)")
    parser.add_argument('--log-level', default=None,
                        help="Logging level (overrides config)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    if args.config:
        config = load_yaml(args.config)
    else:
        config = from_dict({'preset': args.preset})
    config = apply_cli_overrides(config, args)

    setup_logging_from_config(config.logging)

    grid = config.build_grid()
    logger.info(f"Grid declared: {grid!r}, {grid.case_count} cases")

    source = LinearizedAeroSource(
        grid,
        params=config.empirical.to_parameters(),
        reference=config.reference.to_reference(),
    )
    source.generate()

    path = Path(config.output.directory) / f"{config.output.name}.npz"
    save_database(grid, path, reference=source.reference)
    return 0


if __name__ == '__main__':
    sys.exit(main())

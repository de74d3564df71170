"""
Persistence of coefficient grids.

A grid is stored as a NumPy .npz archive:

    variable_count   : int
    point_counts     : (variable_count,) int
    roles            : (variable_count,) str, '' for slots without a role
    samples_<slot>   : (point_counts[slot],) float
    table            : (case_count, arity) float   (only if allocated)
    populated        : (case_count,) bool          (only if allocated)
    reference_area   : float                       (only if a reference is given)
    reference_length : float
    moment_reference_point : (3,) float
"""

from pathlib import Path
from typing import Optional, Union

import numpy as np
from loguru import logger

from src.database.grid import CoefficientGrid
from src.database.reference import ReferenceQuantities


def save_database(grid: CoefficientGrid, path: Union[str, Path],
                  reference: Optional[ReferenceQuantities] = None) -> Path:
    """
    Write a grid (shape, sample points and coefficient table) to disk.

    Parameters
    ----------
    grid : CoefficientGrid
        Grid with a final shape.
    path : str or Path
        Output filename (.npz is appended if missing).
    reference : ReferenceQuantities, optional
        Reference geometry the coefficients are normalized by.

    Returns
    -------
    Path
        Path of the written file.
    """
    path = Path(path)
    if path.suffix != '.npz':
        path = path.with_suffix('.npz')
    path.parent.mkdir(parents=True, exist_ok=True)

    counts = grid.point_counts
    roles = [''] * grid.variable_count
    for role, slot in grid.roles.items():
        roles[slot] = role.value

    arrays = {
        'variable_count': np.array(grid.variable_count),
        'point_counts': np.array(counts, dtype=np.int64),
        'roles': np.array(roles, dtype=str),
    }
    for slot, n in enumerate(counts):
        if n > 0:
            arrays[f'samples_{slot}'] = grid.get_sample_points(slot)
    if grid.is_table_allocated:
        arrays['table'] = np.array(grid.coefficient_table)
        arrays['populated'] = grid.populated_mask
    if reference is not None:
        arrays['reference_area'] = np.array(reference.area)
        arrays['reference_length'] = np.array(reference.length)
        arrays['moment_reference_point'] = np.array(reference.moment_reference_point, dtype=float)

    np.savez(path, **arrays)
    logger.info(f"Saved coefficient database: {path} ({grid.case_count} cases)")
    return path


def load_database(path: Union[str, Path]) -> CoefficientGrid:
    """Read a grid written by save_database()."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Coefficient database not found: {path}")

    grid = CoefficientGrid()
    with np.load(path, allow_pickle=False) as data:
        grid.set_variable_count(int(data['variable_count']))

        for slot, role in enumerate(data['roles']):
            if str(role):
                grid.assign_role(str(role), slot)

        for slot, n in enumerate(data['point_counts']):
            key = f'samples_{slot}'
            if key in data:
                grid.set_sample_points(slot, data[key])
            elif n > 0:
                grid.set_point_count(slot, int(n))

        if 'table' in data:
            table = data['table']
            populated = data['populated']
            if table.shape[0] != grid.case_count:
                raise ValueError(
                    f"Stored table has {table.shape[0]} rows, grid has {grid.case_count} cases")
            grid.allocate_table(table.shape[1])
            for offset in np.flatnonzero(populated):
                grid.set_coefficients(int(offset), table[offset])

    logger.info(f"Loaded coefficient database: {path} ({grid!r})")
    return grid


def load_reference(path: Union[str, Path]) -> Optional[ReferenceQuantities]:
    """Reference geometry stored with a database, or None if it has none."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Coefficient database not found: {path}")

    with np.load(path, allow_pickle=False) as data:
        if 'reference_area' not in data:
            return None
        return ReferenceQuantities(
            area=float(data['reference_area']),
            length=float(data['reference_length']),
            moment_reference_point=tuple(float(x) for x in data['moment_reference_point']),
        )

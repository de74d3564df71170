"""
I/O module for the coefficient database.

Provides readers and writers for populated coefficient grids.
"""

from .database_io import save_database, load_database, load_reference

__all__ = ['save_database', 'load_database', 'load_reference']

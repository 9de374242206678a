# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Grid Module
Public API for grid phases and point → cell indexing.
"""

from gms_filter.modules.grid.grid_indexer import (
    cell_indices,
    grid_index_from_point,
    make_grid,
)
from gms_filter.modules.grid.phase_offsets import (
    GRID_PHASES,
    N_PHASES,
    PHASE_OFFSETS,
    all_phases,
    compute_offset,
)

__all__ = [
    # Phases
    "PHASE_OFFSETS",
    "GRID_PHASES",
    "N_PHASES",
    "compute_offset",
    "all_phases",
    # Indexer
    "make_grid",
    "grid_index_from_point",
    "cell_indices",
]

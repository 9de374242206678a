# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Core Modules
Public API for the grid, voting and filtering stages.
"""

from gms_filter.modules.filtering import (
    PhaseSelection,
    inlier_threshold,
    merge_phase_inliers,
    neighborhood_score,
    neighborhood_score_matrix,
    select_phase_inliers,
)
from gms_filter.modules.grid import (
    GRID_PHASES,
    N_PHASES,
    all_phases,
    cell_indices,
    compute_offset,
    grid_index_from_point,
    make_grid,
)
from gms_filter.modules.voting import (
    CellMatch,
    PhaseVotes,
    accumulate_votes,
)

__all__ = [
    # Grid
    "GRID_PHASES",
    "N_PHASES",
    "all_phases",
    "compute_offset",
    "make_grid",
    "grid_index_from_point",
    "cell_indices",
    # Voting
    "CellMatch",
    "PhaseVotes",
    "accumulate_votes",
    # Filtering
    "neighborhood_score",
    "neighborhood_score_matrix",
    "inlier_threshold",
    "PhaseSelection",
    "select_phase_inliers",
    "merge_phase_inliers",
]

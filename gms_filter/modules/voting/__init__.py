# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Cell Voting Module
Public API for the per-phase cell-pair accumulation stage.
"""

from gms_filter.modules.voting.vote_accumulator import (
    CellMatch,
    PhaseVotes,
    accumulate_votes,
    keypoints_to_array,
    match_index_arrays,
)

__all__ = [
    "CellMatch",
    "PhaseVotes",
    "accumulate_votes",
    "keypoints_to_array",
    "match_index_arrays",
]

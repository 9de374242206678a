# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Filtering Module
Public API for neighborhood scoring and inlier selection.
"""

from gms_filter.modules.filtering.inlier_selector import (
    PhaseSelection,
    merge_phase_inliers,
    select_phase_inliers,
)
from gms_filter.modules.filtering.neighborhood_scorer import (
    neighborhood_score,
    neighborhood_score_matrix,
)
from gms_filter.modules.filtering.threshold import inlier_threshold

__all__ = [
    # Scoring
    "neighborhood_score",
    "neighborhood_score_matrix",
    # Threshold
    "inlier_threshold",
    # Selection
    "PhaseSelection",
    "select_phase_inliers",
    "merge_phase_inliers",
]

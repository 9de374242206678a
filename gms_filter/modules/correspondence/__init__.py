# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Correspondence Module
Public API for generating putative matches with OpenCV and converting
OpenCV feature types to and from the filter's models.
"""

from gms_filter.modules.correspondence.cv_adapter import (
    keypoints_from_cv,
    keypoints_to_cv,
    matches_from_cv,
    matches_to_cv,
)
from gms_filter.modules.correspondence.orb_matcher import (
    Correspondences,
    compute_orb_matches,
)

__all__ = [
    # Adapters
    "keypoints_from_cv",
    "keypoints_to_cv",
    "matches_from_cv",
    "matches_to_cv",
    # ORB
    "Correspondences",
    "compute_orb_matches",
]

# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — ORB Correspondence Generator
Produces the noisy putative matches GMS expects: many ORB keypoints,
nearest-neighbour Hamming matching, no ratio test and no cross check.
GMS works best on a dense, unfiltered match set.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import cv2
import numpy as np

from gms_filter.config import get_settings
from gms_filter.models.correspondence import ImageSize, Keypoint, PutativeMatch
from gms_filter.modules.correspondence.cv_adapter import (
    keypoints_from_cv,
    matches_from_cv,
)
from gms_filter.utils.image_utils import to_gray
from gms_filter.utils.logger import get_logger

log = get_logger(__name__)


@dataclass
class Correspondences:
    """Putative matches between two images plus everything GMS needs."""
    size_1: ImageSize
    size_2: ImageSize
    keypoints_1: list[Keypoint] = field(default_factory=list)
    keypoints_2: list[Keypoint] = field(default_factory=list)
    matches: list[PutativeMatch] = field(default_factory=list)


def compute_orb_matches(
    image_1: np.ndarray,
    image_2: np.ndarray,
    n_features: int | None = None,
    fast_threshold: int | None = None,
) -> Correspondences:
    """
    Detect ORB features in both images and brute-force match them.

    Args:
        image_1, image_2: BGR or grayscale uint8 images
        n_features:       Defaults to config ORB_N_FEATURES (10000).
        fast_threshold:   Defaults to config ORB_FAST_THRESHOLD (20).

    Returns:
        Correspondences — empty match list if either image has no descriptors.
    """
    settings = get_settings()
    if n_features is None:
        n_features = settings.orb_n_features
    if fast_threshold is None:
        fast_threshold = settings.orb_fast_threshold

    orb = cv2.ORB_create(nfeatures=n_features, fastThreshold=fast_threshold)
    kp_1, desc_1 = orb.detectAndCompute(to_gray(image_1), None)
    kp_2, desc_2 = orb.detectAndCompute(to_gray(image_2), None)

    result = Correspondences(
        size_1=ImageSize.from_shape(image_1.shape),
        size_2=ImageSize.from_shape(image_2.shape),
        keypoints_1=keypoints_from_cv(kp_1),
        keypoints_2=keypoints_from_cv(kp_2),
    )

    if desc_1 is None or desc_2 is None or len(desc_1) == 0 or len(desc_2) == 0:
        log.warning(
            "orb_no_descriptors",
            n_keypoints_1=len(kp_1),
            n_keypoints_2=len(kp_2),
        )
        return result

    matcher = cv2.BFMatcher(cv2.NORM_HAMMING, crossCheck=False)
    result.matches = matches_from_cv(matcher.match(desc_1, desc_2))

    log.info(
        "orb_matching_complete",
        n_keypoints_1=len(result.keypoints_1),
        n_keypoints_2=len(result.keypoints_2),
        n_matches=len(result.matches),
    )

    return result

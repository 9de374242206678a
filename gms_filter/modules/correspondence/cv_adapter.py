# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — OpenCV Adapters
Conversions between OpenCV feature types and the filter's models:

  cv2.KeyPoint → Keypoint       (position only)
  cv2.DMatch   ↔ PutativeMatch  (queryIdx, trainIdx, distance)
"""

from __future__ import annotations

from typing import Iterable

import cv2

from gms_filter.models.correspondence import Keypoint, PutativeMatch


def keypoints_from_cv(cv_keypoints: Iterable[cv2.KeyPoint]) -> list[Keypoint]:
    return [Keypoint(x=float(kp.pt[0]), y=float(kp.pt[1])) for kp in cv_keypoints]


def matches_from_cv(cv_matches: Iterable[cv2.DMatch]) -> list[PutativeMatch]:
    return [
        PutativeMatch(
            query_idx=int(m.queryIdx),
            train_idx=int(m.trainIdx),
            distance=float(m.distance),
        )
        for m in cv_matches
    ]


def matches_to_cv(matches: Iterable[PutativeMatch]) -> list[cv2.DMatch]:
    """Back to cv2.DMatch, e.g. for cv2.drawMatches or findFundamentalMat callers."""
    return [cv2.DMatch(m.query_idx, m.train_idx, m.distance) for m in matches]


def keypoints_to_cv(keypoints: Iterable[Keypoint], size: float = 1.0) -> list[cv2.KeyPoint]:
    return [cv2.KeyPoint(kp.x, kp.y, size) for kp in keypoints]

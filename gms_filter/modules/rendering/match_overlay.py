# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Match Overlay Renderer
Draws the two images side by side with the retained matches joined by
lines, for visual inspection of a filter run.

  - Optional rejected matches in red underneath
  - Inliers in green on top
  - Optional phase-0 voting grid over each image
  - Inlier count in the top-left corner
"""

from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np

from gms_filter.config import get_settings
from gms_filter.models.correspondence import Keypoint, PutativeMatch
from gms_filter.modules.correspondence.cv_adapter import (
    keypoints_to_cv,
    matches_to_cv,
)
from gms_filter.utils.image_utils import save_image, to_bgr
from gms_filter.utils.logger import get_logger

log = get_logger(__name__)

# Colours (BGR)
_INLIER_COLOUR   = (34, 197, 94)    # green
_OUTLIER_COLOUR  = (60, 60, 220)    # red
_GRID_COLOUR     = (80, 80, 80)     # dark grey grid lines
_TEXT_COLOUR     = (255, 255, 255)
_SHADOW_COLOUR   = (0, 0, 0)

_GRID_THICKNESS = 1
_FONT           = cv2.FONT_HERSHEY_SIMPLEX


def _draw_grid(img: np.ndarray, grid_size: int) -> None:
    h, w = img.shape[:2]
    for i in range(1, grid_size):
        x = int(round(i * w / grid_size))
        y = int(round(i * h / grid_size))
        cv2.line(img, (x, 0), (x, h - 1), _GRID_COLOUR, _GRID_THICKNESS)
        cv2.line(img, (0, y), (w - 1, y), _GRID_COLOUR, _GRID_THICKNESS)


def _draw_text_shadow(img: np.ndarray, text: str, pos: tuple[int, int]) -> None:
    x, y = pos
    cv2.putText(img, text, (x + 1, y + 1), _FONT, 0.6, _SHADOW_COLOUR, 2, cv2.LINE_AA)
    cv2.putText(img, text, (x, y), _FONT, 0.6, _TEXT_COLOUR, 1, cv2.LINE_AA)


def draw_matches(
    image_1: np.ndarray,
    keypoints_1: list[Keypoint],
    image_2: np.ndarray,
    keypoints_2: list[Keypoint],
    inliers: list[PutativeMatch],
    rejected: list[PutativeMatch] | None = None,
    show_grid: bool = False,
    grid_size: int | None = None,
) -> np.ndarray:
    """
    Render retained (and optionally rejected) matches.

    Args:
        image_1, image_2:          BGR or grayscale uint8 images
        keypoints_1, keypoints_2:  Keypoints the matches index into
        inliers:                   Matches kept by the filter
        rejected:                  Matches dropped by the filter, drawn first
        show_grid:                 Overlay the unshifted N×N voting grid
        grid_size:                 N for the grid overlay. Defaults to config.

    Returns:
        BGR uint8 canvas of width w1 + w2.
    """
    if grid_size is None:
        grid_size = get_settings().grid_size

    img_1 = to_bgr(image_1).copy()
    img_2 = to_bgr(image_2).copy()
    if show_grid:
        _draw_grid(img_1, grid_size)
        _draw_grid(img_2, grid_size)

    cv_kp_1 = keypoints_to_cv(keypoints_1)
    cv_kp_2 = keypoints_to_cv(keypoints_2)
    flags = cv2.DrawMatchesFlags_NOT_DRAW_SINGLE_POINTS

    canvas = cv2.drawMatches(
        img_1, cv_kp_1, img_2, cv_kp_2, matches_to_cv(rejected or []), None,
        matchColor=_OUTLIER_COLOUR, flags=flags,
    )
    canvas = cv2.drawMatches(
        img_1, cv_kp_1, img_2, cv_kp_2, matches_to_cv(inliers), canvas,
        matchColor=_INLIER_COLOUR,
        flags=flags | cv2.DrawMatchesFlags_DRAW_OVER_OUTIMG,
    )

    _draw_text_shadow(canvas, f"inliers: {len(inliers)}", (10, 24))

    log.debug(
        "match_overlay_rendered",
        inliers=len(inliers),
        rejected=len(rejected or []),
        shape=canvas.shape,
    )

    return canvas


def save_match_overlay(canvas: np.ndarray, path: Path) -> Path:
    save_image(canvas, path)
    log.info("match_overlay_saved", path=str(path))
    return path

# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
Phase 6 — OpenCV adapters, ORB correspondence generation and match
overlay rendering. Uses a synthetic blurred-noise texture; no image
files required.
"""

import cv2
import numpy as np
import pytest

from gms_filter.models.correspondence import Keypoint, PutativeMatch

# img_2 is img_1's view shifted by (40, 25): a point p in img_1 sits at
# p - _SHIFT in img_2
_SHIFT = np.array([40.0, 25.0])


# ─── Helpers ─────────────────────────────────────────────────────────────────

def _texture(h: int = 300, w: int = 400, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    noise = rng.integers(0, 256, size=(h, w), dtype=np.uint8)
    img = cv2.GaussianBlur(noise, (5, 5), 1.5)
    return cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)


def _shifted_pair():
    base = _texture()
    img_1 = np.ascontiguousarray(base[0:240, 0:320])
    img_2 = np.ascontiguousarray(base[25:265, 40:360])
    return img_1, img_2


# ─── Adapters ────────────────────────────────────────────────────────────────

def test_keypoints_from_cv():
    from gms_filter.modules.correspondence.cv_adapter import keypoints_from_cv

    kps = keypoints_from_cv([cv2.KeyPoint(12.5, 7.25, 3.0), cv2.KeyPoint(0.0, 1.0, 5.0)])
    assert kps == [Keypoint(x=12.5, y=7.25), Keypoint(x=0.0, y=1.0)]


def test_matches_cv_conversion():
    from gms_filter.modules.correspondence.cv_adapter import (
        matches_from_cv,
        matches_to_cv,
    )

    matches = [PutativeMatch(query_idx=3, train_idx=8, distance=21.0)]
    cv_matches = matches_to_cv(matches)
    assert cv_matches[0].queryIdx == 3
    assert cv_matches[0].trainIdx == 8
    assert cv_matches[0].distance == pytest.approx(21.0)
    assert matches_from_cv(cv_matches) == matches


# ─── ORB ─────────────────────────────────────────────────────────────────────

def test_orb_on_blank_images_gives_no_matches():
    from gms_filter.modules.correspondence.orb_matcher import compute_orb_matches

    blank = np.zeros((120, 160, 3), dtype=np.uint8)
    corr = compute_orb_matches(blank, blank, n_features=500)

    assert corr.matches == []
    assert corr.size_1.width == 160.0
    assert corr.size_1.height == 120.0


def test_orb_matches_index_into_keypoints():
    from gms_filter.modules.correspondence.orb_matcher import compute_orb_matches

    img_1, img_2 = _shifted_pair()
    corr = compute_orb_matches(img_1, img_2, n_features=1000)

    assert len(corr.matches) > 0
    assert all(m.query_idx < len(corr.keypoints_1) for m in corr.matches)
    assert all(m.train_idx < len(corr.keypoints_2) for m in corr.matches)


def test_orb_plus_gms_keeps_consistent_motion():
    from gms_filter.core.pipeline import run_gms
    from gms_filter.modules.correspondence.orb_matcher import compute_orb_matches

    img_1, img_2 = _shifted_pair()
    corr = compute_orb_matches(img_1, img_2, n_features=2000)
    result = run_gms(
        corr.size_1, corr.size_2,
        corr.keypoints_1, corr.keypoints_2, corr.matches,
        grid_size=10, threshold_factor=0.15,
    )

    assert result.inlier_count >= 30

    errors = [
        np.linalg.norm(
            np.array(corr.keypoints_1[m.query_idx].pt)
            - np.array(corr.keypoints_2[m.train_idx].pt)
            - _SHIFT
        )
        for m in result.matches
    ]
    precision = np.mean(np.array(errors) < 4.0)
    assert precision >= 0.8


# ─── Rendering ───────────────────────────────────────────────────────────────

def test_draw_matches_canvas_shape():
    from gms_filter.modules.rendering.match_overlay import draw_matches

    img_1 = np.full((100, 120, 3), 128, dtype=np.uint8)
    img_2 = np.full((80, 90), 64, dtype=np.uint8)    # grayscale input
    kps_1 = [Keypoint(x=10, y=10), Keypoint(x=50, y=60)]
    kps_2 = [Keypoint(x=20, y=20), Keypoint(x=70, y=40)]

    canvas = draw_matches(
        img_1, kps_1, img_2, kps_2,
        inliers=[PutativeMatch(query_idx=0, train_idx=0)],
        rejected=[PutativeMatch(query_idx=1, train_idx=1)],
        show_grid=True,
        grid_size=4,
    )
    assert canvas.shape == (100, 210, 3)
    assert canvas.dtype == np.uint8


def test_draw_matches_leaves_inputs_untouched(tmp_path):
    from gms_filter.modules.rendering.match_overlay import (
        draw_matches,
        save_match_overlay,
    )

    img = np.full((60, 60, 3), 200, dtype=np.uint8)
    before = img.copy()
    canvas = draw_matches(img, [], img, [], inliers=[], show_grid=True, grid_size=3)

    assert np.array_equal(img, before)
    out = save_match_overlay(canvas, tmp_path / "overlay" / "matches.png")
    assert out.exists()


# ─── Image I/O ───────────────────────────────────────────────────────────────

def test_load_image_errors(tmp_path):
    from gms_filter.api.middleware.error_handler import ImageLoadError
    from gms_filter.utils.image_utils import load_image_bgr

    with pytest.raises(FileNotFoundError):
        load_image_bgr(tmp_path / "missing.png")

    bogus = tmp_path / "bogus.png"
    bogus.write_bytes(b"not an image")
    with pytest.raises(ImageLoadError):
        load_image_bgr(bogus)

# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
Phase 5 — End-to-end filter tests over all four grid phases.
Synthetic keypoints on 640 × 480 images (64 × 48 px cells at N=10).
"""

import numpy as np
import pytest

from gms_filter.models.correspondence import ImageSize, Keypoint, PutativeMatch

W, H = 640, 480
_SIZE = ImageSize(width=W, height=H)


# ─── Helpers ─────────────────────────────────────────────────────────────────

def _uniform_noise(rng: np.random.Generator, n: int):
    kps_1 = [Keypoint(x=float(x), y=float(y))
             for x, y in zip(rng.uniform(0, W, n), rng.uniform(0, H, n))]
    kps_2 = [Keypoint(x=float(x), y=float(y))
             for x, y in zip(rng.uniform(0, W, n), rng.uniform(0, H, n))]
    matches = [PutativeMatch(query_idx=i, train_idx=i, distance=float(i)) for i in range(n)]
    return kps_1, kps_2, matches


def _concentrated_scene(seed: int = 7, n_true: int = 50, n_noise: int = 50):
    """
    n_true matches from inside cell (4, 4) of image 1 to inside cell (4, 5)
    of image 2 (a one-cell shift to the right), followed by n_noise
    uniformly scattered matches.
    """
    rng = np.random.default_rng(seed)
    xs = rng.uniform(256 + 4, 320 - 4, n_true)
    ys = rng.uniform(192 + 4, 240 - 4, n_true)
    kps_1 = [Keypoint(x=float(x), y=float(y)) for x, y in zip(xs, ys)]
    kps_2 = [Keypoint(x=float(x) + 64.0, y=float(y)) for x, y in zip(xs, ys)]

    noise_1, noise_2, _ = _uniform_noise(rng, n_noise)
    kps_1 += noise_1
    kps_2 += noise_2
    matches = [PutativeMatch(query_idx=i, train_idx=i) for i in range(n_true + n_noise)]
    return kps_1, kps_2, matches


def _run(kps_1, kps_2, matches, **kwargs):
    from gms_filter.core.pipeline import run_gms
    return run_gms(_SIZE, _SIZE, kps_1, kps_2, matches, **kwargs)


# ─── Scenarios ───────────────────────────────────────────────────────────────

def test_empty_input_gives_empty_output():
    result = _run([], [], [])

    assert result.matches == []
    assert result.inlier_count == 0
    assert result.total_matches == 0
    assert len(result.phases) == 4
    assert all(p.occupied_cells == 0 for p in result.phases)


def test_zero_sized_image_fails_fast_even_when_empty():
    from gms_filter.api.middleware.error_handler import GridPreconditionError
    from gms_filter.core.pipeline import run_gms

    with pytest.raises(GridPreconditionError):
        run_gms(ImageSize(width=0, height=H), _SIZE, [], [], [])


def test_uniform_noise_is_rejected():
    rng = np.random.default_rng(0)
    result = _run(*_uniform_noise(rng, 100), threshold_factor=0.15, grid_size=10)

    assert result.total_matches == 100
    assert result.inlier_count <= 5


def test_concentrated_motion_is_retained():
    kps_1, kps_2, matches = _concentrated_scene()
    result = _run(kps_1, kps_2, matches, threshold_factor=0.15, grid_size=10)

    kept = set(result.inlier_indices)
    assert set(range(50)) <= kept
    noise_kept = kept - set(range(50))
    assert len(noise_kept) <= 5


def test_concentrated_motion_survives_phase_zero_alone():
    kps_1, kps_2, matches = _concentrated_scene()
    result = _run(kps_1, kps_2, matches, threshold_factor=0.15, grid_size=10)

    phase0 = result.phases[0]
    assert phase0.offset == (0.0, 0.0)
    assert phase0.inlier_count >= 50


def test_single_match_is_deterministic():
    kps_1 = [Keypoint(x=100.0, y=100.0)]
    kps_2 = [Keypoint(x=300.0, y=200.0)]
    matches = [PutativeMatch(query_idx=0, train_idx=0, distance=12.0)]

    first = _run(kps_1, kps_2, matches, threshold_factor=0.15, grid_size=10)
    second = _run(kps_1, kps_2, matches, threshold_factor=0.15, grid_size=10)
    assert first.inlier_indices == second.inlier_indices == []

    # With no sqrt margin the lone match clears p·m in every phase,
    # and is still reported once
    loose = _run(kps_1, kps_2, matches, threshold_factor=0.0, grid_size=10)
    assert loose.matches == matches
    assert all(p.inlier_count == 1 for p in loose.phases)


# ─── Properties ──────────────────────────────────────────────────────────────

def test_determinism():
    kps_1, kps_2, matches = _concentrated_scene(seed=11)
    a = _run(kps_1, kps_2, matches)
    b = _run(kps_1, kps_2, matches)

    assert a.inlier_indices == b.inlier_indices
    assert a.matches == b.matches


def test_output_is_subset_of_input():
    kps_1, kps_2, matches = _concentrated_scene(seed=5)
    result = _run(kps_1, kps_2, matches)

    assert all(0 <= i < len(matches) for i in result.inlier_indices)
    assert result.inlier_indices == sorted(set(result.inlier_indices))
    assert [matches[i] for i in result.inlier_indices] == result.matches


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_monotonic_threshold(seed):
    kps_1, kps_2, matches = _concentrated_scene(seed=seed, n_true=40, n_noise=200)

    previous = None
    for factor in (0.0, 0.05, 0.1, 0.15, 0.3, 0.6, 1.2):
        kept = set(_run(kps_1, kps_2, matches, threshold_factor=factor).inlier_indices)
        if previous is not None:
            assert kept <= previous
        previous = kept


def test_equal_valued_matches_keep_their_identity():
    # 30 copies of the same match are 30 distinct putative matches
    kps_1 = [Keypoint(x=280.0, y=210.0)]
    kps_2 = [Keypoint(x=350.0, y=210.0)]
    matches = [PutativeMatch(query_idx=0, train_idx=0)] * 30

    result = _run(kps_1, kps_2, matches, threshold_factor=0.15, grid_size=10)
    assert result.inlier_indices == list(range(30))
    assert len(result.matches) == 30


def test_filter_matches_returns_list():
    from gms_filter.core.pipeline import filter_matches

    kps_1, kps_2, matches = _concentrated_scene()
    out = filter_matches(_SIZE, _SIZE, kps_1, kps_2, matches)

    assert out == _run(kps_1, kps_2, matches).matches


def test_defaults_come_from_settings(monkeypatch):
    from gms_filter.config import get_settings

    monkeypatch.setenv("GRID_SIZE", "6")
    monkeypatch.setenv("THRESHOLD_FACTOR", "0.3")
    get_settings.cache_clear()
    try:
        result = _run(*_concentrated_scene())
    finally:
        monkeypatch.delenv("GRID_SIZE")
        monkeypatch.delenv("THRESHOLD_FACTOR")
        get_settings.cache_clear()

    assert result.grid_size == 6
    assert result.threshold_factor == 0.3

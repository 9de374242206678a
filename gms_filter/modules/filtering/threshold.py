# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Inlier Threshold
Score a source cell's dominant neighborhood must exceed for its
cell pair to be accepted.

For a source cell holding m putative matches:

  p    = 9 / N²                  share of the destination grid one
                                 3×3 neighborhood covers
  τ(m) = p·m + α·√m,  α = threshold_factor · N

p·m is the neighborhood score expected if the cell's m matches were
scattered uniformly over the destination image. α·√m is the GMS
margin on top of it. At the defaults (N=10, factor=0.15, α=1.5):

  m = 1   → τ ≈ 1.59   a lone match never passes
  m = 2   → τ ≈ 2.30   neither does a pair
  m = 50  → τ ≈ 15.1   a coherent cluster passes easily

τ grows with threshold_factor for every m > 0, so a larger factor
never accepts more.
"""

from __future__ import annotations

import math

from gms_filter.config import get_settings

# Cells in one neighborhood (destination cell + 8 neighbors)
NEIGHBORHOOD_CELLS = 9


def inlier_threshold(
    n_matches: int,
    grid_size: int | None = None,
    threshold_factor: float | None = None,
) -> float:
    """
    Threshold for a source cell holding n_matches matches.
    Returns 0.0 for an empty cell. Raises ValueError on a negative factor.
    """
    settings = get_settings()
    if grid_size is None:
        grid_size = settings.grid_size
    if threshold_factor is None:
        threshold_factor = settings.threshold_factor

    if threshold_factor < 0:
        raise ValueError(f"threshold_factor must be >= 0, got {threshold_factor}.")
    if n_matches <= 0:
        return 0.0

    coverage = min(1.0, NEIGHBORHOOD_CELLS / (grid_size * grid_size))
    alpha = threshold_factor * grid_size
    return coverage * n_matches + alpha * math.sqrt(n_matches)

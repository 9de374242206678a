# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Neighborhood Scorer
Motion-consistency score of a cell pair: the bin count of the
destination cell plus the counts of its 8 grid neighbors, all taken
from the same source cell's row of cell_bins.

Neighbor offsets on the flat destination index:
  -N-1  -N  -N+1
   -1    0   +1
  N-1    N   N+1

Lookups are done on (row, col) so a cell in column 0 never picks up
column N-1 of the previous row (and vice versa). Off-grid neighbors
contribute nothing.
"""

from __future__ import annotations

import numpy as np

from gms_filter.config import get_settings


def neighborhood_score(
    cell_bins: np.ndarray,
    src: int,
    dst: int,
    grid_size: int | None = None,
) -> int:
    """
    Sum of cell_bins[src, dst + δ] over the 3×3 neighborhood of dst.

    Args:
        cell_bins: (N², N²) count matrix for one phase
        src:       Source cell index
        dst:       Destination cell index (centre of the neighborhood)
        grid_size: N. Defaults to config GRID_SIZE (10).
    """
    if grid_size is None:
        grid_size = get_settings().grid_size

    n = grid_size
    row, col = divmod(dst, n)
    dst_grid = cell_bins[src].reshape(n, n)
    window = dst_grid[max(row - 1, 0):row + 2, max(col - 1, 0):col + 2]
    return int(window.sum())


def neighborhood_score_matrix(
    cell_bins: np.ndarray,
    grid_size: int | None = None,
) -> np.ndarray:
    """
    neighborhood_score for every (src, dst) pair at once.

    Returns:
        (N², N²) int64 matrix, entry [src, dst] equal to
        neighborhood_score(cell_bins, src, dst).
    """
    if grid_size is None:
        grid_size = get_settings().grid_size

    n = grid_size
    n_src = cell_bins.shape[0]
    # Zero border keeps the 3×3 sums from wrapping across rows
    padded = np.zeros((n_src, n + 2, n + 2), dtype=np.int64)
    padded[:, 1:-1, 1:-1] = cell_bins.reshape(n_src, n, n)

    scores = np.zeros((n_src, n, n), dtype=np.int64)
    for dr in range(3):
        for dc in range(3):
            scores += padded[:, dr:dr + n, dc:dc + n]

    return scores.reshape(n_src, n * n)

# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Grid Indexer
Maps keypoint positions to flat cell indices of an N×N grid.

For a phase offset (ox, oy) and cell size (dw, dh):
  col   = floor((x + ox·dw) / dw)
  row   = floor((y + oy·dh) / dh)
  index = row·N + col

Row and column are clamped to [0, N-1] before flattening. A shifted
grid pushes points near the right/bottom border past column/row N-1;
those, and any point outside the nominal image, fold into the nearest
edge cell instead of being dropped.
"""

from __future__ import annotations

import math

import numpy as np

from gms_filter.api.middleware.error_handler import GridPreconditionError
from gms_filter.config import get_settings
from gms_filter.models.correspondence import ImageSize
from gms_filter.models.grid import Grid, GridPhase


def make_grid(
    image_size: ImageSize,
    phase: GridPhase,
    grid_size: int | None = None,
) -> Grid:
    """
    Size an N×N grid to one image under one phase.

    Raises:
        GridPreconditionError: image width/height or grid_size not positive.
    """
    if grid_size is None:
        grid_size = get_settings().grid_size

    if grid_size < 1:
        raise GridPreconditionError(f"grid_size must be >= 1, got {grid_size}.")
    if not (image_size.width > 0 and image_size.height > 0):
        raise GridPreconditionError(
            f"Image dimensions must be positive, got "
            f"{image_size.width}x{image_size.height}."
        )

    return Grid(
        grid_size=grid_size,
        cell_width=image_size.width / grid_size,
        cell_height=image_size.height / grid_size,
        phase=phase,
    )


def _clamp(v: float, n: int) -> int:
    # Clamp before flooring: ±inf or huge coordinates must not overflow int
    return math.floor(min(max(v, 0.0), n - 1))


def grid_index_from_point(x: float, y: float, grid: Grid) -> int:
    """Flat cell index of a single point."""
    n = grid.grid_size
    col = (x + grid.phase.offset_x * grid.cell_width) / grid.cell_width
    row = (y + grid.phase.offset_y * grid.cell_height) / grid.cell_height
    return _clamp(row, n) * n + _clamp(col, n)


def cell_indices(points: np.ndarray, grid: Grid) -> np.ndarray:
    """
    Vectorised grid_index_from_point.

    Args:
        points: (M, 2) float array of (x, y) positions
        grid:   Grid for the image the points belong to

    Returns:
        (M,) int64 array of flat cell indices in [0, N²-1].
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    n = grid.grid_size

    cols = np.floor(
        (pts[:, 0] + grid.phase.offset_x * grid.cell_width) / grid.cell_width
    )
    rows = np.floor(
        (pts[:, 1] + grid.phase.offset_y * grid.cell_height) / grid.cell_height
    )

    cols = np.clip(cols, 0, n - 1).astype(np.int64)
    rows = np.clip(rows, 0, n - 1).astype(np.int64)
    return rows * n + cols

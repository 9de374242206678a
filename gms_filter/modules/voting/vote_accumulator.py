# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Cell Vote Accumulator
Assigns every putative match to a (source cell, destination cell) pair
for one grid phase and tabulates the pair counts.

Outputs per phase:
  cell_bins:    (N², N²) int32 matrix, cell_bins[src, dst] = number of
                matches running from source cell src to destination cell dst
  cell_matches: source cell → CellMatch list, in input order

Every match is assigned in every phase; nothing is dropped here.
Bins are only ever incremented, and each phase gets its own fresh
matrix — phases are merged later, by the inlier selector.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from gms_filter.api.middleware.error_handler import MatchIndexError
from gms_filter.config import get_settings
from gms_filter.models.correspondence import ImageSize, Keypoint, PutativeMatch
from gms_filter.models.grid import Grid, GridPhase
from gms_filter.modules.grid.grid_indexer import cell_indices, make_grid
from gms_filter.utils.logger import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class CellMatch:
    """A putative match annotated with its cell pair for one phase."""
    src: int
    dst: int
    kp_1: Keypoint
    kp_2: Keypoint
    match: PutativeMatch
    # Position of `match` in the input list — the match's identity
    match_index: int


@dataclass
class PhaseVotes:
    """Accumulated cell votes for a single grid phase."""
    phase: GridPhase
    src_grid: Grid
    dst_grid: Grid
    # (M,) flat cell indices, aligned with the input match list
    src_cells: np.ndarray
    dst_cells: np.ndarray
    cell_bins: np.ndarray
    cell_matches: dict[int, list[CellMatch]] = field(default_factory=dict)

    @property
    def grid_size(self) -> int:
        return self.src_grid.grid_size

    @property
    def n_matches(self) -> int:
        return len(self.src_cells)

    def matches_for_pair(self, src: int, dst: int) -> list[CellMatch]:
        return [cm for cm in self.cell_matches.get(src, []) if cm.dst == dst]


def keypoints_to_array(keypoints: list[Keypoint]) -> np.ndarray:
    """Stack keypoint positions into an (K, 2) float64 array."""
    if not keypoints:
        return np.zeros((0, 2), dtype=np.float64)
    return np.array([(kp.x, kp.y) for kp in keypoints], dtype=np.float64)


def match_index_arrays(
    matches: list[PutativeMatch],
    n_keypoints_1: int,
    n_keypoints_2: int,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Split matches into query/train index arrays, checking them against
    the keypoint list lengths.

    Raises:
        MatchIndexError: a match points past the end of a keypoint list.
    """
    query = np.fromiter((m.query_idx for m in matches), dtype=np.int64, count=len(matches))
    train = np.fromiter((m.train_idx for m in matches), dtype=np.int64, count=len(matches))

    if len(matches):
        if query.max() >= n_keypoints_1:
            bad = int(np.argmax(query >= n_keypoints_1))
            raise MatchIndexError(
                f"Match {bad} references keypoint {int(query[bad])} of image 1, "
                f"which has only {n_keypoints_1} keypoints."
            )
        if train.max() >= n_keypoints_2:
            bad = int(np.argmax(train >= n_keypoints_2))
            raise MatchIndexError(
                f"Match {bad} references keypoint {int(train[bad])} of image 2, "
                f"which has only {n_keypoints_2} keypoints."
            )

    return query, train


def accumulate_votes(
    keypoints_1: list[Keypoint],
    keypoints_2: list[Keypoint],
    matches: list[PutativeMatch],
    size_1: ImageSize,
    size_2: ImageSize,
    phase: GridPhase,
    grid_size: int | None = None,
) -> PhaseVotes:
    """
    Run one accumulation pass for a single grid phase.

    Args:
        keypoints_1: Keypoints of image 1 (source)
        keypoints_2: Keypoints of image 2 (destination)
        matches:     Putative matches, query_idx → keypoints_1,
                     train_idx → keypoints_2
        size_1:      Image 1 dimensions (sizes the source grid)
        size_2:      Image 2 dimensions (sizes the destination grid)
        phase:       Grid phase shared by both grids
        grid_size:   N. Defaults to config GRID_SIZE (10).

    Returns:
        PhaseVotes holding this phase's cell_bins and cell_matches.
    """
    if grid_size is None:
        grid_size = get_settings().grid_size

    src_grid = make_grid(size_1, phase, grid_size)
    dst_grid = make_grid(size_2, phase, grid_size)
    n_cells = src_grid.n_cells

    query, train = match_index_arrays(matches, len(keypoints_1), len(keypoints_2))

    pts_1 = keypoints_to_array(keypoints_1)
    pts_2 = keypoints_to_array(keypoints_2)
    src_cells = cell_indices(pts_1[query], src_grid)
    dst_cells = cell_indices(pts_2[train], dst_grid)

    cell_bins = np.zeros((n_cells, n_cells), dtype=np.int32)
    np.add.at(cell_bins, (src_cells, dst_cells), 1)

    cell_matches: dict[int, list[CellMatch]] = {}
    for i, m in enumerate(matches):
        src = int(src_cells[i])
        cell_matches.setdefault(src, []).append(CellMatch(
            src=src,
            dst=int(dst_cells[i]),
            kp_1=keypoints_1[m.query_idx],
            kp_2=keypoints_2[m.train_idx],
            match=m,
            match_index=i,
        ))

    log.debug(
        "phase_votes_accumulated",
        phase=phase.index,
        n_matches=len(matches),
        occupied_cells=len(cell_matches),
        occupied_pairs=int(np.count_nonzero(cell_bins)),
    )

    return PhaseVotes(
        phase=phase,
        src_grid=src_grid,
        dst_grid=dst_grid,
        src_cells=src_cells,
        dst_cells=dst_cells,
        cell_bins=cell_bins,
        cell_matches=cell_matches,
    )

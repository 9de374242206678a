# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Pipeline Orchestrator
Wires the grid, voting and filtering modules into one call.

Execution order, repeated for each of the 4 grid phases:
  1. Accumulation  — match → (src cell, dst cell), cell_bins + cell_matches
  2. Selection     — dominant destination per source cell, neighborhood
                     score vs. threshold
Then:
  3. Merge         — union of the phase selections by match index

Phases only read the shared inputs, so their order does not matter.
"""

from __future__ import annotations

from gms_filter.config import get_settings
from gms_filter.models.correspondence import ImageSize, Keypoint, PutativeMatch
from gms_filter.models.output import FilterResult
from gms_filter.modules.filtering.inlier_selector import (
    PhaseSelection,
    merge_phase_inliers,
    select_phase_inliers,
)
from gms_filter.modules.grid.phase_offsets import all_phases
from gms_filter.modules.voting.vote_accumulator import accumulate_votes
from gms_filter.utils.logger import filter_log_context, get_logger

log = get_logger(__name__)


def run_gms(
    size_1: ImageSize,
    size_2: ImageSize,
    keypoints_1: list[Keypoint],
    keypoints_2: list[Keypoint],
    matches: list[PutativeMatch],
    grid_size: int | None = None,
    threshold_factor: float | None = None,
) -> FilterResult:
    """
    Filter putative matches with Grid-based Motion Statistics.

    Args:
        size_1, size_2:           Image dimensions (only used to size the grids)
        keypoints_1, keypoints_2: Keypoint positions in each image
        matches:                  Putative matches (query → image 1,
                                  train → image 2)
        grid_size:                N. Defaults to config GRID_SIZE (10).
        threshold_factor:         Defaults to config THRESHOLD_FACTOR (0.15).

    Returns:
        FilterResult with the retained matches in input order and
        per-phase statistics.

    Raises:
        GridPreconditionError: an image dimension or grid_size is not positive.
        MatchIndexError:       a match references a missing keypoint.
    """
    settings = get_settings()
    if grid_size is None:
        grid_size = settings.grid_size
    if threshold_factor is None:
        threshold_factor = settings.threshold_factor

    phases = all_phases()

    log.info(
        "gms_filter_start",
        n_matches=len(matches),
        n_keypoints_1=len(keypoints_1),
        n_keypoints_2=len(keypoints_2),
        grid_size=grid_size,
        threshold_factor=threshold_factor,
    )

    selections: list[PhaseSelection] = []
    for phase in phases:
        with filter_log_context(
            phase=phase.index, phase_offset=(phase.offset_x, phase.offset_y)
        ):
            votes = accumulate_votes(
                keypoints_1, keypoints_2, matches,
                size_1, size_2, phase, grid_size,
            )
            selections.append(select_phase_inliers(votes, threshold_factor))

    inlier_indices = merge_phase_inliers(selections)

    result = FilterResult(
        grid_size=grid_size,
        threshold_factor=threshold_factor,
        total_matches=len(matches),
        inlier_count=len(inlier_indices),
        inlier_indices=inlier_indices,
        matches=[matches[i] for i in inlier_indices],
        phases=[sel.to_report() for sel in selections],
    )

    log.info(
        "gms_filter_complete",
        total_matches=result.total_matches,
        inliers=result.inlier_count,
        inlier_ratio=round(result.inlier_ratio, 3),
        per_phase=[p.inlier_count for p in result.phases],
    )

    return result


def filter_matches(
    size_1: ImageSize,
    size_2: ImageSize,
    keypoints_1: list[Keypoint],
    keypoints_2: list[Keypoint],
    matches: list[PutativeMatch],
    grid_size: int | None = None,
    threshold_factor: float | None = None,
) -> list[PutativeMatch]:
    """run_gms() returning only the retained matches."""
    return run_gms(
        size_1, size_2, keypoints_1, keypoints_2, matches,
        grid_size=grid_size,
        threshold_factor=threshold_factor,
    ).matches

# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Inlier Selector
Per phase, for every occupied source cell:

  1. dominant destination = argmax of the cell's cell_bins row
     (lowest index wins ties)
  2. neighborhood score of (src, dominant), read from the score matrix
     computed once for the phase
  3. keep every match of (src, dominant) if the score is strictly
     above inlier_threshold(m), m = matches in the source cell

Only the dominant pair of a source cell can contribute; matches from
the same cell that went elsewhere are left for the other phases.
The four phase selections are unioned by match index.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from gms_filter.config import get_settings
from gms_filter.models.grid import GridPhase
from gms_filter.models.output import PhaseReport
from gms_filter.modules.filtering.neighborhood_scorer import neighborhood_score_matrix
from gms_filter.modules.filtering.threshold import inlier_threshold
from gms_filter.modules.voting.vote_accumulator import PhaseVotes
from gms_filter.utils.logger import get_logger

log = get_logger(__name__)


@dataclass
class PhaseSelection:
    """Matches accepted in one phase, by input position."""
    phase: GridPhase
    inlier_indices: list[int] = field(default_factory=list)
    occupied_cells: int = 0
    accepted_cells: int = 0

    def to_report(self) -> PhaseReport:
        return PhaseReport(
            phase=self.phase.index,
            offset=(self.phase.offset_x, self.phase.offset_y),
            occupied_cells=self.occupied_cells,
            accepted_cells=self.accepted_cells,
            inlier_count=len(self.inlier_indices),
        )


def select_phase_inliers(
    votes: PhaseVotes,
    threshold_factor: float | None = None,
) -> PhaseSelection:
    """
    Select the inliers of one phase.

    Args:
        votes:            PhaseVotes from accumulate_votes()
        threshold_factor: Defaults to config THRESHOLD_FACTOR (0.15).

    Returns:
        PhaseSelection with sorted inlier match indices.
    """
    if threshold_factor is None:
        threshold_factor = get_settings().threshold_factor

    n = votes.grid_size
    selection = PhaseSelection(phase=votes.phase)
    scores = neighborhood_score_matrix(votes.cell_bins, n)

    for src in sorted(votes.cell_matches):
        cell = votes.cell_matches[src]
        if not cell:
            continue
        selection.occupied_cells += 1

        row = votes.cell_bins[src]
        dominant = int(np.argmax(row))
        if row[dominant] == 0:
            continue

        score = int(scores[src, dominant])
        if score == 0:
            continue

        tau = inlier_threshold(len(cell), n, threshold_factor)
        if score <= tau:
            continue

        selection.accepted_cells += 1
        selection.inlier_indices.extend(
            cm.match_index for cm in cell if cm.dst == dominant
        )

    selection.inlier_indices.sort()

    log.debug(
        "phase_selection_complete",
        phase=votes.phase.index,
        occupied_cells=selection.occupied_cells,
        accepted_cells=selection.accepted_cells,
        inliers=len(selection.inlier_indices),
        threshold_factor=threshold_factor,
    )

    return selection


def merge_phase_inliers(selections: list[PhaseSelection]) -> list[int]:
    """Union of all phase selections — sorted, each match index once."""
    merged: set[int] = set()
    for sel in selections:
        merged.update(sel.inlier_indices)
    return sorted(merged)

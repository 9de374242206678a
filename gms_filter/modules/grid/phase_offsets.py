# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Grid Phase Table
The four half-cell grid shifts evaluated for every image pair.

  phase 0: (0.0, 0.0)  unshifted
  phase 1: (0.5, 0.0)  shifted half a cell along x
  phase 2: (0.0, 0.5)  shifted half a cell along y
  phase 3: (0.5, 0.5)  shifted along both axes

A coherent cluster cut in two by a cell boundary in one phase lands
inside a single cell in at least one of the others.
"""

from __future__ import annotations

from gms_filter.models.grid import GridPhase

# (offset_x, offset_y) as fractions of a cell, indexed by phase number
PHASE_OFFSETS: tuple[tuple[float, float], ...] = (
    (0.0, 0.0),
    (0.5, 0.0),
    (0.0, 0.5),
    (0.5, 0.5),
)

N_PHASES = len(PHASE_OFFSETS)

GRID_PHASES: tuple[GridPhase, ...] = tuple(
    GridPhase(index=k, offset_x=ox, offset_y=oy)
    for k, (ox, oy) in enumerate(PHASE_OFFSETS)
)


def compute_offset(k: int) -> tuple[float, float]:
    """Return (offset_x, offset_y) for phase k. Raises ValueError outside 0..3."""
    if not 0 <= k < N_PHASES:
        raise ValueError(f"Grid phase must be in 0..{N_PHASES - 1}, got {k}.")
    return PHASE_OFFSETS[k]


def all_phases() -> list[GridPhase]:
    return list(GRID_PHASES)

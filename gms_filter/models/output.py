# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Output Models
Result of a filter run: the retained matches plus per-phase statistics
used for logging and returned by POST /filter.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from gms_filter.models.correspondence import PutativeMatch


class PhaseReport(BaseModel):
    """Selection summary for one grid phase."""
    phase: int = Field(..., ge=0, le=3)
    offset: tuple[float, float]
    occupied_cells: int = Field(0, ge=0, description="Source cells with ≥1 match")
    accepted_cells: int = Field(0, ge=0, description="Source cells whose dominant pair passed")
    inlier_count: int = Field(0, ge=0)


class FilterResult(BaseModel):
    """
    Complete output of one GMS run.
    `inlier_indices` are positions in the input match list, sorted and
    unique; `matches` holds the corresponding PutativeMatch objects.
    """
    grid_size: int
    threshold_factor: float
    total_matches: int = Field(0, ge=0)
    inlier_count: int = Field(0, ge=0)
    inlier_indices: list[int] = Field(default_factory=list)
    matches: list[PutativeMatch] = Field(default_factory=list)
    phases: list[PhaseReport] = Field(default_factory=list)

    @property
    def inlier_ratio(self) -> float:
        return self.inlier_count / self.total_matches if self.total_matches else 0.0

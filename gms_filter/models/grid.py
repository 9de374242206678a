# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Grid Models
A grid phase is one of the four half-cell shifts applied when
partitioning an image; a grid is that phase sized to one image.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GridPhase(BaseModel):
    """One of the 4 fixed fractional grid offsets."""
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, le=3, description="Phase number 0..3")
    offset_x: float = Field(..., description="Fraction of a cell width (0 or 0.5)")
    offset_y: float = Field(..., description="Fraction of a cell height (0 or 0.5)")


class Grid(BaseModel):
    """
    N×N partition of one image under one phase.
    Cell (row, col) has flat index row·N + col.
    """
    model_config = ConfigDict(frozen=True)

    grid_size: int = Field(..., ge=1, description="N cells per axis")
    cell_width: float = Field(..., gt=0.0)
    cell_height: float = Field(..., gt=0.0)
    phase: GridPhase

    @property
    def n_cells(self) -> int:
        return self.grid_size * self.grid_size

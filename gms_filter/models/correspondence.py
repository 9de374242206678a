# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Correspondence Models
Pydantic models for the data handed in by the correspondence generator:
image dimensions, keypoint positions and putative matches.
All three are read-only to the filtering core.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ImageSize(BaseModel):
    """Image extent in pixels. Only the dimensions matter to the grid."""
    model_config = ConfigDict(frozen=True)

    width: float = Field(..., description="Image width in pixels")
    height: float = Field(..., description="Image height in pixels")

    @classmethod
    def from_shape(cls, shape: tuple[int, ...]) -> "ImageSize":
        """Build from a numpy image shape (H, W[, C])."""
        return cls(width=float(shape[1]), height=float(shape[0]))


class Keypoint(BaseModel):
    """A detected 2D feature location in one image."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    @property
    def pt(self) -> tuple[float, float]:
        return (self.x, self.y)


class PutativeMatch(BaseModel):
    """
    A tentative correspondence between keypoint `query_idx` of image 1
    and keypoint `train_idx` of image 2. The distance is never used by
    the filter; it is carried through to the output unchanged.
    """
    model_config = ConfigDict(frozen=True)

    query_idx: int = Field(..., ge=0, description="Index into image 1 keypoints")
    train_idx: int = Field(..., ge=0, description="Index into image 2 keypoints")
    distance: float = Field(0.0, description="Descriptor distance / quality score")

# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Request Models
Body of POST /filter. Response body is models.output.FilterResult.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from gms_filter.models.correspondence import ImageSize, Keypoint, PutativeMatch


class FilterRequest(BaseModel):
    """Everything one GMS run needs; tunables fall back to server config."""
    image_1: ImageSize
    image_2: ImageSize
    keypoints_1: list[Keypoint] = Field(default_factory=list)
    keypoints_2: list[Keypoint] = Field(default_factory=list)
    matches: list[PutativeMatch] = Field(default_factory=list)

    grid_size: Optional[int] = Field(None, ge=1, description="Override GRID_SIZE")
    threshold_factor: Optional[float] = Field(
        None, ge=0.0, description="Override THRESHOLD_FACTOR"
    )

    @property
    def n_keypoints(self) -> int:
        return len(self.keypoints_1) + len(self.keypoints_2)

# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — POST /filter
Runs the GMS filter on a JSON-encoded set of keypoints and putative
matches and returns the retained subset with per-phase statistics.
"""

from __future__ import annotations

import asyncio
import uuid

from fastapi import APIRouter

from gms_filter.api.middleware.error_handler import RequestTooLargeError
from gms_filter.config import get_settings
from gms_filter.core.pipeline import run_gms
from gms_filter.models.output import FilterResult
from gms_filter.models.request import FilterRequest
from gms_filter.utils.logger import filter_log_context, get_logger

router = APIRouter(tags=["filter"])
log = get_logger(__name__)


@router.post(
    "/filter",
    response_model=FilterResult,
    summary="Filter putative matches with GMS",
    description=(
        "Accepts image dimensions, keypoints of both images and putative "
        "matches (query_idx → keypoints_1, train_idx → keypoints_2). "
        "Returns the motion-consistent subset; `inlier_indices` are "
        "positions in the submitted match list."
    ),
)
async def filter_correspondences(req: FilterRequest) -> FilterResult:
    settings = get_settings()
    if req.n_keypoints > settings.max_keypoints:
        raise RequestTooLargeError(
            f"Request carries {req.n_keypoints} keypoints; "
            f"the limit is {settings.max_keypoints}."
        )

    with filter_log_context(
        request_id=uuid.uuid4().hex[:12],
        grid_size=req.grid_size,
        threshold_factor=req.threshold_factor,
    ):
        log.info("filter_request", n_matches=len(req.matches))
        # CPU-bound; to_thread copies the bound log context into the worker
        return await asyncio.to_thread(
            run_gms,
            req.image_1,
            req.image_2,
            req.keypoints_1,
            req.keypoints_2,
            req.matches,
            req.grid_size,
            req.threshold_factor,
        )

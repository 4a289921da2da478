"""POST /api/segment — region-growing segmentation of an uploaded image."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from regiongrow.config import Settings
from regiongrow.dependencies import get_settings
from regiongrow.engine.config import SegmentationConfig
from regiongrow.engine.pipeline import run_segmentation
from regiongrow.engine.regions import label_map, summarize_regions
from regiongrow.errors import RegionGrowError
from regiongrow.models.requests import SegmentRequest
from regiongrow.models.responses import RegionModel, SegmentResponse
from regiongrow.utils.imaging import decode_base64_image

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/segment", response_model=SegmentResponse)
async def segment_image(
    req: SegmentRequest, settings: Settings = Depends(get_settings),
) -> SegmentResponse:
    depth = settings.default_depth if req.depth is None else req.depth
    threshold = settings.default_threshold if req.threshold is None else req.threshold

    if depth > settings.max_depth:
        raise HTTPException(
            status_code=422,
            detail=f"Block depth {depth} exceeds the maximum of {settings.max_depth}",
        )

    try:
        image = decode_base64_image(req.image)
        result = run_segmentation(
            image, depth, threshold, SegmentationConfig(convergence=req.convergence),
        )
    except RegionGrowError as e:
        logger.warning("Segment request rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    regions = summarize_regions(result.lookup, depth)
    return SegmentResponse(
        size=result.side,
        threshold=threshold,
        region_count=len(regions),
        labels=label_map(result.lookup, depth).tolist(),
        regions=[
            RegionModel(
                region_id=r.region_id,
                size=r.size,
                area_pct=r.area_pct,
                mean_colour=list(r.mean_colour),
                stddev=list(r.stddev),
                bbox=r.bbox,
            )
            for r in regions
        ],
        processing_time_ms=result.processing_time_ms,
    )

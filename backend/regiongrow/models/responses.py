"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"


class RegionModel(BaseModel):
    region_id: int
    size: int
    area_pct: float
    mean_colour: list[float]
    stddev: list[float]
    bbox: tuple[int, int, int, int]


class SegmentResponse(BaseModel):
    size: int = Field(..., description="Side length of the segmented block")
    threshold: float
    region_count: int
    labels: list[list[int]] = Field(default_factory=list, description="Region id per pixel, row = y")
    regions: list[RegionModel] = Field(default_factory=list)
    processing_time_ms: float = 0.0

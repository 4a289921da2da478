"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class SegmentRequest(BaseModel):
    image: str = Field(..., description="Base64-encoded raster image (PNG, TIFF, ...)")
    depth: int | None = Field(
        default=None,
        description="Segment the top-left 2^depth x 2^depth block (default from settings)",
    )
    threshold: float | None = Field(
        default=None,
        allow_inf_nan=False,
        description="Maximum merge cost (default from settings)",
    )
    convergence: Literal["two_sweep", "fixpoint"] = Field(
        default="two_sweep",
        description="Growth driver termination policy",
    )

"""Boundary errors — raised on bad caller input, never from inside the engine."""

from __future__ import annotations


class RegionGrowError(ValueError):
    """Base class for input errors reported to callers."""


class InvalidDepthError(RegionGrowError):
    def __init__(self, depth: int) -> None:
        super().__init__(f"Block depth must be >= 0, got {depth}")
        self.depth = depth


class InvalidThresholdError(RegionGrowError):
    def __init__(self, threshold: float) -> None:
        super().__init__(f"Merge cost threshold must be finite and >= 0, got {threshold}")
        self.threshold = threshold


class ImageTooSmallError(RegionGrowError):
    def __init__(self, width: int, height: int, depth: int) -> None:
        side = 1 << depth
        super().__init__(
            f"Image {width}x{height} cannot hold a {side}x{side} block (depth {depth})"
        )
        self.width = width
        self.height = height
        self.depth = depth


class ImageDecodeError(RegionGrowError):
    """Raised when the image bytes cannot be decoded."""

"""RegionGrow segmentation engine."""

from regiongrow.engine.config import SegmentationConfig
from regiongrow.engine.pipeline import SegmentationResult, run_segmentation, segment
from regiongrow.engine.segment import Parent, Pixel, Segment, merge_cost
from regiongrow.engine.segmentation import Segmentation, find_root

__all__ = [
    "SegmentationConfig",
    "SegmentationResult",
    "run_segmentation",
    "segment",
    "Parent",
    "Pixel",
    "Segment",
    "merge_cost",
    "Segmentation",
    "find_root",
]

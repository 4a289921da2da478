"""Region summaries and label maps from a finished segmentation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from regiongrow.engine.pipeline import SegmentLookup
from regiongrow.engine.segment import Segment, band_stddev, mean_colour


@dataclass
class Region:
    """Properties of one root segment."""
    region_id: int
    size: int
    area_pct: float
    mean_colour: tuple[float, ...]
    stddev: tuple[float, ...]
    bbox: tuple[int, int, int, int]        # min_x, min_y, max_x, max_y


def _ordered_roots(lookup: SegmentLookup, n: int) -> dict[Segment, int]:
    """Root segments numbered by first appearance in row-major order."""
    side = 1 << n
    ids: dict[Segment, int] = {}
    for y in range(side):
        for x in range(side):
            root = lookup((x, y))
            if root not in ids:
                ids[root] = len(ids)
    return ids


def label_map(lookup: SegmentLookup, n: int) -> NDArray[np.int64]:
    """2^n x 2^n array of region ids (row = y)."""
    side = 1 << n
    ids = _ordered_roots(lookup, n)
    labels = np.zeros((side, side), dtype=np.int64)
    for root, region_id in ids.items():
        for x, y in root.coordinates():
            labels[y, x] = region_id
    return labels


def summarize_regions(lookup: SegmentLookup, n: int) -> list[Region]:
    total = float((1 << n) ** 2)
    regions = []
    for root, region_id in _ordered_roots(lookup, n).items():
        coords = np.asarray(root.coordinates())
        xs, ys = coords[:, 0], coords[:, 1]
        regions.append(Region(
            region_id=region_id,
            size=root.size,
            area_pct=round(100.0 * root.size / total, 2),
            mean_colour=tuple(round(float(v), 2) for v in mean_colour(root)),
            stddev=tuple(round(float(v), 3) for v in band_stddev(root)),
            bbox=(int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max())),
        ))
    return regions

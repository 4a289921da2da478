"""Segmentation pipeline — wires pixel map, neighbours, growth and driver together."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable

from numpy.typing import NDArray

from regiongrow.engine.config import SegmentationConfig
from regiongrow.engine.growth import (
    create_grow_until_no_change_function,
    create_try_grow_all_function,
    create_try_grow_function,
)
from regiongrow.engine.neighbours import (
    create_best_neighbours_function,
    create_neighbours_function,
)
from regiongrow.engine.segment import Coordinate, Segment
from regiongrow.engine.segmentation import Segmentation, create_pixel_map, find_root
from regiongrow.errors import InvalidThresholdError
from regiongrow.utils.imaging import check_block

logger = logging.getLogger(__name__)

SegmentLookup = Callable[[Coordinate], Segment]


@dataclass
class SegmentationResult:
    """Final state of one segmentation run."""

    n: int
    threshold: float
    segmentation: Segmentation
    lookup: SegmentLookup
    processing_time_ms: float = 0.0

    @property
    def side(self) -> int:
        return 1 << self.n

    def roots(self) -> set[Segment]:
        side = self.side
        return {self.lookup((x, y)) for y in range(side) for x in range(side)}


def run_segmentation(
    image: NDArray,
    n: int,
    threshold: float,
    config: SegmentationConfig | None = None,
) -> SegmentationResult:
    """Segment the top-left 2^n x 2^n block of ``image``.

    ``image`` is an H x W x 3 RGB array or an H x W greyscale array.
    """
    check_block(image, n)
    if not (math.isfinite(threshold) and threshold >= 0):
        raise InvalidThresholdError(threshold)

    start = time.perf_counter()

    pixel_map = create_pixel_map(image)
    neighbours = create_neighbours_function(pixel_map, n)
    best_neighbours = create_best_neighbours_function(neighbours, threshold)
    try_grow = create_try_grow_function(best_neighbours, pixel_map)
    try_grow_all = create_try_grow_all_function(try_grow, n)
    grow_until_no_change = create_grow_until_no_change_function(try_grow_all, config)

    final = grow_until_no_change({})

    def lookup(coord: Coordinate) -> Segment:
        return find_root(final, pixel_map(coord))

    elapsed = (time.perf_counter() - start) * 1000
    result = SegmentationResult(
        n=n,
        threshold=threshold,
        segmentation=final,
        lookup=lookup,
        processing_time_ms=round(elapsed, 1),
    )
    logger.info(
        "Segmented %dx%d block: %d merges, %d regions in %.0fms",
        result.side,
        result.side,
        len(final) // 2,
        len(result.roots()),
        elapsed,
    )
    return result


def segment(
    image: NDArray,
    n: int,
    threshold: float,
    config: SegmentationConfig | None = None,
) -> SegmentLookup:
    """Segment the top-left 2^n x 2^n block and return ``coordinate -> root segment``."""
    return run_segmentation(image, n, threshold, config).lookup

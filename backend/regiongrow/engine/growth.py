"""Growth step and growth driver.

One growth step starts from a coordinate's root segment and looks for a
mutually-best neighbour to merge with. Without one, it walks to its own best
neighbour and tries again from there (gradient descent). Each hop strictly
lowers the best available merge cost, so the walk ends.

A sweep folds the growth step over every coordinate of the block in dither
order; the driver repeats sweeps according to ``SegmentationConfig``.
"""

from __future__ import annotations

import logging
from typing import Callable

from regiongrow.engine.config import Convergence, SegmentationConfig
from regiongrow.engine.dither import coordinates
from regiongrow.engine.neighbours import NeighboursFunction
from regiongrow.engine.segment import Coordinate, Parent, Segment, order_key
from regiongrow.engine.segmentation import PixelMap, Segmentation, find_root

logger = logging.getLogger(__name__)

TryGrowFunction = Callable[..., Segmentation]
SweepFunction = Callable[[Segmentation], Segmentation]


def create_try_grow_function(
    best_neighbours: NeighboursFunction, pixel_map: PixelMap,
) -> TryGrowFunction:
    """Build ``try_grow(segmentation, coord, *, in_place=False)``.

    Returns the updated segmentation. Unless ``in_place`` is set the input
    is left untouched and a merge produces a new dict.
    """

    def grow_from(segmentation: Segmentation, segment: Segment) -> Segmentation:
        while True:
            best = best_neighbours(segmentation, segment)
            if not best:
                return segmentation

            mutual = [b for b in best if segment in best_neighbours(segmentation, b)]
            if mutual:
                partner = min(mutual, key=order_key)
                merged = Parent(segment, partner)
                segmentation[segment] = merged
                segmentation[partner] = merged
                return segmentation

            segment = min(best, key=order_key)

    def try_grow(
        segmentation: Segmentation, coord: Coordinate, *, in_place: bool = False,
    ) -> Segmentation:
        root = find_root(segmentation, pixel_map(coord))
        target = segmentation if in_place else dict(segmentation)
        result = grow_from(target, root)
        if not in_place and len(result) == len(segmentation):
            return segmentation
        return result

    return try_grow


def create_try_grow_all_function(try_grow: TryGrowFunction, n: int) -> SweepFunction:
    """Build a sweep: one growth step per coordinate, in dither order."""
    order = list(coordinates(n))

    def try_grow_all(segmentation: Segmentation) -> Segmentation:
        result = dict(segmentation)
        for coord in order:
            try_grow(result, coord, in_place=True)
        logger.debug(
            "Sweep: %d merges (%d links total)",
            (len(result) - len(segmentation)) // 2,
            len(result),
        )
        return result

    return try_grow_all


def create_grow_until_no_change_function(
    try_grow_all: SweepFunction, config: SegmentationConfig | None = None,
) -> SweepFunction:
    """Build the growth driver for the configured convergence policy."""
    config = config or SegmentationConfig()
    policy: Convergence = config.convergence

    def grow_two_sweeps(segmentation: Segmentation) -> Segmentation:
        first = try_grow_all(segmentation)
        second = try_grow_all(first)
        if first == segmentation:
            logger.debug("Stable after one sweep")
            return first
        return second

    def grow_to_fixpoint(segmentation: Segmentation) -> Segmentation:
        current = segmentation
        for sweep in range(1, config.max_sweeps + 1):
            following = try_grow_all(current)
            if following == current:
                logger.debug("Fixpoint reached after %d sweeps", sweep)
                return following
            current = following
        logger.warning("No fixpoint after %d sweeps, stopping", config.max_sweeps)
        return current

    if policy == "two_sweep":
        return grow_two_sweeps
    if policy == "fixpoint":
        return grow_to_fixpoint
    raise ValueError(f"Unknown convergence policy: {policy!r}")

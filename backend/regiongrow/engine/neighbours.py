"""Neighbour discovery and best-neighbour selection."""

from __future__ import annotations

from typing import Callable

from regiongrow.engine.segment import Coordinate, Segment, merge_cost
from regiongrow.engine.segmentation import PixelMap, Segmentation, find_root

NeighboursFunction = Callable[[Segmentation, Segment], set[Segment]]


def create_neighbours_function(pixel_map: PixelMap, n: int) -> NeighboursFunction:
    """Build ``neighbours(segmentation, segment)`` for the top-left 2^n x 2^n block.

    The returned function yields the current root segments 4-adjacent to any
    pixel of ``segment``, excluding ``segment`` itself.
    """
    side = 1 << n
    # Segments are immutable, so their outer boundary is computed once.
    boundaries: dict[Segment, frozenset[Coordinate]] = {}

    def adjacent(segment: Segment) -> set[Coordinate]:
        coords: set[Coordinate] = set()
        for pixel in segment.pixels():
            x, y = pixel.coordinate
            if x + 1 < side:
                coords.add((x + 1, y))
            if y + 1 < side:
                coords.add((x, y + 1))
            if x > 0:
                coords.add((x - 1, y))
            if y > 0:
                coords.add((x, y - 1))
        return coords

    def outer_boundary(segment: Segment) -> frozenset[Coordinate]:
        boundary = boundaries.get(segment)
        if boundary is None:
            boundary = frozenset(adjacent(segment).difference(segment.coordinates()))
            boundaries[segment] = boundary
        return boundary

    def neighbours(segmentation: Segmentation, segment: Segment) -> set[Segment]:
        if find_root(segmentation, segment.anchor) == segment:
            # A root of its own pixels: those all resolve back to it
            coords = outer_boundary(segment)
        else:
            coords = adjacent(segment)
        roots = {find_root(segmentation, pixel_map(c)) for c in coords}
        roots.discard(segment)
        return roots

    return neighbours


def create_best_neighbours_function(
    neighbours: NeighboursFunction, threshold: float,
) -> NeighboursFunction:
    """Build ``best_neighbours(segmentation, segment)``.

    Keeps the neighbours tied for the lowest merge cost, and only when that
    cost is within ``threshold``. A NaN threshold or cost keeps nothing.
    """

    def best_neighbours(segmentation: Segmentation, segment: Segment) -> set[Segment]:
        candidates = neighbours(segmentation, segment)
        if not candidates:
            return set()

        costs = {n: merge_cost(segment, n) for n in candidates}
        best_cost = min(costs.values())
        if not best_cost <= threshold:
            return set()
        return {n for n, cost in costs.items() if cost <= threshold and cost <= best_cost}

    return best_neighbours

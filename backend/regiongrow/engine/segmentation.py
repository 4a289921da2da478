"""Segmentation state — which segment each segment has been merged into."""

from __future__ import annotations

from typing import Callable

from numpy.typing import NDArray

from regiongrow.engine.segment import Coordinate, Pixel, Segment
from regiongrow.utils.imaging import get_colour_bands

# Maps a segment to the segment that directly subsumes it.
# A segment with no entry is a root.
Segmentation = dict[Segment, Segment]

PixelMap = Callable[[Coordinate], Pixel]


def find_root(segmentation: Segmentation, segment: Segment) -> Segment:
    """Follow parent links up to the top-level segment containing ``segment``."""
    steps = 0
    parent = segmentation.get(segment)
    while parent is not None:
        steps += 1
        assert steps <= len(segmentation), "cycle in segmentation parent links"
        segment = parent
        parent = segmentation.get(segment)
    return segment


def create_pixel_map(image: NDArray) -> PixelMap:
    """Return a function mapping each coordinate to its initial Pixel segment."""
    cache: dict[Coordinate, Pixel] = {}

    def pixel_map(coord: Coordinate) -> Pixel:
        pixel = cache.get(coord)
        if pixel is None:
            pixel = Pixel(coord, get_colour_bands(image, coord))
            cache[coord] = pixel
        return pixel

    return pixel_map

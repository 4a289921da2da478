"""Dither-order traversal of a 2^n x 2^n block.

Coordinates are visited in increasing order of their Bayer ordered-dither
threshold. Consecutive coordinates land far apart, so early growth steps are
spread across the whole block instead of sweeping from one corner.

The 2x2 Bayer matrix (indexed [y][x]) is

    0 2
    3 1

and each doubling refines it as M' = 4 * M + M2, with the finest bit of
(x, y) selecting the most significant base-4 digit.
"""

from __future__ import annotations

from collections.abc import Iterator

from regiongrow.engine.segment import Coordinate


def bayer_index(x: int, y: int, n: int) -> int:
    """Threshold of (x, y) in the 2^n x 2^n Bayer matrix, in [0, 4^n)."""
    d = 0
    for bit in range(n):
        bx = (x >> bit) & 1
        by = (y >> bit) & 1
        d = (d << 2) | (((bx ^ by) << 1) | by)
    return d


def coordinates(n: int) -> Iterator[Coordinate]:
    """Every (x, y) of the block exactly once, in dither order."""
    side = 1 << n
    cells = [(x, y) for y in range(side) for x in range(side)]
    cells.sort(key=lambda c: bayer_index(c[0], c[1], n))
    yield from cells

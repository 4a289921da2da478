"""Segment model — pixels, merged regions and the merge cost between them.

A segment is either a single ``Pixel`` or a ``Parent`` fusing two earlier
segments. Segments are immutable values: merging always builds a new
``Parent``, and two independently built ``Parent(a, b)`` compare and hash
identically.

Merge trees can be thousands of levels deep, so nothing here recurses on
the Python stack, and building a ``Parent`` costs O(bands) regardless of
its size:

- the hash is combined from the children's hashes;
- per-band statistics are pooled from the children's (count, mean, M2);
- equality and ordering walk both trees side by side and stop at the first
  difference.

Segments are totally ordered tag-first: every ``Pixel`` sorts before every
``Parent``, pixels order by (x, y), and parents by ``left`` then ``right``.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Union

import numpy as np
from numpy.typing import NDArray

Coordinate = tuple[int, int]
Colour = tuple[int, ...]

_PIXEL_TAG = 0
_PARENT_TAG = 1


@dataclass(frozen=True, eq=False)
class Pixel:
    """A single pixel: its (x, y) coordinate and one value per colour band."""

    coordinate: Coordinate
    colour: Colour
    key: tuple[int, int, int] = field(init=False, repr=False)
    size: int = field(init=False, repr=False, default=1)
    mean: NDArray[np.float64] = field(init=False, repr=False)
    m2: NDArray[np.float64] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        x, y = self.coordinate
        object.__setattr__(self, "key", (_PIXEL_TAG, int(x), int(y)))
        object.__setattr__(self, "mean", np.asarray(self.colour, dtype=np.float64))
        object.__setattr__(self, "m2", np.zeros(len(self.colour), dtype=np.float64))

    def __hash__(self) -> int:
        return hash(self.key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Pixel, Parent)):
            return NotImplemented
        return isinstance(other, Pixel) and self.key == other.key

    @property
    def anchor(self) -> Pixel:
        return self

    @property
    def stddev(self) -> NDArray[np.float64]:
        return np.zeros_like(self.m2)

    def pixels(self) -> Iterator[Pixel]:
        yield self

    def coordinates(self) -> list[Coordinate]:
        return [self.coordinate]


@dataclass(frozen=True, eq=False)
class Parent:
    """The merger of two previously existing segments."""

    left: Segment
    right: Segment
    size: int = field(init=False, repr=False)
    anchor: Pixel = field(init=False, repr=False)   # leftmost leaf
    mean: NDArray[np.float64] = field(init=False, repr=False)
    m2: NDArray[np.float64] = field(init=False, repr=False)
    _hash: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        mean, m2 = _pooled(self.left, self.right)
        object.__setattr__(self, "size", self.left.size + self.right.size)
        object.__setattr__(self, "anchor", self.left.anchor)
        object.__setattr__(self, "mean", mean)
        object.__setattr__(self, "m2", m2)
        object.__setattr__(self, "_hash", hash((_PARENT_TAG, hash(self.left), hash(self.right))))

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Pixel, Parent)):
            return NotImplemented
        return _same_tree(self, other)

    def __repr__(self) -> str:
        # The default dataclass repr would walk the whole tree.
        return f"Parent(size={self.size}, first={self.anchor.coordinate})"

    @property
    def stddev(self) -> NDArray[np.float64]:
        return np.sqrt(self.m2 / self.size)

    def pixels(self) -> Iterator[Pixel]:
        """Leaf pixels, left subtree first."""
        stack: list[Segment] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, Pixel):
                yield node
            else:
                stack.append(node.right)
                stack.append(node.left)

    def coordinates(self) -> list[Coordinate]:
        return [p.coordinate for p in self.pixels()]


Segment = Union[Pixel, Parent]


def _pooled(a: Segment, b: Segment) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Per-band mean and sum of squared deviations of the union of a and b.

    Pairwise combination of Chan, Golub & LeVeque: exact for identical
    colours, no subtraction of large sums.
    """
    n = a.size + b.size
    delta = b.mean - a.mean
    mean = a.mean + delta * (b.size / n)
    m2 = a.m2 + b.m2 + delta * delta * (a.size * b.size / n)
    return mean, m2


def _same_tree(a: Segment, b: Segment) -> bool:
    stack = [(a, b)]
    while stack:
        x, y = stack.pop()
        if x is y:
            continue
        if hash(x) != hash(y) or x.size != y.size:
            return False
        if isinstance(x, Pixel) or isinstance(y, Pixel):
            if not (isinstance(x, Pixel) and isinstance(y, Pixel) and x.key == y.key):
                return False
            continue
        stack.append((x.right, y.right))
        stack.append((x.left, y.left))
    return True


def _tokens(segment: Segment) -> Iterator[int]:
    """Preorder serialization: a pixel is (0, x, y), a parent is 1 then its children."""
    stack: list[Segment] = [segment]
    while stack:
        node = stack.pop()
        if isinstance(node, Pixel):
            yield from node.key
        else:
            yield _PARENT_TAG
            stack.append(node.right)
            stack.append(node.left)


def compare_segments(a: Segment, b: Segment) -> int:
    """Three-way structural comparison, tag first then children left to right.

    The serialization is prefix-free, so the first differing token decides.
    """
    if a is b:
        return 0
    for x, y in zip(_tokens(a), _tokens(b)):
        if x != y:
            return -1 if x < y else 1
    return 0


# Total order over segments, used to pick deterministically from a set.
order_key = cmp_to_key(compare_segments)


def colour_samples(segment: Segment) -> list[Colour]:
    """Per-pixel colour vectors contained in the segment, left subtree first."""
    return [p.colour for p in segment.pixels()]


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation (variance divided by count)."""
    return float(np.std(np.asarray(values, dtype=np.float64)))


def band_stddev(segment: Segment) -> NDArray[np.float64]:
    """One population standard deviation per colour band, bands taken independently."""
    return segment.stddev


def mean_colour(segment: Segment) -> NDArray[np.float64]:
    return segment.mean


def merge_cost(segment1: Segment, segment2: Segment) -> float:
    """Cost of fusing two segments, summed over colour bands.

    Per band: std(combined) * (n1 + n2) - (std1 * n1 + std2 * n2).
    Similar regions cost little; identical colours cost exactly zero.
    Operands are put in canonical order first so the result is bit-for-bit
    symmetric.
    """
    if compare_segments(segment2, segment1) < 0:
        segment1, segment2 = segment2, segment1

    n1 = float(segment1.size)
    n2 = float(segment2.size)
    _, m2 = _pooled(segment1, segment2)
    combined = np.sqrt(m2 / (n1 + n2))

    per_band = combined * (n1 + n2) - (segment1.stddev * n1 + segment2.stddev * n2)
    return float(per_band.sum())

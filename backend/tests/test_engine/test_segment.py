"""Tests for the segment model and merge-cost arithmetic."""

import numpy as np
import pytest

from regiongrow.engine.segment import (
    Parent,
    Pixel,
    band_stddev,
    colour_samples,
    compare_segments,
    mean_colour,
    merge_cost,
    order_key,
    standard_deviation,
)


def _px(x: int, y: int, *colour: int) -> Pixel:
    return Pixel((x, y), tuple(colour))


def test_standard_deviation_is_population():
    assert standard_deviation([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)
    assert standard_deviation([3]) == 0.0


def test_colour_samples_left_first():
    a, b, c = _px(0, 0, 1, 1, 1), _px(1, 0, 2, 2, 2), _px(0, 1, 3, 3, 3)
    seg = Parent(Parent(a, b), c)
    assert colour_samples(seg) == [(1, 1, 1), (2, 2, 2), (3, 3, 3)]
    assert colour_samples(a) == [(1, 1, 1)]
    assert seg.size == 3
    assert seg.coordinates() == [(0, 0), (1, 0), (0, 1)]


def test_band_stddev_per_band():
    seg = Parent(_px(0, 0, 0, 0, 0), _px(1, 0, 2, 4, 6))
    np.testing.assert_allclose(band_stddev(seg), [1.0, 2.0, 3.0])
    np.testing.assert_allclose(band_stddev(_px(0, 0, 9, 9, 9)), [0.0, 0.0, 0.0])
    np.testing.assert_allclose(mean_colour(seg), [1.0, 2.0, 3.0])


def test_merge_cost_two_pixels():
    a = _px(0, 0, 0, 0, 0)
    b = _px(1, 0, 2, 0, 0)
    # red band: std([0, 2]) * 2 - 0 = 2
    assert merge_cost(a, b) == pytest.approx(2.0)


def test_merge_cost_matches_formula():
    a = Parent(_px(0, 0, 10, 20, 30), _px(1, 0, 12, 18, 30))
    b = Parent(Parent(_px(0, 1, 50, 20, 31), _px(1, 1, 40, 25, 29)), _px(2, 0, 11, 21, 30))

    combined = colour_samples(a) + colour_samples(b)
    expected = 0.0
    for band in range(3):
        sa = standard_deviation([c[band] for c in colour_samples(a)])
        sb = standard_deviation([c[band] for c in colour_samples(b)])
        sc = standard_deviation([c[band] for c in combined])
        expected += sc * 5 - (sa * 2 + sb * 3)

    assert merge_cost(a, b) == pytest.approx(expected)


def test_merge_cost_symmetric():
    a = Parent(_px(0, 0, 10, 200, 30), _px(1, 0, 12, 18, 3))
    b = _px(0, 1, 77, 5, 130)
    assert merge_cost(a, b) == merge_cost(b, a)


def test_merge_cost_identical_colours_is_zero():
    assert merge_cost(_px(0, 0, 5, 6, 7), _px(1, 0, 5, 6, 7)) == 0.0


def test_merge_cost_does_not_mutate_inputs():
    a = _px(0, 0, 0, 0, 0)
    b = Parent(_px(1, 0, 3, 3, 3), _px(2, 0, 4, 4, 4))
    before = (hash(a), hash(b), b.size, b.mean.copy(), b.m2.copy())
    merge_cost(a, b)
    assert (hash(a), hash(b), b.size) == before[:3]
    np.testing.assert_array_equal(b.mean, before[3])
    np.testing.assert_array_equal(b.m2, before[4])


def test_structural_equality_and_hash():
    a, b = _px(0, 0, 1, 2, 3), _px(1, 0, 4, 5, 6)
    p1 = Parent(a, b)
    p2 = Parent(_px(0, 0, 1, 2, 3), _px(1, 0, 4, 5, 6))
    assert p1 == p2
    assert hash(p1) == hash(p2)
    assert p1 != Parent(b, a)
    assert p1 != a
    assert len({p1, p2}) == 1


def test_pixels_order_before_parents():
    a, b = _px(0, 0, 1, 1, 1), _px(1, 0, 1, 1, 1)
    p = Parent(a, b)
    assert sorted([p, b, a], key=order_key) == [a, b, p]
    assert compare_segments(p, a) == 1
    assert compare_segments(a, b) == -1
    assert compare_segments(p, Parent(_px(0, 0, 1, 1, 1), _px(1, 0, 1, 1, 1))) == 0


def test_pixels_order_by_x_then_y():
    assert compare_segments(_px(0, 5, 0, 0, 0), _px(1, 0, 0, 0, 0)) == -1
    assert compare_segments(_px(2, 1, 0, 0, 0), _px(2, 0, 0, 0, 0)) == 1


def test_parents_order_child_by_child():
    a, b, c, d = (_px(0, 0, 0, 0, 0), _px(1, 0, 0, 0, 0),
                  _px(2, 0, 0, 0, 0), _px(3, 0, 0, 0, 0))
    # Left children decide first: a pixel left child beats a parent left child,
    # however the remaining coordinates compare
    nested_left = Parent(Parent(a, b), c)
    pixel_left = Parent(d, a)
    assert min([nested_left, pixel_left], key=order_key) is pixel_left

    # Equal left children fall through to the right ones
    assert compare_segments(Parent(a, b), Parent(a, c)) == -1
    assert compare_segments(Parent(a, Parent(b, c)), Parent(a, d)) == 1


def test_pooled_stats_match_numpy():
    colours = [(10, 200, 3), (12, 18, 30), (77, 5, 130), (40, 40, 40), (0, 255, 9)]
    pixels = [_px(i, 0, *c) for i, c in enumerate(colours)]
    seg = Parent(Parent(pixels[0], Parent(pixels[1], pixels[2])), Parent(pixels[3], pixels[4]))
    data = np.asarray(colours, dtype=np.float64)
    np.testing.assert_allclose(mean_colour(seg), data.mean(axis=0))
    np.testing.assert_allclose(band_stddev(seg), data.std(axis=0))


def test_deep_tree_does_not_recurse():
    seg = _px(0, 0, 0, 0, 0)
    depth = 1500
    for i in range(1, depth):
        seg = Parent(seg, _px(i, 0, i % 256, 0, 0))

    assert seg.size == depth
    assert len(colour_samples(seg)) == depth
    assert seg == Parent(seg.left, seg.right)
    assert band_stddev(seg).shape == (3,)
    assert "size=1500" in repr(seg)

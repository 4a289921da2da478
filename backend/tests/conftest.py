"""Shared test fixtures — small synthetic RGB images."""

from __future__ import annotations

import numpy as np
import pytest


def make_image(rows: list[list[tuple[int, int, int]]]) -> np.ndarray:
    """Build an H x W x 3 uint8 image from rows of (r, g, b) tuples."""
    return np.array(rows, dtype=np.uint8)


# 2x2, four slightly different near-grey pixels
NEAR_GREY_2X2 = make_image([
    [(100, 100, 100), (101, 100, 100)],
    [(100, 101, 100), (100, 100, 101)],
])

# 2x2, top row identical, bottom row two distinct saturated colours
IDENTICAL_PAIR_2X2 = make_image([
    [(10, 10, 10), (10, 10, 10)],
    [(200, 0, 0), (0, 200, 0)],
])

# 2x2 grey ramp where (0,0)'s best neighbour prefers someone else
DESCENT_2X2 = make_image([
    [(0, 0, 0), (10, 10, 10)],
    [(100, 100, 100), (11, 11, 11)],
])

# 2x2, every pixel the same colour
UNIFORM_2X2 = make_image([
    [(50, 50, 50), (50, 50, 50)],
    [(50, 50, 50), (50, 50, 50)],
])


def _halves(side: int) -> np.ndarray:
    img = np.zeros((side, side, 3), dtype=np.uint8)
    img[:, side // 2:] = 255
    return img


# 4x4, left half black, right half white
HALVES_4X4 = _halves(4)


def _noise(side: int, seed: int = 7) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(side, side, 3), dtype=np.uint8)


# 8x8 random colours
NOISE_8X8 = _noise(8)


@pytest.fixture
def near_grey_2x2() -> np.ndarray:
    return NEAR_GREY_2X2.copy()


@pytest.fixture
def identical_pair_2x2() -> np.ndarray:
    return IDENTICAL_PAIR_2X2.copy()


@pytest.fixture
def descent_2x2() -> np.ndarray:
    return DESCENT_2X2.copy()


@pytest.fixture
def halves_4x4() -> np.ndarray:
    return HALVES_4X4.copy()


@pytest.fixture
def noise_8x8() -> np.ndarray:
    return NOISE_8X8.copy()

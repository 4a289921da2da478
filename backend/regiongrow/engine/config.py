"""Segmentation configuration — controls how the growth driver terminates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Convergence = Literal["two_sweep", "fixpoint"]


@dataclass
class SegmentationConfig:
    """Controls growth-driver termination."""

    # "two_sweep": run two sweeps, return the first result if it changed
    # nothing, otherwise the second, and stop.
    # "fixpoint": keep sweeping until a sweep changes nothing.
    convergence: Convergence = "two_sweep"

    # Upper bound on sweeps in "fixpoint" mode
    max_sweeps: int = 64

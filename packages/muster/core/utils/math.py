"""Math utilities for grid arithmetic."""

from __future__ import annotations

from collections.abc import Iterable
import math
from typing import TypeVar

import numpy as np

Number = TypeVar("Number", int, float, np.number)


def half_up(x: float) -> int:
    """Round to the nearest integer, with halves rounding toward +infinity.

    Grid math uses this everywhere instead of the built-in ``round``, which
    rounds halves to even and would make ``-0.5`` and ``0.5`` land on
    different sides of zero depending on parity.

    Args:
        x: Value to round

    Returns:
        Rounded integer

    Example:
        >>> half_up(2.5), half_up(-0.5), half_up(-1.8)
        (3, 0, -2)
    """
    return math.floor(x + 0.5)


def sign(x: float) -> int:
    """Return -1, 0 or 1 according to the sign of x."""
    if x > 0:
        return 1
    if x < 0:
        return -1
    return 0


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def centroid(points: Iterable[tuple[float, float]]) -> tuple[float, float]:
    """Mean of a set of 2-D points; the origin for an empty set."""
    arr = np.asarray(list(points), dtype=float)
    if arr.size == 0:
        return (0.0, 0.0)
    mean = arr.mean(axis=0)
    return (float(mean[0]), float(mean[1]))


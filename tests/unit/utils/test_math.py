"""Tests for grid math helpers."""

import pytest

from muster.core.utils.math import centroid, clamp, half_up, sign


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.5, 1), (-0.5, 0), (1.5, 2), (2.5, 3), (-1.5, -1), (-1.8, -2), (0.49, 0), (3.0, 3)],
)
def test_half_up(value, expected):
    assert half_up(value) == expected


def test_sign():
    assert [sign(v) for v in (-3.2, 0, 0.0, 7)] == [-1, 0, 0, 1]


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(1.5, 0.0, 3.0) == 1.5


def test_centroid():
    assert centroid([(1, 0), (-1, 0), (0, 3)]) == pytest.approx((0.0, 1.0))
    assert centroid([]) == (0.0, 0.0)


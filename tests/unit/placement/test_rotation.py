"""Tests for quarter-turn rotation and facing derivation."""

from __future__ import annotations

import pytest

from muster.core.models.geometry import Facing, GridOffset
from muster.core.placement import facing_from_vector, natural_facing, rotate_offset, rotation_steps


@pytest.mark.parametrize(
    ("from_facing", "to_facing", "steps"),
    [
        (Facing.NORTH, Facing.NORTH, 0),
        (Facing.NORTH, Facing.EAST, 1),
        (Facing.NORTH, Facing.WEST, 3),
        (Facing.WEST, Facing.NORTH, 1),
        (Facing.SOUTH, Facing.NORTH, 2),
        (Facing.EAST, Facing.NORTH, 3),
    ],
)
def test_rotation_steps(from_facing: Facing, to_facing: Facing, steps: int):
    assert rotation_steps(from_facing, to_facing) == steps


def test_one_step_turns_north_into_east():
    """With y growing downward, (0, -1) rotates clockwise to (1, 0)."""
    assert rotate_offset(GridOffset(dx=0, dy=-1), 1) == GridOffset(dx=1, dy=0)
    assert rotate_offset(GridOffset(dx=1, dy=0), 1) == GridOffset(dx=0, dy=1)


def test_four_steps_return_to_start():
    offset = GridOffset(dx=2, dy=-1)
    turned = offset
    for _ in range(4):
        turned = rotate_offset(turned, 1)
    assert turned == offset
    assert rotate_offset(offset, 4) == offset
    assert rotate_offset(offset, -1) == rotate_offset(offset, 3)


def test_wedge_rotated_once_is_exact():
    """Wedge slots for four members turned one quarter clockwise."""
    wedge = [(-2, 2), (-1, 1), (1, 1), (2, 2)]
    rotated = [rotate_offset(GridOffset(dx=dx, dy=dy), 1).as_tuple() for dx, dy in wedge]
    assert rotated == [(-2, -2), (-1, -1), (-1, 1), (-2, 2)]


class TestFacingFromVector:
    """Tests for cardinal facing of a vector."""

    def test_dominant_axis(self):
        assert facing_from_vector(3, 1) is Facing.EAST
        assert facing_from_vector(-3, 1) is Facing.WEST
        assert facing_from_vector(1, 3) is Facing.SOUTH
        assert facing_from_vector(1, -3) is Facing.NORTH

    def test_ties_go_vertical(self):
        assert facing_from_vector(1, 1) is Facing.SOUTH
        assert facing_from_vector(-1, -1) is Facing.NORTH

    def test_near_zero_faces_north(self):
        assert facing_from_vector(0, 0) is Facing.NORTH
        assert facing_from_vector(1e-9, -1e-9) is Facing.NORTH


class TestNaturalFacing:
    """Tests for the facing captured at merge time."""

    def test_followers_behind_leader_face_north(self):
        followers = [GridOffset(dx=1, dy=0), GridOffset(dx=-1, dy=0), GridOffset(dx=0, dy=1)]
        assert natural_facing(followers) is Facing.NORTH

    def test_followers_west_of_leader_face_east(self):
        followers = [GridOffset(dx=-1, dy=0), GridOffset(dx=-2, dy=1)]
        assert natural_facing(followers) is Facing.EAST

    def test_balanced_followers_default_north(self):
        followers = [GridOffset(dx=1, dy=0), GridOffset(dx=-1, dy=0)]
        assert natural_facing(followers) is Facing.NORTH

    def test_no_followers(self):
        assert natural_facing([]) is Facing.NORTH

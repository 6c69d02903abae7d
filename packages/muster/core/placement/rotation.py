"""Quarter-turn rotation and facing derivation.

Rotation only ever happens in whole 90 degree steps between the four
cardinal facings, so every computation stays in integers.
"""

from __future__ import annotations

from collections.abc import Iterable
import math

from muster.core.models.geometry import FACING_ORDER, Facing, GridOffset
from muster.core.utils.math import centroid

# Vectors shorter than this have no meaningful direction
NEAR_ZERO = 1e-6


def rotation_steps(from_facing: Facing, to_facing: Facing) -> int:
    """Number of clockwise quarter turns from one facing to another.

    Example:
        >>> rotation_steps(Facing.NORTH, Facing.WEST)
        3
    """
    return (to_facing.index - from_facing.index + 4) % 4


def rotate_offset(offset: GridOffset, steps: int) -> GridOffset:
    """Rotate an offset clockwise by ``steps`` quarter turns.

    With y growing downward one clockwise step maps (dx, dy) to (-dy, dx):
    north (0, -1) becomes east (1, 0).

    Args:
        offset: Offset to rotate.
        steps: Clockwise quarter turns; any integer, taken modulo 4.

    Returns:
        Rotated offset.
    """
    dx, dy = offset.dx, offset.dy
    for _ in range(steps % 4):
        dx, dy = -dy, dx
    return GridOffset(dx=dx, dy=dy)


def facing_from_vector(vx: float, vy: float) -> Facing:
    """Cardinal facing of a direction vector.

    The dominant axis decides; ties go to the vertical axis, and a
    near-zero vector faces north.
    """
    if math.hypot(vx, vy) < NEAR_ZERO:
        return Facing.NORTH
    if abs(vx) > abs(vy):
        return Facing.EAST if vx > 0 else Facing.WEST
    return Facing.SOUTH if vy > 0 else Facing.NORTH


def natural_facing(follower_offsets: Iterable[GridOffset]) -> Facing:
    """Facing of a formation captured at merge time.

    The leader sits at (0, 0); the party faces along the vector from the
    centroid of everyone else toward the leader.

    Example:
        >>> natural_facing([GridOffset(dx=-1, dy=1), GridOffset(dx=1, dy=1)])
        <Facing.NORTH: 'north'>
    """
    cx, cy = centroid((o.dx, o.dy) for o in follower_offsets)
    return facing_from_vector(-cx, -cy)

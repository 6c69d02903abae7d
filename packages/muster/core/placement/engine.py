"""Ideal placement of formation members before collision checks."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from muster.core.models.geometry import Footprint, GridCell, GridOffset, Point
from muster.core.placement.rotation import rotate_offset
from muster.core.utils.math import half_up


class PlacementSlot(BaseModel):
    """One member's pre-collision target.

    Attributes:
        agent_id: Member being placed.
        footprint: Member size in cells.
        formation_offset: Offset after the formation transform, before rotation.
        rotated_offset: Offset after rotation.
        ideal_cell: Anchor + rotated offset.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    agent_id: str
    footprint: Footprint
    formation_offset: GridOffset
    rotated_offset: GridOffset
    ideal_cell: GridCell


def anchor_cell_for(center: Point, anchor_footprint: Footprint, grid_size: float) -> GridCell:
    """Cell of the leader slot for a composite centred on ``center``.

    The composite is centred on its leader, so the leader's top-left cell is
    the centre minus half the leader's footprint.
    """
    return GridCell(
        x=half_up((center.x - anchor_footprint.width * grid_size / 2) / grid_size),
        y=half_up((center.y - anchor_footprint.height * grid_size / 2) / grid_size),
    )


def plan_slots(
    anchor: GridCell,
    members: Sequence[tuple[str, Footprint, GridOffset]],
    steps: int,
) -> list[PlacementSlot]:
    """Rotate formation offsets around the anchor.

    Args:
        anchor: Leader slot cell.
        members: (agent_id, footprint, formation offset) in batch order.
        steps: Clockwise quarter turns.

    Returns:
        One slot per member, same order as given.
    """
    slots: list[PlacementSlot] = []
    for agent_id, footprint, offset in members:
        rotated = rotate_offset(offset, steps)
        slots.append(
            PlacementSlot(
                agent_id=agent_id,
                footprint=footprint,
                formation_offset=offset,
                rotated_offset=rotated,
                ideal_cell=anchor.shifted(rotated),
            )
        )
    return slots


def placement_order(slots: Sequence[PlacementSlot]) -> list[PlacementSlot]:
    """Order slots so members nearest the formation centre claim cells first.

    Sorting is stable, so ties keep batch order.
    """
    return sorted(slots, key=lambda s: s.rotated_offset.manhattan)

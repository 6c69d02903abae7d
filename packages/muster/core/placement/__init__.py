"""Rotation, ideal placement and collision-aware spot resolution."""

from muster.core.placement.engine import (
    PlacementSlot,
    anchor_cell_for,
    placement_order,
    plan_slots,
)
from muster.core.placement.resolver import (
    BatchClaims,
    SpotResolution,
    SpotResolver,
    ring_cells,
)
from muster.core.placement.rotation import (
    facing_from_vector,
    natural_facing,
    rotate_offset,
    rotation_steps,
)

__all__ = [
    "BatchClaims",
    "PlacementSlot",
    "SpotResolution",
    "SpotResolver",
    "anchor_cell_for",
    "facing_from_vector",
    "natural_facing",
    "placement_order",
    "plan_slots",
    "ring_cells",
    "rotate_offset",
    "rotation_steps",
]

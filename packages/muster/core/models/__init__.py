"""Core data models."""

from muster.core.models.agent import AgentRecord, AgentSpawn, Occupant
from muster.core.models.geometry import (
    FACING_ORDER,
    Facing,
    Footprint,
    GridCell,
    GridOffset,
    Point,
    Rect,
)
from muster.core.models.light import EffectMode, LightAnimation, LightEffect, LightProfile
from muster.core.models.movement import MovementProfile

__all__ = [
    "AgentRecord",
    "AgentSpawn",
    "EffectMode",
    "FACING_ORDER",
    "Facing",
    "Footprint",
    "GridCell",
    "GridOffset",
    "LightAnimation",
    "LightEffect",
    "LightProfile",
    "MovementProfile",
    "Occupant",
    "Point",
    "Rect",
]

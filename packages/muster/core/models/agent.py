"""Agent models exchanged with the entity directory."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from muster.core.models.geometry import Footprint, Point, Rect
from muster.core.models.light import LightEffect, LightProfile
from muster.core.models.movement import MovementProfile


class AgentRecord(BaseModel):
    """Current state of one agent as reported by the entity directory.

    Attributes:
        agent_id: Stable identity.
        name: Display name.
        footprint: Size in grid cells.
        position: World position of the top-left corner, None while the agent
            has no placed representation (e.g. while merged into a party).
        is_composite: True for party composites.
        light: Base (default) light profile.
        movement: Movement profile.
        light_override: Explicit light set on a currently placed representation.
        derived_light: Host-computed light with active effects applied.
        light_effects: Active temporary effects touching light attributes.
        equipped_lights: Light profiles of equipped light-emitting items.
        image: Optional portrait/token image reference.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    agent_id: str
    name: str = ""
    footprint: Footprint = Field(default_factory=Footprint)
    position: Point | None = None
    is_composite: bool = False
    light: LightProfile = Field(default_factory=LightProfile)
    movement: MovementProfile = Field(default_factory=MovementProfile)
    light_override: LightProfile | None = None
    derived_light: LightProfile | None = None
    light_effects: tuple[LightEffect, ...] = ()
    equipped_lights: tuple[LightProfile, ...] = ()
    image: str | None = None

    @property
    def is_placed(self) -> bool:
        return self.position is not None

    def rect(self, grid_size: float) -> Rect:
        if self.position is None:
            raise ValueError(f"Agent '{self.agent_id}' is not placed")
        return Rect(
            x=self.position.x,
            y=self.position.y,
            width=self.footprint.width * grid_size,
            height=self.footprint.height * grid_size,
        )

    def center(self, grid_size: float) -> Point:
        return self.rect(grid_size).center


class AgentSpawn(BaseModel):
    """Request to create one individual agent representation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_agent_id: str | None = Field(
        default=None, description="Agent this representation stands for (None for composites)"
    )
    name: str
    footprint: Footprint = Field(default_factory=Footprint)
    position: Point
    is_composite: bool = False
    light: LightProfile = Field(default_factory=LightProfile)
    movement: MovementProfile = Field(default_factory=MovementProfile)
    image: str | None = None


class Occupant(BaseModel):
    """An agent currently occupying space, as returned by occupancy queries."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    agent_id: str
    rect: Rect

"""Scene description files for the command line."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from muster.core.config.loader import load_config
from muster.core.models.agent import AgentRecord
from muster.core.models.geometry import Footprint, Point
from muster.core.models.light import LightProfile
from muster.core.models.movement import MovementProfile
from muster.core.world.memory import InMemoryScene


class WallSpec(BaseModel):
    """Wall segment in grid cells."""

    model_config = ConfigDict(extra="forbid")

    x1: float
    y1: float
    x2: float
    y2: float


class AgentSpec(BaseModel):
    """Agent placed at a grid cell."""

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str = ""
    x: int
    y: int
    width: float = 1
    height: float = 1
    light: LightProfile = Field(default_factory=LightProfile)
    movement: MovementProfile = Field(default_factory=MovementProfile)
    image: str | None = None


class SceneSpec(BaseModel):
    """A grid, its walls and its agents.

    Example (YAML):
        grid_size: 100
        walls:
          - {x1: 5, y1: 0, x2: 5, y2: 10}
        agents:
          - {id: a, name: Aria, x: 2, y: 2}
    """

    model_config = ConfigDict(extra="forbid")

    grid_size: int = Field(default=100, gt=0)
    walls: list[WallSpec] = Field(default_factory=list)
    agents: list[AgentSpec] = Field(default_factory=list)


def build_scene(spec: SceneSpec) -> InMemoryScene:
    """Materialize a scene description; cell coordinates become pixels."""
    grid = spec.grid_size
    scene = InMemoryScene(grid_size=grid)
    for wall in spec.walls:
        scene.add_wall(
            Point(x=wall.x1 * grid, y=wall.y1 * grid),
            Point(x=wall.x2 * grid, y=wall.y2 * grid),
        )
    for agent in spec.agents:
        scene.add_agent(
            AgentRecord(
                agent_id=agent.id,
                name=agent.name or agent.id,
                footprint=Footprint(width=agent.width, height=agent.height),
                position=Point(x=agent.x * grid, y=agent.y * grid),
                light=agent.light,
                movement=agent.movement,
                image=agent.image,
            )
        )
    return scene


def load_scene(path: str | Path) -> InMemoryScene:
    return build_scene(SceneSpec.model_validate(load_config(path)))

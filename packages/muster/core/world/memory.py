"""In-memory scene for fast, isolated testing and offline planning.

Implements every collaborator protocol (spatial, occupancy, directory,
composite store) over plain dictionaries. Not thread-safe (use per-test
instance).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import copy
import itertools
import json
import logging
from typing import Any

from muster.core.models.agent import AgentRecord, AgentSpawn, Occupant
from muster.core.models.geometry import Point, Rect
from muster.core.world.protocols import DataReadyCallback

logger = logging.getLogger(__name__)

Segment = tuple[Point, Point]


def _orientation(a: Point, b: Point, c: Point) -> int:
    cross = (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)
    if abs(cross) < 1e-9:
        return 0
    return 1 if cross > 0 else -1


def _on_segment(a: Point, b: Point, p: Point) -> bool:
    return (
        min(a.x, b.x) - 1e-9 <= p.x <= max(a.x, b.x) + 1e-9
        and min(a.y, b.y) - 1e-9 <= p.y <= max(a.y, b.y) + 1e-9
    )


def segments_intersect(p1: Point, p2: Point, q1: Point, q2: Point) -> bool:
    """True if segment p1-p2 touches or crosses segment q1-q2."""
    o1 = _orientation(p1, p2, q1)
    o2 = _orientation(p1, p2, q2)
    o3 = _orientation(q1, q2, p1)
    o4 = _orientation(q1, q2, p2)

    if o1 != o2 and o3 != o4:
        return True

    # Collinear special cases
    if o1 == 0 and _on_segment(p1, p2, q1):
        return True
    if o2 == 0 and _on_segment(p1, p2, q2):
        return True
    if o3 == 0 and _on_segment(q1, q2, p1):
        return True
    if o4 == 0 and _on_segment(q1, q2, p2):
        return True
    return False


class InMemoryScene:
    """Scene of walls, agents and stored composite records.

    Attributes:
        walls: Movement-blocking wall segments.
        agents: Placed agents by id.
        records: Stored composite records by id (JSON-normalized copies).
        fail_next_create: Make the next create() raise (partial failure tests).
        fail_saves: Make every save() raise.

    Example:
        >>> scene = InMemoryScene(grid_size=100)
        >>> scene.add_wall(Point(x=300, y=0), Point(x=300, y=500))
        >>> scene.is_blocked(Point(x=250, y=50), Point(x=350, y=50))
        True
    """

    def __init__(self, grid_size: int = 100) -> None:
        self._grid_size = grid_size
        self.walls: list[Segment] = []
        self.agents: dict[str, AgentRecord] = {}
        self.records: dict[str, dict[str, Any]] = {}
        self.fail_next_create = False
        self.fail_saves = False
        self._ids = itertools.count(1)
        self._subscribers: list[DataReadyCallback] = []

    # Spatial service

    @property
    def grid_size(self) -> int:
        return self._grid_size

    def add_wall(self, start: Point, end: Point) -> None:
        self.walls.append((start, end))

    def is_blocked(self, start: Point, end: Point) -> bool:
        return any(segments_intersect(start, end, a, b) for a, b in self.walls)

    # Occupancy

    def occupants(self, rect: Rect, exclude: Iterable[str] = ()) -> list[Occupant]:
        skip = set(exclude)
        found: list[Occupant] = []
        for agent in self.agents.values():
            if agent.agent_id in skip or not agent.is_placed:
                continue
            agent_rect = agent.rect(self._grid_size)
            if agent_rect.overlaps(rect):
                found.append(Occupant(agent_id=agent.agent_id, rect=agent_rect))
        return found

    # Entity directory

    def add_agent(self, agent: AgentRecord) -> AgentRecord:
        """Place a pre-built agent (scene setup)."""
        self.agents[agent.agent_id] = agent
        return agent

    def get(self, agent_id: str) -> AgentRecord | None:
        return self.agents.get(agent_id)

    def create(self, spawns: Sequence[AgentSpawn]) -> list[str]:
        if self.fail_next_create:
            self.fail_next_create = False
            raise RuntimeError("scene refused to create agents")

        created: list[str] = []
        for spawn in spawns:
            source = self.agents.get(spawn.source_agent_id) if spawn.source_agent_id else None
            if source is not None:
                # Re-place a known agent with its restored light
                self.agents[source.agent_id] = source.model_copy(
                    update={"position": spawn.position, "light": spawn.light}
                )
                created.append(source.agent_id)
                continue

            prefix = "party" if spawn.is_composite else "agent"
            agent_id = spawn.source_agent_id or f"{prefix}-{next(self._ids)}"
            self.agents[agent_id] = AgentRecord(
                agent_id=agent_id,
                name=spawn.name,
                footprint=spawn.footprint,
                position=spawn.position,
                is_composite=spawn.is_composite,
                light=spawn.light,
                movement=spawn.movement,
                image=spawn.image,
            )
            created.append(agent_id)
        logger.debug("Created %d agent(s): %s", len(created), created)
        return created

    def destroy(self, agent_ids: Sequence[str]) -> None:
        """Remove placed representations.

        Composites disappear entirely; ordinary agents stay resolvable but
        become unplaced.
        """
        for agent_id in agent_ids:
            agent = self.agents.get(agent_id)
            if agent is None:
                continue
            if agent.is_composite:
                del self.agents[agent_id]
            else:
                self.agents[agent_id] = agent.model_copy(
                    update={"position": None, "light_override": None}
                )
        logger.debug("Destroyed agent(s): %s", list(agent_ids))

    def move(self, agent_id: str, position: Point) -> None:
        agent = self.agents[agent_id]
        self.agents[agent_id] = agent.model_copy(update={"position": position})

    def subscribe(self, callback: DataReadyCallback) -> None:
        self._subscribers.append(callback)

    def update_agent(self, agent_id: str, **changes: Any) -> AgentRecord:
        """Change an agent's data and announce it as ready."""
        agent = self.agents[agent_id].model_copy(update=changes)
        self.agents[agent_id] = agent
        self.emit_data_ready(agent_id)
        return agent

    def emit_data_ready(self, agent_id: str) -> None:
        for callback in list(self._subscribers):
            callback(agent_id)

    # Composite store

    def load(self, composite_id: str) -> dict[str, Any] | None:
        data = self.records.get(composite_id)
        return copy.deepcopy(data) if data is not None else None

    def save(self, composite_id: str, data: dict[str, Any]) -> None:
        if self.fail_saves:
            raise OSError(f"store unavailable for {composite_id}")
        # Normalize through JSON so nothing non-serializable sneaks in
        self.records[composite_id] = json.loads(json.dumps(data))

    def delete(self, composite_id: str) -> None:
        self.records.pop(composite_id, None)

    def list_ids(self) -> list[str]:
        return list(self.records.keys())

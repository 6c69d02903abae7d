"""Grid helpers for scene assertions."""

from __future__ import annotations

from muster.core.world.memory import InMemoryScene


def cell_of(scene: InMemoryScene, agent_id: str) -> tuple[int, int]:
    """Grid cell of a placed agent."""
    position = scene.get(agent_id).position
    assert position is not None, f"{agent_id} is not placed"
    return (int(position.x // scene.grid_size), int(position.y // scene.grid_size))

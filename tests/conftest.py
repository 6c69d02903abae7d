"""Shared pytest fixtures for muster tests."""

from __future__ import annotations

from collections.abc import Callable
import logging

import pytest

from muster.core.config.models import MusterConfig
from muster.core.models.agent import AgentRecord
from muster.core.models.geometry import Footprint, Point
from muster.core.models.light import LightProfile
from muster.core.models.movement import MovementProfile
from muster.core.party.orchestrator import PartyOrchestrator
from muster.core.world.memory import InMemoryScene
from muster.core.world.notify import RecordingNotifier

GRID = 100

# ============================================================================
# Scene Fixtures
# ============================================================================


@pytest.fixture
def scene() -> InMemoryScene:
    """Empty 100px grid with no walls."""
    return InMemoryScene(grid_size=GRID)


@pytest.fixture
def place(scene: InMemoryScene) -> Callable[..., AgentRecord]:
    """Place an agent at a grid cell.

    Usage: place("a", 2, 3, speed=25, types={"walk"}, bright=10, width=2)
    """

    def _place(
        agent_id: str,
        x: int,
        y: int,
        *,
        width: float = 1,
        height: float = 1,
        speed: float = 30,
        types: set[str] | None = None,
        bright: float = 0,
        dim: float = 0,
        **extra,
    ) -> AgentRecord:
        return scene.add_agent(
            AgentRecord(
                agent_id=agent_id,
                name=agent_id.upper(),
                footprint=Footprint(width=width, height=height),
                position=Point(x=x * GRID, y=y * GRID),
                light=LightProfile(bright=bright, dim=dim),
                movement=MovementProfile(speed=speed, types=frozenset(types or {"walk"})),
                **extra,
            )
        )

    return _place


# ============================================================================
# Orchestrator Fixtures
# ============================================================================


@pytest.fixture
def config() -> MusterConfig:
    return MusterConfig()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def orchestrator(
    scene: InMemoryScene, notifier: RecordingNotifier, config: MusterConfig
) -> PartyOrchestrator:
    """Orchestrator wired entirely to the in-memory scene."""
    return PartyOrchestrator(scene, scene, scene, scene, notifier=notifier, config=config)


@pytest.fixture
def diamond(place: Callable[..., AgentRecord]) -> list[str]:
    """Leader at (5, 5) with members east, west and south of it."""
    place("lead", 5, 5)
    place("east", 6, 5)
    place("west", 4, 5)
    place("south", 5, 6)
    return ["lead", "east", "west", "south"]


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def isolated_logging():
    """Drop root handlers installed by configure_logging during a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)

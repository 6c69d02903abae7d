"""Movement aggregation: the party moves at its slowest member's pace."""

from __future__ import annotations

from collections.abc import Iterable
import logging

from muster.core.config.models import MovementConfig
from muster.core.errors import MissingAgentData
from muster.core.models.movement import MovementProfile
from muster.core.world.protocols import EntityDirectory

logger = logging.getLogger(__name__)


def aggregate_movement(
    profiles: Iterable[MovementProfile],
    default_speed: float = 30.0,
) -> MovementProfile:
    """Minimum speed and intersected movement types.

    An empty input yields ``default_speed`` and no movement types.

    Example:
        >>> aggregate_movement([
        ...     MovementProfile(speed=30, types={"walk", "swim"}),
        ...     MovementProfile(speed=25, types={"walk"}),
        ... ])
        MovementProfile(speed=25.0, types=frozenset({'walk'}))
    """
    speed: float | None = None
    types: frozenset[str] | None = None
    for profile in profiles:
        speed = profile.speed if speed is None else min(speed, profile.speed)
        types = profile.types if types is None else types & profile.types

    if speed is None:
        return MovementProfile(speed=default_speed, types=frozenset())
    return MovementProfile(speed=speed, types=types or frozenset())


class MovementAggregator:
    """Aggregates movement from live member data."""

    def __init__(self, directory: EntityDirectory, config: MovementConfig | None = None) -> None:
        self.directory = directory
        self.config = config or MovementConfig()

    def aggregate(self, agent_ids: Iterable[str]) -> MovementProfile:
        profiles: list[MovementProfile] = []
        for agent_id in agent_ids:
            agent = self.directory.get(agent_id)
            if agent is None:
                logger.warning("Skipping member in movement aggregation: %s", MissingAgentData(agent_id))
                continue
            profiles.append(agent.movement)
        return aggregate_movement(profiles, default_speed=self.config.default_speed)

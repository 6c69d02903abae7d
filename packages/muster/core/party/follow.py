"""Follow-the-leader: followers keep their world offsets as the leader moves."""

from __future__ import annotations

from collections.abc import Sequence
import logging

from muster.core.errors import ConfigurationError, MissingAgentData
from muster.core.models.geometry import Point
from muster.core.world.protocols import EntityDirectory

logger = logging.getLogger(__name__)


class FollowLeader:
    """Follow-the-leader state for one group of placed agents.

    Offsets are captured between top-left positions when the mode is engaged
    and re-applied on every leader move until disengaged.
    """

    def __init__(self, directory: EntityDirectory) -> None:
        self.directory = directory
        self.leader_id: str | None = None
        self.offsets: dict[str, tuple[float, float]] = {}

    @property
    def active(self) -> bool:
        return self.leader_id is not None

    def engage(self, leader_id: str, follower_ids: Sequence[str]) -> dict[str, tuple[float, float]]:
        """Capture follower offsets relative to the leader.

        Raises:
            ConfigurationError: With fewer than two agents in total.
            MissingAgentData: If the leader is missing or not placed.
        """
        followers = [f for f in dict.fromkeys(follower_ids) if f != leader_id]
        if not followers:
            raise ConfigurationError("Follow-the-leader needs at least two agents")

        leader = self.directory.get(leader_id)
        if leader is None or leader.position is None:
            raise MissingAgentData(leader_id)

        offsets: dict[str, tuple[float, float]] = {}
        for follower_id in followers:
            follower = self.directory.get(follower_id)
            if follower is None or follower.position is None:
                logger.warning("Follower %s cannot be resolved, leaving it behind", follower_id)
                continue
            offsets[follower_id] = (
                follower.position.x - leader.position.x,
                follower.position.y - leader.position.y,
            )

        self.leader_id = leader_id
        self.offsets = offsets
        logger.info("Follow-the-leader engaged: %s leads %d agent(s)", leader_id, len(offsets))
        return dict(offsets)

    def leader_moved(self, position: Point) -> dict[str, Point]:
        """Move every follower to the leader's new position plus its offset.

        Returns:
            New follower positions by id (empty when not engaged).
        """
        if self.leader_id is None:
            return {}

        moves: dict[str, Point] = {}
        for follower_id, (dx, dy) in self.offsets.items():
            target = Point(x=position.x + dx, y=position.y + dy)
            self.directory.move(follower_id, target)
            moves[follower_id] = target
        return moves

    def disengage(self) -> None:
        if self.leader_id is not None:
            logger.info("Follow-the-leader disengaged")
        self.leader_id = None
        self.offsets = {}

"""Protocols for the host collaborators the party engine depends on.

The engine never touches host data directly; everything it needs about the
scene arrives through these interfaces.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol

from muster.core.models.agent import AgentRecord, AgentSpawn, Occupant
from muster.core.models.geometry import Point, Rect

DataReadyCallback = Callable[[str], None]
"""Called with an agent id once the host has finished recomputing its derived data."""


class SpatialService(Protocol):
    """Grid metrics and static obstacle queries."""

    @property
    def grid_size(self) -> int:
        """World units (pixels) per grid cell."""
        ...

    def is_blocked(self, start: Point, end: Point) -> bool:
        """Return True if the segment start->end crosses movement-blocking geometry."""
        ...


class OccupancyQuery(Protocol):
    """Answers which placed agents occupy a region."""

    def occupants(self, rect: Rect, exclude: Iterable[str] = ()) -> list[Occupant]:
        """Return placed agents whose rectangles touch rect.

        Args:
            rect: Region to query.
            exclude: Agent ids to leave out (e.g. the composite being deployed).

        Returns:
            Candidate occupants. Callers apply their own strict-overlap test.
        """
        ...


class EntityDirectory(Protocol):
    """Stable id -> current agent state, plus creation and destruction."""

    def get(self, agent_id: str) -> AgentRecord | None:
        """Resolve an agent, placed or not, or None if it is unknown."""
        ...

    def create(self, spawns: Sequence[AgentSpawn]) -> list[str]:
        """Create agents in one batch and return their new ids (same order).

        Raises:
            Exception: Any failure; nothing is created in that case.
        """
        ...

    def destroy(self, agent_ids: Sequence[str]) -> None:
        """Remove the placed representations of agents (composites cease to exist)."""
        ...

    def move(self, agent_id: str, position: Point) -> None:
        """Move an agent's top-left corner to position."""
        ...

    def subscribe(self, callback: DataReadyCallback) -> None:
        """Register for "data ready" events (derived data recomputed for an agent)."""
        ...


class CompositeStore(Protocol):
    """Opaque structured storage for composite records."""

    def load(self, composite_id: str) -> dict[str, Any] | None:
        """Load a stored record, or None if absent."""
        ...

    def save(self, composite_id: str, data: dict[str, Any]) -> None:
        """Store a record (must round-trip losslessly).

        Raises:
            Exception: On write failure.
        """
        ...

    def delete(self, composite_id: str) -> None:
        """Remove a stored record if present."""
        ...

    def list_ids(self) -> list[str]:
        """Ids of all stored composites."""
        ...


class Notifier(Protocol):
    """User-facing notifications (non-fatal)."""

    def info(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

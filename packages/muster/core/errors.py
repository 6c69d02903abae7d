"""Exception hierarchy for party merge and deployment.

ConfigurationError and OperationInProgressError are raised before anything
is mutated. PersistenceWriteFailure escapes a merge or deploy only after the
scene has been restored; during re-aggregation it becomes a notification.
MissingAgentData and PlacementExhausted are handled per member, so one bad
member never aborts its siblings.
"""

from __future__ import annotations


class MusterError(Exception):
    """Base exception for all Muster errors."""


class ConfigurationError(MusterError):
    """Raised when an operation is requested with invalid arguments.

    Examples: fewer than two agents to merge, nothing selected to deploy,
    an unknown formation key. Raised before any state is mutated.
    """


class FormationNotFoundError(ConfigurationError):
    """Raised when a formation key is not registered.

    Attributes:
        formation_key: The key that was not found.
        available: Registered formation keys.

    Example:
        >>> raise FormationNotFoundError("spiral", ["box", "line"])
        FormationNotFoundError: Formation 'spiral' not found. Available: box, line
    """

    def __init__(self, formation_key: str, available: list[str] | None = None) -> None:
        self.formation_key = formation_key
        self.available = available or []

        message = f"Formation '{formation_key}' not found."
        if self.available:
            message += f" Available: {', '.join(sorted(self.available))}"

        super().__init__(message)


class OperationInProgressError(MusterError):
    """Raised when a merge/deploy/split is started on a busy composite or agent."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Another party operation is already in flight for '{key}'")


class MissingAgentData(MusterError):
    """Raised when an agent id cannot be resolved in the entity directory."""

    def __init__(self, agent_id: str) -> None:
        self.agent_id = agent_id
        super().__init__(f"Agent '{agent_id}' could not be resolved")


class PersistenceWriteFailure(MusterError):
    """Raised when a composite record cannot be written to the store."""

    def __init__(self, composite_id: str, cause: BaseException | None = None) -> None:
        self.composite_id = composite_id
        self.cause = cause
        message = f"Failed to persist composite '{composite_id}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class PlacementExhausted(MusterError):
    """Spiral search ran out of radius without finding a free cell.

    Non-fatal: the ideal cell is used anyway and this is kept as a warning.
    """

    def __init__(self, agent_id: str, cell: tuple[int, int], max_radius: int) -> None:
        self.agent_id = agent_id
        self.cell = cell
        self.max_radius = max_radius
        super().__init__(
            f"No valid spot within radius {max_radius} of {cell} for '{agent_id}'; "
            "using ideal cell"
        )

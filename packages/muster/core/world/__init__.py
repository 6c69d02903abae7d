"""Host collaborator interfaces and the in-memory scene."""

from muster.core.world.memory import InMemoryScene, segments_intersect
from muster.core.world.notify import LoggingNotifier, RecordingNotifier
from muster.core.world.protocols import (
    CompositeStore,
    DataReadyCallback,
    EntityDirectory,
    Notifier,
    OccupancyQuery,
    SpatialService,
)

__all__ = [
    "CompositeStore",
    "DataReadyCallback",
    "EntityDirectory",
    "InMemoryScene",
    "LoggingNotifier",
    "Notifier",
    "OccupancyQuery",
    "RecordingNotifier",
    "SpatialService",
    "segments_intersect",
]

"""Light and movement aggregation across party members."""

from muster.core.aggregation.light import (
    DEFAULT_STRATEGIES,
    LightAggregator,
    LightStrategy,
    aggregate_light,
    apply_effects,
    resolve_member_light,
)
from muster.core.aggregation.movement import MovementAggregator, aggregate_movement
from muster.core.aggregation.scheduler import RecomputeScheduler

__all__ = [
    "DEFAULT_STRATEGIES",
    "LightAggregator",
    "LightStrategy",
    "MovementAggregator",
    "RecomputeScheduler",
    "aggregate_light",
    "aggregate_movement",
    "apply_effects",
    "resolve_member_light",
]

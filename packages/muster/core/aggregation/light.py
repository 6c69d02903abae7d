"""Light aggregation across party members.

Each member's effective light is found by walking an ordered chain of
strategy functions; the first one that yields a lit profile wins. The party
then carries the brightest member's light.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
import logging

from muster.core.errors import MissingAgentData
from muster.core.models.agent import AgentRecord
from muster.core.models.light import EffectMode, LightEffect, LightProfile
from muster.core.utils.math import clamp
from muster.core.world.protocols import EntityDirectory

logger = logging.getLogger(__name__)

LightStrategy = Callable[[AgentRecord], LightProfile | None]

_NUMERIC_LIMITS: dict[str, tuple[float, float]] = {
    "bright": (0.0, float("inf")),
    "dim": (0.0, float("inf")),
    "angle": (0.0, 360.0),
    "alpha": (0.0, 1.0),
}


def _lit(profile: LightProfile | None) -> LightProfile | None:
    if profile is not None and profile.is_lit:
        return profile
    return None


def _combine(current: float, effect: LightEffect) -> float:
    value = float(effect.value)
    if effect.mode is EffectMode.OVERRIDE:
        return value
    if effect.mode is EffectMode.ADD:
        return current + value
    if effect.mode is EffectMode.MULTIPLY:
        return current * value
    if effect.mode is EffectMode.UPGRADE:
        return max(current, value)
    return min(current, value)


def apply_effects(base: LightProfile, effects: Iterable[LightEffect]) -> LightProfile:
    """Replay effect changes on a base profile, in order.

    Color only supports override; other modes on color are ignored, as are
    non-numeric values on numeric keys.

    Example:
        >>> base = LightProfile(bright=10, dim=20)
        >>> apply_effects(base, [LightEffect(key="bright", mode="add", value=5)]).bright
        15.0
    """
    values = base.model_dump()
    for effect in effects:
        if effect.key == "color":
            if effect.mode is EffectMode.OVERRIDE and isinstance(effect.value, str):
                values["color"] = effect.value
            continue
        try:
            combined = _combine(values[effect.key], effect)
        except (TypeError, ValueError):
            logger.debug("Ignoring non-numeric effect value %r for %s", effect.value, effect.key)
            continue
        low, high = _NUMERIC_LIMITS[effect.key]
        values[effect.key] = clamp(combined, low, high)
    return LightProfile.model_validate(values)


def from_override(agent: AgentRecord) -> LightProfile | None:
    """Light explicitly set on the agent's placed representation."""
    return _lit(agent.light_override)


def from_derived(agent: AgentRecord) -> LightProfile | None:
    """Host-computed light with active effects already applied."""
    return _lit(agent.derived_light)


def from_effect_replay(agent: AgentRecord) -> LightProfile | None:
    """Active effects replayed on the base light."""
    if not agent.light_effects:
        return None
    return _lit(apply_effects(agent.light, agent.light_effects))


def from_equipped(agent: AgentRecord) -> LightProfile | None:
    """Brightest equipped light source."""
    return _lit(aggregate_light(agent.equipped_lights))


def from_base(agent: AgentRecord) -> LightProfile | None:
    """The agent's default light."""
    return _lit(agent.light)


DEFAULT_STRATEGIES: tuple[LightStrategy, ...] = (
    from_override,
    from_derived,
    from_effect_replay,
    from_equipped,
    from_base,
)


def resolve_member_light(
    agent: AgentRecord,
    strategies: Sequence[LightStrategy] = DEFAULT_STRATEGIES,
) -> LightProfile:
    """Effective light for one agent; first lit strategy wins, else off."""
    for strategy in strategies:
        profile = strategy(agent)
        if profile is not None:
            return profile
    return LightProfile.off()


def aggregate_light(profiles: Iterable[LightProfile]) -> LightProfile:
    """Brightest profile by bright + dim; ties keep the first seen.

    Example:
        >>> aggregate_light([LightProfile(bright=40, dim=20), LightProfile(bright=10, dim=60)]).dim
        60.0
    """
    best: LightProfile | None = None
    for profile in profiles:
        if not profile.is_lit:
            continue
        if best is None or profile.radius_total > best.radius_total:
            best = profile
    return best if best is not None else LightProfile.off()


class LightAggregator:
    """Resolves party light from live member data in the entity directory.

    Args:
        directory: Source of current agent state.
        strategies: Ordered resolution chain (defaults to DEFAULT_STRATEGIES).
    """

    def __init__(
        self,
        directory: EntityDirectory,
        strategies: Sequence[LightStrategy] = DEFAULT_STRATEGIES,
    ) -> None:
        self.directory = directory
        self.strategies = tuple(strategies)

    def member_light(self, agent_id: str) -> LightProfile:
        """Effective light for one member.

        Raises:
            MissingAgentData: If the agent cannot be resolved.
        """
        agent = self.directory.get(agent_id)
        if agent is None:
            raise MissingAgentData(agent_id)
        return resolve_member_light(agent, self.strategies)

    def aggregate(self, agent_ids: Iterable[str]) -> LightProfile:
        """Party light for the given members; unresolvable members are skipped."""
        profiles: list[LightProfile] = []
        for agent_id in agent_ids:
            try:
                profiles.append(self.member_light(agent_id))
            except MissingAgentData as e:
                logger.warning("Skipping member in light aggregation: %s", e)
        return aggregate_light(profiles)

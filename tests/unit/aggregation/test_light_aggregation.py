"""Tests for light aggregation."""

from __future__ import annotations

from muster.core.aggregation import (
    LightAggregator,
    aggregate_light,
    apply_effects,
    resolve_member_light,
)
from muster.core.models.agent import AgentRecord
from muster.core.models.light import EffectMode, LightEffect, LightProfile


def test_brightest_member_wins():
    """bright + dim decides: 70 beats 60 beats 0."""
    profiles = [
        LightProfile(bright=0, dim=0),
        LightProfile(bright=40, dim=20),
        LightProfile(bright=10, dim=60),
    ]
    assert aggregate_light(profiles) == profiles[2]


def test_empty_aggregate_is_off():
    result = aggregate_light([])
    assert result == LightProfile.off()
    assert result.bright == 0
    assert result.dim == 0


def test_all_dark_aggregate_is_off():
    assert aggregate_light([LightProfile(), LightProfile()]) == LightProfile.off()


def test_ties_keep_first_seen():
    first = LightProfile(bright=20, dim=20, color="#ff0000")
    second = LightProfile(bright=10, dim=30, color="#00ff00")
    assert aggregate_light([first, second]) is first


class TestApplyEffects:
    """Tests for replaying effect changes on a base light."""

    def test_modes(self):
        base = LightProfile(bright=10, dim=20)
        assert apply_effects(base, [LightEffect(key="bright", mode=EffectMode.OVERRIDE, value=5)]).bright == 5
        assert apply_effects(base, [LightEffect(key="bright", mode=EffectMode.ADD, value=5)]).bright == 15
        assert apply_effects(base, [LightEffect(key="dim", mode=EffectMode.MULTIPLY, value=2)]).dim == 40
        assert apply_effects(base, [LightEffect(key="bright", mode=EffectMode.UPGRADE, value=30)]).bright == 30
        assert apply_effects(base, [LightEffect(key="bright", mode=EffectMode.UPGRADE, value=3)]).bright == 10
        assert apply_effects(base, [LightEffect(key="dim", mode=EffectMode.DOWNGRADE, value=5)]).dim == 5

    def test_effects_apply_in_order(self):
        base = LightProfile(bright=10)
        effects = [
            LightEffect(key="bright", mode=EffectMode.ADD, value=10),
            LightEffect(key="bright", mode=EffectMode.MULTIPLY, value=2),
        ]
        assert apply_effects(base, effects).bright == 40

    def test_values_are_clamped(self):
        base = LightProfile(bright=10, alpha=0.5)
        effects = [
            LightEffect(key="bright", mode=EffectMode.ADD, value=-50),
            LightEffect(key="alpha", mode=EffectMode.ADD, value=2),
        ]
        result = apply_effects(base, effects)
        assert result.bright == 0
        assert result.alpha == 1.0

    def test_color_override(self):
        base = LightProfile(bright=10)
        result = apply_effects(base, [LightEffect(key="color", value="#ffaa00")])
        assert result.color == "#ffaa00"

    def test_non_numeric_value_is_ignored(self):
        base = LightProfile(bright=10)
        result = apply_effects(base, [LightEffect(key="bright", mode=EffectMode.ADD, value="lots")])
        assert result.bright == 10


class TestResolveMemberLight:
    """Tests for the per-member strategy chain."""

    def test_override_first(self):
        agent = AgentRecord(
            agent_id="a",
            light=LightProfile(bright=5),
            light_override=LightProfile(bright=50),
            derived_light=LightProfile(bright=40),
        )
        assert resolve_member_light(agent).bright == 50

    def test_derived_before_replay(self):
        agent = AgentRecord(
            agent_id="a",
            light=LightProfile(bright=5),
            derived_light=LightProfile(bright=40),
            light_effects=(LightEffect(key="bright", value=60),),
        )
        assert resolve_member_light(agent).bright == 40

    def test_dark_strategies_are_skipped(self):
        agent = AgentRecord(
            agent_id="a",
            light=LightProfile(bright=5),
            light_override=LightProfile(),
            derived_light=LightProfile(),
            light_effects=(LightEffect(key="dim", mode=EffectMode.ADD, value=10),),
        )
        result = resolve_member_light(agent)
        assert result.bright == 5
        assert result.dim == 10

    def test_equipped_light(self):
        agent = AgentRecord(
            agent_id="a",
            equipped_lights=(LightProfile(bright=20, dim=20), LightProfile(bright=30, dim=30)),
        )
        assert resolve_member_light(agent).bright == 30

    def test_base_light_last(self):
        assert resolve_member_light(AgentRecord(agent_id="a", light=LightProfile(dim=7))).dim == 7

    def test_nothing_lit(self):
        assert resolve_member_light(AgentRecord(agent_id="a")) == LightProfile.off()

    def test_custom_chain(self):
        agent = AgentRecord(agent_id="a", light=LightProfile(bright=5))
        torch = LightProfile(bright=20, dim=20)
        assert resolve_member_light(agent, [lambda _: torch]) is torch


class TestLightAggregator:
    """Tests for aggregation against the entity directory."""

    def test_missing_members_are_skipped(self, scene, place, caplog):
        place("a", 0, 0, bright=10, dim=10)
        place("b", 1, 0, bright=20, dim=20)

        result = LightAggregator(scene).aggregate(["a", "ghost", "b"])

        assert result.bright == 20
        assert "ghost" in caplog.text

"""Tests for movement aggregation."""

from __future__ import annotations

from muster.core.aggregation import MovementAggregator, aggregate_movement
from muster.core.config.models import MovementConfig
from muster.core.models.movement import MovementProfile


def test_slowest_speed_and_shared_types():
    profiles = [
        MovementProfile(speed=30, types=frozenset({"walk", "swim"})),
        MovementProfile(speed=25, types=frozenset({"walk"})),
        MovementProfile(speed=30, types=frozenset({"walk", "fly"})),
    ]
    result = aggregate_movement(profiles)
    assert result.speed == 25
    assert result.types == frozenset({"walk"})


def test_empty_uses_default():
    result = aggregate_movement([])
    assert result.speed == 30
    assert result.types == frozenset()
    assert aggregate_movement([], default_speed=40).speed == 40


def test_disjoint_types():
    profiles = [
        MovementProfile(speed=30, types=frozenset({"swim"})),
        MovementProfile(speed=30, types=frozenset({"fly"})),
    ]
    assert aggregate_movement(profiles).types == frozenset()


def test_aggregator_reads_directory(scene, place):
    place("a", 0, 0, speed=30, types={"walk", "climb"})
    place("b", 1, 0, speed=20, types={"walk"})

    result = MovementAggregator(scene).aggregate(["a", "b", "ghost"])

    assert result == MovementProfile(speed=20, types=frozenset({"walk"}))


def test_aggregator_all_missing_uses_config_default(scene):
    aggregator = MovementAggregator(scene, MovementConfig(default_speed=35))
    assert aggregator.aggregate(["ghost"]).speed == 35

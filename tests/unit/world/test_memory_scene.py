"""Tests for the in-memory scene collaborators."""

from __future__ import annotations

import pytest

from muster.core.models.agent import AgentSpawn
from muster.core.models.geometry import Footprint, Point, Rect
from muster.core.models.light import LightProfile
from muster.core.world.memory import InMemoryScene, segments_intersect
from muster.core.world.notify import LoggingNotifier, RecordingNotifier


def P(x: float, y: float) -> Point:
    return Point(x=x, y=y)


class TestSegments:
    """Tests for wall intersection."""

    def test_crossing(self):
        assert segments_intersect(P(0, 0), P(10, 10), P(0, 10), P(10, 0))

    def test_parallel(self):
        assert not segments_intersect(P(0, 0), P(10, 0), P(0, 5), P(10, 5))

    def test_touching_endpoint(self):
        assert segments_intersect(P(0, 0), P(5, 0), P(5, 0), P(5, 5))

    def test_collinear_disjoint(self):
        assert not segments_intersect(P(0, 0), P(2, 0), P(3, 0), P(6, 0))

    def test_walls_block(self, scene):
        scene.add_wall(P(300, 0), P(300, 500))

        assert scene.is_blocked(P(250, 50), P(350, 50))
        assert not scene.is_blocked(P(250, 50), P(290, 150))


class TestOccupancy:
    """Tests for occupant queries."""

    def test_strict_overlap(self, scene, place):
        place("a", 2, 2)

        assert [o.agent_id for o in scene.occupants(Rect(x=250, y=250, width=10, height=10))] == ["a"]
        # Sharing an edge is not occupying
        assert scene.occupants(Rect(x=300, y=200, width=100, height=100)) == []

    def test_excluded_and_unplaced(self, scene, place):
        place("a", 2, 2)
        place("b", 2, 2)
        scene.destroy(["b"])

        assert scene.occupants(Rect(x=200, y=200, width=100, height=100), exclude=["a"]) == []

    def test_large_footprint(self, scene, place):
        place("ogre", 0, 0, width=2, height=2)

        hits = scene.occupants(Rect(x=150, y=150, width=10, height=10))
        assert hits[0].rect == Rect(x=0, y=0, width=200, height=200)


class TestDirectory:
    """Tests for create, destroy and move."""

    def test_composite_gets_fresh_id(self, scene):
        spawn = AgentSpawn(name="Party", position=P(0, 0), is_composite=True, footprint=Footprint(width=2, height=2))

        first, second = scene.create([spawn, spawn])

        assert (first, second) == ("party-1", "party-2")
        assert scene.get(first).is_composite

    def test_known_source_is_replaced(self, scene, place):
        place("a", 1, 1, bright=5)
        scene.destroy(["a"])

        created = scene.create([AgentSpawn(source_agent_id="a", name="A", position=P(400, 0), light=LightProfile(bright=20))])

        assert created == ["a"]
        assert scene.get("a").position == P(400, 0)
        assert scene.get("a").light.bright == 20
        assert scene.get("a").name == "A"

    def test_destroy_composite_removes_it(self, scene):
        (party,) = scene.create([AgentSpawn(name="Party", position=P(0, 0), is_composite=True)])

        scene.destroy([party, "unknown"])

        assert scene.get(party) is None

    def test_create_failure_creates_nothing(self, scene):
        scene.fail_next_create = True

        with pytest.raises(RuntimeError):
            scene.create([AgentSpawn(name="X", position=P(0, 0))])
        assert scene.agents == {}
        # Only the next call fails
        assert scene.create([AgentSpawn(name="X", position=P(0, 0))]) == ["agent-1"]

    def test_move(self, scene, place):
        place("a", 1, 1)
        scene.move("a", P(700, 300))

        assert scene.get("a").center(100) == P(750, 350)

    def test_update_announces_data_ready(self, scene, place):
        place("a", 1, 1)
        seen: list[str] = []
        scene.subscribe(seen.append)

        updated = scene.update_agent("a", derived_light=LightProfile(bright=10))

        assert seen == ["a"]
        assert updated.derived_light.bright == 10


class TestStore:
    """Tests for the composite store."""

    def test_records_are_copies(self, scene):
        record = {"composite_id": "p", "members": [{"agent_id": "a"}]}
        scene.save("p", record)
        record["members"].append({"agent_id": "b"})

        loaded = scene.load("p")
        loaded["members"].clear()

        assert scene.load("p") == {"composite_id": "p", "members": [{"agent_id": "a"}]}

    def test_records_are_json_normalized(self, scene):
        scene.save("p", {"offset": (1, 2)})

        assert scene.load("p") == {"offset": [1, 2]}

    def test_rejects_non_json(self, scene):
        with pytest.raises(TypeError):
            scene.save("p", {"types": frozenset({"walk"})})

    def test_fail_saves(self, scene):
        scene.fail_saves = True

        with pytest.raises(OSError):
            scene.save("p", {})
        assert scene.list_ids() == []

    def test_delete_and_list(self, scene):
        scene.save("p", {})
        scene.save("q", {})
        scene.delete("p")
        scene.delete("missing")

        assert scene.list_ids() == ["q"]
        assert scene.load("p") is None


def test_grid_size():
    assert InMemoryScene(grid_size=50).grid_size == 50


def test_recording_notifier():
    notifier = RecordingNotifier()
    notifier.info("merged")
    notifier.warn("crowded")
    notifier.error("failed")

    assert notifier.of_level("warn") == ["crowded"]
    assert [level for level, _ in notifier.messages] == ["info", "warn", "error"]


def test_logging_notifier(caplog):
    with caplog.at_level("INFO", logger="muster.notifications"):
        LoggingNotifier().warn("No valid spot")

    assert caplog.records[-1].levelname == "WARNING"
    assert caplog.records[-1].getMessage() == "No valid spot"

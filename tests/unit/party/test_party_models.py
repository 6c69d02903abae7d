"""Tests for the composite record format."""

from __future__ import annotations

import json

from pydantic import ValidationError
import pytest

from muster.core.models.geometry import Facing, Footprint, GridOffset, Point
from muster.core.models.light import LightProfile
from muster.core.models.movement import MovementProfile
from muster.core.party import MemberRecord, PartyComposite


@pytest.fixture
def composite() -> PartyComposite:
    return PartyComposite(
        composite_id="party-1",
        name="The Company",
        members=(
            MemberRecord(agent_id="a", offset=GridOffset(), is_leader=True, light_snapshot=LightProfile(bright=20)),
            MemberRecord(
                agent_id="b",
                offset=GridOffset(dx=-2, dy=1),
                footprint=Footprint(width=2, height=2),
                movement_snapshot=MovementProfile(speed=25, types=frozenset({"walk", "swim"})),
            ),
            MemberRecord(agent_id="c", offset=GridOffset(dx=3, dy=4)),
        ),
        natural_facing=Facing.EAST,
        last_facing=Facing.SOUTH,
        movement=MovementProfile(speed=25, types=frozenset({"walk", "swim"})),
        light=LightProfile(bright=20, color="#ffcc00"),
        footprint=Footprint(width=2, height=2),
        position=Point(x=450, y=450),
        formation_key="saved",
        custom_offsets={"b": GridOffset(dx=1, dy=1)},
    )


def test_record_round_trip(composite: PartyComposite):
    record = composite.to_record()
    assert PartyComposite.from_record(record) == composite


def test_record_is_plain_json(composite: PartyComposite):
    record = composite.to_record()
    restored = PartyComposite.from_record(json.loads(json.dumps(record)))

    assert restored == composite
    assert record["movement"]["types"] == ["swim", "walk"]
    assert record["natural_facing"] == "east"
    assert record["schema_version"] == 1


def test_newer_schema_rejected(composite: PartyComposite):
    record = composite.to_record()
    record["schema_version"] = 99
    with pytest.raises(ValueError, match="newer"):
        PartyComposite.from_record(record)


def test_single_member_is_invalid():
    with pytest.raises(ValidationError):
        PartyComposite(
            composite_id="p",
            members=(MemberRecord(agent_id="a", is_leader=True),),
            position=Point(x=0, y=0),
        )


def test_duplicate_members_invalid():
    with pytest.raises(ValidationError):
        PartyComposite(
            composite_id="p",
            members=(MemberRecord(agent_id="a"), MemberRecord(agent_id="a")),
            position=Point(x=0, y=0),
        )


def test_helpers(composite: PartyComposite):
    assert composite.leader.agent_id == "a"
    assert composite.member("b").footprint.width == 2
    assert composite.member("zz") is None
    assert composite.index_of("c") == 2
    assert composite.center(100) == Point(x=550, y=550)
    assert composite.anchor_cell(100).as_tuple() == (5, 5)


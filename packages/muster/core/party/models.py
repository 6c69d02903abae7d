"""Party composite models and the persisted record format."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from muster.core.models.geometry import Facing, Footprint, GridCell, GridOffset, Point
from muster.core.models.light import LightProfile
from muster.core.models.movement import MovementProfile
from muster.core.placement.engine import anchor_cell_for

SCHEMA_VERSION = 1


class MemberRecord(BaseModel):
    """One member as captured at merge time.

    Attributes:
        agent_id: Stable identity of the member agent.
        name: Display name at merge time.
        offset: Grid offset from the leader (leader is always (0, 0)).
        is_leader: True for exactly one member.
        footprint: Member size in cells.
        light_snapshot: Base light at merge time, restored on deploy.
        movement_snapshot: Movement at merge time.
        image: Member portrait, restored on deploy.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    agent_id: str
    name: str = ""
    offset: GridOffset = Field(default_factory=GridOffset)
    is_leader: bool = False
    footprint: Footprint = Field(default_factory=Footprint)
    light_snapshot: LightProfile = Field(default_factory=LightProfile)
    movement_snapshot: MovementProfile = Field(default_factory=MovementProfile)
    image: str | None = None


class PartyComposite(BaseModel):
    """A merged party standing in for two or more member agents.

    Persisted through ``to_record()`` and restored with ``from_record()``;
    the record is plain JSON and round-trips without loss.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    schema_version: int = SCHEMA_VERSION
    composite_id: str
    name: str = "Party"
    image: str | None = None
    members: tuple[MemberRecord, ...]
    natural_facing: Facing = Facing.NORTH
    last_facing: Facing = Facing.NORTH
    movement: MovementProfile = Field(default_factory=MovementProfile)
    light: LightProfile = Field(default_factory=LightProfile)
    footprint: Footprint = Field(default_factory=Footprint)
    anchor_footprint: Footprint = Field(default_factory=Footprint)
    position: Point
    formation_key: str | None = None
    custom_offsets: dict[str, GridOffset] = Field(default_factory=dict)

    @field_validator("members")
    @classmethod
    def validate_members(cls, v: tuple[MemberRecord, ...]) -> tuple[MemberRecord, ...]:
        ids = [m.agent_id for m in v]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate member ids: {ids}")
        return v

    @model_validator(mode="after")
    def validate_size(self) -> PartyComposite:
        if len(self.members) < 2:
            raise ValueError("A party composite needs at least two members")
        return self

    @property
    def member_ids(self) -> list[str]:
        return [m.agent_id for m in self.members]

    @property
    def leader(self) -> MemberRecord:
        for member in self.members:
            if member.is_leader:
                return member
        return self.members[0]

    def member(self, agent_id: str) -> MemberRecord | None:
        for member in self.members:
            if member.agent_id == agent_id:
                return member
        return None

    def index_of(self, agent_id: str) -> int | None:
        for i, member in enumerate(self.members):
            if member.agent_id == agent_id:
                return i
        return None

    def center(self, grid_size: float) -> Point:
        return Point(
            x=self.position.x + self.footprint.width * grid_size / 2,
            y=self.position.y + self.footprint.height * grid_size / 2,
        )

    def anchor_cell(self, grid_size: float) -> GridCell:
        """Leader slot cell for the composite's current position."""
        return anchor_cell_for(self.center(grid_size), self.anchor_footprint, grid_size)

    def to_record(self) -> dict[str, Any]:
        """JSON-ready record for the composite store."""
        data = self.model_dump(mode="json")
        # frozenset order is arbitrary; sort for stable records
        data["movement"]["types"] = sorted(self.movement.types)
        for member, raw in zip(self.members, data["members"], strict=True):
            raw["movement_snapshot"]["types"] = sorted(member.movement_snapshot.types)
        return data

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> PartyComposite:
        """Restore a composite from a stored record.

        Raises:
            ValueError: If the record's schema version is newer than supported.
        """
        version = data.get("schema_version", SCHEMA_VERSION)
        if version > SCHEMA_VERSION:
            raise ValueError(
                f"Composite record schema {version} is newer than supported {SCHEMA_VERSION}"
            )
        return cls.model_validate(data)


class MemberPlacement(BaseModel):
    """Where one deployed member will stand."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    member_index: int
    agent_id: str
    formation_offset: GridOffset
    rotated_offset: GridOffset
    ideal_cell: GridCell
    cell: GridCell
    position: Point
    radius: int = 0
    exhausted: bool = False


class DeploymentPlan(BaseModel):
    """Preview of a deployment: resolved cells for the selected members.

    ``remaining_indices`` are the members that stay in the composite and
    ``skipped_indices`` the members that could no longer be resolved, which
    leave the party without being placed. A plan whose selection would leave
    a single member has already been escalated to a full deployment.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    composite_id: str
    formation_key: str
    facing: Facing
    rotation_steps: int
    anchor: GridCell
    placements: tuple[MemberPlacement, ...]
    remaining_indices: tuple[int, ...] = ()
    skipped_indices: tuple[int, ...] = ()
    escalated: bool = False
    warnings: tuple[str, ...] = ()

    @property
    def is_full_deploy(self) -> bool:
        return not self.remaining_indices

    @property
    def deployed_indices(self) -> list[int]:
        return sorted(p.member_index for p in self.placements)

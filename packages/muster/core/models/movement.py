"""Movement models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MovementProfile(BaseModel):
    """Movement capability of an agent or a whole party.

    Attributes:
        speed: Movement speed (distance units per turn).
        types: Movement-type tags (walk, swim, fly, ...).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    speed: float = Field(default=30.0, ge=0.0)
    types: frozenset[str] = Field(default_factory=frozenset)

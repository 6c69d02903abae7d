"""Light emission models."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LightAnimation(BaseModel):
    """Animation descriptor carried alongside a light profile."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str | None = Field(default=None, description="Animation type (e.g. 'torch'), None for static")
    speed: int = Field(default=5, ge=0, le=10)
    intensity: int = Field(default=5, ge=0, le=10)


class LightProfile(BaseModel):
    """Light emitted by an agent.

    Attributes:
        bright: Bright light radius (distance units).
        dim: Dim light radius (distance units).
        angle: Emission cone in degrees (360 = omnidirectional).
        color: Tint as #RRGGBB, None for untinted.
        alpha: Tint intensity [0, 1].
        animation: Animation descriptor.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    bright: float = Field(default=0.0, ge=0.0)
    dim: float = Field(default=0.0, ge=0.0)
    angle: float = Field(default=360.0, ge=0.0, le=360.0)
    color: str | None = None
    alpha: float = Field(default=0.5, ge=0.0, le=1.0)
    animation: LightAnimation = Field(default_factory=LightAnimation)

    @field_validator("color")
    @classmethod
    def validate_hex_color(cls, v: str | None) -> str | None:
        """Validate color is #RRGGBB."""
        if v is not None and (not v.startswith("#") or len(v) != 7):
            raise ValueError(f"Color must be #RRGGBB format, got '{v}'")
        return v

    @classmethod
    def off(cls) -> LightProfile:
        """Fully-off profile."""
        return cls()

    @property
    def radius_total(self) -> float:
        return self.bright + self.dim

    @property
    def is_lit(self) -> bool:
        return self.radius_total > 0


class EffectMode(str, Enum):
    """How a temporary effect combines with the current value."""

    OVERRIDE = "override"
    ADD = "add"
    MULTIPLY = "multiply"
    UPGRADE = "upgrade"
    DOWNGRADE = "downgrade"


class LightEffect(BaseModel):
    """A single active temporary effect on one light attribute.

    Example:
        >>> LightEffect(key="bright", mode=EffectMode.UPGRADE, value=20)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: Literal["bright", "dim", "angle", "alpha", "color"]
    mode: EffectMode = EffectMode.OVERRIDE
    value: float | str

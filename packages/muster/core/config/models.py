"""Configuration models for Muster."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class PlacementConfig(BaseModel):
    """Spot resolution tuning."""

    spiral_max_radius: int = Field(
        default=20, ge=1, description="Largest ring radius scanned by the spiral search"
    )
    collision_inset_px: float = Field(
        default=5.0, ge=0.0, description="Corner sample inset from the footprint edge (pixels)"
    )
    probe_half_length_px: float = Field(
        default=1.0, gt=0.0, description="Half length of the probe segment at the centre sample"
    )


class MovementConfig(BaseModel):
    """Movement aggregation defaults."""

    default_speed: float = Field(
        default=30.0, ge=0.0, description="Party speed when no member can be resolved"
    )


class AggregationConfig(BaseModel):
    """Light/movement re-aggregation scheduling."""

    recompute_debounce_ms: int = Field(
        default=150,
        ge=0,
        description="Coalescing window for repeated change notifications on one composite",
    )


class PartyConfig(BaseModel):
    """Party behaviour."""

    nearby_distance_multiplier: float = Field(
        default=3.0, gt=0.0, description="Join radius for add_member, in grid cells"
    )
    auto_deploy_on_combat: bool = Field(
        default=True, description="Deploy every stored party when combat starts"
    )
    default_formation: str = Field(
        default="custom", description="Formation used when neither caller nor composite names one"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False


class ConfigBase(BaseModel):
    """Base class for file-backed configurations.

    Subclasses must implement default_path() to specify their default location.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type.

        Returns:
            Path to the default config file
        """
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path, or defaults when the default file is absent.

        Args:
            path: Path to config file, or None to use default_path()

        Returns:
            Loaded config instance

        Raises:
            FileNotFoundError: If an explicit path doesn't exist
            ValidationError: If config is invalid
        """
        from muster.core.config.loader import load_config

        if path is None:
            path = cls.default_path()
            if not Path(path).exists():
                return cls()
        raw = load_config(path)
        return cls.model_validate(raw)


class MusterConfig(ConfigBase):
    """Application-level configuration."""

    placement: PlacementConfig = PlacementConfig()
    movement: MovementConfig = MovementConfig()
    aggregation: AggregationConfig = AggregationConfig()
    party: PartyConfig = PartyConfig()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("muster.yaml")

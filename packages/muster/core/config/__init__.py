"""Configuration management for Muster."""

from muster.core.config.loader import (
    apply_logging_config,
    detect_format,
    load_config,
    load_muster_config,
    save_config,
)
from muster.core.config.models import (
    AggregationConfig,
    ConfigBase,
    LoggingConfig,
    MovementConfig,
    MusterConfig,
    PartyConfig,
    PlacementConfig,
)

__all__ = [
    # Loaders
    "apply_logging_config",
    "detect_format",
    "load_config",
    "load_muster_config",
    "save_config",
    # Models
    "AggregationConfig",
    "ConfigBase",
    "LoggingConfig",
    "MovementConfig",
    "MusterConfig",
    "PartyConfig",
    "PlacementConfig",
]

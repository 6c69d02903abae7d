"""Shared utilities for Muster."""

from muster.core.utils.logging import configure_logging, get_logger
from muster.core.utils.math import centroid, clamp, half_up, sign

__all__ = [
    "centroid",
    "clamp",
    "configure_logging",
    "get_logger",
    "half_up",
    "sign",
]

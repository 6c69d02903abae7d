"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from muster.core.config.models import MusterConfig
from muster.core.utils.logging import configure_logging

logger = logging.getLogger(__name__)


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("muster.json")
        'json'
        >>> detect_format("muster.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return a raw configuration dictionary.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
            # safe_load returns None for empty files
            return content if content is not None else {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e


def save_config(data: dict[str, Any], path: str | Path) -> None:
    """Write a configuration dictionary as JSON or YAML (by extension)."""
    path = Path(path)
    fmt = detect_format(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        if fmt == "json":
            json.dump(data, f, indent=2, sort_keys=True)
        else:
            yaml.safe_dump(data, f, sort_keys=True)
    logger.debug("Wrote config to %s", path)


def load_muster_config(path: str | Path | None = None) -> MusterConfig:
    """Load and validate application configuration.

    Args:
        path: Path to config file; defaults to muster.yaml when present

    Returns:
        Validated MusterConfig with defaults for missing values
    """
    return MusterConfig.load_or_default(path)


def apply_logging_config(config: MusterConfig | None = None) -> None:
    """Configure Python logging from app config.

    Args:
        config: MusterConfig instance (loads default if None)
    """
    if config is None:
        config = load_muster_config()

    configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        structured=config.logging.structured,
    )

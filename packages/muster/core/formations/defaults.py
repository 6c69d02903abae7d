"""Default formation registry setup."""

from muster.core.formations.presets import (
    BoxFormation,
    CircleFormation,
    ColumnFormation,
    CustomFormation,
    LineFormation,
    StaggeredFormation,
    WedgeFormation,
    tight_formation,
    wide_formation,
)
from muster.core.formations.registry import FormationRegistry

CUSTOM_FORMATION_KEY = "custom"


def create_default_formation_registry() -> FormationRegistry:
    """Create a formation registry with all built-in presets.

    Returns:
        FormationRegistry with presets registered.
    """
    registry = FormationRegistry()

    registry.register(CustomFormation())
    registry.register(tight_formation())
    registry.register(wide_formation())
    registry.register(ColumnFormation())
    registry.register(LineFormation())
    registry.register(WedgeFormation())
    registry.register(CircleFormation())
    registry.register(StaggeredFormation())
    registry.register(BoxFormation())

    return registry

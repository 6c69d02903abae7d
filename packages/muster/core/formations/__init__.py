"""Formation presets.

Pure transforms from a member's captured offset (and its slot in the batch)
to the offset it should take in a named formation.
"""

from muster.core.formations.defaults import (
    CUSTOM_FORMATION_KEY,
    create_default_formation_registry,
)
from muster.core.formations.protocols import (
    FormationPreset,
    line_spacing,
    normalize_slot,
    wedge_depth_spacing,
)
from muster.core.formations.registry import FormationRegistry

__all__ = [
    "CUSTOM_FORMATION_KEY",
    "FormationPreset",
    "FormationRegistry",
    "create_default_formation_registry",
    "line_spacing",
    "normalize_slot",
    "wedge_depth_spacing",
]

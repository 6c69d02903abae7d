"""Built-in formation presets."""

from muster.core.formations.presets.box import BoxFormation
from muster.core.formations.presets.circle import CircleFormation
from muster.core.formations.presets.identity import CustomFormation
from muster.core.formations.presets.line import ColumnFormation, LineFormation
from muster.core.formations.presets.scale import ScaleFormation, tight_formation, wide_formation
from muster.core.formations.presets.staggered import StaggeredFormation
from muster.core.formations.presets.wedge import WedgeFormation

__all__ = [
    "BoxFormation",
    "CircleFormation",
    "ColumnFormation",
    "CustomFormation",
    "LineFormation",
    "ScaleFormation",
    "StaggeredFormation",
    "WedgeFormation",
    "tight_formation",
    "wide_formation",
]

"""Wedge formation - V shape with the middle slots in front."""

from muster.core.formations.protocols import line_spacing, normalize_slot, wedge_depth_spacing
from muster.core.models.geometry import GridOffset
from muster.core.utils.math import half_up


class WedgeFormation:
    """V-shaped formation.

    Horizontal placement matches the line formation; each slot falls back by
    its distance from the middle slot, scaled by a depth spacing that is at
    least the horizontal spacing so the V reads clearly.

    Attributes:
        handler_id: Unique identifier ("wedge").

    Example:
        >>> WedgeFormation().transform(0, 0, index=0, total=4)
        GridOffset(dx=-2, dy=2)
    """

    handler_id: str = "wedge"
    name: str = "Wedge"
    description: str = "V-shaped battle formation"

    def transform(
        self,
        dx: int,
        dy: int,
        index: int | None = None,
        total: int | None = None,
    ) -> GridOffset:
        i, n = normalize_slot(index, total)
        center = (n - 1) / 2
        return GridOffset(
            dx=half_up((i - center) * line_spacing(n)),
            dy=half_up(abs(i - center) * wedge_depth_spacing(n)),
        )

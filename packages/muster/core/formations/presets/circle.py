"""Circle formation - members evenly spaced on a ring."""

import math

from muster.core.formations.protocols import normalize_slot
from muster.core.models.geometry import GridOffset
from muster.core.utils.math import half_up


class CircleFormation:
    """Defensive ring around the anchor.

    Radius grows with party size: max(2, ceil(total / 3)) cells.

    Attributes:
        handler_id: Unique identifier ("circle").
    """

    handler_id: str = "circle"
    name: str = "Circle"
    description: str = "Defensive circular formation"

    def transform(
        self,
        dx: int,
        dy: int,
        index: int | None = None,
        total: int | None = None,
    ) -> GridOffset:
        i, n = normalize_slot(index, total)
        radius = max(2, math.ceil(n / 3))
        angle = 2 * math.pi * i / n
        return GridOffset(
            dx=half_up(radius * math.cos(angle)),
            dy=half_up(radius * math.sin(angle)),
        )

"""Box formation - members on a square perimeter."""

import math

from muster.core.formations.protocols import normalize_slot
from muster.core.models.geometry import GridOffset
from muster.core.utils.math import half_up

# Corner slots for parties of up to four: TL, TR, BL, BR
_CORNERS: tuple[tuple[int, int], ...] = ((-1, -1), (1, -1), (-1, 1), (1, 1))

_SIDE_SPACING = 1.5


class BoxFormation:
    """Square perimeter formation.

    Up to four members take the corners of a 3x3 square. Larger parties are
    spread over four sides of ceil(total / 4) slots each, walking top,
    right, bottom, then left.

    Attributes:
        handler_id: Unique identifier ("box").
    """

    handler_id: str = "box"
    name: str = "Box"
    description: str = "Square perimeter formation"

    def transform(
        self,
        dx: int,
        dy: int,
        index: int | None = None,
        total: int | None = None,
    ) -> GridOffset:
        i, n = normalize_slot(index, total)

        if n <= 4:
            if 0 <= i < len(_CORNERS):
                cx, cy = _CORNERS[i]
                return GridOffset(dx=cx, dy=cy)
            return GridOffset(dx=0, dy=0)

        side = math.ceil(n / 4)
        half = side / 2

        if i < side:
            return GridOffset(dx=half_up((i - half) * _SIDE_SPACING), dy=-side)
        if i < side * 2:
            return GridOffset(dx=side, dy=half_up((i - side - half) * _SIDE_SPACING))
        if i < side * 3:
            return GridOffset(dx=half_up((side * 2 - i + half) * _SIDE_SPACING), dy=side)
        return GridOffset(dx=-side, dy=half_up((side * 3 - i + half) * _SIDE_SPACING))

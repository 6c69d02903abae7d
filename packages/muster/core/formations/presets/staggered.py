"""Staggered formation - two alternating rows."""

import math

from muster.core.formations.protocols import line_spacing, normalize_slot
from muster.core.models.geometry import GridOffset
from muster.core.utils.math import half_up


class StaggeredFormation:
    """Two-row formation; even slots take the back row one cell behind.

    Attributes:
        handler_id: Unique identifier ("staggered").
    """

    handler_id: str = "staggered"
    name: str = "Staggered"
    description: str = "Two-row staggered formation"

    def transform(
        self,
        dx: int,
        dy: int,
        index: int | None = None,
        total: int | None = None,
    ) -> GridOffset:
        i, n = normalize_slot(index, total)
        is_back_row = i % 2 == 0
        position_in_row = i // 2
        row_size = math.ceil(n / 2)
        center = (row_size - 1) / 2
        return GridOffset(
            dx=half_up((position_in_row - center) * line_spacing(n)),
            dy=1 if is_back_row else 0,
        )

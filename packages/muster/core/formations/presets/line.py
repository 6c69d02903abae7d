"""Single-file formations - column and line."""

from muster.core.formations.protocols import line_spacing, normalize_slot
from muster.core.models.geometry import GridOffset
from muster.core.utils.math import half_up


def _line_position(index: int | None, total: int | None) -> int:
    """Offset along the line axis, centred on the middle slot."""
    i, n = normalize_slot(index, total)
    center = (n - 1) / 2
    return half_up((i - center) * line_spacing(n))


class ColumnFormation:
    """Single-file column along the facing axis.

    Attributes:
        handler_id: Unique identifier ("column").
    """

    handler_id: str = "column"
    name: str = "Column"
    description: str = "Single-file line formation"

    def transform(
        self,
        dx: int,
        dy: int,
        index: int | None = None,
        total: int | None = None,
    ) -> GridOffset:
        return GridOffset(dx=0, dy=_line_position(index, total))


class LineFormation:
    """Abreast line across the facing axis.

    Attributes:
        handler_id: Unique identifier ("line").
    """

    handler_id: str = "line"
    name: str = "Line"
    description: str = "Horizontal line formation"

    def transform(
        self,
        dx: int,
        dy: int,
        index: int | None = None,
        total: int | None = None,
    ) -> GridOffset:
        return GridOffset(dx=_line_position(index, total), dy=0)

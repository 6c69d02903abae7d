"""Scaled formations - compress or expand the captured layout."""

from muster.core.models.geometry import GridOffset
from muster.core.utils.math import half_up, sign


class ScaleFormation:
    """Multiply every captured offset by a constant factor.

    A member that started away from the leader never collapses onto it:
    when scaling rounds a non-zero offset to (0, 0), the result is clamped
    to the unit step in the original direction on each axis.

    Attributes:
        handler_id: Unique identifier (e.g. "tight").
        factor: Scale factor applied to both axes.

    Example:
        >>> ScaleFormation("tight", 0.5, "Tight (50%)").transform(-1, -1)
        GridOffset(dx=-1, dy=-1)
    """

    def __init__(self, handler_id: str, factor: float, name: str, description: str = "") -> None:
        self.handler_id = handler_id
        self.factor = factor
        self.name = name
        self.description = description or f"Scale formation spacing to {factor:.0%}"

    def transform(
        self,
        dx: int,
        dy: int,
        index: int | None = None,
        total: int | None = None,
    ) -> GridOffset:
        sx = half_up(dx * self.factor)
        sy = half_up(dy * self.factor)

        if sx == 0 and sy == 0 and (dx != 0 or dy != 0):
            sx, sy = sign(dx), sign(dy)

        return GridOffset(dx=sx, dy=sy)


def tight_formation() -> ScaleFormation:
    return ScaleFormation("tight", 0.5, "Tight (50%)", "Compress formation to 50% spacing")


def wide_formation() -> ScaleFormation:
    return ScaleFormation("wide", 1.5, "Wide (150%)", "Expand formation to 150% spacing")

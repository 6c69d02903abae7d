"""Identity formation - members keep their captured offsets."""

from muster.core.models.geometry import GridOffset


class CustomFormation:
    """Formation that reproduces the party exactly as it was positioned.

    Attributes:
        handler_id: Unique identifier ("custom").
    """

    handler_id: str = "custom"
    name: str = "Custom"
    description: str = "Custom formation as positioned"

    def transform(
        self,
        dx: int,
        dy: int,
        index: int | None = None,
        total: int | None = None,
    ) -> GridOffset:
        return GridOffset(dx=dx, dy=dy)

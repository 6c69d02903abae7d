"""Grid and world geometry primitives.

Grid offsets and cells are integer cell units; points and rectangles are in
world units (pixels). The y axis grows downward, so north is ``(0, -1)``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Facing(str, Enum):
    """Cardinal facing, declared in clockwise order."""

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def index(self) -> int:
        """Position in the clockwise order north, east, south, west."""
        return FACING_ORDER.index(self)


FACING_ORDER: tuple[Facing, ...] = (Facing.NORTH, Facing.EAST, Facing.SOUTH, Facing.WEST)


class GridOffset(BaseModel):
    """Offset between two grid cells."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    dx: int = 0
    dy: int = 0

    def as_tuple(self) -> tuple[int, int]:
        return (self.dx, self.dy)

    @property
    def manhattan(self) -> int:
        return abs(self.dx) + abs(self.dy)


class GridCell(BaseModel):
    """Absolute grid cell (column x, row y)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: int
    y: int

    def shifted(self, offset: GridOffset) -> GridCell:
        return GridCell(x=self.x + offset.dx, y=self.y + offset.dy)

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    def to_point(self, grid_size: float) -> Point:
        """World position of the cell's top-left corner."""
        return Point(x=self.x * grid_size, y=self.y * grid_size)


class Point(BaseModel):
    """World-space point."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        return float(((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5)


class Footprint(BaseModel):
    """Agent size in grid cells."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    width: float = Field(default=1, gt=0, description="Width in cells")
    height: float = Field(default=1, gt=0, description="Height in cells")


class Rect(BaseModel):
    """Axis-aligned world rectangle (top-left origin)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    x: float
    y: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)

    @classmethod
    def from_cell(cls, cell: GridCell, footprint: Footprint, grid_size: float) -> Rect:
        return cls(
            x=cell.x * grid_size,
            y=cell.y * grid_size,
            width=footprint.width * grid_size,
            height=footprint.height * grid_size,
        )

    @property
    def center(self) -> Point:
        return Point(x=self.x + self.width / 2, y=self.y + self.height / 2)

    def overlaps(self, other: Rect) -> bool:
        """True when the rectangles overlap strictly on both axes.

        Rectangles that only share an edge do not overlap.
        """
        return (
            other.x < self.x + self.width
            and other.x + other.width > self.x
            and other.y < self.y + self.height
            and other.y + other.height > self.y
        )

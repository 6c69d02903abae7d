"""Collision-aware spot resolution with an expanding ring search."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import logging

from pydantic import BaseModel, ConfigDict

from muster.core.config.models import PlacementConfig
from muster.core.errors import PlacementExhausted
from muster.core.models.geometry import Footprint, GridCell, Point, Rect
from muster.core.world.protocols import OccupancyQuery, SpatialService

logger = logging.getLogger(__name__)


class SpotResolution(BaseModel):
    """Outcome of resolving one member's cell.

    Attributes:
        cell: Cell chosen for the member.
        ideal_cell: Cell the formation asked for.
        radius: Ring radius the cell was found at (0 = ideal cell).
        exhausted: True when no valid cell was found and the ideal cell was
            used anyway.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    cell: GridCell
    ideal_cell: GridCell
    radius: int = 0
    exhausted: bool = False

    @property
    def displaced(self) -> bool:
        return self.cell != self.ideal_cell


class BatchClaims:
    """Cells (and their rectangles) claimed earlier in one deployment batch."""

    def __init__(self) -> None:
        self._cells: dict[tuple[int, int], Rect] = {}

    def __contains__(self, cell: object) -> bool:
        if isinstance(cell, GridCell):
            return cell.as_tuple() in self._cells
        return cell in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def claim(self, cell: GridCell, rect: Rect) -> None:
        self._cells[cell.as_tuple()] = rect

    def overlaps(self, rect: Rect) -> bool:
        return any(claimed.overlaps(rect) for claimed in self._cells.values())


def ring_cells(center: GridCell, radius: int) -> Iterator[GridCell]:
    """Cells at Chebyshev distance exactly ``radius`` from center, row-major.

    Example:
        >>> [c.as_tuple() for c in ring_cells(GridCell(x=0, y=0), 1)][:3]
        [(-1, -1), (0, -1), (1, -1)]
    """
    if radius == 0:
        yield center
        return
    for y in range(center.y - radius, center.y + radius + 1):
        for x in range(center.x - radius, center.x + radius + 1):
            if max(abs(x - center.x), abs(y - center.y)) == radius:
                yield GridCell(x=x, y=y)


class SpotResolver:
    """Validates candidate cells and searches outward for free ones.

    A cell is valid when it is not claimed earlier in the batch, none of its
    sample points is cut off by blocking geometry, and its rectangle does not
    strictly overlap any placed agent.

    Args:
        spatial: Grid size and obstruction tests.
        occupancy: Placed-agent rectangles.
        config: Search radius and probe geometry.
        exclude: Agent ids ignored by the occupancy test (the composite being
            split, for instance).
    """

    def __init__(
        self,
        spatial: SpatialService,
        occupancy: OccupancyQuery,
        config: PlacementConfig | None = None,
        exclude: Iterable[str] = (),
    ) -> None:
        self.spatial = spatial
        self.occupancy = occupancy
        self.config = config or PlacementConfig()
        self.exclude = frozenset(exclude)

    def sample_points(self, cell: GridCell, footprint: Footprint) -> list[Point]:
        """Footprint centre plus the four corners inset by the collision margin."""
        grid = self.spatial.grid_size
        rect = Rect.from_cell(cell, footprint, grid)
        inset = self.config.collision_inset_px
        left, top = rect.x + inset, rect.y + inset
        right, bottom = rect.x + rect.width - inset, rect.y + rect.height - inset
        return [
            rect.center,
            Point(x=left, y=top),
            Point(x=right, y=top),
            Point(x=left, y=bottom),
            Point(x=right, y=bottom),
        ]

    def _probe_blocked(self, center: Point, sample: Point) -> bool:
        if sample == center:
            h = self.config.probe_half_length_px
            start = Point(x=center.x - h, y=center.y - h)
            end = Point(x=center.x + h, y=center.y + h)
            return self.spatial.is_blocked(start, end)
        return self.spatial.is_blocked(center, sample)

    def is_spot_valid(self, cell: GridCell, footprint: Footprint, claims: BatchClaims) -> bool:
        """Check a single candidate cell.

        Args:
            cell: Candidate top-left cell.
            footprint: Size of the agent being placed.
            claims: Cells already claimed in this batch.

        Returns:
            True if the agent can stand there.
        """
        if cell in claims:
            return False

        rect = Rect.from_cell(cell, footprint, self.spatial.grid_size)
        if claims.overlaps(rect):
            return False

        samples = self.sample_points(cell, footprint)
        center = samples[0]
        for sample in samples:
            if self._probe_blocked(center, sample):
                return False

        for occupant in self.occupancy.occupants(rect, exclude=self.exclude):
            if occupant.agent_id in self.exclude:
                continue
            if occupant.rect.overlaps(rect):
                return False

        return True

    def find_valid_spot(
        self,
        ideal: GridCell,
        footprint: Footprint,
        claims: BatchClaims,
        agent_id: str = "",
    ) -> SpotResolution:
        """Nearest valid cell to ``ideal``, scanning rings of growing radius.

        Never fails: when every ring up to ``spiral_max_radius`` is exhausted
        the ideal cell is returned with ``exhausted=True`` and a warning is
        logged.
        """
        if self.is_spot_valid(ideal, footprint, claims):
            return SpotResolution(cell=ideal, ideal_cell=ideal)

        max_radius = self.config.spiral_max_radius
        for radius in range(1, max_radius + 1):
            for candidate in ring_cells(ideal, radius):
                if self.is_spot_valid(candidate, footprint, claims):
                    logger.debug(
                        "Displaced %s from %s to %s (radius %d)",
                        agent_id or "member",
                        ideal.as_tuple(),
                        candidate.as_tuple(),
                        radius,
                    )
                    return SpotResolution(cell=candidate, ideal_cell=ideal, radius=radius)

        warning = PlacementExhausted(agent_id or "member", ideal.as_tuple(), max_radius)
        logger.warning(str(warning))
        return SpotResolution(cell=ideal, ideal_cell=ideal, radius=max_radius, exhausted=True)

    def resolve(
        self,
        ideal: GridCell,
        footprint: Footprint,
        claims: BatchClaims,
        agent_id: str = "",
    ) -> SpotResolution:
        """Find a spot and claim it for the batch."""
        resolution = self.find_valid_spot(ideal, footprint, claims, agent_id=agent_id)
        claims.claim(
            resolution.cell,
            Rect.from_cell(resolution.cell, footprint, self.spatial.grid_size),
        )
        return resolution

"""Formation preset protocol and shared spacing tables."""

from __future__ import annotations

from typing import Protocol

from muster.core.models.geometry import GridOffset


class FormationPreset(Protocol):
    """A named, pure offset transform.

    Implementations must be deterministic and side-effect free, accept a
    missing index/total, and never fail for total in {0, 1}.
    """

    handler_id: str
    name: str
    description: str

    def transform(
        self,
        dx: int,
        dy: int,
        index: int | None = None,
        total: int | None = None,
    ) -> GridOffset:
        """Map a member's base offset (and slot) to its formation offset."""
        ...


def normalize_slot(index: int | None, total: int | None) -> tuple[int, int]:
    """Coerce (index, total) into a usable slot.

    A missing or non-positive total is a one-member formation; a missing index
    is slot 0.
    """
    n = total if total is not None and total > 0 else 1
    i = index if index is not None else 0
    return i, n


def line_spacing(total: int) -> float:
    """Grid spacing between neighbours in line-like formations.

    2-3 members sit one cell apart, 4-5 at 1.2, larger parties at 1.5.
    """
    if total <= 3:
        return 1.0
    if total <= 5:
        return 1.2
    return 1.5


def wedge_depth_spacing(total: int) -> float:
    """Vertical spacing for the wedge; never tighter than line_spacing."""
    if total <= 3:
        return 1.0
    if total <= 5:
        return 1.5
    return 2.0

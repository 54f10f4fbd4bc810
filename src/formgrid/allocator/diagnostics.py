"""
Module: allocator.diagnostics

Purpose:
    Report rows whose widths add up to more than the 12-column grid.
    Overflow is allowed by the allocator and never corrected; callers
    surface it as a warning next to the row.

Key Functions:
    - find_row_overflows(): All overflowing rows of an entry list

Key Classes:
    - RowOverflow: One overflowing row in one viewport
    - LayoutResult: Entries returned by an editor command plus warnings

Used By:
    - allocator.editor: LayoutEditor command results
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from formgrid.core.models.entries import GRID_COLUMNS, LayoutEntry
from formgrid.core.models.enums import Viewport, ViewportLike

from .repacking import group_rows


@dataclass(frozen=True)
class RowOverflow:
    """
    A row whose widths exceed the grid in one viewport.

    Attributes:
        row_index: Overflowing row
        viewport: Viewport whose widths were summed
        total_columns: Sum of widths in the row
        field_ids: Fields on the row in column order

    Example:
        >>> overflow = RowOverflow(1, Viewport.DESKTOP, 16, ("a", "b"))
        >>> overflow.overflow
        4
    """

    row_index: int
    viewport: Viewport
    total_columns: int
    field_ids: tuple[str, ...] = ()

    @property
    def overflow(self) -> int:
        """Columns beyond the grid width."""
        return self.total_columns - GRID_COLUMNS

    def describe(self) -> str:
        """Human-readable warning message."""
        return (
            f"Row {self.row_index} uses {self.total_columns}/{GRID_COLUMNS} "
            f"{self.viewport.value} columns ({self.overflow} over)"
        )


def find_row_overflows(
    entries: Iterable[LayoutEntry],
    viewport: Optional[ViewportLike] = None,
) -> list[RowOverflow]:
    """
    Find rows whose width sum exceeds 12.

    Args:
        entries: One group's entries (row indices are per group)
        viewport: Only check this viewport; both when None

    Returns:
        RowOverflow records ordered by row, desktop before mobile
    """
    viewports = [Viewport(viewport)] if viewport is not None else list(Viewport)
    overflows: list[RowOverflow] = []
    for row_index, row_entries in sorted(group_rows(entries).items()):
        for vp in viewports:
            total = sum(e.width_for(vp) for e in row_entries)
            if total > GRID_COLUMNS:
                overflows.append(RowOverflow(
                    row_index=row_index,
                    viewport=vp,
                    total_columns=total,
                    field_ids=tuple(e.field_id for e in row_entries),
                ))
    return overflows


@dataclass(frozen=True)
class LayoutResult:
    """
    Outcome of an editor command.

    Attributes:
        entries: Full updated entry list across all groups
        group_id: Group the command was scoped to (None for no-ops on unknown fields)
        changed: False when the command was a no-op
        overflows: Overflowing rows of the affected group
        warnings: Overflow messages for display

    Example:
        >>> result = editor.add_field("f1")
        >>> result.has_overflow
        False
    """

    entries: tuple[LayoutEntry, ...]
    group_id: Optional[str] = None
    changed: bool = False
    overflows: tuple[RowOverflow, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def has_overflow(self) -> bool:
        """True when any row of the affected group overflows."""
        return bool(self.overflows)

"""
Module: core.models.entries

Purpose:
    Provides the LayoutEntry dataclass - the placement record for one
    field in its group's 12-column grid. Holds row/column position plus
    one width per viewport.

Key Functions:
    - LayoutEntry.width_for(viewport): Width used in a viewport
    - LayoutEntry.with_position(row, column): Copy at a new position
    - LayoutEntry.with_widths(width, mobile_width): Copy with new widths
    - LayoutEntry.sort_key: (row_index, column_index) ordering key

Dependencies:
    - dataclasses (std)
    - .enums.Viewport

Used By:
    - allocator.store: LayoutStore
    - allocator.placement, allocator.repacking, allocator.reorder
    - core.utils.serialization
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .enums import Viewport, ViewportLike

# Width of the responsive grid in column units
GRID_COLUMNS = 12
MIN_WIDTH_COLUMNS = 1


def clamp_width(value: int) -> int:
    """Clamp a width into the valid [1, 12] range."""
    return max(MIN_WIDTH_COLUMNS, min(GRID_COLUMNS, int(value)))


@dataclass(frozen=True, slots=True)
class LayoutEntry:
    """
    Placement of a single field in its group's grid (immutable).

    Attributes:
        field_id: Field this entry places (at most one entry per field)
        row_index: Vertical position within the group's layout
        column_index: Ordering within the row
        width_columns: Desktop span in grid columns
        mobile_width_columns: Mobile span in grid columns

    Invariants:
        - row_index >= 0
        - column_index >= 0
        - 1 <= width_columns <= 12
        - 1 <= mobile_width_columns <= 12

    Example:
        >>> entry = LayoutEntry("f1", row_index=0, column_index=0)
        >>> entry.width_for("mobile")
        12
        >>> entry.with_position(2, 1).row_index
        2
    """

    field_id: str
    row_index: int
    column_index: int
    width_columns: int = GRID_COLUMNS
    mobile_width_columns: int = GRID_COLUMNS

    def __post_init__(self) -> None:
        """Validate entry on construction."""
        if not self.field_id:
            raise ValueError("field_id must be non-empty")
        if self.row_index < 0:
            raise ValueError(f"row_index must be >= 0: {self.row_index}")
        if self.column_index < 0:
            raise ValueError(f"column_index must be >= 0: {self.column_index}")
        for name in ("width_columns", "mobile_width_columns"):
            value = getattr(self, name)
            if not MIN_WIDTH_COLUMNS <= value <= GRID_COLUMNS:
                raise ValueError(
                    f"{name} must be in [{MIN_WIDTH_COLUMNS}, {GRID_COLUMNS}]: {value}"
                )

    @property
    def position(self) -> Tuple[int, int]:
        """(row_index, column_index) pair."""
        return (self.row_index, self.column_index)

    @property
    def sort_key(self) -> Tuple[int, int]:
        """Key for reading-order sorting (row first, then column)."""
        return (self.row_index, self.column_index)

    def width_for(self, viewport: ViewportLike) -> int:
        """
        Width of this entry in the given viewport.

        Args:
            viewport: Viewport enum or its string value

        Returns:
            width_columns for desktop, mobile_width_columns for mobile
        """
        if Viewport(viewport) is Viewport.DESKTOP:
            return self.width_columns
        return self.mobile_width_columns

    def with_position(self, row_index: int, column_index: int) -> LayoutEntry:
        """Return a copy placed at (row_index, column_index)."""
        return replace(self, row_index=row_index, column_index=column_index)

    def with_row(self, row_index: int) -> LayoutEntry:
        """Return a copy moved to row_index, column unchanged."""
        return replace(self, row_index=row_index)

    def with_column(self, column_index: int) -> LayoutEntry:
        """Return a copy moved to column_index, row unchanged."""
        return replace(self, column_index=column_index)

    def with_widths(
        self,
        width_columns: Optional[int] = None,
        mobile_width_columns: Optional[int] = None,
    ) -> LayoutEntry:
        """
        Return a copy with new widths.

        Widths left as None keep their current value.
        """
        return replace(
            self,
            width_columns=self.width_columns if width_columns is None else width_columns,
            mobile_width_columns=(
                self.mobile_width_columns if mobile_width_columns is None else mobile_width_columns
            ),
        )

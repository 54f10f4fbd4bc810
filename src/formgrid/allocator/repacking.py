"""
Module: allocator.repacking

Purpose:
    Re-derive dense row/column indices after any mutation and size a
    field that changes rows.

Key Functions:
    - normalize_rows(): Map distinct row values onto 0..R-1
    - normalize_columns(): Per row, map column values onto 0..C-1
    - normalize_group(): Rows then columns (idempotent)
    - calculate_available_columns(): Free grid columns left in a row
    - calculate_auto_size(): Widths for a field joining another row
    - partition_group(): Split a full entry list into (group, others)

Algorithm:
    Indices behave like a sparse array that is repacked on demand:
    1. Sort the distinct row values and replace each by its rank
    2. Within each row, sort by column and replace each by its position
    Nothing but the indices changes, so relative order is preserved.

Dependencies:
    - core.models: LayoutEntry, Viewport

Used By:
    - allocator.placement: add_field / remove_field
    - allocator.reorder: drag, horizontal and vertical moves
    - allocator.diagnostics: row width sums
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Collection, Dict, Iterable, List, Optional, Sequence, Tuple

from formgrid.core.models.entries import GRID_COLUMNS, LayoutEntry
from formgrid.core.models.enums import Viewport, ViewportLike

logger = logging.getLogger(__name__)


def normalize_rows(entries: Iterable[LayoutEntry]) -> List[LayoutEntry]:
    """
    Collapse row gaps into a dense 0..R-1 range.

    Builds an order-preserving map from each distinct row value
    (ascending) to its rank and rewrites every entry through it.
    Input order is kept.

    Example:
        >>> [e.row_index for e in normalize_rows([e_row0, e_row2, e_row5])]
        [0, 1, 2]
    """
    entries = list(entries)
    row_mapping = {
        old_row: new_row
        for new_row, old_row in enumerate(sorted({e.row_index for e in entries}))
    }
    return [
        e if e.row_index == row_mapping[e.row_index] else e.with_row(row_mapping[e.row_index])
        for e in entries
    ]


def normalize_columns(entries: Iterable[LayoutEntry]) -> List[LayoutEntry]:
    """
    Collapse column gaps within each row into a dense 0..C-1 range.

    Entries are grouped by row, sorted by current column, and given
    their position as the new column. Output is in (row, column) order.
    Ties on column keep their input order.
    """
    normalized: List[LayoutEntry] = []
    for _row, row_entries in sorted(group_rows(entries).items()):
        for position, entry in enumerate(row_entries):
            normalized.append(
                entry if entry.column_index == position else entry.with_column(position)
            )
    return normalized


def normalize_group(entries: Iterable[LayoutEntry]) -> List[LayoutEntry]:
    """
    Apply row then column normalization to one group's entries.

    Idempotent: normalize_group(normalize_group(x)) == normalize_group(x).
    """
    return normalize_columns(normalize_rows(entries))


def group_rows(entries: Iterable[LayoutEntry]) -> Dict[int, List[LayoutEntry]]:
    """
    Map each row index to its entries sorted by column.

    Sorting is stable, so duplicate columns keep their input order.
    """
    rows: Dict[int, List[LayoutEntry]] = defaultdict(list)
    for entry in entries:
        rows[entry.row_index].append(entry)
    return {
        row_index: sorted(row_entries, key=lambda e: e.column_index)
        for row_index, row_entries in rows.items()
    }


def row_width(
    row_index: int,
    entries: Iterable[LayoutEntry],
    viewport: ViewportLike,
    exclude_field_id: Optional[str] = None,
) -> int:
    """Sum of the viewport's widths for entries in `row_index`."""
    return sum(
        e.width_for(viewport)
        for e in entries
        if e.row_index == row_index and e.field_id != exclude_field_id
    )


def calculate_available_columns(
    row_index: int,
    entries: Iterable[LayoutEntry],
    viewport: ViewportLike,
    exclude_field_id: Optional[str] = None,
) -> int:
    """
    Free grid columns left in a row for one viewport.

    Args:
        row_index: Row to inspect
        entries: Entries of the group
        viewport: Which width to sum
        exclude_field_id: Entry to leave out (the field being moved)

    Returns:
        max(0, 12 - sum of widths in the row)
    """
    used = row_width(row_index, entries, viewport, exclude_field_id)
    return max(0, GRID_COLUMNS - used)


def calculate_auto_size(
    target_row: int,
    entries: Sequence[LayoutEntry],
    moving_entry: LayoutEntry,
) -> Tuple[int, int]:
    """
    Widths for `moving_entry` when it joins `target_row`.

    Each viewport takes the row's free columns (excluding the moving
    entry itself). A full row never collapses the field to zero: the
    entry keeps its pre-move width and the row overflows instead.

    Returns:
        (width_columns, mobile_width_columns), both >= 1
    """
    sizes = []
    for viewport, current in (
        (Viewport.DESKTOP, moving_entry.width_columns),
        (Viewport.MOBILE, moving_entry.mobile_width_columns),
    ):
        available = calculate_available_columns(
            target_row, entries, viewport, moving_entry.field_id
        )
        if available > 0:
            sizes.append(available)
        else:
            logger.debug(
                f"Row {target_row} has no free {viewport.value} columns; "
                f"{moving_entry.field_id} keeps width {current}"
            )
            sizes.append(current)
    return sizes[0], sizes[1]


def partition_group(
    entries: Iterable[LayoutEntry],
    group_field_ids: Collection[str],
) -> Tuple[List[LayoutEntry], List[LayoutEntry]]:
    """
    Split a full entry list into this group's entries and everyone else's.

    Returns:
        (group_entries, other_entries), each in input order
    """
    field_ids = set(group_field_ids)
    group_entries: List[LayoutEntry] = []
    other_entries: List[LayoutEntry] = []
    for entry in entries:
        (group_entries if entry.field_id in field_ids else other_entries).append(entry)
    return group_entries, other_entries

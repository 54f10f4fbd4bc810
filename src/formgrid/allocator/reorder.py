"""
Module: allocator.reorder

Purpose:
    Drag-to-reposition, swap-with-neighbour and promote/demote-to-own-row
    operations on a group's grid. Every operation ends by repacking the
    group with normalize_group.

Key Functions:
    - reposition_via_drag(): Drop a field before another field
    - move_horizontal(): Swap a field with its left/right neighbour
    - move_vertical(): Promote a field to its own row, or merge a solo
      field into the adjacent row
    - reorder_groups(): Drag a whole field group to a new position

Failure Semantics:
    Invalid targets (cross-group drops, moving past the first/last row
    or column, unknown field ids) return the input list unchanged.
    Nothing in this module raises.

Dependencies:
    - allocator.repacking: normalize_group, calculate_auto_size, partition_group

Used By:
    - allocator.editor: LayoutEditor
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Collection, List, Optional, Sequence

from formgrid.core.models.entries import GRID_COLUMNS, LayoutEntry
from formgrid.core.models.enums import (
    HorizontalDirection,
    HorizontalLike,
    VerticalDirection,
    VerticalLike,
)
from formgrid.core.models.fields import FieldGroup

from .repacking import calculate_auto_size, normalize_group, partition_group

logger = logging.getLogger(__name__)


def _find(entries: Sequence[LayoutEntry], field_id: str) -> Optional[LayoutEntry]:
    return next((e for e in entries if e.field_id == field_id), None)


def reposition_via_drag(
    entries: Sequence[LayoutEntry],
    active_field_id: str,
    over_field_id: str,
    group_field_ids: Collection[str],
) -> List[LayoutEntry]:
    """
    Move the dragged field to the drop target's position (insert-before).

    When the field changes rows it is auto-sized against the target row
    before insertion. Entries in the target row at or after the target's
    column shift right by one, then the group is repacked.

    Args:
        entries: Full entry list across all groups
        active_field_id: Field being dragged
        over_field_id: Field it was dropped on
        group_field_ids: Ids of every field in the dragged field's group

    Returns:
        Full updated entry list; unchanged for self-drops, cross-group
        drops or unknown fields
    """
    field_ids = set(group_field_ids)
    if active_field_id == over_field_id:
        return list(entries)
    if active_field_id not in field_ids or over_field_id not in field_ids:
        logger.debug(f"Cross-group drop {active_field_id} -> {over_field_id} rejected")
        return list(entries)

    group_entries, other_entries = partition_group(entries, field_ids)
    active = _find(group_entries, active_field_id)
    over = _find(group_entries, over_field_id)
    if active is None or over is None:
        return list(entries)

    sizes = None
    if active.row_index != over.row_index:
        sizes = calculate_auto_size(over.row_index, group_entries, active)

    updated = []
    for entry in group_entries:
        if entry.field_id == active_field_id:
            entry = entry.with_position(over.row_index, over.column_index)
            if sizes is not None:
                entry = entry.with_widths(*sizes)
        elif entry.row_index == over.row_index and entry.column_index >= over.column_index:
            entry = entry.with_column(entry.column_index + 1)
        updated.append(entry)

    logger.info(
        f"Dragged {active_field_id} to row {over.row_index}, column {over.column_index}"
    )
    return other_entries + normalize_group(updated)


def move_horizontal(
    entries: Sequence[LayoutEntry],
    field_id: str,
    direction: HorizontalLike,
    group_field_ids: Collection[str],
) -> List[LayoutEntry]:
    """
    Swap a field with its neighbour in `direction` within its row.

    Only column indices change; widths are untouched. A field already
    at the row boundary stays put.

    Returns:
        Full updated entry list
    """
    try:
        direction = HorizontalDirection(direction)
    except ValueError:
        logger.debug(f"Unknown horizontal direction {direction!r}; move ignored")
        return list(entries)
    group_entries, other_entries = partition_group(entries, group_field_ids)
    entry = _find(group_entries, field_id)
    if entry is None:
        return list(entries)

    row = sorted(
        (e for e in group_entries if e.row_index == entry.row_index),
        key=lambda e: e.column_index,
    )
    current = next(i for i, e in enumerate(row) if e.field_id == field_id)
    target = current - 1 if direction is HorizontalDirection.LEFT else current + 1
    if not 0 <= target < len(row):
        logger.debug(f"{field_id} already at {direction.value} edge of row {entry.row_index}")
        return list(entries)

    row[current], row[target] = row[target], row[current]
    positions = {e.field_id: i for i, e in enumerate(row)}

    updated = [
        e.with_column(positions[e.field_id]) if e.field_id in positions else e
        for e in group_entries
    ]
    logger.info(f"Moved {field_id} {direction.value} in row {entry.row_index}")
    return other_entries + normalize_group(updated)


def move_vertical(
    entries: Sequence[LayoutEntry],
    field_id: str,
    direction: VerticalLike,
    group_field_ids: Collection[str],
) -> List[LayoutEntry]:
    """
    Move a field up or down a row.

    Field on the first row:
        Moving up is a no-op.
    Field sharing its row:
        Promoted onto a new full-width row of its own, inserted where
        its old row was (up) or directly after it (down). Rows at or
        after the insertion point shift down by one.
    Field alone on its row:
        Appended as the last column of the adjacent row, auto-sized to
        that row's free columns. No adjacent row means no-op.

    Returns:
        Full updated entry list
    """
    try:
        direction = VerticalDirection(direction)
    except ValueError:
        logger.debug(f"Unknown vertical direction {direction!r}; move ignored")
        return list(entries)
    group_entries, other_entries = partition_group(entries, group_field_ids)
    entry = _find(group_entries, field_id)
    if entry is None:
        return list(entries)

    current_row = entry.row_index
    all_rows = sorted({e.row_index for e in group_entries})
    if direction is VerticalDirection.UP and current_row == all_rows[0]:
        logger.debug(f"{field_id} is already on the first row")
        return list(entries)

    row_fields = [e for e in group_entries if e.row_index == current_row]

    if len(row_fields) > 1:
        new_row = current_row if direction is VerticalDirection.UP else current_row + 1
        updated = []
        for e in group_entries:
            if e.field_id == field_id:
                e = LayoutEntry(
                    field_id=field_id,
                    row_index=new_row,
                    column_index=0,
                    width_columns=GRID_COLUMNS,
                    mobile_width_columns=GRID_COLUMNS,
                )
            elif e.row_index >= new_row:
                e = e.with_row(e.row_index + 1)
            updated.append(e)
        logger.info(f"Promoted {field_id} to its own row {new_row} ({direction.value})")
        return other_entries + normalize_group(updated)

    position = all_rows.index(current_row)
    target_position = position - 1 if direction is VerticalDirection.UP else position + 1
    if not 0 <= target_position < len(all_rows):
        logger.debug(f"{field_id} has no row {direction.value} of row {current_row}")
        return list(entries)

    target_row = all_rows[target_position]
    target_fields = [e for e in group_entries if e.row_index == target_row]
    width, mobile_width = calculate_auto_size(target_row, group_entries, entry)
    column = max(e.column_index for e in target_fields) + 1

    updated = [
        e.with_position(target_row, column).with_widths(width, mobile_width)
        if e.field_id == field_id else e
        for e in group_entries
    ]
    logger.info(
        f"Merged {field_id} into row {target_row} as column {column} "
        f"({width}/{mobile_width})"
    )
    return other_entries + normalize_group(updated)


def reorder_groups(
    groups: Sequence[FieldGroup],
    active_group_id: str,
    over_group_id: str,
) -> List[FieldGroup]:
    """
    Move a field group to the position of another (array-move semantics).

    Groups are taken in `group_order`, the active group is removed and
    reinserted at the target's index, and `group_order` is rewritten to
    0..N-1.

    Returns:
        Groups in their new order; input order unchanged for self-drops
        or unknown ids
    """
    ordered = sorted(groups, key=lambda g: g.group_order)
    ids = [g.id for g in ordered]
    if active_group_id == over_group_id or active_group_id not in ids or over_group_id not in ids:
        return list(ordered)

    old_index = ids.index(active_group_id)
    new_index = ids.index(over_group_id)
    moved = ordered.pop(old_index)
    ordered.insert(new_index, moved)

    logger.info(f"Moved group {active_group_id} from position {old_index} to {new_index}")
    return [
        g if g.group_order == index else replace(g, group_order=index)
        for index, g in enumerate(ordered)
    ]

"""
Module: allocator.placement

Purpose:
    Add fields to and remove fields from a group's grid, choosing the
    initial position and size of new entries.

Key Functions:
    - add_field(): Place an unlayouted field
    - remove_field(): Delete a field's entry and repack its group
    - update_entry_widths(): Resize an entry in one or both viewports

Algorithm (add_field):
    Ordinary group:
        New row after the last one, column 0, full width in both viewports.
    Array group, first field:
        New row, column 0, half desktop width / full mobile width.
    Array group, later fields:
        Join the row of the group's first entry as its last column and
        rebalance every entry on that row to an even split.

Dependencies:
    - allocator.config: GridConfig
    - allocator.repacking: normalize_group, partition_group

Used By:
    - allocator.editor: LayoutEditor.add_field / remove_field / update_widths
"""

from __future__ import annotations

import logging
from typing import Collection, List, Optional, Sequence

from formgrid.core.models.entries import LayoutEntry, clamp_width
from formgrid.core.models.fields import FieldGroup

from .config import GridConfig
from .repacking import normalize_group, partition_group

logger = logging.getLogger(__name__)


def add_field(
    entries: Sequence[LayoutEntry],
    field_id: str,
    group: FieldGroup,
    group_field_ids: Collection[str],
    config: Optional[GridConfig] = None,
) -> List[LayoutEntry]:
    """
    Place a field that currently has no entry.

    Args:
        entries: Full entry list across all groups
        field_id: Field to place
        group: Group the field belongs to
        group_field_ids: Ids of every field in `group`
        config: Placement policy (defaults to GridConfig())

    Returns:
        Full updated entry list. Other groups' entries come first,
        unchanged, followed by this group's entries in (row, column)
        order. A field that is already placed leaves the list unchanged.
    """
    config = config or GridConfig()

    if any(e.field_id == field_id for e in entries):
        logger.debug(f"Field {field_id} already placed; add ignored")
        return list(entries)

    group_entries, other_entries = partition_group(entries, set(group_field_ids) | {field_id})
    next_row = max((e.row_index for e in group_entries), default=-1) + 1

    if not group.is_array_group:
        new_entry = LayoutEntry(
            field_id=field_id,
            row_index=next_row,
            column_index=0,
            width_columns=config.default_width,
            mobile_width_columns=config.default_mobile_width,
        )
        candidate = group_entries + [new_entry]
    elif not group_entries:
        new_entry = LayoutEntry(
            field_id=field_id,
            row_index=next_row,
            column_index=0,
            width_columns=config.array_first_width,
            mobile_width_columns=config.array_first_mobile_width,
        )
        candidate = [new_entry]
    else:
        # Array fields render as table columns, so they all share one row
        target_row = min(group_entries, key=lambda e: e.sort_key).row_index
        on_row = [e for e in group_entries if e.row_index == target_row]
        width, mobile_width = config.array_widths(len(on_row) + 1)

        new_entry = LayoutEntry(
            field_id=field_id,
            row_index=target_row,
            column_index=max(e.column_index for e in on_row) + 1,
            width_columns=width,
            mobile_width_columns=mobile_width,
        )
        candidate = [
            e.with_widths(width, mobile_width) if e.row_index == target_row else e
            for e in group_entries
        ] + [new_entry]
        logger.debug(
            f"Rebalanced array row {target_row} of group {group.id} to "
            f"{len(on_row) + 1} fields at {width}/{mobile_width}"
        )

    normalized = normalize_group(candidate)
    logger.info(
        f"Placed {field_id} in group {group.id} at row {new_entry.row_index} "
        f"({new_entry.width_columns}/{new_entry.mobile_width_columns})"
    )
    return other_entries + normalized


def remove_field(
    entries: Sequence[LayoutEntry],
    field_id: str,
    group_field_ids: Collection[str],
) -> List[LayoutEntry]:
    """
    Delete a field's entry and repack the rest of its group.

    Rows and columns left behind are collapsed with normalize_group.
    Other groups' entries pass through unchanged.

    Args:
        entries: Full entry list across all groups
        field_id: Field to remove
        group_field_ids: Ids of every field in the field's group

    Returns:
        Full updated entry list (unchanged if the field had no entry)
    """
    if not any(e.field_id == field_id for e in entries):
        logger.debug(f"Field {field_id} has no entry; remove ignored")
        return list(entries)

    remaining = [e for e in entries if e.field_id != field_id]
    group_entries, other_entries = partition_group(remaining, group_field_ids)

    logger.info(f"Removed {field_id}; repacking {len(group_entries)} remaining entries")
    return other_entries + normalize_group(group_entries)


def update_entry_widths(
    entries: Sequence[LayoutEntry],
    field_id: str,
    width_columns: Optional[int] = None,
    mobile_width_columns: Optional[int] = None,
) -> List[LayoutEntry]:
    """
    Resize one entry. Values outside [1, 12] are clamped.

    Geometry is untouched and row overflow is allowed; callers read it
    back through allocator.diagnostics.

    Returns:
        Full entry list with the entry replaced in place
        (unchanged if the field has no entry)
    """
    if width_columns is not None:
        width_columns = clamp_width(width_columns)
    if mobile_width_columns is not None:
        mobile_width_columns = clamp_width(mobile_width_columns)

    updated = []
    found = False
    for entry in entries:
        if entry.field_id == field_id:
            found = True
            entry = entry.with_widths(width_columns, mobile_width_columns)
        updated.append(entry)

    if not found:
        logger.debug(f"Field {field_id} has no entry; resize ignored")
    return updated

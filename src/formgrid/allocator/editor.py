"""
Module: allocator.editor

Purpose:
    Command façade used by the form editor. Each command looks up the
    field's group in the store, computes the group's new entries with
    the placement/reorder engines, swaps them into the store (one change
    notification) and returns the full entry list with overflow warnings.

Key Classes:
    - LayoutEditor: add/remove/drag/move/resize commands

Commands:
    add_field → remove_field → reposition → move_horizontal →
    move_vertical → update_widths → reorder_groups

Dependencies:
    - allocator.store: LayoutStore
    - allocator.placement, allocator.reorder: Engines
    - allocator.diagnostics: LayoutResult, find_row_overflows

Used By:
    - Form editor front-ends (drag & drop handlers, arrow buttons)
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from formgrid.core.models.entries import LayoutEntry
from formgrid.core.models.enums import HorizontalLike, VerticalLike, ViewportLike
from formgrid.core.models.fields import FieldGroup

from . import placement, reorder
from .config import GridConfig
from .diagnostics import LayoutResult, RowOverflow, find_row_overflows
from .repacking import partition_group
from .store import LayoutStore

logger = logging.getLogger(__name__)

GroupOperation = Callable[[List[LayoutEntry]], List[LayoutEntry]]


class LayoutEditor:
    """
    Issues layout commands against a LayoutStore.

    Commands are synchronous; the caller applies one before issuing the
    next. Invalid commands (unknown fields, cross-group drags, moves past
    the grid edge) return an unchanged result and do not notify.

    The id of the field currently being dragged is transient UI state
    kept here for highlighting only; it never affects placement.

    Example:
        >>> editor = LayoutEditor(store)
        >>> result = editor.add_field("customer_name")
        >>> result.changed
        True
        >>> editor.move_vertical("customer_name", "up").changed
        False
    """

    def __init__(self, store: LayoutStore, config: Optional[GridConfig] = None):
        self.store = store
        self.config = config or GridConfig()
        self._active_field_id: Optional[str] = None

    # ─────────────────────────────────────────────────────────────────────────
    # Drag state
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def active_field_id(self) -> Optional[str]:
        """Field currently being dragged, if any."""
        return self._active_field_id

    def begin_drag(self, field_id: str) -> None:
        self._active_field_id = field_id

    def end_drag(self, over_field_id: Optional[str]) -> LayoutResult:
        """Finish the current drag, dropping onto `over_field_id` (None cancels)."""
        active = self._active_field_id
        self._active_field_id = None
        if active is None or over_field_id is None:
            return self._unchanged(None)
        return self.reposition(active, over_field_id)

    # ─────────────────────────────────────────────────────────────────────────
    # Commands
    # ─────────────────────────────────────────────────────────────────────────

    def add_field(self, field_id: str) -> LayoutResult:
        """Place an unlayouted field in its group."""
        group = self._group_for(field_id)
        if group is None:
            return self._unchanged(None)
        group_field_ids = self.store.group_field_ids(group.id)
        return self._apply(
            group.id,
            lambda entries: placement.add_field(
                entries, field_id, group, group_field_ids, self.config
            ),
        )

    def remove_field(self, field_id: str) -> LayoutResult:
        """Remove a field from the layout; it becomes unlayouted."""
        group = self._group_for(field_id)
        if group is None:
            return self._unchanged(None)
        group_field_ids = self.store.group_field_ids(group.id)
        return self._apply(
            group.id,
            lambda entries: placement.remove_field(entries, field_id, group_field_ids),
        )

    def reposition(self, active_field_id: str, over_field_id: str) -> LayoutResult:
        """Drop `active_field_id` onto `over_field_id` (same group only)."""
        group = self._group_for(active_field_id)
        over_group = self._group_for(over_field_id)
        if group is None or over_group is None or group.id != over_group.id:
            logger.debug(f"Drop of {active_field_id} onto {over_field_id} ignored")
            return self._unchanged(group.id if group else None)
        group_field_ids = self.store.group_field_ids(group.id)
        return self._apply(
            group.id,
            lambda entries: reorder.reposition_via_drag(
                entries, active_field_id, over_field_id, group_field_ids
            ),
        )

    def move_horizontal(self, field_id: str, direction: HorizontalLike) -> LayoutResult:
        """Swap a field with its left/right neighbour."""
        group = self._group_for(field_id)
        if group is None:
            return self._unchanged(None)
        group_field_ids = self.store.group_field_ids(group.id)
        return self._apply(
            group.id,
            lambda entries: reorder.move_horizontal(
                entries, field_id, direction, group_field_ids
            ),
        )

    def move_vertical(self, field_id: str, direction: VerticalLike) -> LayoutResult:
        """Promote a field to its own row or merge it into the adjacent row."""
        group = self._group_for(field_id)
        if group is None:
            return self._unchanged(None)
        group_field_ids = self.store.group_field_ids(group.id)
        return self._apply(
            group.id,
            lambda entries: reorder.move_vertical(
                entries, field_id, direction, group_field_ids
            ),
        )

    def update_widths(
        self,
        field_id: str,
        width_columns: Optional[int] = None,
        mobile_width_columns: Optional[int] = None,
    ) -> LayoutResult:
        """Resize a field in one or both viewports (clamped to [1, 12])."""
        group = self._group_for(field_id)
        if group is None:
            return self._unchanged(None)
        return self._apply(
            group.id,
            lambda entries: placement.update_entry_widths(
                entries, field_id, width_columns, mobile_width_columns
            ),
        )

    def reorder_groups(self, active_group_id: str, over_group_id: str) -> List[FieldGroup]:
        """Move a group to another group's position; returns groups in new order."""
        groups = reorder.reorder_groups(self.store.groups, active_group_id, over_group_id)
        self.store.update_groups(groups)
        return groups

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def overflows(
        self,
        group_id: str,
        viewport: Optional[ViewportLike] = None,
    ) -> List[RowOverflow]:
        """Rows of the group whose widths exceed the grid."""
        return find_row_overflows(self.store.get_entries(group_id), viewport)

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _group_for(self, field_id: str) -> Optional[FieldGroup]:
        field = self.store.field(field_id)
        if field is None:
            logger.debug(f"Unknown field {field_id}; command ignored")
            return None
        # Fields may reference a group the editor has no metadata for
        return self.store.group(field.field_group_id) or FieldGroup(field.field_group_id)

    def _apply(self, group_id: str, operation: GroupOperation) -> LayoutResult:
        before = list(self.store.entries)
        after = operation(list(before))

        if set(after) == set(before):
            return self._unchanged(group_id)

        group_entries, _ = partition_group(after, self.store.group_field_ids(group_id))
        self.store.replace(group_id, group_entries)
        return self._result(group_id, changed=True)

    def _unchanged(self, group_id: Optional[str]) -> LayoutResult:
        if group_id is None:
            return LayoutResult(entries=self.store.entries)
        return self._result(group_id, changed=False)

    def _result(self, group_id: str, *, changed: bool) -> LayoutResult:
        overflows = tuple(self.overflows(group_id))
        warnings = tuple(o.describe() for o in overflows)
        if changed:
            for message in warnings:
                logger.warning(f"Group {group_id}: {message}")
        return LayoutResult(
            entries=self.store.entries,
            group_id=group_id,
            changed=changed,
            overflows=overflows,
            warnings=warnings,
        )


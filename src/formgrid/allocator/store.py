"""
Module: allocator.store

Purpose:
    In-memory collection of layout entries for every field group.
    Group-scoped reads and atomic group-scoped replacement, with one
    change notification per replacement carrying the full cross-group
    entry list so the caller can batch-persist it.

Key Classes:
    - LayoutStore: Entry collection plus field/group metadata

Dependencies:
    - core.models: LayoutEntry, Field, FieldGroup
    - allocator.repacking: normalize_columns (load-time repair)

Used By:
    - allocator.editor: LayoutEditor
"""

from __future__ import annotations

import logging
from typing import Callable, Collection, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from formgrid.core.models.entries import LayoutEntry
from formgrid.core.models.fields import Field, FieldGroup

from .repacking import normalize_columns, partition_group

logger = logging.getLogger(__name__)

ChangeListener = Callable[[Tuple[LayoutEntry, ...]], None]


class LayoutStore:
    """
    Layout entries for all field groups of one form.

    Reads never fail: unknown ids give empty results. Entries are held
    as immutable LayoutEntry instances and replaced wholesale per group.

    Example:
        >>> store = LayoutStore(fields, groups, on_change=persist)
        >>> store.replace("contact", new_entries)  # persist() called once
    """

    def __init__(
        self,
        fields: Iterable[Field],
        groups: Iterable[FieldGroup],
        entries: Iterable[LayoutEntry] = (),
        on_change: Optional[ChangeListener] = None,
    ):
        self._fields: Dict[str, Field] = {f.id: f for f in fields}
        self._groups: Dict[str, FieldGroup] = {g.id: g for g in groups}
        self._entries: List[LayoutEntry] = list(entries)
        self._listeners: List[ChangeListener] = []
        if on_change is not None:
            self._listeners.append(on_change)

    # ─────────────────────────────────────────────────────────────────────────
    # Metadata
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def entries(self) -> Tuple[LayoutEntry, ...]:
        """All entries across all groups, in storage order."""
        return tuple(self._entries)

    @property
    def groups(self) -> Tuple[FieldGroup, ...]:
        """Field groups ordered by group_order."""
        return tuple(sorted(self._groups.values(), key=lambda g: g.group_order))

    def field(self, field_id: str) -> Optional[Field]:
        return self._fields.get(field_id)

    def group(self, group_id: str) -> Optional[FieldGroup]:
        return self._groups.get(group_id)

    def group_of(self, field_id: str) -> Optional[FieldGroup]:
        """Group a field belongs to, if both are known."""
        field = self._fields.get(field_id)
        if field is None:
            return None
        return self._groups.get(field.field_group_id)

    def group_field_ids(self, group_id: str) -> Set[str]:
        """Ids of every field belonging to the group."""
        return {f.id for f in self._fields.values() if f.field_group_id == group_id}

    def is_placed(self, field_id: str) -> bool:
        return any(e.field_id == field_id for e in self._entries)

    def update_groups(self, groups: Iterable[FieldGroup]) -> None:
        """Replace group metadata (e.g. after reordering groups)."""
        for group in groups:
            self._groups[group.id] = group

    # ─────────────────────────────────────────────────────────────────────────
    # Group-scoped access
    # ─────────────────────────────────────────────────────────────────────────

    def get_entries(self, group_id: str) -> Tuple[LayoutEntry, ...]:
        """The group's entries ordered by (row_index, column_index)."""
        group_entries, _ = partition_group(self._entries, self.group_field_ids(group_id))
        return tuple(sorted(group_entries, key=lambda e: e.sort_key))

    def get_unplaced(
        self,
        group_id: str,
        all_field_ids: Optional[Collection[str]] = None,
    ) -> Tuple[Field, ...]:
        """
        Fields of the group that have no entry, in field_order.

        Args:
            group_id: Group to inspect
            all_field_ids: Restrict to these field ids when given
        """
        placed = {e.field_id for e in self._entries}
        candidates = [
            f for f in self._fields.values()
            if f.field_group_id == group_id and f.id not in placed
        ]
        if all_field_ids is not None:
            allowed = set(all_field_ids)
            candidates = [f for f in candidates if f.id in allowed]
        return tuple(sorted(candidates, key=lambda f: f.field_order))

    def replace(self, group_id: str, new_entries: Sequence[LayoutEntry]) -> Tuple[LayoutEntry, ...]:
        """
        Atomically swap the group's entries.

        Entries of other groups keep their position and values. Fires a
        single change notification with the full entry list.

        Returns:
            The full entry list after replacement
        """
        _, other_entries = partition_group(self._entries, self.group_field_ids(group_id))
        self._entries = other_entries + list(new_entries)
        logger.debug(f"Replaced group {group_id} with {len(new_entries)} entries")
        self._notify()
        return self.entries

    def remove_group(self, group_id: str) -> Tuple[LayoutEntry, ...]:
        """Delete every entry referencing a field of the group."""
        return self.replace(group_id, [])

    def load(self, entries: Iterable[LayoutEntry]) -> bool:
        """
        Load entries read from storage, repairing column gaps per group.

        Stored rows can carry gapped or duplicate column indices. These
        are normalized group by group; a notification is fired only when
        a column index actually changed so the caller can write the
        repair back.

        Returns:
            True if any column index was rewritten
        """
        loaded = list(entries)
        repaired: List[LayoutEntry] = []
        remaining = loaded
        # Fields may reference groups with no metadata; repair those too
        group_ids = {f.field_group_id for f in self._fields.values()}
        for group_id in sorted(group_ids):
            group_entries, remaining = partition_group(remaining, self.group_field_ids(group_id))
            repaired.extend(normalize_columns(group_entries))
        repaired.extend(remaining)

        before = {e.field_id: e.column_index for e in loaded}
        changed = any(before[e.field_id] != e.column_index for e in repaired)

        self._entries = repaired
        if changed:
            logger.info("Normalized column indices on load")
            self._notify()
        return changed

    # ─────────────────────────────────────────────────────────────────────────
    # Notifications
    # ─────────────────────────────────────────────────────────────────────────

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a listener called with the full entry list on every change."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        snapshot = self.entries
        for listener in list(self._listeners):
            listener(snapshot)

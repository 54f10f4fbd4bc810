"""
Module: allocator

Purpose:
    Responsive grid layout allocator. Decides where each form field sits
    in a 12-column grid, per field group, with independent desktop and
    mobile widths, and keeps placement dense as fields are added,
    removed, dragged or nudged.

Key Functions:
    - add_field() / remove_field(): Placement engine
    - normalize_group(): Repacking engine
    - reposition_via_drag() / move_horizontal() / move_vertical(): Reorder engine
    - find_row_overflows(): Width overflow report

Key Classes:
    - GridConfig: Placement policy
    - LayoutStore: Entry collection with change notifications
    - LayoutEditor: Command façade returning LayoutResult

Known Limitation:
    Array groups assume all of their fields share one row. Later
    additions join the row of the group's first entry.
"""

from .config import GridConfig
from .diagnostics import LayoutResult, RowOverflow, find_row_overflows
from .editor import LayoutEditor
from .placement import add_field, remove_field, update_entry_widths
from .repacking import (
    calculate_auto_size,
    calculate_available_columns,
    normalize_columns,
    normalize_group,
    normalize_rows,
)
from .reorder import move_horizontal, move_vertical, reorder_groups, reposition_via_drag
from .store import LayoutStore

__all__ = [
    # Config
    "GridConfig",
    # Store / editor
    "LayoutStore",
    "LayoutEditor",
    "LayoutResult",
    # Placement
    "add_field",
    "remove_field",
    "update_entry_widths",
    # Repacking
    "normalize_rows",
    "normalize_columns",
    "normalize_group",
    "calculate_available_columns",
    "calculate_auto_size",
    # Reorder
    "reposition_via_drag",
    "move_horizontal",
    "move_vertical",
    "reorder_groups",
    # Diagnostics
    "RowOverflow",
    "find_row_overflows",
]

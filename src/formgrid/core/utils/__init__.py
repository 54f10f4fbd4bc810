"""
Utils Package

Serialization helpers for persisted layouts.
"""

from .serialization import (
    serialize_entry,
    deserialize_entry,
    serialize_entries,
    deserialize_entries,
    serialize_layout,
    deserialize_layout,
    load_layout_json,
    save_layout_json,
    diff_for_persistence,
)

__all__ = [
    "serialize_entry",
    "deserialize_entry",
    "serialize_entries",
    "deserialize_entries",
    "serialize_layout",
    "deserialize_layout",
    "load_layout_json",
    "save_layout_json",
    "diff_for_persistence",
]

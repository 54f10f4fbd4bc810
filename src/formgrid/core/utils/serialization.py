"""
Serialization Utilities

Converts LayoutEntry models to and from the rows the editor persists.

The allocator never performs I/O. Callers load rows from their store,
turn them into entries with `deserialize_entries()`, and after every
mutating command hand the updated list back through
`serialize_entries()` / `diff_for_persistence()` to upsert by `field_id`
and delete rows for fields that left the layout.

- Storage rows use snake_case column names
- Documents written to disk carry a `schema_version`
- Validation runs before deserialization
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Sequence

from ..models.entries import LayoutEntry
from ..schemas.validator import (
    LAYOUT_SCHEMA_VERSION,
    ValidationError,
    validate_entry,
    validate_layout_document,
)


# ─────────────────────────────────────────────────────────────────────────────
# Entry Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_entry(entry: LayoutEntry) -> dict[str, Any]:
    """
    Serialize a LayoutEntry to a storage row.

    Args:
        entry: Entry to serialize

    Returns:
        Dictionary keyed by storage column names
    """
    return {
        "field_id": entry.field_id,
        "row_index": entry.row_index,
        "column_index": entry.column_index,
        "width_columns": entry.width_columns,
        "mobile_width_columns": entry.mobile_width_columns,
    }


def deserialize_entry(data: dict[str, Any], *, validate: bool = True) -> LayoutEntry:
    """
    Deserialize a LayoutEntry from a storage row.

    Extra columns (ids, timestamps) are ignored.

    Args:
        data: Row dictionary
        validate: Whether to validate the row first

    Returns:
        LayoutEntry instance

    Raises:
        ValidationError: If validate=True and the row is invalid
    """
    if validate:
        validate_entry(data)

    return LayoutEntry(
        field_id=data["field_id"],
        row_index=data["row_index"],
        column_index=data["column_index"],
        width_columns=data["width_columns"],
        mobile_width_columns=data["mobile_width_columns"],
    )


def serialize_entries(entries: Iterable[LayoutEntry]) -> list[dict[str, Any]]:
    """Serialize entries to storage rows, preserving order."""
    return [serialize_entry(entry) for entry in entries]


def deserialize_entries(
    rows: Iterable[dict[str, Any]],
    *,
    validate: bool = True,
) -> list[LayoutEntry]:
    """
    Deserialize storage rows to entries.

    Raises:
        ValidationError: If any row is invalid (message names the row index)
    """
    entries = []
    for index, row in enumerate(rows):
        if validate:
            try:
                validate_entry(row, path=f"entries.{index}")
            except ValidationError as e:
                raise ValidationError(
                    f"Error parsing row {index}: {e}",
                    path=e.path,
                    errors=e.errors or [str(e)],
                ) from e
        entries.append(deserialize_entry(row, validate=False))
    return entries


# ─────────────────────────────────────────────────────────────────────────────
# Layout Documents
# ─────────────────────────────────────────────────────────────────────────────

def serialize_layout(entries: Iterable[LayoutEntry]) -> dict[str, Any]:
    """Serialize a full entry list to a versioned document."""
    return {
        "schema_version": LAYOUT_SCHEMA_VERSION,
        "entries": serialize_entries(entries),
    }


def deserialize_layout(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> list[LayoutEntry]:
    """
    Deserialize a versioned layout document.

    Args:
        data: Document dictionary
        validate: Whether to validate first
        strict: Also run full JSON Schema validation

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_layout_document(data, strict=strict)
    return deserialize_entries(data.get("entries", []), validate=False)


def load_layout_json(path: Path, *, validate: bool = True) -> list[LayoutEntry]:
    """
    Load a layout document from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the file is not valid JSON or fails validation
    """
    if not path.exists():
        raise FileNotFoundError(f"Layout file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Invalid JSON in {path}: {e}",
                path=str(path),
                errors=[str(e)],
            ) from e

    return deserialize_layout(data, validate=validate)


def save_layout_json(entries: Iterable[LayoutEntry], path: Path) -> None:
    """
    Save entries to a JSON layout document.

    Args:
        entries: Entries to save
        path: Output path
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    data = serialize_layout(entries)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


# ─────────────────────────────────────────────────────────────────────────────
# Persistence Diff
# ─────────────────────────────────────────────────────────────────────────────

def diff_for_persistence(
    previous: Sequence[LayoutEntry],
    current: Sequence[LayoutEntry],
) -> tuple[list[dict[str, Any]], list[str]]:
    """
    Compute the rows a caller must upsert and delete after a command.

    Args:
        previous: Entries as last persisted
        current: Entries returned by the allocator

    Returns:
        Tuple of (rows to upsert by field_id, field ids whose rows to delete)

    Example:
        >>> upserts, deletes = diff_for_persistence(before, after)
        >>> deletes
        ['f3']
    """
    before = {entry.field_id: entry for entry in previous}
    after = {entry.field_id: entry for entry in current}

    upserts = [
        serialize_entry(entry)
        for field_id, entry in after.items()
        if before.get(field_id) != entry
    ]
    deleted = [field_id for field_id in before if field_id not in after]
    return upserts, deleted

"""
Schema Validation Utilities

Validates persisted layout data before it is turned into LayoutEntry
models. Layout rows come back from whatever store the editor uses, so
this is the one place malformed input is rejected loudly instead of
degrading to a no-op.

- `validate_entry()` checks a single storage row
- `validate_layout_document()` checks a versioned document of rows
- Basic checks always run; `strict=True` adds full JSON Schema validation
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..models.entries import GRID_COLUMNS, MIN_WIDTH_COLUMNS


# Schema version constants
LAYOUT_SCHEMA_VERSION = 1

ENTRY_FIELDS = (
    "field_id",
    "row_index",
    "column_index",
    "width_columns",
    "mobile_width_columns",
)


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when layout data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_entry(data: dict[str, Any], path: str = "") -> None:
    """
    Validate a single layout row.

    Args:
        data: Row dictionary with storage column names
        path: Location of the row in the enclosing document (for messages)

    Raises:
        ValidationError: If the row is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Layout entry must be an object: {data!r}", path=path)

    missing = [f for f in ENTRY_FIELDS if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )

    field_id = data["field_id"]
    if not isinstance(field_id, str) or not field_id:
        raise ValidationError(
            f"Invalid field_id: {field_id!r} (must be non-empty string)",
            path=_join(path, "field_id"),
        )

    for key in ("row_index", "column_index"):
        value = data[key]
        if not _is_int(value) or value < 0:
            raise ValidationError(
                f"Invalid {key}: {value!r} (must be non-negative integer)",
                path=_join(path, key),
            )

    for key in ("width_columns", "mobile_width_columns"):
        value = data[key]
        if not _is_int(value) or not MIN_WIDTH_COLUMNS <= value <= GRID_COLUMNS:
            raise ValidationError(
                f"Invalid {key}: {value!r} (must be integer in "
                f"[{MIN_WIDTH_COLUMNS}, {GRID_COLUMNS}])",
                path=_join(path, key),
            )


def validate_layout_document(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a persisted layout document.

    Args:
        data: Document dictionary (`schema_version`, `entries`)
        strict: If True, also validate against layout.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    required = ["schema_version", "entries"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            errors=[f"Missing field: {f}" for f in missing],
        )

    version = data.get("schema_version")
    if version != LAYOUT_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported layout schema version: {version} (expected {LAYOUT_SCHEMA_VERSION})",
            path="schema_version",
        )

    entries = data.get("entries")
    if not isinstance(entries, list):
        raise ValidationError("entries must be a list", path="entries")

    seen: set[str] = set()
    for index, row in enumerate(entries):
        row_path = f"entries.{index}"
        validate_entry(row, path=row_path)
        if row["field_id"] in seen:
            raise ValidationError(
                f"Duplicate layout entry for field {row['field_id']!r}",
                path=_join(row_path, "field_id"),
            )
        seen.add(row["field_id"])

    if strict:
        schema = _load_schema("layout")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            ) from e


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid index
    return isinstance(value, int) and not isinstance(value, bool)


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key

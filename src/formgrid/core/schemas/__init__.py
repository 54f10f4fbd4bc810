"""
Schemas Package

JSON schema definitions and validation utilities for persisted layouts.
"""

from .validator import (
    validate_entry,
    validate_layout_document,
    ValidationError,
    LAYOUT_SCHEMA_VERSION,
)

__all__ = [
    "validate_entry",
    "validate_layout_document",
    "ValidationError",
    "LAYOUT_SCHEMA_VERSION",
]

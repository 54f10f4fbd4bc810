"""
Form Grid Core Package

Shared data models, schema validation and serialization used by the
allocator and by whatever store the caller persists layouts in.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Frozen dataclasses, new instances created for any change

2. **Storage Column Names at the Boundary**
   - Models use Python names, serialized rows use the storage names
     (`field_id`, `row_index`, `column_index`, `width_columns`,
     `mobile_width_columns`)
"""

from .models import LayoutEntry, Field, FieldGroup, Viewport

__all__ = [
    "LayoutEntry",
    "Field",
    "FieldGroup",
    "Viewport",
]

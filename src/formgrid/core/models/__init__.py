"""
Core Models Package

Immutable, validated data models for the layout allocator.

All models in this package are frozen dataclasses. Every allocator
operation builds new instances instead of mutating entries, which keeps
normalization a pure function over the whole entry list.
"""

from .entries import LayoutEntry, GRID_COLUMNS, MIN_WIDTH_COLUMNS, clamp_width
from .enums import Viewport, HorizontalDirection, VerticalDirection
from .fields import Field, FieldGroup

__all__ = [
    "LayoutEntry",
    "GRID_COLUMNS",
    "MIN_WIDTH_COLUMNS",
    "clamp_width",
    "Viewport",
    "HorizontalDirection",
    "VerticalDirection",
    "Field",
    "FieldGroup",
]

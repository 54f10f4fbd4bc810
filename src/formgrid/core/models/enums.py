"""
Module: core.models.enums

Purpose:
    Enums shared by the layout models and the allocator engines:
    which viewport a width belongs to and which way a field is nudged.

Key Classes:
    - Viewport: Desktop or mobile sizing context
    - HorizontalDirection: Left/right nudge within a row
    - VerticalDirection: Up/down nudge between rows

Used By:
    - core.models.entries: LayoutEntry.width_for()
    - allocator.repacking: Available column calculation
    - allocator.reorder: Horizontal and vertical moves
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class Viewport(str, Enum):
    """
    Sizing context for a layout entry.

    Each entry carries one width per viewport. Row and column indices
    are shared, only the widths may diverge.

    Example:
        >>> Viewport("mobile") is Viewport.MOBILE
        True
    """

    DESKTOP = "desktop"
    MOBILE = "mobile"


class HorizontalDirection(str, Enum):
    """Direction for swapping a field with its neighbour in a row."""

    LEFT = "left"
    RIGHT = "right"


class VerticalDirection(str, Enum):
    """Direction for moving a field between rows."""

    UP = "up"
    DOWN = "down"


ViewportLike = Union[Viewport, str]
HorizontalLike = Union[HorizontalDirection, str]
VerticalLike = Union[VerticalDirection, str]

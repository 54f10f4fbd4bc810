"""
Module: allocator.config

Purpose:
    Configuration for the placement policy of the grid allocator.
    Defines default widths for new fields and the rebalancing bounds
    used when array-group fields share a row.

Key Classes:
    - GridConfig: Immutable placement configuration

Dependencies:
    - dataclasses (std)

Used By:
    - allocator.placement: add_field sizing
    - allocator.editor: LayoutEditor
"""

from __future__ import annotations

from dataclasses import dataclass

from formgrid.core.models.entries import GRID_COLUMNS, MIN_WIDTH_COLUMNS


@dataclass(frozen=True)
class GridConfig:
    """
    Placement policy for the 12-column grid (immutable).

    Attributes:
        default_width: Desktop width of an ordinary field on its own row
        default_mobile_width: Mobile width of an ordinary field
        array_first_width: Desktop width of the first field of an array group
        array_first_mobile_width: Mobile width of the first array field
        array_min_width: Lower bound of the even desktop split on an array row
        array_min_mobile_width: Lower bound of the even mobile split
        array_mobile_max_per_row: Mobile split never divides by more than this

    Example:
        >>> config = GridConfig()
        >>> config.array_widths(4)
        (3, 4)
    """

    default_width: int = GRID_COLUMNS
    default_mobile_width: int = GRID_COLUMNS

    # Array groups expect more siblings, so the first column takes half a row
    array_first_width: int = 6
    array_first_mobile_width: int = GRID_COLUMNS

    array_min_width: int = 2
    array_min_mobile_width: int = 4
    array_mobile_max_per_row: int = 3

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        for name in (
            "default_width",
            "default_mobile_width",
            "array_first_width",
            "array_first_mobile_width",
            "array_min_width",
            "array_min_mobile_width",
        ):
            value = getattr(self, name)
            if not MIN_WIDTH_COLUMNS <= value <= GRID_COLUMNS:
                raise ValueError(
                    f"{name} must be in [{MIN_WIDTH_COLUMNS}, {GRID_COLUMNS}]: {value}"
                )
        if self.array_mobile_max_per_row < 1:
            raise ValueError(
                f"array_mobile_max_per_row must be positive: {self.array_mobile_max_per_row}"
            )

    def array_widths(self, fields_on_row: int) -> tuple[int, int]:
        """
        Even (desktop, mobile) split for an array row with `fields_on_row` fields.

        Desktop: max(array_min_width, 12 // n)
        Mobile:  max(array_min_mobile_width, 12 // min(n, array_mobile_max_per_row))
        """
        n = max(1, fields_on_row)
        width = max(self.array_min_width, GRID_COLUMNS // n)
        mobile_width = max(
            self.array_min_mobile_width,
            GRID_COLUMNS // min(n, self.array_mobile_max_per_row),
        )
        return width, mobile_width

"""
Module: core.models.fields

Purpose:
    Read-only views of the form editor's fields and field groups.
    The allocator only needs identity, group membership and the
    array-group flag that switches placement policy.

Key Classes:
    - Field: A form field belonging to exactly one group
    - FieldGroup: A page/section of fields, optionally an array group

Used By:
    - allocator.store: Group membership lookups
    - allocator.editor: Command scoping
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Field:
    """
    Form field owned by the surrounding editor (immutable).

    Attributes:
        id: Field identity
        field_group_id: Group this field belongs to
        field_order: Display order used when listing unplaced fields
        is_array_field: True when the field repeats per record
    """

    id: str
    field_group_id: str
    field_order: int = 0
    is_array_field: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Field id must be non-empty")
        if not self.field_group_id:
            raise ValueError(f"Field {self.id!r} has no field_group_id")


@dataclass(frozen=True, slots=True)
class FieldGroup:
    """
    Named collection of fields rendered together (immutable).

    Attributes:
        id: Group identity
        is_array_group: Rows render as repeating table records
        group_order: Position of the group in the form
        name: Display name

    Example:
        >>> FieldGroup("items", is_array_group=True).is_array_group
        True
    """

    id: str
    is_array_group: bool = False
    group_order: int = 0
    name: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("FieldGroup id must be non-empty")

"""
Unit tests for the placement engine (add/remove/resize).
"""

import pytest

from formgrid.allocator import GridConfig
from formgrid.allocator.placement import add_field, remove_field, update_entry_widths
from formgrid.core.models import FieldGroup, LayoutEntry


CONTACT = FieldGroup("contact")
ITEMS = FieldGroup("items", is_array_group=True)
CONTACT_IDS = {"name", "email", "phone", "city"}
ITEM_IDS = {"sku", "qty", "price", "weight"}


def _by_id(entries):
    return {e.field_id: e for e in entries}


class TestAddOrdinaryField:
    """Tests for add_field() on non-array groups."""

    def test_add_when_group_empty_then_row_zero_full_width(self):
        """First field goes to (0, 0) at 12/12."""
        # Act
        result = add_field([], "name", CONTACT, CONTACT_IDS)

        # Assert
        assert result == [LayoutEntry("name", 0, 0, 12, 12)]

    def test_add_when_rows_exist_then_next_row_column_zero(self, make_entry):
        """Existing max row r gives a new entry at (r + 1, 0) with 12/12."""
        # Arrange
        entries = [
            make_entry("name", 0, 0, width=6),
            make_entry("email", 0, 1, width=6),
            make_entry("phone", 1, 0),
        ]

        # Act
        result = add_field(entries, "city", CONTACT, CONTACT_IDS)

        # Assert
        city = _by_id(result)["city"]
        assert (city.row_index, city.column_index) == (2, 0)
        assert (city.width_columns, city.mobile_width_columns) == (12, 12)

    def test_add_when_other_group_has_rows_then_ignores_them(self, make_entry):
        """Row numbering is per group."""
        entries = [make_entry("remarks", 7), make_entry("sku", 3, width=6)]

        result = add_field(entries, "name", CONTACT, CONTACT_IDS)

        assert _by_id(result)["name"].row_index == 0

    def test_add_when_already_placed_then_no_op(self, make_entry):
        """Adding a placed field returns the list unchanged."""
        entries = [make_entry("name", 0), make_entry("email", 1)]

        result = add_field(entries, "name", CONTACT, CONTACT_IDS)

        assert result == entries

    def test_add_when_other_groups_present_then_untouched(self, make_entry):
        """Entries of other groups pass through unchanged."""
        other = make_entry("remarks", 4, 2, width=3, mobile=5)
        entries = [other, make_entry("name", 0)]

        result = add_field(entries, "email", CONTACT, CONTACT_IDS)

        assert other in result

    def test_add_when_custom_config_then_uses_defaults(self):
        """GridConfig defaults drive the width of ordinary fields."""
        config = GridConfig(default_width=8, default_mobile_width=12)

        result = add_field([], "name", CONTACT, CONTACT_IDS, config)

        assert result[0].width_columns == 8


class TestAddArrayField:
    """Tests for add_field() on array groups."""

    def test_add_when_first_array_field_then_half_width(self):
        """First array field: (0, 0) at 6 desktop / 12 mobile."""
        result = add_field([], "sku", ITEMS, ITEM_IDS)

        assert result == [LayoutEntry("sku", 0, 0, 6, 12)]

    def test_add_when_second_array_field_then_both_rebalanced(self):
        """F1 then F2: both on row 0 at 6/6, columns 0 and 1."""
        # Arrange
        entries = add_field([], "sku", ITEMS, ITEM_IDS)

        # Act
        result = add_field(entries, "qty", ITEMS, ITEM_IDS)

        # Assert
        by_id = _by_id(result)
        assert by_id["sku"] == LayoutEntry("sku", 0, 0, 6, 6)
        assert by_id["qty"] == LayoutEntry("qty", 0, 1, 6, 6)

    def test_add_when_third_array_field_then_split_in_three(self):
        """n = 3: desktop 4, mobile 4."""
        entries = []
        for field_id in ("sku", "qty", "price"):
            entries = add_field(entries, field_id, ITEMS, ITEM_IDS)

        widths = {e.field_id: (e.width_columns, e.mobile_width_columns) for e in entries}
        assert widths == {"sku": (4, 4), "qty": (4, 4), "price": (4, 4)}
        assert [e.column_index for e in entries] == [0, 1, 2]

    def test_add_when_fourth_array_field_then_mobile_capped_at_three(self):
        """n = 4: desktop 12 // 4 = 3, mobile 12 // min(4, 3) = 4."""
        entries = []
        for field_id in ("sku", "qty", "price", "weight"):
            entries = add_field(entries, field_id, ITEMS, ITEM_IDS)

        assert {(e.width_columns, e.mobile_width_columns) for e in entries} == {(3, 4)}

    def test_add_when_many_array_fields_then_desktop_floor_is_two(self):
        """n = 7: desktop max(2, 1) = 2."""
        ids = {f"c{i}" for i in range(7)}
        entries = []
        for i in range(7):
            entries = add_field(entries, f"c{i}", ITEMS, ids)

        assert {e.width_columns for e in entries} == {2}
        assert {e.mobile_width_columns for e in entries} == {4}

    def test_add_when_array_fields_on_two_rows_then_joins_first_entry_row(self, make_entry):
        """Only the first entry's row is rebalanced; other rows keep widths."""
        # Arrange
        entries = [
            make_entry("sku", 0, 0, width=6, mobile=12),
            make_entry("qty", 1, 0, width=12, mobile=12),
        ]

        # Act
        result = add_field(entries, "price", ITEMS, ITEM_IDS)

        # Assert
        by_id = _by_id(result)
        assert (by_id["price"].row_index, by_id["price"].column_index) == (0, 1)
        assert by_id["sku"].width_columns == 6
        assert by_id["qty"].width_columns == 12


class TestRemoveField:
    """Tests for remove_field()."""

    def test_remove_when_gapped_rows_then_survivors_dense(self, make_entry):
        """Rows {0, 2, 5}, remove row 5 -> survivors on {0, 1}, order kept."""
        # Arrange
        entries = [make_entry("name", 0), make_entry("email", 2), make_entry("phone", 5)]

        # Act
        result = remove_field(entries, "phone", CONTACT_IDS)

        # Assert
        assert [(e.field_id, e.row_index) for e in result] == [("name", 0), ("email", 1)]

    def test_remove_when_middle_of_row_then_columns_closed(self, make_entry):
        """Columns after the removed field shift left."""
        entries = [
            make_entry("name", 0, 0, width=4),
            make_entry("email", 0, 1, width=4),
            make_entry("phone", 0, 2, width=4),
        ]

        result = remove_field(entries, "email", CONTACT_IDS)

        assert [(e.field_id, e.column_index) for e in result] == [("name", 0), ("phone", 1)]

    def test_remove_when_sole_field_of_row_then_row_collapses(self, make_entry):
        entries = [make_entry("name", 0), make_entry("email", 1), make_entry("phone", 2)]

        result = remove_field(entries, "email", CONTACT_IDS)

        assert [(e.field_id, e.row_index) for e in result] == [("name", 0), ("phone", 1)]

    def test_remove_when_other_group_gapped_then_other_group_untouched(self, make_entry):
        """Only the field's own group is renormalized."""
        other = make_entry("remarks", 9, 4)
        entries = [other, make_entry("name", 0), make_entry("email", 3)]

        result = remove_field(entries, "name", CONTACT_IDS)

        assert result[0] == other
        assert _by_id(result)["email"].row_index == 0

    def test_remove_when_unknown_field_then_no_op(self, make_entry):
        entries = [make_entry("name", 0)]

        assert remove_field(entries, "ghost", CONTACT_IDS) == entries


class TestUpdateEntryWidths:
    """Tests for update_entry_widths()."""

    def test_update_when_both_given_then_both_set(self, make_entry):
        entries = [make_entry("name", 0), make_entry("email", 1)]

        result = update_entry_widths(entries, "email", 5, 9)

        assert (result[1].width_columns, result[1].mobile_width_columns) == (5, 9)
        assert result[0] == entries[0]

    def test_update_when_only_mobile_given_then_desktop_kept(self, make_entry):
        entries = [make_entry("name", 0, width=7)]

        result = update_entry_widths(entries, "name", mobile_width_columns=3)

        assert (result[0].width_columns, result[0].mobile_width_columns) == (7, 3)

    @pytest.mark.parametrize("value,expected", [(0, 1), (-4, 1), (13, 12), (99, 12)])
    def test_update_when_out_of_range_then_clamped(self, make_entry, value, expected):
        entries = [make_entry("name", 0)]

        result = update_entry_widths(entries, "name", value, value)

        assert result[0].width_columns == expected
        assert result[0].mobile_width_columns == expected

    def test_update_when_unknown_field_then_no_op(self, make_entry):
        entries = [make_entry("name", 0)]

        assert update_entry_widths(entries, "ghost", 3) == entries

"""
Unit tests for the repacking engine.

Covers row/column normalization and auto-sizing.
"""

import pytest

from formgrid.allocator.repacking import (
    calculate_auto_size,
    calculate_available_columns,
    group_rows,
    normalize_columns,
    normalize_group,
    normalize_rows,
    partition_group,
)
from formgrid.core.models import Viewport


class TestNormalizeRows:
    """Tests for normalize_rows()."""

    def test_normalize_rows_when_gaps_then_dense_ranks(self, make_entry):
        """Rows {0, 2, 5} should become {0, 1, 2} in order."""
        # Arrange
        entries = [make_entry("a", 5), make_entry("b", 0), make_entry("c", 2)]

        # Act
        result = normalize_rows(entries)

        # Assert
        assert [e.row_index for e in result] == [2, 0, 1]

    def test_normalize_rows_when_shared_row_then_same_rank(self, make_entry):
        """Entries sharing a row value keep sharing it."""
        entries = [make_entry("a", 3, 0), make_entry("b", 3, 1), make_entry("c", 7)]

        result = normalize_rows(entries)

        assert [e.row_index for e in result] == [0, 0, 1]

    def test_normalize_rows_when_empty_then_empty(self):
        """Empty input should give empty output."""
        assert normalize_rows([]) == []


class TestNormalizeColumns:
    """Tests for normalize_columns()."""

    def test_normalize_columns_when_gaps_then_dense_per_row(self, make_entry, positions):
        """Columns {1, 4, 9} in a row become {0, 1, 2} preserving order."""
        # Arrange
        entries = [
            make_entry("a", 0, 9),
            make_entry("b", 0, 1),
            make_entry("c", 0, 4),
            make_entry("d", 1, 3),
        ]

        # Act
        result = normalize_columns(entries)

        # Assert
        assert positions(result) == {
            "b": (0, 0),
            "c": (0, 1),
            "a": (0, 2),
            "d": (1, 0),
        }

    def test_normalize_columns_when_called_then_output_in_reading_order(self, make_entry):
        """Output is sorted by (row, column)."""
        entries = [make_entry("x", 1, 0), make_entry("y", 0, 1), make_entry("z", 0, 0)]

        result = normalize_columns(entries)

        assert [e.field_id for e in result] == ["z", "y", "x"]

    def test_normalize_columns_when_duplicate_columns_then_input_order_breaks_tie(self, make_entry):
        """Two entries claiming the same column keep their input order."""
        entries = [make_entry("first", 0, 2), make_entry("second", 0, 2)]

        result = normalize_columns(entries)

        assert [(e.field_id, e.column_index) for e in result] == [("first", 0), ("second", 1)]

    def test_normalize_columns_when_widths_set_then_widths_untouched(self, make_entry):
        """Normalization only rewrites indices."""
        entries = [make_entry("a", 0, 5, width=4, mobile=6)]

        result = normalize_columns(entries)

        assert (result[0].width_columns, result[0].mobile_width_columns) == (4, 6)


class TestNormalizeGroup:
    """Tests for normalize_group()."""

    def test_normalize_group_when_sparse_then_dense(self, make_entry, assert_dense):
        """Rows and columns should both become dense."""
        entries = [
            make_entry("a", 4, 7),
            make_entry("b", 4, 2),
            make_entry("c", 9, 3),
            make_entry("d", 1, 1),
        ]

        result = normalize_group(entries)

        assert_dense(result)
        assert len(result) == 4

    def test_normalize_group_when_applied_twice_then_idempotent(self, make_entry):
        """normalize(normalize(x)) == normalize(x)."""
        entries = [
            make_entry("a", 8, 3),
            make_entry("b", 2, 2),
            make_entry("c", 8, 3),
            make_entry("d", 2, 0),
            make_entry("e", 5, 11),
        ]

        once = normalize_group(entries)
        twice = normalize_group(once)

        assert twice == once

    def test_normalize_group_when_already_dense_then_same_entries(self, make_entry):
        """Dense input is returned as equal entries."""
        entries = [make_entry("a", 0, 0), make_entry("b", 0, 1), make_entry("c", 1, 0)]

        assert normalize_group(entries) == entries


class TestAvailableColumns:
    """Tests for calculate_available_columns()."""

    def test_available_when_row_partly_filled_then_remaining(self, make_entry):
        """12 minus the sum of widths in the row."""
        entries = [make_entry("a", 0, 0, width=4, mobile=12), make_entry("b", 0, 1, width=3, mobile=6)]

        assert calculate_available_columns(0, entries, Viewport.DESKTOP) == 5
        assert calculate_available_columns(0, entries, "mobile") == 0

    def test_available_when_row_overflows_then_zero(self, make_entry):
        """Never negative."""
        entries = [make_entry("a", 0, 0, width=8), make_entry("b", 0, 1, width=8)]

        assert calculate_available_columns(0, entries, Viewport.DESKTOP) == 0

    def test_available_when_field_excluded_then_ignored(self, make_entry):
        """The excluded field's width does not count."""
        entries = [make_entry("a", 0, 0, width=4), make_entry("b", 0, 1, width=6)]

        assert calculate_available_columns(0, entries, Viewport.DESKTOP, exclude_field_id="b") == 8

    def test_available_when_empty_row_then_full_grid(self, make_entry):
        """A row with no entries has all 12 columns free."""
        entries = [make_entry("a", 0, 0)]

        assert calculate_available_columns(3, entries, Viewport.DESKTOP) == 12


class TestAutoSize:
    """Tests for calculate_auto_size()."""

    def test_auto_size_when_space_left_then_takes_free_columns(self, make_entry):
        """Moving entry takes the free columns of each viewport."""
        # Arrange
        entries = [
            make_entry("a", 0, 0, width=4, mobile=6),
            make_entry("mover", 1, 0, width=12, mobile=12),
        ]

        # Act
        width, mobile = calculate_auto_size(0, entries, entries[1])

        # Assert
        assert (width, mobile) == (8, 6)

    def test_auto_size_when_row_full_then_keeps_previous_width(self, make_entry):
        """A full row falls back to the pre-move width instead of zero."""
        entries = [
            make_entry("a", 0, 0, width=12, mobile=12),
            make_entry("mover", 1, 0, width=5, mobile=7),
        ]

        width, mobile = calculate_auto_size(0, entries, entries[1])

        assert (width, mobile) == (5, 7)

    def test_auto_size_when_one_viewport_full_then_mixed(self, make_entry):
        """Each viewport falls back independently."""
        entries = [
            make_entry("a", 0, 0, width=6, mobile=12),
            make_entry("mover", 1, 0, width=12, mobile=9),
        ]

        assert calculate_auto_size(0, entries, entries[1]) == (6, 9)

    @pytest.mark.parametrize("used", [0, 5, 11, 12, 20])
    def test_auto_size_when_any_occupancy_then_never_zero(self, make_entry, used):
        """No-zero-width: result is always at least one column."""
        entries = [make_entry("mover", 2, 0, width=3, mobile=3)]
        remaining = used
        col = 0
        while remaining > 0:
            w = min(12, remaining)
            entries.append(make_entry(f"f{col}", 0, col, width=w, mobile=w))
            remaining -= w
            col += 1

        width, mobile = calculate_auto_size(0, entries, entries[0])

        assert width >= 1
        assert mobile >= 1


class TestHelpers:
    """Tests for group_rows() and partition_group()."""

    def test_group_rows_when_called_then_rows_sorted_by_column(self, make_entry):
        entries = [make_entry("b", 0, 1), make_entry("a", 0, 0), make_entry("c", 2, 0)]

        rows = group_rows(entries)

        assert [e.field_id for e in rows[0]] == ["a", "b"]
        assert set(rows) == {0, 2}

    def test_partition_group_when_mixed_then_split_in_order(self, make_entry):
        entries = [make_entry("a", 0), make_entry("x", 0), make_entry("b", 1)]

        group, others = partition_group(entries, {"a", "b"})

        assert [e.field_id for e in group] == ["a", "b"]
        assert [e.field_id for e in others] == ["x"]

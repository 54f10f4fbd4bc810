import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import formgrid
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from formgrid.core.models import Field, FieldGroup, LayoutEntry  # noqa: E402
from formgrid.allocator import LayoutStore  # noqa: E402


# Common test fixtures
@pytest.fixture
def make_entry():
    """Factory for LayoutEntry with full-width defaults."""
    def _create(field_id: str, row: int, col: int = 0, width: int = 12, mobile: int = 12):
        return LayoutEntry(field_id, row, col, width, mobile)
    return _create


@pytest.fixture
def groups():
    """One ordinary group, one array group, one spare group."""
    return [
        FieldGroup("contact", group_order=0, name="Contact"),
        FieldGroup("items", is_array_group=True, group_order=1, name="Items"),
        FieldGroup("notes", group_order=2, name="Notes"),
    ]


@pytest.fixture
def fields():
    """Fields spread across the three sample groups."""
    return [
        Field("name", "contact", field_order=0),
        Field("email", "contact", field_order=1),
        Field("phone", "contact", field_order=2),
        Field("city", "contact", field_order=3),
        Field("sku", "items", field_order=0, is_array_field=True),
        Field("qty", "items", field_order=1, is_array_field=True),
        Field("price", "items", field_order=2, is_array_field=True),
        Field("weight", "items", field_order=3, is_array_field=True),
        Field("remarks", "notes", field_order=0),
    ]


@pytest.fixture
def store(fields, groups):
    """Empty store over the sample fields and groups."""
    return LayoutStore(fields, groups)


@pytest.fixture
def positions():
    """Map field_id -> (row, column) for compact assertions."""
    def _positions(entries):
        return {e.field_id: (e.row_index, e.column_index) for e in entries}
    return _positions


@pytest.fixture
def assert_dense():
    """Check rows are 0..R-1 and each row's columns are 0..C-1."""
    def _check(entries):
        rows = sorted({e.row_index for e in entries})
        assert rows == list(range(len(rows)))
        for row in rows:
            cols = sorted(e.column_index for e in entries if e.row_index == row)
            assert cols == list(range(len(cols)))
    return _check

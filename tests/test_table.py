"""
Tests for chetutils.data.table and chetutils.data.table_ops.

These tests verify:
1. Columns, rows and typed value coercion
2. Copies and clones
3. None-safe table helpers (filter, sort, dictionaries, arrays)
"""

from datetime import datetime
from decimal import Decimal

import pytest

from chetutils.data import DataColumn, DataTable, ExpressionError
from chetutils.data import table_ops
from chetutils.data.table import coerce_value


def make_people() -> DataTable:
    table = DataTable("People", [DataColumn("Name", str), DataColumn("Age", int)])
    table.add_row("张三", 30)
    table.add_row("李四", 17)
    table.add_row("王五", 45)
    return table


# =============================================================================
# COERCION TESTS
# =============================================================================

class TestCoercion:
    """Test coerce_value."""

    @pytest.mark.parametrize("value, data_type, expected", [
        ("42", int, 42),
        (3.0, int, 3),
        ("true", bool, True),
        (" False ", bool, False),
        ("1.5", Decimal, Decimal("1.5")),
        ("2024-01-15", datetime, datetime(2024, 1, 15)),
        (5, str, "5"),
        ([1], object, [1]),
        (None, int, None),
    ])
    def test_converts(self, value, data_type, expected):
        """Values are converted to the column type."""
        assert coerce_value(value, data_type) == expected

    @pytest.mark.parametrize("value, data_type", [("abc", int), (2.5, int), ("yes", bool),
                                                  ("x", Decimal), ("soon", datetime)])
    def test_rejects(self, value, data_type):
        """Unconvertible values raise ValueError."""
        with pytest.raises(ValueError):
            coerce_value(value, data_type)


# =============================================================================
# TABLE TESTS
# =============================================================================

class TestDataTable:
    """Test the table model."""

    def test_columns(self):
        """Names, lookup and duplicates."""
        table = make_people()
        assert table.column_names == ["Name", "Age"]
        assert table.column_index("age") == 1
        assert table.get_column("AGE").data_type is int
        assert table.has_column(0)
        assert not table.has_column("Missing")
        assert not table.has_column(5)
        with pytest.raises(ValueError):
            table.add_column("name")
        with pytest.raises(KeyError):
            table.column_index("Missing")

    def test_add_column_grows_rows(self):
        """Existing rows get None."""
        table = make_people()
        table.add_column("City")
        assert table.rows[0]["City"] is None
        table.rows[0]["City"] = "北京"
        assert table.rows[0].to_dict() == {"Name": "张三", "Age": 30, "City": "北京"}

    def test_rows(self):
        """Positional rows, typed storage and access."""
        table = make_people()
        assert len(table) == 3
        row = table.add_row("赵六", "22")
        assert row["Age"] == 22
        assert row[0] == "赵六"
        assert row.get("Missing", "-") == "-"
        partial = table.add_row("钱七")
        assert partial["Age"] is None
        assert [r["Name"] for r in table] == ["张三", "李四", "王五", "赵六", "钱七"]

    def test_row_errors(self):
        """Too many values or bad types."""
        table = make_people()
        with pytest.raises(ValueError):
            table.add_row("a", 1, "extra")
        with pytest.raises(ValueError):
            table.add_row("a", "not a number")

    def test_new_row_and_append(self):
        """Detached rows belong to their table."""
        table = make_people()
        row = table.new_row()
        row["Name"] = "新"
        table.append(row)
        assert table.rows[-1]["Name"] == "新"
        with pytest.raises(ValueError):
            make_people().append(row)

    def test_import_row_matches_by_name(self):
        """Columns are matched by name."""
        source = DataTable("S", ["Age", "Extra"])
        source.add_row(50, "x")
        target = make_people()
        copied = target.import_row(source.rows[0])
        assert copied.to_dict() == {"Name": None, "Age": 50}

    def test_clone_and_copy(self):
        """Clone keeps schema only; copy keeps rows."""
        table = make_people()
        clone = table.clone()
        assert clone.column_names == table.column_names
        assert len(clone) == 0
        copy = table.copy()
        assert copy is not table
        assert len(copy) == 3
        copy.rows[0]["Age"] = 99
        assert table.rows[0]["Age"] == 30

    def test_select(self):
        """Filter and sort together."""
        rows = make_people().select("Age >= 18", "Age DESC")
        assert [row["Name"] for row in rows] == ["王五", "张三"]
        assert len(make_people().select()) == 3

    def test_select_errors(self):
        """Malformed expressions raise ExpressionError."""
        with pytest.raises(ExpressionError):
            make_people().select("Height > 3")
        with pytest.raises(ExpressionError):
            make_people().select("", "Height")

    def test_clear(self):
        """Rows removed, columns kept."""
        table = make_people()
        table.clear()
        assert len(table) == 0
        assert table.column_names == ["Name", "Age"]


# =============================================================================
# TABLE HELPER TESTS
# =============================================================================

class TestTableOps:
    """Test None-safe table helpers."""

    def test_is_null_or_empty(self):
        """None or no rows."""
        assert table_ops.is_null_or_empty(None)
        assert table_ops.is_null_or_empty(DataTable())
        table = DataTable(columns=["A"])
        table.add_row("1")
        assert not table_ops.is_null_or_empty(table)

    def test_to_list(self):
        """Row converter."""
        table = DataTable(columns=[DataColumn("A", int)])
        table.add_row(1)
        table.add_row(2)
        assert table_ops.to_list(table, lambda row: row["A"]) == [1, 2]
        assert table_ops.to_list(None, lambda row: row) == []
        assert table_ops.to_list(DataTable(), lambda row: row) == []

    def test_column_names_and_dicts(self):
        """Names and row dictionaries."""
        table = DataTable(columns=["A", "B"])
        table.add_row("1", "2")
        assert table_ops.get_column_names(table) == ["A", "B"]
        assert table_ops.get_column_names(None) == []
        assert table_ops.to_dictionary_list(table) == [{"A": "1", "B": "2"}]
        assert table_ops.to_dictionary_list(None) == []
        assert list(table_ops.iter_row_dicts(table)) == [{"A": "1", "B": "2"}]

    def test_filter(self):
        """Matching rows in a new table."""
        table = DataTable(columns=[DataColumn("A", int)])
        table.add_row(1)
        table.add_row(2)
        filtered = table_ops.filter_table(table, "A=2")
        assert filtered is not table
        assert len(filtered) == 1
        assert filtered.rows[0]["A"] == 2
        assert table_ops.filter_table(None, "A=1") is None
        assert table_ops.filter_table(table, "  ") is table

    def test_filter_no_match_keeps_schema(self):
        """Empty result with the same columns."""
        table = DataTable(columns=[DataColumn("A", int)])
        filtered = table_ops.filter_table(table, "A=1")
        assert len(filtered) == 0
        assert filtered.column_names == ["A"]

    def test_sort(self):
        """Ordered rows in a new table."""
        table = DataTable(columns=[DataColumn("A", int)])
        table.add_row(2)
        table.add_row(1)
        ordered = table_ops.sort_table(table, "A ASC")
        assert [row["A"] for row in ordered] == [1, 2]
        assert [row["A"] for row in table] == [2, 1]
        assert table_ops.sort_table(None, "A DESC") is None
        assert len(table_ops.sort_table(DataTable(columns=["A"]), "A DESC")) == 0

    def test_copy_and_clone(self):
        """None in, None out."""
        table = make_people()
        assert table_ops.copy_all(None) is None
        assert len(table_ops.copy_all(table)) == 3
        assert table_ops.clone_structure(None) is None
        assert len(table_ops.clone_structure(table)) == 0

    def test_add_clear_array(self):
        """Extra values are dropped; arrays are row-major."""
        table = DataTable(columns=["A", "B"])
        table_ops.add_row(table, 1, 2, 3)
        table_ops.add_row(None, 1)
        assert table_ops.to_array(table) == [[1, 2]]
        table_ops.clear_rows(table)
        assert table_ops.to_array(table) == []
        assert table_ops.to_array(None) == []

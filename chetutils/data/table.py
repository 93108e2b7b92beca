"""
In-memory row/column table.

A small DataTable model: named, optionally typed columns and rows that
hold one value per column (None for missing values). Rows are addressed by
column index or by column name (case-insensitive). `select` filters and
orders rows with the expression language in `chetutils.data.expression`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Iterator, Optional, Union

from .expression import compile_filter, compile_sort

ColumnKey = Union[int, str, "DataColumn"]


# =============================================================================
# VALUE COERCION
# =============================================================================

def coerce_value(value: Any, data_type: type) -> Any:
    """
    Convert a value for storage in a column of `data_type`.

    `object` columns store anything; None is always allowed.

    Raises:
        ValueError: If the value cannot be converted.
    """
    if value is None or data_type is object or isinstance(value, data_type):
        return value
    try:
        if data_type is bool:
            if isinstance(value, str):
                text = value.strip().lower()
                if text in ("true", "false"):
                    return text == "true"
                raise ValueError(value)
            return bool(value)
        if data_type is int:
            if isinstance(value, float) and not value.is_integer():
                raise ValueError(value)
            return int(value)
        if data_type is Decimal:
            return Decimal(str(value))
        if data_type is datetime:
            return datetime.fromisoformat(str(value))
        return data_type(value)
    except (TypeError, ValueError, InvalidOperation) as e:
        raise ValueError(
            f"Cannot store {value!r} in a column of type {data_type.__name__}"
        ) from e


# =============================================================================
# COLUMNS AND ROWS
# =============================================================================

@dataclass
class DataColumn:
    """A named column with an optional value type."""
    name: str
    data_type: type = object


class DataRow:
    """One row of a DataTable; values line up with the table's columns."""

    __slots__ = ("table", "_values")

    def __init__(self, table: "DataTable", values: Optional[list[Any]] = None):
        self.table = table
        self._values = values if values is not None else [None] * len(table.columns)

    def __getitem__(self, key: ColumnKey) -> Any:
        return self._values[self.table.column_index(key)]

    def __setitem__(self, key: ColumnKey, value: Any) -> None:
        index = self.table.column_index(key)
        self._values[index] = coerce_value(value, self.table.columns[index].data_type)

    def __repr__(self) -> str:
        return f"DataRow({self.to_dict()!r})"

    def get(self, key: ColumnKey, default: Any = None) -> Any:
        if not self.table.has_column(key):
            return default
        return self[key]

    @property
    def item_array(self) -> list[Any]:
        """Copy of the row's values in column order."""
        return list(self._values)

    def to_dict(self) -> dict[str, Any]:
        return {column.name: value for column, value in zip(self.table.columns, self._values)}

    def _grow(self) -> None:
        self._values.append(None)


# =============================================================================
# TABLE
# =============================================================================

class DataTable:
    """
    Named collection of columns and rows.

    String comparisons in filter and sort expressions ignore case unless
    `case_sensitive` is set.
    """

    def __init__(self, name: str = "", columns: Optional[Iterable[Union[str, DataColumn]]] = None,
                 case_sensitive: bool = False):
        self.name = name
        self.case_sensitive = case_sensitive
        self.columns: list[DataColumn] = []
        self.rows: list[DataRow] = []
        for column in columns or ():
            if isinstance(column, DataColumn):
                self.add_column(column.name, column.data_type)
            else:
                self.add_column(column)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[DataRow]:
        return iter(self.rows)

    def __repr__(self) -> str:
        return f"DataTable(name={self.name!r}, columns={self.column_names}, rows={len(self.rows)})"

    # -- columns --------------------------------------------------------------

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    def add_column(self, name: str, data_type: type = object) -> DataColumn:
        """
        Append a column; existing rows get None in it.

        Raises:
            ValueError: If a column with the same name (ignoring case) exists.
        """
        if self.has_column(name):
            raise ValueError(f"A column named '{name}' already belongs to this table")
        column = DataColumn(name, data_type)
        self.columns.append(column)
        for row in self.rows:
            row._grow()
        return column

    def has_column(self, key: ColumnKey) -> bool:
        try:
            self.column_index(key)
        except (KeyError, IndexError):
            return False
        return True

    def column_index(self, key: ColumnKey) -> int:
        """
        Resolve a column index, name or DataColumn to an index.

        Raises:
            KeyError: Unknown column name.
            IndexError: Column index out of range.
        """
        if isinstance(key, DataColumn):
            key = key.name
        if isinstance(key, int):
            if not 0 <= key < len(self.columns):
                raise IndexError(f"Cannot find column {key}")
            return key
        for index, column in enumerate(self.columns):
            if column.name == key:
                return index
        lowered = key.lower()
        for index, column in enumerate(self.columns):
            if column.name.lower() == lowered:
                return index
        raise KeyError(f"Column '{key}' does not belong to table {self.name}")

    def get_column(self, key: ColumnKey) -> DataColumn:
        return self.columns[self.column_index(key)]

    # -- rows -----------------------------------------------------------------

    def new_row(self) -> DataRow:
        """A detached row with the table's schema, all values None."""
        return DataRow(self)

    def add_row(self, *values: Any) -> DataRow:
        """
        Append a row from positional values; missing trailing values are None.

        Raises:
            ValueError: If there are more values than columns, or a value
                does not fit its column type.
        """
        if len(values) > len(self.columns):
            raise ValueError("Input array is longer than the number of columns in this table")
        row = self.new_row()
        for index, value in enumerate(values):
            row[index] = value
        self.rows.append(row)
        return row

    def append(self, row: DataRow) -> None:
        """Attach a row created by `new_row`."""
        if row.table is not self:
            raise ValueError("This row belongs to another table")
        self.rows.append(row)

    def import_row(self, row: DataRow) -> DataRow:
        """Copy a row from any table, matching columns by name."""
        copy = self.new_row()
        for column in self.columns:
            if row.table.has_column(column.name):
                copy[column.name] = row[column.name]
        self.rows.append(copy)
        return copy

    def clear(self) -> None:
        self.rows.clear()

    # -- copies ---------------------------------------------------------------

    def clone(self) -> "DataTable":
        """Same name and columns, no rows."""
        return DataTable(
            self.name,
            [DataColumn(column.name, column.data_type) for column in self.columns],
            case_sensitive=self.case_sensitive,
        )

    def copy(self) -> "DataTable":
        """Structure and rows; row values are shared, row lists are not."""
        duplicate = self.clone()
        for row in self.rows:
            duplicate.rows.append(DataRow(duplicate, row.item_array))
        return duplicate

    # -- queries --------------------------------------------------------------

    def select(self, filter_expression: str = "", sort: str = "") -> list[DataRow]:
        """
        Rows matching `filter_expression`, ordered by `sort`.

        Raises:
            ExpressionError: If either expression is malformed.
        """
        rows = list(self.rows)
        if filter_expression and filter_expression.strip():
            predicate = compile_filter(filter_expression, self)
            rows = [row for row in rows if predicate(row)]
        if sort and sort.strip():
            rows = compile_sort(sort, self)(rows)
        return rows

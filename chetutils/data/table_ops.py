"""
None-safe helpers over DataTable.

Every function accepts None for the table and returns an empty or None
result instead of raising.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional, TypeVar

from .table import DataRow, DataTable

T = TypeVar("T")


def is_null_or_empty(table: Optional[DataTable]) -> bool:
    return table is None or len(table.rows) == 0


def to_list(table: Optional[DataTable], converter: Optional[Callable[[DataRow], T]]) -> list[T]:
    if table is None or converter is None:
        return []
    return [converter(row) for row in table.rows]


def get_column_names(table: Optional[DataTable]) -> list[str]:
    if table is None:
        return []
    return table.column_names


def to_dictionary_list(table: Optional[DataTable]) -> list[dict[str, Any]]:
    return list(iter_row_dicts(table))


def iter_row_dicts(table: Optional[DataTable]) -> Iterator[dict[str, Any]]:
    """Yield one {column name: value} dict per row."""
    if table is None:
        return
    for row in table.rows:
        yield row.to_dict()


# =============================================================================
# FILTER / SORT
# =============================================================================

def _rows_to_table(table: DataTable, rows: list[DataRow]) -> DataTable:
    result = table.clone()
    for row in rows:
        result.import_row(row)
    return result


def filter_table(table: Optional[DataTable], expression: Optional[str]) -> Optional[DataTable]:
    """
    New table holding the rows that match `expression`, e.g.
    "Age > 18 AND Name LIKE '张%'".

    A blank expression returns the table itself.

    Raises:
        ExpressionError: If the expression is malformed.
    """
    if table is None or expression is None or not expression.strip():
        return table
    return _rows_to_table(table, table.select(expression))


def sort_table(table: Optional[DataTable], sort: Optional[str]) -> Optional[DataTable]:
    """
    New table with the rows ordered by `sort`, e.g. "Age DESC, Name ASC".

    A blank sort returns the table itself.

    Raises:
        ExpressionError: If the sort expression is malformed.
    """
    if table is None or sort is None or not sort.strip():
        return table
    return _rows_to_table(table, table.select("", sort))


# =============================================================================
# COPY / MUTATE
# =============================================================================

def copy_all(table: Optional[DataTable]) -> Optional[DataTable]:
    return table.copy() if table is not None else None


def clone_structure(table: Optional[DataTable]) -> Optional[DataTable]:
    return table.clone() if table is not None else None


def add_row(table: Optional[DataTable], *values: Any) -> None:
    """Append a row; extra values beyond the column count are ignored."""
    if table is None:
        return
    table.add_row(*values[:len(table.columns)])


def clear_rows(table: Optional[DataTable]) -> None:
    if table is not None:
        table.clear()


def to_array(table: Optional[DataTable]) -> list[list[Any]]:
    """Row-major 2-D list of the table's values."""
    if table is None:
        return []
    return [row.item_array for row in table.rows]

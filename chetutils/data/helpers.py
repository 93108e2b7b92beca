"""
DataTable loading, cleanup and entity mapping.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, TypeVar, Union, get_args, get_origin, get_type_hints

from .table import DataTable

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# MISSING VALUES
# =============================================================================

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def fill_missing_values(table: Optional[DataTable]) -> None:
    """
    Fill blank cells column by column, in place.

    A blank cell takes the first non-blank value below it. When nothing
    below is filled, it repeats the last value above. Cells with neither
    stay blank.
    """
    if table is None or len(table.rows) == 0:
        return

    rows = table.rows
    for col in range(len(table.columns)):
        last_value = None
        for index, row in enumerate(rows):
            value = row[col]
            if not _is_blank(value):
                last_value = value
                continue
            next_value = next(
                (rows[below][col] for below in range(index + 1, len(rows))
                 if not _is_blank(rows[below][col])),
                None,
            )
            if next_value is not None:
                row[col] = next_value
                last_value = next_value
            elif last_value is not None:
                row[col] = last_value


# =============================================================================
# JSON
# =============================================================================

def _convert_json_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value) if _looks_like_date(value) else value
        except ValueError:
            return value
    # Nested objects and arrays are kept as JSON text
    return json.dumps(value, ensure_ascii=False)


def _looks_like_date(text: str) -> bool:
    return len(text) >= 10 and text[4] == "-" and text[7] == "-" and text[:4].isdigit()


def json_to_table(data: Union[str, list[dict[str, Any]]]) -> DataTable:
    """
    Build a table from a JSON array of objects (or its text).

    Columns come from the first object's keys; keys missing from later
    objects become None. Integers, floats and booleans keep their type,
    ISO-8601 strings become datetimes.

    Raises:
        json.JSONDecodeError: If `data` is text that is not valid JSON.
        ValueError: If the JSON is not an array of objects.
    """
    items = json.loads(data) if isinstance(data, str) else data
    if not isinstance(items, list):
        raise ValueError("Expected a JSON array of objects")

    table = DataTable()
    if not items:
        return table

    first = items[0]
    if not isinstance(first, dict):
        raise ValueError("Expected a JSON array of objects")
    columns = list(first)
    for column in columns:
        table.add_column(column)

    for item in items:
        if not isinstance(item, dict):
            raise ValueError("Expected a JSON array of objects")
        table.add_row(*(_convert_json_value(item.get(column)) for column in columns))
    return table


# =============================================================================
# ENTITY MAPPING
# =============================================================================

def _type_default(target_type: Any) -> Any:
    if target_type in (int, float, Decimal, bool):
        return target_type()
    return None


def _unwrap_optional(target_type: Any) -> Any:
    if get_origin(target_type) is Union:
        args = [arg for arg in get_args(target_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return target_type


def convert_value_safe(value: Any, target_type: Any) -> Any:
    """
    Convert `value` to `target_type`, or return the type's default
    (0, 0.0, False, None) when conversion fails.
    """
    nullable = _unwrap_optional(target_type) is not target_type
    target_type = _unwrap_optional(target_type)
    if value is None:
        return None if nullable else _type_default(target_type)
    try:
        if target_type is Any or isinstance(value, target_type) and not (
                target_type is int and isinstance(value, bool)):
            return value
        if target_type is str:
            return str(value)
        if target_type is datetime:
            return datetime.fromisoformat(str(value))
        if target_type is date:
            return datetime.fromisoformat(str(value)).date()
        if target_type is bool:
            if isinstance(value, str):
                text = value.strip().lower()
                if text not in ("true", "false"):
                    raise ValueError(value)
                return text == "true"
            return bool(value)
        if target_type is int:
            if isinstance(value, str):
                return int(value.strip())
            if isinstance(value, (float, Decimal)) and value != int(value):
                raise ValueError(value)
            return int(value)
        if target_type is Decimal:
            return Decimal(str(value))
        return target_type(value)
    except (TypeError, ValueError, InvalidOperation, OverflowError):
        return _type_default(target_type)


def map_to_entities(table: Optional[DataTable], field_mapping: dict[str, str],
                    entity_type: type[T]) -> list[T]:
    """
    Build one `entity_type` instance per row.

    `field_mapping` maps column names to attribute names. Mappings whose
    column or attribute does not exist are ignored. Rows that fail to
    convert are logged and skipped.
    """
    if table is None or len(table.rows) == 0:
        return []

    hints = get_type_hints(entity_type)
    if dataclasses.is_dataclass(entity_type):
        attributes = {field.name for field in dataclasses.fields(entity_type)}
    else:
        attributes = set(hints)
    columns = set(table.column_names)

    valid_mapping = {
        column: attribute for column, attribute in field_mapping.items()
        if column in columns and attribute in attributes
    }
    if not valid_mapping:
        logger.warning("没有有效的映射关系")
        return []

    result = []
    for index, row in enumerate(table.rows):
        try:
            values = {
                attribute: convert_value_safe(row[column], hints.get(attribute, Any))
                for column, attribute in valid_mapping.items()
                if row[column] is not None
            }
            if dataclasses.is_dataclass(entity_type):
                entity = entity_type(**values)
            else:
                entity = entity_type()
                for attribute, value in values.items():
                    setattr(entity, attribute, value)
            result.append(entity)
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning(f"处理行时出错 (row {index}): {e}")
    return result

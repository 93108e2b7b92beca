"""
None-safe helpers over iterables and mutable collections.

A None source behaves like an empty one. Helpers that return sequences
return lists, so results can be iterated more than once.
"""

from __future__ import annotations

import dataclasses
import itertools
import typing
from collections import abc
from typing import (
    Any, Callable, Hashable, Iterable, Iterator, MutableSequence, MutableSet, Optional,
    TypeVar, Union,
)

from ..data.table import DataTable

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
R = TypeVar("R")

Collection = Union[MutableSequence[T], MutableSet[T]]


# =============================================================================
# INSPECTION
# =============================================================================

_MISSING = object()


def is_null_or_empty(source: Optional[Iterable[Any]]) -> bool:
    if source is None:
        return True
    if hasattr(source, "__len__"):
        return len(source) == 0
    return next(iter(source), _MISSING) is _MISSING


def is_not_empty(source: Optional[Iterable[Any]]) -> bool:
    return not is_null_or_empty(source)


def safe_count(source: Optional[Iterable[Any]]) -> int:
    if source is None:
        return 0
    if hasattr(source, "__len__"):
        return len(source)
    return sum(1 for _ in source)


def first_or_default_safe(source: Optional[Iterable[T]], default: Optional[T] = None) -> Optional[T]:
    if source is None:
        return default
    return next(iter(source), default)


def last_or_default_safe(source: Optional[Iterable[T]], default: Optional[T] = None) -> Optional[T]:
    if source is None:
        return default
    last = default
    for item in source:
        last = item
    return last


def contains_safe(source: Optional[Iterable[T]], item: T) -> bool:
    return source is not None and item in source


def all_safe(source: Optional[Iterable[T]], predicate: Optional[Callable[[T], bool]]) -> bool:
    """False for a None source or predicate; otherwise like all()."""
    if source is None or predicate is None:
        return False
    return all(predicate(item) for item in source)


def any_safe(source: Optional[Iterable[T]], predicate: Optional[Callable[[T], bool]]) -> bool:
    if source is None or predicate is None:
        return False
    return any(predicate(item) for item in source)


# =============================================================================
# CONVERSION
# =============================================================================

def to_list_safe(source: Optional[Iterable[T]]) -> list[T]:
    return list(source) if source is not None else []


def to_array_safe(source: Optional[Iterable[T]]) -> tuple[T, ...]:
    return tuple(source) if source is not None else ()


def to_hash_set_safe(source: Optional[Iterable[T]]) -> set[T]:
    return set(source) if source is not None else set()


def to_dictionary_safe(source: Optional[Iterable[T]],
                       key_selector: Optional[Callable[[T], K]],
                       value_selector: Optional[Callable[[T], V]]) -> dict[K, V]:
    """
    Dict built from selectors; a None selector yields None keys or values.
    Later items overwrite earlier ones with the same key.
    """
    if source is None:
        return {}
    key_selector = key_selector or (lambda _: None)
    value_selector = value_selector or (lambda _: None)
    return {key_selector(item): value_selector(item) for item in source}


def to_first_wins_dict(source: Optional[Iterable[Any]],
                       key_selector: Optional[Callable[[Any], K]] = None,
                       value_selector: Optional[Callable[[Any], V]] = None) -> dict[K, V]:
    """
    Dict that keeps the first value seen for each key.

    Without selectors the source must yield (key, value) pairs. With only
    one selector given the result is empty.
    """
    result: dict[K, V] = {}
    if source is None:
        return result
    if key_selector is None and value_selector is None:
        pairs = ((key, value) for key, value in source)
    elif key_selector is None or value_selector is None:
        return result
    else:
        pairs = ((key_selector(item), value_selector(item)) for item in source)
    for key, value in pairs:
        result.setdefault(key, value)
    return result


def _column_types(item_type: type) -> dict[str, type]:
    # Only plain classes type a column; Optional[int], list[str] etc. stay object
    try:
        hints = typing.get_type_hints(item_type)
    except (NameError, TypeError):
        hints = {field.name: field.type for field in dataclasses.fields(item_type)}
    return {
        name: hint for name, hint in hints.items()
        if isinstance(hint, type) and typing.get_origin(hint) is None
    }


def to_data_table(source: Optional[Iterable[Any]], item_type: Optional[type] = None) -> DataTable:
    """
    Table with one column per dataclass field of `item_type`, typed by the
    field annotation when it names a plain class.

    The table is named after the item type. When `item_type` is omitted it
    is taken from the first item.
    """
    items = list(source) if source is not None else []
    if item_type is None and items:
        item_type = type(items[0])

    table = DataTable(item_type.__name__ if item_type is not None else "")
    if item_type is None:
        return table

    types: dict[str, type] = {}
    if dataclasses.is_dataclass(item_type):
        names = [field.name for field in dataclasses.fields(item_type)]
        types = _column_types(item_type)
    else:
        names = [name for name in vars(items[0]) if not name.startswith("_")] if items else []
    for name in names:
        table.add_column(name, types.get(name, object))
    for item in items:
        table.add_row(*(getattr(item, name, None) for name in names))
    return table


# =============================================================================
# QUERIES
# =============================================================================

def distinct_safe(source: Optional[Iterable[T]]) -> list[T]:
    """Unique items in first-seen order."""
    if source is None:
        return []
    return list(dict.fromkeys(source))


def where_safe(source: Optional[Iterable[T]], predicate: Optional[Callable[[T], bool]]) -> list[T]:
    """Matching items; a None predicate keeps everything."""
    if source is None:
        return []
    if predicate is None:
        return list(source)
    return [item for item in source if predicate(item)]


def select_safe(source: Optional[Iterable[T]], selector: Optional[Callable[[T], R]]) -> list[Optional[R]]:
    if source is None:
        return []
    if selector is None:
        return [None for _ in source]
    return [selector(item) for item in source]


def group_by_safe(source: Optional[Iterable[T]],
                  key_selector: Optional[Callable[[T], K]]) -> dict[K, list[T]]:
    """Items grouped by key, groups and members in first-seen order."""
    groups: dict[K, list[T]] = {}
    if source is None:
        return groups
    key_selector = key_selector or (lambda _: None)
    for item in source:
        groups.setdefault(key_selector(item), []).append(item)
    return groups


def order_by_safe(source: Optional[Iterable[T]], key_selector: Optional[Callable[[T], Any]]) -> list[T]:
    """Stable sort; a None key selector keeps the original order."""
    if source is None:
        return []
    if key_selector is None:
        return list(source)
    return sorted(source, key=key_selector)


def order_by_descending_safe(source: Optional[Iterable[T]],
                             key_selector: Optional[Callable[[T], Any]]) -> list[T]:
    if source is None:
        return []
    if key_selector is None:
        return list(source)
    return sorted(source, key=key_selector, reverse=True)


def page(source: Optional[Iterable[T]], page_index: int, page_size: int) -> list[T]:
    """Zero-based page; empty for a negative index or a non-positive size."""
    if source is None or page_index < 0 or page_size <= 0:
        return []
    start = page_index * page_size
    return list(itertools.islice(source, start, start + page_size))


def chunk(source: Optional[Iterable[T]], size: int) -> Iterator[list[T]]:
    """Consecutive lists of `size` items; the last one may be shorter."""
    if source is None or size <= 0:
        return
    iterator = iter(source)
    while batch := list(itertools.islice(iterator, size)):
        yield batch


def remove_nulls(source: Optional[Iterable[Optional[T]]]) -> list[T]:
    if source is None:
        return []
    return [item for item in source if item is not None]


def reverse_safe(source: Optional[Iterable[T]]) -> list[T]:
    if source is None:
        return []
    return list(source)[::-1]


def for_each_safe(source: Optional[Iterable[T]], action: Optional[Callable[[T], Any]]) -> None:
    if source is None or action is None:
        return
    for item in source:
        action(item)


# =============================================================================
# AGGREGATES
# =============================================================================

def sum_safe(source: Optional[Iterable[Any]]) -> Any:
    if source is None:
        return 0
    return sum(source)


def average_safe(source: Optional[Iterable[Any]]) -> Any:
    """Arithmetic mean; 0 for a None or empty source."""
    items = to_list_safe(source)
    if not items:
        return 0
    return sum(items) / len(items)


def max_safe(source: Optional[Iterable[Any]]) -> Any:
    items = to_list_safe(source)
    return max(items) if items else 0


def min_safe(source: Optional[Iterable[Any]]) -> Any:
    items = to_list_safe(source)
    return min(items) if items else 0


# =============================================================================
# COLLECTION MUTATORS
# =============================================================================

def _add(collection: Collection, item: Any) -> None:
    if isinstance(collection, abc.MutableSet):
        collection.add(item)
    else:
        collection.append(item)


def add_safe(collection: Optional[Collection], item: T) -> None:
    if collection is not None:
        _add(collection, item)


def remove_safe(collection: Optional[Collection], item: T) -> None:
    """Remove the first occurrence of `item`, if present."""
    if collection is not None and item in collection:
        collection.remove(item)


def clear_safe(collection: Optional[Collection]) -> None:
    if collection is not None:
        collection.clear()


def add_range_safe(collection: Optional[Collection], items: Optional[Iterable[T]]) -> None:
    if collection is None or items is None:
        return
    for item in items:
        _add(collection, item)


def remove_range_safe(collection: Optional[Collection], items: Optional[Iterable[T]]) -> None:
    if collection is None or items is None:
        return
    for item in items:
        remove_safe(collection, item)

"""
Time-proximity grouping of records.

Records are ordered by time, then each one joins the first group whose
base fields match and whose latest member is at most `threshold` earlier.
A record that fits no group opens a new one.

    groups = group_by_fields_and_time(records, "d", field_key=("a", "b", "c"))
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Generic, Iterable, Optional, Sequence, TypeVar, Union

from .config import DEFAULT_GROUP_THRESHOLD

T = TypeVar("T")

KeySpec = Union[str, Sequence[str], Callable[[Any], Any]]


@dataclass
class Record:
    """Sample record shape: three base fields and a timestamp."""
    id: int
    a: str
    b: str
    c: str
    d: datetime


@dataclass
class TimeGroup(Generic[T]):
    """A group of records; `key` is the group's zero-based index."""
    key: int
    records: list[T] = field(default_factory=list)

    def __iter__(self):
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)


def _accessor(key: Optional[KeySpec]) -> Callable[[Any], Any]:
    if key is None:
        return lambda record: None
    if callable(key):
        return key
    if isinstance(key, str):
        return lambda record: _field(record, key)
    names = tuple(key)
    return lambda record: tuple(_field(record, name) for name in names)


def group_by_fields_and_time(records: Optional[Iterable[T]], time_key: KeySpec,
                             field_key: Optional[KeySpec] = None,
                             threshold: timedelta = DEFAULT_GROUP_THRESHOLD) -> list[TimeGroup[T]]:
    """
    Group records whose base fields match and whose times are close.

    Args:
        records: Records to group (dicts or objects).
        time_key: Field name or function giving a record's datetime.
        field_key: Field name, tuple of field names or function giving the
            base fields that must be equal within a group. None groups on
            time alone.
        threshold: Largest gap (inclusive) to the latest member of a group.

    Returns:
        Groups in creation order, keyed 0, 1, 2, ...
    """
    if records is None:
        return []

    get_time = _accessor(time_key)
    get_fields = _accessor(field_key)

    groups: list[TimeGroup[T]] = []
    group_fields: list[Any] = []
    for record in sorted(records, key=get_time):
        record_time = get_time(record)
        record_fields = get_fields(record)
        for group, fields in zip(groups, group_fields):
            if fields == record_fields and record_time - get_time(group.records[-1]) <= threshold:
                group.records.append(record)
                break
        else:
            groups.append(TimeGroup(len(groups), [record]))
            group_fields.append(record_fields)
    return groups

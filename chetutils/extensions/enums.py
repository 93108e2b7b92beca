"""
Enum helpers.

Human-readable descriptions are attached with the `with_descriptions`
class decorator:

    @with_descriptions(FIRST="第一个", SECOND="第二个")
    class Order(IntEnum):
        NONE = 0
        FIRST = 1
        SECOND = 2

Members without a description fall back to their name.
"""

from __future__ import annotations

from enum import Enum, Flag
from typing import Any, Callable, Optional, TypeVar

E = TypeVar("E", bound=Enum)
F = TypeVar("F", bound=Flag)

DESCRIPTIONS_ATTR = "__descriptions__"


# =============================================================================
# DESCRIPTIONS
# =============================================================================

def with_descriptions(**descriptions: str) -> Callable[[type[E]], type[E]]:
    """Class decorator mapping member names to descriptions."""
    def decorate(enum_cls: type[E]) -> type[E]:
        unknown = set(descriptions) - set(enum_cls.__members__)
        if unknown:
            raise ValueError(f"Unknown members for {enum_cls.__name__}: {sorted(unknown)}")
        setattr(enum_cls, DESCRIPTIONS_ATTR, dict(descriptions))
        return enum_cls
    return decorate


def get_description(member: Enum) -> str:
    """Description of a member, or its name when none was declared."""
    descriptions = getattr(type(member), DESCRIPTIONS_ATTR, {})
    return descriptions.get(member.name, member.name)


def from_description(enum_cls: type[E], description: Optional[str],
                     default: Optional[E] = None) -> Optional[E]:
    """Member whose description (or, failing that, name) equals `description`."""
    if not description:
        return default
    for member in enum_cls:
        if get_description(member) == description:
            return member
    for member in enum_cls:
        if member.name == description:
            return member
    return default


def get_value_description_dict(enum_cls: type[Enum]) -> dict[Any, str]:
    return {member.value: get_description(member) for member in enum_cls}


def get_name_description_dict(enum_cls: type[Enum]) -> dict[str, str]:
    return {member.name: get_description(member) for member in enum_cls}


# =============================================================================
# INSPECTION
# =============================================================================

def is_defined(enum_cls: type[Enum], value: Any) -> bool:
    """True for a member of `enum_cls`, or the value or name of one."""
    if isinstance(value, enum_cls):
        return True
    if isinstance(value, str) and value in enum_cls.__members__:
        return True
    return any(member.value == value for member in enum_cls)


def get_values(enum_cls: type[E]) -> list[E]:
    return list(enum_cls)


def get_names(enum_cls: type[Enum]) -> list[str]:
    return [member.name for member in enum_cls]


def get_underlying_type(enum_cls: type[Enum]) -> Optional[type]:
    """Common type of the member values, None for mixed or empty enums."""
    types = {type(member.value) for member in enum_cls}
    return types.pop() if len(types) == 1 else None


def to_int(member: Enum) -> int:
    return int(member.value)


to_long = to_int


def to_string_value(member: Enum) -> str:
    return member.name


# =============================================================================
# PARSING
# =============================================================================

def parse(enum_cls: type[E], value: Optional[str], default: Optional[E] = None) -> Optional[E]:
    """
    Case-insensitive lookup by name; numeric text matches by value.

    Blank input or no match yields `default`.
    """
    if value is None or not value.strip():
        return default
    text = value.strip()
    for name, member in enum_cls.__members__.items():
        if name.lower() == text.lower():
            return member
    try:
        number = int(text)
    except ValueError:
        return default
    return to_enum(enum_cls, number, default)


def to_enum(enum_cls: type[E], value: Any, default: Optional[E] = None) -> Optional[E]:
    """Member with this value, `default` when undefined."""
    try:
        return enum_cls(value)
    except ValueError:
        return default


# =============================================================================
# FLAGS
# =============================================================================

def has_flag(value: F, flag: F) -> bool:
    return (value.value & flag.value) != 0


def add_flag(value: F, flag: F) -> F:
    return type(value)(value.value | flag.value)


def remove_flag(value: F, flag: F) -> F:
    return type(value)(value.value & ~flag.value)

"""Boolean helpers: string renderings, logic operators and numeric conversions."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, TypeVar

T = TypeVar("T")


# =============================================================================
# PREDICATES AND LOGIC
# =============================================================================

def is_true(value: bool) -> bool:
    return bool(value)


def is_false(value: bool) -> bool:
    return not value


def not_(value: bool) -> bool:
    return not value


def and_(value: bool, other: bool) -> bool:
    return value and other


def or_(value: bool, other: bool) -> bool:
    return value or other


def xor(value: bool, other: bool) -> bool:
    return value != other


def xnor(value: bool, other: bool) -> bool:
    return value == other


# =============================================================================
# STRING RENDERINGS
# =============================================================================

def to_string_value(value: bool) -> str:
    """"True" / "False"."""
    return "True" if value else "False"


def to_reverse_string(value: bool) -> str:
    return to_string_value(not value)


def to_chinese_string(value: bool) -> str:
    """"是" / "否"."""
    return "是" if value else "否"


def to_reverse_chinese_string(value: bool) -> str:
    return to_chinese_string(not value)


def to_custom_string(value: bool, true_string: str, false_string: str) -> str:
    return true_string if value else false_string


def to_yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def to_on_off(value: bool) -> str:
    return "On" if value else "Off"


def to_one_zero(value: bool) -> str:
    return "1" if value else "0"


def to_yn(value: bool) -> str:
    return "Y" if value else "N"


# =============================================================================
# CONVERSIONS
# =============================================================================

def to_int(value: bool) -> int:
    return 1 if value else 0


# Sized integer aliases
to_byte = to_int
to_short = to_int
to_long = to_int


def to_float(value: bool) -> float:
    return 1.0 if value else 0.0


to_double = to_float


def to_decimal(value: bool) -> Decimal:
    return Decimal(1) if value else Decimal(0)


def to_enum(value: bool, true_member: T, false_member: T) -> T:
    """Pick one of two enum members."""
    return true_member if value else false_member


def to_value(value: bool, true_value: T, false_value: T) -> T:
    return true_value if value else false_value


def to_nullable(value: bool, nullable: bool = False) -> Optional[bool]:
    """None when `nullable` is set, the value itself otherwise."""
    return None if nullable else value

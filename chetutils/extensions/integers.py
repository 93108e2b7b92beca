"""
Integer helpers.

Arithmetic keeps the truncating semantics of fixed-width integer math:
division and remainder round toward zero and a zero divisor yields 0
instead of raising. Hex/binary/octal renderings of negative numbers use
32-bit two's complement.
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from typing import Callable, Optional, TypeVar

from . import numerals
from .floats import to_single

E = TypeVar("E", bound=Enum)

INT_BITS = 32

CHINESE_WEEKDAYS = ("星期日", "星期一", "星期二", "星期三", "星期四", "星期五", "星期六")
ENGLISH_WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


# =============================================================================
# PREDICATES
# =============================================================================

def is_zero(value: int) -> bool:
    return value == 0


def is_positive(value: int) -> bool:
    return value > 0


def is_negative(value: int) -> bool:
    return value < 0


def is_even(value: int) -> bool:
    return value % 2 == 0


def is_odd(value: int) -> bool:
    return value % 2 != 0


def is_between(value: int, minimum: int, maximum: int) -> bool:
    """Inclusive range check."""
    return minimum <= value <= maximum


# =============================================================================
# ARITHMETIC
# =============================================================================

def clamp(value: int, minimum: int, maximum: int) -> int:
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def max_(value: int, other: int) -> int:
    return max(value, other)


def min_(value: int, other: int) -> int:
    return min(value, other)


def add(value: int, other: int) -> int:
    return value + other


def subtract(value: int, other: int) -> int:
    return value - other


def multiply(value: int, other: int) -> int:
    return value * other


def divide_safe(value: int, other: int) -> int:
    """Quotient rounded toward zero; 0 when `other` is 0."""
    if other == 0:
        return 0
    quotient = abs(value) // abs(other)
    return quotient if (value >= 0) == (other > 0) else -quotient


def mod(value: int, other: int) -> int:
    """Remainder with the sign of `value`; 0 when `other` is 0."""
    if other == 0:
        return 0
    return value - other * divide_safe(value, other)


def pow_(value: int, power: int) -> int:
    """value ** power, truncated to an integer for negative powers."""
    if power >= 0:
        return value ** power
    if value == 0:
        return 0
    return int(math.pow(value, power))


def abs_(value: int) -> int:
    return abs(value)


def abs_diff(value: int, other: int) -> int:
    return abs(value - other)


# =============================================================================
# CONVERSIONS
# =============================================================================

def to_bool(value: int) -> bool:
    return value != 0


def to_double(value: int) -> float:
    return float(value)


def to_float(value: int) -> float:
    """Nearest single-precision value."""
    return to_single(float(value))


def to_long(value: int) -> int:
    return int(value)


def to_decimal(value: int) -> Decimal:
    return Decimal(value)


def to_enum(value: int, enum_cls: type[E], default: Optional[E] = None) -> Optional[E]:
    """Member of `enum_cls` with this value, `default` when undefined."""
    try:
        return enum_cls(value)
    except ValueError:
        return default


# =============================================================================
# FORMATTING
# =============================================================================

def to_string_format(value: int, fmt: Optional[str] = None) -> str:
    """
    Format with a .NET standard numeric format string.

    to_string_format(5) -> "5", to_string_format(5, "D4") -> "0005".
    """
    return numerals.format_standard(value, fmt, bits=INT_BITS)


def to_currency_string(value: int, culture: Optional[str] = None) -> str:
    """Whole-unit currency string: 1234 -> "¥1,234"."""
    return numerals.format_currency(value, culture, digits=0)


def to_percent_string(value: int) -> str:
    """12 -> "12%"."""
    return f"{value}%"


def to_chinese_upper(value: int) -> str:
    """0 -> "零元", 1001 -> "壹仟零壹元"."""
    return numerals.to_chinese_upper_integer(value)


def to_hex_string(value: int) -> str:
    """Upper-case hex: 255 -> "FF"."""
    return format(numerals.to_twos_complement(value, INT_BITS), "X")


def to_binary_string(value: int) -> str:
    return format(numerals.to_twos_complement(value, INT_BITS), "b")


def to_octal_string(value: int) -> str:
    return format(numerals.to_twos_complement(value, INT_BITS), "o")


def to_roman_string(value: int) -> str:
    """1..3999 -> Roman numerals, other values unchanged."""
    return numerals.to_roman(value)


def to_chinese_weekday(value: int) -> str:
    """0 (Sunday) .. 6 -> "星期日" .. "星期六"."""
    return CHINESE_WEEKDAYS[value] if 0 <= value < 7 else str(value)


def to_english_weekday(value: int) -> str:
    return ENGLISH_WEEKDAYS[value] if 0 <= value < 7 else str(value)


# =============================================================================
# ITERATION
# =============================================================================

def repeat(value: int, action: Optional[Callable[..., object]], with_index: bool = False) -> None:
    """
    Run `action` `value` times.

    With `with_index`, the action receives the 0-based iteration index.
    Non-positive counts and a None action do nothing.
    """
    if action is None or value <= 0:
        return
    for index in range(value):
        if with_index:
            action(index)
        else:
            action()

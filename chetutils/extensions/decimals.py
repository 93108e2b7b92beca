"""
Decimal helpers for money-style values.

All rounding is exact and away from zero; the Chinese upper-case amount
formatter (大写金额) lives here for its main use, invoices and receipts.
"""

from __future__ import annotations

from decimal import Decimal, DivisionByZero, InvalidOperation, Overflow
from typing import Optional

from . import numerals
from .floats import to_single

ZERO = Decimal(0)


# =============================================================================
# PREDICATES
# =============================================================================

def is_zero(value: Decimal) -> bool:
    return value == ZERO


def is_positive(value: Decimal) -> bool:
    return value > ZERO


def is_negative(value: Decimal) -> bool:
    return value < ZERO


def is_integer(value: Decimal) -> bool:
    """2.0 -> True, 2.5 -> False."""
    return value.is_finite() and value == value.to_integral_value()


def is_even(value: Decimal) -> bool:
    return is_integer(value) and int(value) % 2 == 0


def is_odd(value: Decimal) -> bool:
    return is_integer(value) and int(value) % 2 != 0


def is_between(value: Decimal, minimum: Decimal, maximum: Decimal) -> bool:
    return minimum <= value <= maximum


# =============================================================================
# ROUNDING AND ARITHMETIC
# =============================================================================

def round_(value: Decimal, digits: int = 2) -> Decimal:
    """1.2355 -> 1.24, -1.2355 -> -1.24, 1.2345 -> 1.23."""
    return numerals.round_half_away(value, digits)


def truncate(value: Decimal, digits: int = 2) -> Decimal:
    """1.239 -> 1.23, (1.2, 0) -> 1."""
    return numerals.truncate_toward_zero(value, digits)


def clamp(value: Decimal, minimum: Decimal, maximum: Decimal) -> Decimal:
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def max_(value: Decimal, other: Decimal) -> Decimal:
    return max(value, other)


def min_(value: Decimal, other: Decimal) -> Decimal:
    return min(value, other)


def abs_(value: Decimal) -> Decimal:
    return abs(value)


def abs_diff(value: Decimal, other: Decimal) -> Decimal:
    return abs(value - other)


def add(value: Decimal, other: Decimal) -> Decimal:
    return value + other


def subtract(value: Decimal, other: Decimal) -> Decimal:
    return value - other


def multiply(value: Decimal, other: Decimal) -> Decimal:
    return value * other


def divide_safe(value: Decimal, other: Decimal) -> Decimal:
    """ZERO when `other` is zero."""
    if other == ZERO:
        return ZERO
    return value / other


def mod(value: Decimal, other: Decimal) -> Decimal:
    """Remainder with the sign of `value`; ZERO when `other` is zero."""
    if other == ZERO:
        return ZERO
    return value % other


def pow_(value: Decimal, power: int) -> Decimal:
    """ZERO when the power is undefined or not finite (0 ** -1)."""
    try:
        result = value ** power
    except (InvalidOperation, DivisionByZero, Overflow):
        return ZERO
    if not result.is_finite():
        return ZERO
    return result


def sqrt(value: Decimal) -> Decimal:
    """ZERO for negative input."""
    if value < ZERO:
        return ZERO
    return value.sqrt()


# =============================================================================
# CONVERSIONS
# =============================================================================

def to_int(value: Decimal) -> int:
    """Round half away from zero: 1.5 -> 2, -1.5 -> -2."""
    return int(numerals.round_half_away(value, 0))


to_long = to_int


def to_double(value: Decimal) -> float:
    return float(value)


def to_float(value: Decimal) -> float:
    return to_single(float(value))


def to_bool(value: Decimal) -> bool:
    return value != ZERO


# =============================================================================
# FORMATTING
# =============================================================================

def to_fixed_string(value: Decimal, digits: int = 2) -> str:
    return numerals.format_fixed(value, digits)


def to_currency_string(value: Decimal, culture: Optional[str] = None) -> str:
    """1234.56 in "en-US" -> "$1,234.56"."""
    return numerals.format_currency(value, culture)


def to_percent_string(value: Decimal, digits: int = 2) -> str:
    return numerals.format_percent(value, digits)


def to_scientific_string(value: Decimal, digits: int = 2) -> str:
    """0.00123 with 3 digits -> "1.230E-003"."""
    return numerals.format_scientific(value, digits)


def to_friendly_string(value: Decimal, digits: int = 2) -> str:
    return numerals.format_friendly(value, digits)


def to_chinese_upper(value: Decimal) -> str:
    """
    Chinese financial numerals for an amount.

    0 -> "零元整", 123.45 -> "壹佰贰拾叁元肆角伍分",
    1001001 -> "壹佰万壹仟零壹元整".
    """
    return numerals.to_chinese_upper_amount(value)

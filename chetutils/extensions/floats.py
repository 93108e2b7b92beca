"""
Floating-point helpers.

Python's float is a double; the single-precision group of helpers is
folded in here, with `to_single` producing the nearest 32-bit value when
a conversion needs it. Rounding is away from zero on the shortest decimal
repr of the value, so round(1.2355, 2) == 1.24.
"""

from __future__ import annotations

import math
import struct
from decimal import Decimal
from typing import Optional

from . import numerals

LONG_BITS = 64


# =============================================================================
# PREDICATES
# =============================================================================

def is_zero(value: float) -> bool:
    return value == 0.0


def is_positive(value: float) -> bool:
    return value > 0.0


def is_negative(value: float) -> bool:
    return value < 0.0


def is_integer(value: float) -> bool:
    return math.isfinite(value) and math.trunc(value) == value


def is_even(value: float) -> bool:
    return is_integer(value) and int(value) % 2 == 0


def is_odd(value: float) -> bool:
    return is_integer(value) and int(value) % 2 != 0


def is_nan(value: float) -> bool:
    return math.isnan(value)


def is_positive_infinity(value: float) -> bool:
    return value == math.inf


def is_negative_infinity(value: float) -> bool:
    return value == -math.inf


def is_between(value: float, minimum: float, maximum: float) -> bool:
    return minimum <= value <= maximum


# =============================================================================
# ROUNDING AND ARITHMETIC
# =============================================================================

def round_(value: float, digits: int = 2) -> float:
    """Round half away from zero: 1.2355 -> 1.24, -1.2355 -> -1.24."""
    if not math.isfinite(value):
        return value
    return float(numerals.round_half_away(value, digits))


def truncate(value: float, digits: int = 2) -> float:
    """Cut toward zero: 1.239 -> 1.23."""
    if not math.isfinite(value):
        return value
    factor = 10.0 ** digits
    return math.trunc(value * factor) / factor


def clamp(value: float, minimum: float, maximum: float) -> float:
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def max_(value: float, other: float) -> float:
    return max(value, other)


def min_(value: float, other: float) -> float:
    return min(value, other)


def abs_(value: float) -> float:
    return abs(value)


def abs_diff(value: float, other: float) -> float:
    return abs(value - other)


def add(value: float, other: float) -> float:
    return value + other


def subtract(value: float, other: float) -> float:
    return value - other


def multiply(value: float, other: float) -> float:
    return value * other


def divide_safe(value: float, other: float) -> float:
    """0.0 when `other` is 0."""
    return 0.0 if other == 0 else value / other


def mod(value: float, other: float) -> float:
    """Remainder with the sign of `value`; 0.0 when `other` is 0."""
    return 0.0 if other == 0 else math.fmod(value, other)


def pow_(value: float, power: int) -> float:
    try:
        return math.pow(value, power)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def sqrt(value: float) -> float:
    """NaN for negative input."""
    return math.sqrt(value) if value >= 0 else math.nan


# =============================================================================
# CONVERSIONS
# =============================================================================

def to_single(value: float) -> float:
    """Nearest IEEE single-precision value, as a Python float."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def to_int(value: float) -> int:
    """Round half away from zero: 1.6 -> 2, -1.6 -> -2, NaN -> 0."""
    if not math.isfinite(value):
        return 0
    return int(numerals.round_half_away(value, 0))


to_long = to_int


def to_float(value: float) -> float:
    return to_single(value)


def to_double(value: float) -> float:
    return float(value)


def to_decimal(value: float) -> Decimal:
    return numerals.to_exact_decimal(value)


def to_bool(value: float) -> bool:
    return value != 0.0


# =============================================================================
# FORMATTING
# =============================================================================

def to_fixed_string(value: float, digits: int = 2) -> str:
    """1.2 with 3 digits -> "1.200"."""
    return numerals.format_fixed(value, digits)


def to_currency_string(value: float, culture: Optional[str] = None) -> str:
    return numerals.format_currency(value, culture)


def to_percent_string(value: float, digits: int = 2) -> str:
    """0.1234 -> "12.34%"."""
    return numerals.format_percent(value, digits)


def to_scientific_string(value: float, digits: int = 2) -> str:
    """12345.6789 -> "1.23E+004"."""
    return numerals.format_scientific(value, digits)


def to_friendly_string(value: float, digits: int = 2) -> str:
    """123456789 -> "1.23亿", 123456 -> "12.35万", 123 -> "123.00"."""
    return numerals.format_friendly(value, digits)


def to_chinese_upper(value: float) -> str:
    return numerals.to_chinese_upper_amount(value)


def _integer_part(value: float) -> int:
    return int(value) if math.isfinite(value) else 0


def to_hex_string(value: float) -> str:
    """Integer part in upper-case hex: 255.9 -> "FF"."""
    return format(numerals.to_twos_complement(_integer_part(value), LONG_BITS), "X")


def to_binary_string(value: float) -> str:
    return format(numerals.to_twos_complement(_integer_part(value), LONG_BITS), "b")


def to_octal_string(value: float) -> str:
    return format(numerals.to_twos_complement(_integer_part(value), LONG_BITS), "o")

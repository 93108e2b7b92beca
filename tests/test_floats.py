"""
Tests for chetutils.extensions.floats.

These tests verify:
1. Predicates including NaN and infinities
2. Away-from-zero rounding and truncation
3. Conversions (single precision, integer rounding)
4. Formatting (fixed, currency, percent, scientific, friendly, radix)
"""

import math
from decimal import Decimal

import pytest

from chetutils.extensions import floats


# =============================================================================
# PREDICATE TESTS
# =============================================================================

class TestPredicates:
    """Test numeric predicates."""

    @pytest.mark.parametrize("value, expected", [(1.0, True), (1.5, False), (-2.0, True)])
    def test_is_integer(self, value, expected):
        """Whole values only."""
        assert floats.is_integer(value) is expected

    @pytest.mark.parametrize("value, even, odd", [(2.0, True, False), (3.0, False, True),
                                                  (2.5, False, False), (3.5, False, False)])
    def test_parity(self, value, even, odd):
        """Fractional values are neither even nor odd."""
        assert floats.is_even(value) is even
        assert floats.is_odd(value) is odd

    def test_special_values(self):
        """NaN and infinity checks."""
        assert floats.is_nan(math.nan)
        assert not floats.is_nan(1.0)
        assert floats.is_positive_infinity(math.inf)
        assert not floats.is_positive_infinity(1.0)
        assert floats.is_negative_infinity(-math.inf)
        assert not floats.is_integer(math.inf)

    def test_sign(self):
        """Zero, positive, negative."""
        assert floats.is_zero(0.0)
        assert floats.is_positive(1.0)
        assert floats.is_negative(-1.0)
        assert floats.is_between(10.0, 1.0, 10.0)


# =============================================================================
# ROUNDING TESTS
# =============================================================================

class TestRounding:
    """Test round_ and truncate."""

    @pytest.mark.parametrize("value, digits, expected", [
        (1.2345, 2, 1.23), (1.2355, 2, 1.24), (-1.2355, 2, -1.24), (2.5, 0, 3.0),
    ])
    def test_round_half_away(self, value, digits, expected):
        """Midpoints move away from zero."""
        assert floats.round_(value, digits) == expected

    @pytest.mark.parametrize("value, digits, expected", [
        (1.239, 2, 1.23), (-1.239, 2, -1.23), (1.2, 0, 1.0),
    ])
    def test_truncate(self, value, digits, expected):
        """Digits are cut toward zero."""
        assert floats.truncate(value, digits) == expected

    def test_round_nan_passthrough(self):
        """NaN stays NaN."""
        assert math.isnan(floats.round_(math.nan))


# =============================================================================
# ARITHMETIC TESTS
# =============================================================================

class TestArithmetic:
    """Test arithmetic helpers."""

    def test_basic(self):
        """Add, subtract, multiply, min, max, clamp."""
        assert floats.add(1.2, 2.3) == pytest.approx(3.5)
        assert floats.subtract(5.5, 2.2) == pytest.approx(3.3)
        assert floats.multiply(-1.0, 2.0) == -2.0
        assert floats.max_(1.2, 2.3) == 2.3
        assert floats.min_(5.5, 2.2) == 2.2
        assert floats.clamp(11.0, 1.0, 10.0) == 10.0
        assert floats.abs_(-1.5) == 1.5
        assert floats.abs_diff(3.0, 5.0) == 2.0

    def test_divide_and_mod_zero(self):
        """Zero divisor yields 0.0."""
        assert floats.divide_safe(6.0, 3.0) == 2.0
        assert floats.divide_safe(1.0, 0.0) == 0.0
        assert floats.mod(7.0, 3.0) == 1.0
        assert floats.mod(1.0, 0.0) == 0.0
        assert floats.mod(-7.0, 3.0) == -1.0

    def test_pow_and_sqrt(self):
        """Power and square root."""
        assert floats.pow_(2.0, 3) == 8.0
        assert floats.pow_(4.0, 0) == 1.0
        assert floats.sqrt(9.0) == 3.0
        assert math.isnan(floats.sqrt(-1.0))


# =============================================================================
# CONVERSION TESTS
# =============================================================================

class TestConversions:
    """Test conversions."""

    @pytest.mark.parametrize("value, expected", [(1.6, 2), (1.4, 1), (-1.6, -2), (2.5, 3)])
    def test_to_int(self, value, expected):
        """Integer conversion rounds half away from zero."""
        assert floats.to_int(value) == expected
        assert floats.to_long(value) == expected

    def test_to_int_non_finite(self):
        """NaN converts to 0."""
        assert floats.to_int(math.nan) == 0

    def test_to_float_single(self):
        """Single precision loses digits of doubles."""
        assert floats.to_float(1.5) == 1.5
        assert floats.to_float(-2.3) != -2.3
        assert floats.to_float(-2.3) == pytest.approx(-2.3, rel=1e-7)
        assert floats.to_single(1e40) == math.inf

    def test_to_decimal_exact(self):
        """Decimals come from the shortest repr."""
        assert floats.to_decimal(-2.3) == Decimal("-2.3")

    def test_to_bool(self):
        """Non-zero is True."""
        assert floats.to_bool(-1.0) is True
        assert floats.to_bool(0.0) is False


# =============================================================================
# FORMATTING TESTS
# =============================================================================

class TestFormatting:
    """Test string renderings."""

    @pytest.mark.parametrize("value, digits, expected", [(1.2345, 2, "1.23"), (1.2, 0, "1"),
                                                         (1.2, 3, "1.200")])
    def test_fixed(self, value, digits, expected):
        """Fixed decimals."""
        assert floats.to_fixed_string(value, digits) == expected

    def test_currency(self):
        """Culture-specific currency strings."""
        assert floats.to_currency_string(1234.56, "en-US") == "$1,234.56"
        assert floats.to_currency_string(1234.56) == "¥1,234.56"
        assert floats.to_currency_string(-1234.56, "en-US") == "-$1,234.56"
        assert floats.to_currency_string(1234.56, "de-DE") == "1.234,56 €"

    @pytest.mark.parametrize("value, digits, expected", [(0.1234, 2, "12.34%"), (0.1, 0, "10%")])
    def test_percent(self, value, digits, expected):
        """Percent scales by 100."""
        assert floats.to_percent_string(value, digits) == expected

    @pytest.mark.parametrize("value, digits, expected", [
        (12345.6789, 2, "1.23E+004"), (0.00123, 3, "1.230E-003"),
    ])
    def test_scientific(self, value, digits, expected):
        """Three-digit signed exponent."""
        assert floats.to_scientific_string(value, digits) == expected

    @pytest.mark.parametrize("value, expected", [
        (123456789, "1.23亿"), (123456, "12.35万"), (123, "123.00"),
    ])
    def test_friendly(self, value, expected):
        """亿/万 abbreviations."""
        assert floats.to_friendly_string(float(value)) == expected

    def test_chinese_upper(self):
        """Amount with 角/分."""
        assert floats.to_chinese_upper(123.45) == "壹佰贰拾叁元肆角伍分"
        assert floats.to_chinese_upper(0.0) == "零元整"

    @pytest.mark.parametrize("value, hex_, binary, octal", [
        (255.0, "FF", "11111111", "377"),
        (10.0, "A", "1010", "12"),
        (9.7, "9", "1001", "11"),
    ])
    def test_radixes(self, value, hex_, binary, octal):
        """Integer part in hex, binary and octal."""
        assert floats.to_hex_string(value) == hex_
        assert floats.to_binary_string(value) == binary
        assert floats.to_octal_string(value) == octal

    def test_negative_hex_64_bit(self):
        """Negative values use 64-bit two's complement."""
        assert floats.to_hex_string(-1.0) == "FFFFFFFFFFFFFFFF"

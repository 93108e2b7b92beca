"""
Tests for chetutils.extensions.numerals.

These tests verify:
1. Exact away-from-zero rounding
2. Standard format strings
3. Chinese financial numerals, including zero handling and overflow
"""

from decimal import Decimal

import pytest

from chetutils.extensions import numerals


# =============================================================================
# ROUNDING TESTS
# =============================================================================

class TestRounding:
    """Test exact decimal conversion and rounding."""

    def test_float_uses_shortest_repr(self):
        """No binary noise in the Decimal."""
        assert numerals.to_exact_decimal(1.2355) == Decimal("1.2355")

    @pytest.mark.parametrize("value, digits, expected", [
        (0.5, 0, "1"), (-0.5, 0, "-1"), (1.005, 2, "1.01"), (Decimal("2.675"), 2, "2.68"),
    ])
    def test_round_half_away(self, value, digits, expected):
        """Midpoints away from zero."""
        assert numerals.round_half_away(value, digits) == Decimal(expected)

    def test_truncate_toward_zero(self):
        """Truncation drops digits."""
        assert numerals.truncate_toward_zero(Decimal("-1.999"), 1) == Decimal("-1.9")


# =============================================================================
# FORMAT STRING TESTS
# =============================================================================

class TestStandardFormats:
    """Test .NET-style format strings."""

    @pytest.mark.parametrize("value, fmt, expected", [
        (1234.5, "N2", "1,234.50"),
        (1234.5, "F0", "1235"),
        (0.25, "P0", "25%"),
        (255, "x4", "00ff"),
        (1234.5, "E1", "1.2E+003"),
        (1234.5, "e1", "1.2e+003"),
        (7, "G", "7"),
        (7, "Q", "7"),
        (7, "", "7"),
    ])
    def test_format_standard(self, value, fmt, expected):
        """Each specifier."""
        assert numerals.format_standard(value, fmt) == expected

    def test_currency_culture(self):
        """Culture symbol placement and separators."""
        assert numerals.format_standard(1234.5, "C", "en-US") == "$1,234.50"
        assert numerals.format_currency(1234.5, "fr-FR") == "1 234,50 €"
        assert numerals.format_currency(1234.5, "ja-JP") == "￥1,235"

    @pytest.mark.parametrize("culture", ["de-DE", "fr-FR"])
    def test_currency_uses_ascii_spaces(self, culture):
        """Group separators and the symbol gap are plain spaces."""
        text = numerals.format_currency(1234567.5, culture)

        assert "\xa0" not in text
        assert "\u202f" not in text
        assert text.endswith(" €")

    def test_negative_zero_is_unsigned(self):
        """Values rounding to zero lose their sign."""
        assert numerals.format_fixed(-0.001, 2) == "0.00"

    def test_non_finite(self):
        """NaN and infinities."""
        assert numerals.format_fixed(float("nan")) == "NaN"
        assert numerals.format_fixed(float("-inf")) == "-∞"


# =============================================================================
# CHINESE NUMERAL TESTS
# =============================================================================

class TestChineseNumerals:
    """Test 大写金额."""

    @pytest.mark.parametrize("value, expected", [
        (0, "零"),
        (10, "壹拾"),
        (105, "壹佰零伍"),
        (1001001, "壹佰万壹仟零壹"),
        (100010, "壹拾万零壹拾"),
        (100000000, "壹亿"),
        (100000001, "壹亿零壹"),
        (10000000000000, "壹拾兆"),
    ])
    def test_integer_to_chinese(self, value, expected):
        """Single 零 for each gap, none trailing."""
        assert numerals.integer_to_chinese(value) == expected

    @pytest.mark.parametrize("value, expected", [
        (0, "零元整"),
        (Decimal("123.45"), "壹佰贰拾叁元肆角伍分"),
        (Decimal("1001001"), "壹佰万壹仟零壹元整"),
        (Decimal("0.5"), "伍角"),
        (Decimal("10.50"), "壹拾元伍角"),
        (Decimal("-2"), "负贰元整"),
        (Decimal("1.239"), "壹元贰角叁分"),
    ])
    def test_amount(self, value, expected):
        """元/角/分/整."""
        assert numerals.to_chinese_upper_amount(value) == expected

    def test_amount_overflow(self):
        """Amounts past the largest supported value."""
        assert numerals.to_chinese_upper_amount(Decimal("1000000000000000")) == numerals.CN_OVERFLOW
        assert numerals.to_chinese_upper_amount(float("inf")) == numerals.CN_OVERFLOW

    def test_integer_form(self):
        """Integer form ends in 元 without 整."""
        assert numerals.to_chinese_upper_integer(1001) == "壹仟零壹元"
        assert numerals.to_chinese_upper_integer(-5) == "负伍元"


class TestRoman:
    """Test Roman numerals."""

    @pytest.mark.parametrize("value, expected", [(1994, "MCMXCIV"), (0, "0"), (-3, "-3")])
    def test_to_roman(self, value, expected):
        """Range 1..3999."""
        assert numerals.to_roman(value) == expected

"""
Shared numeric formatting for the integer, float and decimal helpers.

Covers:
- Away-from-zero rounding on exact decimal values
- .NET-style standard format strings (D, F, N, C, P, E, X, G)
- Culture-aware currency strings (cultures come from chetutils.config)
- Chinese financial numerals (大写金额) and Roman numerals
"""

from __future__ import annotations

import re
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Optional, Union

from ..config import BIG_NUMBER_UNITS, CultureInfo, get_culture

Number = Union[int, float, Decimal]


# =============================================================================
# CHINESE NUMERAL TABLES
# =============================================================================

CN_DIGITS = ("零", "壹", "贰", "叁", "肆", "伍", "陆", "柒", "捌", "玖")
CN_RADICES = ("", "拾", "佰", "仟")
CN_UNITS = ("", "万", "亿", "兆")
CN_YUAN = "元"
CN_WHOLE = "整"
CN_JIAO = "角"
CN_FEN = "分"
CN_NEGATIVE = "负"
CN_OVERFLOW = "超出最大处理数"

CN_MAX_AMOUNT = Decimal("999999999999999.99")

ROMAN_NUMERALS = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)


# =============================================================================
# EXACT DECIMAL CONVERSION AND ROUNDING
# =============================================================================

def to_exact_decimal(value: Number) -> Decimal:
    """
    Convert a number to Decimal without binary noise.

    Floats go through their shortest repr, so 1.2355 becomes
    Decimal("1.2355") rather than 1.23549999...
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def _quantize(exact: Decimal, digits: int, rounding: str) -> Decimal:
    digits = max(digits, 0)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + digits + 2)
        return exact.quantize(Decimal(1).scaleb(-digits), rounding=rounding)


def round_half_away(value: Number, digits: int = 0) -> Decimal:
    """Round to `digits` places, midpoints away from zero."""
    exact = to_exact_decimal(value)
    if not exact.is_finite():
        return exact
    return _quantize(exact, digits, ROUND_HALF_UP)


def truncate_toward_zero(value: Number, digits: int = 0) -> Decimal:
    """Drop everything past `digits` places, toward zero."""
    exact = to_exact_decimal(value)
    if not exact.is_finite():
        return exact
    return _quantize(exact, digits, ROUND_DOWN)


# =============================================================================
# STANDARD FORMAT STRINGS
# =============================================================================

_FORMAT_PATTERN = re.compile(r"^([A-Za-z])(\d{0,2})$")


def _non_finite(value: Decimal) -> str:
    if value.is_nan():
        return "NaN"
    return "-∞" if value.is_signed() else "∞"


def format_fixed(value: Number, digits: int = 2, group: bool = False,
                 culture: Optional[CultureInfo] = None) -> str:
    """Fixed-point ("F"/"N") formatting with away-from-zero rounding."""
    rounded = round_half_away(value, digits)
    if not rounded.is_finite():
        return _non_finite(rounded)
    if rounded == 0:
        rounded = abs(rounded)
    text = format(rounded, ",f" if group else "f")
    if culture is not None:
        text = _localize(text, culture)
    return text


def _localize(text: str, culture: CultureInfo) -> str:
    # "," -> placeholder first so swapping "." and "," cannot collide
    return (
        text.replace(",", "\0")
        .replace(".", culture.decimal_separator)
        .replace("\0", culture.group_separator)
    )


def format_scientific(value: Number, digits: int = 6, upper: bool = True) -> str:
    """
    Scientific ("E") formatting with a signed three-digit exponent.

    12345.6789 with 2 digits -> "1.23E+004".
    """
    exact = to_exact_decimal(value)
    if not exact.is_finite():
        return _non_finite(exact)
    text = format(exact, f".{max(digits, 0)}E")
    mantissa, exponent = text.split("E")
    marker = "E" if upper else "e"
    return f"{mantissa}{marker}{int(exponent):+04d}"


def format_currency(value: Number, culture: Optional[str] = None,
                    digits: Optional[int] = None) -> str:
    """
    Currency ("C") formatting for a culture from chetutils.config.

    `digits` defaults to the culture's currency digits.
    """
    info = get_culture(culture)
    exact = to_exact_decimal(value)
    if not exact.is_finite():
        return _non_finite(exact)
    if digits is None:
        digits = info.currency_digits
    amount = format_fixed(abs(exact), digits, group=True, culture=info)
    if info.symbol_first:
        text = info.currency_symbol + (" " if info.symbol_space else "") + amount
    else:
        text = amount + (" " if info.symbol_space else "") + info.currency_symbol
    if round_half_away(exact, digits) < 0:
        text = "-" + text
    return text


def format_percent(value: Number, digits: int = 2) -> str:
    """Scale by 100 and append "%": 0.1234 -> "12.34%"."""
    return format_fixed(to_exact_decimal(value) * 100, digits) + "%"


def to_twos_complement(value: int, bits: int) -> int:
    """Map a negative integer onto its unsigned two's-complement form."""
    return value & ((1 << bits) - 1) if value < 0 else value


def format_standard(value: Number, fmt: Optional[str] = None,
                    culture: Optional[str] = None, bits: int = 32) -> str:
    """
    Format a number with a .NET standard numeric format string.

    Supported specifiers: C, D, E, F, G, N, P, X (case-insensitive, with an
    optional precision). None or "" and "G" give the plain string form.
    Unknown formats fall back to str(value).
    """
    if not fmt:
        return str(value)
    match = _FORMAT_PATTERN.match(fmt)
    if match is None:
        return str(value)
    spec, precision_text = match.groups()
    precision = int(precision_text) if precision_text else None
    kind = spec.upper()

    if kind == "G":
        return str(value)
    if kind == "C":
        return format_currency(value, culture, precision)
    if kind == "F":
        return format_fixed(value, 2 if precision is None else precision)
    if kind == "N":
        return format_fixed(value, 2 if precision is None else precision, group=True,
                            culture=get_culture(culture))
    if kind == "P":
        return format_percent(value, 2 if precision is None else precision)
    if kind == "E":
        return format_scientific(value, 6 if precision is None else precision, upper=spec == "E")
    if kind in ("D", "X"):
        if not isinstance(value, int):
            return str(value)
        width = precision or 0
        if kind == "D":
            sign = "-" if value < 0 else ""
            return sign + str(abs(value)).zfill(width)
        text = format(to_twos_complement(value, bits), "X" if spec == "X" else "x")
        return text.zfill(width)
    return str(value)


def format_friendly(value: Number, digits: int = 2) -> str:
    """Abbreviate with 亿/万 suffixes: 123456789 -> "1.23亿"."""
    exact = to_exact_decimal(value)
    if exact.is_finite():
        for threshold, suffix in BIG_NUMBER_UNITS:
            if exact >= threshold:
                return format_fixed(exact / threshold, digits) + suffix
    return format_fixed(exact, digits)


# =============================================================================
# CHINESE FINANCIAL NUMERALS
# =============================================================================

def _chunk_to_chinese(chunk: str) -> str:
    """Up to four digits -> numerals with 拾/佰/仟, inner zeros collapsed."""
    parts = []
    pending_zero = False
    for index, char in enumerate(chunk):
        digit = int(char)
        if digit == 0:
            pending_zero = bool(parts)
            continue
        if pending_zero:
            parts.append(CN_DIGITS[0])
            pending_zero = False
        parts.append(CN_DIGITS[digit] + CN_RADICES[len(chunk) - index - 1])
    return "".join(parts)


def integer_to_chinese(value: int) -> str:
    """
    Non-negative integer -> Chinese financial numerals without suffix.

    Digits are grouped in base-10000 chunks joined by 万/亿/兆; a single
    零 marks any run of missing positions: 1001001 -> "壹佰万壹仟零壹".
    """
    if value == 0:
        return CN_DIGITS[0]
    digits = str(value)
    head = len(digits) % 4 or 4
    chunks = [digits[:head]] + [digits[i:i + 4] for i in range(head, len(digits), 4)]

    result = ""
    pending_zero = False
    for position, chunk in enumerate(chunks):
        magnitude = len(chunks) - position - 1
        unit = CN_UNITS[magnitude] if magnitude < len(CN_UNITS) else ""
        if int(chunk) == 0:
            pending_zero = bool(result)
            continue
        if result and (pending_zero or chunk[0] == "0"):
            result += CN_DIGITS[0]
        result += _chunk_to_chinese(chunk) + unit
        pending_zero = False
    return result


def to_chinese_upper_amount(value: Number) -> str:
    """
    Amount -> Chinese financial numerals with 元/角/分/整.

    0 -> "零元整", 123.45 -> "壹佰贰拾叁元肆角伍分". Amounts beyond
    999999999999999.99 yield "超出最大处理数"; negatives get a 负 prefix.
    Fractions beyond 分 are truncated.
    """
    try:
        amount = to_exact_decimal(value)
    except (InvalidOperation, ValueError):
        return CN_OVERFLOW
    if not amount.is_finite() or abs(amount) > CN_MAX_AMOUNT:
        return CN_OVERFLOW

    prefix = CN_NEGATIVE if amount < 0 else ""
    amount = abs(amount)
    integer_part = int(amount)
    cents = int(truncate_toward_zero(amount - integer_part, 2) * 100)

    if integer_part == 0 and cents == 0:
        return CN_DIGITS[0] + CN_YUAN + CN_WHOLE

    result = integer_to_chinese(integer_part) + CN_YUAN if integer_part else ""
    if cents == 0:
        return prefix + result + CN_WHOLE
    jiao, fen = divmod(cents, 10)
    if jiao:
        result += CN_DIGITS[jiao] + CN_JIAO
    if fen:
        result += CN_DIGITS[fen] + CN_FEN
    return prefix + result


def to_chinese_upper_integer(value: int) -> str:
    """Integer -> Chinese numerals ending in 元: 1001 -> "壹仟零壹元"."""
    prefix = CN_NEGATIVE if value < 0 else ""
    return prefix + integer_to_chinese(abs(value)) + CN_YUAN


# =============================================================================
# ROMAN NUMERALS
# =============================================================================

def to_roman(value: int) -> str:
    """1..3999 -> Roman numerals; anything else -> str(value)."""
    if value < 1 or value > 3999:
        return str(value)
    parts = []
    remaining = value
    for amount, numeral in ROMAN_NUMERALS:
        while remaining >= amount:
            parts.append(numeral)
            remaining -= amount
    return "".join(parts)

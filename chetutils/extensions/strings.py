"""
String helpers.

Predicates, regex validators, parsing with defaults, manipulation and
pinyin transliteration. Every helper accepts None where a string is
expected and answers with an empty/false/default result instead of
raising.
"""

from __future__ import annotations

import hashlib
import math
import re
import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from . import numerals
from .floats import to_single
from .pinyin import to_pinyin as _to_pinyin

INT32_MIN = -2**31
INT32_MAX = 2**31 - 1
EMPTY_GUID = uuid.UUID(int=0)


# =============================================================================
# PATTERNS
# =============================================================================

CHINESE_TEXT = re.compile(r"^[\u4e00-\u9fa5？，“”‘’。、；：]+$")
CHINESE_CHAR = re.compile(r"[\u4e00-\u9fa5]")

LETTERS = re.compile(r"^[a-zA-Z]+$")
DIGITS = re.compile(r"^\d+$")
NON_DIGITS = re.compile(r"[^0-9]+")
FLOAT_TEXT = re.compile(r"^\d*[.]?\d*$")
EMAIL = re.compile(r"\w+([-+.']\w+)*@\w+([-.]\w+)*\.\w+([-.]\w+)*")
TELEPHONE = re.compile(
    r"^[0-9]{3,4}\-[0-9]{3,8}\-[0-9]{1,4}$|(^[0-9]{3,4}\-[0-9]{3,8}$)"
    r"|(^[0-9]{3,8}$)|(^\([0-9]{3,4}\)[0-9]{3,8}$)"
)
MOBILE = re.compile(r"^1[34578]\d{9}$")
URL = re.compile(r"http(s)?://([\w-]+\.)+[\w-]+(/[\w\- ./?%&=]*)?")
DATE_TEXT = re.compile(r"^(\d{2}|\d{4})(-|/)(\d{1,2})\2(\d{1,2})$")
TIME_TEXT = re.compile(r"^\d{1,2}:\d{1,2}:\d{1,2}$")
DATETIME_TEXT = re.compile(r"^(\d{2}|\d{4})(-|/)(\d{1,2})\2(\d{1,2})\s\d{1,2}:\d{1,2}:\d{1,2}$")

# Integer / decimal literals as accepted by the parsers below
INTEGER_LITERAL = re.compile(r"^\s*[+-]?\d+\s*$")
DECIMAL_LITERAL = re.compile(r"^\s*[+-]?(\d{1,3}(,\d{3})+|\d*)(\.\d*)?\s*$")
FLOAT_LITERAL = re.compile(
    r"^\s*[+-]?((\d[\d,]*)?\.?\d*([eE][+-]?\d+)?|nan|inf|infinity|∞)\s*$",
    re.IGNORECASE,
)

DATETIME_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%Y%m%d%H%M%S",
    "%Y年%m月%d日 %H:%M:%S",
    "%Y年%m月%d日",
    "%H:%M:%S",
)


# =============================================================================
# PARSING PRIMITIVES
# =============================================================================

def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None or not INTEGER_LITERAL.match(value):
        return None
    number = int(value.strip())
    return number if INT32_MIN <= number <= INT32_MAX else None


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip() or not FLOAT_LITERAL.match(value):
        return None
    text = value.strip().replace(",", "").replace("∞", "inf")
    try:
        return float(text)
    except ValueError:
        return None


def _parse_decimal(value: Optional[str]) -> Optional[Decimal]:
    if value is None or not DECIMAL_LITERAL.match(value) or not re.search(r"\d", value):
        return None
    try:
        return Decimal(value.strip().replace(",", ""))
    except InvalidOperation:
        return None


def _parse_guid(value: Optional[str]) -> Optional[uuid.UUID]:
    if not value:
        return None
    try:
        return uuid.UUID(value.strip())
    except ValueError:
        return None


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if value is None or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in DATETIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        if fmt == "%H:%M:%S":
            return datetime.combine(datetime.today().date(), parsed.time())
        return parsed
    return None


# =============================================================================
# PREDICATES
# =============================================================================

def is_null_or_empty(value: Optional[str]) -> bool:
    return not value


def is_null_or_whitespace(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def is_numeric(value: Optional[str]) -> bool:
    """"123" and "12.3" are numeric; "abc" and "" are not."""
    return _parse_float(value) is not None


def is_int(value: Optional[str]) -> bool:
    """32-bit integers only: "-123" -> True, "12.3" -> False."""
    return _parse_int(value) is not None


def is_float(value: Optional[str]) -> bool:
    return _parse_float(value) is not None


def is_decimal(value: Optional[str]) -> bool:
    """Plain decimal notation; exponents are not accepted."""
    return _parse_decimal(value) is not None


def is_guid(value: Optional[str]) -> bool:
    return _parse_guid(value) is not None


def equals_ignore_case(value: Optional[str], other: Optional[str]) -> bool:
    if value is None or other is None:
        return value is other
    return value.upper() == other.upper()


def is_chinese(value: Optional[str]) -> bool:
    """Only Chinese characters and Chinese punctuation."""
    return bool(value) and CHINESE_TEXT.search(value) is not None


def has_chinese(value: Optional[str]) -> bool:
    return bool(value) and CHINESE_CHAR.search(value) is not None


def is_null(value: Optional[str], null_strings: str = "null|{}|[]", is_trim: bool = False) -> bool:
    """
    True for None, "" and any of the `|`-separated null markers.

    Markers are compared against the lower-cased value, trimmed first when
    `is_trim` is set.
    """
    if value is None:
        return True
    text = value.strip() if is_trim else value
    if text == "":
        return True
    if null_strings and null_strings.strip():
        return text.lower() in null_strings.split("|")
    return False


# =============================================================================
# REGEX VALIDATORS
# =============================================================================

def _matches(pattern: re.Pattern, value: Optional[str]) -> bool:
    return value is not None and pattern.search(value) is not None


def is_letter(value: Optional[str]) -> bool:
    return _matches(LETTERS, value)


def is_num(value: Optional[str]) -> bool:
    return _matches(DIGITS, value)


def extract_num(value: Optional[str]) -> str:
    """Keep only ASCII digits: "abc123def" -> "123"."""
    if value is None:
        return ""
    return NON_DIGITS.sub("", value)


def is_float_text(value: Optional[str]) -> bool:
    """Digits with at most one dot, no sign."""
    return _matches(FLOAT_TEXT, value)


def is_email(value: Optional[str]) -> bool:
    return _matches(EMAIL, value)


def is_tel(value: Optional[str]) -> bool:
    """Landline forms: "010-12345678", "12345678", "(010)12345678"."""
    return _matches(TELEPHONE, value)


def is_mobile(value: Optional[str]) -> bool:
    """Mainland mobile numbers: 1[34578] + 9 digits."""
    return _matches(MOBILE, value)


def is_url(value: Optional[str]) -> bool:
    return _matches(URL, value)


def is_date(value: Optional[str]) -> bool:
    """"2024-09-30" or "2024/09/30"."""
    return _matches(DATE_TEXT, value)


def is_time(value: Optional[str]) -> bool:
    return _matches(TIME_TEXT, value)


def is_datetime(value: Optional[str]) -> bool:
    return _matches(DATETIME_TEXT, value)


# =============================================================================
# CONVERSIONS
# =============================================================================

def to_int(value: Optional[str], default: int = 0) -> int:
    parsed = _parse_int(value)
    return default if parsed is None else parsed


def to_double(value: Optional[str], default: float = 0.0) -> float:
    parsed = _parse_float(value)
    return default if parsed is None else parsed


def to_float(value: Optional[str], default: float = 0.0) -> float:
    """Parsed as single precision."""
    parsed = _parse_float(value)
    return default if parsed is None else to_single(parsed)


def to_double_round(value: Optional[str], digits: int = 2, default: float = 0.0) -> float:
    """"12.3456" -> 12.35."""
    parsed = _parse_float(value)
    if parsed is None:
        return default
    if not math.isfinite(parsed):
        return parsed
    return float(numerals.round_half_away(parsed, digits))


def to_double_truncate(value: Optional[str], digits: int = 2, default: float = 0.0) -> float:
    """"12.3456" -> 12.34."""
    parsed = _parse_float(value)
    if parsed is None:
        return default
    if not math.isfinite(parsed):
        return parsed
    factor = 10.0 ** digits
    return math.trunc(parsed * factor) / factor


def to_float_round(value: Optional[str], digits: int = 2, default: float = 0.0) -> float:
    if _parse_float(value) is None:
        return default
    return to_single(to_double_round(value, digits))


def to_float_truncate(value: Optional[str], digits: int = 2, default: float = 0.0) -> float:
    if _parse_float(value) is None:
        return default
    return to_single(to_double_truncate(value, digits))


def keep_decimal(value: Optional[str], digits: int = 2) -> Optional[str]:
    """Round numeric text to `digits` places; other text is returned as is."""
    parsed = _parse_float(value)
    if parsed is None:
        return value
    return numerals.format_fixed(parsed, digits)


def to_decimal(value: Optional[str], default: Decimal = Decimal(0)) -> Decimal:
    parsed = _parse_decimal(value)
    return default if parsed is None else parsed


def to_bool(value: Optional[str], default: bool = False) -> bool:
    """"true"/"false" in any case, surrounding whitespace allowed."""
    if value is None:
        return default
    text = value.strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    return default


def to_guid(value: Optional[str], default: Optional[uuid.UUID] = None) -> uuid.UUID:
    parsed = _parse_guid(value)
    if parsed is not None:
        return parsed
    return default if default is not None else EMPTY_GUID


def to_datetime(value: Optional[str], default: Optional[datetime] = None) -> datetime:
    """ISO 8601 and common Chinese date layouts; datetime.min on failure."""
    parsed = _parse_datetime(value)
    if parsed is not None:
        return parsed
    return default if default is not None else datetime.min


# =============================================================================
# MANIPULATION
# =============================================================================

def trim_safe(value: Optional[str]) -> str:
    return value.strip() if value is not None else ""


def remove_whitespace(value: Optional[str]) -> str:
    if not value:
        return ""
    return "".join(char for char in value if not char.isspace())


def substring_safe(value: Optional[str], start: int, length: int) -> str:
    """"abcdef", 2, 3 -> "cde"; out-of-range starts give ""."""
    if not value or start < 0 or length <= 0 or start >= len(value):
        return ""
    return value[start:start + length]


def left(value: Optional[str], length: int) -> str:
    if not value or length <= 0:
        return ""
    return value[:length]


def right(value: Optional[str], length: int) -> str:
    if not value or length <= 0:
        return ""
    return value[-length:]


def reverse(value: Optional[str]) -> str:
    if not value:
        return ""
    return value[::-1]


def remove_special_chars(value: Optional[str]) -> str:
    """Keep letters, digits and whitespace."""
    if not value:
        return ""
    return "".join(char for char in value if char.isalnum() or char.isspace())


def to_camel_case(value: Optional[str]) -> str:
    """Lower-case the first character only: "Abc" -> "abc"."""
    if not value:
        return ""
    return value[0].lower() + value[1:]


def to_pascal_case(value: Optional[str]) -> str:
    if not value:
        return ""
    return value[0].upper() + value[1:]


def repeat(value: Optional[str], count: int) -> str:
    if not value or count <= 0:
        return ""
    return value * count


def replace_ignore_case(value: Optional[str], old: Optional[str], new: Optional[str]) -> Optional[str]:
    """"abcABCabc", "abc", "x" -> "xxx"."""
    if not value or not old:
        return value
    replacement = new or ""
    return re.sub(re.escape(old), lambda _: replacement, value, flags=re.IGNORECASE)


def to_md5(value: Optional[str]) -> str:
    """Lower-case hex MD5 of the UTF-8 bytes; "" for empty input."""
    if not value:
        return ""
    return hashlib.md5(value.encode("utf-8")).hexdigest()


def contains_ignore_case(value: Optional[str], sub: Optional[str]) -> bool:
    if not value or not sub:
        return False
    return sub.upper() in value.upper()


def split_safe(value: Optional[str], *separators: str) -> list[str]:
    """
    Split on any of the given separator characters, dropping empty parts.

    With no separators, splits on whitespace.
    """
    if not value:
        return []
    if not separators:
        return value.split()
    pattern = "[" + "".join(re.escape(sep) for sep in separators) + "]"
    return [part for part in re.split(pattern, value) if part]


def to_pinyin(value: Optional[str]) -> str:
    """"你好" -> "nihao"; characters without a reading pass through."""
    return _to_pinyin(value)

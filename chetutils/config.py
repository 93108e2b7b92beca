"""
Configuration for chetutils.

Culture-specific formatting (currency symbols, separators, big-number
suffixes), network time settings and time-zone aliases live here as
lookup tables.

Environment overrides:
    CHETUTILS_CULTURE     default culture for currency strings
    CHETUTILS_NTP_SERVER  NTP host queried by the auto-clicker
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Optional

logger = logging.getLogger(__name__)


# =============================================================================
# CULTURES
# =============================================================================

@dataclass(frozen=True)
class CultureInfo:
    """Number and currency conventions for one culture."""
    name: str
    currency_symbol: str
    currency_digits: int = 2
    decimal_separator: str = "."
    group_separator: str = ","
    symbol_first: bool = True
    symbol_space: bool = False


INVARIANT_CULTURE = CultureInfo(name="", currency_symbol="¤")

CULTURES = {
    "zh-CN": CultureInfo("zh-CN", "¥"),
    "zh-TW": CultureInfo("zh-TW", "$"),
    "en-US": CultureInfo("en-US", "$"),
    "en-GB": CultureInfo("en-GB", "£"),
    "ja-JP": CultureInfo("ja-JP", "￥", currency_digits=0),
    "de-DE": CultureInfo(
        "de-DE", "€",
        decimal_separator=",", group_separator=".",
        symbol_first=False, symbol_space=True,
    ),
    "fr-FR": CultureInfo(
        "fr-FR", "€",
        decimal_separator=",", group_separator=" ",
        symbol_first=False, symbol_space=True,
    ),
}

DEFAULT_CULTURE = os.environ.get("CHETUTILS_CULTURE", "zh-CN")


def get_culture(name: Optional[str] = None) -> CultureInfo:
    """
    Look up a culture by name (case-insensitive).

    None selects DEFAULT_CULTURE, "" the invariant culture. Unknown names
    fall back to the invariant culture with a warning.
    """
    if name is None:
        name = DEFAULT_CULTURE
    if name == "":
        return INVARIANT_CULTURE
    for key, culture in CULTURES.items():
        if key.lower() == name.lower():
            return culture
    logger.warning(f"Unknown culture {name!r}, using invariant culture")
    return INVARIANT_CULTURE


# =============================================================================
# BIG-NUMBER SUFFIXES
# =============================================================================

# Checked in order; the first threshold not above the value wins.
BIG_NUMBER_UNITS = (
    (Decimal("100000000"), "亿"),
    (Decimal("10000"), "万"),
)


# =============================================================================
# NETWORK TIME
# =============================================================================

NTP_SERVER = os.environ.get("CHETUTILS_NTP_SERVER", "time.windows.com")
NTP_PORT = 123
NTP_TIMEOUT_SECONDS = 3.0


# =============================================================================
# TIME ZONES
# =============================================================================

# Windows zone ids accepted alongside IANA names.
WINDOWS_TIMEZONE_ALIASES = {
    "China Standard Time": "Asia/Shanghai",
    "Taipei Standard Time": "Asia/Taipei",
    "Tokyo Standard Time": "Asia/Tokyo",
    "Korea Standard Time": "Asia/Seoul",
    "Singapore Standard Time": "Asia/Singapore",
    "India Standard Time": "Asia/Kolkata",
    "UTC": "UTC",
    "GMT Standard Time": "Europe/London",
    "W. Europe Standard Time": "Europe/Berlin",
    "Romance Standard Time": "Europe/Paris",
    "Eastern Standard Time": "America/New_York",
    "Central Standard Time": "America/Chicago",
    "Mountain Standard Time": "America/Denver",
    "Pacific Standard Time": "America/Los_Angeles",
    "AUS Eastern Standard Time": "Australia/Sydney",
}


# =============================================================================
# GROUPING
# =============================================================================

DEFAULT_GROUP_THRESHOLD = timedelta(hours=1)

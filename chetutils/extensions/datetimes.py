"""
Date-time helpers.

Conventions:
- Naive datetimes are local wall-clock times, as everywhere in the stdlib.
- Weekday numbers count from Sunday = 0.
- `*_between` helpers return absolute differences.
- `add_*_safe` helpers clamp to datetime.min / datetime.max instead of
  raising OverflowError.
- Lunar dates come from the `lunardate` tables (1900..2099).
"""

from __future__ import annotations

import calendar
import logging
import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from lunardate import LunarDate

from ..config import WINDOWS_TIMEZONE_ALIASES

logger = logging.getLogger(__name__)

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
MINGUO_EPOCH_OFFSET = 1911

CHINESE_WEEKDAYS = ("星期日", "星期一", "星期二", "星期三", "星期四", "星期五", "星期六")
ENGLISH_WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
RFC1123_WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
RFC1123_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                  "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

LUNAR_MONTHS = ("正月", "二月", "三月", "四月", "五月", "六月",
                "七月", "八月", "九月", "十月", "冬月", "腊月")
LUNAR_DAYS = (
    "初一", "初二", "初三", "初四", "初五", "初六", "初七", "初八", "初九", "初十",
    "十一", "十二", "十三", "十四", "十五", "十六", "十七", "十八", "十九", "二十",
    "廿一", "廿二", "廿三", "廿四", "廿五", "廿六", "廿七", "廿八", "廿九", "三十",
)
LUNAR_LEAP_PREFIX = "闰"

# Solar range covered by the lunardate tables
LUNAR_FIRST_DATE = date(1900, 1, 31)
LUNAR_LAST_DATE = date(2099, 12, 31)


# =============================================================================
# PREDICATES
# =============================================================================

def is_default(dt: datetime) -> bool:
    """True for the zero value, datetime.min."""
    return dt == datetime.min


def is_min_value(dt: datetime) -> bool:
    return dt == datetime.min


def is_max_value(dt: datetime) -> bool:
    return dt == datetime.max


def is_today(dt: datetime, today: Optional[date] = None) -> bool:
    return dt.date() == (today or date.today())


def is_leap_year(dt: datetime) -> bool:
    return calendar.isleap(dt.year)


def is_weekend(dt: datetime) -> bool:
    return dt.weekday() >= 5


def is_weekday(dt: datetime) -> bool:
    return dt.weekday() < 5


def is_am(dt: datetime) -> bool:
    return dt.hour < 12


def is_pm(dt: datetime) -> bool:
    return dt.hour >= 12


def is_between(dt: datetime, start: datetime, end: datetime) -> bool:
    """Inclusive at both ends."""
    return start <= dt <= end


def is_before(dt: datetime, other: datetime) -> bool:
    return dt < other


def is_after(dt: datetime, other: datetime) -> bool:
    return dt > other


# =============================================================================
# UNIX TIME
# =============================================================================

def _as_utc(dt: datetime) -> datetime:
    # astimezone() on a naive value interprets it as local time
    return dt.astimezone(timezone.utc)


def to_unix_timestamp(dt: datetime) -> int:
    """Whole seconds since 1970-01-01T00:00:00Z."""
    return (_as_utc(dt) - UNIX_EPOCH) // timedelta(seconds=1)


def to_unix_timestamp_ms(dt: datetime) -> int:
    """Whole milliseconds since the epoch: 1970-01-01T00:00:01Z -> 1000."""
    return (_as_utc(dt) - UNIX_EPOCH) // timedelta(milliseconds=1)


def from_unix_timestamp(timestamp: int) -> datetime:
    """Seconds since the epoch -> naive local datetime."""
    return (UNIX_EPOCH + timedelta(seconds=timestamp)).astimezone().replace(tzinfo=None)


def from_unix_timestamp_ms(timestamp_ms: int) -> datetime:
    return (UNIX_EPOCH + timedelta(milliseconds=timestamp_ms)).astimezone().replace(tzinfo=None)


# =============================================================================
# FORMATTING
# =============================================================================

def to_format_string(dt: datetime, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    """strftime with a "yyyy-MM-dd HH:mm:ss" style default."""
    return dt.strftime(fmt)


def to_iso8601_string(dt: datetime) -> str:
    """Round-trip form with seven fractional digits, offset when aware."""
    text = dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{dt.microsecond:06d}0"
    offset = dt.utcoffset()
    if offset is None:
        return text
    if offset == timedelta(0) and dt.tzinfo is timezone.utc:
        return text + "Z"
    return text + dt.isoformat()[-6:]


def to_rfc1123_string(dt: datetime) -> str:
    """"Tue, 30 Sep 2025 14:30:00 GMT"; the value is not converted."""
    weekday = RFC1123_WEEKDAYS[to_weekday_number(dt)]
    month = RFC1123_MONTHS[dt.month - 1]
    return f"{weekday}, {dt.day:02d} {month} {dt.year:04d} {dt:%H:%M:%S} GMT"


def to_chinese_date_string(dt: datetime) -> str:
    """"2025年09月30日"."""
    return f"{dt.year:04d}年{dt.month:02d}月{dt.day:02d}日"


def to_chinese_datetime_string(dt: datetime) -> str:
    """"2025年09月30日 14时30分"."""
    return f"{to_chinese_date_string(dt)} {dt.hour:02d}时{dt.minute:02d}分"


def to_timestamp_string(dt: datetime) -> str:
    """"20250930143000"."""
    return dt.strftime("%Y%m%d%H%M%S")


def to_custom_timestamp(dt: datetime) -> str:
    """Timestamp with milliseconds: "20250930143000123"."""
    return f"{to_timestamp_string(dt)}{dt.microsecond // 1000:03d}"


def to_date_string(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%d")


def to_time_string(dt: datetime) -> str:
    return dt.strftime("%H:%M:%S")


def to_short_time_string(dt: datetime) -> str:
    return dt.strftime("%H:%M")


def to_weekday_number(dt: datetime) -> int:
    """Sunday = 0 .. Saturday = 6."""
    return dt.isoweekday() % 7


def to_chinese_weekday(dt: datetime) -> str:
    return CHINESE_WEEKDAYS[to_weekday_number(dt)]


def to_english_weekday(dt: datetime) -> str:
    return ENGLISH_WEEKDAYS[to_weekday_number(dt)]


def to_quarter(dt: datetime) -> str:
    """"Q1" .. "Q4"."""
    return f"Q{(dt.month - 1) // 3 + 1}"


def to_minguo_string(dt: datetime) -> str:
    """Republic of China calendar: 2025-09-30 -> "民国114年09月30日"."""
    return f"民国{dt.year - MINGUO_EPOCH_OFFSET}年{dt.month:02d}月{dt.day:02d}日"


def to_chinese_lunar_date(dt: datetime) -> str:
    """
    Lunar month and day, e.g. 2025-02-01 -> "正月初四".

    Leap months carry a 闰 prefix. Dates outside the supported range
    yield "".
    """
    if not LUNAR_FIRST_DATE <= dt.date() <= LUNAR_LAST_DATE:
        logger.debug(f"No lunar data for {dt.date()}")
        return ""
    lunar = LunarDate.fromSolarDate(dt.year, dt.month, dt.day)
    prefix = LUNAR_LEAP_PREFIX if lunar.isLeapMonth else ""
    return f"{prefix}{LUNAR_MONTHS[lunar.month - 1]}{LUNAR_DAYS[lunar.day - 1]}"


def to_friendly_string(dt: datetime, now: Optional[datetime] = None) -> str:
    """
    Relative description in Chinese.

    < 1 minute "刚刚", < 1 hour "N分钟前", < 1 day "N小时前", < 2 days "昨天",
    < 30 days "N天前", < 1 year "N个月前", otherwise "N年前".
    """
    now = now or (datetime.now(dt.tzinfo) if dt.tzinfo else datetime.now())
    span = now - dt
    seconds = span.total_seconds()
    days = span.days
    if seconds < 60:
        return "刚刚"
    if seconds < 3600:
        return f"{int(seconds // 60)}分钟前"
    if seconds < 86400:
        return f"{int(seconds // 3600)}小时前"
    if days < 2:
        return "昨天"
    if days < 30:
        return f"{days}天前"
    if days < 365:
        return f"{days // 30}个月前"
    return f"{days // 365}年前"


# =============================================================================
# ARITHMETIC
# =============================================================================

def _clamped_add(dt: datetime, amount: float, unit: str) -> datetime:
    try:
        return dt + timedelta(**{unit: amount})
    except OverflowError:
        return datetime.max if amount > 0 else datetime.min


def add_days_safe(dt: datetime, days: float) -> datetime:
    return _clamped_add(dt, days, "days")


def add_hours_safe(dt: datetime, hours: float) -> datetime:
    return _clamped_add(dt, hours, "hours")


def add_minutes_safe(dt: datetime, minutes: float) -> datetime:
    return _clamped_add(dt, minutes, "minutes")


def add_seconds_safe(dt: datetime, seconds: float) -> datetime:
    return _clamped_add(dt, seconds, "seconds")


def add_months_safe(dt: datetime, months: int) -> datetime:
    """Calendar months; the day is clamped to the target month's length."""
    total = dt.year * 12 + (dt.month - 1) + months
    year, month_index = divmod(total, 12)
    if year < 1:
        return datetime.min
    if year > 9999:
        return datetime.max
    day = min(dt.day, calendar.monthrange(year, month_index + 1)[1])
    return dt.replace(year=year, month=month_index + 1, day=day)


def add_years_safe(dt: datetime, years: int) -> datetime:
    """29 February maps to 28 February in non-leap target years."""
    return add_months_safe(dt, years * 12)


def days_between(dt: datetime, other: datetime) -> float:
    """Absolute difference in calendar days; times of day are ignored."""
    return float(abs((dt.date() - other.date()).days))


def hours_between(dt: datetime, other: datetime) -> float:
    return abs((dt - other).total_seconds()) / 3600


def minutes_between(dt: datetime, other: datetime) -> float:
    return abs((dt - other).total_seconds()) / 60


def seconds_between(dt: datetime, other: datetime) -> float:
    return abs((dt - other).total_seconds())


def span_between(dt: datetime, other: datetime) -> timedelta:
    return abs(dt - other)


def to_age(birthday: datetime, today: Optional[date] = None) -> int:
    """Completed years of age, never negative."""
    today = today or date.today()
    age = today.year - birthday.year
    if (today.month, today.day) < (birthday.month, birthday.day):
        age -= 1
    return max(age, 0)


# =============================================================================
# TIME ZONES
# =============================================================================

def to_local_time_safe(dt: datetime) -> datetime:
    """Aware values move to the local zone; naive values are already local."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone()


def to_utc_time_safe(dt: datetime) -> datetime:
    """Aware UTC result; naive input is read as local time."""
    if dt.tzinfo is timezone.utc:
        return dt
    return dt.astimezone(timezone.utc)


def resolve_time_zone(zone_id: str) -> Optional[ZoneInfo]:
    """IANA name or Windows zone id -> ZoneInfo, None when unknown."""
    name = WINDOWS_TIMEZONE_ALIASES.get(zone_id, zone_id)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def to_time_zone(dt: datetime, zone_id: str) -> datetime:
    """
    Convert to the given zone ("Asia/Shanghai" or "China Standard Time").

    Unknown zone ids leave the value unchanged.
    """
    zone = resolve_time_zone(zone_id)
    if zone is None:
        logger.warning(f"Unknown time zone id {zone_id!r}")
        return dt
    return dt.astimezone(zone)


# =============================================================================
# DECOMPOSITION
# =============================================================================

def to_ymd(dt: datetime) -> tuple[int, int, int]:
    return dt.year, dt.month, dt.day


def to_hms(dt: datetime) -> tuple[int, int, int]:
    return dt.hour, dt.minute, dt.second


def to_date_only(dt: datetime) -> date:
    return dt.date()


def to_time_only(dt: datetime) -> time:
    return dt.time()


def to_julian_day_number(dt: datetime) -> float:
    """
    Astronomical Julian Day of a (Gregorian) date-time.

    2000-01-01T12:00:00 -> 2451545.0
    """
    year, month, day = dt.year, dt.month, dt.day
    if month <= 2:
        year -= 1
        month += 12
    century = year // 100
    correction = 2 - century + century // 4
    fraction = (dt.hour + dt.minute / 60 + dt.second / 3600) / 24
    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day + correction - 1524.5 + fraction
    )

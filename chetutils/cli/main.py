"""
chetutils command line.

Commands:
    chetutils upper <amount>            Chinese upper-case currency amount
    chetutils pinyin <text>             Pinyin of Chinese text
    chetutils lunar [date]              Chinese lunar month and day
    chetutils julian [datetime]         Astronomical Julian Day
    chetutils ntp                       Query network time
    chetutils elapsed                   Hours elapsed since this time yesterday
    chetutils group <file.json>         Group records by fields and time
    chetutils autoclick <time>          Click at a network-time target
    chetutils export-collections        Export Edge collections
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..automation.edge_collections import DEFAULT_EXPORT_FORMAT
from ..config import NTP_SERVER
from ..extensions import datetimes, numerals, pinyin
from ..grouping import group_by_fields_and_time
from ..logging_config import setup_logging
from ..timesync.autoclick import ClickBackendError, ClickScheduler
from ..timesync.ntp import NtpError, get_network_time, get_network_time_or_local

logger = logging.getLogger(__name__)

POLL_SECONDS = 0.2


# =============================================================================
# ARGUMENT TYPES
# =============================================================================

def parse_datetime_arg(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date/time: {value!r}") from None


def parse_decimal_arg(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if not amount.is_finite():
        raise argparse.ArgumentTypeError(f"not a finite number: {value!r}")
    return amount


def parse_positive_int_arg(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return number


# =============================================================================
# CLI COMMANDS
# =============================================================================

def cmd_upper(args: argparse.Namespace) -> int:
    """Print an amount in Chinese upper-case numerals."""
    if args.integer:
        print(numerals.to_chinese_upper_integer(int(args.amount)))
    else:
        print(numerals.to_chinese_upper_amount(args.amount))
    return 0


def cmd_pinyin(args: argparse.Namespace) -> int:
    """Print the pinyin of the text."""
    print(pinyin.to_pinyin(" ".join(args.text)))
    return 0


def cmd_lunar(args: argparse.Namespace) -> int:
    """Print the lunar date of a day (today by default)."""
    day = args.date or datetime.combine(date.today(), datetime.min.time())
    lunar = datetimes.to_chinese_lunar_date(day)
    if not lunar:
        print(f"ERROR: No lunar calendar data for {day.date()}")
        return 1
    print(lunar)
    return 0


def cmd_julian(args: argparse.Namespace) -> int:
    """Print the Julian Day of a moment (now by default)."""
    moment = args.datetime or datetime.now()
    print(f"{datetimes.to_julian_day_number(moment):.6f}")
    return 0


def cmd_ntp(args: argparse.Namespace) -> int:
    """Query and print network time."""
    try:
        network_time = get_network_time(args.server)
    except NtpError as e:
        print(f"ERROR: {e}")
        return 1
    local_time = datetime.now()
    print(f"Network time: {network_time.isoformat(sep=' ', timespec='milliseconds')}")
    print(f"Local time:   {local_time.isoformat(sep=' ', timespec='milliseconds')}")
    print(f"Offset:       {(network_time - local_time).total_seconds():+.3f}s")
    return 0


def cmd_elapsed(args: argparse.Namespace) -> int:
    """Hours between now and the same moment yesterday."""
    now = datetime.now()
    yesterday = datetimes.add_days_safe(now, -1)
    hours = (now - yesterday).total_seconds() / 60 / 60
    print(f"昨天是{yesterday:%H:%M:%S}, 今天是{now:%H:%M:%S}, 经过了{hours:.2f}小时")
    return 0


def cmd_group(args: argparse.Namespace) -> int:
    """Group JSON records by base fields and time proximity."""
    try:
        with open(args.file, encoding="utf-8") as f:
            records = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"ERROR: Cannot read {args.file}: {e}")
        return 1

    fields = tuple(name for name in args.fields.split(",") if name) if args.fields else None
    try:
        for record in records:
            record[args.time_field] = datetime.fromisoformat(record[args.time_field])
    except (KeyError, TypeError, ValueError) as e:
        print(f"ERROR: Bad '{args.time_field}' value in records: {e}")
        return 1

    try:
        groups = group_by_fields_and_time(
            records, args.time_field, fields, timedelta(minutes=args.threshold_minutes),
        )
    except (KeyError, AttributeError, TypeError) as e:
        print(f"ERROR: Records do not have the grouping fields: {e}")
        return 1
    for group in groups:
        print(f"Group Key: {group.key}")
        for record in group:
            label = record.get(args.id_field, "?")
            print(f"  Record ID: {label}, Time: {record[args.time_field]}")
    return 0


def cmd_autoclick(args: argparse.Namespace) -> int:
    """Wait for the target time, then click."""
    try:
        scheduler = ClickScheduler(clock=lambda: get_network_time_or_local(args.server))
        started = scheduler.start(args.target, args.clicks)
    except ClickBackendError as e:
        print(f"ERROR: {e}")
        return 1
    if not started:
        print(f"ERROR: Target time {args.target} is not in the future")
        return 1

    print(f"Armed: {args.clicks} click(s) at {args.target}. Press Ctrl+C to cancel.")
    try:
        while scheduler.is_running:
            time.sleep(POLL_SECONDS)
    except KeyboardInterrupt:
        scheduler.stop()
        print("Cancelled.")
        return 1
    print("Done.")
    return 0


def cmd_export_collections(args: argparse.Namespace) -> int:
    """Export every Edge collection via Selenium."""
    from ..automation.edge_collections import create_edge_driver, export_collections

    try:
        from selenium.common.exceptions import WebDriverException
    except ImportError:
        print("ERROR: selenium is required; install chet-utils[automation]")
        return 1

    try:
        driver = create_edge_driver(args.user_data_dir, args.download_dir)
    except WebDriverException as e:
        logger.error(f"Cannot start Edge: {e.msg or e}")
        print(f"ERROR: Cannot start Edge: {e.msg or e}")
        return 1
    names = export_collections(driver, args.format)
    print(f"Exported {len(names)} collection(s)")
    for name in names:
        print(f"  • {name}")
    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="chetutils",
        description="Chinese-locale formatting helpers, network time and small automations",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    upper_parser = subparsers.add_parser("upper", help="Chinese upper-case currency amount")
    upper_parser.add_argument("amount", type=parse_decimal_arg, help="Amount, e.g. 1234.56")
    upper_parser.add_argument("--integer", action="store_true",
                              help="Integer form (no 角/分 or 整)")
    upper_parser.set_defaults(func=cmd_upper)

    pinyin_parser = subparsers.add_parser("pinyin", help="Pinyin of Chinese text")
    pinyin_parser.add_argument("text", nargs="+", help="Text to convert")
    pinyin_parser.set_defaults(func=cmd_pinyin)

    lunar_parser = subparsers.add_parser("lunar", help="Chinese lunar month and day")
    lunar_parser.add_argument("date", nargs="?", type=parse_datetime_arg,
                              help="ISO date (default: today)")
    lunar_parser.set_defaults(func=cmd_lunar)

    julian_parser = subparsers.add_parser("julian", help="Astronomical Julian Day")
    julian_parser.add_argument("datetime", nargs="?", type=parse_datetime_arg,
                               help="ISO date/time (default: now)")
    julian_parser.set_defaults(func=cmd_julian)

    ntp_parser = subparsers.add_parser("ntp", help="Query network time")
    ntp_parser.add_argument("--server", default=NTP_SERVER, help="NTP server host")
    ntp_parser.set_defaults(func=cmd_ntp)

    elapsed_parser = subparsers.add_parser("elapsed", help="Hours since this time yesterday")
    elapsed_parser.set_defaults(func=cmd_elapsed)

    group_parser = subparsers.add_parser("group", help="Group JSON records by fields and time")
    group_parser.add_argument("file", help="JSON file holding an array of records")
    group_parser.add_argument("--time-field", default="d", help="Timestamp field (default: d)")
    group_parser.add_argument("--fields", default="a,b,c",
                              help="Comma-separated base fields (default: a,b,c; empty for none)")
    group_parser.add_argument("--id-field", default="id", help="Field printed per record")
    group_parser.add_argument("--threshold-minutes", type=float, default=60.0,
                              help="Largest gap within a group (default: 60)")
    group_parser.set_defaults(func=cmd_group)

    click_parser = subparsers.add_parser("autoclick", help="Click at a network-time target")
    click_parser.add_argument("target", type=parse_datetime_arg, help="ISO target date/time")
    click_parser.add_argument("-n", "--clicks", type=parse_positive_int_arg, default=1, help="Number of clicks")
    click_parser.add_argument("--server", default=NTP_SERVER, help="NTP server host")
    click_parser.set_defaults(func=cmd_autoclick)

    export_parser = subparsers.add_parser("export-collections", help="Export Edge collections")
    export_parser.add_argument("--user-data-dir", help="Edge profile directory")
    export_parser.add_argument("--download-dir", help="Download directory for exports")
    export_parser.add_argument("--format", default=DEFAULT_EXPORT_FORMAT,
                               help="Export format button label (default: HTML)")
    export_parser.set_defaults(func=cmd_export_collections)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

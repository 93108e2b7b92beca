"""
Tests for the chetutils command line.

These tests verify:
1. Argument parsing and validation
2. Output of the formatting commands
3. Error exits for network, scheduling and browser commands
"""

import json
import logging
import sys
from datetime import datetime

import pytest

from chetutils.cli import main as cli
from chetutils.automation import edge_collections
from chetutils.timesync.ntp import NtpError


@pytest.fixture(autouse=True)
def reset_package_logger():
    """main() installs handlers bound to the captured stdout."""
    yield
    logger = logging.getLogger("chetutils")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


# =============================================================================
# PARSER TESTS
# =============================================================================

class TestParser:
    """Test argument parsing."""

    def test_no_command_prints_help(self, capsys):
        """Bare invocation shows usage and succeeds."""
        assert cli.main([]) == 0
        assert "usage: chetutils" in capsys.readouterr().out

    def test_upper_requires_number(self):
        """Non-numeric amounts are rejected."""
        with pytest.raises(SystemExit):
            cli.create_parser().parse_args(["upper", "abc"])

    @pytest.mark.parametrize("amount", ["NaN", "Infinity", "-inf"])
    def test_upper_rejects_non_finite(self, amount):
        """Amounts must be finite numbers."""
        with pytest.raises(SystemExit):
            cli.create_parser().parse_args(["upper", amount, "--integer"])

    @pytest.mark.parametrize("clicks", ["0", "-2", "two"])
    def test_autoclick_rejects_bad_click_count(self, clicks):
        """Click counts must be positive integers."""
        with pytest.raises(SystemExit):
            cli.create_parser().parse_args(["autoclick", "2999-01-01T00:00:00", "-n", clicks])

    def test_lunar_rejects_bad_date(self):
        """Dates must be ISO formatted."""
        with pytest.raises(SystemExit):
            cli.create_parser().parse_args(["lunar", "30/09/2025"])

    def test_group_defaults(self):
        """Group defaults match the sample record shape."""
        args = cli.create_parser().parse_args(["group", "records.json"])

        assert args.time_field == "d"
        assert args.fields == "a,b,c"
        assert args.threshold_minutes == 60.0


# =============================================================================
# FORMATTING COMMAND TESTS
# =============================================================================

class TestFormattingCommands:
    """Test commands that print a conversion."""

    def test_upper_amount(self, capsys):
        """Amounts print with 角 and 分."""
        assert cli.main(["upper", "1234.56"]) == 0
        assert capsys.readouterr().out.strip() == "壹仟贰佰叁拾肆元伍角陆分"

    def test_upper_integer(self, capsys):
        """--integer drops the fractional part and 整."""
        assert cli.main(["upper", "--integer", "1001"]) == 0
        assert capsys.readouterr().out.strip() == "壹仟零壹元"

    def test_pinyin(self, capsys):
        """Words are joined before conversion."""
        assert cli.main(["pinyin", "你好", "中国"]) == 0
        assert capsys.readouterr().out.strip() == "nihao zhongguo"

    def test_lunar(self, capsys):
        """Lunar new year 2025."""
        assert cli.main(["lunar", "2025-01-29"]) == 0
        assert capsys.readouterr().out.strip() == "正月初一"

    def test_lunar_out_of_range(self, capsys):
        """Dates outside the lunar tables fail."""
        assert cli.main(["lunar", "2150-01-01"]) == 1
        assert "ERROR" in capsys.readouterr().out

    def test_julian(self, capsys):
        """J2000.0 epoch."""
        assert cli.main(["julian", "2000-01-01T12:00:00"]) == 0
        assert capsys.readouterr().out.strip() == "2451545.000000"

    def test_elapsed(self, capsys):
        """One day of hours."""
        assert cli.main(["elapsed"]) == 0
        assert "经过了24.00小时" in capsys.readouterr().out


# =============================================================================
# GROUP COMMAND TESTS
# =============================================================================

class TestGroupCommand:
    """Test grouping a JSON file."""

    def test_group_file(self, tmp_path, capsys):
        """Records group by fields and time."""
        records = [
            {"id": 1, "a": "1", "b": "2", "c": "3", "d": "2024-01-01T10:00:00"},
            {"id": 2, "a": "1", "b": "2", "c": "3", "d": "2024-01-01T10:30:00"},
            {"id": 3, "a": "1", "b": "2", "c": "3", "d": "2024-01-01T12:00:00"},
            {"id": 4, "a": "4", "b": "5", "c": "6", "d": "2024-01-01T10:00:00"},
            {"id": 5, "a": "4", "b": "5", "c": "6", "d": "2024-01-01T10:45:00"},
        ]
        path = tmp_path / "records.json"
        path.write_text(json.dumps(records), encoding="utf-8")

        assert cli.main(["group", str(path)]) == 0

        out = capsys.readouterr().out
        assert out.count("Group Key:") == 3
        assert "Group Key: 0\n  Record ID: 1, Time: 2024-01-01 10:00:00\n" \
               "  Record ID: 2, Time: 2024-01-01 10:30:00\n" in out

    def test_group_missing_file(self, tmp_path, capsys):
        """Unreadable files fail."""
        assert cli.main(["group", str(tmp_path / "missing.json")]) == 1
        assert "Cannot read" in capsys.readouterr().out

    def test_group_missing_fields(self, tmp_path, capsys):
        """Records without the base fields fail cleanly."""
        path = tmp_path / "records.json"
        path.write_text(json.dumps([{"id": 1, "d": "2024-01-01T10:00:00"}]), encoding="utf-8")

        assert cli.main(["group", str(path)]) == 1
        assert "ERROR: Records do not have the grouping fields" in capsys.readouterr().out

    def test_group_bad_time(self, tmp_path, capsys):
        """Non-ISO timestamps fail."""
        path = tmp_path / "records.json"
        path.write_text(json.dumps([{"id": 1, "d": "yesterday"}]), encoding="utf-8")

        assert cli.main(["group", str(path)]) == 1
        assert "Bad 'd' value" in capsys.readouterr().out


# =============================================================================
# NETWORK / AUTOMATION COMMAND TESTS
# =============================================================================

class FakeScheduler:
    started = False

    def __init__(self, clock=None):
        self.is_running = False

    def start(self, target, clicks=1):
        return FakeScheduler.started

    def stop(self):
        pass


class TestAutomationCommands:
    """Test ntp, autoclick and export-collections with stubs."""

    def test_ntp_success(self, monkeypatch, capsys):
        """Network and local times are printed."""
        monkeypatch.setattr(cli, "get_network_time", lambda server: datetime(2025, 1, 1, 8, 0))

        assert cli.main(["ntp"]) == 0
        assert "Network time: 2025-01-01 08:00:00.000" in capsys.readouterr().out

    def test_ntp_failure(self, monkeypatch, capsys):
        """Query errors exit with 1."""
        def fail(server):
            raise NtpError("no reply")

        monkeypatch.setattr(cli, "get_network_time", fail)

        assert cli.main(["ntp", "--server", "example.invalid"]) == 1
        assert "ERROR: no reply" in capsys.readouterr().out

    def test_autoclick_past_target(self, monkeypatch, capsys):
        """A refused schedule exits with 1."""
        FakeScheduler.started = False
        monkeypatch.setattr(cli, "ClickScheduler", FakeScheduler)

        assert cli.main(["autoclick", "2000-01-01T00:00:00"]) == 1
        assert "not in the future" in capsys.readouterr().out

    def test_autoclick_completes(self, monkeypatch, capsys):
        """Once the timer has fired the command finishes."""
        FakeScheduler.started = True
        monkeypatch.setattr(cli, "ClickScheduler", FakeScheduler)

        assert cli.main(["autoclick", "2999-01-01T00:00:00", "-n", "2"]) == 0
        out = capsys.readouterr().out
        assert "Armed: 2 click(s)" in out
        assert "Done." in out

    def test_export_collections_without_selenium(self, monkeypatch, capsys):
        """A missing selenium install is reported."""
        monkeypatch.setitem(sys.modules, "selenium.common.exceptions", None)

        assert cli.main(["export-collections"]) == 1
        assert "selenium is required" in capsys.readouterr().out

    def test_export_collections_driver_failure(self, monkeypatch, capsys, caplog):
        """A browser that cannot start is logged and reported."""
        exceptions = pytest.importorskip("selenium.common.exceptions")

        def unavailable(user_data_dir, download_dir):
            raise exceptions.WebDriverException("msedgedriver not found")

        monkeypatch.setattr(edge_collections, "create_edge_driver", unavailable)

        assert cli.main(["export-collections"]) == 1
        assert "ERROR: Cannot start Edge: msedgedriver not found" in capsys.readouterr().out
        assert "Cannot start Edge" in caplog.text

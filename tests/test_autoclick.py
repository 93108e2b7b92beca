"""
Tests for chetutils.timesync.autoclick.

These tests verify:
1. Arming computes the delay from the injected clock
2. Past targets and bad click counts are refused
3. Restart, stop, toggle and firing behaviour
"""

from datetime import datetime, timedelta, timezone

import pytest

from chetutils.timesync.autoclick import ClickScheduler


NOW = datetime(2025, 9, 30, 12, 0, 0)


class FakeClicker:
    def __init__(self):
        self.calls = []

    def click(self, count):
        self.calls.append(count)


class FakeTimer:
    """Records its arguments instead of starting a thread."""

    created = []

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True


@pytest.fixture
def clicker():
    return FakeClicker()


@pytest.fixture
def scheduler(clicker):
    FakeTimer.created = []
    return ClickScheduler(clicker=clicker, clock=lambda: NOW, timer_factory=FakeTimer)


# =============================================================================
# ARMING TESTS
# =============================================================================

class TestStart:
    """Test arming the timer."""

    def test_start_future_target(self, scheduler):
        """Delay is the distance from the clock to the target."""
        assert scheduler.start(NOW + timedelta(seconds=90), clicks=3) is True

        timer = FakeTimer.created[-1]
        assert timer.interval == pytest.approx(90.0)
        assert timer.started
        assert timer.daemon
        assert scheduler.is_running
        assert scheduler.clicks == 3
        assert scheduler.target == NOW + timedelta(seconds=90)

    @pytest.mark.parametrize("offset", [timedelta(0), timedelta(seconds=-5)])
    def test_start_past_target_refused(self, scheduler, offset):
        """Targets at or before now are not armed."""
        assert scheduler.start(NOW + offset) is False
        assert not scheduler.is_running
        assert FakeTimer.created == []

    def test_start_invalid_clicks(self, scheduler):
        """At least one click is required."""
        with pytest.raises(ValueError):
            scheduler.start(NOW + timedelta(minutes=1), clicks=0)

    def test_aware_target_converted_to_local(self, scheduler):
        """Aware targets are compared as local time."""
        target = (NOW + timedelta(minutes=1)).astimezone(timezone.utc)

        assert scheduler.start(target) is True
        assert FakeTimer.created[-1].interval == pytest.approx(60.0)

    def test_restart_cancels_pending(self, scheduler):
        """Starting again replaces the armed timer."""
        scheduler.start(NOW + timedelta(minutes=1))
        first = FakeTimer.created[-1]

        scheduler.start(NOW + timedelta(minutes=2))

        assert first.cancelled
        assert FakeTimer.created[-1].interval == pytest.approx(120.0)


# =============================================================================
# STOP / TOGGLE / FIRE TESTS
# =============================================================================

class TestLifecycle:
    """Test stopping, toggling and firing."""

    def test_stop(self, scheduler):
        """Stop cancels the timer."""
        scheduler.start(NOW + timedelta(minutes=1))
        scheduler.stop()

        assert FakeTimer.created[-1].cancelled
        assert not scheduler.is_running

    def test_stop_when_idle(self, scheduler):
        """Stopping an idle scheduler is harmless."""
        scheduler.stop()
        assert not scheduler.is_running

    def test_toggle(self, scheduler):
        """Toggle alternates between armed and stopped."""
        target = NOW + timedelta(minutes=1)

        assert scheduler.toggle(target) is True
        assert scheduler.toggle(target) is False
        assert not scheduler.is_running

    def test_fire_clicks_and_disarms(self, scheduler, clicker):
        """Firing clicks the configured count once."""
        scheduler.start(NOW + timedelta(seconds=1), clicks=2)

        FakeTimer.created[-1].function()

        assert clicker.calls == [2]
        assert not scheduler.is_running

    def test_superseded_timer_keeps_new_schedule(self, scheduler, clicker):
        """A late callback from a replaced timer neither clicks nor disarms."""
        scheduler.start(NOW + timedelta(seconds=1), clicks=1)
        old = FakeTimer.created[-1]
        scheduler.start(NOW + timedelta(seconds=10), clicks=4)
        new = FakeTimer.created[-1]

        old.function()

        assert clicker.calls == []
        assert scheduler.is_running

        scheduler.stop()
        assert new.cancelled
        assert not scheduler.is_running

    def test_callback_after_stop_does_not_click(self, scheduler, clicker):
        """A callback already in flight when stopped is ignored."""
        scheduler.start(NOW + timedelta(seconds=1), clicks=2)
        timer = FakeTimer.created[-1]
        scheduler.stop()

        timer.function()

        assert clicker.calls == []

"""
Scheduled auto-clicker.

`ClickScheduler` waits until a wall-clock target time, measured against
network time, then fires a number of left clicks at the current pointer
position and stops. Starting again while armed cancels the pending run,
mirroring a start/stop toggle button.
"""

from __future__ import annotations

import functools
import logging
import threading
from datetime import datetime
from typing import Callable, Optional, Protocol

from .ntp import get_network_time_or_local

logger = logging.getLogger(__name__)


class ClickBackendError(RuntimeError):
    """Raised when no pointer backend is available."""
    pass


class Clicker(Protocol):
    def click(self, count: int) -> None:
        ...


class PynputClicker:
    """Left clicks at the current pointer position via pynput."""

    def __init__(self):
        try:
            from pynput.mouse import Button, Controller
        except ImportError as e:
            raise ClickBackendError(
                "pynput is required for clicking; install chet-utils[automation]"
            ) from e
        self._button = Button.left
        self._controller = Controller()

    def click(self, count: int) -> None:
        # Nudge the pointer in place so the target window sees a move first
        self._controller.position = self._controller.position
        self._controller.click(self._button, count)


def _to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class ClickScheduler:
    """
    One-shot click timer.

    Args:
        clicker: Backend that performs the clicks; PynputClicker when None
            (created on first start).
        clock: Returns the current naive local time; network time with a
            local fallback by default.
        timer_factory: threading.Timer-compatible constructor.
    """

    def __init__(self, clicker: Optional[Clicker] = None,
                 clock: Callable[[], datetime] = get_network_time_or_local,
                 timer_factory: Callable[..., threading.Timer] = threading.Timer):
        self._clicker = clicker
        self._clock = clock
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        # Bumped on every start/stop; callbacks from older timers are ignored
        self._generation = 0
        self.target: Optional[datetime] = None
        self.clicks = 1

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._timer is not None

    def start(self, target: datetime, clicks: int = 1) -> bool:
        """
        Arm the timer for `target` (naive values are local time).

        Returns:
            False when the target is not in the future; nothing is armed.

        Raises:
            ValueError: If `clicks` is less than 1.
            ClickBackendError: If no clicker was given and pynput is missing.
        """
        if clicks < 1:
            raise ValueError("clicks must be at least 1")
        if self._clicker is None:
            self._clicker = PynputClicker()

        target = _to_local_naive(target)
        delay = (target - self._clock()).total_seconds()
        if delay <= 0:
            logger.warning(f"Target time {target} has already passed; not scheduling")
            return False

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self.target = target
            self.clicks = clicks
            self._timer = self._timer_factory(delay, functools.partial(self._fire, self._generation))
            self._timer.daemon = True
            self._timer.start()
        logger.info(f"Scheduled {clicks} click(s) at {target} (in {delay:.3f}s)")
        return True

    def stop(self) -> None:
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
                logger.info("Click schedule cancelled")

    def toggle(self, target: datetime, clicks: int = 1) -> bool:
        """Stop when running, otherwise start. Returns the new running state."""
        if self.is_running:
            self.stop()
            return False
        return self.start(target, clicks)

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug("Ignoring a superseded click timer")
                return
            self._timer = None
            clicks = self.clicks
            clicker = self._clicker
        logger.info(f"Firing {clicks} click(s)")
        clicker.click(clicks)

from __future__ import annotations

from datetime import datetime, time, timedelta
from time import monotonic
from typing import TYPE_CHECKING

from bpm_boogaloo.constants import COUNTDOWN_PLACEHOLDER, COUNTDOWN_TICK_SEC
from bpm_boogaloo.controller.base import BaseController
from bpm_boogaloo.models import AlertLevel
from bpm_boogaloo.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from bpm_boogaloo.models import CountdownState, Settings

logger = get_logger(__name__)


def seconds_until(end_time: time, now: datetime) -> float:
    """Seconds from `now` to the next wall-clock occurrence of `end_time` (HH:MM).

    An end time equal to or earlier than `now` refers to the following day.
    """
    target = now.replace(hour=end_time.hour, minute=end_time.minute, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()


def format_countdown(seconds: float) -> str:
    total = max(int(seconds), 0)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class CountdownController(BaseController):
    """Count down to a set-end time and grade the time left against alert thresholds."""

    def __init__(
        self,
        settings: Settings,
        countdown: CountdownState,
        on_state_changed: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(settings, on_state_changed)
        self._countdown = countdown

    @property
    def running(self) -> bool:
        return self._countdown.running

    @property
    def remaining_sec(self) -> float | None:
        return self._countdown.remaining_sec

    def start(
        self, end_time: time, now: datetime | None = None, *, at: float | None = None
    ) -> float:
        """Start (or restart) the countdown towards `end_time`.

        Args:
            end_time: Wall-clock end of the set; only hour and minute are used.
            now: Current local time. Defaults to `datetime.now()`.
            at: Monotonic instant matching `now`, used to pace `poll`.

        Returns:
            Seconds remaining.
        """
        now = datetime.now() if now is None else now
        remaining = seconds_until(end_time, now)

        self._countdown.remaining_sec = remaining
        self._countdown.last_tick_at = monotonic() if at is None else at
        self.add_tick_callback(self.poll)

        logger.info("Countdown started: %s left", format_countdown(remaining))
        self._mark_state_changed()
        return remaining

    def stop(self) -> None:
        self.remove_tick_callback(self.poll)
        if not self._countdown.running:
            return
        self._countdown.remaining_sec = None
        self._countdown.last_tick_at = None
        logger.info("Countdown stopped")
        self._mark_state_changed()

    def tick(self) -> None:
        """Consume one second; the tick after reaching zero stops the countdown."""
        remaining = self._countdown.remaining_sec
        if remaining is None:
            return
        if remaining <= 0:
            self.stop()
            return
        self._countdown.remaining_sec = max(remaining - COUNTDOWN_TICK_SEC, 0.0)
        self._mark_state_changed()

    def poll(self, now: float) -> None:
        """Tick callback; consumes every whole second elapsed since the last tick."""
        last = self._countdown.last_tick_at
        if last is None:
            return

        while self._countdown.running and now - last >= COUNTDOWN_TICK_SEC:
            self.tick()
            last += COUNTDOWN_TICK_SEC

        if self._countdown.running:
            self._countdown.last_tick_at = last

    def time_string(self) -> str:
        remaining = self._countdown.remaining_sec
        if remaining is None:
            return COUNTDOWN_PLACEHOLDER
        return format_countdown(remaining)

    def alert_level(self) -> AlertLevel | None:
        """Grade the time left: green above the orange threshold, orange above red, else red."""
        remaining = self._countdown.remaining_sec
        if remaining is None:
            return None

        minutes = remaining / 60
        if minutes > self._settings.orange_alert_minutes:
            return AlertLevel.GREEN
        if minutes > self._settings.red_alert_minutes:
            return AlertLevel.ORANGE
        return AlertLevel.RED

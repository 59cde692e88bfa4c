from __future__ import annotations

import math
from itertools import pairwise
from time import monotonic
from typing import TYPE_CHECKING

from bpm_boogaloo.constants import (
    MAX_TAPS_TO_KEEP,
    MIN_TAPS_FOR_CALCULATION,
    TAP_DETECTION_INTERVAL_SEC,
    TAP_INACTIVITY_THRESHOLD_SEC,
)
from bpm_boogaloo.models import LockState
from bpm_boogaloo.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bpm_boogaloo.controller.tempo import TempoController

logger = get_logger(__name__)


class TapTempoController:
    """Estimate BPM from tap timestamps and lock the tempo after inactivity."""

    def __init__(self, tempo: TempoController) -> None:
        self._tempo = tempo
        self._session = tempo._session
        self._last_poll_at: float | None = None

    def register_tap(self, now: float | None = None) -> float | None:
        """Register a tap and return the new BPM estimate, if any.

        Args:
            now: Monotonic tap instant in seconds. Defaults to `time.monotonic()`.

        Returns:
            The BPM over the current window, or None while locked, before the fourth tap,
            or when the taps do not yield a usable tempo.
        """
        if self._session.locked:
            logger.debug("Tap ignored: BPM is locked")
            return None

        now = monotonic() if now is None else now
        if not math.isfinite(now):
            logger.debug("Tap ignored: non-finite timestamp %r", now)
            return None

        timestamps = self._session.tap_timestamps
        if timestamps and now < timestamps[-1]:
            logger.debug("Tap ignored: timestamp %.3f precedes last tap %.3f", now, timestamps[-1])
            return None

        timestamps.append(now)
        self._session.last_tap_at = now

        if len(timestamps) < MIN_TAPS_FOR_CALCULATION:
            return None

        bpm = self.calculate_bpm(timestamps)

        if len(timestamps) > MAX_TAPS_TO_KEEP:
            del timestamps[:-MAX_TAPS_TO_KEEP]

        if bpm is None:
            logger.debug("No tempo from %d taps", len(timestamps))
            return None

        self._tempo._apply_base_bpm(bpm)
        return bpm

    @staticmethod
    def calculate_bpm(timestamps: Sequence[float]) -> float | None:
        """Return 60 / mean interval between consecutive timestamps."""
        if len(timestamps) < MIN_TAPS_FOR_CALCULATION:
            return None

        intervals = [b - a for a, b in pairwise(timestamps)]
        avg_interval = sum(intervals) / len(intervals)
        if avg_interval <= 0:
            return None

        bpm = 60.0 / avg_interval
        if not math.isfinite(bpm):
            return None
        return bpm

    def lock(self) -> None:
        """Freeze the current tempo."""
        if self._session.locked:
            return
        self._session.lock_state = LockState.LOCKED
        logger.info("BPM locked at %r", self._session.base_bpm)
        self._tempo.refresh()

    def reset(self) -> None:
        """Drop all taps and the held tempo, and start accepting taps again.

        The inactivity poll stays registered; `AppController.tap_session()` owns its lifetime.
        """
        self._session.tap_timestamps.clear()
        self._session.last_tap_at = None
        self._session.lock_state = LockState.UNLOCKED
        self._session.base_bpm = None
        self._session.pitch_shift = 0.0
        self._last_poll_at = None
        logger.info("Tap session reset")
        self._tempo.refresh()

    def check_inactivity(self, now: float | None = None) -> bool:
        """Lock when no tap arrived within the inactivity threshold.

        Returns:
            True when this call locked the session.
        """
        last_tap_at = self._session.last_tap_at
        if self._session.locked or last_tap_at is None:
            return False

        now = monotonic() if now is None else now
        if now - last_tap_at <= TAP_INACTIVITY_THRESHOLD_SEC:
            return False

        logger.debug("No tap for %.2fs", now - last_tap_at)
        self.lock()
        return True

    def poll(self, now: float) -> None:
        """Tick callback; runs the inactivity check at the detection interval."""
        if self._last_poll_at is not None and now - self._last_poll_at < TAP_DETECTION_INTERVAL_SEC:
            return
        self._last_poll_at = now
        self.check_inactivity(now)

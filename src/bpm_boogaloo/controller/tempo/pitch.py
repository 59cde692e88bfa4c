from __future__ import annotations

from typing import TYPE_CHECKING

from bpm_boogaloo.constants import PITCH_STEP
from bpm_boogaloo.controller.validation import clamp, ensure_finite
from bpm_boogaloo.utils.logging import get_logger

if TYPE_CHECKING:
    from bpm_boogaloo.controller.tempo import TempoController

logger = get_logger(__name__)


class PitchController:
    """Apply a turntable-style percent pitch shift to the locked tempo."""

    def __init__(self, tempo: TempoController) -> None:
        self._tempo = tempo
        self._settings = tempo._settings
        self._session = tempo._session

    @property
    def limits(self) -> tuple[float, float]:
        return self._settings.pitch_range.limits

    @property
    def pitch_shift(self) -> float:
        return self._session.pitch_shift

    def set_pitch_shift(self, percent: float) -> float:
        """Set the pitch shift, clamped to the active range.

        Ignored while the tempo is unlocked or when `percent` is not finite.

        Returns:
            The pitch shift in effect after the call.
        """
        if not self._session.locked:
            logger.debug("Pitch change ignored: BPM is not locked")
            return self._session.pitch_shift
        try:
            ensure_finite(percent)
        except ValueError as exc:
            logger.debug("Pitch change ignored: %s", exc)
            return self._session.pitch_shift

        low, high = self.limits
        self._session.pitch_shift = clamp(percent, low, high)
        self._tempo.refresh()
        return self._session.pitch_shift

    def step(self, direction: int) -> float:
        """Nudge the pitch shift by one step up (`direction` > 0) or down (< 0)."""
        if direction == 0:
            return self._session.pitch_shift
        delta = PITCH_STEP if direction > 0 else -PITCH_STEP
        return self.set_pitch_shift(round(self._session.pitch_shift + delta, 1))

    def reclamp(self) -> None:
        low, high = self.limits
        self._session.pitch_shift = clamp(self._session.pitch_shift, low, high)

    def effective_bpm(self) -> float | None:
        """Return the base BPM, pitch-shifted while locked.

        The stored shift is clamped to the current limits, so a range narrowed
        without `reclamp()` still caps the result.
        """
        base_bpm = self._session.base_bpm
        if base_bpm is None:
            return None
        if not self._session.locked:
            return base_bpm
        low, high = self.limits
        return base_bpm * (1 + clamp(self._session.pitch_shift, low, high) / 100)

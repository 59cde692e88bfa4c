from enum import StrEnum
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bpm_boogaloo.constants import (
    FRACTIONAL_PRECISION_MAX,
    FRACTIONAL_PRECISION_MIN,
    ORANGE_ALERT_MINUTES_DEFAULT,
    RANGE_TIP_TITLE,
    RED_ALERT_MINUTES_DEFAULT,
)


class PitchRange(StrEnum):
    """Pitch fader range presets."""

    SIX = "±6%"
    TEN = "±10%"
    SIXTEEN = "±16%"
    WIDE = "WIDE"

    @property
    def limits(self) -> tuple[float, float]:
        """Closed percent interval covered by the preset."""
        bound = _PITCH_RANGE_BOUNDS[self]
        return (-bound, bound)


_PITCH_RANGE_BOUNDS: dict[PitchRange, float] = {
    PitchRange.SIX: 6.0,
    PitchRange.TEN: 10.0,
    PitchRange.SIXTEEN: 16.0,
    PitchRange.WIDE: 100.0,
}


class LockState(StrEnum):
    UNLOCKED = "unlocked"
    LOCKED = "locked"


class AlertLevel(StrEnum):
    GREEN = "green"
    ORANGE = "orange"
    RED = "red"


class Settings(BaseModel):
    """User preferences. Owned by the host app, handed to the core."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    whole_number_bpm: bool = True
    """Round displayed BPMs to whole numbers."""
    fractional_precision: int = Field(
        default=1, ge=FRACTIONAL_PRECISION_MIN, le=FRACTIONAL_PRECISION_MAX
    )
    """Decimal places used when `whole_number_bpm` is off."""
    pitch_range: PitchRange = PitchRange.SIX
    """Active pitch fader range preset."""
    orange_alert_minutes: float = Field(default=ORANGE_ALERT_MINUTES_DEFAULT, ge=0)
    """Countdown turns orange at or below this many minutes."""
    red_alert_minutes: float = Field(default=RED_ALERT_MINUTES_DEFAULT, ge=0)
    """Countdown turns red at or below this many minutes."""

    @field_validator("pitch_range", mode="before")
    @classmethod
    def _fallback_pitch_range(cls, value: Any) -> Any:
        if isinstance(value, PitchRange):
            return value
        try:
            return PitchRange(value)
        except ValueError:
            return PitchRange.SIX


class TransitionTip(BaseModel):
    """A named BPM transform: either a fixed multiplier or the ±6% mixing range.

    Immutable; change a tip with `model_copy(update=...)`.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    multiplier: float | None = Field(default=None, gt=0)
    range: bool = False
    hidden: bool = False

    @model_validator(mode="after")
    def _check_kind(self) -> Self:
        if (self.multiplier is not None) == self.range:
            msg = f"tip {self.title!r} needs exactly one of multiplier or range"
            raise ValueError(msg)
        return self


def default_transition_tips() -> list[TransitionTip]:
    return [
        TransitionTip(title=RANGE_TIP_TITLE, range=True),
        TransitionTip(title="Halftime", multiplier=0.5),
        TransitionTip(title="Doubletime", multiplier=2.0),
        TransitionTip(title="¾ Loop Up", multiplier=4 / 3),
        TransitionTip(title="¾ Loop Down", multiplier=3 / 4),
    ]


class SessionState(BaseModel):
    """Runtime tap/pitch state. Recreated on app launch."""

    model_config = ConfigDict(validate_assignment=True)

    tap_timestamps: list[float] = Field(default_factory=list)
    """Monotonic tap instants, oldest first."""
    last_tap_at: float | None = None
    """Instant of the most recent tap; drives the inactivity lock."""
    lock_state: LockState = LockState.UNLOCKED
    """Whether taps are accepted (unlocked) or the tempo is frozen (locked)."""
    base_bpm: float | None = Field(default=None, gt=0)
    """Tempo in effect before pitch shift, tapped or entered manually."""
    pitch_shift: float = 0.0
    """Pitch adjustment in percent."""

    @property
    def locked(self) -> bool:
        return self.lock_state is LockState.LOCKED


class CountdownState(BaseModel):
    """Countdown clock runtime state."""

    model_config = ConfigDict(validate_assignment=True)

    remaining_sec: float | None = Field(default=None, ge=0)
    """Seconds left, or None when no countdown is running."""
    last_tick_at: float | None = None
    """Monotonic instant the last whole second was consumed."""

    @property
    def running(self) -> bool:
        return self.remaining_sec is not None

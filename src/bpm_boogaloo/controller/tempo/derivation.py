"""Derived BPM strings for transition tips.

Every function here is pure: a base BPM plus formatting options in, display strings out.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from bpm_boogaloo.constants import (
    BPM_PLACEHOLDER,
    RANGE_MULTIPLIER_LOWER,
    RANGE_MULTIPLIER_UPPER,
    RANGE_TIP_TITLE,
)
from bpm_boogaloo.controller.validation import ensure_finite, normalize_bpm

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bpm_boogaloo.models import TransitionTip


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (120.5 -> 121)."""
    ensure_finite(value)
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def format_bpm(bpm: float, *, whole_number: bool = True, precision: int = 1) -> str:
    """Format a BPM for display.

    Args:
        bpm: Tempo to format. Must be finite.
        whole_number: Round to an integer instead of fixed decimals.
        precision: Decimal places in fractional mode.

    Returns:
        The formatted number without unit.

    Raises:
        ValueError: `bpm` is infinite or NaN.
    """
    ensure_finite(bpm)
    if whole_number:
        return str(round_half_away(bpm))
    return f"{bpm:.{precision}f}"


def range_text(bpm: float, *, whole_number: bool = True, precision: int = 1) -> str:
    """Return the mixable range around `bpm`, e.g. ``"~113 to ~127 BPM"``.

    The placeholder is returned when either bound is not a usable tempo.
    """
    lower = normalize_bpm(bpm * RANGE_MULTIPLIER_LOWER)
    upper = normalize_bpm(bpm * RANGE_MULTIPLIER_UPPER)
    if lower is None or upper is None:
        return BPM_PLACEHOLDER

    lower_text = format_bpm(lower, whole_number=whole_number, precision=precision)
    upper_text = format_bpm(upper, whole_number=whole_number, precision=precision)
    if whole_number:
        return f"~{lower_text} to ~{upper_text} BPM"
    return f"{lower_text} to {upper_text} BPM"


def compute_all(
    base_bpm: float | None,
    tips: Iterable[TransitionTip],
    *,
    whole_number: bool = True,
    precision: int = 1,
) -> dict[str, str]:
    """Compute the display string of every tip.

    A missing, non-finite or non-positive `base_bpm` yields the placeholder for each tip,
    and so does a derived value that overflows. The result preserves the order of `tips`.
    """
    bpm = normalize_bpm(base_bpm)

    results: dict[str, str] = {}
    for tip in tips:
        if bpm is None:
            results[tip.title] = BPM_PLACEHOLDER
        elif tip.range:
            results[tip.title] = range_text(bpm, whole_number=whole_number, precision=precision)
        elif tip.multiplier is not None:
            derived = normalize_bpm(bpm * tip.multiplier)
            if derived is None:
                results[tip.title] = BPM_PLACEHOLDER
            else:
                results[tip.title] = format_bpm(
                    derived, whole_number=whole_number, precision=precision
                )
    return results


def display_order(tips: Iterable[TransitionTip]) -> list[TransitionTip]:
    """Return `tips` with the Range tip first, everything else in list order."""
    return sorted(tips, key=lambda tip: tip.title != RANGE_TIP_TITLE)

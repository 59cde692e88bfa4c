from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bpm_boogaloo.controller.tempo import TempoController


def tap_at(tempo: TempoController, times: list[float]) -> float | None:
    """Feed taps at the given instants and return the last estimate."""
    bpm: float | None = None
    for t in times:
        bpm = tempo.tapper.register_tap(t)
    return bpm


def evenly_spaced(count: int, interval: float, start: float = 0.0) -> list[float]:
    return [start + i * interval for i in range(count)]

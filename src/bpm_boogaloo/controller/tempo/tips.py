from __future__ import annotations

from typing import TYPE_CHECKING

from bpm_boogaloo.constants import BPM_PLACEHOLDER
from bpm_boogaloo.controller.tempo.derivation import compute_all, display_order
from bpm_boogaloo.models import default_transition_tips

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bpm_boogaloo.controller.tempo import TempoController
    from bpm_boogaloo.models import TransitionTip


class TransitionTipsController:
    """Hold the transition tip list and its latest derived BPM strings."""

    def __init__(self, tempo: TempoController, tips: Iterable[TransitionTip] | None = None) -> None:
        self._tempo = tempo
        self._settings = tempo._settings
        self._tips = default_transition_tips() if tips is None else list(tips)
        self._results: dict[str, str] = {}

        titles = [tip.title for tip in self._tips]
        if len(set(titles)) != len(titles):
            msg = f"transition tip titles must be unique, got {titles!r}"
            raise ValueError(msg)

    @property
    def tips(self) -> list[TransitionTip]:
        return list(self._tips)

    @property
    def results(self) -> dict[str, str]:
        """Latest display string per tip title, in tip order."""
        return dict(self._results)

    def recompute(self, bpm: float | None) -> dict[str, str]:
        self._results = compute_all(
            bpm,
            self._tips,
            whole_number=self._settings.whole_number_bpm,
            precision=self._settings.fractional_precision,
        )
        return self.results

    def visible(self) -> list[tuple[str, str]]:
        """Return `(title, result)` for non-hidden tips, Range first."""
        return [
            (tip.title, self._results.get(tip.title, BPM_PLACEHOLDER))
            for tip in display_order(self._tips)
            if not tip.hidden
        ]

    def toggle_hidden(self, title: str) -> bool:
        """Toggle a tip's hidden flag.

        Returns:
            True when a tip with `title` exists.
        """
        for index, tip in enumerate(self._tips):
            if tip.title == title:
                self._tips[index] = tip.model_copy(update={"hidden": not tip.hidden})
                self._tempo._mark_state_changed()
                return True
        return False

    def move(self, source: int, destination: int) -> bool:
        """Move the tip at `source` so it ends up at index `destination`.

        Returns:
            False (and leaves the list untouched) when either index is out of range.
        """
        count = len(self._tips)
        if not (0 <= source < count and 0 <= destination < count):
            return False

        tip = self._tips.pop(source)
        self._tips.insert(destination, tip)
        self._tempo.refresh()
        return True

from __future__ import annotations

from typing import TYPE_CHECKING

from bpm_boogaloo.controller.base import BaseController
from bpm_boogaloo.controller.tempo.derivation import format_bpm
from bpm_boogaloo.controller.tempo.pitch import PitchController
from bpm_boogaloo.controller.tempo.tapper import TapTempoController
from bpm_boogaloo.controller.tempo.tips import TransitionTipsController
from bpm_boogaloo.controller.validation import normalize_bpm, parse_bpm
from bpm_boogaloo.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from bpm_boogaloo.models import SessionState, Settings, TransitionTip

logger = get_logger(__name__)


class TempoController(BaseController):
    def __init__(
        self,
        settings: Settings,
        session: SessionState,
        tips: Iterable[TransitionTip] | None = None,
        on_state_changed: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(settings, on_state_changed)
        self._session = session

        self.tips = TransitionTipsController(self, tips)
        self.pitch = PitchController(self)
        self.tapper = TapTempoController(self)

        self.tips.recompute(self.effective_bpm())

    def effective_bpm(self) -> float | None:
        return self.pitch.effective_bpm()

    @property
    def displayed_bpm(self) -> str:
        """The effective BPM formatted per settings, or an empty string when unknown."""
        bpm = normalize_bpm(self.effective_bpm())
        if bpm is None:
            return ""
        return format_bpm(
            bpm,
            whole_number=self._settings.whole_number_bpm,
            precision=self._settings.fractional_precision,
        )

    @property
    def results(self) -> dict[str, str]:
        return self.tips.results

    def set_manual_bpm(self, text: str | None) -> bool:
        """Use a typed-in BPM as the base tempo.

        Returns:
            False when `text` is not a positive number; the current state is kept.
        """
        bpm = parse_bpm(text)
        if bpm is None:
            logger.debug("Manual BPM ignored: %r", text)
            return False

        self._apply_base_bpm(bpm)
        return True

    def on_settings_changed(self) -> None:
        self.pitch.reclamp()
        self.refresh()

    def refresh(self) -> None:
        """Recompute tip results from the effective BPM and notify listeners."""
        self.tips.recompute(self.effective_bpm())
        self._mark_state_changed()

    def _apply_base_bpm(self, bpm: float) -> None:
        self._session.base_bpm = bpm
        self._session.pitch_shift = 0.0
        self.refresh()

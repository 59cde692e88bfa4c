from __future__ import annotations

from contextlib import contextmanager
from time import monotonic
from typing import TYPE_CHECKING, Any

from bpm_boogaloo.controller.clock import CountdownController
from bpm_boogaloo.controller.tempo import TempoController
from bpm_boogaloo.models import CountdownState, SessionState, Settings
from bpm_boogaloo.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from bpm_boogaloo.controller.tempo.tapper import TapTempoController
    from bpm_boogaloo.models import TransitionTip

logger = get_logger(__name__)


class AppController:
    def __init__(
        self,
        settings: Settings | None = None,
        tips: Iterable[TransitionTip] | None = None,
        on_state_changed: Callable[[], None] | None = None,
    ) -> None:
        self._settings = Settings() if settings is None else settings
        self._session = SessionState()
        self._countdown = CountdownState()

        self.tempo = TempoController(
            self._settings,
            self._session,
            tips,
            on_state_changed=on_state_changed,
        )
        self.clock = CountdownController(
            self._settings,
            self._countdown,
            on_state_changed=on_state_changed,
        )

    def update_settings(self, **changes: Any) -> Settings:
        """Validate and apply preference changes, then refresh derived values.

        Raises:
            pydantic.ValidationError: If any change is invalid; nothing is applied then.
        """
        candidate = Settings.model_validate(self._settings.model_dump() | changes)
        for name in changes:
            setattr(self._settings, name, getattr(candidate, name))

        logger.debug("Settings updated: %r", changes)
        self.tempo.on_settings_changed()
        return self._settings

    @contextmanager
    def tap_session(self) -> Iterator[TapTempoController]:
        """Run the inactivity poll on every tick for as long as the block is active."""
        tapper = self.tempo.tapper
        self.tempo.add_tick_callback(tapper.poll)
        try:
            yield tapper
        finally:
            self.tempo.remove_tick_callback(tapper.poll)

    def on_tick(self, now: float | None = None) -> None:
        """Advance time-driven state. Call from the UI loop, e.g. once per frame."""
        now = monotonic() if now is None else now
        self.tempo.on_tick(now)
        self.clock.on_tick(now)

    def shut_down(self) -> None:
        self.clock.stop()
        self.tempo.clear_tick_callbacks()
        self.clock.clear_tick_callbacks()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def session(self) -> SessionState:
        return self._session

    @property
    def countdown(self) -> CountdownState:
        return self._countdown

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from bpm_boogaloo.models import Settings


class BaseController:
    def __init__(
        self,
        settings: Settings,
        on_state_changed: Callable[[], None] | None = None,
    ) -> None:
        self._settings = settings
        self._on_state_changed = on_state_changed
        self._on_tick_callbacks: list[Callable[[float], None]] = []

    def on_tick(self, now: float) -> None:
        for cb in list(self._on_tick_callbacks):
            cb(now)

    def add_tick_callback(self, cb: Callable[[float], None]) -> None:
        if cb not in self._on_tick_callbacks:
            self._on_tick_callbacks.append(cb)

    def remove_tick_callback(self, cb: Callable[[float], None]) -> None:
        if cb in self._on_tick_callbacks:
            self._on_tick_callbacks.remove(cb)

    def clear_tick_callbacks(self) -> None:
        self._on_tick_callbacks.clear()

    def _mark_state_changed(self) -> None:
        if self._on_state_changed is not None:
            self._on_state_changed()

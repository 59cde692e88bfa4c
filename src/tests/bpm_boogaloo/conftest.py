from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from bpm_boogaloo.controller import AppController
from bpm_boogaloo.models import Settings

if TYPE_CHECKING:
    from bpm_boogaloo.controller.clock import CountdownController
    from bpm_boogaloo.controller.tempo import TempoController
    from bpm_boogaloo.models import CountdownState, SessionState


@pytest.fixture
def on_state_changed() -> Mock:
    return Mock()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def controller(settings: Settings, on_state_changed: Mock) -> AppController:
    return AppController(settings, on_state_changed=on_state_changed)


@pytest.fixture
def session_state(controller: AppController) -> SessionState:
    return controller.session


@pytest.fixture
def countdown_state(controller: AppController) -> CountdownState:
    return controller.countdown


@pytest.fixture
def tempo(controller: AppController) -> TempoController:
    return controller.tempo


@pytest.fixture
def clock(controller: AppController) -> CountdownController:
    return controller.clock

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from bpm_boogaloo.constants import BPM_PLACEHOLDER
from bpm_boogaloo.controller.tempo import TempoController
from bpm_boogaloo.models import SessionState, Settings, TransitionTip

if TYPE_CHECKING:
    from unittest.mock import Mock

    from bpm_boogaloo.controller import AppController

DEFAULT_TITLES = ["Range", "Halftime", "Doubletime", "¾ Loop Up", "¾ Loop Down"]


def test_default_tips(tempo: TempoController) -> None:
    assert [tip.title for tip in tempo.tips.tips] == DEFAULT_TITLES


def test_results_start_as_placeholders(tempo: TempoController) -> None:
    assert tempo.results == dict.fromkeys(DEFAULT_TITLES, BPM_PLACEHOLDER)


def test_results_follow_manual_bpm(tempo: TempoController) -> None:
    tempo.set_manual_bpm("120")

    assert tempo.results == {
        "Range": "~113 to ~127 BPM",
        "Halftime": "60",
        "Doubletime": "240",
        "¾ Loop Up": "160",
        "¾ Loop Down": "90",
    }


def test_visible_puts_range_first_and_skips_hidden(settings: Settings) -> None:
    tips = [
        TransitionTip(title="Halftime", multiplier=0.5),
        TransitionTip(title="Range", range=True),
        TransitionTip(title="Doubletime", multiplier=2.0),
    ]
    tempo = TempoController(settings, SessionState(), tips)
    tempo.set_manual_bpm("100")

    assert tempo.tips.toggle_hidden("Doubletime") is True
    assert tempo.tips.visible() == [("Range", "~94 to ~106 BPM"), ("Halftime", "50")]


def test_hidden_tip_still_computed(tempo: TempoController) -> None:
    tempo.tips.toggle_hidden("Halftime")
    tempo.set_manual_bpm("120")

    assert tempo.results["Halftime"] == "60"
    assert "Halftime" not in dict(tempo.tips.visible())


def test_toggle_hidden_twice_restores(tempo: TempoController) -> None:
    tempo.tips.toggle_hidden("Halftime")
    tempo.tips.toggle_hidden("Halftime")

    assert "Halftime" in dict(tempo.tips.visible())


def test_toggle_hidden_unknown_title(tempo: TempoController, on_state_changed: Mock) -> None:
    on_state_changed.reset_mock()

    assert tempo.tips.toggle_hidden("Triple") is False
    on_state_changed.assert_not_called()


def test_move_reorders_tips_and_results(tempo: TempoController) -> None:
    assert tempo.tips.move(4, 1) is True

    expected = ["Range", "¾ Loop Down", "Halftime", "Doubletime", "¾ Loop Up"]
    assert [tip.title for tip in tempo.tips.tips] == expected
    assert list(tempo.results) == expected


@pytest.mark.parametrize(("source", "destination"), [(-1, 0), (0, 5), (5, 0)])
def test_move_out_of_range_is_ignored(
    tempo: TempoController, source: int, destination: int
) -> None:
    assert tempo.tips.move(source, destination) is False
    assert [tip.title for tip in tempo.tips.tips] == DEFAULT_TITLES


def test_duplicate_titles_rejected(settings: Settings) -> None:
    tips = [
        TransitionTip(title="Halftime", multiplier=0.5),
        TransitionTip(title="Halftime", multiplier=0.25),
    ]

    with pytest.raises(ValueError, match="transition tip titles must be unique"):
        TempoController(settings, SessionState(), tips)


def test_whole_number_setting_switches_format(tempo: TempoController, settings: Settings) -> None:
    tempo.set_manual_bpm("120")
    settings.whole_number_bpm = False
    tempo.on_settings_changed()

    assert tempo.results["Range"] == "112.8 to 127.2 BPM"
    assert tempo.results["¾ Loop Up"] == "160.0"


def test_toggle_hidden_leaves_callers_tips_alone(settings: Settings) -> None:
    mine = [
        TransitionTip(title="Halftime", multiplier=0.5),
        TransitionTip(title="Doubletime", multiplier=2.0),
    ]
    tempo = TempoController(settings, SessionState(), mine)

    tempo.tips.toggle_hidden("Halftime")

    assert mine[0].hidden is False
    assert tempo.tips.tips[0].hidden is True
    assert tempo.tips.tips[0].multiplier == 0.5


def test_tips_cannot_be_edited_behind_results(tempo: TempoController) -> None:
    tempo.set_manual_bpm("120")

    with pytest.raises(ValidationError):
        tempo.tips.tips[1].multiplier = 3.0

    assert tempo.tips.tips[1].multiplier == 0.5
    assert tempo.results["Halftime"] == "60"


def test_visible_rows_at_zero_effective_bpm(
    controller: AppController, tempo: TempoController
) -> None:
    controller.update_settings(pitch_range="WIDE")
    tempo.set_manual_bpm("120")
    tempo.tapper.lock()
    tempo.pitch.set_pitch_shift(-100.0)

    assert tempo.tips.visible() == [(title, BPM_PLACEHOLDER) for title in DEFAULT_TITLES]


def test_visible_rows_with_overflowing_tips(tempo: TempoController) -> None:
    tempo.set_manual_bpm("1.7e308")

    rows = dict(tempo.tips.visible())

    assert rows["Range"] == BPM_PLACEHOLDER
    assert rows["Doubletime"] == BPM_PLACEHOLDER
    assert rows["¾ Loop Up"] == BPM_PLACEHOLDER
    assert rows["Halftime"] != BPM_PLACEHOLDER
    assert rows["¾ Loop Down"] != BPM_PLACEHOLDER

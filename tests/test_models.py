import pytest

from cfb_rankings.core.errors import InvalidInput
from cfb_rankings.core.models import Game, Outcome, ToggleResult


@pytest.mark.parametrize(
    "home_score, away_score, expected",
    [
        (30, 20, Outcome.HOME_WIN),
        (20, 30, Outcome.AWAY_WIN),
        (17, 17, Outcome.TIE),
        (None, None, Outcome.UNPLAYED),
    ],
)
def test_outcome_from_scores(home_score, away_score, expected):
    game = Game(
        week=1,
        home_id="OSU",
        away_id="MICH",
        home_score=home_score,
        away_score=away_score,
    )
    assert game.outcome is expected


def test_recorded_score_overrides_toggle():
    game = Game(
        week=1,
        home_id="OSU",
        away_id="MICH",
        home_score=13,
        away_score=30,
        result=ToggleResult.WIN,
    )
    assert game.outcome is Outcome.AWAY_WIN


def test_result_is_coerced_from_string():
    game = Game(week=2, home_id="OSU", away_id="MICH", result="loss")
    assert game.result is ToggleResult.LOSS
    assert Game(week=2, home_id="OSU", away_id="MICH", result=None).result is ToggleResult.NONE


def test_game_against_itself_is_rejected():
    with pytest.raises(InvalidInput):
        Game(week=1, home_id="OSU", away_id="OSU")


@pytest.mark.parametrize("week", [0, -1, "3", 2.0, True])
def test_invalid_week_is_rejected(week):
    with pytest.raises(InvalidInput):
        Game(week=week, home_id="OSU", away_id="MICH")


def test_unknown_result_is_rejected():
    with pytest.raises(InvalidInput):
        Game(week=1, home_id="OSU", away_id="MICH", result="maybe")


def test_key_prefers_game_id():
    assert Game(week=4, home_id=1, away_id=2, game_id=401).key == "401"
    assert Game(week=4, home_id=1, away_id=2).key == "4:1:2"


def test_opponent_of():
    game = Game(week=1, home_id="OSU", away_id="MICH")
    assert game.opponent_of("OSU") == "MICH"
    assert game.opponent_of("MICH") == "OSU"
    with pytest.raises(KeyError):
        game.opponent_of("PSU")

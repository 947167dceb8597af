import json
import math

import pytest

from cfb_rankings.core.config import EngineConfig, RankingWeights, load_weights
from cfb_rankings.core.errors import InvalidInput


def test_default_weights_favor_road_wins():
    weights = RankingWeights()
    assert weights.to_dict() == {
        "home_win": 1.0,
        "away_win": 1.3,
        "home_loss": -1.0,
        "away_loss": -0.8,
    }
    assert EngineConfig().weights == weights


def test_from_dict_accepts_both_key_styles():
    weights = RankingWeights.from_dict({"homeWin": 2, "away_loss": "-0.5"})
    assert weights.home_win == 2.0
    assert weights.away_loss == -0.5
    assert weights.away_win == 1.3


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(InvalidInput):
        RankingWeights.from_dict({"home_wins": 1.0})


@pytest.mark.parametrize("value", [math.inf, float("nan"), "lots", None, True])
def test_weights_must_be_finite_numbers(value):
    with pytest.raises(InvalidInput):
        RankingWeights(home_win=value)


def test_from_env_overrides_only_set_values(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CFB_WEIGHT_AWAY_WIN", "1.5")
    monkeypatch.setenv("CFB_WEIGHT_HOME_LOSS", "")
    monkeypatch.delenv("CFB_WEIGHT_HOME_WIN", raising=False)

    weights = RankingWeights.from_env()

    assert weights.away_win == 1.5
    assert weights.home_loss == -1.0
    assert weights.home_win == 1.0


def test_from_env_with_explicit_mapping():
    weights = RankingWeights.from_env(
        prefix="X_", environ={"X_AWAY_LOSS": "-0.1"}
    )
    assert weights.away_loss == -0.1


def test_load_weights(tmp_path):
    path = tmp_path / "weights.json"
    path.write_text(json.dumps({"home_win": 0.9, "awayWin": 1.4}))

    weights = load_weights(path)

    assert weights.home_win == 0.9
    assert weights.away_win == 1.4


def test_load_weights_requires_object(tmp_path):
    path = tmp_path / "weights.json"
    path.write_text("[1, 2, 3]")

    with pytest.raises(InvalidInput):
        load_weights(path)

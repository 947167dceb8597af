import polars as pl

from cfb_rankings.core.models import Team
from cfb_rankings.core.results import Ranking, rankings_to_dataframe


def test_rankings_to_dataframe():
    rankings = [
        Ranking(
            team=Team(team_id=61, name="Georgia", conference="SEC"),
            score=2.3,
            wins=2,
            losses=0,
            rank=1,
            rank_change=3,
        ),
        Ranking(
            team=Team(team_id="ND", name="Notre Dame"),
            score=-0.8,
            wins=0,
            losses=1,
            ties=1,
            rank=2,
        ),
    ]

    df = rankings_to_dataframe(rankings)

    assert df.columns == [
        "rank",
        "team_id",
        "team",
        "conference",
        "score",
        "record",
        "wins",
        "losses",
        "ties",
        "games",
        "rank_change",
    ]
    assert df.select("team_id").to_series().to_list() == ["61", "ND"]
    assert df.select("record").to_series().to_list() == ["2-0", "0-1"]
    assert df.select("games").to_series().to_list() == [2, 2]
    assert df.select("rank_change").to_series().to_list() == [3, None]


def test_empty_rankings_keep_schema():
    df = rankings_to_dataframe([])
    assert df.height == 0
    assert df.schema["score"] == pl.Float64

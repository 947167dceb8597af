import pytest

from cfb_rankings.algorithms.ranking_engine import (
    RankingEngine,
    compute_rankings,
    compute_weekly_rankings,
)
from cfb_rankings.core.config import RankingWeights
from cfb_rankings.core.errors import InvalidInput
from cfb_rankings.core.models import Game, Team, ToggleResult

WEIGHTS = RankingWeights(
    home_win=1.0, away_win=1.3, home_loss=-1.0, away_loss=-0.8
)


def _teams(*ids):
    return [Team(team_id=i, name=f"Team {i}", conference="SEC") for i in ids]


def _by_id(rankings):
    return {r.team.team_id: r for r in rankings}


def test_home_win_and_away_loss_add_up():
    teams = _teams("A", "B", "C")
    games = [
        Game(week=1, home_id="A", away_id="B", home_score=24, away_score=10),
        Game(week=2, home_id="C", away_id="A", home_score=31, away_score=17),
    ]

    rankings = _by_id(compute_rankings(teams, games, week_cutoff=2, weights=WEIGHTS))

    assert rankings["A"].score == pytest.approx(0.2)
    assert rankings["A"].record == "1-1"
    assert rankings["B"].score == pytest.approx(-0.8)
    assert rankings["C"].score == pytest.approx(1.0)


def test_equal_scores_break_on_win_count():
    teams = _teams("X", "Y", "P", "Q", "R", "S", "Z")
    games = [
        # X: two away wins -> 2.6
        Game(week=1, home_id="P", away_id="X", home_score=10, away_score=20),
        Game(week=2, home_id="Q", away_id="X", home_score=7, away_score=14),
        # Y: two away wins, a home win and a home loss -> 2.6
        Game(week=1, home_id="R", away_id="Y", home_score=3, away_score=10),
        Game(week=2, home_id="S", away_id="Y", home_score=0, away_score=7),
        Game(week=3, home_id="Y", away_id="P", home_score=30, away_score=0),
        Game(week=4, home_id="Y", away_id="Z", home_score=10, away_score=17),
    ]

    rankings = compute_rankings(teams, games, week_cutoff=4)

    assert [r.team.team_id for r in rankings[:2]] == ["Y", "X"]
    assert rankings[0].score == rankings[1].score == pytest.approx(2.6)
    assert rankings[0].wins == 3
    assert rankings[1].wins == 2


def test_equal_scores_and_wins_break_on_name():
    teams = [
        Team(team_id=2, name="Wyoming"),
        Team(team_id=1, name="Army"),
        Team(team_id=3, name="Navy"),
    ]

    rankings = compute_rankings(teams, [], week_cutoff=1)

    assert [r.team.name for r in rankings] == ["Army", "Navy", "Wyoming"]
    assert [r.rank for r in rankings] == [1, 2, 3]


def test_games_after_cutoff_are_ignored():
    teams = _teams("A", "B")
    early = [Game(week=1, home_id="A", away_id="B", home_score=14, away_score=7)]
    late = early + [
        Game(week=5, home_id="B", away_id="A", home_score=35, away_score=0)
    ]

    before = compute_rankings(teams, early, week_cutoff=4)
    after = compute_rankings(teams, late, week_cutoff=4)

    assert [r.to_dict() for r in before] == [r.to_dict() for r in after]


def test_untoggled_game_matches_missing_game():
    teams = _teams("A", "B", "C")
    base = [Game(week=1, home_id="A", away_id="B", home_score=14, away_score=7)]
    pending = base + [
        Game(week=2, home_id="B", away_id="C", result=ToggleResult.NONE)
    ]

    without = compute_rankings(teams, base, week_cutoff=2)
    with_pending = compute_rankings(teams, pending, week_cutoff=2)

    assert [r.to_dict() for r in without] == [r.to_dict() for r in with_pending]


def test_toggled_result_scores_like_recorded_result():
    teams = _teams("A", "B")
    toggled = [Game(week=1, home_id="A", away_id="B", result=ToggleResult.LOSS)]
    recorded = [
        Game(week=1, home_id="A", away_id="B", home_score=3, away_score=10)
    ]

    assert [r.to_dict() for r in compute_rankings(teams, toggled, 1)] == [
        r.to_dict() for r in compute_rankings(teams, recorded, 1)
    ]
    assert compute_rankings(teams, toggled, 1)[0].team.team_id == "B"


def test_unknown_team_reference_is_ignored():
    teams = _teams("A", "B")
    games = [
        Game(week=1, home_id="A", away_id="FCS-1", home_score=56, away_score=3),
        Game(week=1, home_id="B", away_id="A", home_score=10, away_score=13),
    ]

    rankings = _by_id(compute_rankings(teams, games, week_cutoff=1))

    assert rankings["A"].record == "1-0"
    assert rankings["A"].score == pytest.approx(1.3)
    assert rankings["B"].record == "0-1"


def test_unhashable_team_reference_is_ignored():
    teams = _teams("A", "B")
    games = [
        Game(week=1, home_id=[1], away_id="A", home_score=7, away_score=0),
        Game(week=1, home_id="A", away_id="B", home_score=21, away_score=14),
    ]

    rankings = _by_id(compute_rankings(teams, games, week_cutoff=1))

    assert rankings["A"].record == "1-0"
    assert rankings["B"].record == "0-1"


def test_ranks_are_a_permutation():
    teams = _teams(*"ABCDEF")
    games = [
        Game(week=1, home_id="A", away_id="B", home_score=1, away_score=0),
        Game(week=1, home_id="C", away_id="D", home_score=0, away_score=1),
    ]

    rankings = compute_rankings(teams, games, week_cutoff=1)

    assert len(rankings) == len(teams)
    assert sorted(r.rank for r in rankings) == list(range(1, len(teams) + 1))
    assert [r.rank for r in rankings] == list(range(1, len(teams) + 1))


def test_repeated_calls_are_identical():
    teams = _teams(*"ABCD")
    games = [
        Game(week=w, home_id=h, away_id=a, home_score=hs, away_score=as_)
        for w, h, a, hs, as_ in [
            (1, "A", "B", 21, 14),
            (1, "C", "D", 7, 28),
            (2, "B", "C", 10, 10),
            (2, "D", "A", 3, 17),
        ]
    ]

    first = compute_rankings(teams, games, week_cutoff=2)
    second = compute_rankings(teams, games, week_cutoff=2)

    assert [r.to_dict() for r in first] == [r.to_dict() for r in second]


def test_counted_games_grow_with_cutoff():
    teams = _teams(*"ABC")
    games = [
        Game(week=1, home_id="A", away_id="B", home_score=7, away_score=0),
        Game(week=2, home_id="B", away_id="C", home_score=7, away_score=0),
        Game(week=3, home_id="C", away_id="A", home_score=7, away_score=0),
    ]

    previous = None
    for week in range(1, 4):
        counted = {
            r.team.team_id: r.games_counted
            for r in compute_rankings(teams, games, week_cutoff=week)
        }
        if previous is not None:
            assert all(counted[t] >= previous[t] for t in counted)
        previous = counted
    assert previous == {"A": 2, "B": 2, "C": 2}


def test_tied_game_adds_nothing_to_score_or_record():
    teams = _teams("A", "B")
    games = [Game(week=1, home_id="A", away_id="B", home_score=21, away_score=21)]

    rankings = _by_id(compute_rankings(teams, games, week_cutoff=1))

    assert rankings["A"].score == 0.0
    assert rankings["A"].record == "0-0"
    assert rankings["A"].ties == 1


def test_loss_weights_are_added_without_negation():
    teams = _teams("A", "B")
    games = [Game(week=1, home_id="A", away_id="B", home_score=0, away_score=7)]
    weights = {"homeWin": 1.0, "awayWin": 2.0, "homeLoss": -2.5, "awayLoss": 0.0}

    rankings = _by_id(compute_rankings(teams, games, 1, weights=weights))

    assert rankings["A"].score == pytest.approx(-2.5)
    assert rankings["B"].score == pytest.approx(2.0)


def test_inputs_are_not_mutated():
    teams = _teams("A", "B")
    games = [Game(week=1, home_id="A", away_id="B", result=ToggleResult.WIN)]
    teams_before, games_before = list(teams), list(games)

    compute_rankings(teams, games, week_cutoff=1)

    assert teams == teams_before
    assert games == games_before


@pytest.mark.parametrize("cutoff", [0, -3, True, 1.5])
def test_invalid_cutoff_raises(cutoff):
    with pytest.raises(InvalidInput):
        compute_rankings(_teams("A"), [], week_cutoff=cutoff)


def test_empty_teams_raise():
    with pytest.raises(InvalidInput):
        compute_rankings([], [], week_cutoff=1)


def test_duplicate_team_ids_raise():
    teams = [Team(team_id=1, name="Army"), Team(team_id=1, name="Navy")]
    with pytest.raises(InvalidInput):
        compute_rankings(teams, [], week_cutoff=1)


def test_rank_change_against_prior_rankings():
    teams = _teams("A", "B", "C")
    games = [Game(week=1, home_id="C", away_id="A", home_score=28, away_score=3)]
    prior = {"A": 1, "B": 2}

    rankings = _by_id(compute_rankings(teams, games, 1, prior_rankings=prior))

    assert rankings["C"].rank == 1
    assert rankings["C"].rank_change is None
    assert rankings["A"].rank_change == 1 - rankings["A"].rank
    assert rankings["B"].rank_change == 0


def test_weekly_rankings_track_movement():
    teams = _teams("A", "B")
    games = [
        Game(week=1, home_id="A", away_id="B", home_score=10, away_score=0),
        Game(week=2, home_id="A", away_id="B", home_score=0, away_score=10),
        Game(week=3, home_id="B", away_id="A", home_score=0, away_score=10),
    ]

    weekly = compute_weekly_rankings(teams, games)

    assert sorted(weekly) == [1, 2, 3]
    assert [r.team.team_id for r in weekly[1]] == ["A", "B"]
    assert all(r.rank_change is None for r in weekly[1])
    week2 = _by_id(weekly[2])
    assert week2["B"].rank == 1
    assert week2["B"].rank_change == 1
    assert week2["A"].rank_change == -1


def test_engine_matches_function():
    teams = _teams("A", "B")
    games = [Game(week=1, home_id="A", away_id="B", home_score=3, away_score=0)]
    engine = RankingEngine(weights=WEIGHTS)

    assert [r.to_dict() for r in engine.rank(teams, games, 1)] == [
        r.to_dict() for r in compute_rankings(teams, games, 1, WEIGHTS)
    ]
    assert sorted(engine.rank_by_week(teams, games, through_week=2)) == [1, 2]

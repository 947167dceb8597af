"""Weighted win/loss ranking engine.

Each decided game adds a side-dependent weight to both participants' scores:
a home win, an away win, a home loss or an away loss. Teams are then ordered
by score, with ties broken by win count (more first), then team name, then
team id, so every call with the same inputs returns the same order.

The engine is a pure function of its inputs. Games citing teams that are not
on the roster and games after the week cutoff are dropped without error,
since upstream schedule feeds routinely include opponents outside the
ranked divisions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import polars as pl

from cfb_rankings.core.config import EngineConfig, RankingWeights
from cfb_rankings.core.constants import MIN_WEEK, SCORE_PRECISION
from cfb_rankings.core.errors import InvalidInput
from cfb_rankings.core.logging import get_logger, log_timing
from cfb_rankings.core.models import Game, Outcome, Team
from cfb_rankings.core.results import Ranking

if TYPE_CHECKING:
    from typing import Hashable, Iterable, Mapping, Sequence

logger = get_logger(__name__)

_GAME_SCHEMA = {
    "week": pl.Int64,
    "home_index": pl.Int64,
    "away_index": pl.Int64,
    "outcome": pl.Utf8,
}


def compute_rankings(
    teams: Sequence[Team],
    games: Iterable[Game],
    week_cutoff: int,
    weights: RankingWeights | Mapping[str, float] | None = None,
    prior_rankings: Iterable[Ranking] | Mapping[Hashable, int] | None = None,
    *,
    score_precision: int = SCORE_PRECISION,
) -> list[Ranking]:
    """Rank every team by weighted results through ``week_cutoff``.

    Args:
        teams: Non-empty roster with unique team ids.
        games: Season games. Games after the cutoff, games that are neither
            scored nor toggled, and games citing unknown team ids are ignored.
        week_cutoff: Last week included, 1-based.
        weights: Per-game contributions. Defaults to ``RankingWeights()``.
        prior_rankings: Optional earlier rankings (or a team id to rank
            mapping) used to fill ``Ranking.rank_change``.
        score_precision: Decimal places scores are rounded to before sorting.

    Returns:
        One Ranking per team, ordered by rank (1 first).

    Raises:
        InvalidInput: If ``teams`` is empty or has duplicate ids, or if
            ``week_cutoff`` is not an integer >= 1.
    """
    teams = list(teams)
    team_index = _index_teams(teams)
    _validate_week_cutoff(week_cutoff)
    weights = _resolve_weights(weights)

    game_rows = {column: [] for column in _GAME_SCHEMA}
    unknown = 0
    future = 0
    for game in games:
        try:
            home_index = team_index.get(game.home_id)
            away_index = team_index.get(game.away_id)
        except TypeError:
            # unhashable id, cannot be on the roster
            home_index = away_index = None
        if home_index is None or away_index is None:
            unknown += 1
            continue
        if game.week > week_cutoff:
            future += 1
            continue
        game_rows["week"].append(game.week)
        game_rows["home_index"].append(home_index)
        game_rows["away_index"].append(away_index)
        game_rows["outcome"].append(game.outcome.value)

    if unknown or future:
        logger.debug(
            "Excluded %d games with unknown teams and %d games after week %d",
            unknown,
            future,
            week_cutoff,
        )

    games_df = pl.DataFrame(game_rows, schema=_GAME_SCHEMA)
    totals = _aggregate_contributions(games_df, weights)

    teams_df = pl.DataFrame(
        {
            "team_index": list(range(len(teams))),
            "name": [team.name for team in teams],
            "id_key": [str(team.team_id) for team in teams],
        },
        schema={"team_index": pl.Int64, "name": pl.Utf8, "id_key": pl.Utf8},
    )

    table = (
        teams_df.join(totals, on="team_index", how="left")
        .with_columns(
            pl.col("score").fill_null(0.0).round(score_precision),
            pl.col("wins").fill_null(0),
            pl.col("losses").fill_null(0),
            pl.col("ties").fill_null(0),
        )
        .sort(
            ["score", "wins", "name", "id_key"],
            descending=[True, True, False, False],
            maintain_order=True,
        )
        .with_row_index("rank", offset=1)
    )

    prior = _prior_rank_map(prior_rankings)
    rankings = []
    for row in table.iter_rows(named=True):
        team = teams[row["team_index"]]
        rank = int(row["rank"])
        prior_rank = prior.get(team.team_id)
        rankings.append(
            Ranking(
                team=team,
                score=float(row["score"]),
                wins=int(row["wins"]),
                losses=int(row["losses"]),
                ties=int(row["ties"]),
                rank=rank,
                rank_change=None if prior_rank is None else prior_rank - rank,
            )
        )
    return rankings


def _aggregate_contributions(
    games_df: pl.DataFrame, weights: RankingWeights
) -> pl.DataFrame:
    """Sum per-team score, wins, losses and ties over decided games."""
    decided = games_df.filter(pl.col("outcome") != Outcome.UNPLAYED.value)
    outcome = pl.col("outcome")
    home_won = outcome == Outcome.HOME_WIN.value
    away_won = outcome == Outcome.AWAY_WIN.value
    tied = outcome == Outcome.TIE.value

    home_side = decided.select(
        pl.col("home_index").alias("team_index"),
        pl.when(home_won)
        .then(pl.lit(weights.home_win))
        .when(away_won)
        .then(pl.lit(weights.home_loss))
        .otherwise(pl.lit(0.0))
        .alias("points"),
        home_won.cast(pl.Int64).alias("win"),
        away_won.cast(pl.Int64).alias("loss"),
        tied.cast(pl.Int64).alias("tie"),
    )
    away_side = decided.select(
        pl.col("away_index").alias("team_index"),
        pl.when(away_won)
        .then(pl.lit(weights.away_win))
        .when(home_won)
        .then(pl.lit(weights.away_loss))
        .otherwise(pl.lit(0.0))
        .alias("points"),
        away_won.cast(pl.Int64).alias("win"),
        home_won.cast(pl.Int64).alias("loss"),
        tied.cast(pl.Int64).alias("tie"),
    )

    return (
        pl.concat([home_side, away_side])
        .group_by("team_index")
        .agg(
            pl.col("points").sum().alias("score"),
            pl.col("win").sum().alias("wins"),
            pl.col("loss").sum().alias("losses"),
            pl.col("tie").sum().alias("ties"),
        )
    )


def _index_teams(teams: list[Team]) -> dict:
    if not teams:
        raise InvalidInput("At least one team is required to compute rankings")
    team_index = {}
    for position, team in enumerate(teams):
        if team.team_id in team_index:
            raise InvalidInput(f"Duplicate team id {team.team_id!r}")
        team_index[team.team_id] = position
    return team_index


def _validate_week_cutoff(week_cutoff: int) -> None:
    if isinstance(week_cutoff, bool) or not isinstance(week_cutoff, int):
        raise InvalidInput(
            f"Week cutoff must be an integer, got {week_cutoff!r}"
        )
    if week_cutoff < MIN_WEEK:
        raise InvalidInput(
            f"Week cutoff must be >= {MIN_WEEK}, got {week_cutoff}"
        )


def _resolve_weights(
    weights: RankingWeights | Mapping[str, float] | None,
) -> RankingWeights:
    if weights is None:
        return RankingWeights()
    if isinstance(weights, RankingWeights):
        return weights
    return RankingWeights.from_dict(weights)


def _prior_rank_map(
    prior_rankings: Iterable[Ranking] | Mapping[Hashable, int] | None,
) -> dict:
    if prior_rankings is None:
        return {}
    if hasattr(prior_rankings, "items"):
        return {team_id: int(rank) for team_id, rank in prior_rankings.items()}
    return {ranking.team.team_id: ranking.rank for ranking in prior_rankings}


def compute_weekly_rankings(
    teams: Sequence[Team],
    games: Iterable[Game],
    through_week: int | None = None,
    weights: RankingWeights | Mapping[str, float] | None = None,
    *,
    score_precision: int = SCORE_PRECISION,
) -> dict[int, list[Ranking]]:
    """Compute "rankings as of week N" for every week up to ``through_week``.

    Each week's rankings carry ``rank_change`` relative to the week before;
    week 1 has no prior and reports ``None``.

    Args:
        teams: Non-empty roster with unique team ids.
        games: Season games.
        through_week: Last week to rank. Defaults to the latest week present
            in ``games`` (at least 1).
        weights: Per-game contributions.
        score_precision: Decimal places scores are rounded to before sorting.

    Returns:
        Mapping of week number to that week's ordered rankings.
    """
    games = list(games)
    if through_week is None:
        through_week = max((game.week for game in games), default=MIN_WEEK)
    _validate_week_cutoff(through_week)

    weekly: dict[int, list[Ranking]] = {}
    previous = None
    for week in range(MIN_WEEK, through_week + 1):
        previous = compute_rankings(
            teams,
            games,
            week,
            weights,
            prior_rankings=previous,
            score_precision=score_precision,
        )
        weekly[week] = previous
    return weekly


class RankingEngine:
    """
    Stateless ranking engine bound to a set of weights.

    Wraps :func:`compute_rankings` with timing logs so callers can hold one
    configured engine and re-rank after every toggle.

    Parameters
    ----------
    weights : RankingWeights, optional
        Per-game contributions. Defaults to the values in ``config``.
    config : EngineConfig, optional
        Engine configuration. Defaults to ``EngineConfig()``.
    """

    def __init__(
        self,
        weights: RankingWeights | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.weights = weights or self.config.weights
        self.logger = logger
        self.logger.debug(f"Initialized RankingEngine with weights={self.weights}")

    @property
    def _timing_level(self) -> int:
        return logging.INFO if self.config.verbose else logging.DEBUG

    def rank(
        self,
        teams: Sequence[Team],
        games: Iterable[Game],
        week_cutoff: int,
        prior_rankings: Iterable[Ranking] | Mapping[Hashable, int] | None = None,
    ) -> list[Ranking]:
        """Rank ``teams`` through ``week_cutoff``. See :func:`compute_rankings`."""
        with log_timing(
            self.logger, f"week {week_cutoff} rankings", self._timing_level
        ):
            return compute_rankings(
                teams,
                games,
                week_cutoff,
                self.weights,
                prior_rankings,
                score_precision=self.config.score_precision,
            )

    def rank_by_week(
        self,
        teams: Sequence[Team],
        games: Iterable[Game],
        through_week: int | None = None,
    ) -> dict[int, list[Ranking]]:
        """Rank every week up to ``through_week``. See :func:`compute_weekly_rankings`."""
        with log_timing(self.logger, "weekly rankings", self._timing_level):
            return compute_weekly_rankings(
                teams,
                games,
                through_week,
                self.weights,
                score_precision=self.config.score_precision,
            )

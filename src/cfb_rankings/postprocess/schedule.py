"""Teams × weeks schedule grid."""

from __future__ import annotations

from typing import TYPE_CHECKING

import polars as pl

from cfb_rankings.core.constants import MIN_WEEK
from cfb_rankings.core.models import Outcome

if TYPE_CHECKING:
    from typing import Iterable, Sequence

    from cfb_rankings.core.models import Game, Team


def week_column(week: int) -> str:
    return f"week_{week}"


def _cell(game: Game, team_id, names: dict) -> str:
    at_home = team_id == game.home_id
    opponent_id = game.opponent_of(team_id)
    opponent = names.get(opponent_id, str(opponent_id))
    cell = f"vs {opponent}" if at_home else f"@ {opponent}"

    outcome = game.outcome
    if outcome is Outcome.TIE:
        return f"{cell} T"
    if outcome is Outcome.HOME_WIN:
        return f"{cell} {'W' if at_home else 'L'}"
    if outcome is Outcome.AWAY_WIN:
        return f"{cell} {'L' if at_home else 'W'}"
    return cell


def build_schedule_matrix(
    teams: Sequence[Team],
    games: Iterable[Game],
    weeks: int | None = None,
) -> pl.DataFrame:
    """Lay the season out as one row per team and one column per week.

    Args:
        teams: Roster; row order follows it.
        games: Season games. Opponents outside the roster are shown by id.
        weeks: Number of week columns. Defaults to the latest game week.

    Returns:
        DataFrame with ``team_id``, ``team``, ``conference`` and
        ``week_1..week_N`` columns. A cell reads ``"vs X"`` for a home game
        or ``"@ X"`` for a road game, followed by ``W``, ``L`` or ``T`` once
        decided. Bye weeks are null; two games in one week are joined with
        ``"; "``.
    """
    games = list(games)
    if weeks is None:
        weeks = max((game.week for game in games), default=0)

    names = {team.team_id: team.name for team in teams}
    cells: dict = {team.team_id: {} for team in teams}
    for game in games:
        if game.week > weeks:
            continue
        for team_id in (game.home_id, game.away_id):
            if team_id not in cells:
                continue
            week_cells = cells[team_id]
            cell = _cell(game, team_id, names)
            if game.week in week_cells:
                week_cells[game.week] = f"{week_cells[game.week]}; {cell}"
            else:
                week_cells[game.week] = cell

    columns = {
        "team_id": [str(team.team_id) for team in teams],
        "team": [team.name for team in teams],
        "conference": [team.conference for team in teams],
    }
    for week in range(MIN_WEEK, weeks + 1):
        columns[week_column(week)] = [
            cells[team.team_id].get(week) for team in teams
        ]

    schema = {name: pl.Utf8 for name in columns}
    return pl.DataFrame(columns, schema=schema)

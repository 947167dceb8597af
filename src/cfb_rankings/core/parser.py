"""
Schedule parsing utilities for CollegeFootballData-style exports.

This module turns a raw schedule document (a ``teams`` list and a ``games``
list, as returned by the public college football data API) into the
:class:`Team` and :class:`Game` values the ranking engine consumes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import polars as pl

from cfb_rankings.core.errors import InvalidInput
from cfb_rankings.core.logging import get_logger
from cfb_rankings.core.models import Game, Team, ToggleResult

logger = get_logger(__name__)


@dataclass
class ScheduleData:
    """Parsed season schedule."""

    teams: List[Team] = field(default_factory=list)
    games: List[Game] = field(default_factory=list)

    @property
    def max_week(self) -> int:
        return max((game.week for game in self.games), default=0)


def _first(record: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _as_int(value: Any) -> Optional[int]:
    """Coerce ints and integral strings/floats; None stays None."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    return int(value)


def _check_id(value: Any, record: Dict[str, Any]) -> None:
    """Reject ids that cannot key a roster lookup (e.g. JSON lists)."""
    try:
        hash(value)
    except TypeError:
        raise InvalidInput(f"Record has an unhashable id {value!r}: {record!r}") from None


def parse_team_record(record: Dict[str, Any]) -> Team:
    """Build a :class:`Team` from one raw team record.

    Raises
    ------
    InvalidInput
        If the record has no id or no display name.
    """
    team_id = _first(record, "id", "team_id", "teamId")
    name = _first(record, "school", "name")
    if team_id is None or not name:
        raise InvalidInput(f"Team record missing id or name: {record!r}")
    _check_id(team_id, record)
    division = _first(record, "classification", "division")
    return Team(
        team_id=team_id,
        name=str(name),
        conference=_first(record, "conference"),
        division=str(division).lower() if division else None,
    )


def parse_game_record(record: Dict[str, Any]) -> Game:
    """Build a :class:`Game` from one raw game record.

    Both the snake_case (``home_id``/``home_points``) and camelCase
    (``homeId``/``homePoints``) spellings used by different API versions are
    accepted. A stored ``result`` toggle is carried over as-is.

    Raises
    ------
    InvalidInput
        If ids are missing, the week or scores are not integers, or the game
        is otherwise malformed.
    """
    home_id = _first(record, "home_id", "homeId")
    away_id = _first(record, "away_id", "awayId")
    if home_id is None or away_id is None:
        raise InvalidInput(f"Game record missing team ids: {record!r}")
    _check_id(home_id, record)
    _check_id(away_id, record)
    try:
        week = _as_int(record.get("week"))
        home_score = _as_int(_first(record, "home_points", "homePoints", "home_score"))
        away_score = _as_int(_first(record, "away_points", "awayPoints", "away_score"))
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"Game record has invalid numbers: {exc}") from None
    if week is None:
        raise InvalidInput(f"Game record missing week: {record!r}")
    result = record.get("result") or ToggleResult.NONE.value
    return Game(
        week=week,
        home_id=home_id,
        away_id=away_id,
        home_score=home_score,
        away_score=away_score,
        result=str(result).lower(),
        game_id=_first(record, "id", "game_id", "gameId"),
    )


def parse_schedule_data(payload: Dict[str, Any]) -> ScheduleData:
    """Parse a raw schedule document into teams and games.

    Parameters
    ----------
    payload : dict
        Document with ``teams`` and ``games`` lists of raw records.

    Returns
    -------
    ScheduleData
        Parsed teams (first occurrence of each id wins) and games, in input
        order.

    Notes
    -----
    * Malformed records are skipped and logged at WARNING level instead of
      failing the whole document; schedule feeds are noisy.
    * Games may reference teams that are not in ``teams``. They are kept
      here and ignored later by the ranking engine.
    """
    if not isinstance(payload, dict):
        raise InvalidInput("Schedule document must be a JSON object")

    teams: List[Team] = []
    seen_team_ids: set = set()
    for record in payload.get("teams") or []:
        try:
            team = parse_team_record(record)
        except (InvalidInput, AttributeError) as exc:
            logger.warning("Skipping team record: %s", exc)
            continue
        if team.team_id in seen_team_ids:
            logger.warning("Skipping duplicate team id %r", team.team_id)
            continue
        seen_team_ids.add(team.team_id)
        teams.append(team)

    games: List[Game] = []
    for record in payload.get("games") or []:
        try:
            games.append(parse_game_record(record))
        except (InvalidInput, AttributeError) as exc:
            logger.warning("Skipping game record: %s", exc)

    logger.info(f"Parsed {len(teams)} teams and {len(games)} games")
    return ScheduleData(teams=teams, games=games)


def load_schedule(path: str | Path) -> ScheduleData:
    """Load and parse a schedule JSON file."""
    with open(path, "r") as f:
        payload = json.load(f)
    return parse_schedule_data(payload)


def teams_to_dataframe(teams: List[Team]) -> pl.DataFrame:
    """Tabulate teams; ids are rendered as strings."""
    return pl.DataFrame(
        {
            "team_id": [str(team.team_id) for team in teams],
            "team": [team.name for team in teams],
            "conference": [team.conference for team in teams],
            "division": [team.division for team in teams],
        },
        schema={
            "team_id": pl.Utf8,
            "team": pl.Utf8,
            "conference": pl.Utf8,
            "division": pl.Utf8,
        },
    )


def games_to_dataframe(games: List[Game]) -> pl.DataFrame:
    """Tabulate games with their derived outcome; ids are rendered as strings."""
    return pl.DataFrame(
        {
            "game_key": [game.key for game in games],
            "week": [game.week for game in games],
            "home_id": [str(game.home_id) for game in games],
            "away_id": [str(game.away_id) for game in games],
            "home_score": [game.home_score for game in games],
            "away_score": [game.away_score for game in games],
            "result": [game.result.value for game in games],
            "outcome": [game.outcome.value for game in games],
            "is_final": [game.is_final for game in games],
        },
        schema={
            "game_key": pl.Utf8,
            "week": pl.Int64,
            "home_id": pl.Utf8,
            "away_id": pl.Utf8,
            "home_score": pl.Int64,
            "away_score": pl.Int64,
            "result": pl.Utf8,
            "outcome": pl.Utf8,
            "is_final": pl.Boolean,
        },
    )

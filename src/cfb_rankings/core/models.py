"""Schedule data model: teams, games and the per-game result toggle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Optional

from cfb_rankings.core.constants import MIN_WEEK
from cfb_rankings.core.errors import InvalidInput

TeamId = Hashable


class ToggleResult(str, Enum):
    """User-applied result of a game, seen from the home team."""

    NONE = "none"
    WIN = "win"
    LOSS = "loss"


class Outcome(str, Enum):
    """Outcome of a game derived from its score or its toggle."""

    UNPLAYED = "unplayed"
    HOME_WIN = "home-win"
    AWAY_WIN = "away-win"
    TIE = "tie"


@dataclass(frozen=True)
class Team:
    """A team on the season roster. Reference data, never mutated."""

    team_id: TeamId
    name: str
    conference: Optional[str] = None
    division: Optional[str] = None


@dataclass(frozen=True)
class Game:
    """A single home/away pairing in one week of the season.

    A game whose home and away scores are both recorded is final: its
    outcome comes from the scores and the toggle is ignored. Otherwise the
    outcome comes from ``result``, where ``win`` means the home team won.
    """

    week: int
    home_id: TeamId
    away_id: TeamId
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    result: ToggleResult = ToggleResult.NONE
    game_id: Optional[Hashable] = None

    def __post_init__(self) -> None:
        if isinstance(self.week, bool) or not isinstance(self.week, int):
            raise InvalidInput(f"Game week must be an integer, got {self.week!r}")
        if self.week < MIN_WEEK:
            raise InvalidInput(f"Game week must be >= {MIN_WEEK}, got {self.week}")
        if self.home_id == self.away_id:
            raise InvalidInput(
                f"Game in week {self.week} pairs team {self.home_id!r} with itself"
            )
        try:
            result = ToggleResult(self.result or ToggleResult.NONE)
        except ValueError:
            raise InvalidInput(f"Unknown game result {self.result!r}") from None
        object.__setattr__(self, "result", result)

    @property
    def is_final(self) -> bool:
        """Whether the game carries an authoritative recorded score."""
        return self.home_score is not None and self.away_score is not None

    @property
    def outcome(self) -> Outcome:
        if self.is_final:
            if self.home_score > self.away_score:
                return Outcome.HOME_WIN
            if self.home_score < self.away_score:
                return Outcome.AWAY_WIN
            return Outcome.TIE
        if self.result is ToggleResult.WIN:
            return Outcome.HOME_WIN
        if self.result is ToggleResult.LOSS:
            return Outcome.AWAY_WIN
        return Outcome.UNPLAYED

    @property
    def key(self) -> str:
        """Stable identifier used to persist toggles."""
        if self.game_id is not None:
            return str(self.game_id)
        return f"{self.week}:{self.home_id}:{self.away_id}"

    def opponent_of(self, team_id: TeamId) -> TeamId:
        """Return the other side of the game for ``team_id``."""
        if team_id == self.home_id:
            return self.away_id
        if team_id == self.away_id:
            return self.home_id
        raise KeyError(team_id)

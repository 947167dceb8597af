"""Exception types raised by the rankings package."""

from __future__ import annotations


class RankingsError(Exception):
    """Base class for all errors raised by cfb_rankings."""


class InvalidInput(RankingsError, ValueError):
    """Raised when ranking inputs violate a precondition.

    Examples are an empty team list, duplicate team ids, a week cutoff
    below 1, non-finite weights, or a game whose two sides are the same team.
    """


class GameLockedError(RankingsError):
    """Raised when toggling a game that already has a recorded final score."""

    def __init__(self, game_key: str) -> None:
        super().__init__(
            f"Game {game_key} has a recorded score and cannot be toggled"
        )
        self.game_key = game_key

"""Result dataclasses for ranking computations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import polars as pl

from cfb_rankings.core.models import Team

if TYPE_CHECKING:
    from typing import Iterable


RANKING_SCHEMA = {
    "rank": pl.Int64,
    "team_id": pl.Utf8,
    "team": pl.Utf8,
    "conference": pl.Utf8,
    "score": pl.Float64,
    "record": pl.Utf8,
    "wins": pl.Int64,
    "losses": pl.Int64,
    "ties": pl.Int64,
    "games": pl.Int64,
    "rank_change": pl.Int64,
}


@dataclass(frozen=True)
class Ranking:
    """One team's standing in a ranking computation."""

    team: Team
    score: float
    wins: int
    losses: int
    rank: int
    ties: int = 0
    rank_change: int | None = None

    @property
    def record(self) -> str:
        """Win-loss tally, e.g. ``"5-2"``. Ties are not part of the record."""
        return f"{self.wins}-{self.losses}"

    @property
    def games_counted(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def team_id(self):
        return self.team.team_id

    def to_dict(self) -> dict:
        """Convert to a dictionary for easy serialization."""
        return {
            "rank": self.rank,
            "team_id": self.team.team_id,
            "team": self.team.name,
            "conference": self.team.conference,
            "score": self.score,
            "record": self.record,
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "games": self.games_counted,
            "rank_change": self.rank_change,
        }


def rankings_to_dataframe(rankings: Iterable[Ranking]) -> pl.DataFrame:
    """Convert rankings to a Polars DataFrame.

    Team ids are rendered as strings so numeric and textual ids share one
    column type.

    Args:
        rankings: Rankings in display order.

    Returns:
        DataFrame with one row per ranking, in the given order.
    """
    rows = []
    for ranking in rankings:
        row = ranking.to_dict()
        row["team_id"] = str(row["team_id"])
        rows.append(row)
    return pl.DataFrame(rows, schema=RANKING_SCHEMA)

"""Ranking algorithms."""

from cfb_rankings.algorithms.ranking_engine import (
    RankingEngine,
    compute_rankings,
    compute_weekly_rankings,
)

__all__ = [
    "RankingEngine",
    "compute_rankings",
    "compute_weekly_rankings",
]

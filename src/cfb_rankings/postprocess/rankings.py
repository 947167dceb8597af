"""
Post-processing utilities for ranking results.

This module provides engine-agnostic helpers for splitting a roster into
division views and sectioning ranking lists by conference.
"""

from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from cfb_rankings.core.constants import DIVISION_UNKNOWN, KNOWN_DIVISIONS
from cfb_rankings.core.models import Team
from cfb_rankings.core.results import Ranking

INDEPENDENT_LABEL = "Independent"


def partition_by_division(teams: Iterable[Team]) -> Dict[str, List[Team]]:
    """
    Split a roster into independent division views.

    Parameters
    ----------
    teams : Iterable[Team]
        Season roster.

    Returns
    -------
    Dict[str, List[Team]]
        ``fbs`` and ``fcs`` first (always present, possibly empty), then any
        other division labels in first-seen order. Teams without a division
        are grouped under ``"unknown"``. Team order within a division follows
        the input.

    Notes
    -----
    Ranking one division on its own is how the FBS and FCS matrices are
    built: games against the other division cite ids missing from the
    roster and drop out of the computation.
    """
    divisions: Dict[str, List[Team]] = OrderedDict(
        (division, []) for division in KNOWN_DIVISIONS
    )
    for team in teams:
        division = (team.division or DIVISION_UNKNOWN).lower()
        divisions.setdefault(division, []).append(team)
    return dict(divisions)


def filter_division(
    teams: Iterable[Team], division: Optional[str]
) -> List[Team]:
    """Return the teams in ``division`` (all teams when None)."""
    if division is None:
        return list(teams)
    return partition_by_division(teams).get(division.lower(), [])


def group_by_conference(
    rankings: Iterable[Ranking],
) -> "OrderedDict[str, List[Ranking]]":
    """
    Section rankings by conference for display.

    Conferences are ordered by their best-ranked team; rankings keep their
    order inside each conference. Teams without a conference are listed
    under ``"Independent"``.
    """
    sections: "OrderedDict[str, List[Ranking]]" = OrderedDict()
    for ranking in sorted(rankings, key=lambda r: r.rank):
        conference = ranking.team.conference or INDEPENDENT_LABEL
        sections.setdefault(conference, []).append(ranking)
    return sections

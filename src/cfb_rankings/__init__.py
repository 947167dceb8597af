"""College football schedule rankings."""

from __future__ import annotations

# Core functionality - Main API
from cfb_rankings.algorithms import (
    RankingEngine,
    compute_rankings,
    compute_weekly_rankings,
)
from cfb_rankings.core import (
    EngineConfig,
    Game,
    GameLockedError,
    InvalidInput,
    Outcome,
    Ranking,
    RankingsError,
    RankingWeights,
    ScheduleData,
    Team,
    ToggleResult,
    load_schedule,
    next_result,
    parse_schedule_data,
    rankings_to_dataframe,
    set_result,
    toggle_game,
)
from cfb_rankings.postprocess import (
    build_schedule_matrix,
    group_by_conference,
    partition_by_division,
)
from cfb_rankings.storage import ToggleStore

__version__ = "0.1.0"

__all__ = [
    # Engine
    "RankingEngine",
    "compute_rankings",
    "compute_weekly_rankings",
    # Data model
    "Team",
    "Game",
    "Outcome",
    "ToggleResult",
    "Ranking",
    "RankingWeights",
    "EngineConfig",
    # Errors
    "RankingsError",
    "InvalidInput",
    "GameLockedError",
    # Toggling
    "next_result",
    "set_result",
    "toggle_game",
    "ToggleStore",
    # Parsing and views
    "ScheduleData",
    "load_schedule",
    "parse_schedule_data",
    "rankings_to_dataframe",
    "build_schedule_matrix",
    "group_by_conference",
    "partition_by_division",
    # Version
    "__version__",
]

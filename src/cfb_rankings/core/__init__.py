"""Core components: data model, configuration, errors and logging."""

from cfb_rankings.core.config import EngineConfig, RankingWeights, load_weights
from cfb_rankings.core.errors import GameLockedError, InvalidInput, RankingsError
from cfb_rankings.core.models import Game, Outcome, Team, ToggleResult
from cfb_rankings.core.parser import (
    ScheduleData,
    games_to_dataframe,
    load_schedule,
    parse_schedule_data,
    teams_to_dataframe,
)
from cfb_rankings.core.results import Ranking, rankings_to_dataframe
from cfb_rankings.core.toggle import next_result, set_result, toggle_game

__all__ = [
    # Config
    "EngineConfig",
    "RankingWeights",
    "load_weights",
    # Errors
    "GameLockedError",
    "InvalidInput",
    "RankingsError",
    # Models
    "Game",
    "Outcome",
    "Team",
    "ToggleResult",
    # Parser
    "ScheduleData",
    "games_to_dataframe",
    "load_schedule",
    "parse_schedule_data",
    "teams_to_dataframe",
    # Results
    "Ranking",
    "rankings_to_dataframe",
    # Toggle
    "next_result",
    "set_result",
    "toggle_game",
]

"""
Configuration constants for schedule parsing and weekly ranking computation.

This module centralizes the default parameters used by the ranking engine,
the schedule parser and the command line tools so they can be tuned in one
place.
"""

# =============================================================================
# Scoring Weights
# =============================================================================

# Away wins are worth more than home wins; home losses cost more than away
# losses. Loss weights are signed and added to the score as-is.
DEFAULT_HOME_WIN_WEIGHT: float = 1.0
DEFAULT_AWAY_WIN_WEIGHT: float = 1.3
DEFAULT_HOME_LOSS_WEIGHT: float = -1.0
DEFAULT_AWAY_LOSS_WEIGHT: float = -0.8

# Decimal places scores are rounded to before sorting
SCORE_PRECISION: int = 6

# =============================================================================
# Season Shape
# =============================================================================

DEFAULT_MAX_WEEK: int = 15
MIN_WEEK: int = 1

# =============================================================================
# Divisions
# =============================================================================

DIVISION_FBS = "fbs"
DIVISION_FCS = "fcs"
DIVISION_UNKNOWN = "unknown"
KNOWN_DIVISIONS = (DIVISION_FBS, DIVISION_FCS)

# =============================================================================
# Files and Environment
# =============================================================================

DEFAULT_SCHEDULE_PATH = "data/schedule.json"
DEFAULT_TOGGLE_STORE_PATH = "data/toggles.json"

WEIGHTS_ENV_PREFIX = "CFB_WEIGHT_"
LOG_LEVEL_ENV = "CFB_RANKINGS_LOG_LEVEL"

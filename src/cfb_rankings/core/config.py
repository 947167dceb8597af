"""Configuration dataclasses for the ranking engine."""

from __future__ import annotations

import json
import math
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from cfb_rankings.core.constants import (
    DEFAULT_AWAY_LOSS_WEIGHT,
    DEFAULT_AWAY_WIN_WEIGHT,
    DEFAULT_HOME_LOSS_WEIGHT,
    DEFAULT_HOME_WIN_WEIGHT,
    DEFAULT_MAX_WEEK,
    SCORE_PRECISION,
    WEIGHTS_ENV_PREFIX,
)
from cfb_rankings.core.errors import InvalidInput

if TYPE_CHECKING:
    from typing import Any, Mapping

_WEIGHT_FIELDS = ("home_win", "away_win", "home_loss", "away_loss")


def _coerce_weight(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidInput(f"Weight {name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(
            f"Weight {name} must be a number, got {value!r}"
        ) from None
    if not math.isfinite(number):
        raise InvalidInput(f"Weight {name} must be finite, got {value!r}")
    return number


@dataclass(frozen=True)
class RankingWeights:
    """Per-game score contributions by side and outcome.

    Loss weights are signed: the engine adds them to a team's score directly
    instead of negating them.
    """

    home_win: float = DEFAULT_HOME_WIN_WEIGHT
    away_win: float = DEFAULT_AWAY_WIN_WEIGHT
    home_loss: float = DEFAULT_HOME_LOSS_WEIGHT
    away_loss: float = DEFAULT_AWAY_LOSS_WEIGHT

    def __post_init__(self) -> None:
        for name in _WEIGHT_FIELDS:
            object.__setattr__(
                self, name, _coerce_weight(name, getattr(self, name))
            )

    def to_dict(self) -> dict[str, float]:
        """Convert weights to a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RankingWeights:
        """Create weights from a mapping, falling back to defaults.

        Both snake_case (``home_win``) and camelCase (``homeWin``) keys are
        accepted. Unknown keys are rejected so typos do not silently fall
        back to a default.
        """
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _normalize_key(key)
            if name not in _WEIGHT_FIELDS:
                raise InvalidInput(f"Unknown ranking weight {key!r}")
            values[name] = value
        return cls(**values)

    @classmethod
    def from_env(
        cls,
        prefix: str = WEIGHTS_ENV_PREFIX,
        environ: Mapping[str, str] | None = None,
    ) -> RankingWeights:
        """Load weights from environment variables.

        Reads ``<prefix>HOME_WIN``, ``<prefix>AWAY_WIN``, ``<prefix>HOME_LOSS``
        and ``<prefix>AWAY_LOSS``; unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        values = {}
        for name in _WEIGHT_FIELDS:
            raw = env.get(f"{prefix}{name.upper()}")
            if raw is not None and raw != "":
                values[name] = raw
        return cls(**values)


def _normalize_key(key: str) -> str:
    snake = "".join(f"_{c.lower()}" if c.isupper() else c for c in key)
    return snake.lstrip("_")


@dataclass
class EngineConfig:
    """Common configuration for the ranking engine."""

    weights: RankingWeights = field(default_factory=RankingWeights)

    # Decimal places used when rounding scores before sorting
    score_precision: int = SCORE_PRECISION

    # Last regular season week, used when no games pin the season length
    max_week: int = DEFAULT_MAX_WEEK

    # Verbose output
    verbose: bool = False


def load_weights(path: str | Path) -> RankingWeights:
    """Load ranking weights from a JSON file.

    Args:
        path: JSON file containing an object of weight values.

    Returns:
        Parsed weights.

    Raises:
        InvalidInput: If the file does not hold a JSON object or any value
            is not a finite number.
    """
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise InvalidInput(f"Weights file {path} must contain a JSON object")
    return RankingWeights.from_dict(data)

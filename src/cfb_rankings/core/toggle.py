"""Tri-state result toggling for games without a recorded score.

The cycle is ``none -> win -> loss -> none``. Games with a final score are
locked and reject every transition.
"""

from __future__ import annotations

from dataclasses import replace

from cfb_rankings.core.errors import GameLockedError, InvalidInput
from cfb_rankings.core.models import Game, ToggleResult

_NEXT_RESULT = {
    ToggleResult.NONE: ToggleResult.WIN,
    ToggleResult.WIN: ToggleResult.LOSS,
    ToggleResult.LOSS: ToggleResult.NONE,
}


def next_result(result: ToggleResult | str) -> ToggleResult:
    """Return the state that follows ``result`` in the toggle cycle."""
    try:
        return _NEXT_RESULT[ToggleResult(result)]
    except ValueError:
        raise InvalidInput(f"Unknown game result {result!r}") from None


def set_result(game: Game, result: ToggleResult | str) -> Game:
    """Return a copy of ``game`` with its toggle set to ``result``.

    Raises:
        GameLockedError: If the game already has a recorded score.
        InvalidInput: If ``result`` is not a known toggle state.
    """
    if game.is_final:
        raise GameLockedError(game.key)
    try:
        result = ToggleResult(result)
    except ValueError:
        raise InvalidInput(f"Unknown game result {result!r}") from None
    return replace(game, result=result)


def toggle_game(game: Game) -> Game:
    """Advance ``game`` one step through the toggle cycle."""
    return set_result(game, next_result(game.result))

"""
Persistence for user-applied game toggles.

Toggles are kept in a small JSON document keyed by :attr:`Game.key`, so a
what-if season survives between sessions. The ranking engine never touches
this store; callers apply the stored toggles to their game list and hand the
result to the engine.
"""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from cfb_rankings.core.constants import DEFAULT_TOGGLE_STORE_PATH
from cfb_rankings.core.errors import InvalidInput
from cfb_rankings.core.logging import get_logger
from cfb_rankings.core.models import Game, ToggleResult
from cfb_rankings.core.toggle import set_result, toggle_game

logger = get_logger(__name__)

STORE_VERSION = 1


class ToggleStore:
    """
    JSON-file backed map of game key to toggle result.

    Parameters
    ----------
    path : str or Path
        Location of the JSON file. It is created on first :meth:`save`.
    autosave : bool, default=False
        Write to disk after every change made through :meth:`record`,
        :meth:`cycle` or :meth:`clear`.
    """

    def __init__(
        self,
        path: str | Path = DEFAULT_TOGGLE_STORE_PATH,
        autosave: bool = False,
    ) -> None:
        self.path = Path(path)
        self.autosave = autosave
        self._results: Dict[str, ToggleResult] = {}

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, key: str) -> bool:
        return key in self._results

    def load(self) -> "ToggleStore":
        """Read stored toggles from disk, replacing in-memory state.

        A missing file yields an empty store. An unreadable or malformed file
        is logged and also yields an empty store.
        """
        self._results = {}
        if not self.path.exists():
            logger.debug(f"No toggle store at {self.path}; starting empty")
            return self

        try:
            with open(self.path, "r") as f:
                payload = json.load(f)
        except (ValueError, OSError) as e:
            logger.warning("Failed to load toggle store %s: %s", self.path, e)
            return self

        entries = payload.get("toggles", {}) if isinstance(payload, dict) else {}
        if not isinstance(entries, dict):
            logger.warning("Ignoring malformed toggle store %s", self.path)
            return self

        for key, value in entries.items():
            try:
                result = ToggleResult(value)
            except ValueError:
                logger.warning("Ignoring unknown toggle %r for game %s", value, key)
                continue
            if result is not ToggleResult.NONE:
                self._results[str(key)] = result

        logger.info(f"Loaded {len(self._results)} toggles from {self.path}")
        return self

    def save(self) -> None:
        """Write the current toggles to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "version": STORE_VERSION,
            "toggles": {
                key: result.value for key, result in sorted(self._results.items())
            },
        }
        with open(self.path, "w") as f:
            json.dump(payload, f, indent=2)
        logger.info(f"Saved {len(self._results)} toggles to {self.path}")

    def get(self, game: Game | str) -> ToggleResult:
        """Return the stored toggle for a game (or game key)."""
        key = game if isinstance(game, str) else game.key
        return self._results.get(key, ToggleResult.NONE)

    def record(self, game: Game) -> None:
        """Remember the toggle currently carried by ``game``.

        Raises:
            InvalidInput: If ``game`` has a recorded score; final games never
                carry user toggles.
        """
        if game.is_final:
            raise InvalidInput(f"Game {game.key} is final; nothing to record")
        if game.result is ToggleResult.NONE:
            self._results.pop(game.key, None)
        else:
            self._results[game.key] = game.result
        self._changed()

    def set(self, game: Game, result: ToggleResult | str) -> Game:
        """Set and remember an explicit toggle. Returns the updated game."""
        updated = set_result(self._current(game), result)
        self.record(updated)
        return updated

    def cycle(self, game: Game) -> Game:
        """Advance a game's stored toggle one step. Returns the updated game.

        The step starts from the stored state, so cycling the same game
        repeatedly walks ``none -> win -> loss -> none``.
        """
        updated = toggle_game(self._current(game))
        self.record(updated)
        return updated

    def clear(self, game: Optional[Game | str] = None) -> None:
        """Forget one game's toggle, or every toggle when ``game`` is None."""
        if game is None:
            self._results.clear()
        else:
            key = game if isinstance(game, str) else game.key
            self._results.pop(key, None)
        self._changed()

    def apply(self, games: Iterable[Game]) -> List[Game]:
        """Return new games with stored toggles applied.

        Final games keep their recorded outcome and ignore any stored entry.
        Games without a stored entry are returned unchanged.
        """
        applied = []
        for game in games:
            stored = self._results.get(game.key)
            if stored is None or game.is_final:
                applied.append(game)
            else:
                applied.append(replace(game, result=stored))
        return applied

    def _current(self, game: Game) -> Game:
        if game.is_final:
            return game
        return replace(game, result=self.get(game))

    def _changed(self) -> None:
        if self.autosave:
            self.save()

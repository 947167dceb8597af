"""Cycle, set or clear user toggles for unplayed games.

Example:
    cfb-toggle data/schedule.json --game 401628374
    cfb-toggle data/schedule.json --game 401628374 --set loss
    cfb-toggle data/schedule.json --clear
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from cfb_rankings.core.constants import (
    DEFAULT_SCHEDULE_PATH,
    DEFAULT_TOGGLE_STORE_PATH,
)
from cfb_rankings.core.errors import InvalidInput, RankingsError
from cfb_rankings.core.logging import get_logger, setup_logging
from cfb_rankings.core.models import ToggleResult
from cfb_rankings.core.parser import load_schedule
from cfb_rankings.core.sentry import init_sentry
from cfb_rankings.storage.toggles import ToggleStore

logger = get_logger("cli.toggle")

EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cycle a game through none -> win -> loss, or set it directly."
    )
    parser.add_argument(
        "schedule",
        nargs="?",
        default=DEFAULT_SCHEDULE_PATH,
        help="Schedule JSON with 'teams' and 'games' lists",
    )
    parser.add_argument(
        "--toggles",
        type=str,
        default=DEFAULT_TOGGLE_STORE_PATH,
        help="Toggle store JSON to update",
    )
    parser.add_argument(
        "--game",
        type=str,
        default=None,
        help="Game key: the game id, or '<week>:<home_id>:<away_id>'",
    )
    parser.add_argument(
        "--set",
        dest="result",
        choices=[result.value for result in ToggleResult],
        default=None,
        help="Set this result instead of cycling (home team perspective)",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Forget the toggle for --game, or every toggle without --game",
    )
    parser.add_argument(
        "--log-level", type=str, default=None, help="Logging level"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, format_style="simple")
    init_sentry(context="cfb_toggle")

    try:
        store = ToggleStore(args.toggles).load()
        if args.clear:
            store.clear(args.game)
            store.save()
            return 0
        if args.game is None:
            raise InvalidInput("--game is required unless --clear is given")

        schedule = load_schedule(args.schedule)
        game = next((g for g in schedule.games if g.key == args.game), None)
        if game is None:
            raise InvalidInput(f"No game with key {args.game!r} in {args.schedule}")

        if args.result is None:
            updated = store.cycle(game)
        else:
            updated = store.set(game, args.result)
        store.save()
    except (RankingsError, OSError, ValueError) as e:
        logger.error(f"cfb-toggle failed: {e}")
        return EXIT_INPUT_ERROR

    print(f"{updated.key}: {updated.result.value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

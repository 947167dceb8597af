"""Compute weighted rankings from a schedule file.

Example:
    cfb-rank data/schedule.json --week 6 --division fbs --toggles data/toggles.json
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

import polars as pl

from cfb_rankings.algorithms.ranking_engine import RankingEngine
from cfb_rankings.core.config import EngineConfig, RankingWeights, load_weights
from cfb_rankings.core.constants import DEFAULT_SCHEDULE_PATH, MIN_WEEK
from cfb_rankings.core.errors import InvalidInput, RankingsError
from cfb_rankings.core.logging import get_logger, setup_logging
from cfb_rankings.core.parser import load_schedule
from cfb_rankings.core.results import rankings_to_dataframe
from cfb_rankings.core.sentry import init_sentry
from cfb_rankings.postprocess.rankings import filter_division
from cfb_rankings.storage.toggles import ToggleStore

logger = get_logger("cli.rank")

EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rank teams by weighted wins and losses through a given week."
    )
    parser.add_argument(
        "schedule",
        nargs="?",
        default=DEFAULT_SCHEDULE_PATH,
        help="Schedule JSON with 'teams' and 'games' lists",
    )
    parser.add_argument(
        "--week",
        type=int,
        default=None,
        help="Last week to include (default: latest scheduled week, else the season length)",
    )
    parser.add_argument(
        "--division",
        type=str,
        default=None,
        help="Only rank teams in this division (e.g. fbs, fcs)",
    )
    parser.add_argument(
        "--toggles",
        type=str,
        default=None,
        help="Toggle store JSON whose results are applied before ranking",
    )
    parser.add_argument(
        "--weights",
        type=str,
        default=None,
        help="Weights JSON (default: CFB_WEIGHT_* env vars, then built-ins)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write results to .csv, .json or .parquet instead of printing",
    )
    parser.add_argument(
        "--top", type=int, default=None, help="Only keep the top N teams"
    )
    parser.add_argument(
        "--log-level", type=str, default=None, help="Logging level"
    )
    return parser


def write_output(df: pl.DataFrame, output: str) -> None:
    path = Path(output)
    suffix = path.suffix.lower()
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        df.write_csv(path)
    elif suffix == ".json":
        df.write_json(path)
    elif suffix == ".parquet":
        df.write_parquet(path)
    else:
        raise InvalidInput(f"Unsupported output format {suffix!r}")
    logger.info(f"Wrote {df.height} rankings to {path}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, format_style="simple")
    init_sentry(context="cfb_rank")

    try:
        schedule = load_schedule(args.schedule)
        teams = filter_division(schedule.teams, args.division)
        games = schedule.games
        if args.toggles:
            games = ToggleStore(args.toggles).load().apply(games)

        weights = (
            load_weights(args.weights) if args.weights else RankingWeights.from_env()
        )
        config = EngineConfig(weights=weights)
        engine = RankingEngine(config=config)

        week = args.week if args.week is not None else schedule.max_week or config.max_week
        prior = engine.rank(teams, games, week - 1) if week > MIN_WEEK else None
        rankings = engine.rank(teams, games, week, prior_rankings=prior)

        df = rankings_to_dataframe(rankings)
        if args.top is not None:
            df = df.head(args.top)

        if args.output:
            write_output(df, args.output)
        else:
            with pl.Config(tbl_rows=-1, tbl_hide_dataframe_shape=True):
                print(df)
    except (RankingsError, OSError, ValueError) as e:
        logger.error(f"cfb-rank failed: {e}")
        return EXIT_INPUT_ERROR

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""Sum Trails — draw lines of adjacent cells that add up to the target.

Usage::

    python main.py                          # interactive menu
    python main.py -m daily                 # today's shared puzzle
    python main.py -m practice -d hard      # fresh 8×8 practice puzzle
    python main.py -m daily --date 2024-03-15 --show   # print a puzzle and its solution
    python main.py --stats                  # view player stats
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import default_data_dir  # noqa: E402
from backend.engine.gamegenerator import PuzzleGenerator  # noqa: E402
from backend.models.puzzle import Difficulty, GameMode  # noqa: E402

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise typer.BadParameter(f"Unknown log level: {level}", param_hint="--log-level")
    logging.basicConfig(level=numeric, format=LOG_FORMAT)


def _parse_day(raw: Optional[str]):
    if raw is None:
        return None
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        raise typer.BadParameter(
            f"Expected YYYY-MM-DD, got {raw!r}", param_hint="--date"
        ) from None


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    mode: Optional[GameMode] = typer.Option(
        None, "-m", "--mode",
        help="Puzzle to play. Omit for interactive menu.",
    ),
    difficulty: Difficulty = typer.Option(
        Difficulty.MEDIUM, "-d", "--difficulty",
        help="Practice difficulty.",
    ),
    day: Optional[str] = typer.Option(
        None, "--date",
        help="Daily puzzle date (YYYY-MM-DD). Defaults to the live puzzle.",
    ),
    show: bool = typer.Option(
        False, "--show",
        help="Print the puzzle and its solution instead of playing.",
    ),
    stats: bool = typer.Option(
        False, "--stats",
        help="Show player stats and exit.",
    ),
    data_dir: Optional[Path] = typer.Option(
        None, "--data-dir",
        help="Where saved progress lives. Defaults to $SUMTRAILS_DATA_DIR or ./data.",
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """Sum Trails puzzle game."""
    _configure_logging(log_level)
    puzzle_date = _parse_day(day)

    if stats:
        from backend.models.stats import StatsStore
        from frontend.cli.rich.app import print_stats

        print_stats(StatsStore((data_dir or default_data_dir()) / "stats.json").stats)
        return

    if show:
        from frontend.cli.rich.app import print_puzzle

        if mode is GameMode.PRACTICE:
            state = PuzzleGenerator.generate_practice_puzzle(difficulty)
        else:
            state = PuzzleGenerator.generate_daily_puzzle(puzzle_date)
        print_puzzle(state)
        return

    from frontend.cli.rich.app import run

    run(
        data_dir=data_dir or default_data_dir(),
        mode=mode,
        difficulty=difficulty,
        day=puzzle_date,
    )


if __name__ == "__main__":
    app()

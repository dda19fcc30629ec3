"""
Command-line entry point: run one rescue mission on a map file.

    maze-rescue maps/spiral.txt --strategy bfs --timeout 5

MAP is a path to a map file or the name of a built-in map. The official
log is written to `<map>.csv` and the debug log to `<map>_debug.csv`
(or next to `--out`). Exit codes:

    0  mission completed
    1  map or configuration error
    2  safety violation
    3  search exhausted
    4  mission timeout
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from maze_rescue.environment import Environment
from maze_rescue.errors import (
    EntryNotOnBorderError,
    MapError,
    MissionTimeoutError,
    SafetyViolation,
    SearchExhaustedError,
)
from maze_rescue.grid import Grid
from maze_rescue.maps import BUILTIN_MAPS, load_builtin
from maze_rescue.navigators import BfsNavigator, Deadline, Navigator, WallFollower
from maze_rescue.records import MissionLog

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MAP_ERROR = 1
EXIT_SAFETY = 2
EXIT_EXHAUSTED = 3
EXIT_TIMEOUT = 4

STRATEGIES = ("reactive", "bfs")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def load_map(source: str) -> Tuple[Grid, Path]:
    """Grid plus the path its log files are named after."""
    path = Path(source)
    if not path.exists() and source in BUILTIN_MAPS:
        return load_builtin(source), Path(f"{source}.csv")
    return Grid.from_file(path), path.with_suffix(".csv")


def debug_path(csv_path: Path) -> Path:
    return csv_path.with_name(f"{csv_path.stem}_debug{csv_path.suffix}")


def build_navigator(strategy: str, grid: Grid,
                    deadline: Optional[Deadline] = None) -> Navigator:
    env = Environment(grid)
    if strategy == "bfs":
        return BfsNavigator(env, grid, deadline=deadline)
    if strategy == "reactive":
        return WallFollower(env, deadline=deadline)
    raise ValueError(f"Unknown strategy {strategy!r}; choose from {STRATEGIES}")


def write_logs(log: MissionLog, csv_path: Path) -> Path:
    """Write the official and debug logs; returns the debug log's path."""
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    csv_path.write_text("\n".join(log.csv_lines()) + "\n", encoding="utf-8")
    dbg = debug_path(csv_path)
    dbg.write_text("\n".join(log.debug_lines()) + "\n", encoding="utf-8")
    return dbg


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Drive a rescue agent through a maze and log every command"
    )
    p.add_argument(
        "map",
        help=f"Path to a map file, or one of: {', '.join(sorted(BUILTIN_MAPS))}",
    )
    p.add_argument(
        "--strategy",
        choices=STRATEGIES,
        default="reactive",
        help="Navigator to use (default: reactive)",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Wall-clock budget for the mission in seconds",
    )
    p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Official log path (default: <map>.csv); the debug log goes beside it",
    )
    p.add_argument(
        "--verbose",
        action="store_true",
        help="Log every executed command",
    )
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        grid, csv_path = load_map(args.map)
        deadline = Deadline(args.timeout) if args.timeout is not None else None
        navigator = build_navigator(args.strategy, grid, deadline)
    except (MapError, EntryNotOnBorderError, OSError, ValueError) as exc:
        logger.error("Cannot start mission: %s", exc)
        return EXIT_MAP_ERROR
    if args.out is not None:
        csv_path = args.out

    print(grid.render())
    print()

    log = MissionLog()
    navigator.on_record = log.append
    exit_code = EXIT_OK
    try:
        result = navigator.run()
    except SafetyViolation as exc:
        logger.error("Mission aborted: %s", exc)
        exit_code = EXIT_SAFETY
    except SearchExhaustedError as exc:
        logger.error("Mission failed: %s", exc)
        exit_code = EXIT_EXHAUSTED
    except MissionTimeoutError as exc:
        logger.error("Mission timed out: %s", exc)
        exit_code = EXIT_TIMEOUT
    else:
        print(result.summary())
        print()

    # Partial logs are still written when the mission fails
    dbg = write_logs(log, csv_path)
    print(log.summary())
    print(log.path_listing())
    logger.info("Wrote %d records to %s and %s", len(log), csv_path, dbg)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())

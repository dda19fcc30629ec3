"""
Benchmark suite for the rescue navigators.

Runs the reactive WallFollower and the BfsNavigator on the built-in maps
and on a batch of generated mazes, measuring:
- Whether the mission completed
- Commands issued (advances and right turns)
- Wall-clock time

The BFS navigator drives a shortest route, so its advance count is the
floor the reactive navigator is measured against.
"""

import time
from dataclasses import dataclass
from typing import List

import numpy as np

from maze_rescue import Command, Environment, Grid, RescueError, generate_maze
from maze_rescue.maps import BUILTIN_MAPS
from maze_rescue.navigators import BfsNavigator, WallFollower


@dataclass
class BenchmarkMap:
    """A benchmark map: one maze both navigators are run on."""
    name: str
    text: str
    difficulty: str = "easy"  # easy, medium, hard


# ---------------------------------------------------------------------------
# Benchmark maps, ordered by size
# ---------------------------------------------------------------------------

BENCHMARKS: List[BenchmarkMap] = [
    BenchmarkMap("simple_room", BUILTIN_MAPS["simple_room"], "easy"),
    BenchmarkMap("left_entry", BUILTIN_MAPS["left_entry"], "easy"),
    BenchmarkMap("branches", BUILTIN_MAPS["branches"], "easy"),
    BenchmarkMap("double_corridor", BUILTIN_MAPS["double_corridor"], "medium"),
    BenchmarkMap("spiral", BUILTIN_MAPS["spiral"], "medium"),
] + [
    BenchmarkMap(f"perfect_{seed}", generate_maze(rows=21, cols=31, seed=seed), "hard")
    for seed in range(3)
] + [
    BenchmarkMap(f"loops_{seed}",
                 generate_maze(rows=21, cols=31, seed=seed, extra_openings=40), "hard")
    for seed in range(3)
]


def run_benchmark(problem: BenchmarkMap, strategy: str) -> dict:
    """Run one navigator on one map."""
    grid = Grid.load(problem.text)
    env = Environment(grid)
    if strategy == "bfs":
        navigator = BfsNavigator(env, grid)
    else:
        navigator = WallFollower(env)

    t0 = time.time()
    try:
        result = navigator.run()
        completed = result.completed
    except RescueError:
        completed = False
    elapsed = time.time() - t0

    records = navigator.records
    return {
        "name": problem.name,
        "difficulty": problem.difficulty,
        "strategy": strategy,
        "completed": completed,
        "commands": len(records),
        "advances": sum(1 for r in records if r.command is Command.ADVANCE),
        "turns": sum(1 for r in records if r.command is Command.TURN_RIGHT),
        "time_sec": elapsed,
    }


def run_all_benchmarks(verbose: bool = True):
    """Run every map with both navigators and print a summary table."""
    print("=" * 90)
    print("  Maze Rescue — Benchmark Suite")
    print("=" * 90)
    print()

    results = []
    for problem in BENCHMARKS:
        pair = [run_benchmark(problem, s) for s in ("bfs", "reactive")]
        results.extend(pair)
        if verbose:
            bfs, reactive = pair
            ratio = reactive["advances"] / max(bfs["advances"], 1)
            print(f"  [{problem.difficulty:6s}] {problem.name:16s}")
            for r in pair:
                status = "✓" if r["completed"] else "✗"
                print(f"           {status} {r['strategy']:8s} "
                      f"commands={r['commands']:5d}  "
                      f"advances={r['advances']:5d}  "
                      f"turns={r['turns']:5d}  "
                      f"time={r['time_sec'] * 1000:.1f}ms")
            print(f"           reactive / bfs advances: {ratio:.2f}")
            print()

    # Summary
    print("=" * 90)
    for strategy in ("bfs", "reactive"):
        rows = [r for r in results if r["strategy"] == strategy]
        solved = sum(1 for r in rows if r["completed"])
        mean_cmds = float(np.mean([r["commands"] for r in rows]))
        print(f"  {strategy:8s}: completed {solved}/{len(rows)}, "
              f"mean commands {mean_cmds:.1f}")
    print("=" * 90)

    return results


if __name__ == "__main__":
    run_all_benchmarks()

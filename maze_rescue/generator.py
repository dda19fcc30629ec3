"""
Seeded generator for solvable rescue maps.

Carves a perfect maze (exactly one route between any two open cells) with
an iterative recursive-backtracker over the odd-indexed cells, opens the
entry on the top border, and puts the target on the open cell farthest
from the entry. `extra_openings` knocks out additional interior walls,
which adds loops so that more than one route exists.

Every map produced here loads as a valid Grid and has its target
reachable from the entry.
"""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np


@dataclass
class GeneratorConfig:
    """Configuration for a generated map."""
    rows: int = 11                  # Odd values keep a solid outer wall
    cols: int = 11
    seed: Optional[int] = None
    extra_openings: int = 0         # Interior walls removed after carving
    farthest_target: bool = True    # Else a random open cell


def _carve(cells: np.ndarray, start: Tuple[int, int], rng: random.Random) -> None:
    rows, cols = cells.shape
    cells[start] = "."
    stack = [start]
    while stack:
        r, c = stack[-1]
        options = [
            (r + dr, c + dc, r + dr // 2, c + dc // 2)
            for dr, dc in ((-2, 0), (2, 0), (0, -2), (0, 2))
            if 0 < r + dr < rows - 1 and 0 < c + dc < cols - 1
            and cells[r + dr, c + dc] == "X"
        ]
        if not options:
            stack.pop()
            continue
        nr, nc, wr, wc = rng.choice(options)
        cells[wr, wc] = "."
        cells[nr, nc] = "."
        stack.append((nr, nc))


def _distances(cells: np.ndarray, start: Tuple[int, int]) -> Dict[Tuple[int, int], int]:
    rows, cols = cells.shape
    dist = {start: 0}
    queue = deque([start])
    while queue:
        r, c = queue.popleft()
        for dr, dc in ((-1, 0), (1, 0), (0, 1), (0, -1)):
            nr, nc = r + dr, c + dc
            if (0 < nr < rows - 1 and 0 < nc < cols - 1
                    and cells[nr, nc] == "." and (nr, nc) not in dist):
                dist[(nr, nc)] = dist[(r, c)] + 1
                queue.append((nr, nc))
    return dist


def generate_maze(config: Optional[GeneratorConfig] = None, **overrides) -> str:
    """
    Build a solvable map and return it as map text.

    Keyword arguments override fields of `config`, e.g.
    `generate_maze(rows=15, cols=21, seed=7)`.
    """
    config = config or GeneratorConfig()
    if overrides:
        config = GeneratorConfig(**{**config.__dict__, **overrides})
    if config.rows < 5 or config.cols < 5:
        raise ValueError("Generated maps need at least 5 rows and 5 columns")

    # Round down to odd sizes so carved cells never touch the border
    rows = config.rows if config.rows % 2 else config.rows - 1
    cols = config.cols if config.cols % 2 else config.cols - 1
    rng = random.Random(config.seed)

    cells = np.full((rows, cols), "X", dtype="<U1")
    entry_col = rng.randrange(1, cols - 1, 2)
    start = (1, entry_col)
    _carve(cells, start, rng)

    if config.extra_openings:
        walls = [
            (r, c)
            for r in range(1, rows - 1)
            for c in range(1, cols - 1)
            if cells[r, c] == "X" and (r % 2) != (c % 2)
        ]
        rng.shuffle(walls)
        for r, c in walls[:config.extra_openings]:
            cells[r, c] = "."

    cells[0, entry_col] = "E"

    dist = _distances(cells, start)
    candidates: List[Tuple[int, int]] = [p for p in dist if p != start]
    if config.farthest_target:
        target = max(candidates, key=lambda p: dist[p])
    else:
        target = rng.choice(candidates)
    cells[target] = "@"

    return "\n".join("".join(row) for row in cells)

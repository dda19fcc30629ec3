"""
Graph-search navigator: plan the whole route up front, then drive it.

This strategy is handed the Grid at construction and runs a breadth-first
search from the entry to the target over every non-wall cell, treating the
four orthogonal neighbours as edges. BFS gives a shortest route in cells
travelled; the agent then:

    1. drives the route up to the cell before the target
    2. turns to face the target and picks it up
    3. drives the route backwards to the entry
    4. turns to face out of the maze and ejects

Compared with the reactive WallFollower this trades a global map for an
optimal, guess-free route. The WallFollower only ever sees its three
sensors. The two contracts are kept separate on purpose: this class takes
the Grid as an explicit argument and never reaches into the Environment.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Dict, List, Optional, Tuple

from maze_rescue.environment import Command, CommandRecord, Environment, initial_heading
from maze_rescue.errors import SearchExhaustedError
from maze_rescue.geometry import Heading, Position, forward, heading_between
from maze_rescue.grid import Grid
from maze_rescue.navigators.base import Deadline, Navigator

logger = logging.getLogger(__name__)

# Fixed so that ties between equally short routes always break the same way
SEARCH_ORDER = (Heading.NORTH, Heading.SOUTH, Heading.EAST, Heading.WEST)


def shortest_path(grid: Grid,
                  start: Optional[Tuple[int, int]] = None,
                  goal: Optional[Tuple[int, int]] = None) -> List[Position]:
    """
    Shortest sequence of cells from `start` to `goal`, both included.

    Defaults to entry -> target. Returns an empty list if the goal cannot
    be reached.
    """
    start = Position(*(start if start is not None else grid.entry))
    goal = Position(*(goal if goal is not None else grid.target))

    parents: Dict[Position, Optional[Position]] = {start: None}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current == goal:
            break
        for heading in SEARCH_ORDER:
            neighbour = forward(heading, current)
            if neighbour in parents or not grid.is_traversable(neighbour):
                continue
            parents[neighbour] = current
            queue.append(neighbour)

    if goal not in parents:
        return []

    path = []
    node: Optional[Position] = goal
    while node is not None:
        path.append(node)
        node = parents[node]
    path.reverse()
    return path


class BfsNavigator(Navigator):
    """
    Global-knowledge navigator driving a precomputed shortest route.

    Parameters
    ----------
    env : Environment
        The maze to drive through.
    grid : Grid
        The map to plan on. Normally the same Grid the Environment wraps.
    """

    name = "bfs"

    def __init__(self, env: Environment, grid: Grid,
                 deadline: Optional[Deadline] = None,
                 on_record: Optional[Callable[[CommandRecord], None]] = None):
        super().__init__(env, deadline=deadline, on_record=on_record)
        self.grid = grid
        self.path: List[Position] = []

    def plan(self) -> List[Position]:
        """Compute (and remember) the entry -> target route."""
        self.path = shortest_path(self.grid)
        return self.path

    def _run_mission(self) -> None:
        record = self._execute(Command.INITIALIZE)

        path = self.plan()
        if not path:
            raise SearchExhaustedError(
                f"Target at {self.grid.target} is not reachable from the entry"
            )
        logger.info("Planned route of %d moves to the target", len(path) - 1)

        approach = path[:-1]
        record = self._drive(record, approach)
        record = self._face(record, heading_between(record.position, path[-1]))
        record = self._execute(Command.PICK_UP)
        logger.info("Target picked up at %s", path[-1])

        record = self._drive(record, list(reversed(approach)))
        record = self._face(record, initial_heading(self.grid).opposite())
        self._execute(Command.EJECT)
        logger.info("Target ejected at the entry after %d commands", len(self.records))

    def _drive(self, record: CommandRecord, route: List[Position]) -> CommandRecord:
        """Follow `route`, whose first cell is the current position."""
        for nxt in route[1:]:
            record = self._face(record, heading_between(record.position, nxt))
            record = self._execute(Command.ADVANCE)
        return record

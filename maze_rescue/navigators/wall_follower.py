"""
Reactive navigator: finds the target using nothing but its own sensors.

The WallFollower never looks at the Grid. Everything it knows comes back
from `Environment.execute`: the three sensor readings and the position
and heading stamped on each record. From those it keeps

- a visited set of cells it has stood on,
- a memory of every cell it has sensed (wall, free or target),
- the path stack: the cells from the entry to where it stands now,
  pushed on each advance into a new cell and popped when backing up.

Each step it re-evaluates, in priority order:

    1. target ahead                         -> PICK_UP
    2. free and unvisited ahead             -> ADVANCE
    3. free and unvisited on the left       -> TURN_RIGHT
    4. free and unvisited on the right      -> TURN_RIGHT
    5. free ahead, even if visited          -> ADVANCE
    6. free on the left, even if visited    -> TURN_RIGHT
    7. free on the right, even if visited   -> TURN_RIGHT
    8. otherwise                            -> TURN_RIGHT

Between tiers 4 and 5 the navigator consults its memory: a remembered
target or unvisited cell next to it (including the one behind, which no
sensor covers) is turned towards, and failing that it backs up one cell
along the path stack. This makes the search a depth-first sweep of the
reachable maze, so it always finds a reachable target. Tiers 5-8 are
only reached once nothing is left to explore, and the step ceiling then
ends the mission.

Standing on the entry, an open reading may be the outside world. A side
opening is trusted once it is provably inside the grid: always for an
entry on the left or right border, and for a top or bottom entry when the
column is not -1 and some cell at least that far east has been seen. The
way straight out is never trusted.

With the target on board it walks the path stack back to the entry,
turns to face out of the maze and ejects. If the stack cannot be
followed it falls back to a greedy walk towards the entry over cells it
has seen open, with dead-end branches stripped first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set, Tuple

from maze_rescue.environment import Command, CommandRecord, Environment, SensorReading
from maze_rescue.errors import SearchExhaustedError
from maze_rescue.geometry import (
    Heading,
    Position,
    forward,
    heading_between,
    manhattan,
    turn_right,
    turns_needed,
)
from maze_rescue.navigators.base import Deadline, Navigator

logger = logging.getLogger(__name__)

FREE = SensorReading.FREE
WALL = SensorReading.WALL
TARGET = SensorReading.TARGET


@dataclass
class WallFollowerConfig:
    """Configuration for the reactive navigator."""
    max_search_steps: int = 10_000    # Commands allowed before giving up the search
    max_return_steps: int = 2_000     # Commands allowed for the greedy return
    retrace_path: bool = True         # Walk the recorded path home (else greedy only)


def choose_command(left: SensorReading, right: SensorReading, front: SensorReading,
                   front_unvisited: bool = False,
                   left_unvisited: bool = False,
                   right_unvisited: bool = False) -> Command:
    """
    The sensor-only decision rule, priorities 1 to 8.

    Turning is clockwise only, so both "go left" and "go right" are a
    TURN_RIGHT; the rule is re-applied after every command.
    """
    if front is TARGET:
        return Command.PICK_UP
    if front is FREE and front_unvisited:
        return Command.ADVANCE
    if left is FREE and left_unvisited:
        return Command.TURN_RIGHT
    if right is FREE and right_unvisited:
        return Command.TURN_RIGHT
    if front is FREE:
        return Command.ADVANCE
    if left is FREE:
        return Command.TURN_RIGHT
    if right is FREE:
        return Command.TURN_RIGHT
    return Command.TURN_RIGHT


def sensor_headings(heading: Heading) -> Tuple[Heading, Heading, Heading]:
    """Directions covered by the (left, right, front) sensors."""
    return (Heading((heading.value + 3) % 4), turn_right(heading), heading)


class WallFollower(Navigator):
    """
    Local-knowledge navigator.

    Parameters
    ----------
    env : Environment
        The maze to drive through. Only `execute` is ever called on it.
    config : Optional[WallFollowerConfig]
        Step ceilings and return strategy.
    """

    name = "reactive"

    def __init__(self, env: Environment,
                 config: Optional[WallFollowerConfig] = None,
                 deadline: Optional[Deadline] = None,
                 on_record: Optional[Callable[[CommandRecord], None]] = None):
        super().__init__(env, deadline=deadline, on_record=on_record)
        self.config = config or WallFollowerConfig()
        self.entry: Optional[Position] = None
        self.inward: Optional[Heading] = None
        self.visited: Set[Position] = set()
        self.path: List[Position] = []
        self.known: Dict[Position, SensorReading] = {}
        self._max_col = -1
        self._return_visits: Dict[Position, int] = {}
        self._route: Set[Position] = set()

    # -- mission ----------------------------------------------------------

    def _run_mission(self) -> None:
        record = self._execute(Command.INITIALIZE)
        logger.info("Searching for the target from %s facing %s",
                    self.entry, self.inward.name)

        record = self._search(record)
        logger.info("Target picked up after %d commands; returning along %d cells",
                    len(self.records), len(self.path))

        if self.config.retrace_path:
            record = self._retrace(record)
        if record.position != self.entry:
            logger.warning("Recorded path unusable at %s, falling back to greedy return",
                           record.position)
            record = self._greedy_return(record)

        record = self._face(record, self.inward.opposite())
        self._execute(Command.EJECT)
        logger.info("Target ejected at the entry after %d commands", len(self.records))

    def _execute(self, command: Command) -> CommandRecord:
        record = super()._execute(command)
        if self.entry is None:
            # The first record of a mission is taken at the entry
            self.entry = record.position
            self.inward = record.heading
            self.visited.add(record.position)
            self.path = [record.position]
        self._absorb(record)
        if command is Command.ADVANCE:
            self._track_advance(record.position)
        return record

    # -- knowledge --------------------------------------------------------

    def _absorb(self, record: CommandRecord) -> None:
        """Store what this record's sensors say about the neighbouring cells."""
        pos = record.position
        self.known[pos] = FREE
        self._max_col = max(self._max_col, pos.col)
        for heading, reading in zip(sensor_headings(record.heading), record.readings):
            if not self._trusted(pos, heading, reading):
                continue
            cell = forward(heading, pos)
            self.known[cell] = reading
            if reading is not WALL:
                # Trusted open readings always lie inside the grid
                self._max_col = max(self._max_col, cell.col)

    def _trusted(self, pos: Position, heading: Heading, reading: SensorReading) -> bool:
        """Whether an open reading is known to be a cell of the maze."""
        if pos != self.entry or reading is not FREE or heading == self.inward:
            return True
        if heading == self.inward.opposite():
            return False
        if self.inward in (Heading.EAST, Heading.WEST):
            # Side entries are never in the top or bottom row
            return True
        col = forward(heading, pos).col
        return 0 <= col <= self._max_col

    def _senses(self, record: CommandRecord) -> Tuple[SensorReading, SensorReading, SensorReading]:
        """(left, right, front) with untrusted openings reported as walls."""
        pos = record.position
        return tuple(
            reading if self._trusted(pos, heading, reading) else WALL
            for heading, reading in zip(sensor_headings(record.heading), record.readings)
        )

    def _track_advance(self, pos: Position) -> None:
        self.visited.add(pos)
        if len(self.path) >= 2 and pos == self.path[-2]:
            self.path.pop()
        elif pos in self.path:
            # Came back onto the path some other way: erase the loop
            del self.path[self.path.index(pos) + 1:]
        else:
            self.path.append(pos)

    # -- search -----------------------------------------------------------

    def _search(self, record: CommandRecord) -> CommandRecord:
        for _ in range(self.config.max_search_steps):
            command = self.decide(record)
            record = self._execute(command)
            if command is Command.PICK_UP:
                return record
        raise SearchExhaustedError(
            f"Target not found within {self.config.max_search_steps} search steps"
        )

    def decide(self, record: CommandRecord) -> Command:
        """Next search command given the latest record."""
        pos, heading = record.position, record.heading
        left_s, right_s, front_s = self._senses(record)
        left_h, right_h, _ = sensor_headings(heading)

        if front_s is TARGET:
            return Command.PICK_UP

        # A target remembered beside or behind us: turn towards it
        if any(self.known.get(forward(h, pos)) is TARGET for h in Heading.all()):
            return Command.TURN_RIGHT

        front_new = forward(heading, pos) not in self.visited
        left_new = forward(left_h, pos) not in self.visited
        right_new = forward(right_h, pos) not in self.visited
        exploring = ((front_s is FREE and front_new)
                     or (left_s is FREE and left_new)
                     or (right_s is FREE and right_new))
        if exploring:
            return choose_command(left_s, right_s, front_s,
                                  front_unvisited=front_new,
                                  left_unvisited=left_new,
                                  right_unvisited=right_new)

        # Unvisited opening only memory knows about (the cell behind)
        for h in Heading.all():
            cell = forward(h, pos)
            if self.known.get(cell) is FREE and cell not in self.visited:
                return Command.TURN_RIGHT

        # Nothing new here: back up one cell along the path
        if len(self.path) >= 2 and self.path[-1] == pos:
            back = heading_between(pos, self.path[-2])
            if heading != back:
                return Command.TURN_RIGHT
            if front_s is FREE:
                return Command.ADVANCE

        return choose_command(left_s, right_s, front_s)

    # -- return -----------------------------------------------------------

    def _retrace(self, record: CommandRecord) -> CommandRecord:
        """Walk the path stack back to the entry. Stops early if it cannot."""
        if not self.path or self.path[-1] != record.position:
            return record
        for nxt in reversed(self.path[:-1]):
            if manhattan(record.position, nxt) != 1:
                return record
            record = self._face(record, heading_between(record.position, nxt))
            if record.front is not FREE:
                return record
            record = self._execute(Command.ADVANCE)
        return record

    def _greedy_return(self, record: CommandRecord) -> CommandRecord:
        """
        Head for the entry using remembered cells only.

        Walks the cells left once dead-end branches are stripped from the
        remembered map, so every cell it enters has a second known exit.
        Prefers neighbours entered least often on the way back, then the
        one closest to the entry, then the fewest turns away.
        """
        self._route = self._route_cells(record.position)
        self._return_visits[record.position] = 1
        for _ in range(self.config.max_return_steps):
            if record.position == self.entry:
                return record
            command = self._greedy_step(record)
            record = self._execute(command)
            if command is Command.ADVANCE:
                self._return_visits[record.position] = (
                    self._return_visits.get(record.position, 0) + 1
                )
        if record.position == self.entry:
            return record
        raise SearchExhaustedError(
            f"Entry not reached within {self.config.max_return_steps} return steps"
        )

    def _greedy_step(self, record: CommandRecord) -> Command:
        pos, heading = record.position, record.heading
        options = []
        for h in Heading.all():
            cell = forward(h, pos)
            if cell not in self._route:
                continue
            if cell != self.entry and self._open_exits(cell) < 2:
                continue
            options.append((
                self._return_visits.get(cell, 0),
                manhattan(cell, self.entry),
                turns_needed(heading, h),
                h,
            ))
        if not options:
            return Command.TURN_RIGHT
        best = min(options)[3]
        if best == heading and record.front is FREE:
            return Command.ADVANCE
        return Command.TURN_RIGHT

    def _open_exits(self, cell: Position) -> int:
        """Neighbours of `cell` sensed open. Unknown cells do not count."""
        return sum(1 for h in Heading.all() if self.known.get(forward(h, cell)) is FREE)

    def _route_cells(self, start: Position) -> Set[Position]:
        """Known open cells with dead-end branches repeatedly stripped off."""
        cells = {cell for cell, reading in self.known.items() if reading is FREE}
        keep = {self.entry, start}
        stripped = True
        while stripped:
            stripped = False
            for cell in list(cells):
                if cell in keep:
                    continue
                exits = sum(1 for h in Heading.all() if forward(h, cell) in cells)
                if exits <= 1:
                    cells.discard(cell)
                    stripped = True
        return cells

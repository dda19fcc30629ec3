"""
The simulated maze the rescue agent drives through.

The Environment owns the agent's state (position, heading, whether it is
carrying the target, whether the mission is complete) and is the only
thing allowed to change it. Callers drive it one command at a time:

    INITIALIZE   power on; read the sensors, nothing moves
    ADVANCE      move one cell forward
    TURN_RIGHT   rotate 90 degrees clockwise
    PICK_UP      collect the target from the cell directly ahead
    EJECT        release the target at the entry

Every successful command returns a CommandRecord: a snapshot of the three
sensors (left, right, front) taken after the command took effect, plus
the cargo state, position and heading. The Environment does not keep a
history of records; that belongs to whoever is driving it.

Commands that would break a safety invariant raise a SafetyViolation
instead of executing:

- driving into a wall or off the map (CollisionError)
- driving over the target before it is collected (RunoverError)
- picking up with no target ahead (InvalidPickupError)
- ejecting empty-handed or away from the entry (InvalidEjectError)
- ending any command but PICK_UP while carrying, with walls on the
  left, right and front (TrappedError)

The trapped check runs once, after the transition, rather than inside
each command branch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from maze_rescue.errors import (
    CollisionError,
    EntryNotOnBorderError,
    InvalidEjectError,
    InvalidPickupError,
    RunoverError,
    TrappedError,
)
from maze_rescue.geometry import Heading, Position, forward, left, right, turn_right
from maze_rescue.grid import CellType, Grid

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Commands, sensor readings and records
# ---------------------------------------------------------------------------

class Command(Enum):
    """The agent's full command vocabulary. None of them take parameters."""
    INITIALIZE = "INITIALIZE"
    ADVANCE = "ADVANCE"
    TURN_RIGHT = "TURN_RIGHT"
    PICK_UP = "PICK_UP"
    EJECT = "EJECT"


class SensorReading(Enum):
    """What a sensor reports about one neighbouring cell."""
    WALL = "WALL"
    FREE = "FREE"
    TARGET = "TARGET"


class CargoState(Enum):
    NO_LOAD = "no load"
    CARRYING = "carrying"


@dataclass(frozen=True)
class CommandRecord:
    """Snapshot taken after one executed command."""
    sequence: int                 # 1-based, increases with every command
    command: Command
    left: SensorReading
    right: SensorReading
    front: SensorReading
    cargo: CargoState
    position: Position
    heading: Heading

    @property
    def carrying(self) -> bool:
        return self.cargo is CargoState.CARRYING

    @property
    def readings(self) -> Tuple[SensorReading, SensorReading, SensorReading]:
        """(left, right, front), the order the log format uses."""
        return (self.left, self.right, self.front)

    def __repr__(self) -> str:
        return (f"Record(#{self.sequence} {self.command.value} "
                f"pos={self.position} {self.heading.name} "
                f"L={self.left.value} R={self.right.value} F={self.front.value} "
                f"{self.cargo.value})")


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

def initial_heading(grid: Grid) -> Heading:
    """
    Heading that points from the entry into the maze.

    Borders are checked top, bottom, left, right; a corner entry takes
    the first that matches.
    """
    entry = grid.entry
    if entry.row == 0:
        return Heading.SOUTH
    if entry.row == grid.rows - 1:
        return Heading.NORTH
    if entry.col == 0:
        return Heading.EAST
    if entry.col == grid.cols - 1:
        return Heading.WEST
    raise EntryNotOnBorderError(
        f"Entry {entry} is not on the border of a {grid.rows}x{grid.cols} grid"
    )


class Environment:
    """
    A maze plus the agent moving through it.

    Parameters
    ----------
    grid : Grid
        The map. The entry must lie on its outer border.
    """

    def __init__(self, grid: Grid):
        self._grid = grid
        self._heading = initial_heading(grid)
        self._position = grid.entry
        self._carrying = False
        self._target_collected = False
        self._mission_complete = False
        self._sequence = 0

    # -- read-only state --------------------------------------------------

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def position(self) -> Position:
        return self._position

    @property
    def heading(self) -> Heading:
        return self._heading

    @property
    def carrying(self) -> bool:
        return self._carrying

    @property
    def target_collected(self) -> bool:
        return self._target_collected

    @property
    def mission_complete(self) -> bool:
        return self._mission_complete

    @property
    def commands_executed(self) -> int:
        return self._sequence

    # -- sensors ----------------------------------------------------------

    def classify(self, pos: Tuple[int, int]) -> SensorReading:
        """Sensor reading for a cell, relative to the agent's current position."""
        if not self._grid.in_bounds(pos):
            # The only opening to the outside world is at the entry
            if self._position == self._grid.entry:
                return SensorReading.FREE
            return SensorReading.WALL
        cell = self._grid.cell(pos)
        if cell == CellType.WALL:
            return SensorReading.WALL
        if cell == CellType.TARGET and not self._target_collected:
            return SensorReading.TARGET
        return SensorReading.FREE

    def read_sensors(self) -> Tuple[SensorReading, SensorReading, SensorReading]:
        """Current (left, right, front) readings."""
        h, p = self._heading, self._position
        return (
            self.classify(left(h, p)),
            self.classify(right(h, p)),
            self.classify(forward(h, p)),
        )

    # -- commands ---------------------------------------------------------

    def execute(self, command: Command) -> CommandRecord:
        """
        Run one command and return the resulting sensor snapshot.

        Raises a SafetyViolation subclass if the command is not allowed in
        the current state. A rejected command changes nothing, except that
        TrappedError is only detectable after the move that caused it.
        """
        if command is Command.INITIALIZE:
            pass
        elif command is Command.ADVANCE:
            self._advance()
        elif command is Command.TURN_RIGHT:
            self._heading = turn_right(self._heading)
        elif command is Command.PICK_UP:
            self._pick_up()
        elif command is Command.EJECT:
            self._eject()
        else:
            raise ValueError(f"Unknown command: {command!r}")

        readings = self.read_sensors()
        if command is not Command.PICK_UP:
            self._check_not_trapped(readings)

        self._sequence += 1
        record = CommandRecord(
            sequence=self._sequence,
            command=command,
            left=readings[0],
            right=readings[1],
            front=readings[2],
            cargo=CargoState.CARRYING if self._carrying else CargoState.NO_LOAD,
            position=self._position,
            heading=self._heading,
        )
        logger.debug("%r", record)
        return record

    def _advance(self) -> None:
        ahead = forward(self._heading, self._position)
        if not self._grid.in_bounds(ahead):
            if self._position == self._grid.entry:
                raise CollisionError("Collision alarm: tried to drive out through the entry",
                                     self._position, self._heading)
            raise CollisionError("Collision alarm: tried to drive off the map",
                                 self._position, self._heading)
        if self._grid.is_wall(ahead):
            raise CollisionError("Collision alarm: tried to drive into a wall",
                                 self._position, self._heading)
        if self._grid.cell(ahead) == CellType.TARGET and not self._target_collected:
            raise RunoverError("Runover alarm: tried to drive over the target",
                               self._position, self._heading)
        self._position = ahead

    def _pick_up(self) -> None:
        ahead = forward(self._heading, self._position)
        if self.classify(ahead) is not SensorReading.TARGET:
            raise InvalidPickupError("Invalid pickup alarm: no target directly ahead",
                                     self._position, self._heading)
        self._carrying = True
        self._target_collected = True

    def _eject(self) -> None:
        if not self._carrying:
            raise InvalidEjectError("Invalid eject alarm: not carrying the target",
                                    self._position, self._heading)
        if self._position != self._grid.entry:
            raise InvalidEjectError("Invalid eject alarm: not at the entry",
                                    self._position, self._heading)
        self._carrying = False
        self._mission_complete = True

    def _check_not_trapped(self, readings: Tuple[SensorReading, ...]) -> None:
        if self._carrying and all(r is SensorReading.WALL for r in readings):
            raise TrappedError(
                "Dead-end alarm: carrying the target with walls left, right and ahead",
                self._position, self._heading,
            )

    def render(self) -> str:
        """ASCII view of the map with the agent's position and heading."""
        return self._grid.render(agent=self._position, heading=self._heading)

    def __repr__(self) -> str:
        return (f"Environment(pos={self._position}, heading={self._heading.name}, "
                f"carrying={self._carrying}, complete={self._mission_complete})")

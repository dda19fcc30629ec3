"""
Maze Rescue: an autonomous agent that finds a target in a maze and
carries it back out.

The Environment simulates the maze and enforces the agent's safety
invariants; navigators decide which command to send next, either from
local sensor readings alone (WallFollower) or from a precomputed shortest
route (BfsNavigator). Every executed command yields a CommandRecord that
MissionLog turns into the official and debug line formats.
"""

from maze_rescue.geometry import Heading, Position
from maze_rescue.grid import CellType, Grid
from maze_rescue.errors import (
    CollisionError,
    EntryNotOnBorderError,
    InvalidEjectError,
    InvalidPickupError,
    MapError,
    MapErrorKind,
    MissionTimeoutError,
    RescueError,
    RunoverError,
    SafetyViolation,
    SearchExhaustedError,
    TrappedError,
)
from maze_rescue.environment import (
    CargoState,
    Command,
    CommandRecord,
    Environment,
    SensorReading,
)
from maze_rescue.records import MissionLog
from maze_rescue.navigators import (
    BfsNavigator,
    Deadline,
    MissionResult,
    WallFollower,
    WallFollowerConfig,
)
from maze_rescue.generator import GeneratorConfig, generate_maze

__version__ = "0.1.0"
__all__ = [
    "Heading",
    "Position",
    "CellType",
    "Grid",
    "RescueError",
    "MapError",
    "MapErrorKind",
    "EntryNotOnBorderError",
    "SafetyViolation",
    "CollisionError",
    "RunoverError",
    "TrappedError",
    "InvalidPickupError",
    "InvalidEjectError",
    "SearchExhaustedError",
    "MissionTimeoutError",
    "Command",
    "SensorReading",
    "CargoState",
    "CommandRecord",
    "Environment",
    "MissionLog",
    "Deadline",
    "MissionResult",
    "WallFollower",
    "WallFollowerConfig",
    "BfsNavigator",
    "GeneratorConfig",
    "generate_maze",
]

"""
Failure taxonomy for rescue missions.

Every error here is terminal for the mission that raised it. Nothing in
the package retries; the caller decides how to report the failure.

    RescueError
    ├── MapError                  map text could not be turned into a Grid
    ├── EntryNotOnBorderError     Environment construction rejected the map
    ├── SafetyViolation           a command broke a physical invariant
    │   ├── CollisionError
    │   ├── RunoverError
    │   ├── TrappedError
    │   ├── InvalidPickupError
    │   └── InvalidEjectError
    ├── SearchExhaustedError      a navigator hit its step ceiling
    └── MissionTimeoutError       the caller's wall-clock budget ran out
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple


class RescueError(Exception):
    """Base class for every mission failure."""


class MapErrorKind(Enum):
    EMPTY_INPUT = "empty input"
    RAGGED_ROWS = "ragged rows"
    MISSING_ENTRY = "missing entry"
    MULTIPLE_ENTRIES = "multiple entries"
    MISSING_TARGET = "missing target"
    MULTIPLE_TARGETS = "multiple targets"


class MapError(RescueError):
    """The map source is not a valid maze."""

    def __init__(self, kind: MapErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class EntryNotOnBorderError(RescueError):
    """The entry cell does not touch the outer border of the grid."""


class SafetyViolation(RescueError):
    """A command would have broken one of the agent's safety invariants."""

    def __init__(self, message: str,
                 position: Optional[Tuple[int, int]] = None,
                 heading=None):
        if position is not None:
            where = f" at {tuple(position)}"
            if heading is not None:
                where += f" facing {heading.name}"
            message = message + where
        super().__init__(message)
        self.position = position
        self.heading = heading


class CollisionError(SafetyViolation):
    """Advance into a wall or off the map."""


class RunoverError(SafetyViolation):
    """Advance onto the target before it was picked up."""


class TrappedError(SafetyViolation):
    """Carrying the target with walls on the left, right and front."""


class InvalidPickupError(SafetyViolation):
    """Pick up with no uncollected target directly ahead."""


class InvalidEjectError(SafetyViolation):
    """Eject while empty-handed or away from the entry."""


class SearchExhaustedError(RescueError):
    """The navigator used up its step budget without finishing the mission."""


class MissionTimeoutError(RescueError, TimeoutError):
    """The mission ran past the caller's deadline."""

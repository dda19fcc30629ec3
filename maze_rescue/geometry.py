"""
Orientation and grid geometry for the rescue agent.

Positions are (row, col) pairs with row 0 at the top of the map, so
NORTH decreases the row and EAST increases the column. Headings are
ordered clockwise, which makes "turn right" a single modular increment.

The agent can only rotate clockwise. Anything that needs to face left
does it with three right turns.
"""

from __future__ import annotations

from enum import IntEnum
from typing import List, NamedTuple, Tuple


class Position(NamedTuple):
    """A grid cell. Compares and hashes like a plain (row, col) tuple."""
    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


class Heading(IntEnum):
    """The four cardinal directions, in clockwise order."""
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    def delta(self) -> Tuple[int, int]:
        """Row, col displacement of one step in this heading."""
        return {
            Heading.NORTH: (-1, 0),
            Heading.EAST: (0, 1),
            Heading.SOUTH: (1, 0),
            Heading.WEST: (0, -1),
        }[self]

    def opposite(self) -> "Heading":
        return Heading((self.value + 2) % 4)

    @property
    def arrow(self) -> str:
        return "^>v<"[self.value]

    @staticmethod
    def all() -> List["Heading"]:
        return [Heading.NORTH, Heading.EAST, Heading.SOUTH, Heading.WEST]


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def turn_right(heading: Heading) -> Heading:
    """Rotate 90 degrees clockwise."""
    return Heading((heading.value + 1) % 4)


def forward(heading: Heading, pos: Tuple[int, int]) -> Position:
    """The cell directly ahead of `pos` when facing `heading`."""
    dr, dc = heading.delta()
    return Position(pos[0] + dr, pos[1] + dc)


def left(heading: Heading, pos: Tuple[int, int]) -> Position:
    """The cell 90 degrees counter-clockwise from `heading`."""
    return forward(Heading((heading.value + 3) % 4), pos)


def right(heading: Heading, pos: Tuple[int, int]) -> Position:
    """The cell 90 degrees clockwise from `heading`."""
    return forward(turn_right(heading), pos)


def turns_needed(current: Heading, desired: Heading) -> int:
    """Number of right turns that take `current` to `desired` (0..3)."""
    return (desired.value - current.value) % 4


def heading_between(origin: Tuple[int, int],
                    destination: Tuple[int, int]) -> Heading:
    """Heading that moves from `origin` onto the orthogonally adjacent `destination`."""
    delta = (destination[0] - origin[0], destination[1] - origin[1])
    for heading in Heading.all():
        if heading.delta() == delta:
            return heading
    raise ValueError(f"{origin} and {destination} are not orthogonal neighbours")


def manhattan(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])

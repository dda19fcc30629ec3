"""
Parsed maze maps.

A map is a rectangle of single-character cells:

    X  wall
    .  free floor
    E  entry (exactly one, on the outer border)
    @  target (exactly one)

Any other character is kept and classified as UNKNOWN. Unknown cells are
not walls, so the agent may drive over them; renderers show them as '?'.

The Grid is immutable once loaded. Whether the entry sits on the border
is checked by the Environment, since that is where the inward heading is
derived from it.
"""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from maze_rescue.errors import MapError, MapErrorKind
from maze_rescue.geometry import Heading, Position


class CellType(IntEnum):
    """What occupies a grid cell."""
    FREE = 0
    WALL = 1
    ENTRY = 2
    TARGET = 3
    UNKNOWN = 4


SYMBOLS = {
    "X": CellType.WALL,
    ".": CellType.FREE,
    "E": CellType.ENTRY,
    "@": CellType.TARGET,
}

RENDER_SYMBOLS = {
    CellType.WALL: "#",
    CellType.FREE: ".",
    CellType.ENTRY: "E",
    CellType.TARGET: "@",
    CellType.UNKNOWN: "?",
}


class Grid:
    """
    An immutable maze map.

    Build one with `Grid.load(text)` or `Grid.from_file(path)`; the
    constructor expects already-validated data.
    """

    def __init__(self, cells: np.ndarray, symbols: List[str],
                 entry: Position, target: Position):
        self._cells = cells.copy()
        self._cells.setflags(write=False)
        self._symbols = tuple(symbols)
        self._entry = entry
        self._target = target

    # -- construction -----------------------------------------------------

    @classmethod
    def load(cls, source: Union[str, Iterable[str]]) -> "Grid":
        """
        Parse a map from text or from an iterable of row strings.

        Raises MapError when the input is empty, the rows are ragged, or
        there is not exactly one entry and exactly one target.
        """
        if isinstance(source, str):
            lines = source.splitlines()
        else:
            lines = [line.rstrip("\r\n") for line in source]

        if not lines:
            raise MapError(MapErrorKind.EMPTY_INPUT, "Map is empty")
        if len(lines[0]) == 0:
            raise MapError(MapErrorKind.EMPTY_INPUT, "First row of the map is empty")

        rows, cols = len(lines), len(lines[0])
        cells = np.full((rows, cols), CellType.FREE, dtype=np.int8)
        entries: List[Position] = []
        targets: List[Position] = []

        for r, line in enumerate(lines):
            if len(line) != cols:
                raise MapError(
                    MapErrorKind.RAGGED_ROWS,
                    f"Row {r} has length {len(line)}, expected {cols}",
                )
            for c, ch in enumerate(line):
                cell = SYMBOLS.get(ch, CellType.UNKNOWN)
                cells[r, c] = cell
                if cell == CellType.ENTRY:
                    entries.append(Position(r, c))
                elif cell == CellType.TARGET:
                    targets.append(Position(r, c))

        if not entries:
            raise MapError(MapErrorKind.MISSING_ENTRY, "No entry (E) found")
        if len(entries) > 1:
            raise MapError(
                MapErrorKind.MULTIPLE_ENTRIES,
                f"Found {len(entries)} entries, expected exactly 1",
            )
        if not targets:
            raise MapError(MapErrorKind.MISSING_TARGET, "No target (@) found")
        if len(targets) > 1:
            raise MapError(
                MapErrorKind.MULTIPLE_TARGETS,
                f"Found {len(targets)} targets, expected exactly 1",
            )

        return cls(cells, lines, entries[0], targets[0])

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Grid":
        """Load a map from a UTF-8 text file."""
        text = Path(path).read_text(encoding="utf-8")
        return cls.load(text)

    # -- queries ----------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._cells.shape[0]

    @property
    def cols(self) -> int:
        return self._cells.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def entry(self) -> Position:
        return self._entry

    @property
    def target(self) -> Position:
        """Where the target starts. Display and graph search only."""
        return self._target

    @property
    def symbols(self) -> Tuple[str, ...]:
        """The raw map rows as loaded."""
        return self._symbols

    def in_bounds(self, pos: Tuple[int, int]) -> bool:
        return 0 <= pos[0] < self.rows and 0 <= pos[1] < self.cols

    def cell(self, pos: Tuple[int, int]) -> CellType:
        if not self.in_bounds(pos):
            raise IndexError(f"{tuple(pos)} is outside a {self.rows}x{self.cols} grid")
        return CellType(int(self._cells[pos[0], pos[1]]))

    def is_wall(self, pos: Tuple[int, int]) -> bool:
        return self.cell(pos) == CellType.WALL

    def is_traversable(self, pos: Tuple[int, int]) -> bool:
        """In bounds and not a wall."""
        return self.in_bounds(pos) and not self.is_wall(pos)

    def on_border(self, pos: Tuple[int, int]) -> bool:
        r, c = pos
        return r in (0, self.rows - 1) or c in (0, self.cols - 1)

    def count(self, cell_type: CellType) -> int:
        return int(np.count_nonzero(self._cells == cell_type))

    # -- display ----------------------------------------------------------

    def render(self, agent: Optional[Tuple[int, int]] = None,
               heading: Optional[Heading] = None) -> str:
        """ASCII rendering of the map, optionally with the agent drawn on it."""
        lines = []
        for r in range(self.rows):
            row_str = ""
            for c in range(self.cols):
                if agent is not None and (r, c) == tuple(agent):
                    row_str += heading.arrow if heading is not None else "A"
                else:
                    row_str += RENDER_SYMBOLS[CellType(int(self._cells[r, c]))]
            lines.append(row_str)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (f"Grid({self.rows}x{self.cols}, entry={self.entry}, "
                f"target={self.target})")

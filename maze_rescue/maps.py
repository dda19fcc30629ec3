"""
Hand-made rescue maps used by the demo, the benchmarks and the tests.
"""

from __future__ import annotations

from typing import Dict

from maze_rescue.grid import Grid

# Open room, entry on the top border
SIMPLE_ROOM = """\
XXXEXXX
X.....X
X.....X
X..@..X
X.....X
XXXXXXX"""

# Two corridors around a sealed chamber; the target sits in the bottom wall.
# Shortest route: 14 moves.
DOUBLE_CORRIDOR = """\
XXXXEXXXX
X.......X
X.XXXXX.X
X.X...X.X
X.X.X.X.X
X.X...X.X
X.XXXXX.X
X.......X
XXXX@XXXX"""

# Nested spirals, 25x21
SPIRAL = """\
XXXXXXXXXXEXXXXXXXXXX
X...................X
X.XXXXXXXXXXXXXXXXX.X
X.X.................X
X.X.XXXXXXXXXXXXXXX.X
X.X.X...............X
X.X.X.XXXXXXXXXXXXX.X
X.X.X.X...........X.X
X.X.X.X.XXXXXXXXX.X.X
X.X.X.X.X.......X.X.X
X.X.X.X.X.XXXXX.X.X.X
X.X.X.X.X.X...X.X.X.X
X.X.X.X.X.X.X.X.X.X.X
X.X.X.X.X.X...X.X.X.X
X.X.X.X.X.XXXXX.X.X.X
X.X.X.X.X.......X.X.X
X.X.X.X.XXXXXXXXX.X.X
X.X.X.X...........X.X
X.X.X.XXXXXXXXXXXXX.X
X.X.X...............X
X.X.XXXXXXXXXXXXXXX.X
X.X.................X
X.XXXXXXXXXXXXXXXXX.X
X...................X
XXXXXXXXXX@XXXXXXXXXX"""

LEFT_ENTRY = """\
XXXXX
E...X
X.X.X
X..@X
XXXXX"""

RIGHT_ENTRY = """\
XXXXXX
X....E
X.XX.X
X@...X
XXXXXX"""

BOTTOM_ENTRY = """\
XXXXX
X@..X
X.X.X
X...X
XXEXX"""

# Dead ends branching off a single corridor
BRANCHES = """\
XXXXXEXXXXX
X.X.X.X.X.X
X.........X
X.X.X.X.X.X
XXXXX.XXXXX
X.........X
X.XXXXXXX.X
X...X@....X
XXXXXXXXXXX"""

BUILTIN_MAPS: Dict[str, str] = {
    "simple_room": SIMPLE_ROOM,
    "double_corridor": DOUBLE_CORRIDOR,
    "spiral": SPIRAL,
    "left_entry": LEFT_ENTRY,
    "right_entry": RIGHT_ENTRY,
    "bottom_entry": BOTTOM_ENTRY,
    "branches": BRANCHES,
}


def load_builtin(name: str) -> Grid:
    """Grid for one of the BUILTIN_MAPS."""
    try:
        text = BUILTIN_MAPS[name]
    except KeyError:
        raise KeyError(f"Unknown map {name!r}; choose from {sorted(BUILTIN_MAPS)}") from None
    return Grid.load(text)

"""
Mission strategies that drive an Environment from entry to target and back.

Two contracts, deliberately kept apart:

- WallFollower: local knowledge. Sees only what `Environment.execute`
  returns and explores until the target shows up on a sensor.
- BfsNavigator: global knowledge. Is handed the Grid, plans a shortest
  route with breadth-first search and drives it.
"""

from maze_rescue.navigators.base import Deadline, MissionResult, Navigator
from maze_rescue.navigators.bfs import BfsNavigator, shortest_path
from maze_rescue.navigators.wall_follower import (
    WallFollower,
    WallFollowerConfig,
    choose_command,
)

__all__ = [
    "Deadline",
    "MissionResult",
    "Navigator",
    "BfsNavigator",
    "shortest_path",
    "WallFollower",
    "WallFollowerConfig",
    "choose_command",
]

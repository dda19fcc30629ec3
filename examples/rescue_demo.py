"""
Rescue demo: both navigators on the built-in maps.

For each map:
1. Render the maze
2. Send the reactive navigator in, narrating each command
3. Send the BFS navigator in and compare the two mission summaries
"""

import logging

from maze_rescue import Environment, Grid, MissionLog
from maze_rescue.maps import BUILTIN_MAPS
from maze_rescue.navigators import BfsNavigator, WallFollower


def narrate(record):
    print(f"    {record.sequence:3d}  {record.command.value:<10s} "
          f"{str(record.position):<8s} {record.heading.arrow}  {record.cargo.value}")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    print("=" * 60)
    print("  Maze Rescue — Demo")
    print("=" * 60)

    # --- A short mission, narrated command by command ---
    print("\n--- Level 1: Simple Room ---\n")
    grid = Grid.load(BUILTIN_MAPS["simple_room"])
    print(grid.render())
    print()
    result = WallFollower(Environment(grid), on_record=narrate).run()
    print()
    print(result.summary())

    # --- The rest: reactive vs graph search ---
    for level, name in enumerate(["branches", "double_corridor", "spiral"], start=2):
        print(f"\n--- Level {level}: {name} ---\n")
        grid = Grid.load(BUILTIN_MAPS[name])
        print(grid.render())
        print()

        reactive = WallFollower(Environment(grid)).run()
        bfs = BfsNavigator(Environment(grid), grid).run()
        print(reactive.summary())
        print(bfs.summary())

        log = MissionLog()
        log.extend(reactive.records)
        print(log.summary())


if __name__ == "__main__":
    main()

"""Tests for the reactive navigator."""

import unittest

from maze_rescue.environment import Command, Environment, SensorReading
from maze_rescue.errors import MissionTimeoutError, SearchExhaustedError
from maze_rescue.generator import generate_maze
from maze_rescue.geometry import Heading, forward
from maze_rescue.grid import Grid
from maze_rescue.maps import BRANCHES, BUILTIN_MAPS, LEFT_ENTRY, SPIRAL
from maze_rescue.navigators.base import Deadline
from maze_rescue.navigators.wall_follower import (
    WallFollower, WallFollowerConfig, choose_command, sensor_headings,
)

WALL = SensorReading.WALL
FREE = SensorReading.FREE
TARGET = SensorReading.TARGET

CORRIDOR = "XEX\nX.X\nX.X\nX@X\nXXX"
UNREACHABLE = "XEXX\nX.XX\nXXXX\nX@XX"

# Maps whose only way in leaves the entry sideways
SIDE_EXITS = [
    "XXXX\n.@XX\nEXXX\nXXXX",        # left border, exit north
    "XXXX\nEXXX\n.XXX\n@XXX",        # left border, exit south
    "XXXXX\nXXX@.\nXXXXE\nXXXXX",    # right border, exit north
    "X.EXX\nX.XXX\nX@XXX\nXXXXX",    # top border, exit west
    "XXXXX\nX@XXX\nX.XXX\nX.EXX",    # bottom border, exit west
]


class FakeClock:
    """Manually advanced clock for deadline tests."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def run_reactive(text, config=None):
    env = Environment(Grid.load(text))
    navigator = WallFollower(env, config)
    return navigator, navigator.run(), env


class TestChooseCommand(unittest.TestCase):
    """Test the sensor-only priority rule."""

    def test_target_ahead_wins(self):
        self.assertEqual(choose_command(FREE, FREE, TARGET, True, True, True),
                         Command.PICK_UP)

    def test_unvisited_ahead(self):
        self.assertEqual(choose_command(FREE, FREE, FREE, True, True, True),
                         Command.ADVANCE)

    def test_unvisited_left_beats_visited_ahead(self):
        self.assertEqual(choose_command(FREE, WALL, FREE, front_unvisited=False,
                                        left_unvisited=True),
                         Command.TURN_RIGHT)

    def test_unvisited_right_beats_visited_ahead(self):
        self.assertEqual(choose_command(WALL, FREE, FREE, right_unvisited=True),
                         Command.TURN_RIGHT)

    def test_visited_ahead(self):
        self.assertEqual(choose_command(FREE, FREE, FREE), Command.ADVANCE)

    def test_walls_everywhere_turns(self):
        self.assertEqual(choose_command(WALL, WALL, WALL), Command.TURN_RIGHT)

    def test_only_left_open_turns(self):
        self.assertEqual(choose_command(FREE, WALL, WALL), Command.TURN_RIGHT)

    def test_sensor_headings(self):
        self.assertEqual(sensor_headings(Heading.SOUTH),
                         (Heading.EAST, Heading.WEST, Heading.SOUTH))
        self.assertEqual(sensor_headings(Heading.NORTH),
                         (Heading.WEST, Heading.EAST, Heading.NORTH))


class TestWallFollowerMissions(unittest.TestCase):
    """Test complete missions using local knowledge only."""

    def test_all_builtin_maps(self):
        for name, text in BUILTIN_MAPS.items():
            _, result, env = run_reactive(text)
            self.assertTrue(result.completed, name)
            self.assertTrue(env.mission_complete, name)
            self.assertEqual(result.strategy, "reactive")

    def test_generated_perfect_mazes(self):
        for seed in range(15):
            _, result, _ = run_reactive(generate_maze(rows=15, cols=21, seed=seed))
            self.assertTrue(result.completed, f"seed {seed}")

    def test_generated_mazes_with_loops(self):
        for seed in range(15):
            text = generate_maze(rows=13, cols=13, seed=seed, extra_openings=12)
            _, result, _ = run_reactive(text)
            self.assertTrue(result.completed, f"seed {seed}")

    def test_side_entry(self):
        navigator, result, env = run_reactive(LEFT_ENTRY)
        self.assertTrue(result.completed)
        self.assertEqual(navigator.inward, Heading.EAST)
        self.assertEqual(result.records[-1].heading, Heading.WEST)

    def test_mission_shape(self):
        _, result, _ = run_reactive(BRANCHES)
        commands = [r.command for r in result.records]
        self.assertEqual(commands[0], Command.INITIALIZE)
        self.assertEqual(commands[-1], Command.EJECT)
        self.assertEqual(commands.count(Command.PICK_UP), 1)
        pickup = commands.index(Command.PICK_UP)
        self.assertTrue(all(r.carrying for r in result.records[pickup:-1]))
        self.assertFalse(any(r.carrying for r in result.records[:pickup]))

    def test_retrace_follows_path_home(self):
        navigator, result, _ = run_reactive(SPIRAL)
        self.assertTrue(result.completed)
        self.assertEqual(navigator.path[-1], navigator.entry)
        self.assertEqual(len(navigator.path), 1)

    def test_greedy_return(self):
        config = WallFollowerConfig(retrace_path=False)
        with self.assertLogs("maze_rescue.navigators.wall_follower", level="WARNING"):
            _, result, env = run_reactive(CORRIDOR, config)
        self.assertTrue(result.completed)
        self.assertEqual(env.position, env.grid.entry)
        self.assertEqual(result.commands, 9)

    def test_greedy_return_on_generated_mazes(self):
        config = WallFollowerConfig(retrace_path=False)
        for seed in range(10):
            text = generate_maze(rows=13, cols=13, seed=seed)
            with self.assertLogs("maze_rescue.navigators.wall_follower", level="WARNING"):
                _, result, env = run_reactive(text, config)
            self.assertTrue(result.completed, f"seed {seed}")
            self.assertEqual(env.position, env.grid.entry)

    def test_exit_beside_the_entry(self):
        for text in SIDE_EXITS:
            navigator, result, env = run_reactive(text)
            self.assertTrue(result.completed, text)
            self.assertTrue(env.mission_complete, text)
            # The cell straight ahead of the entry is a wall on these maps
            ahead = forward(navigator.inward, env.grid.entry)
            self.assertNotIn(ahead, navigator.visited)

    def test_corner_entry(self):
        _, result, _ = run_reactive("E..X\n.X.X\n...X\nX@XX")
        self.assertTrue(result.completed)


class TestWallFollowerLimits(unittest.TestCase):
    """Test step ceilings and deadlines."""

    def test_unreachable_target_exhausts_search(self):
        grid = Grid.load(UNREACHABLE)
        navigator = WallFollower(Environment(grid),
                                 WallFollowerConfig(max_search_steps=200))
        with self.assertRaises(SearchExhaustedError):
            navigator.run()
        self.assertEqual(len(navigator.records), 201)

    def test_deadline(self):
        clock = FakeClock()
        deadline = Deadline(1.0, clock=clock)

        def tick(record):
            clock.now += 0.5

        grid = Grid.load(SPIRAL)
        navigator = WallFollower(Environment(grid), deadline=deadline, on_record=tick)
        with self.assertRaises(MissionTimeoutError) as ctx:
            navigator.run()
        self.assertIsInstance(ctx.exception, TimeoutError)
        self.assertEqual(len(navigator.records), 2)

    def test_deadline_must_be_positive(self):
        with self.assertRaises(ValueError):
            Deadline(0)

    def test_deadline_remaining(self):
        clock = FakeClock()
        deadline = Deadline(2.0, clock=clock)
        clock.now = 0.5
        self.assertAlmostEqual(deadline.remaining(), 1.5)
        self.assertFalse(deadline.expired())
        clock.now = 3.0
        self.assertEqual(deadline.remaining(), 0.0)
        self.assertTrue(deadline.expired())


if __name__ == "__main__":
    unittest.main()

"""Tests for record encoding and the mission log."""

import unittest

from maze_rescue.environment import (
    CargoState, Command, CommandRecord, Environment, SensorReading,
)
from maze_rescue.geometry import Heading, Position
from maze_rescue.grid import Grid
from maze_rescue.records import DEBUG_HEADER, MissionLog, to_csv_line, to_debug_line

SIMPLE = "XEXX\nX.XX\nX.XX\nX@XX\nXXXX"
MISSION = [
    Command.INITIALIZE, Command.ADVANCE, Command.ADVANCE, Command.PICK_UP,
    Command.TURN_RIGHT, Command.TURN_RIGHT, Command.ADVANCE, Command.ADVANCE,
    Command.EJECT,
]


def run_simple_mission():
    env = Environment(Grid.load(SIMPLE))
    log = MissionLog()
    for command in MISSION:
        log.append(env.execute(command))
    return log


class TestLineFormats(unittest.TestCase):
    """Test the official and debug line encodings."""

    def test_csv_line(self):
        record = CommandRecord(
            sequence=1, command=Command.INITIALIZE,
            left=SensorReading.WALL, right=SensorReading.WALL,
            front=SensorReading.FREE, cargo=CargoState.NO_LOAD,
            position=Position(0, 1), heading=Heading.SOUTH,
        )
        self.assertEqual(to_csv_line(record), "INITIALIZE,WALL,WALL,FREE,no load")
        self.assertEqual(to_debug_line(record),
                         "001,INITIALIZE,(0, 1),SOUTH,WALL,WALL,FREE,no load")

    def test_carrying_line(self):
        log = run_simple_mission()
        pickup = log.records[3]
        self.assertEqual(to_csv_line(pickup), "PICK_UP,WALL,WALL,FREE,carrying")

    def test_csv_lines_have_no_header(self):
        lines = run_simple_mission().csv_lines()
        self.assertEqual(len(lines), len(MISSION))
        self.assertTrue(lines[0].startswith("INITIALIZE,"))
        self.assertTrue(lines[-1].startswith("EJECT,"))

    def test_debug_lines_have_header(self):
        lines = run_simple_mission().debug_lines()
        self.assertEqual(lines[0], DEBUG_HEADER)
        self.assertEqual(len(lines), len(MISSION) + 1)
        self.assertTrue(lines[-1].startswith("009,EJECT,(0, 1),NORTH,"))


class TestMissionLog(unittest.TestCase):
    """Test log statistics and summaries."""

    def setUp(self):
        self.log = run_simple_mission()

    def test_counts_cover_every_command(self):
        counts = self.log.counts()
        self.assertEqual(set(counts), set(Command))
        self.assertEqual(counts[Command.ADVANCE], 4)
        self.assertEqual(counts[Command.TURN_RIGHT], 2)
        self.assertEqual(counts[Command.PICK_UP], 1)
        self.assertEqual(counts[Command.EJECT], 1)

    def test_unique_positions_in_order(self):
        self.assertEqual(self.log.unique_positions(), [(0, 1), (1, 1), (2, 1)])

    def test_extend_and_len(self):
        other = MissionLog()
        other.extend(self.log.records)
        self.assertEqual(len(other), len(self.log))

    def test_summary(self):
        summary = self.log.summary()
        self.assertIn("Summary", summary)
        self.assertIn("Target delivered:    Yes", summary)

    def test_summary_without_delivery(self):
        log = MissionLog(self.log.records[:4])
        self.assertIn("Target delivered:    No", log.summary())

    def test_path_listing(self):
        listing = self.log.path_listing().split("\n")
        self.assertEqual(len(listing), len(MISSION))
        self.assertIn("PICK_UP", listing[3])
        self.assertIn("carrying", listing[3])


if __name__ == "__main__":
    unittest.main()

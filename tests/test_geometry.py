"""Tests for headings and grid geometry."""

import unittest

from maze_rescue.geometry import (
    Heading, Position, forward, heading_between, left, manhattan, right,
    turn_right, turns_needed,
)


class TestHeading(unittest.TestCase):
    """Test heading arithmetic."""

    def test_heading_deltas(self):
        self.assertEqual(Heading.NORTH.delta(), (-1, 0))
        self.assertEqual(Heading.EAST.delta(), (0, 1))
        self.assertEqual(Heading.SOUTH.delta(), (1, 0))
        self.assertEqual(Heading.WEST.delta(), (0, -1))

    def test_all_headings_clockwise(self):
        self.assertEqual(Heading.all(),
                         [Heading.NORTH, Heading.EAST, Heading.SOUTH, Heading.WEST])

    def test_four_right_turns_is_identity(self):
        for h in Heading.all():
            turned = h
            for _ in range(4):
                turned = turn_right(turned)
            self.assertEqual(turned, h)

    def test_turn_right_sequence(self):
        self.assertEqual(turn_right(Heading.NORTH), Heading.EAST)
        self.assertEqual(turn_right(Heading.WEST), Heading.NORTH)

    def test_opposite(self):
        self.assertEqual(Heading.NORTH.opposite(), Heading.SOUTH)
        self.assertEqual(Heading.EAST.opposite(), Heading.WEST)

    def test_arrows(self):
        self.assertEqual("".join(h.arrow for h in Heading.all()), "^>v<")


class TestNeighbours(unittest.TestCase):
    """Test the cells ahead, left and right of the agent."""

    def test_forward(self):
        self.assertEqual(forward(Heading.SOUTH, (2, 3)), Position(3, 3))
        self.assertEqual(forward(Heading.WEST, (2, 3)), Position(2, 2))

    def test_left_and_right(self):
        # Facing south, left is east and right is west
        self.assertEqual(left(Heading.SOUTH, (2, 3)), (2, 4))
        self.assertEqual(right(Heading.SOUTH, (2, 3)), (2, 2))

    def test_left_is_three_right_turns(self):
        for h in Heading.all():
            three = turn_right(turn_right(turn_right(h)))
            self.assertEqual(left(h, (5, 5)), forward(three, (5, 5)))

    def test_left_and_right_differ(self):
        for h in Heading.all():
            for pos in ((0, 0), (3, 7), (-2, 5)):
                self.assertNotEqual(left(h, pos), right(h, pos))

    def test_forward_is_monotonic(self):
        start = Position(10, 10)
        for h in Heading.all():
            one = forward(h, start)
            two = forward(h, one)
            if h == Heading.NORTH:
                self.assertTrue(start.row > one.row > two.row)
            elif h == Heading.SOUTH:
                self.assertTrue(start.row < one.row < two.row)
            elif h == Heading.WEST:
                self.assertTrue(start.col > one.col > two.col)
            else:
                self.assertTrue(start.col < one.col < two.col)

    def test_position_behaves_like_tuple(self):
        p = Position(1, 2)
        self.assertEqual(p, (1, 2))
        self.assertEqual(hash(p), hash((1, 2)))
        self.assertEqual(str(p), "(1, 2)")


class TestHelpers(unittest.TestCase):

    def test_turns_needed(self):
        self.assertEqual(turns_needed(Heading.NORTH, Heading.NORTH), 0)
        self.assertEqual(turns_needed(Heading.NORTH, Heading.WEST), 3)
        self.assertEqual(turns_needed(Heading.WEST, Heading.NORTH), 1)

    def test_heading_between_neighbours(self):
        self.assertEqual(heading_between((1, 1), (0, 1)), Heading.NORTH)
        self.assertEqual(heading_between((1, 1), (1, 0)), Heading.WEST)

    def test_heading_between_rejects_non_neighbours(self):
        with self.assertRaises(ValueError):
            heading_between((1, 1), (2, 2))
        with self.assertRaises(ValueError):
            heading_between((1, 1), (1, 1))

    def test_manhattan(self):
        self.assertEqual(manhattan((0, 0), (3, 4)), 7)
        self.assertEqual(manhattan((2, 2), (2, 2)), 0)


if __name__ == "__main__":
    unittest.main()

import unittest

from glovesense.core.state_manager import StateManager
from glovesense.positions.record import PositionRecord


class TestStateManager(unittest.TestCase):
    def setUp(self):
        """Runs before every test."""
        self.state = StateManager()
        self.rock = PositionRecord("ROCK")
        self.paper = PositionRecord("PAPER")

    def test_initial_state(self):
        """Verify the system starts with no recognized position."""
        self.assertIsNone(self.state.curr_position)
        self.assertIsNone(self.state.last_position)
        self.assertIsNone(self.state.current_name)

    def test_position_update(self):
        """Verify position history updates correctly."""
        self.assertTrue(self.state.update_position(self.rock))
        self.assertEqual(self.state.current_name, "ROCK")

        self.assertTrue(self.state.update_position(self.paper))
        self.assertIs(self.state.last_position, self.paper)
        self.assertEqual(self.state.changes_seen, 2)

    def test_repeat_is_not_a_change(self):
        self.state.update_position(self.rock)
        self.assertFalse(self.state.update_position(self.rock))
        self.assertEqual(self.state.samples_seen, 2)

    def test_gap_does_not_refire(self):
        """A position interrupted by unrecognized samples is not reported twice."""
        self.state.update_position(self.rock)
        self.assertFalse(self.state.update_position(None))
        self.assertIsNone(self.state.curr_position)
        self.assertFalse(self.state.update_position(self.rock))

    def test_reset(self):
        self.state.update_position(self.rock)
        self.state.reset()
        self.assertTrue(self.state.update_position(self.rock))


if __name__ == '__main__':
    unittest.main()

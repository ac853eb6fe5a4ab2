import os
import tempfile
import unittest

from glovesense.core.errors import InvalidSampleError
from glovesense.core.interfaces import PoseSource
from glovesense.core.types import Joint, NR_JOINTS
from glovesense.motions.catalog import MotionCatalog
from glovesense.positions.catalog import PositionCatalog
from glovesense.tracker import HandTracker


def value_line(value):
    return " : ".join([str(value)] * NR_JOINTS)


SCISSORS = [0.0 if Joint.INDEX_INNER <= j <= Joint.MIDDLE_OUTER else 1.5 for j in range(NR_JOINTS)]

POSITION_LINES = [
    "ROCK", value_line(1.5),
    "PAPER", value_line(0.0),
    "HALFOPEN-", value_line(0.75),
    "SCISSORS", " : ".join(str(v) for v in SCISSORS),
]

ROCK = [1.5] * NR_JOINTS
PAPER = [0.0] * NR_JOINTS
HALFOPEN = [0.75] * NR_JOINTS
NOTHING = [3.0] * NR_JOINTS


class ReplaySource(PoseSource):
    """Plays back a fixed list of samples."""

    def __init__(self, samples):
        self.samples = list(samples)

    def read_sample(self):
        return self.samples.pop(0)


class TestHandTracker(unittest.TestCase):
    def setUp(self):
        positions = PositionCatalog.from_lines(POSITION_LINES)
        motions = MotionCatalog.from_lines(["WAVE= ROCK PAPER ROCK", "TWIST= ROCK~ PAPER"], positions)
        self.tracker = HandTracker(positions, motions)

        self.position_events = []
        self.motion_events = []
        self.data_events = []
        self.tracker.on_position(lambda t, p: self.position_events.append(p.name))
        self.tracker.on_motion(lambda t, m: self.motion_events.append(m.name))
        self.tracker.on_data(lambda t: self.data_events.append(t.pose.to_list()))

    def feed(self, *samples):
        return [self.tracker.update(s) for s in samples]

    def test_repeated_samples_fire_once(self):
        self.feed(ROCK, ROCK, ROCK)
        self.assertEqual(self.position_events, ["ROCK"])
        self.assertEqual(len(self.data_events), 3)

    def test_unrecognized_gap_does_not_refire(self):
        results = self.feed(ROCK, NOTHING)
        self.assertIsNone(results[1].position)
        self.assertIsNone(self.tracker.current_position)

        results += self.feed(ROCK)
        self.assertEqual(self.position_events, ["ROCK"])
        self.assertEqual(self.tracker.current_position.name, "ROCK")
        self.assertFalse(results[2].changed)

    def test_dependent_position_is_silent(self):
        result = self.feed(ROCK, HALFOPEN)[-1]
        self.assertTrue(result.changed)
        self.assertEqual(result.position.name, "HALFOPEN")
        self.assertEqual(self.position_events, ["ROCK"])

    def test_motion_detected(self):
        results = self.feed(ROCK, PAPER, ROCK)
        self.assertEqual(self.motion_events, ["TWIST", "WAVE"])
        self.assertEqual([m.name for m in results[1].motions], ["TWIST"])
        self.assertEqual([m.name for m in results[2].motions], ["WAVE"])

    def test_transition_through_dependent_position(self):
        self.feed(ROCK, HALFOPEN, PAPER)
        self.assertEqual(self.motion_events, ["TWIST"])

    def test_invalid_sample(self):
        with self.assertRaises(InvalidSampleError):
            self.tracker.update([0.0] * 21)
        self.assertEqual(self.data_events, [])

    def test_poll(self):
        source = ReplaySource([ROCK, SCISSORS])
        self.tracker.poll(source)
        result = self.tracker.poll(source)
        self.assertEqual(result.position.name, "SCISSORS")
        self.assertEqual(self.position_events, ["ROCK", "SCISSORS"])

    def test_reset(self):
        self.feed(ROCK, PAPER)
        self.tracker.reset()
        self.assertTrue(self.tracker.motions.get("WAVE").is_idle)
        self.feed(PAPER)
        self.assertEqual(self.position_events, ["ROCK", "PAPER", "PAPER"])


class TestRecordPosition(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = os.path.join(self.tmp.name, "positions.txt")
        self.tracker = HandTracker(PositionCatalog.from_file(self.path, create_missing=True))

    def test_records_latest_sample(self):
        self.tracker.update(HALFOPEN)
        self.assertIsNone(self.tracker.current_position)

        record = self.tracker.record_position("half", standalone=False)
        self.assertEqual(record.to_list(), HALFOPEN)
        self.assertIs(self.tracker.update(HALFOPEN).position, record)

        reloaded = PositionCatalog.from_file(self.path)
        self.assertEqual(reloaded.names(), ["HALF"])
        self.assertFalse(reloaded.get("HALF").standalone)

    def test_duplicate_name(self):
        self.tracker.record_position("flat")
        with self.assertRaises(ValueError):
            self.tracker.record_position("FLAT")

    def test_in_memory_catalog(self):
        tracker = HandTracker(PositionCatalog())
        tracker.update(ROCK)
        tracker.record_position("fist")
        self.assertEqual(tracker.positions.names(), ["FIST"])


if __name__ == '__main__':
    unittest.main()

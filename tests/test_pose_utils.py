import unittest

import numpy as np

from glovesense.core.types import NR_JOINTS
from glovesense.pose_utils import format_value_line, interpolate, parse_value_line


class TestValueLine(unittest.TestCase):
    def test_parse_with_ignored_tokens(self):
        tokens = ["0.5"] * NR_JOINTS
        tokens[3] = "*"
        tokens[21] = " * "
        radians, ignored = parse_value_line(" : ".join(tokens))
        self.assertEqual(radians[0], 0.5)
        self.assertEqual(radians[3], 0.0)
        self.assertTrue(ignored[3] and ignored[21])
        self.assertEqual(int(ignored.sum()), 2)

    def test_wrong_count(self):
        with self.assertRaises(ValueError):
            parse_value_line(" : ".join(["0.5"] * 21))

    def test_not_a_number(self):
        tokens = ["0.5"] * NR_JOINTS
        tokens[7] = "abc"
        with self.assertRaises(ValueError):
            parse_value_line(":".join(tokens))

    def test_format_keeps_ignore_token(self):
        radians = np.full(NR_JOINTS, 0.25)
        ignored = np.zeros(NR_JOINTS, dtype=bool)
        ignored[0] = True
        line = format_value_line(radians, ignored)
        self.assertTrue(line.startswith("* : 0.25"))
        again, mask = parse_value_line(line)
        self.assertTrue(mask[0])
        self.assertEqual(again[1], 0.25)


class TestInterpolate(unittest.TestCase):
    def test_excludes_start_includes_end(self):
        start = np.zeros(NR_JOINTS)
        end = np.full(NR_JOINTS, 1.0)
        samples = interpolate(start, end, 4)
        self.assertEqual(len(samples), 4)
        self.assertTrue(np.allclose(samples[0], 0.25))
        self.assertTrue(np.allclose(samples[-1], end))

    def test_needs_a_step(self):
        with self.assertRaises(ValueError):
            interpolate(np.zeros(NR_JOINTS), np.ones(NR_JOINTS), 0)


if __name__ == '__main__':
    unittest.main()

"""
Tests for the randomised self-test harness.
"""

import unittest

from sortviz.dispatcher import ALGORITHMS
from sortviz.evaluate_accuracy import all_passed, check_trace, evaluate_algorithms
from sortviz.steps import Swap
from sortviz.trace import Trace


class TestEvaluateAccuracy(unittest.TestCase):

    def test_all_algorithms_pass(self):
        report = evaluate_algorithms(trials=15, max_length=60, seed=5, progress=False)
        self.assertEqual(set(report), set(ALGORITHMS))
        self.assertTrue(all_passed(report))
        for name, stats in report.items():
            self.assertEqual(stats["passed"], 15, name)
            self.assertIsNone(stats["first_failure"])
        self.assertEqual(report["merge"]["swaps"], 0)

    def test_check_trace_reports_mismatch(self):
        self.assertIsNone(check_trace(Trace("bubble", [2, 1], [Swap(0, 1)])))
        reason = check_trace(Trace("bubble", [1, 3, 2], [Swap(0, 1)]))
        self.assertEqual(reason, "index 0: got 3, expected 1")

    def test_failures_are_counted(self):
        report = {"bubble": {"failed": 0}, "heap": {"failed": 2}}
        self.assertFalse(all_passed(report))


if __name__ == '__main__':
    unittest.main()

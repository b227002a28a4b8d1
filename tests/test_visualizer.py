"""
Tests for the visualizer controller: run-conflict policy and config gating.
"""

import threading
import time
import unittest

from sortviz import events
from sortviz.config import Configuration
from sortviz.errors import InvalidConfigurationError, RunInProgressError, UnsupportedAlgorithmError
from sortviz.player import PlaybackStatus
from sortviz.visualizer import Visualizer

FAST = Configuration(array_length=25, delay_ms=0, finalize_delay_ms=0, algorithm="quick", seed=11)
SLOW = Configuration(array_length=25, delay_ms=50, finalize_delay_ms=0, algorithm="bubble", seed=11)


def wait_for(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class TestVisualizer(unittest.TestCase):

    def test_blocking_run(self):
        v = Visualizer(FAST)
        original = v.array
        state = v.start(block=True)

        self.assertEqual(state.status, PlaybackStatus.COMPLETED)
        self.assertEqual(v.display_array, sorted(original))
        self.assertEqual(v.array, original)
        counts = v.trace.counts()
        self.assertEqual(v.stats.comparisons, counts["comparisons"])
        self.assertEqual(v.stats.swaps, counts["swaps"])

    def test_live_mode_has_no_recorded_trace(self):
        v = Visualizer(FAST.updated(live=True, algorithm="heap"))
        v.start(block=True)
        self.assertIsNone(v.trace)
        self.assertEqual(v.display_array, sorted(v.array))

    def test_explicit_array_and_listener(self):
        seen = []
        v = Visualizer(FAST, array=[5, 3, 8, 1], listeners=[seen.append])
        v.start("bubble", block=True)
        self.assertEqual(v.display_array, [1, 3, 5, 8])
        self.assertEqual((v.stats.comparisons, v.stats.swaps), (6, 4))
        self.assertIsInstance(seen[0], events.RunStarted)

    def test_changes_rejected_while_running(self):
        v = Visualizer(SLOW)
        v.start()
        try:
            self.assertTrue(v.is_active)
            with self.assertRaises(RunInProgressError):
                v.configure(delay_ms=1)
            with self.assertRaises(RunInProgressError):
                v.regenerate()
            with self.assertRaises(RunInProgressError):
                v.set_array([1, 2, 3])
            self.assertEqual(v.config, SLOW)
        finally:
            v.stop()
        self.assertEqual(v.state.status, PlaybackStatus.STOPPED)
        self.assertEqual(v.configure(delay_ms=1).delay_ms, 1)

    def test_start_while_running_stops_previous_run(self):
        v = Visualizer(SLOW)
        v.start("bubble")
        first = v.scheduler
        try:
            v.start("merge")
            self.assertEqual(first.status, PlaybackStatus.STOPPED)
            self.assertIsNot(v.scheduler, first)
            self.assertTrue(v.is_active)
            self.assertEqual(v.trace.algorithm, "merge")
        finally:
            v.stop()

    def test_changes_drain_a_finalization_pass(self):
        config = Configuration(array_length=25, delay_ms=0, finalize_delay_ms=20, algorithm="bubble", seed=11)
        changes = {
            "regenerate": lambda v: v.regenerate(),
            "set_array": lambda v: v.set_array([3, 1, 2]),
            "configure": lambda v: v.configure(delay_ms=1),
        }
        for name, change in changes.items():
            with self.subTest(change=name):
                seen = []
                v = Visualizer(config, listeners=[seen.append])
                v.start()
                self.assertTrue(wait_for(lambda: any(isinstance(e, events.RunCompleted) for e in seen)))
                old = v.scheduler
                self.assertFalse(v.is_active)

                change(v)
                self.assertTrue(old.wait(timeout=0))
                drained = len(seen)
                time.sleep(0.1)
                self.assertEqual(len(seen), drained)
                self.assertLess(sum(isinstance(e, events.MarkSorted) for e in seen), config.array_length)

    def test_start_drains_a_blocking_run_in_another_thread(self):
        seen = []
        v = Visualizer(SLOW.updated(delay_ms=30), listeners=[seen.append])
        player = threading.Thread(target=v.start, kwargs={"block": True}, daemon=True)
        player.start()
        self.assertTrue(wait_for(lambda: v.is_active))
        first = v.scheduler

        v.start("merge")
        try:
            player.join(timeout=5)
            self.assertFalse(player.is_alive())
            second = v.scheduler
            self.assertIsNot(second, first)
            self.assertTrue(wait_for(lambda: v.stats.run_id == second.run_id))

            positions = {(type(e), e.run_id): i for i, e in enumerate(list(seen))
                         if isinstance(e, (events.RunStarted, events.RunStopped))}
            self.assertLess(positions[(events.RunStopped, first.run_id)],
                            positions[(events.RunStarted, second.run_id)])
        finally:
            v.stop()

        last = [e for e in seen if isinstance(e, events.RunStopped)][-1]
        self.assertEqual(last.run_id, v.scheduler.run_id)
        self.assertEqual(v.stats.elapsed, last.elapsed)

    def test_invalid_algorithm_is_rejected_first(self):
        v = Visualizer(FAST)
        v.start(block=True)
        scheduler, trace = v.scheduler, v.trace
        with self.assertRaises(UnsupportedAlgorithmError):
            v.start("bogo")
        self.assertIs(v.scheduler, scheduler)
        self.assertIs(v.trace, trace)

    def test_invalid_configuration_is_rejected(self):
        v = Visualizer(FAST)
        with self.assertRaises(InvalidConfigurationError):
            v.configure(min_value=500, max_value=100)
        self.assertEqual(v.config, FAST)

    def test_regenerate_resets_statistics(self):
        v = Visualizer(FAST)
        v.start(block=True)
        self.assertGreater(v.stats.comparisons, 0)
        v.configure(array_length=40, seed=None)
        array = v.regenerate()
        self.assertEqual(len(array), 40)
        self.assertEqual(v.stats.snapshot(), {"comparisons": 0, "swaps": 0, "elapsed": 0.0})
        self.assertEqual(v.state.status, PlaybackStatus.IDLE)

    def test_pause_and_resume_pass_through(self):
        v = Visualizer(SLOW)
        self.assertFalse(v.pause())
        v.start()
        try:
            self.assertTrue(v.pause())
            self.assertTrue(v.resume())
        finally:
            v.stop()
        self.assertTrue(v.wait(timeout=5))


if __name__ == '__main__':
    unittest.main()

"""
Tests for the sortviz console script.
"""

import json
import tempfile
import unittest
from pathlib import Path

from sortviz.cli import build_parser, main, parse_array
from sortviz.dispatcher import record
from sortviz.validate import load_trace


class TestCli(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_parse_array(self):
        self.assertEqual(parse_array("5,3, 8,1"), [5, 3, 8, 1])

    def test_record(self):
        out = self.tmp / "bubble.json"
        self.assertEqual(main(["record", "bubble", "--array", "5,3,8,1", "--output", str(out)]), 0)
        self.assertEqual(load_trace(out), record("bubble", [5, 3, 8, 1]))

    def test_record_random_from_config_file(self):
        config = self.tmp / "config.json"
        config.write_text(json.dumps({"algorithm": "heap", "array_length": 15, "seed": 4}), encoding='utf-8')
        out = self.tmp / "heap.json"
        self.assertEqual(main(["--config", str(config), "record", "--output", str(out)]), 0)
        trace = load_trace(out)
        self.assertEqual(trace.algorithm, "heap")
        self.assertEqual(len(trace.initial_array), 15)

    def test_play_with_frames(self):
        frames = self.tmp / "frames"
        log_file = self.tmp / "logs" / "play.log"
        code = main(["--log-file", str(log_file), "play", "quick", "--size", "8", "--seed", "2",
                     "--delay-ms", "0", "--frames-dir", str(frames), "--frame-every", "10"])
        self.assertEqual(code, 0)
        self.assertTrue(list(frames.glob("frame_*.png")))
        self.assertTrue(log_file.exists())

    def test_verify(self):
        self.assertEqual(main(["verify", "--trials", "5", "--max-length", "30", "--seed", "1"]), 0)

    def test_invalid_configuration_exits_with_error(self):
        self.assertEqual(main(["play", "bubble", "--min", "50", "--max", "10", "--delay-ms", "0"]), 1)
        bad = self.tmp / "bad.json"
        bad.write_text("{oops", encoding='utf-8')
        self.assertEqual(main(["--config", str(bad), "record", "bubble", "--output", str(self.tmp / "x.json")]), 1)

    def test_wrongly_typed_config_file_exits_with_error(self):
        for overrides in ({"delay_ms": "fast"}, {"steps_per_second": "10"}, {"sound": "yes"}):
            with self.subTest(overrides=overrides):
                config = self.tmp / "typed.json"
                config.write_text(json.dumps(overrides), encoding='utf-8')
                self.assertEqual(main(["--config", str(config), "play", "bubble", "--size", "5"]), 1)

    def test_unknown_algorithm_rejected_by_parser(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args(["record", "bogo"])


if __name__ == '__main__':
    unittest.main()

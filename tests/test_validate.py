"""
Tests for the trace document format: schema validation and file round trip.
"""

import json
import tempfile
import unittest
from pathlib import Path

from sortviz.dispatcher import record
from sortviz.errors import TraceFormatError
from sortviz.steps import Compare, MarkSorted, Overwrite, Swap, step_from_dict
from sortviz.trace import Trace
from sortviz.validate import (TRACE_VERSION, dump_trace, load_trace, trace_from_document,
                              trace_to_document, validate_trace_document)


class TestStepDicts(unittest.TestCase):

    def test_dict_forms(self):
        self.assertEqual(Compare(0, 1).to_dict(), {"op": "compare", "params": {"indices": [0, 1]}})
        self.assertEqual(Overwrite(2, 40).to_dict(), {"op": "overwrite", "params": {"index": 2, "value": 40}})
        self.assertEqual(step_from_dict({"op": "swap", "params": {"indices": [3, 4]}}), Swap(3, 4))
        self.assertEqual(step_from_dict({"op": "markSorted", "params": {"index": 5}}), MarkSorted(5))

    def test_unknown_op(self):
        with self.assertRaises(TraceFormatError):
            step_from_dict({"op": "rotate", "params": {}})
        with self.assertRaises(TraceFormatError):
            step_from_dict({"op": "compare", "params": {"indices": [1]}})


class TestTraceDocument(unittest.TestCase):

    def setUp(self):
        self.trace = record("merge", [5, 3, 8, 1, 3])

    def test_document_shape(self):
        doc = trace_to_document(self.trace)
        self.assertEqual(doc["trace_version"], TRACE_VERSION)
        self.assertEqual(doc["algorithm"], {"key": "merge", "name": "Merge Sort", "family": "Sorting"})
        self.assertEqual(doc["summary"], self.trace.counts())
        validate_trace_document(doc)

    def test_document_round_trip(self):
        doc = json.loads(json.dumps(trace_to_document(self.trace)))
        self.assertEqual(trace_from_document(doc), self.trace)

    def test_schema_violation(self):
        doc = trace_to_document(self.trace)
        doc["steps"][0] = {"op": "compare", "params": {"indices": [0]}}
        with self.assertRaises(TraceFormatError) as ctx:
            validate_trace_document(doc)
        self.assertEqual(ctx.exception.path[:2], ["steps", 0])

    def test_index_out_of_range(self):
        doc = trace_to_document(Trace("bubble", [2, 1], [Swap(0, 5)]))
        with self.assertRaises(TraceFormatError):
            validate_trace_document(doc)

    def test_unknown_algorithm_key(self):
        doc = trace_to_document(self.trace)
        doc["algorithm"]["key"] = "bogo"
        with self.assertRaises(TraceFormatError):
            validate_trace_document(doc)


class TestTraceFiles(unittest.TestCase):

    def test_dump_and_load(self):
        trace = record("heap", [9, 4, 7, 1, 8])
        with tempfile.TemporaryDirectory() as tmp:
            path = dump_trace(trace, Path(tmp) / "out" / "heap.json")
            self.assertTrue(path.exists())
            self.assertEqual(load_trace(path), trace)

    def test_load_errors(self):
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing.json"
            with self.assertRaises(TraceFormatError):
                load_trace(missing)
            broken = Path(tmp) / "broken.json"
            broken.write_text("{not json", encoding='utf-8')
            with self.assertRaises(TraceFormatError):
                load_trace(broken)


if __name__ == '__main__':
    unittest.main()

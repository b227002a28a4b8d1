# validate.py
#
# Trace document format: JSON Schema, validation, and file round trip.

import json
import logging
from pathlib import Path

import jsonschema

from .dispatcher import algorithm_info, normalize_algorithm
from .errors import TraceFormatError, UnsupportedAlgorithmError
from .steps import step_from_dict
from .trace import Trace

logger = logging.getLogger(__name__)

TRACE_VERSION = "1.0"

_INDEX = {"type": "integer", "minimum": 0}

TRACE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "sortviz trace",
    "type": "object",
    "required": ["trace_version", "algorithm", "initial_array", "steps"],
    "properties": {
        "trace_version": {"const": TRACE_VERSION},
        "algorithm": {
            "type": "object",
            "required": ["key", "name", "family"],
            "properties": {
                "key": {"type": "string"},
                "name": {"type": "string"},
                "family": {"type": "string"},
            },
        },
        "initial_array": {"type": "array", "items": {"type": "number"}},
        "steps": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["op", "params"],
                "oneOf": [
                    {
                        "properties": {
                            "op": {"enum": ["compare", "swap"]},
                            "params": {
                                "type": "object",
                                "required": ["indices"],
                                "properties": {
                                    "indices": {"type": "array", "items": _INDEX, "minItems": 2, "maxItems": 2},
                                },
                            },
                        },
                    },
                    {
                        "properties": {
                            "op": {"const": "overwrite"},
                            "params": {
                                "type": "object",
                                "required": ["index", "value"],
                                "properties": {"index": _INDEX, "value": {"type": "number"}},
                            },
                        },
                    },
                    {
                        "properties": {
                            "op": {"const": "markSorted"},
                            "params": {
                                "type": "object",
                                "required": ["index"],
                                "properties": {"index": _INDEX},
                            },
                        },
                    },
                ],
            },
        },
        "summary": {
            "type": "object",
            "properties": {
                "comparisons": _INDEX,
                "swaps": _INDEX,
                "overwrites": _INDEX,
                "steps": _INDEX,
            },
        },
    },
}


def trace_to_document(trace: Trace) -> dict:
    info = algorithm_info(trace.algorithm)
    doc = trace.to_dict()
    return {
        "trace_version": TRACE_VERSION,
        "algorithm": {"key": trace.algorithm, **info},
        "initial_array": doc["initial_array"],
        "steps": doc["steps"],
        "summary": trace.counts(),
    }


def validate_trace_document(data: dict):
    """
    Check `data` against TRACE_SCHEMA, then check that every step index is
    inside the initial array. Raises TraceFormatError on the first problem.
    """
    try:
        jsonschema.validate(instance=data, schema=TRACE_SCHEMA)
    except jsonschema.exceptions.ValidationError as e:
        raise TraceFormatError(e.message, e.absolute_path) from e

    n = len(data["initial_array"])
    for idx, step in enumerate(data["steps"]):
        params = step["params"]
        indices = params.get("indices", [params.get("index")])
        for i in indices:
            if i >= n:
                raise TraceFormatError(f"Index {i} out of range for an array of {n}", ["steps", idx])

    try:
        normalize_algorithm(data["algorithm"]["key"])
    except UnsupportedAlgorithmError as e:
        raise TraceFormatError(str(e), ["algorithm", "key"]) from e
    return data


def trace_from_document(data: dict) -> Trace:
    validate_trace_document(data)
    steps = [step_from_dict(s) for s in data["steps"]]
    return Trace(normalize_algorithm(data["algorithm"]["key"]), data["initial_array"], steps)


def dump_trace(trace: Trace, path):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(trace_to_document(trace), f, indent=2, ensure_ascii=False)
    logger.info(f"Trace saved to: {path.resolve()}")
    return path


def load_trace(path) -> Trace:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except FileNotFoundError as e:
        raise TraceFormatError(f"File not found: {path}") from e
    except json.JSONDecodeError as e:
        raise TraceFormatError(f"File content is not valid JSON format: {path}: {e.msg}") from e
    return trace_from_document(data)

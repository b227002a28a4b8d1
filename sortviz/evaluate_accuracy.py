# evaluate_accuracy.py
#
# Randomised self-test: record every algorithm over random arrays, replay the
# trace and compare the result with Python's sorted().

import logging

import numpy as np
from tqdm import tqdm

from .dispatcher import ALGORITHMS, normalize_algorithm, record

logger = logging.getLogger(__name__)

DEFAULT_TRIALS = 100
DEFAULT_MAX_LENGTH = 200
VALUE_RANGE = (-1000, 1000)


def check_trace(trace):
    """Return None if `trace` sorts its input, else a short failure reason."""
    expected = sorted(trace.initial_array)
    result = trace.final_array()
    if result == expected:
        return None
    for i, (got, want) in enumerate(zip(result, expected)):
        if got != want:
            return f"index {i}: got {got}, expected {want}"
    return f"length mismatch: got {len(result)}, expected {len(expected)}"


def evaluate_algorithms(algorithms=ALGORITHMS, trials=DEFAULT_TRIALS, max_length=DEFAULT_MAX_LENGTH,
                        seed=None, progress=True):
    """
    Run `trials` random arrays (length in [1, max_length], values in
    VALUE_RANGE) through each algorithm.

    Returns {algorithm: {"passed", "failed", "comparisons", "swaps",
    "first_failure"}}, where first_failure is None or
    {"input": [...], "reason": str}.
    """
    names = [normalize_algorithm(a) for a in algorithms]
    rng = np.random.default_rng(seed)
    report = {name: {"passed": 0, "failed": 0, "comparisons": 0, "swaps": 0, "first_failure": None}
              for name in names}

    for _ in tqdm(range(trials), desc="Verifying traces", disable=not progress):
        length = int(rng.integers(1, max_length, endpoint=True))
        array = [int(v) for v in rng.integers(VALUE_RANGE[0], VALUE_RANGE[1], size=length, endpoint=True)]
        for name in names:
            trace = record(name, array)
            stats = report[name]
            counts = trace.counts()
            stats["comparisons"] += counts["comparisons"]
            stats["swaps"] += counts["swaps"]

            reason = check_trace(trace)
            if reason is None:
                stats["passed"] += 1
                continue
            stats["failed"] += 1
            if stats["first_failure"] is None:
                stats["first_failure"] = {"input": array, "reason": reason}
                logger.error(f"Sorting mismatch for {name}: {reason}")

    for name, stats in report.items():
        total = stats["passed"] + stats["failed"]
        logger.info(f"{name}: {stats['passed']}/{total} passed")
    return report


def all_passed(report):
    return all(stats["failed"] == 0 for stats in report.values())

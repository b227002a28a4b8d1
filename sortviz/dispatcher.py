# dispatcher.py
#
# Maps algorithm keys to their step generators and records traces.

import logging

from .errors import UnsupportedAlgorithmError
from .trace import Trace
from .sort import bubble_sort_tracker, selection_sort_tracker, insertion_sort_tracker
from .sort import merge_sort_tracker, quicksort_tracker, heap_sort_tracker

logger = logging.getLogger(__name__)

# --- 1. Build algorithm mapping table ---
# Map algorithm keys to (step generator, algorithm info)
ALGORITHM_DISPATCH_TABLE = {
    "bubble": (bubble_sort_tracker.generate_bubble_sort_steps, bubble_sort_tracker.ALGORITHM_INFO),
    "selection": (selection_sort_tracker.generate_selection_sort_steps, selection_sort_tracker.ALGORITHM_INFO),
    "insertion": (insertion_sort_tracker.generate_insertion_sort_steps, insertion_sort_tracker.ALGORITHM_INFO),
    "merge": (merge_sort_tracker.generate_merge_sort_steps, merge_sort_tracker.ALGORITHM_INFO),
    "quick": (quicksort_tracker.generate_quicksort_steps, quicksort_tracker.ALGORITHM_INFO),
    "heap": (heap_sort_tracker.generate_heap_sort_steps, heap_sort_tracker.ALGORITHM_INFO),
}

ALGORITHMS = tuple(ALGORITHM_DISPATCH_TABLE)

_ALIASES = {
    "quicksort": "quick",
}


def normalize_algorithm(key):
    """Return the canonical key for `key`, e.g. 'Bubble_Sort' -> 'bubble'."""
    if not isinstance(key, str):
        raise UnsupportedAlgorithmError(key, ALGORITHMS)
    name = key.strip().lower().replace("-", "_")
    if name.endswith("_sort"):
        name = name[:-len("_sort")]
    name = _ALIASES.get(name, name)
    if name not in ALGORITHM_DISPATCH_TABLE:
        raise UnsupportedAlgorithmError(key, ALGORITHMS)
    return name


def algorithm_info(key):
    return dict(ALGORITHM_DISPATCH_TABLE[normalize_algorithm(key)][1])


def iter_steps(key, array):
    """
    Return a live step generator for `key` over a private copy of `array`.

    The algorithm only advances when the next step is pulled, which is what
    the scheduler's live mode relies on.
    """
    tracker_function, _ = ALGORITHM_DISPATCH_TABLE[normalize_algorithm(key)]
    return tracker_function(list(array))


def record(key, array):
    """Run algorithm `key` to completion against a copy of `array` and return its Trace."""
    name = normalize_algorithm(key)
    snapshot = tuple(array)
    tracker_function, _ = ALGORITHM_DISPATCH_TABLE[name]
    trace = Trace(name, snapshot, tracker_function(list(snapshot)))
    logger.debug(f"Recorded {name} over {len(snapshot)} elements: {len(trace)} steps")
    return trace

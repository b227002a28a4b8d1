# events.py
#
# Events the playback scheduler emits. Display collaborators care about the
# first group, the statistics tracker about the second.
# Lifecycle events carry the id of the run that produced them.

from dataclasses import dataclass, field
from typing import Tuple


# --- Display events ---

@dataclass(frozen=True)
class RunStarted:
    algorithm: str
    length: int
    total_steps: int = None  # None in live mode, where the length is unknown
    run_id: int = field(default=None, compare=False)


@dataclass(frozen=True)
class Highlight:
    indices: Tuple[int, ...]
    kind: str = "compare"


@dataclass(frozen=True)
class Unhighlight:
    indices: Tuple[int, ...]


@dataclass(frozen=True)
class SetHeight:
    index: int
    value: int


@dataclass(frozen=True)
class Tone:
    index: int
    frequency: float


@dataclass(frozen=True)
class MarkSorted:
    index: int


@dataclass(frozen=True)
class RunCompleted:
    steps: int
    elapsed: float
    run_id: int = field(default=None, compare=False)


@dataclass(frozen=True)
class RunStopped:
    step_index: int
    elapsed: float
    run_id: int = field(default=None, compare=False)


# --- Statistics events ---

@dataclass(frozen=True)
class ComparisonOccurred:
    indices: Tuple[int, int]


@dataclass(frozen=True)
class SwapOccurred:
    indices: Tuple[int, int]


@dataclass(frozen=True)
class TimeTick:
    elapsed: float

# steps.py
#
# Atomic trace steps. A step is immutable and carries no timing; the playback
# scheduler assigns time when it consumes the step.

from dataclasses import dataclass

from .errors import TraceFormatError


@dataclass(frozen=True)
class Compare:
    i: int
    j: int

    op = "compare"

    @property
    def indices(self):
        return (self.i, self.j)

    def to_dict(self):
        return {"op": self.op, "params": {"indices": [self.i, self.j]}}


@dataclass(frozen=True)
class Swap:
    i: int
    j: int

    op = "swap"

    @property
    def indices(self):
        return (self.i, self.j)

    def to_dict(self):
        return {"op": self.op, "params": {"indices": [self.i, self.j]}}


@dataclass(frozen=True)
class Overwrite:
    """Index i is set directly to value, without a symmetric partner."""
    index: int
    value: int

    op = "overwrite"

    @property
    def indices(self):
        return (self.index,)

    def to_dict(self):
        return {"op": self.op, "params": {"index": self.index, "value": self.value}}


@dataclass(frozen=True)
class MarkSorted:
    index: int

    op = "markSorted"

    @property
    def indices(self):
        return (self.index,)

    def to_dict(self):
        return {"op": self.op, "params": {"index": self.index}}


STEP_TYPES = {cls.op: cls for cls in (Compare, Swap, Overwrite, MarkSorted)}


def step_from_dict(data: dict):
    """Rebuild a step from its {"op": ..., "params": {...}} form."""
    op_name = data.get("op")
    params = data.get("params", {})
    if op_name not in STEP_TYPES:
        raise TraceFormatError(f"Unknown step operation '{op_name}'")

    try:
        if op_name in ("compare", "swap"):
            i, j = params["indices"]
            return STEP_TYPES[op_name](int(i), int(j))
        if op_name == "overwrite":
            return Overwrite(int(params["index"]), params["value"])
        return MarkSorted(int(params["index"]))
    except (KeyError, TypeError, ValueError) as e:
        raise TraceFormatError(f"Malformed '{op_name}' step: {e}") from e

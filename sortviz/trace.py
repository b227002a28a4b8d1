# trace.py
#
# A Trace is the ordered step sequence produced by one algorithm run over one
# input snapshot. Replaying it against a copy of that snapshot reproduces every
# intermediate state and the final sorted array.

from .steps import Compare, Swap, Overwrite, MarkSorted


def apply_step(step, array):
    """Apply one step to `array` in place. Compare and MarkSorted do not mutate."""
    if isinstance(step, Swap):
        array[step.i], array[step.j] = array[step.j], array[step.i]
    elif isinstance(step, Overwrite):
        array[step.index] = step.value
    elif not isinstance(step, (Compare, MarkSorted)):
        raise TypeError(f"Not a trace step: {step!r}")
    return array


def replay(steps, array):
    """Return a new list: `array` after every step in `steps` has been applied."""
    state = list(array)
    for step in steps:
        apply_step(step, state)
    return state


def count_steps(steps):
    counts = {"comparisons": 0, "swaps": 0, "overwrites": 0, "steps": 0}
    for step in steps:
        counts["steps"] += 1
        if isinstance(step, Compare):
            counts["comparisons"] += 1
        elif isinstance(step, Swap):
            counts["swaps"] += 1
        elif isinstance(step, Overwrite):
            counts["overwrites"] += 1
    return counts


class Trace:
    """
    Immutable recorded trace.

    Holds the algorithm key, the input snapshot it was recorded from and the
    steps in recording order. Two traces are equal when all three match.
    """

    __slots__ = ("_algorithm", "_initial_array", "_steps")

    def __init__(self, algorithm, initial_array, steps):
        self._algorithm = algorithm
        self._initial_array = tuple(initial_array)
        self._steps = tuple(steps)

    @property
    def algorithm(self):
        return self._algorithm

    @property
    def initial_array(self):
        return self._initial_array

    @property
    def steps(self):
        return self._steps

    def __len__(self):
        return len(self._steps)

    def __iter__(self):
        return iter(self._steps)

    def __getitem__(self, index):
        return self._steps[index]

    def __eq__(self, other):
        if not isinstance(other, Trace):
            return NotImplemented
        return (self._algorithm, self._initial_array, self._steps) == \
               (other._algorithm, other._initial_array, other._steps)

    def __hash__(self):
        return hash((self._algorithm, self._initial_array, self._steps))

    def __repr__(self):
        return f"Trace(algorithm={self._algorithm!r}, n={len(self._initial_array)}, steps={len(self._steps)})"

    def counts(self):
        return count_steps(self._steps)

    def final_array(self):
        return replay(self._steps, self._initial_array)

    def to_dict(self):
        return {
            "algorithm": self._algorithm,
            "initial_array": list(self._initial_array),
            "steps": [step.to_dict() for step in self._steps],
        }

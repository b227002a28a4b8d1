# stats.py

import threading

from . import events


class StatisticsTracker:
    """
    Listener that counts consumed comparisons and swaps and keeps the last
    sampled elapsed time.

    It only ever sees what the scheduler has dispatched, so its counts match
    the steps played so far, never the steps merely recorded. Overwrites are
    not swaps. A RunStarted event resets the counters and binds the tracker
    to that run: RunCompleted and RunStopped from any other run are ignored.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.reset()

    def reset(self):
        with self._lock:
            self.comparisons = 0
            self.swaps = 0
            self.elapsed = 0.0
            self.ticks = 0
            self.run_id = None

    def __call__(self, event):
        if isinstance(event, events.RunStarted):
            self.reset()
            with self._lock:
                self.run_id = event.run_id
            return
        with self._lock:
            if isinstance(event, events.ComparisonOccurred):
                self.comparisons += 1
            elif isinstance(event, events.SwapOccurred):
                self.swaps += 1
            elif isinstance(event, events.TimeTick):
                self.elapsed = event.elapsed
                self.ticks += 1
            elif isinstance(event, (events.RunCompleted, events.RunStopped)):
                if event.run_id is None or event.run_id == self.run_id:
                    self.elapsed = event.elapsed

    def snapshot(self):
        with self._lock:
            return {"comparisons": self.comparisons, "swaps": self.swaps, "elapsed": self.elapsed}

    def __repr__(self):
        return (f"StatisticsTracker(comparisons={self.comparisons}, swaps={self.swaps}, "
                f"elapsed={self.elapsed:.3f})")

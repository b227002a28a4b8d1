# player.py
#
# Playback scheduler: consumes a trace (or a live step generator) and turns
# every step into timed display and statistics events.

import itertools
import logging
import threading
import time
from dataclasses import dataclass, replace
from enum import Enum

from . import events
from .default_styles import DEFAULT_STYLES
from .errors import PlaybackError
from .steps import Compare, Swap, Overwrite, MarkSorted
from .trace import Trace

logger = logging.getLogger(__name__)

_run_ids = itertools.count(1)


class PlaybackStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    STOPPED = "stopped"

    @property
    def is_active(self):
        return self in (PlaybackStatus.RUNNING, PlaybackStatus.PAUSED)

    @property
    def is_terminal(self):
        return self in (PlaybackStatus.COMPLETED, PlaybackStatus.STOPPED)


@dataclass(frozen=True)
class PlaybackState:
    step_index: int = 0
    status: PlaybackStatus = PlaybackStatus.IDLE
    comparisons: int = 0
    swaps: int = 0
    elapsed: float = 0.0


def tone_frequency(value, min_value, max_value,
                   min_frequency=DEFAULT_STYLES["sound"]["min_frequency"],
                   max_frequency=DEFAULT_STYLES["sound"]["max_frequency"]):
    """Linear map of `value` in [min_value, max_value] onto [min_frequency, max_frequency]."""
    if max_value <= min_value:
        return float(min_frequency)
    ratio = (value - min_value) / (max_value - min_value)
    ratio = min(max(ratio, 0.0), 1.0)
    return min_frequency + ratio * (max_frequency - min_frequency)


class PlaybackScheduler:
    """
    Replays steps against a display copy of the array at a fixed per-step delay.

    State machine: IDLE -> RUNNING -> {PAUSED <-> RUNNING} -> {COMPLETED | STOPPED}.

    `steps` is either a recorded Trace or any iterable of steps. A generator
    from `dispatcher.iter_steps` gives the live mode: the algorithm only runs
    as far as the scheduler has pulled.

    `run()` plays in the calling thread; `start()` plays on a worker thread.
    Stop and pause requests are observed before each step and inside every
    delay, so stop takes effect within one step interval. A step whose display
    change was made before stop is still announced in full; after that the
    only event emitted is RunStopped.
    """

    def __init__(self, steps, array=None, *, delay=0.0, algorithm=None, sound=False,
                 value_range=None, finalize_delay=0.0, tick_interval=0.1, listeners=()):
        self._lock = threading.RLock()
        self._listeners = list(listeners)
        self._delay = float(delay)
        self._sound = sound
        self._finalize_delay = float(finalize_delay)
        self._tick_interval = float(tick_interval)
        if self._delay < 0 or self._finalize_delay < 0 or self._tick_interval <= 0:
            raise PlaybackError("Delays must be non-negative and the tick interval positive")
        self._value_range = value_range
        self._load(steps, array, algorithm)

    def _load(self, steps, array, algorithm):
        if isinstance(steps, Trace):
            array = steps.initial_array if array is None else array
            algorithm = algorithm or steps.algorithm
            self._total_steps = len(steps)
        else:
            self._total_steps = len(steps) if hasattr(steps, "__len__") else None
        if array is None:
            raise PlaybackError("An initial array is required to play a bare step sequence")

        self._steps = steps
        self._algorithm = algorithm or "unknown"
        self._display = list(array)
        self._state = PlaybackState()
        self._stop_event = threading.Event()
        self._resume_event = threading.Event()
        self._resume_event.set()
        self._player = None
        self._finished = threading.Event()
        self._run_id = next(_run_ids)
        self.error = None

        self._started_at = None
        self._paused_total = 0.0
        self._pause_began = None
        self._last_tick = 0.0

        if self._value_range is None and self._display:
            self._range = (min(self._display), max(self._display))
        else:
            self._range = self._value_range or (0, 0)

    # =================================================================
    # Observers
    # =================================================================

    def subscribe(self, listener):
        with self._lock:
            self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener):
        with self._lock:
            self._listeners.remove(listener)

    @property
    def state(self):
        with self._lock:
            if self._state.status.is_active:
                return replace(self._state, elapsed=self._elapsed())
            return self._state

    @property
    def status(self):
        return self.state.status

    @property
    def display_array(self):
        with self._lock:
            return list(self._display)

    @property
    def is_active(self):
        return self.status.is_active

    @property
    def run_id(self):
        return self._run_id

    # =================================================================
    # Controls
    # =================================================================

    def run(self):
        """Play to completion (or stop) in the calling thread."""
        self._begin(threading.current_thread())
        finished = self._finished
        try:
            self._play()
        except BaseException:
            self._set_status(PlaybackStatus.STOPPED)
            raise
        finally:
            finished.set()
        return self.state

    def start(self):
        """Play on a daemon worker thread and return immediately."""
        thread = threading.Thread(target=self._run_worker, args=(self._finished,),
                                  name=f"playback-{self._algorithm}", daemon=True)
        self._begin(thread)
        thread.start()
        return thread

    def pause(self):
        with self._lock:
            if self._state.status is not PlaybackStatus.RUNNING:
                logger.debug(f"Ignoring pause while {self._state.status.value}")
                return False
            self._resume_event.clear()
        return True

    def resume(self):
        with self._lock:
            if not self._state.status.is_active:
                logger.debug(f"Ignoring resume while {self._state.status.value}")
                return False
            self._resume_event.set()
        return True

    def stop(self, wait=True, timeout=None):
        """
        Request cancellation. Returns True if a run (or its finalization pass)
        was interrupted. With `wait`, blocks until the playing thread has
        drained, whether it came from start() or run(), unless called from
        that thread itself (e.g. from a listener).
        """
        with self._lock:
            status = self._state.status
            if status is PlaybackStatus.IDLE:
                self._state = replace(self._state, status=PlaybackStatus.STOPPED)
                return True
            if status.is_terminal and not self._playing():
                return False
            self._stop_event.set()
            self._resume_event.set()
            player, finished = self._player, self._finished

        if wait and threading.current_thread() is not player:
            finished.wait(timeout)
        return True

    def wait(self, timeout=None):
        """Block until the playing thread has finished; True once it has."""
        if self._player is None or threading.current_thread() is self._player:
            return not self.is_active
        return self._finished.wait(timeout)

    def reset(self, steps, array=None, algorithm=None):
        """Return a finished scheduler to IDLE with a new trace."""
        with self._lock:
            if self._state.status.is_active:
                raise PlaybackError("Cannot reset a scheduler while it is running or paused")
        if self._playing():
            self.stop(wait=True)
        with self._lock:
            self._load(steps, array, algorithm)

    # =================================================================
    # Playback loop
    # =================================================================

    def _playing(self):
        """True from _begin until the playing thread leaves the loop, finalization included."""
        return self._player is not None and not self._finished.is_set()

    def _begin(self, player):
        with self._lock:
            if self._state.status is not PlaybackStatus.IDLE:
                raise PlaybackError(f"Scheduler already used (status: {self._state.status.value})")
            self._player = player
            self._started_at = time.monotonic()
            self._state = replace(self._state, status=PlaybackStatus.RUNNING)
        logger.info(f"Playback of '{self._algorithm}' started over {len(self._display)} elements")

    def _run_worker(self, finished):
        try:
            self._play()
        except Exception as e:
            self.error = e
            self._set_status(PlaybackStatus.STOPPED)
            logger.exception(f"Playback of '{self._algorithm}' failed")
        finally:
            finished.set()

    def _play(self):
        self._emit(events.RunStarted(self._algorithm, len(self._display), self._total_steps, self._run_id))

        iterator = iter(self._steps)
        while True:
            if not self._checkpoint():
                return self._finish_stopped()
            try:
                step = next(iterator)
            except StopIteration:
                break
            if not self._apply(step):
                return self._finish_stopped()

        self._finish_completed()
        self._finalize()

    def _apply(self, step):
        """Apply one step and wait out its delay. False once stop is observed."""
        if isinstance(step, Compare):
            if not self._consume(comparisons=1):
                return False
            self._emit(events.ComparisonOccurred(step.indices), force=True)
            self._emit(events.Highlight(step.indices, "compare"), force=True)
            if not self._sleep(self._delay):
                # The pending revert is revoked
                return False
            self._emit(events.Unhighlight(step.indices))
            return True

        # The display only changes if stop has not been requested, and a
        # change that was made is always announced.
        if isinstance(step, Swap):
            with self._lock:
                if not self._consume(swaps=1):
                    return False
                d = self._display
                d[step.i], d[step.j] = d[step.j], d[step.i]
                updates = [(step.i, d[step.i]), (step.j, d[step.j])]
            self._emit(events.SwapOccurred(step.indices), force=True)
            self._emit_heights(updates)
        elif isinstance(step, Overwrite):
            with self._lock:
                if not self._consume():
                    return False
                self._display[step.index] = step.value
            self._emit_heights([(step.index, step.value)])
        elif isinstance(step, MarkSorted):
            if not self._consume():
                return False
            self._emit(events.MarkSorted(step.index), force=True)
        else:
            raise PlaybackError(f"Not a trace step: {step!r}")

        return self._sleep(self._delay)

    def _consume(self, comparisons=0, swaps=0):
        """Count one step as played. False, counting nothing, if stop came first."""
        with self._lock:
            if self._stop_event.is_set():
                return False
            s = self._state
            self._state = replace(s, step_index=s.step_index + 1,
                                  comparisons=s.comparisons + comparisons, swaps=s.swaps + swaps)
        logger.debug(f"Consumed step {self._state.step_index}")
        return True

    def _emit_heights(self, updates):
        for index, value in updates:
            self._emit(events.SetHeight(index, value), force=True)
            if self._sound:
                self._emit(events.Tone(index, tone_frequency(value, *self._range)), force=True)

    def _checkpoint(self):
        """Block while paused. False if stop has been requested."""
        if self._stop_event.is_set():
            return False
        if not self._resume_event.is_set():
            with self._lock:
                self._pause_began = time.monotonic()
                self._state = replace(self._state, status=PlaybackStatus.PAUSED, elapsed=self._elapsed())
            logger.info(f"Playback paused at step {self._state.step_index}")
            self._resume_event.wait()
            with self._lock:
                self._paused_total += time.monotonic() - self._pause_began
                self._pause_began = None
                self._state = replace(self._state, status=PlaybackStatus.RUNNING)
            if self._stop_event.is_set():
                return False
            logger.info(f"Playback resumed at step {self._state.step_index}")
        self._maybe_tick()
        return True

    def _sleep(self, duration):
        """Wait `duration` seconds, ticking on schedule. False if stopped meanwhile."""
        deadline = time.monotonic() + duration
        while True:
            self._maybe_tick()
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return not self._stop_event.is_set()
            until_tick = self._tick_interval - (self._elapsed() - self._last_tick)
            if self._stop_event.wait(min(remaining, max(until_tick, 0.001))):
                return False

    def _elapsed(self):
        if self._started_at is None:
            return 0.0
        now = time.monotonic()
        paused = self._paused_total
        if self._pause_began is not None:
            paused += now - self._pause_began
        return now - self._started_at - paused

    def _maybe_tick(self):
        elapsed = self._elapsed()
        if elapsed - self._last_tick >= self._tick_interval:
            self._last_tick = elapsed
            with self._lock:
                self._state = replace(self._state, elapsed=elapsed)
            self._emit(events.TimeTick(elapsed))

    def _finish_completed(self):
        with self._lock:
            elapsed = self._elapsed()
            self._state = replace(self._state, status=PlaybackStatus.COMPLETED, elapsed=elapsed)
        self._emit(events.TimeTick(elapsed))
        self._emit(events.RunCompleted(self._state.step_index, elapsed, self._run_id))
        logger.info(f"Playback of '{self._algorithm}' completed: {self._state.step_index} steps, "
                    f"{self._state.comparisons} comparisons, {self._state.swaps} swaps in {elapsed:.3f}s")

    def _finish_stopped(self):
        with self._lock:
            elapsed = self._elapsed()
            self._state = replace(self._state, status=PlaybackStatus.STOPPED, elapsed=elapsed)
        self._emit(events.RunStopped(self._state.step_index, elapsed, self._run_id), force=True)
        logger.info(f"Playback of '{self._algorithm}' stopped at step {self._state.step_index}")

    def _finalize(self):
        """Mark every index sorted, left to right. A stop request cuts this short."""
        for index in range(len(self._display)):
            if self._stop_event.is_set():
                return
            self._emit(events.MarkSorted(index))
            if self._finalize_delay and self._stop_event.wait(self._finalize_delay):
                return

    def _set_status(self, status):
        with self._lock:
            self._state = replace(self._state, status=status, elapsed=self._elapsed())

    def _emit(self, event, force=False):
        if self._stop_event.is_set() and not force:
            return
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(event)

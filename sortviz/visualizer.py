# visualizer.py
#
# Controller tying the pieces together for one visualizer instance: current
# array, configuration, statistics, and at most one active scheduler.

import logging

from .array_generator import generate_array
from .config import DEFAULT_CONFIG
from .dispatcher import iter_steps, normalize_algorithm, record
from .errors import RunInProgressError
from .player import PlaybackScheduler, PlaybackState
from .stats import StatisticsTracker

logger = logging.getLogger(__name__)


class Visualizer:
    """
    Owns the array and hands snapshots of it to the recorder and scheduler.

    Concurrent-run policy: `start()` while a run is active stops and drains
    that run before a new trace is recorded. Configuration changes and array
    regeneration are rejected with RunInProgressError while a run is active;
    a finished run still in its finalization pass is drained first.
    """

    def __init__(self, config=DEFAULT_CONFIG, array=None, listeners=()):
        self._config = config.validate()
        self._listeners = list(listeners)
        self.stats = StatisticsTracker()
        self.scheduler = None
        self.trace = None
        if array is None:
            self._array = generate_array(config.array_length, config.min_value, config.max_value, config.seed)
        else:
            self._array = list(array)

    @property
    def config(self):
        return self._config

    @property
    def array(self):
        return list(self._array)

    @property
    def state(self):
        if self.scheduler is None:
            return PlaybackState()
        return self.scheduler.state

    @property
    def is_active(self):
        return self.scheduler is not None and self.scheduler.is_active

    @property
    def display_array(self):
        if self.scheduler is None:
            return list(self._array)
        return self.scheduler.display_array

    def subscribe(self, listener):
        self._listeners.append(listener)
        if self.scheduler is not None:
            self.scheduler.subscribe(listener)
        return listener

    def _ensure_idle(self, action):
        if self.is_active:
            raise RunInProgressError(f"Cannot {action} while a run is {self.state.status.value}")

    def _drain(self):
        """Stop and wait out the previous scheduler, including a finalization pass still marking bars sorted."""
        if self.scheduler is not None:
            self.scheduler.stop(wait=True)

    def configure(self, **changes):
        self._ensure_idle("change the configuration")
        self._drain()
        self._config = self._config.updated(**changes)
        logger.info(f"Configuration updated: {changes}")
        return self._config

    def set_array(self, array):
        self._ensure_idle("replace the array")
        self._drain()
        self._array = list(array)
        self.stats.reset()

    def regenerate(self):
        self._ensure_idle("regenerate the array")
        self._drain()
        c = self._config
        self._array = generate_array(c.array_length, c.min_value, c.max_value, c.seed)
        self.stats.reset()
        self.scheduler = None
        logger.info(f"Generated a new array of {len(self._array)} values in [{c.min_value}, {c.max_value}]")
        return self.array

    def start(self, algorithm=None, block=False):
        """
        Record the chosen algorithm over the current array and play it back.

        With `block`, plays in the calling thread and returns the final state.
        """
        name = normalize_algorithm(algorithm or self._config.algorithm)

        if self.is_active:
            logger.info("A run is already active: stopping it before starting a new one")
        self._drain()
        self.stats.reset()

        c = self._config
        if c.live:
            self.trace = None
            steps = iter_steps(name, self._array)
        else:
            self.trace = steps = record(name, self._array)

        self.scheduler = PlaybackScheduler(
            steps, self._array,
            delay=c.delay,
            algorithm=name,
            sound=c.sound,
            value_range=c.value_range,
            finalize_delay=c.finalize_delay_ms / 1000.0,
            tick_interval=c.tick_interval_ms / 1000.0,
            listeners=[self.stats, *self._listeners],
        )
        if block:
            return self.scheduler.run()
        self.scheduler.start()
        return self.scheduler.state

    def pause(self):
        return self.scheduler is not None and self.scheduler.pause()

    def resume(self):
        return self.scheduler is not None and self.scheduler.resume()

    def stop(self, wait=True):
        return self.scheduler is not None and self.scheduler.stop(wait=wait)

    def wait(self, timeout=None):
        return self.scheduler is None or self.scheduler.wait(timeout)

"""
sortviz - record sorting algorithms as step traces and replay them as timed
bar-chart animation events.
"""

from .array_generator import generate_array
from .config import Configuration, DEFAULT_CONFIG, load_config
from .dispatcher import ALGORITHMS, iter_steps, record
from .errors import (SortVizError, InvalidConfigurationError, UnsupportedAlgorithmError,
                     RunInProgressError, PlaybackError, TraceFormatError)
from .player import PlaybackScheduler, PlaybackState, PlaybackStatus
from .stats import StatisticsTracker
from .steps import Compare, Swap, Overwrite, MarkSorted
from .trace import Trace, replay
from .visualizer import Visualizer

__version__ = "0.1.0"

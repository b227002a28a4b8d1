# errors.py
#
# Exception taxonomy. Every failure in sortviz is a local, reportable condition.


class SortVizError(Exception):
    """Base class for all sortviz errors."""


class InvalidConfigurationError(SortVizError, ValueError):
    """Raised before recording starts when a configuration value is unusable."""


class UnsupportedAlgorithmError(InvalidConfigurationError):
    def __init__(self, key, supported=()):
        self.key = key
        self.supported = tuple(supported)
        message = f"Unsupported algorithm '{key}'"
        if self.supported:
            message += f" (expected one of: {', '.join(self.supported)})"
        super().__init__(message)


class RunInProgressError(SortVizError):
    """Raised when a change is requested while a run is Running or Paused."""


class PlaybackError(SortVizError):
    """Raised on an invalid playback scheduler transition."""


class TraceFormatError(SortVizError, ValueError):
    def __init__(self, message, path=()):
        self.path = list(path)
        if self.path:
            message = f"{message} (at {'/'.join(str(p) for p in self.path)})"
        super().__init__(message)

# config.py
#
# Run configuration. Supplied once per run and immutable while it plays.

import json
import logging
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path

from .dispatcher import normalize_algorithm
from .errors import InvalidConfigurationError

logger = logging.getLogger(__name__)

# ============================
# ---------- CONFIG ----------
# ============================

DEFAULT_ARRAY_LENGTH = 100
DEFAULT_MIN_VALUE = 10
DEFAULT_MAX_VALUE = 400
MAX_ARRAY_LENGTH = 10000

# --- Playback ---
DEFAULT_DELAY_MS = 5.0
DEFAULT_FINALIZE_DELAY_MS = 10.0
DEFAULT_TICK_INTERVAL_MS = 100.0

DEFAULT_ALGORITHM = "merge"


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Configuration:
    array_length: int = DEFAULT_ARRAY_LENGTH
    min_value: int = DEFAULT_MIN_VALUE
    max_value: int = DEFAULT_MAX_VALUE
    delay_ms: float = DEFAULT_DELAY_MS
    algorithm: str = DEFAULT_ALGORITHM
    sound: bool = False
    dark_theme: bool = False
    live: bool = False
    finalize_delay_ms: float = DEFAULT_FINALIZE_DELAY_MS
    tick_interval_ms: float = DEFAULT_TICK_INTERVAL_MS
    seed: int = None

    @property
    def value_range(self):
        return (self.min_value, self.max_value)

    @property
    def delay(self):
        """Inter-step delay in seconds."""
        return self.delay_ms / 1000.0

    @property
    def steps_per_second(self):
        return float("inf") if self.delay_ms == 0 else 1000.0 / self.delay_ms

    def validate(self):
        """Raise InvalidConfigurationError if any field is unusable; return self otherwise."""
        length = self.array_length
        if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
            raise InvalidConfigurationError(f"array_length must be a positive integer, got {length!r}")
        if length > MAX_ARRAY_LENGTH:
            raise InvalidConfigurationError(f"array_length {length} exceeds the maximum of {MAX_ARRAY_LENGTH}")
        for name in ("min_value", "max_value"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidConfigurationError(f"{name} must be a non-negative integer, got {value!r}")
        if self.min_value > self.max_value:
            raise InvalidConfigurationError(
                f"Malformed value range: min_value {self.min_value} > max_value {self.max_value}")
        for name in ("delay_ms", "finalize_delay_ms", "tick_interval_ms"):
            value = getattr(self, name)
            if not _is_number(value):
                raise InvalidConfigurationError(f"{name} must be a number, got {value!r}")
            if value < 0:
                raise InvalidConfigurationError(f"{name} must not be negative")
        if self.tick_interval_ms == 0:
            raise InvalidConfigurationError("tick_interval_ms must be positive")
        for name in ("sound", "dark_theme", "live"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise InvalidConfigurationError(f"{name} must be true or false, got {value!r}")
        normalize_algorithm(self.algorithm)
        return self

    def updated(self, **changes):
        """Return a validated copy with `changes` applied."""
        return replace(self, **changes).validate()

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        """
        Build a validated configuration from a plain dict.

        Accepts `steps_per_second` as an alternative to `delay_ms`, and
        `value_range: [min, max]` as an alternative to the two value fields.
        Unknown keys are rejected.
        """
        data = dict(data)
        if "steps_per_second" in data:
            sps = data.pop("steps_per_second")
            if not _is_number(sps) or sps <= 0:
                raise InvalidConfigurationError(f"steps_per_second must be positive, got {sps!r}")
            data["delay_ms"] = 1000.0 / sps
        if "value_range" in data:
            try:
                data["min_value"], data["max_value"] = data.pop("value_range")
            except (TypeError, ValueError) as e:
                raise InvalidConfigurationError(f"value_range must be [min, max]: {e}") from e

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data).validate()


DEFAULT_CONFIG = Configuration()


def load_config(path, base=DEFAULT_CONFIG):
    """Read a JSON object of overrides from `path` and apply it on top of `base`."""
    path = Path(path)
    try:
        overrides = json.loads(path.read_text(encoding='utf-8'))
    except FileNotFoundError as e:
        raise InvalidConfigurationError(f"Config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise InvalidConfigurationError(f"Config file is not valid JSON: {path}: {e}") from e
    if not isinstance(overrides, dict):
        raise InvalidConfigurationError(f"Config file must hold a JSON object: {path}")

    logger.info(f"Loaded configuration overrides from {path}: {sorted(overrides)}")
    return Configuration.from_dict({**base.to_dict(), **overrides})

# array_generator.py

import numpy as np

from .errors import InvalidConfigurationError


def generate_array(length, min_value=10, max_value=400, seed=None):
    """
    Return a fresh list of `length` random ints drawn uniformly from
    [min_value, max_value] (both inclusive).

    `seed` may be an int, None, or an existing numpy Generator.
    """
    if isinstance(length, bool) or not isinstance(length, (int, np.integer)) or length <= 0:
        raise InvalidConfigurationError(f"Array length must be a positive integer, got {length!r}")
    if min_value > max_value:
        raise InvalidConfigurationError(f"Malformed value range: min {min_value} > max {max_value}")

    rng = seed if isinstance(seed, np.random.Generator) else np.random.default_rng(seed)
    values = rng.integers(min_value, max_value, size=int(length), endpoint=True)
    return [int(v) for v in values]

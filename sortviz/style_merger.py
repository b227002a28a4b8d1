# style_merger.py

import copy

from .default_styles import DEFAULT_STYLES, DARK_THEME_OVERRIDES


def merge_styles(base, overrides):
    """
    Deep-merge `overrides` into a copy of `base`.
    Nested dicts are merged key by key, anything else replaces the base value.
    """
    merged = copy.deepcopy(base)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_styles(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def resolve_styles(dark_theme=False, overrides=None):
    styles = merge_styles(DEFAULT_STYLES, DARK_THEME_OVERRIDES) if dark_theme else copy.deepcopy(DEFAULT_STYLES)
    return merge_styles(styles, overrides)

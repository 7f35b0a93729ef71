"""
Construction defaults for hash sets, overridable from the environment.
"""

import os
from dataclasses import dataclass

DEFAULT_CAPACITY = 16
DEFAULT_LOAD_FACTOR = 0.75
DEFAULT_MAX_SIZE = 2**31 - 1  # matches a signed 32-bit element count


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


@dataclass(frozen=True)
class SetDefaults:
    """Defaults applied when a HashSet is built without explicit arguments."""

    capacity: int = DEFAULT_CAPACITY
    load_factor: float = DEFAULT_LOAD_FACTOR
    max_size: int = DEFAULT_MAX_SIZE


def load_defaults() -> SetDefaults:
    """
    Build SetDefaults from CHAINSET_* environment variables.

    Unparsable values fall back to the built-in defaults. Values that parse
    but are out of range are passed through so that HashSet construction
    reports them.
    """
    return SetDefaults(
        capacity=_int_env("CHAINSET_DEFAULT_CAPACITY", DEFAULT_CAPACITY),
        load_factor=_float_env("CHAINSET_LOAD_FACTOR", DEFAULT_LOAD_FACTOR),
        max_size=_int_env("CHAINSET_MAX_SIZE", DEFAULT_MAX_SIZE),
    )


__all__ = ["SetDefaults", "load_defaults",
           "DEFAULT_CAPACITY", "DEFAULT_LOAD_FACTOR", "DEFAULT_MAX_SIZE"]

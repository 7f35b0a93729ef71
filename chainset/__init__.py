"""
chainset - Separate-chaining hash sets with fail-fast iteration

This is a pure Python hash set container. Elements are hashed into chains
hanging off a bucket array that doubles in capacity when it passes its load
factor. Hashing and equality are supplied by an Equivalence, and iterators
fail as soon as the set they walk is structurally modified.
"""

__version__ = "1.0.0"

from .errors import (
    ChainSetError,
    InvalidArgumentError,
    IncompatibleTypeError,
    ArrayStoreError,
    NoSuchElementError,
    ConcurrentModificationError,
)
from .config import SetDefaults, load_defaults
from .log import setup_logging
from .equivalence import Equivalence, DigestEquivalence, NATURAL, IDENTITY
from .buckets import BucketArray
from .hashset import HashSet, HashSetIterator

__all__ = [
    # Containers
    "HashSet", "HashSetIterator", "BucketArray",
    # Hashing and equality
    "Equivalence", "DigestEquivalence", "NATURAL", "IDENTITY",
    # Errors
    "ChainSetError", "InvalidArgumentError", "IncompatibleTypeError",
    "ArrayStoreError", "NoSuchElementError", "ConcurrentModificationError",
    # Configuration
    "SetDefaults", "load_defaults", "setup_logging",
]
